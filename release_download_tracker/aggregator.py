#!/usr/bin/env python3
"""
Download count aggregation over release assets.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .models import FormatCount, Snapshot

NO_EXTENSION = "no-ext"


@dataclass
class ReleaseStats:
    """Total downloads and per-format breakdown for one repository."""
    total: int = 0
    formats: List[FormatCount] = field(default_factory=list)

    def to_snapshot(self, date: str) -> Snapshot:
        return Snapshot(date, self.total, list(self.formats))


def asset_extension(name: str) -> str:
    """Return the lower-cased extension of an asset name, e.g. '.zip'."""
    if "." not in name:
        return NO_EXTENSION
    return "." + name.rsplit(".", 1)[1].lower()


def aggregate(releases: Iterable[Dict]) -> ReleaseStats:
    """Sum asset download counts, overall and per extension."""
    total = 0
    counts: Dict[str, int] = {}

    for release in releases:
        for asset in release.get("assets", []):
            downloads = asset["download_count"]
            total += downloads
            ext = asset_extension(asset["name"])
            counts[ext] = counts.get(ext, 0) + downloads

    # sorted() is stable, so equal counts keep first-encounter order
    formats = sorted(
        (FormatCount(ext, count) for ext, count in counts.items()),
        key=lambda fmt: fmt.count,
        reverse=True,
    )
    return ReleaseStats(total, formats)
