#!/usr/bin/env python3
"""
Data models for release download statistics.

Contains the core data classes used throughout the application.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List

HISTORY_SCHEMA_VERSION = 1

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class Repository:
    """An (owner, name) pair identifying a GitHub repository."""
    owner: str
    name: str

    @classmethod
    def parse(cls, repo_string: str) -> 'Repository':
        """Create a Repository from an ``owner/name`` string."""
        parts = repo_string.strip().split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Invalid repository '{repo_string}', expected 'owner/name'")
        return cls(parts[0], parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def storage_key(self) -> str:
        return f"{self.owner}_{self.name}"

    def __str__(self) -> str:
        return self.full_name


@dataclass
class CloneRecord:
    """Represents a single clone record with count, timestamp, and unique clones."""
    count: int
    timestamp: str
    uniques: int

    @property
    def date(self) -> str:
        """Calendar-date portion of the timestamp."""
        return self.timestamp.split("T")[0]

    @classmethod
    def from_github_entry(cls, entry: Dict) -> 'CloneRecord':
        """Create a CloneRecord from GitHub API response entry."""
        count = entry.get("count")
        timestamp = entry.get("timestamp")
        if not _is_count(count):
            raise ValueError(f"Clone entry has invalid count: {count!r}")
        if not isinstance(timestamp, str) or not _DATE_PATTERN.match(timestamp.split("T")[0]):
            raise ValueError(f"Clone entry has invalid timestamp: {timestamp!r}")
        return cls(count, timestamp, entry.get("uniques", 0))


@dataclass
class FormatCount:
    """Download count for a single file extension."""
    extension: str
    count: int

    def to_dict(self) -> Dict:
        return {"extension": self.extension, "count": self.count}

    @classmethod
    def from_dict(cls, data: Dict) -> 'FormatCount':
        if not isinstance(data, dict):
            raise ValueError(f"Format entry must be an object, got {type(data).__name__}")
        # Files written by earlier versions of the tracker used "ext"
        extension = data.get("extension", data.get("ext"))
        count = data.get("count")
        if not isinstance(extension, str):
            raise ValueError(f"Format entry has invalid extension: {extension!r}")
        if not _is_count(count):
            raise ValueError(f"Format entry '{extension}' has invalid count: {count!r}")
        return cls(extension, count)


@dataclass
class Snapshot:
    """One day's aggregated download totals and format breakdown."""
    date: str
    total: int
    formats: List[FormatCount] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "date": self.date,
            "total": self.total,
            "formats": [fmt.to_dict() for fmt in self.formats],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Snapshot':
        """Create a Snapshot from a persisted history entry, validating it."""
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot must be an object, got {type(data).__name__}")
        date = data.get("date")
        if not isinstance(date, str) or not _DATE_PATTERN.match(date):
            raise ValueError(f"Snapshot has invalid date: {date!r}")
        total = data.get("total")
        if not _is_count(total):
            raise ValueError(f"Snapshot {date} has invalid total: {total!r}")
        formats = data.get("formats", [])
        if not isinstance(formats, list):
            raise ValueError(f"Snapshot {date} has invalid formats: {formats!r}")
        return cls(date, total, [FormatCount.from_dict(fmt) for fmt in formats])

    @classmethod
    def from_clone(cls, record: CloneRecord) -> 'Snapshot':
        """Synthesize a historical snapshot from a clone traffic record."""
        return cls(record.date, record.count, [FormatCount("clones", record.count)])


@dataclass
class History:
    """All snapshots recorded for one repository, ordered by date."""
    snapshots: List[Snapshot] = field(default_factory=list)
    schema_version: int = HISTORY_SCHEMA_VERSION

    def __len__(self) -> int:
        return len(self.snapshots)

    @property
    def is_empty(self) -> bool:
        return not self.snapshots

    def to_list(self) -> List[Dict]:
        return [snapshot.to_dict() for snapshot in self.snapshots]


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
