#!/usr/bin/env python3
"""
Per-repository snapshot history persisted as JSON files.
"""

import json
import logging
import os
from typing import List, Optional, Sequence

from .models import CloneRecord, History, Repository, Snapshot


class CorruptHistoryError(Exception):
    """Raised when a history file cannot be parsed or validated."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Corrupt history file {path}: {reason}")
        self.path = path
        self.reason = reason


def upsert(existing: Sequence[Snapshot], snapshot: Snapshot, is_first_snapshot: bool,
           clones_for_seeding: Optional[Sequence[CloneRecord]] = None) -> List[Snapshot]:
    """
    Insert or replace the snapshot for its date and return the sorted history.

    Args:
        existing: Snapshots already recorded for the repository
        snapshot: Today's snapshot
        is_first_snapshot: True when nothing was recorded before this run
        clones_for_seeding: Clone traffic used to backfill a first run

    Returns:
        A new list sorted ascending by date.
    """
    history = list(existing)
    # A seeded clone entry can share today's date and sorts first; replace the last match
    index = next((i for i in reversed(range(len(history))) if history[i].date == snapshot.date), None)

    if index is not None:
        history[index] = snapshot
    else:
        history.append(snapshot)
        if is_first_snapshot and clones_for_seeding:
            seeded = [Snapshot.from_clone(record) for record in clones_for_seeding]
            history = seeded + history

    history.sort(key=lambda entry: entry.date)
    return history


class HistoryStore:
    """Handles reading and writing history files under a data directory."""

    def __init__(self, data_dir: str):
        """
        Initialize the history store.

        Args:
            data_dir: Directory holding one <owner>_<name>.json file per repository.
        """
        self.data_dir = data_dir
        self.logger = logging.getLogger(__name__)

    def path_for(self, repository: Repository) -> str:
        return os.path.join(self.data_dir, f"{repository.storage_key}.json")

    def load(self, repository: Repository) -> History:
        """Load the history for a repository, or an empty one if none exists."""
        path = self.path_for(repository)
        if not os.path.exists(path):
            self.logger.info(f"No existing history for {repository}")
            return History()

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptHistoryError(path, f"invalid JSON ({e})") from e

        if not isinstance(raw, list):
            raise CorruptHistoryError(path, f"expected a JSON array, got {type(raw).__name__}")

        try:
            snapshots = [Snapshot.from_dict(entry) for entry in raw]
        except ValueError as e:
            raise CorruptHistoryError(path, str(e)) from e

        self.logger.info(f"Found {len(snapshots)} existing snapshots for {repository}")
        return History(snapshots)

    def save(self, repository: Repository, history: History) -> str:
        """Overwrite the history file for a repository and return its path."""
        os.makedirs(self.data_dir, exist_ok=True)
        path = self.path_for(repository)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(history.to_list(), f, indent=2)
        self.logger.debug(f"Wrote {len(history)} snapshots to {path}")
        return path
