"""
GitHub Release Download Tracker

Tallies GitHub release asset downloads per file format and keeps a daily
snapshot history for each tracked repository in a JSON file.
"""

__version__ = "1.0.0"

from .aggregator import ReleaseStats, aggregate, asset_extension
from .app import DownloadStatsTracker, ConfigurationError, load_configuration, run_sync
from .client import CloneFetchResult, CloneFetchStatus, GitHubClient, TransportError
from .history import CorruptHistoryError, HistoryStore, upsert
from .models import CloneRecord, FormatCount, History, Repository, Snapshot

__all__ = [
    "DownloadStatsTracker",
    "ConfigurationError",
    "load_configuration",
    "run_sync",
    "GitHubClient",
    "TransportError",
    "CloneFetchResult",
    "CloneFetchStatus",
    "HistoryStore",
    "CorruptHistoryError",
    "upsert",
    "ReleaseStats",
    "aggregate",
    "asset_extension",
    "Repository",
    "CloneRecord",
    "FormatCount",
    "Snapshot",
    "History",
]
