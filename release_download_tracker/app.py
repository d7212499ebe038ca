#!/usr/bin/env python3
"""
GitHub Release Download Tracker

Tallies release asset downloads for a set of GitHub repositories, grouped by
file extension, and records one snapshot per day in a JSON history file per
repository.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from .aggregator import aggregate
from .client import GitHubClient
from .history import HistoryStore, upsert
from .models import History, Repository, Snapshot

DEFAULT_CONFIG_PATH = "config.json"


class ConfigurationError(ValueError):
    """Raised when the tracker configuration cannot be loaded."""


@dataclass
class TrackerConfig:
    """Settings for a sync run."""
    repos: List[str]
    data_dir: str
    github_token: Optional[str] = None
    config_path: Optional[str] = None


@dataclass
class SyncSummary:
    """Repositories that were updated or failed during a sync."""
    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{len(self.succeeded)} updated, {len(self.failed)} failed"


class DownloadStatsTracker:
    """Main class for tracking GitHub release download statistics."""

    def __init__(self, repos: List[str], client: GitHubClient, store: HistoryStore):
        """
        Initialize the stats tracker.

        Args:
            repos: Repositories to track, as 'owner/name' strings
            client: GitHub API client
            store: History store for the data directory
        """
        self.repos = repos
        self.client = client
        self.store = store
        self.logger = logging.getLogger(__name__)

    def process_repository(self, repo_string: str, today: Optional[str] = None) -> Snapshot:
        """Update the download history for a single repository."""
        repository = Repository.parse(repo_string)
        self.logger.info(f"Fetching releases for {repository}...")

        releases = self.client.fetch_all_releases(repository.owner, repository.name)
        self.logger.info(f"Total releases found: {len(releases)}")

        stats = aggregate(releases)
        snapshot = stats.to_snapshot(today or utc_today())

        history = self.store.load(repository)
        is_first_snapshot = history.is_empty
        clones = []
        if is_first_snapshot:
            result = self.client.fetch_clones(repository.owner, repository.name)
            if result.ok:
                clones = result.clones
                self.logger.info(f"Seeding {len(clones)} days of clone history for {repository}")
            else:
                self.logger.info(f"Skipping clone history for {repository} ({result.status.value})")

        snapshots = upsert(history.snapshots, snapshot, is_first_snapshot, clones)
        self.store.save(repository, History(snapshots, history.schema_version))

        self.logger.info(f"Updated {repository}: {stats.total} total downloads")
        return snapshot

    def update_all_repositories(self, today: Optional[str] = None) -> SyncSummary:
        """Update download history for all configured repositories."""
        self.logger.info("Starting update for all repositories")
        summary = SyncSummary()

        for repo in self.repos:
            try:
                print("=" * 60)
                print(f"   Updating data for {repo}")
                print("=" * 60)

                self.process_repository(repo, today)
                summary.succeeded.append(repo)
                print()

            except Exception as e:
                self.logger.error(f"Failed to update {repo}: {e}")
                summary.failed.append(repo)
                continue

        self.logger.info(f"All repositories processed ({summary})")
        return summary


def utc_today() -> str:
    """Current UTC calendar date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def load_configuration(config_path: Optional[str] = None, data_dir: Optional[str] = None) -> TrackerConfig:
    """Load the repository list from a JSON file and the token from the environment."""
    config_path = config_path or os.environ.get("TRACKER_CONFIG", DEFAULT_CONFIG_PATH)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Unable to read configuration {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration {config_path} is not valid JSON: {e}") from e

    repos = raw.get("repos") if isinstance(raw, dict) else None
    if not isinstance(repos, list) or not all(isinstance(repo, str) for repo in repos):
        raise ConfigurationError(f"Configuration {config_path} must contain a 'repos' list of strings")

    if data_dir is None:
        data_dir = os.environ.get("DATA_DIR")
    if data_dir is None:
        config_dir = os.path.dirname(os.path.abspath(config_path))
        data_dir = os.path.join(config_dir, "data")

    github_token = os.environ.get("GITHUB_TOKEN") or None

    return TrackerConfig(repos, data_dir, github_token, config_path)


def run_sync(config_path: Optional[str] = None, data_dir: Optional[str] = None) -> Tuple[bool, str]:
    """Runs the release download synchronization."""
    logger = logging.getLogger(__name__)
    try:
        config = load_configuration(config_path, data_dir)

        if not config.github_token:
            logger.warning("GITHUB_TOKEN not set. API rate limit: 60 requests/hour")
            logger.warning("Set GITHUB_TOKEN for 5000 requests/hour")

        client = GitHubClient(config.github_token)
        store = HistoryStore(config.data_dir)
        tracker = DownloadStatsTracker(config.repos, client, store)
        summary = tracker.update_all_repositories()

        logger.info("Sync successful")
        return True, f"Sync successful ({summary})"
    except Exception as e:
        logger.error(f"Application error: {e}")
        return False, str(e)

