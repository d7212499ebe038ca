"""
Shared pytest fixtures for the release download tracker test suite.

All tests are fully offline: the GitHub API is replaced with a fake session
that serves canned JSON responses keyed by URL.
"""

import pytest

from release_download_tracker.client import GitHubClient
from release_download_tracker.history import HistoryStore

from .fakes import FakeSession


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client(fake_session):
    return GitHubClient(session=fake_session)


@pytest.fixture
def store(tmp_path):
    return HistoryStore(str(tmp_path / "data"))
