#!/usr/bin/env python3
"""
GitHub REST API client.

Fetches release listings and clone traffic for a repository. The token is
passed in explicitly so the client never depends on process environment.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import requests

from .models import CloneRecord

GITHUB_API_BASE = "https://api.github.com"
USER_AGENT = "GitHub-Download-Tracker"
ACCEPT_HEADER = "application/vnd.github.v3+json"
RELEASES_PER_PAGE = 100

# Status codes GitHub returns when the caller lacks push access to traffic data
UNSUPPORTED_STATUS_CODES = (401, 403, 404)


class TransportError(Exception):
    """Raised when the GitHub API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class CloneFetchStatus(Enum):
    SUCCESS = "success"
    UNSUPPORTED = "unsupported"
    TRANSIENT = "transient"


@dataclass
class CloneFetchResult:
    """Outcome of a best-effort clone traffic request."""
    status: CloneFetchStatus
    clones: List[CloneRecord] = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is CloneFetchStatus.SUCCESS


class GitHubClient:
    """Thin wrapper around a requests session for the GitHub API."""

    def __init__(self, github_token: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None, api_base: str = GITHUB_API_BASE):
        """
        Initialize the client.

        Args:
            github_token: Optional GitHub Personal Access Token
            timeout: Optional per-request timeout in seconds (none by default)
            session: Session to use, mainly for tests
            api_base: Root URL of the REST API
        """
        self.github_token = github_token
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": ACCEPT_HEADER,
        })
        if github_token:
            self.session.headers["Authorization"] = f"Bearer {github_token}"
        self.logger = logging.getLogger(__name__)

    def request(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """GET a URL and return the parsed JSON body."""
        response = self.session.get(url, headers=headers, timeout=self.timeout)
        if not 200 <= response.status_code < 300:
            raise TransportError(response.status_code, response.text)
        return response.json()

    def fetch_all_releases(self, owner: str, repo: str) -> List[Dict]:
        """Fetch every release of a repository, one page at a time."""
        all_releases = []
        page = 1

        while True:
            url = (f"{self.api_base}/repos/{owner}/{repo}/releases"
                   f"?per_page={RELEASES_PER_PAGE}&page={page}")
            releases = self.request(url)

            if not releases:
                break

            all_releases.extend(releases)
            self.logger.info(f"Fetched {len(releases)} releases (page {page})")

            if len(releases) < RELEASES_PER_PAGE:
                break
            page += 1

        return all_releases

    def fetch_clones(self, owner: str, repo: str) -> CloneFetchResult:
        """Fetch clone traffic, classifying failures instead of raising."""
        url = f"{self.api_base}/repos/{owner}/{repo}/traffic/clones"
        self.logger.info(f"Fetching traffic clones for {owner}/{repo}...")

        try:
            data = self.request(url)
            clones = [CloneRecord.from_github_entry(entry) for entry in data.get("clones", [])]
        except TransportError as e:
            if e.status_code in UNSUPPORTED_STATUS_CODES:
                message = (f"Clone traffic unavailable for {owner}/{repo} "
                           f"(HTTP {e.status_code}, admin access is required)")
                self.logger.info(message)
                return CloneFetchResult(CloneFetchStatus.UNSUPPORTED, message=message)
            return self._transient(owner, repo, e)
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            return self._transient(owner, repo, e)

        return CloneFetchResult(CloneFetchStatus.SUCCESS, clones)

    def _transient(self, owner: str, repo: str, error: Exception) -> CloneFetchResult:
        message = f"Unable to fetch clone traffic for {owner}/{repo}: {error}"
        self.logger.info(message)
        return CloneFetchResult(CloneFetchStatus.TRANSIENT, message=message)
