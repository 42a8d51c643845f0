"""
Minimal GitHub REST client and Actions run context.

Only the calls the actions need: pull requests associated with a commit
and commit status creation.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import requests

from prlink.logger import get_logger

log = get_logger("GITHUB")

DEFAULT_API_URL = "https://api.github.com"


class GitHubAPIError(Exception):
    """Raised when a GitHub API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class PullRequest:
    """The parts of a pull request the actions consume."""
    number: int
    body: str
    head_sha: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PullRequest":
        return cls(
            number=int(data.get("number") or 0),
            body=data.get("body") or "",
            head_sha=(data.get("head") or {}).get("sha") or "",
        )


@dataclass
class ActionContext:
    """
    Run context of a GitHub Actions job.

    Attributes:
        repository: "owner/repo"
        sha: Commit that triggered the run
        event: Decoded webhook payload of the triggering event
    """
    repository: str
    sha: str = ""
    event: dict[str, Any] = field(default_factory=dict)

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[-1]

    @property
    def pull_request(self) -> PullRequest | None:
        """Pull request carried by the event payload, if any."""
        data = self.event.get("pull_request")
        if not isinstance(data, dict):
            return None
        return PullRequest.from_dict(data)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionContext":
        """Create context from the GITHUB_* environment variables."""
        if environ is None:
            environ = os.environ

        event: dict[str, Any] = {}
        event_path = environ.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).exists():
            with open(event_path) as f:
                event = json.load(f)

        return cls(
            repository=environ.get("GITHUB_REPOSITORY", ""),
            sha=environ.get("GITHUB_SHA", ""),
            event=event,
        )


class GitHubClient:
    """GitHub REST API (v3) client."""

    def __init__(
        self,
        token: str,
        repository: str,
        api_url: str = DEFAULT_API_URL,
        timeout_s: int = 30,
        session: requests.Session | None = None,
    ):
        self.repository = repository
        self._api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self._timeout = timeout_s
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "prlink/0.1",
        })
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._api_url}/repos/{self.repository}{path}"
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise GitHubAPIError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            raise GitHubAPIError(
                f"{method} {path} failed with HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response.json() if response.content else None

    def list_pull_requests_for_commit(self, sha: str) -> list[PullRequest]:
        """
        List pull requests associated with a commit.

        Args:
            sha: Commit SHA

        Returns:
            Pull requests in GitHub's order (may be empty)
        """
        data = self._request("GET", f"/commits/{sha}/pulls")
        return [PullRequest.from_dict(pr) for pr in data or []]

    def create_status(
        self,
        sha: str,
        state: str,
        context: str,
        description: str = "",
    ) -> dict[str, Any]:
        """
        Create a commit status.

        Args:
            sha: Revision the status is attached to
            state: One of "error", "failure", "pending", "success"
            context: Status check name
            description: Short human readable text

        Returns:
            Created status payload
        """
        return self._request(
            "POST",
            f"/statuses/{sha}",
            json={"state": state, "context": context, "description": description},
        )


def resolve_pull_request(
    context: ActionContext,
    client: GitHubClient,
    sha: str | None = None,
) -> PullRequest | None:
    """
    Find the pull request the run is about.

    Uses the event's pull request when the run was triggered by one,
    otherwise the first pull request associated with ``sha`` (or the
    run's own commit).

    Args:
        context: Actions run context
        client: GitHub client
        sha: Optional commit override

    Returns:
        PullRequest, or None when no pull request is associated
    """
    pull_request = context.pull_request
    if pull_request is not None:
        return pull_request

    commit = sha or context.sha
    if not commit:
        return None

    log.info(f"Looking up pull requests associated with {commit}")
    pull_requests = client.list_pull_requests_for_commit(commit)
    return pull_requests[0] if pull_requests else None
