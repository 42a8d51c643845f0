"""
Asana Tracker Provider.

Implements TrackerProvider over the Asana REST API (1.0) with requests.
"""

from typing import Any

import requests

from prlink.workitem.config import (
    DEFAULT_ASANA_URL,
    DEFAULT_COMMENT_PAGE_SIZE,
    get_provider_config,
)
from prlink.workitem.protocol import AuthorizationError, TrackerAPIError
from prlink.workitem.types import (
    Comment,
    Section,
    TrackedItem,
    Project,
)


# Asana caps page size at 100 for collection endpoints
MAX_PAGE_LIMIT = 100


class AsanaProvider:
    """
    TrackerProvider implementation for Asana.

    Translates between Asana's task/story/section resources and the
    tracker types. Responses are unwrapped from Asana's ``{"data": ...}``
    envelope.
    """

    def __init__(self, config: dict | None = None, session: requests.Session | None = None):
        """
        Initialize provider with configuration.

        Args:
            config: Provider config dict. If None, loads from settings.
                    Expected keys: base_url, token, timeout_s, default_headers
            session: Optional requests session (tests inject a mock)
        """
        if config is None:
            config = get_provider_config("asana")

        self._config = config
        self._base_url = (config.get("base_url") or DEFAULT_ASANA_URL).rstrip("/")
        self._token = config.get("token") or ""
        self._timeout = config.get("timeout_s", 30)
        self.comment_page_size = int(config.get("comment_page_size", DEFAULT_COMMENT_PAGE_SIZE))

        self._session = session or requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
            "User-Agent": "prlink/0.1",
        })
        self._session.headers.update(config.get("default_headers") or {})

    @property
    def name(self) -> str:
        """Provider identifier."""
        return "asana"

    # --- HTTP ---

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Issue one API call and return the decoded body.

        Raises:
            AuthorizationError: On HTTP 401
            TrackerAPIError: On any other HTTP or transport failure
        """
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json={"data": data} if data is not None else None,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise TrackerAPIError(f"{method} {path} failed: {e}") from e

        if response.status_code == 401:
            raise AuthorizationError(
                "Asana rejected the access token (HTTP 401). Check ASANA_TOKEN."
            )
        if response.status_code >= 400:
            raise TrackerAPIError(
                f"{method} {path} failed with HTTP {response.status_code}: "
                f"{self._error_message(response)}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        return response.json()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            errors = response.json().get("errors") or []
            return "; ".join(e.get("message", "") for e in errors) or response.text
        except ValueError:
            return response.text

    # --- Authorization ---

    def authorize(self) -> None:
        """
        Verify the token by fetching the current user.

        Raises:
            AuthorizationError: If no token is configured or Asana rejects it
        """
        if not self._token:
            raise AuthorizationError("ASANA_TOKEN not set")
        try:
            self._request("GET", "/users/me", params={"opt_fields": "gid"})
        except TrackerAPIError as e:
            if e.status_code == 403:
                raise AuthorizationError(f"Asana token lacks access: {e}") from e
            raise

    # --- Tasks ---

    def get_task(self, task_id: str) -> TrackedItem:
        body = self._request(
            "GET",
            f"/tasks/{task_id}",
            params={"opt_fields": "name,completed,projects.name"},
        )
        return TrackedItem.from_dict(body.get("data") or {})

    def update_completed(self, task_id: str, completed: bool) -> None:
        self._request("PUT", f"/tasks/{task_id}", data={"completed": completed})

    # --- Comments ---

    def list_comments(self, task_id: str, limit: int | None = None) -> list[Comment]:
        """
        List comments among the first ``limit`` stories of a task.

        Follows ``next_page.offset`` until ``limit`` stories were read or
        the collection is exhausted. System stories are dropped.

        Args:
            task_id: Task identifier
            limit: Maximum number of stories to inspect

        Returns:
            Comments in the order Asana returned them
        """
        if limit is None:
            limit = self.comment_page_size

        stories: list[dict[str, Any]] = []
        offset = None
        while len(stories) < limit:
            params: dict[str, Any] = {
                "limit": min(MAX_PAGE_LIMIT, limit - len(stories)),
                "opt_fields": "text,is_pinned,type,resource_subtype",
            }
            if offset:
                params["offset"] = offset
            body = self._request("GET", f"/tasks/{task_id}/stories", params=params)
            stories.extend(body.get("data") or [])
            offset = (body.get("next_page") or {}).get("offset")
            if not offset:
                break

        return [
            Comment.from_dict(story)
            for story in stories[:limit]
            if story.get("type", "comment") == "comment"
        ]

    def create_comment(self, task_id: str, text: str, is_pinned: bool = False) -> Comment:
        body = self._request(
            "POST",
            f"/tasks/{task_id}/stories",
            data={"text": text, "is_pinned": is_pinned},
        )
        return Comment.from_dict(body.get("data") or {})

    def delete_comment(self, comment_id: str) -> None:
        self._request("DELETE", f"/stories/{comment_id}")

    # --- Sections ---

    def list_sections(self, project_id: str) -> list[Section]:
        body = self._request(
            "GET",
            f"/projects/{project_id}/sections",
            params={"opt_fields": "name,project.name"},
        )
        sections = []
        for data in body.get("data") or []:
            project = data.get("project")
            sections.append(Section(
                gid=str(data.get("gid", "")),
                name=data.get("name") or "",
                project=Project.from_dict(project) if project else Project(gid=project_id, name=""),
            ))
        return sections

    def add_task_to_section(self, section_id: str, task_id: str) -> None:
        self._request("POST", f"/sections/{section_id}/addTask", data={"task": task_id})
