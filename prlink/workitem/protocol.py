"""
Tracker Provider Protocol.

Defines the interface a work-tracking backend must implement.
Uses Python's Protocol for structural typing - providers don't need
to explicitly inherit from this class.
"""

from typing import Protocol, runtime_checkable

from prlink.workitem.types import (
    Comment,
    Section,
    TrackedItem,
)


class AuthorizationError(Exception):
    """Raised when tracker credentials are missing or rejected."""
    pass


class TrackerAPIError(Exception):
    """Raised when a tracker API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class TrackerProvider(Protocol):
    """
    Provider-agnostic interface for work tracking backends.

    Implementations include:
    - AsanaProvider (reference implementation)
    - Mock providers (for testing)

    Every method is a single blocking round trip. Failures raise; callers
    decide whether to abort or log and continue.
    """

    @property
    def name(self) -> str:
        """
        Provider identifier.

        Returns:
            Provider name (e.g., "asana")
        """
        ...

    def authorize(self) -> None:
        """
        Verify the configured credentials.

        Raises:
            AuthorizationError: If credentials are missing or rejected
        """
        ...

    # --- Tasks ---

    def get_task(self, task_id: str) -> TrackedItem:
        """
        Resolve a task, including its project memberships.

        Args:
            task_id: Task identifier extracted from a reference

        Returns:
            The task
        """
        ...

    def update_completed(self, task_id: str, completed: bool) -> None:
        """
        Set the task's completion flag.

        Args:
            task_id: Task identifier
            completed: New completion state
        """
        ...

    # --- Comments ---

    def list_comments(self, task_id: str, limit: int) -> list[Comment]:
        """
        List the first ``limit`` comments of a task, in provider order.

        Args:
            task_id: Task identifier
            limit: Maximum number of stories to inspect

        Returns:
            Comments (may be empty)
        """
        ...

    def create_comment(self, task_id: str, text: str, is_pinned: bool = False) -> Comment:
        """
        Post a comment on a task.

        Args:
            task_id: Task identifier
            text: Comment body
            is_pinned: Pin the comment to the top of the task

        Returns:
            The created comment
        """
        ...

    def delete_comment(self, comment_id: str) -> None:
        """
        Delete a comment by identity.

        Args:
            comment_id: Comment identifier
        """
        ...

    # --- Sections ---

    def list_sections(self, project_id: str) -> list[Section]:
        """
        List the sections of a project.

        Args:
            project_id: Project identifier

        Returns:
            Sections in board order (may be empty)
        """
        ...

    def add_task_to_section(self, section_id: str, task_id: str) -> None:
        """
        Place a task into a section. Adding to the current section is a no-op.

        Args:
            section_id: Section identifier
            task_id: Task identifier
        """
        ...
