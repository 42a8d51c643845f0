"""
Tracker client facade.

User-facing client that wraps an authorized provider and delegates
operations. The action handlers only ever talk to this client.
"""

from typing import TYPE_CHECKING

from prlink.workitem.types import (
    Comment,
    Section,
    TrackedItem,
)
from prlink.workitem.config import DEFAULT_COMMENT_PAGE_SIZE, load_settings
from prlink.workitem.capabilities import Capability, detect_capabilities

if TYPE_CHECKING:
    from prlink.workitem.protocol import TrackerProvider


class TrackerClient:
    """
    User-facing client for tracker operations.

    Wraps a TrackerProvider and delegates all operations. Construct it with
    ``from_config`` to get a client whose credentials were already verified.

    Example:
        client = TrackerClient.from_config(load_settings())
        for comment in client.list_comments("1200000000000001"):
            print(comment.gid, comment.text)
    """

    def __init__(self, provider: "TrackerProvider", comment_page_size: int | None = None):
        """
        Initialize client with a provider.

        Args:
            provider: Tracker provider instance (already authorized)
            comment_page_size: Default number of stories inspected per task
        """
        self._provider = provider
        self._capabilities = detect_capabilities(provider)
        if comment_page_size is None:
            comment_page_size = getattr(provider, "comment_page_size", None)
        if not isinstance(comment_page_size, int):
            comment_page_size = DEFAULT_COMMENT_PAGE_SIZE
        self.comment_page_size = comment_page_size

    @classmethod
    def from_config(cls, settings: dict | None = None) -> "TrackerClient":
        """
        Create an authorized client from settings.

        Instantiates the default provider and verifies its credentials.

        Args:
            settings: Optional pre-loaded settings dict

        Returns:
            Ready-to-use TrackerClient

        Raises:
            ValueError: If provider not supported
            AuthorizationError: If credentials are missing or rejected
        """
        if settings is None:
            settings = load_settings()
        provider_name = settings.get("default_provider", "asana")

        provider = cls._create_provider(provider_name, settings)
        provider.authorize()
        return cls(provider)

    @staticmethod
    def _create_provider(name: str, settings: dict) -> "TrackerProvider":
        """Create provider instance by name."""
        providers_config = settings.get("providers", {})

        if name == "asana":
            from prlink.workitem.providers.asana import AsanaProvider
            return AsanaProvider(providers_config.get("asana", {}))

        raise ValueError(f"Unknown provider: {name}")

    @property
    def provider_name(self) -> str:
        """Name of the underlying provider."""
        return self._provider.name

    @property
    def capabilities(self) -> set[Capability]:
        """Set of capabilities supported by the provider."""
        return self._capabilities

    def has_capability(self, capability: Capability) -> bool:
        """Check if provider supports a specific capability."""
        return capability in self._capabilities

    # --- Read Operations ---

    def get_task(self, task_id: str) -> TrackedItem:
        """
        Fetch a task with its project memberships.

        Args:
            task_id: Task identifier

        Returns:
            TrackedItem
        """
        return self._provider.get_task(task_id)

    def list_comments(self, task_id: str, limit: int | None = None) -> list[Comment]:
        """
        List the first comments of a task.

        Args:
            task_id: Task identifier
            limit: Number of stories to inspect (defaults to comment_page_size)

        Returns:
            Comments in provider order
        """
        return self._provider.list_comments(
            task_id, limit if limit is not None else self.comment_page_size
        )

    def list_sections(self, project_id: str) -> list[Section]:
        """List the sections of a project."""
        return self._provider.list_sections(project_id)

    # --- Write Operations ---

    def create_comment(self, task_id: str, text: str, is_pinned: bool = False) -> Comment:
        """
        Add a comment to a task.

        Args:
            task_id: Task identifier
            text: Comment body
            is_pinned: Pin the comment

        Returns:
            The created comment
        """
        return self._provider.create_comment(task_id, text, is_pinned)

    def delete_comment(self, comment_id: str) -> None:
        """Delete a comment by identity."""
        self._provider.delete_comment(comment_id)

    def update_completed(self, task_id: str, completed: bool) -> None:
        """Set a task's completion flag."""
        self._provider.update_completed(task_id, completed)

    def add_task_to_section(self, section_id: str, task_id: str) -> None:
        """Place a task into a section."""
        self._provider.add_task_to_section(section_id, task_id)
