"""
WorkItem types and data structures.

Provider-agnostic views of the tracker entities consumed by the actions.
All of them are snapshots of a single query; nothing here is cached or
written back implicitly.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Project:
    """
    A tracker project the task belongs to.

    Attributes:
        gid: Provider's native project id
        name: Display name (used to match MoveTarget.project)
    """
    gid: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        return cls(gid=str(data.get("gid", "")), name=data.get("name") or "")


@dataclass(frozen=True)
class Section:
    """
    A section (board column / list heading) inside a project.

    Attributes:
        gid: Provider's native section id
        name: Display name (used to match MoveTarget.section)
        project: Parent project
    """
    gid: str
    name: str
    project: Project | None = None


@dataclass(frozen=True)
class Comment:
    """
    A comment (story) posted on a task.

    Attributes:
        gid: Identity used for deletion
        text: Plain-text body
        is_pinned: Whether the comment is pinned to the top of the task
    """
    gid: str
    text: str = ""
    is_pinned: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        return cls(
            gid=str(data.get("gid", "")),
            text=data.get("text") or "",
            is_pinned=bool(data.get("is_pinned", False)),
        )


@dataclass
class TrackedItem:
    """
    A task resolved from a reference.

    Attributes:
        gid: Provider's native task id
        name: Task title
        completed: Completion flag
        projects: Projects the task is a member of
    """
    gid: str
    name: str = ""
    completed: bool = False
    projects: list[Project] = field(default_factory=list)

    def find_project(self, name: str) -> Project | None:
        """Return the first membership whose project name equals ``name``."""
        for project in self.projects:
            if project.name == name:
                return project
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrackedItem":
        return cls(
            gid=str(data.get("gid", "")),
            name=data.get("name") or "",
            completed=bool(data.get("completed", False)),
            projects=[Project.from_dict(p) for p in data.get("projects") or []],
        )


@dataclass(frozen=True)
class MoveTarget:
    """Request to place a task into ``section`` of ``project`` (if a member)."""
    project: str
    section: str

    @classmethod
    def from_dict(cls, data: Any) -> "MoveTarget":
        """
        Build a target from a ``{"project": ..., "section": ...}`` mapping.

        Raises:
            ValueError: If the mapping is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"move target must be an object, got {type(data).__name__}")
        project = data.get("project")
        section = data.get("section")
        if not isinstance(project, str) or not project.strip():
            raise ValueError("move target is missing a 'project' name")
        if not isinstance(section, str) or not section.strip():
            raise ValueError("move target is missing a 'section' name")
        return cls(project=project, section=section)

    def __str__(self) -> str:
        return f"{self.project}/{self.section}"


@dataclass
class MoveReport:
    """
    Diagnostics collected while moving one task.

    Attributes:
        task_id: Task the report belongs to
        moved: Targets the task was added to
        skipped: Targets whose project the task is not a member of
        errors: (target, reason) pairs for targets that could not be applied
    """
    task_id: str
    moved: list[MoveTarget] = field(default_factory=list)
    skipped: list[MoveTarget] = field(default_factory=list)
    errors: list[tuple[MoveTarget, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
