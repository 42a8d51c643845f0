"""
Tracker Abstraction Package

Provider-agnostic access to the work tracker the pull requests link to.
Supports Asana out of the box.
"""

from prlink.workitem.types import (
    Comment,
    MoveReport,
    MoveTarget,
    Project,
    Section,
    TrackedItem,
)
from prlink.workitem.protocol import AuthorizationError, TrackerAPIError, TrackerProvider
from prlink.workitem.client import TrackerClient
from prlink.workitem.config import load_settings, get_provider_config
from prlink.workitem.comments import find_marked_comment
from prlink.workitem.sections import move_to_sections

__all__ = [
    "AuthorizationError",
    "Comment",
    "MoveReport",
    "MoveTarget",
    "Project",
    "Section",
    "TrackedItem",
    "TrackerAPIError",
    "TrackerClient",
    "TrackerProvider",
    "find_marked_comment",
    "get_provider_config",
    "load_settings",
    "move_to_sections",
]
