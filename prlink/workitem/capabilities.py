"""
Tracker provider capabilities.

Capability detection for determining what operations a provider supports,
and which capabilities each action needs before it may touch the tracker.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prlink.workitem.protocol import TrackerProvider


class Capability(Enum):
    """
    Capabilities that a tracker provider may support.

    Used to refuse an action up front when the configured provider
    cannot carry it out (e.g., a read-only provider).
    """
    READ = "read"                      # get_task
    READ_COMMENTS = "read_comments"    # list_comments
    WRITE_COMMENT = "write_comment"    # create_comment
    DELETE_COMMENT = "delete_comment"  # delete_comment
    WRITE_COMPLETION = "write_completion"  # update_completed
    WRITE_SECTION = "write_section"    # list_sections, add_task_to_section


# Method names for each capability
CAPABILITY_METHODS = {
    Capability.READ: ["get_task"],
    Capability.READ_COMMENTS: ["list_comments"],
    Capability.WRITE_COMMENT: ["create_comment"],
    Capability.DELETE_COMMENT: ["delete_comment"],
    Capability.WRITE_COMPLETION: ["update_completed"],
    Capability.WRITE_SECTION: ["list_sections", "add_task_to_section"],
}

# Capabilities each action relies on
ACTION_CAPABILITIES = {
    "assert-link": set(),
    "add-comment": {Capability.READ_COMMENTS, Capability.WRITE_COMMENT},
    "remove-comment": {Capability.READ_COMMENTS, Capability.DELETE_COMMENT},
    "complete-task": {Capability.WRITE_COMPLETION},
    "move-section": {Capability.READ, Capability.WRITE_SECTION},
}


def detect_capabilities(provider: "TrackerProvider") -> set[Capability]:
    """
    Detect which capabilities a provider supports.

    Checks for the existence of required methods on the provider.

    Args:
        provider: Tracker provider instance

    Returns:
        Set of supported Capability values
    """
    capabilities = set()

    for capability, methods in CAPABILITY_METHODS.items():
        has_all = all(
            hasattr(provider, method) and callable(getattr(provider, method))
            for method in methods
        )
        if has_all:
            capabilities.add(capability)

    return capabilities


def missing_capabilities(
    capabilities: set[Capability],
    action: str,
) -> set[Capability]:
    """
    Return the capabilities ``action`` needs that are not in ``capabilities``.

    Args:
        capabilities: Capabilities the provider supports
        action: Action name

    Returns:
        Set of missing capabilities (empty when the action can run)
    """
    return ACTION_CAPABILITIES.get(action, set()) - capabilities
