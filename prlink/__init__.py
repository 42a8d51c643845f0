"""
prlink - pull request to Asana task linking.

Finds Asana task links in a pull request description and runs one
idempotent action against the linked tasks.
"""

from prlink.references import extract_references
from prlink.inputs import ActionConfig, ConfigurationError, load_action_config
from prlink.dispatcher import ActionServices, dispatch

__all__ = [
    "ActionConfig",
    "ActionServices",
    "ConfigurationError",
    "dispatch",
    "extract_references",
    "load_action_config",
]
