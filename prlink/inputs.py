"""
Action inputs.

Builds the immutable ActionConfig once, at the process boundary, from the
GitHub Actions ``INPUT_*`` variables (optionally overridden on the command
line). Nothing below the entry point reads inputs on its own.
"""

import json
import os
from dataclasses import dataclass
from typing import Mapping

from prlink.workitem.types import MoveTarget

ACTIONS = (
    "assert-link",
    "add-comment",
    "remove-comment",
    "complete-task",
    "move-section",
)

INPUT_NAMES = (
    "action",
    "trigger-phrase",
    "link-required",
    "text",
    "is-pinned",
    "comment-id",
    "is-complete",
    "targets",
    "sha",
)


class ConfigurationError(Exception):
    """Raised when action inputs are missing or invalid."""
    pass


@dataclass(frozen=True)
class ActionConfig:
    """
    Validated inputs for one invocation.

    Attributes:
        action: Selected action name
        trigger_phrase: Literal prefix required before task links
        link_required: assert-link: fail when no link is found
        text: add-comment: comment body, also used as its marker
        is_pinned: add-comment: pin the created comment
        comment_id: remove-comment: marker of the comment to delete
        is_complete: complete-task: completion flag to set
        targets: move-section: sections to move tasks into
        sha: Commit whose pull request is used when the event has none
    """
    action: str
    trigger_phrase: str = ""
    link_required: bool = False
    text: str = ""
    is_pinned: bool = False
    comment_id: str = ""
    is_complete: bool = False
    targets: tuple[MoveTarget, ...] = ()
    sha: str | None = None


def input_env_name(name: str) -> str:
    """Environment variable carrying an action input (actions/toolkit convention)."""
    return "INPUT_" + name.replace(" ", "_").upper()


def read_action_inputs(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Collect the known action inputs from the environment.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Dict of input name -> trimmed value, for inputs that are set
    """
    if environ is None:
        environ = os.environ
    inputs = {}
    for name in INPUT_NAMES:
        value = environ.get(input_env_name(name))
        if value is not None:
            inputs[name] = value.strip()
    return inputs


def parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


def parse_targets(payload: str) -> tuple[MoveTarget, ...]:
    """
    Parse the serialized ``[{"project": ..., "section": ...}]`` list.

    Raises:
        ConfigurationError: If the payload is not a JSON list of targets
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"targets is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ConfigurationError("targets must be a JSON list of {project, section} objects")

    try:
        return tuple(MoveTarget.from_dict(item) for item in data)
    except ValueError as e:
        raise ConfigurationError(f"invalid targets: {e}") from e


def _required(inputs: Mapping[str, str], name: str) -> str:
    value = inputs.get(name) or ""
    if not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def load_action_config(inputs: Mapping[str, str]) -> ActionConfig:
    """
    Validate raw inputs into an ActionConfig.

    Args:
        inputs: Input name -> value (see INPUT_NAMES)

    Returns:
        ActionConfig

    Raises:
        ConfigurationError: On a missing required input, an unknown action
            or a malformed targets payload
    """
    action = _required(inputs, "action")
    if action not in ACTIONS:
        raise ConfigurationError(f"unexpected action {action}")

    fields = {
        "action": action,
        "trigger_phrase": inputs.get("trigger-phrase") or "",
        "sha": inputs.get("sha") or None,
    }

    if action == "assert-link":
        fields["link_required"] = parse_bool(_required(inputs, "link-required"))
    elif action == "add-comment":
        fields["text"] = _required(inputs, "text")
        fields["is_pinned"] = parse_bool(inputs.get("is-pinned"))
    elif action == "remove-comment":
        fields["comment_id"] = _required(inputs, "comment-id")
    elif action == "complete-task":
        fields["is_complete"] = parse_bool(inputs.get("is-complete"))
    elif action == "move-section":
        fields["targets"] = parse_targets(_required(inputs, "targets"))

    return ActionConfig(**fields)
