"""
Action dispatch.

Maps the selected action onto a single sequential pass over the extracted
task ids. Every handler is safe to re-run on the same pull request:
comments are found by marker before being added or removed, completion
and section moves are plain writes of the desired state.
"""

from dataclasses import dataclass
from typing import Any, Callable

from prlink.inputs import ActionConfig, ConfigurationError
from prlink.logger import get_logger
from prlink.scm.github import GitHubClient, PullRequest
from prlink.workitem.capabilities import missing_capabilities
from prlink.workitem.client import TrackerClient
from prlink.workitem.comments import find_marked_comment
from prlink.workitem.config import DEFAULT_STATUS_CONTEXT
from prlink.workitem.sections import move_to_sections
from prlink.workitem.types import Comment

log = get_logger("DISPATCHER")

STATUS_SUCCESS = "success"
STATUS_FAILURE = "failure"


@dataclass
class ActionServices:
    """
    External collaborators handed to every handler.

    Attributes:
        tracker: Authorized tracker client
        github: GitHub client (only assert-link needs it)
        pull_request: Pull request the references were read from
        status_context: Name of the status check published by assert-link
    """
    tracker: TrackerClient | None = None
    github: GitHubClient | None = None
    pull_request: PullRequest | None = None
    status_context: str = DEFAULT_STATUS_CONTEXT


def assert_link(config: ActionConfig, task_ids: list[str], services: ActionServices) -> str:
    """Publish whether the pull request links a task, as a commit status."""
    found = len(task_ids) > 0
    state = STATUS_SUCCESS if (not config.link_required or found) else STATUS_FAILURE
    if found:
        description = "asana link found"
    elif config.link_required:
        description = "asana link not found"
    else:
        description = "asana link not required"

    pull_request = services.pull_request
    if services.github is None or pull_request is None or not pull_request.head_sha:
        log.warning(f"No pull request revision to report {state} on")
        return state

    log.info(f"setting {state} for {pull_request.head_sha}")
    services.github.create_status(
        pull_request.head_sha,
        state=state,
        context=services.status_context,
        description=description,
    )
    return state


def add_comment(config: ActionConfig, task_ids: list[str], services: ActionServices) -> list[Comment]:
    """Post ``config.text`` on every task that does not carry it yet."""
    created = []
    for task_id in task_ids:
        try:
            existing = find_marked_comment(services.tracker, task_id, config.text)
            if existing:
                log.info(f"found existing comment {existing.gid}", task_id=task_id)
                continue
            comment = services.tracker.create_comment(task_id, config.text, config.is_pinned)
        except Exception as e:
            log.error(f"Failed to add comment: {e}", task_id=task_id)
            continue
        log.info(f"added comment {comment.gid}", task_id=task_id)
        created.append(comment)
    return created


def remove_comment(config: ActionConfig, task_ids: list[str], services: ActionServices) -> list[str]:
    """Delete the comment carrying ``config.comment_id`` from every task."""
    removed = []
    for task_id in task_ids:
        try:
            comment = find_marked_comment(services.tracker, task_id, config.comment_id)
            if comment is None:
                continue
            log.info(f"removing comment {comment.gid}", task_id=task_id)
            services.tracker.delete_comment(comment.gid)
        except Exception as e:
            log.error(f"Failed to remove comment: {e}", task_id=task_id)
            continue
        removed.append(comment.gid)
    return removed


def complete_task(config: ActionConfig, task_ids: list[str], services: ActionServices) -> list[str]:
    """Set the completion flag of every task; failures do not drop the id."""
    processed = []
    for task_id in task_ids:
        state = "complete" if config.is_complete else "incomplete"
        log.info(f"marking task {state}", task_id=task_id)
        try:
            services.tracker.update_completed(task_id, config.is_complete)
        except Exception as e:
            log.error(f"Failed to mark task {state}: {e}", task_id=task_id)
        processed.append(task_id)
    return processed


def move_section(config: ActionConfig, task_ids: list[str], services: ActionServices) -> list[str]:
    """Move every task into the configured sections."""
    processed = []
    for task_id in task_ids:
        try:
            item = services.tracker.get_task(task_id)
        except Exception as e:
            log.error(f"Failed to fetch task: {e}", task_id=task_id)
        else:
            report = move_to_sections(services.tracker, item, config.targets)
            if not report.ok:
                log.warning(
                    f"{len(report.errors)} of {len(config.targets)} targets failed",
                    task_id=task_id,
                )
        processed.append(task_id)
    return processed


ACTION_HANDLERS: dict[str, Callable[[ActionConfig, list[str], ActionServices], Any]] = {
    "assert-link": assert_link,
    "add-comment": add_comment,
    "remove-comment": remove_comment,
    "complete-task": complete_task,
    "move-section": move_section,
}


def dispatch(config: ActionConfig, task_ids: list[str], services: ActionServices) -> Any:
    """
    Run the configured action once over ``task_ids``.

    Args:
        config: Validated action configuration
        task_ids: Extracted task ids, in order of appearance
        services: External collaborators

    Returns:
        The handler's result (status state, created comments, removed
        comment ids or processed task ids)

    Raises:
        ConfigurationError: If the action is unknown or the tracker cannot
            perform it; raised before any external call
    """
    handler = ACTION_HANDLERS.get(config.action)
    if handler is None:
        raise ConfigurationError(f"unexpected action {config.action}")

    if services.tracker is not None:
        missing = missing_capabilities(services.tracker.capabilities, config.action)
    else:
        missing = missing_capabilities(set(), config.action)
    if missing:
        names = ", ".join(sorted(c.value for c in missing))
        raise ConfigurationError(f"{config.action} needs tracker capabilities: {names}")

    log.info(f"calling {config.action}", tasks=len(task_ids))
    return handler(config, task_ids, services)
