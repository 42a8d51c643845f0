"""
Asana task reference extraction.

Scans free text (a pull request description) for Asana task URLs of the
shape ``https://<host>/<workspace>/<project>/<task>`` that directly follow
an optional trigger phrase.
"""

import re

from prlink.logger import get_logger

log = get_logger("REFERENCES")

DEFAULT_LINK_HOST = "app.asana.com"


def build_reference_pattern(
    trigger_phrase: str = "",
    host: str = DEFAULT_LINK_HOST,
) -> re.Pattern:
    """
    Compile the reference pattern for a trigger phrase.

    The task segment is optional in the pattern so that a project-only URL
    is still recognized (and reported) instead of silently ignored.

    Args:
        trigger_phrase: Literal text that must precede the URL (may be empty)
        host: Host name of the tracker's web UI

    Returns:
        Compiled pattern with ``project`` and ``task`` named groups
    """
    return re.compile(
        re.escape(trigger_phrase)
        + r"\s*"
        + r"https://" + re.escape(host)
        + r"/(\d+)/(?P<project>\d+)(?:/(?P<task>\d+))?"
    )


def extract_references(
    text: str | None,
    trigger_phrase: str = "",
    host: str = DEFAULT_LINK_HOST,
) -> list[str]:
    """
    Extract referenced task ids in left-to-right order.

    Duplicates are kept. A URL without a task segment is logged as an
    error and skipped; scanning continues with the rest of the text.

    Args:
        text: Text to scan (None is treated as empty)
        trigger_phrase: Literal prefix required before each URL
        host: Host name of the tracker's web UI

    Returns:
        List of task ids (may be empty)
    """
    if not text:
        return []

    pattern = build_reference_pattern(trigger_phrase, host)
    task_ids = []
    for match in pattern.finditer(text):
        task_id = match.group("task")
        if not task_id:
            log.error(
                f"Invalid Asana task URL after the trigger phrase {trigger_phrase!r}",
                project_id=match.group("project"),
                offset=match.start(),
            )
            continue
        task_ids.append(task_id)

    return task_ids
