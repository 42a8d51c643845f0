"""Marker lookup that makes comment posting and removal idempotent."""

from prlink.workitem.client import TrackerClient
from prlink.workitem.types import Comment


def find_marked_comment(
    client: TrackerClient,
    task_id: str,
    marker: str,
    limit: int | None = None,
) -> Comment | None:
    """
    Return the first comment on a task whose text contains ``marker``.

    Only the first ``limit`` stories are inspected (the client's
    comment_page_size by default); older comments beyond that are not seen.

    Args:
        client: Tracker client
        task_id: Task identifier
        marker: Sentinel substring embedded in a previously posted comment
        limit: Optional override of the number of stories to inspect

    Returns:
        Matching Comment, or None
    """
    for comment in client.list_comments(task_id, limit):
        if marker in comment.text:
            return comment
    return None
