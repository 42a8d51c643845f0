"""Source control (GitHub) side of the pull request automation."""

from prlink.scm.github import (
    ActionContext,
    GitHubAPIError,
    GitHubClient,
    PullRequest,
    resolve_pull_request,
)
from prlink.scm.outputs import set_output

__all__ = [
    "ActionContext",
    "GitHubAPIError",
    "GitHubClient",
    "PullRequest",
    "resolve_pull_request",
    "set_output",
]
