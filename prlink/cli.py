"""
prlink entry point.

Links a pull request to the Asana tasks referenced in its description and
runs one action against them.

Usage:
    python action.py                         # inputs from INPUT_* variables
    python action.py --action assert-link --link-required true
    python action.py --action complete-task --is-complete true --body "Closes https://app.asana.com/0/1/2"
"""

import argparse
import dataclasses
from typing import Any

import yaml
from dotenv import load_dotenv

from prlink.dispatcher import ActionServices, dispatch
from prlink.inputs import (
    INPUT_NAMES,
    ConfigurationError,
    load_action_config,
    read_action_inputs,
)
from prlink.logger import enable_annotations, get_logger
from prlink.references import DEFAULT_LINK_HOST, extract_references
from prlink.scm.github import (
    ActionContext,
    GitHubAPIError,
    GitHubClient,
    PullRequest,
    resolve_pull_request,
)
from prlink.scm.outputs import set_output
from prlink.workitem.client import TrackerClient
from prlink.workitem.config import DEFAULT_STATUS_CONTEXT, load_settings
from prlink.workitem.protocol import AuthorizationError

log = get_logger("ACTION")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Link pull requests to Asana tasks and act on them"
    )
    for name in INPUT_NAMES:
        parser.add_argument(f"--{name}", dest=name.replace("-", "_"), default=None)
    parser.add_argument("--config", default=None, help="Settings YAML (default: $PRLINK_CONFIG)")
    parser.add_argument(
        "--body",
        default=None,
        help="Scan this text instead of looking up the pull request",
    )
    return parser


def _collect_inputs(args: argparse.Namespace) -> dict[str, str]:
    """INPUT_* values, overridden by any option given on the command line."""
    inputs = read_action_inputs()
    for name in INPUT_NAMES:
        value = getattr(args, name.replace("-", "_"))
        if value is not None:
            inputs[name] = value
    return inputs


def serialize_result(result: Any) -> Any:
    """Make a handler result JSON-friendly."""
    if isinstance(result, list):
        return [serialize_result(r) for r in result]
    if dataclasses.is_dataclass(result) and not isinstance(result, type):
        return dataclasses.asdict(result)
    return result


def run(args: argparse.Namespace) -> Any:
    """
    Execute one invocation.

    Raises:
        ConfigurationError: Invalid inputs or settings
        AuthorizationError: Tracker credentials missing or rejected
        GitHubAPIError: Pull request lookup or status publication failed
    """
    config = load_action_config(_collect_inputs(args))

    try:
        settings = load_settings(args.config)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"invalid settings: {e}") from e

    try:
        tracker = TrackerClient.from_config(settings)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    github_settings = settings.get("github", {})
    context = ActionContext.from_env()
    github = GitHubClient(
        token=github_settings.get("token", ""),
        repository=context.repository,
        api_url=github_settings.get("api_url", ""),
    )

    if args.body is not None:
        pull_request = PullRequest(number=0, body=args.body, head_sha=config.sha or "")
    else:
        pull_request = resolve_pull_request(context, github, config.sha)
    if pull_request is None:
        log.warning("No pull request associated with this run; nothing to do")
        return []

    provider_settings = settings.get("providers", {}).get(settings.get("default_provider", "asana"), {})
    host = provider_settings.get("link_host") or DEFAULT_LINK_HOST

    log.info(
        "looking in body",
        pull_request=pull_request.number,
        trigger_phrase=config.trigger_phrase,
    )
    task_ids = extract_references(pull_request.body, config.trigger_phrase, host)
    log.info(f"found {len(task_ids)} taskIds: {','.join(task_ids)}")

    services = ActionServices(
        tracker=tracker,
        github=github,
        pull_request=pull_request,
        status_context=github_settings.get("status_context") or DEFAULT_STATUS_CONTEXT,
    )
    return dispatch(config, task_ids, services)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    enable_annotations()
    args = _parser().parse_args(argv)

    try:
        result = run(args)
    except (ConfigurationError, AuthorizationError, GitHubAPIError) as e:
        log.error(f"{type(e).__name__}: {e}")
        return 1

    payload = serialize_result(result)
    log.info("action finished", result=payload)
    set_output("result", payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
