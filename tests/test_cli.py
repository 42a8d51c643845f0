"""End-to-end tests for the action entry point with faked collaborators."""

import json
from unittest.mock import Mock, patch

import pytest

from prlink import cli
from prlink.inputs import INPUT_NAMES, input_env_name
from prlink.scm.github import PullRequest
from prlink.workitem.protocol import AuthorizationError


@pytest.fixture
def action_env(tmp_path, monkeypatch):
    """Clean Actions-like environment writing outputs to a temp file."""
    for name in INPUT_NAMES:
        monkeypatch.delenv(input_env_name(name), raising=False)
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)
    monkeypatch.setenv("GITHUB_ACTIONS", "false")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/repo")
    monkeypatch.setenv("GITHUB_SHA", "run-sha")
    output = tmp_path / "output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    return output


@pytest.fixture
def github():
    client = Mock()
    client.list_pull_requests_for_commit.return_value = []
    with patch.object(cli, "GitHubClient", return_value=client):
        yield client


@pytest.fixture
def wired_tracker(tracker):
    with patch.object(cli.TrackerClient, "from_config", return_value=tracker):
        yield tracker


def _read_result(output):
    lines = output.read_text().splitlines()
    return json.loads(lines[1])


def test_complete_task_from_body(action_env, github, wired_tracker, provider, tmp_path):
    provider.add_task("22")
    provider.add_task("33")

    code = cli.main([
        "--action", "complete-task",
        "--is-complete", "true",
        "--config", str(tmp_path / "none.yaml"),
        "--body", "Asana: https://app.asana.com/0/1/22 and https://app.asana.com/0/1/33",
        "--trigger-phrase", "Asana:",
    ])

    assert code == 0
    assert provider.tasks["22"].completed is True
    assert provider.tasks["33"].completed is False
    assert _read_result(action_env) == ["22"]
    github.list_pull_requests_for_commit.assert_not_called()


def test_inputs_from_environment(action_env, github, wired_tracker, provider, monkeypatch, tmp_path):
    provider.add_task("22")
    monkeypatch.setenv("INPUT_ACTION", "add-comment")
    monkeypatch.setenv("INPUT_TEXT", "PR #5 opened")
    github.list_pull_requests_for_commit.return_value = [
        PullRequest(number=5, body="https://app.asana.com/0/1/22", head_sha="h5"),
    ]

    code = cli.main(["--config", str(tmp_path / "none.yaml")])

    assert code == 0
    github.list_pull_requests_for_commit.assert_called_once_with("run-sha")
    assert [c.text for c in provider.comments["22"]] == ["PR #5 opened"]
    result = _read_result(action_env)
    assert result[0]["text"] == "PR #5 opened"


def test_assert_link_publishes_status(action_env, github, wired_tracker, tmp_path):
    github.list_pull_requests_for_commit.return_value = [
        PullRequest(number=5, body="no link here", head_sha="h5"),
    ]

    code = cli.main([
        "--action", "assert-link",
        "--link-required", "true",
        "--config", str(tmp_path / "none.yaml"),
    ])

    assert code == 0
    github.create_status.assert_called_once_with(
        "h5",
        state="failure",
        context="asana-link-presence",
        description="asana link not found",
    )
    assert _read_result(action_env) == "failure"


def test_no_pull_request_is_not_an_error(action_env, github, wired_tracker, provider, tmp_path):
    code = cli.main([
        "--action", "complete-task",
        "--config", str(tmp_path / "none.yaml"),
    ])

    assert code == 0
    assert _read_result(action_env) == []
    assert provider.calls == []


def test_invalid_inputs_fail(action_env, github, wired_tracker, tmp_path):
    code = cli.main(["--action", "close-task", "--config", str(tmp_path / "none.yaml")])

    assert code == 1
    assert not action_env.exists()


def test_invalid_settings_fail(action_env, github, tmp_path):
    settings = tmp_path / "prlink.yaml"
    settings.write_text("- not\n- a mapping\n")

    code = cli.main(["--action", "complete-task", "--config", str(settings)])

    assert code == 1


def test_authorization_failure(action_env, github, tmp_path):
    with patch.object(cli.TrackerClient, "from_config", side_effect=AuthorizationError("bad token")):
        code = cli.main(["--action", "complete-task", "--config", str(tmp_path / "none.yaml")])

    assert code == 1
    assert not action_env.exists()


def test_serialize_result():
    assert cli.serialize_result("success") == "success"
    assert cli.serialize_result([PullRequest(1, "b", "h")]) == [
        {"number": 1, "body": "b", "head_sha": "h"},
    ]
