"""
Unit tests for TrackerClient and capabilities.

Uses mock provider to test delegation and capability detection.
"""

import pytest
from unittest.mock import Mock, patch

from prlink.workitem.types import Comment, TrackedItem
from prlink.workitem.client import TrackerClient
from prlink.workitem.protocol import AuthorizationError
from prlink.workitem.capabilities import (
    ACTION_CAPABILITIES,
    CAPABILITY_METHODS,
    Capability,
    detect_capabilities,
    missing_capabilities,
)


@pytest.fixture
def mock_provider():
    """Create a mock provider with all methods."""
    provider = Mock()
    provider.name = "mock"
    provider.get_task.return_value = TrackedItem(gid="1")
    provider.list_comments.return_value = []
    provider.create_comment.return_value = Comment(gid="c1", text="hi")
    return provider


@pytest.fixture
def client(mock_provider):
    """Create client with mock provider."""
    return TrackerClient(mock_provider, comment_page_size=50)


class TestTrackerClientInit:
    """Test client initialization."""

    def test_client_wraps_provider(self, mock_provider):
        client = TrackerClient(mock_provider)
        assert client._provider == mock_provider

    def test_client_detects_capabilities(self, client):
        assert client.capabilities == set(Capability)

    def test_provider_name(self, client):
        assert client.provider_name == "mock"

    def test_default_page_size(self, mock_provider):
        """A mock attribute is not mistaken for a page size."""
        assert TrackerClient(mock_provider).comment_page_size == 200


class TestTrackerClientDelegation:
    """Test that client delegates to provider."""

    def test_get_task_delegates(self, client, mock_provider):
        assert client.get_task("1").gid == "1"
        mock_provider.get_task.assert_called_once_with("1")

    def test_list_comments_uses_page_size(self, client, mock_provider):
        client.list_comments("1")
        mock_provider.list_comments.assert_called_once_with("1", 50)

    def test_create_comment_delegates(self, client, mock_provider):
        client.create_comment("1", "hi", True)
        mock_provider.create_comment.assert_called_once_with("1", "hi", True)

    def test_delete_comment_delegates(self, client, mock_provider):
        client.delete_comment("c1")
        mock_provider.delete_comment.assert_called_once_with("c1")

    def test_update_completed_delegates(self, client, mock_provider):
        client.update_completed("1", False)
        mock_provider.update_completed.assert_called_once_with("1", False)

    def test_add_task_to_section_delegates(self, client, mock_provider):
        client.add_task_to_section("s1", "1")
        mock_provider.add_task_to_section.assert_called_once_with("s1", "1")


class TestFromConfig:
    """Test client construction from settings."""

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            TrackerClient.from_config({"default_provider": "jira", "providers": {}})

    def test_authorizes_provider(self):
        with patch("prlink.workitem.providers.asana.AsanaProvider") as provider_cls:
            provider_cls.return_value.name = "asana"
            client = TrackerClient.from_config({
                "default_provider": "asana",
                "providers": {"asana": {"token": "tok"}},
            })

        provider_cls.assert_called_once_with({"token": "tok"})
        provider_cls.return_value.authorize.assert_called_once()
        assert client.provider_name == "asana"

    def test_authorization_failure_propagates(self):
        settings = {"default_provider": "asana", "providers": {"asana": {"token": ""}}}
        with pytest.raises(AuthorizationError):
            TrackerClient.from_config(settings)


class TestCapabilities:
    """Test capability detection."""

    def test_every_capability_has_methods(self):
        assert set(CAPABILITY_METHODS) == set(Capability)

    def test_partial_provider(self):
        class CommentOnly:
            def list_comments(self, task_id, limit):
                return []

            def create_comment(self, task_id, text, is_pinned=False):
                return None

        caps = detect_capabilities(CommentOnly())
        assert caps == {Capability.READ_COMMENTS, Capability.WRITE_COMMENT}
        assert missing_capabilities(caps, "add-comment") == set()
        assert missing_capabilities(caps, "complete-task") == {Capability.WRITE_COMPLETION}

    def test_assert_link_needs_nothing(self):
        assert ACTION_CAPABILITIES["assert-link"] == set()
        assert missing_capabilities(set(), "assert-link") == set()
