"""Tests for marker comment lookup."""

from unittest.mock import Mock

from prlink.workitem.client import TrackerClient
from prlink.workitem.comments import find_marked_comment
from prlink.workitem.types import Comment


class TestFindMarkedComment:
    """Tests for find_marked_comment."""

    def test_returns_none_without_comments(self, provider, tracker):
        """No comments means no match."""
        provider.add_task("1")
        assert find_marked_comment(tracker, "1", "<!-- pr-42 -->") is None

    def test_substring_match(self, provider, tracker):
        """Marker only has to be contained in the body."""
        provider.add_task("1")
        provider.comments["1"] = [
            Comment(gid="c1", text="unrelated"),
            Comment(gid="c2", text="PR opened: https://github.com/o/r/pull/42 <!-- pr-42 -->"),
        ]
        found = find_marked_comment(tracker, "1", "<!-- pr-42 -->")
        assert found.gid == "c2"

    def test_first_match_wins(self, provider, tracker):
        """With several matches the first in provider order is returned."""
        provider.add_task("1")
        provider.comments["1"] = [
            Comment(gid="c1", text="marker A"),
            Comment(gid="c2", text="marker B"),
        ]
        assert find_marked_comment(tracker, "1", "marker").gid == "c1"

    def test_exact_text_is_not_required(self, provider, tracker):
        """Marker longer than the body does not match."""
        provider.add_task("1")
        provider.comments["1"] = [Comment(gid="c1", text="pr-4")]
        assert find_marked_comment(tracker, "1", "pr-42") is None

    def test_uses_client_page_size(self):
        """Lookup asks for the client's page size by default."""
        mock_provider = Mock()
        mock_provider.list_comments.return_value = []
        client = TrackerClient(mock_provider, comment_page_size=200)

        find_marked_comment(client, "9", "x")

        mock_provider.list_comments.assert_called_once_with("9", 200)

    def test_limit_override(self):
        """An explicit limit is passed through."""
        mock_provider = Mock()
        mock_provider.list_comments.return_value = []
        client = TrackerClient(mock_provider, comment_page_size=200)

        find_marked_comment(client, "9", "x", limit=10)

        mock_provider.list_comments.assert_called_once_with("9", 10)
