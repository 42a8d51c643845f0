"""Pytest configuration for prlink tests."""
import sys
from pathlib import Path

import pytest

# Add project root to path so 'prlink' can be imported without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from prlink.workitem.client import TrackerClient
from prlink.workitem.protocol import TrackerAPIError
from prlink.workitem.types import Comment, Project, Section, TrackedItem


class InMemoryProvider:
    """Tracker provider keeping tasks, comments and sections in dicts."""

    name = "memory"

    def __init__(self):
        self.tasks: dict[str, TrackedItem] = {}
        self.comments: dict[str, list[Comment]] = {}
        self.sections: dict[str, list[Section]] = {}
        self.section_members: dict[str, list[str]] = {}
        self.failing: set[tuple[str, str]] = set()
        self.calls: list[tuple] = []
        self._next_gid = 1000

    # --- setup helpers ---

    def add_task(self, gid, projects=(), completed=False):
        self.tasks[gid] = TrackedItem(gid=gid, completed=completed, projects=list(projects))
        self.comments.setdefault(gid, [])
        return self.tasks[gid]

    def add_section(self, project, name):
        section = Section(gid=f"s-{project.gid}-{name}", name=name, project=project)
        self.sections.setdefault(project.gid, []).append(section)
        return section

    def fail(self, method, key):
        self.failing.add((method, key))

    def _check(self, method, key):
        self.calls.append((method, key))
        if (method, key) in self.failing:
            raise TrackerAPIError(f"{method} {key} failed", status_code=500)

    def _gid(self):
        self._next_gid += 1
        return str(self._next_gid)

    # --- TrackerProvider ---

    def authorize(self):
        pass

    def get_task(self, task_id):
        self._check("get_task", task_id)
        return self.tasks[task_id]

    def update_completed(self, task_id, completed):
        self._check("update_completed", task_id)
        task = self.tasks[task_id]
        task.completed = completed

    def list_comments(self, task_id, limit):
        self._check("list_comments", task_id)
        return list(self.comments.get(task_id, []))[:limit]

    def create_comment(self, task_id, text, is_pinned=False):
        self._check("create_comment", task_id)
        comment = Comment(gid=self._gid(), text=text, is_pinned=is_pinned)
        self.comments.setdefault(task_id, []).append(comment)
        return comment

    def delete_comment(self, comment_id):
        self._check("delete_comment", comment_id)
        for comments in self.comments.values():
            for comment in list(comments):
                if comment.gid == comment_id:
                    comments.remove(comment)
                    return
        raise TrackerAPIError(f"story {comment_id} not found", status_code=404)

    def list_sections(self, project_id):
        self._check("list_sections", project_id)
        return list(self.sections.get(project_id, []))

    def add_task_to_section(self, section_id, task_id):
        self._check("add_task_to_section", section_id)
        members = self.section_members.setdefault(section_id, [])
        if task_id not in members:
            members.append(task_id)


@pytest.fixture
def provider():
    """Empty in-memory tracker."""
    return InMemoryProvider()


@pytest.fixture
def tracker(provider):
    """Tracker client over the in-memory provider."""
    return TrackerClient(provider, comment_page_size=200)


@pytest.fixture
def project_a():
    return Project(gid="p-a", name="A")
