"""
Move a task into named sections of the projects it belongs to.

Each target is handled on its own, in order, and every failure is
collected in the returned MoveReport instead of raised.
"""

from collections.abc import Iterable

from prlink.logger import get_logger
from prlink.workitem.client import TrackerClient
from prlink.workitem.types import MoveReport, MoveTarget, TrackedItem

log = get_logger("SECTIONS")


def move_to_sections(
    client: TrackerClient,
    item: TrackedItem,
    targets: Iterable[MoveTarget],
) -> MoveReport:
    """
    Add ``item`` to the section named by each target.

    Args:
        client: Tracker client
        item: Task with its current project memberships
        targets: (project name, section name) pairs

    Returns:
        MoveReport with moved, skipped and failed targets
    """
    report = MoveReport(task_id=item.gid)

    for target in targets:
        project = item.find_project(target.project)
        if project is None:
            log.info(
                f'This task does not exist in "{target.project}" project',
                task_id=item.gid,
            )
            report.skipped.append(target)
            continue

        try:
            sections = client.list_sections(project.gid)
        except Exception as e:
            log.error(
                f"Failed to list sections of {target.project}: {e}",
                task_id=item.gid,
            )
            report.errors.append((target, str(e)))
            continue

        section = next((s for s in sections if s.name == target.section), None)
        if section is None:
            log.error(f"Asana section {target.section} not found.", task_id=item.gid)
            report.errors.append((target, "section not found"))
            continue

        try:
            client.add_task_to_section(section.gid, item.gid)
        except Exception as e:
            log.error(f"Failed to move to {target}: {e}", task_id=item.gid)
            report.errors.append((target, str(e)))
            continue

        log.info(f"Moved to: {target}", task_id=item.gid)
        report.moved.append(target)

    return report
