"""Task edits coming from the task detail form.

Saving the form may move the task's start date; that goes through
`reschedule_roadmap` so later tasks follow it. The other edited fields are
then merged onto the rescheduled task, whose dates stay as the engine left
them.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .entities import Roadmap
from .exceptions import InvalidTaskChange, SubTaskNotFound
from .scheduler import find_task, replace_tasks, reschedule_roadmap

EDITABLE_FIELDS = frozenset({
    "title", "description", "estimated_minutes", "priority",
    "is_completed", "notes", "sub_tasks", "resources",
})

# new_start_date default: leave the schedule alone
UNCHANGED = object()


def update_task(roadmap: Roadmap,
                task_id: str,
                changes: Optional[Mapping[str, Any]] = None,
                new_start_date: Any = UNCHANGED,
                now: Optional[datetime] = None) -> Roadmap:
    """Apply a saved task edit.

    Args:
        roadmap: current roadmap snapshot.
        task_id: id of the edited task.
        changes: new values for EDITABLE_FIELDS (entity field names).
        new_start_date: edited start date; '' or None clears it, UNCHANGED skips rescheduling.
        now: completion timestamp, defaults to the current UTC time.

    Returns:
        A new Roadmap. `completed_at` is stamped when the task goes from
        incomplete to complete and cleared when it goes back.

    Raises:
        InvalidTaskChange: `changes` names a field outside EDITABLE_FIELDS.
        TaskNotFound / InvalidDate: as for `reschedule_roadmap`.
    """
    fields = dict(changes or {})
    rejected = sorted(set(fields) - EDITABLE_FIELDS)
    if rejected:
        raise InvalidTaskChange(rejected)

    if new_start_date is not UNCHANGED:
        roadmap = reschedule_roadmap(roadmap, task_id, new_start_date)
    position = find_task(roadmap, task_id)
    task = position.task

    if "is_completed" in fields:
        if fields["is_completed"] and not task.is_completed:
            fields["completed_at"] = now or datetime.now(timezone.utc)
        elif not fields["is_completed"]:
            fields["completed_at"] = None

    updated = replace(task, **fields)
    return replace(roadmap, modules=replace_tasks(roadmap.modules, {position.index: updated}))


def toggle_sub_task(roadmap: Roadmap, task_id: str, sub_task_id: str) -> Roadmap:
    """Flip a sub-task's completion flag."""
    position = find_task(roadmap, task_id)
    task = position.task
    if not any(st.id == sub_task_id for st in task.sub_tasks):
        raise SubTaskNotFound(task_id, sub_task_id)

    sub_tasks = tuple(
        replace(st, is_completed=not st.is_completed) if st.id == sub_task_id else st
        for st in task.sub_tasks
    )
    updated = replace(task, sub_tasks=sub_tasks)
    return replace(roadmap, modules=replace_tasks(roadmap.modules, {position.index: updated}))
