"""Completion tracking and progress statistics for a roadmap."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Tuple

from .entities import Roadmap, Task
from .exceptions import TaskNotFound
from .scheduler import replace_tasks, task_sequence


@dataclass(frozen=True)
class ModuleProgress:
    name: str  # zero-padded position, e.g. "01"
    title: str
    total: int
    completed: int
    remaining: int
    is_fully_complete: bool


@dataclass(frozen=True)
class RoadmapProgress:
    total: int
    completed: int
    percent: int
    total_minutes: int
    completed_minutes: int
    modules: Tuple[ModuleProgress, ...]


def set_task_completion(roadmap: Roadmap,
                        task_ids: Iterable[str],
                        is_completed: bool,
                        now: Optional[datetime] = None) -> Roadmap:
    """Mark one or more tasks complete (or not complete).

    Completing stamps `completed_at` with `now` unless the task was already
    complete; un-completing clears it. Raises TaskNotFound for the first id
    that is not in the roadmap.
    """
    wanted = list(dict.fromkeys(task_ids))
    stamp = now or datetime.now(timezone.utc)
    positions = {}
    for pos in task_sequence(roadmap.modules):
        positions.setdefault(pos.task.id, pos)

    updates: Dict[int, Task] = {}
    for task_id in wanted:
        pos = positions.get(task_id)
        if pos is None:
            raise TaskNotFound(task_id)
        task = pos.task
        if is_completed:
            completed_at = task.completed_at if task.is_completed and task.completed_at else stamp
        else:
            completed_at = None
        updates[pos.index] = replace(task, is_completed=is_completed, completed_at=completed_at)

    return replace(roadmap, modules=replace_tasks(roadmap.modules, updates))


def calculate_progress(roadmap: Roadmap) -> RoadmapProgress:
    """Return completion counts and minutes, overall and per module."""
    total = completed = total_minutes = completed_minutes = 0
    modules = []

    for index, module in enumerate(roadmap.modules, start=1):
        mod_total = len(module.tasks)
        mod_completed = sum(1 for t in module.tasks if t.is_completed)
        modules.append(ModuleProgress(
            name=str(index).zfill(2),
            title=module.title,
            total=mod_total,
            completed=mod_completed,
            remaining=mod_total - mod_completed,
            is_fully_complete=mod_total > 0 and mod_total == mod_completed,
        ))
        for task in module.tasks:
            total += 1
            total_minutes += task.estimated_minutes
            if task.is_completed:
                completed += 1
                completed_minutes += task.estimated_minutes

    percent = 0 if total == 0 else int(completed / total * 100 + 0.5)
    return RoadmapProgress(
        total=total,
        completed=completed,
        percent=percent,
        total_minutes=total_minutes,
        completed_minutes=completed_minutes,
        modules=tuple(modules),
    )
