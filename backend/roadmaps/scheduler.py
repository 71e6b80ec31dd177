"""Roadmap scheduling utilities.

Contains utilities for:
- normalizing calendar dates,
- shifting a date by a signed millisecond delta,
- deriving the roadmap's total-duration summary from task dates,
- rescheduling a task and cascading the shift to every task after it.

Everything here is a pure function over frozen roadmap values; nothing is
mutated in place.
"""

import logging
import re
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from .entities import Module, Roadmap, Task
from .exceptions import DateOutOfRange, InvalidDate, TaskNotFound

logger = logging.getLogger(__name__)

NOT_SCHEDULED = "Not scheduled"
WEEKS_THRESHOLD_DAYS = 30
MS_PER_DAY = 24 * 60 * 60 * 1000
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TaskPosition(NamedTuple):
    """A task's place in the roadmap-wide order (module-major, task-minor)."""
    index: int
    module_index: int
    task_index: int
    task: Task


def _ensure_date(d: Any) -> Optional[date]:
    """Normalize an input to a `datetime.date`.

    Accepts:
      - None or '' -> None
      - date instance -> returned unchanged (datetimes are truncated to their date)
      - YYYY-MM-DD string, optionally with a time part (e.g. '2025-11-30T12:00:00')
      - raises InvalidDate for anything else
    """
    if d is None or d == "":
        return None
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    if isinstance(d, str):
        day_part = d.split("T", 1)[0].strip()
        if not DATE_RE.fullmatch(day_part):
            raise InvalidDate(d)
        try:
            return date.fromisoformat(day_part)
        except ValueError:
            raise InvalidDate(d) from None
    raise InvalidDate(d)


def add_time(value: Union[date, str, None], delta_ms: int) -> Optional[date]:
    """Shift a calendar date by `delta_ms` milliseconds.

    The date is read as local midnight; the result is the date component of
    the shifted instant, so a partial-day delta truncates toward the earlier
    day. Empty input gives None; a result outside `date.min`..`date.max`
    raises DateOutOfRange.
    """
    day = _ensure_date(value)
    if day is None:
        return None
    try:
        shifted = datetime.combine(day, time.min) + timedelta(milliseconds=delta_ms)
    except OverflowError:
        raise DateOutOfRange(value, delta_ms) from None
    return shifted.date()


def recalculate_total_time(modules: Iterable[Module]) -> str:
    """Return a human-readable span covering every scheduled task.

    The span runs from the earliest start date to the latest end date (a
    task without an end date counts as a single day at its start). Spans
    over WEEKS_THRESHOLD_DAYS are reported in whole weeks.
    """
    min_date: Optional[date] = None
    max_date: Optional[date] = None

    for module in modules:
        for task in module.tasks:
            if task.start_date and (min_date is None or task.start_date < min_date):
                min_date = task.start_date
            last_day = task.end_date or task.start_date
            if last_day and (max_date is None or last_day > max_date):
                max_date = last_day

    if min_date is None:
        return NOT_SCHEDULED

    # inclusive of the start day
    diff_days = abs((max_date - min_date).days) + 1

    if diff_days > WEEKS_THRESHOLD_DAYS:
        weeks = round(diff_days / 7)
        return f"{weeks} weeks"
    return f"{diff_days} days"


def task_sequence(modules: Sequence[Module]) -> List[TaskPosition]:
    """Flatten modules into the global task order used for propagation."""
    positions: List[TaskPosition] = []
    for module_index, module in enumerate(modules):
        for task_index, task in enumerate(module.tasks):
            positions.append(TaskPosition(len(positions), module_index, task_index, task))
    return positions


def find_task(roadmap: Roadmap, task_id: str) -> TaskPosition:
    """Return the position of the first task with `task_id`, or raise TaskNotFound."""
    for position in task_sequence(roadmap.modules):
        if position.task.id == task_id:
            return position
    raise TaskNotFound(task_id)


def shift_task(task: Task, delta_ms: int) -> Task:
    """Move both dates of a scheduled task by `delta_ms`."""
    return replace(
        task,
        start_date=add_time(task.start_date, delta_ms),
        end_date=add_time(task.end_date, delta_ms),
    )


def replace_tasks(modules: Sequence[Module], updates: Dict[int, Task]) -> Tuple[Module, ...]:
    """Rebuild modules, swapping in updated tasks keyed by global index."""
    if not updates:
        return tuple(modules)
    rebuilt = []
    index = 0
    for module in modules:
        tasks = []
        for task in module.tasks:
            tasks.append(updates.get(index, task))
            index += 1
        rebuilt.append(replace(module, tasks=tuple(tasks)))
    return tuple(rebuilt)


def reschedule_roadmap(roadmap: Roadmap,
                       moved_task: Union[Task, str],
                       new_start_date: Union[date, str, None]) -> Roadmap:
    """Move a task to a new start date, carrying every later task with it.

    Args:
        roadmap: current roadmap snapshot; the stored task is authoritative.
        moved_task: the task being moved (only its id is used) or the id itself.
        new_start_date: target start date; empty clears the start date.

    Returns:
        A new Roadmap. When the task had no start date, the target is empty,
        or the date is unchanged, only that task's start date is written.
        Otherwise the moved task and every later scheduled task (module
        order, then task order) shift by the same delta, and
        `total_time_estimate` is recomputed.

    Raises:
        TaskNotFound: no task in the roadmap has the moved task's id.
        InvalidDate: `new_start_date` is not a YYYY-MM-DD date, or the shift
            pushes a task past the supported date range (DateOutOfRange).
    """
    task_id = moved_task.id if isinstance(moved_task, Task) else moved_task
    new_start = _ensure_date(new_start_date)
    position = find_task(roadmap, task_id)
    old_start = position.task.start_date

    if old_start is None or new_start is None or old_start == new_start:
        logger.debug("Single-field update for task %s: %s -> %s", task_id, old_start, new_start)
        updated = replace(position.task, start_date=new_start)
        return replace(roadmap, modules=replace_tasks(roadmap.modules, {position.index: updated}))

    delta_ms = (new_start - old_start).days * MS_PER_DAY

    updates: Dict[int, Task] = {}
    for later in task_sequence(roadmap.modules)[position.index:]:
        task = later.task
        if later.index == position.index:
            updates[later.index] = replace(
                task,
                start_date=new_start,
                end_date=add_time(task.end_date, delta_ms),
            )
        elif task.start_date:
            updates[later.index] = shift_task(task, delta_ms)

    modules = replace_tasks(roadmap.modules, updates)
    total = recalculate_total_time(modules)
    logger.debug(
        "Rescheduled task %s by %d day(s); shifted %d task(s); total now %s",
        task_id, delta_ms // MS_PER_DAY, len(updates), total,
    )
    return replace(roadmap, modules=modules, total_time_estimate=total)


def unschedule_task(roadmap: Roadmap, task_id: str) -> Roadmap:
    """Clear a task's dates (dropped off the calendar) and refresh the total."""
    position = find_task(roadmap, task_id)
    updated = replace(position.task, start_date=None, end_date=None)
    modules = replace_tasks(roadmap.modules, {position.index: updated})
    return replace(roadmap, modules=modules, total_time_estimate=recalculate_total_time(modules))


# -----------------------
# Quick manual test helper (run directly for ad-hoc checks)
# -----------------------
if __name__ == "__main__":
    sample = Roadmap(
        title="Sample",
        modules=(
            Module(id="a", title="A", tasks=(
                Task(id="x", title="X", start_date=date(2024, 1, 1)),
                Task(id="y", title="Y", start_date=date(2024, 1, 3)),
            )),
            Module(id="b", title="B", tasks=(
                Task(id="z", title="Z", start_date=date(2024, 1, 5)),
            )),
        ),
    )
    moved = reschedule_roadmap(sample, "x", "2024-01-02")
    for pos in task_sequence(moved.modules):
        print(pos.task.id, pos.task.start_date)
    print("Total:", moved.total_time_estimate)
