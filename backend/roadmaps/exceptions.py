"""Errors raised by the scheduling core.

Views translate these into JSON error responses; the core itself never
swallows them.
"""


class SchedulingError(Exception):
    """Base class for roadmap scheduling errors."""


class TaskNotFound(SchedulingError, LookupError):
    def __init__(self, task_id, message=None):
        self.task_id = task_id
        super().__init__(message or f"Task {task_id!r} not found in roadmap")


class SubTaskNotFound(TaskNotFound):
    def __init__(self, task_id, sub_task_id):
        self.sub_task_id = sub_task_id
        super().__init__(task_id, f"Sub-task {sub_task_id!r} not found in task {task_id!r}")


class InvalidDate(SchedulingError, ValueError):
    def __init__(self, value, message=None):
        self.value = value
        super().__init__(message or f"Invalid date: {value!r}")


class DateOutOfRange(InvalidDate):
    """Shifting a valid date would leave the range `datetime.date` supports."""

    def __init__(self, value, delta_ms):
        self.delta_ms = delta_ms
        super().__init__(value, f"Shifting {value!r} by {delta_ms}ms is out of the supported date range")


class InvalidTaskChange(SchedulingError, ValueError):
    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Fields cannot be edited directly: {', '.join(self.fields)}")
