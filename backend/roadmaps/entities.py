"""Roadmap value types.

Roadmap, Module and Task are frozen dataclasses; sequences are tuples.
Updates go through `dataclasses.replace` so a caller holding an older
roadmap never sees it change.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

PRIORITIES: Tuple[str, ...] = ("High", "Medium", "Low")


@dataclass(frozen=True)
class SubTask:
    id: str
    title: str
    is_completed: bool = False
    notes: Optional[str] = None


@dataclass(frozen=True)
class Resource:
    id: str
    title: str
    url: str


@dataclass(frozen=True)
class Task:
    """A single study task.

    Fields:
        start_date / end_date: calendar dates, None when unscheduled.
        completed_at: set when completion toggles on, cleared when it toggles off.
        priority: one of PRIORITIES.
    """
    id: str
    title: str
    description: str = ""
    estimated_minutes: int = 0
    priority: str = "Medium"
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    sub_tasks: Tuple[SubTask, ...] = ()
    resources: Tuple[Resource, ...] = ()


@dataclass(frozen=True)
class Module:
    """Ordered group of tasks; module order drives reschedule propagation."""
    id: str
    title: str
    description: str = ""
    tasks: Tuple[Task, ...] = ()


@dataclass(frozen=True)
class Collaborator:
    email: str
    role: str = "editor"  # owner, editor
    status: Optional[str] = None  # pending, accepted


@dataclass(frozen=True)
class Roadmap:
    title: str
    description: str = ""
    total_time_estimate: str = ""
    modules: Tuple[Module, ...] = ()

    # identity / sharing, carried through untouched
    id: Optional[str] = None
    created_at: Optional[str] = None
    user_id: Optional[str] = None
    owner_email: Optional[str] = None
    collaborators: Tuple[Collaborator, ...] = ()
