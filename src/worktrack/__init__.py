"""
WorkTrack - an employee productivity and task tracker.

Employees log tasks with hours and status; managers assign tasks and review
team productivity. Every status change is kept in an append-only history.
"""

from .version import VERSION, APP_SCHEMA_VERSION
from .models import (
    Role,
    TaskStatus,
    Employee,
    Task,
    Comment,
    StatusChange,
    TaskPatch,
    TaskFilter,
    SeedData,
)
from .recovery import (
    WorkTrackError,
    RecoverableError,
    FatalError,
    ValidationError,
    NotFoundError,
    AuthError,
    PermissionDeniedError,
)
from .data import TaskRepository, DataCore, TrackerContext
from .service import TaskService
from .auth import AuthGate, Session

__version__ = VERSION

__all__ = [
    "VERSION",
    "APP_SCHEMA_VERSION",
    "Role",
    "TaskStatus",
    "Employee",
    "Task",
    "Comment",
    "StatusChange",
    "TaskPatch",
    "TaskFilter",
    "SeedData",
    "WorkTrackError",
    "RecoverableError",
    "FatalError",
    "ValidationError",
    "NotFoundError",
    "AuthError",
    "PermissionDeniedError",
    "TaskRepository",
    "DataCore",
    "TrackerContext",
    "TaskService",
    "AuthGate",
    "Session",
]
