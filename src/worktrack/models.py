from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional, List, Dict, Union
import yaml

from .version import APP_SCHEMA_VERSION

class Role(Enum):
    EMPLOYEE = "Employee"
    MANAGER = "Manager"

class TaskStatus(Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, value: Union['TaskStatus', str, int]) -> 'TaskStatus':
        """
        Resolve a status from the enum itself, its value or name, or its menu index.

        Names and values are matched ignoring case, spaces and underscores, so
        "InProgress", "in_progress" and "IN PROGRESS" are all accepted. Integer
        indexes follow the menu order: 0 Pending, 1 InProgress, 2 Completed.

        Raises:
            ValueError: If the value does not name one of the statuses.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid task status: {value!r}")
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Invalid task status: {value!r}")
        if isinstance(value, str):
            key = cls._normalize(value)
            for member in cls:
                if key in (cls._normalize(member.value), cls._normalize(member.name)):
                    return member
        raise ValueError(f"Invalid task status: {value!r}")

    @staticmethod
    def _normalize(text: str) -> str:
        return text.strip().lower().replace("_", "").replace(" ", "")


class BaseYAMLModel(BaseModel):
    """Pydantic model that can be written to and read from YAML documents."""

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(mode="json"), default_flow_style=False,
                              sort_keys=False, indent=2, allow_unicode=True)

    @classmethod
    def from_yaml(cls, text: str):
        return cls.model_validate(yaml.safe_load(text) or {})


class Employee(BaseModel):
    """A person who logs tasks; managers may also assign them."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Unique, stable employee identifier")
    name: str = Field(description="Display name, recorded as the actor on changes")
    department: str = Field(description="Department the employee belongs to")
    email: str = Field(description="Login key, matched case-insensitively")
    role: Role = Field(default=Role.EMPLOYEE, description="Employee or Manager")
    password: str = Field(repr=False, description="Credential secret (cleartext, demo only)")

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER


class Comment(BaseModel):
    id: int = Field(description="Unique comment identifier")
    task_id: int = Field(description="Task the comment belongs to")
    text: str = Field(description="Comment body")
    added_by: str = Field(description="Name of the author")
    added_at: datetime = Field(description="When the comment was added")


class StatusChange(BaseModel):
    old_status: TaskStatus = Field(description="Status before the change")
    new_status: TaskStatus = Field(description="Status after the change")
    changed_at: datetime = Field(description="When the change was recorded")
    changed_by: str = Field(description="Name of the actor who made the change")


class Task(BaseModel):
    """A unit of logged work owned by one employee."""

    id: Optional[int] = Field(default=None, description="Assigned by the repository when stored")
    employee_id: int = Field(description="Owning employee")
    name: str = Field(description="Task name")
    hours_spent: float = Field(default=0.0, description="Hours spent (or estimated when assigned)")
    created_on: date = Field(default_factory=date.today, description="Day the task was logged")
    due_date: date = Field(description="Day the task is due")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current status")
    comments: List[Comment] = Field(default_factory=list, description="Comments in the order added")
    status_history: List[StatusChange] = Field(
        default_factory=list,
        description="Audit trail of status changes, oldest first"
    )

    def is_overdue(self, today: date) -> bool:
        """Due strictly before today and not yet completed."""
        return self.due_date < today and self.status != TaskStatus.COMPLETED


class TaskPatch(BaseModel):
    """Fields to overwrite on an existing task; None means "leave as is"."""

    model_config = ConfigDict(extra="forbid")

    # Raw values; TaskService validates them with the same rules as create_task.
    name: Optional[str] = None
    hours_spent: Optional[Any] = None
    status: Optional[Any] = None
    due_date: Optional[Any] = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class TaskFilter(BaseModel):
    employee_id: Optional[int] = Field(default=None, description="Only tasks owned by this employee")
    status: Optional[TaskStatus] = Field(default=None, description="Only tasks in this status")
    text: Optional[str] = Field(default=None, description="Case-insensitive substring of the task name")
    due_from: Optional[date] = Field(default=None, description="Earliest due date (inclusive)")
    due_to: Optional[date] = Field(default=None, description="Latest due date (inclusive)")

    def matches(self, task: Task) -> bool:
        if self.employee_id is not None and task.employee_id != self.employee_id:
            return False
        if self.status is not None and task.status != self.status:
            return False
        if self.text and self.text.strip().lower() not in task.name.lower():
            return False
        if self.due_from is not None and task.due_date < self.due_from:
            return False
        if self.due_to is not None and task.due_date > self.due_to:
            return False
        return True


class SeedData(BaseYAMLModel):
    """Employees and tasks loaded into a fresh tracker at startup."""

    schema_version: str = Field(default=APP_SCHEMA_VERSION, description="Seed document format version")
    employees: List[Employee] = Field(default_factory=list, description="Employees to register")
    tasks: List['SeedData.Task'] = Field(default_factory=list, description="Tasks to create, in order")

    class Task(BaseModel):
        employee_id: int = Field(description="Owning employee")
        name: str = Field(min_length=1, description="Task name")
        hours_spent: float = Field(default=0.0, ge=0, description="Hours spent")
        status: TaskStatus = Field(default=TaskStatus.PENDING, description="Initial status")
        created_on: Optional[date] = Field(default=None, description="Explicit creation day")
        created_days_ago: int = Field(default=0, ge=0, description="Creation day relative to today, used when created_on is empty")
        due_date: Optional[date] = Field(default=None, description="Explicit due day")
        due_in_days: int = Field(default=0, description="Due day relative to today, used when due_date is empty")
        created_by: str = Field(default="System", description="Actor recorded on the initial history entry")

        def resolve_created(self, today: date) -> date:
            return self.created_on or today - timedelta(days=self.created_days_ago)

        def resolve_due(self, today: date) -> date:
            return self.due_date or today + timedelta(days=self.due_in_days)

SeedData.model_rebuild()


class TimesheetEntry(BaseModel):
    period: str = Field(description="ISO week (YYYY-Www) or month (YYYY-MM)")
    hours: float = Field(description="Hours logged in the period")
    task_count: int = Field(description="Tasks logged in the period")


class EmployeeHours(BaseModel):
    employee_id: int
    name: str
    hours: float


class PerformerScore(BaseModel):
    rank: int
    employee_id: int
    name: str
    completed_hours: float
    completed_tasks: int


class DashboardSummary(BaseYAMLModel):
    """Headline numbers across every task in the tracker."""

    generated_on: date = Field(description="Day the summary refers to")
    total_tasks: int = Field(description="Number of tasks")
    status_counts: Dict[str, int] = Field(default_factory=dict, description="Tasks per status value")
    total_hours: float = Field(description="Hours across all tasks")
    average_hours: float = Field(description="Mean hours per task, 0 when there are none")
    completion_rate: float = Field(description="Completed tasks as a fraction of all tasks")
    overdue_tasks: int = Field(description="Tasks due before today and not completed")
