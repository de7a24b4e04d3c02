"""Unit tests for Pydantic models."""

import pydantic
import pytest
from datetime import date, datetime
from worktrack.models import (
    Role, TaskStatus, Employee, Task, StatusChange, TaskPatch, TaskFilter,
    SeedData, DashboardSummary
)


class TestTaskStatus:
    """Test TaskStatus parsing."""

    def test_parse_enum_and_values(self):
        """Test parsing members, values and names."""
        assert TaskStatus.parse(TaskStatus.COMPLETED) is TaskStatus.COMPLETED
        assert TaskStatus.parse("Pending") is TaskStatus.PENDING
        assert TaskStatus.parse("InProgress") is TaskStatus.IN_PROGRESS
        assert TaskStatus.parse("in_progress") is TaskStatus.IN_PROGRESS
        assert TaskStatus.parse(" completed ") is TaskStatus.COMPLETED

    def test_parse_menu_index(self):
        """Test the 0-2 menu indexes."""
        assert TaskStatus.parse(0) is TaskStatus.PENDING
        assert TaskStatus.parse(1) is TaskStatus.IN_PROGRESS
        assert TaskStatus.parse(2) is TaskStatus.COMPLETED

    def test_invalid_status(self):
        """Test values outside the closed set."""
        for value in (3, -1, "Done", "", True, None, 1.0):
            with pytest.raises(ValueError, match="Invalid task status"):
                TaskStatus.parse(value)


class TestEmployee:
    """Test Employee model."""

    def test_defaults_and_role(self):
        """Test default role and manager flag."""
        employee = Employee(id=1, name="A", department="IT", email="a@x.com", password="p")
        assert employee.role == Role.EMPLOYEE
        assert not employee.is_manager

        manager = Employee(id=2, name="M", department="IT", email="m@x.com", role=Role.MANAGER, password="p")
        assert manager.is_manager

    def test_immutable(self):
        """Test employees cannot be changed after creation."""
        employee = Employee(id=1, name="A", department="IT", email="a@x.com", password="p")
        with pytest.raises(Exception):
            employee.name = "B"

    def test_password_not_in_repr(self):
        """Test the secret stays out of repr."""
        employee = Employee(id=1, name="A", department="IT", email="a@x.com", password="hunter2")
        assert "hunter2" not in repr(employee)

    def test_hashable(self):
        """Test employees can key report dictionaries."""
        employee = Employee(id=1, name="A", department="IT", email="a@x.com", password="p")
        assert {employee: 1}[employee] == 1


class TestTask:
    """Test Task model."""

    def test_defaults(self):
        """Test a new task starts unstored and empty."""
        task = Task(employee_id=1, name="Write docs", due_date=date(2024, 6, 10))
        assert task.id is None
        assert task.status == TaskStatus.PENDING
        assert task.hours_spent == 0.0
        assert task.comments == []
        assert task.status_history == []
        assert task.created_on == date.today()

    def test_is_overdue(self):
        """Test the overdue rule: due strictly before today and not completed."""
        today = date(2024, 6, 10)
        task = Task(employee_id=1, name="T", due_date=date(2024, 6, 9), status=TaskStatus.IN_PROGRESS)
        assert task.is_overdue(today)

        task.status = TaskStatus.COMPLETED
        assert not task.is_overdue(today)

        due_today = Task(employee_id=1, name="T", due_date=today)
        assert not due_today.is_overdue(today)


class TestTaskPatch:
    """Test TaskPatch model."""

    def test_empty_patch(self):
        assert TaskPatch().is_empty()
        assert not TaskPatch(name="New").is_empty()

    def test_keeps_raw_values(self):
        """Test raw status/date input is kept for the service to validate."""
        patch = TaskPatch(status="bogus", due_date="2024-13-40")
        assert patch.status == "bogus"
        assert patch.due_date == "2024-13-40"

    def test_rejects_unknown_fields(self):
        """Test a misspelt field is an error, not a silent no-op."""
        with pytest.raises(pydantic.ValidationError):
            TaskPatch(hours=3)


class TestTaskFilter:
    """Test TaskFilter matching."""

    def _task(self, **kwargs):
        fields = dict(employee_id=1, name="Fix Bug #101", due_date=date(2024, 6, 10))
        fields.update(kwargs)
        return Task(**fields)

    def test_empty_filter_matches_everything(self):
        assert TaskFilter().matches(self._task())

    def test_each_criterion(self):
        """Test every criterion narrows the match."""
        task = self._task(status=TaskStatus.IN_PROGRESS)
        assert TaskFilter(employee_id=1).matches(task)
        assert not TaskFilter(employee_id=2).matches(task)
        assert TaskFilter(status=TaskStatus.IN_PROGRESS).matches(task)
        assert not TaskFilter(status=TaskStatus.PENDING).matches(task)
        assert TaskFilter(text="bug").matches(task)
        assert not TaskFilter(text="feature").matches(task)
        assert TaskFilter(due_from=date(2024, 6, 10), due_to=date(2024, 6, 10)).matches(task)
        assert not TaskFilter(due_from=date(2024, 6, 11)).matches(task)
        assert not TaskFilter(due_to=date(2024, 6, 9)).matches(task)


class TestStatusChange:
    """Test StatusChange model."""

    def test_fields(self):
        change = StatusChange(old_status="Pending", new_status="Completed",
                              changed_at=datetime(2024, 6, 10, 9, 0), changed_by="Asha")
        assert change.old_status == TaskStatus.PENDING
        assert change.new_status == TaskStatus.COMPLETED


class TestSeedData:
    """Test SeedData model and YAML round-trip."""

    def test_relative_dates(self):
        """Test created/due offsets resolve against today."""
        today = date(2024, 6, 10)
        entry = SeedData.Task(employee_id=1, name="T", created_days_ago=2, due_in_days=1)
        assert entry.resolve_created(today) == date(2024, 6, 8)
        assert entry.resolve_due(today) == date(2024, 6, 11)

        explicit = SeedData.Task(employee_id=1, name="T", created_on=date(2024, 1, 1), due_date=date(2024, 2, 1))
        assert explicit.resolve_created(today) == date(2024, 1, 1)
        assert explicit.resolve_due(today) == date(2024, 2, 1)

    def test_yaml_round_trip(self):
        seed = SeedData(
            employees=[Employee(id=1, name="A", department="IT", email="a@x.com", password="p")],
            tasks=[SeedData.Task(employee_id=1, name="T", status=TaskStatus.IN_PROGRESS)]
        )
        text = seed.to_yaml()
        assert "InProgress" in text

        loaded = SeedData.from_yaml(text)
        assert loaded.employees[0].email == "a@x.com"
        assert loaded.tasks[0].status == TaskStatus.IN_PROGRESS

    def test_empty_yaml(self):
        seed = SeedData.from_yaml("")
        assert seed.employees == []
        assert seed.tasks == []


class TestDashboardSummary:
    def test_to_yaml(self):
        summary = DashboardSummary(generated_on=date(2024, 6, 10), total_tasks=0, total_hours=0,
                                   average_hours=0, completion_rate=0, overdue_tasks=0)
        assert "generated_on: '2024-06-10'" in summary.to_yaml()
