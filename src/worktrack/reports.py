"""
Read-only reports over the task service's query surface.

Nothing here mutates tasks; every function takes the service and works from
list_tasks / tasks_owned_by.
"""
from collections import OrderedDict
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from .data.io import atomic_write, export_tasks_csv, DATA_YAML
from .logs import get_logger
from .models import (DashboardSummary, Employee, EmployeeHours, PerformerScore,
                     Task, TaskStatus, TimesheetEntry)
from .recovery import ValidationError

if TYPE_CHECKING:
    from .service import TaskService

log = get_logger("reports")

PERIODS = ("week", "month")

def iso_week_label(day: date) -> str:
    """ISO-8601 week of a day, e.g. 2024-W23 (weeks start on Monday)."""
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"

def month_label(day: date) -> str:
    return day.strftime("%Y-%m")

def timesheet(service: 'TaskService', employee_id: int, period: str = "week") -> List[TimesheetEntry]:
    """Hours and task counts per week or month of creation, newest period first."""
    if period not in PERIODS:
        raise ValidationError(f"Period must be one of {', '.join(PERIODS)}, got {period!r}")
    label = iso_week_label if period == "week" else month_label

    buckets: Dict[str, List[Task]] = {}
    for task in service.tasks_owned_by(employee_id):
        buckets.setdefault(label(task.created_on), []).append(task)

    return [
        TimesheetEntry(period=key, hours=sum(t.hours_spent for t in buckets[key]), task_count=len(buckets[key]))
        for key in sorted(buckets, reverse=True)
    ]

def group_by_employee(service: 'TaskService') -> Dict[Employee, List[Task]]:
    """Every employee with their tasks, in registration order."""
    return OrderedDict((e, service.tasks_owned_by(e.id)) for e in service.employees())

def weekly_hours(service: 'TaskService', today: Optional[date] = None) -> List[EmployeeHours]:
    """Hours each employee logged in the ISO week containing today."""
    week = iso_week_label(today or date.today())
    return [
        EmployeeHours(
            employee_id=e.id,
            name=e.name,
            hours=sum(t.hours_spent for t in service.tasks_owned_by(e.id) if iso_week_label(t.created_on) == week)
        )
        for e in service.employees()
    ]

def top_performers(service: 'TaskService', limit: int = 3) -> List[PerformerScore]:
    """
    Rank employees by hours on Completed tasks.

    Ties are broken by the number of Completed tasks, then by employee id.
    Employees without completed work are not ranked.
    """
    scored = []
    for e in service.employees():
        done = [t for t in service.tasks_owned_by(e.id) if t.status == TaskStatus.COMPLETED]
        if done:
            scored.append((e, sum(t.hours_spent for t in done), len(done)))

    scored.sort(key=lambda s: (-s[1], -s[2], s[0].id))
    return [
        PerformerScore(rank=i, employee_id=e.id, name=e.name, completed_hours=hours, completed_tasks=count)
        for i, (e, hours, count) in enumerate(scored[:max(0, limit)], start=1)
    ]

def dashboard(service: 'TaskService', today: Optional[date] = None) -> DashboardSummary:
    today = today or date.today()
    tasks = service.list_tasks()
    total = len(tasks)
    hours = sum(t.hours_spent for t in tasks)
    counts = {s.value: sum(1 for t in tasks if t.status == s) for s in TaskStatus}

    return DashboardSummary(
        generated_on=today,
        total_tasks=total,
        status_counts=counts,
        total_hours=hours,
        average_hours=hours / total if total else 0.0,
        completion_rate=counts[TaskStatus.COMPLETED.value] / total if total else 0.0,
        overdue_tasks=len(service.overdue_tasks(today)),
    )

def export_reports(directory: Union[Path, str], service: 'TaskService', today: Optional[date] = None) -> List[Path]:
    """
    Write tasks.csv and summary.yml into directory.

    Returns:
        The written file paths.
    """
    directory = Path(directory)
    today = today or date.today()

    tasks_path = export_tasks_csv(directory / "tasks.csv", service.list_tasks(), service.employees())

    summary_path = directory / "summary.yml"
    summary = {
        "dashboard": dashboard(service, today).model_dump(mode="json"),
        "weekly_hours": [row.model_dump(mode="json") for row in weekly_hours(service, today)],
        "top_performers": [row.model_dump(mode="json") for row in top_performers(service)],
    }
    atomic_write(DATA_YAML, summary_path, summary, create_dirs=True)
    log.info(f"Exported reports to {directory}")
    return [tasks_path, summary_path]
