"""
TaskService - role-scoped task operations over a TaskRepository.

Every mutating operation takes the acting employee and only touches tasks that
employee owns. Input is validated in full before anything is changed, so a
rejected request leaves the repository exactly as it was.
"""
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

import pydantic

from .data.repository import TaskRepository
from .logs import get_logger
from .models import Comment, Employee, StatusChange, Task, TaskFilter, TaskPatch, TaskStatus
from .recovery import NotFoundError, PermissionDeniedError, ValidationError

log = get_logger("service")

def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value.strip()

def _require_hours(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"Hours must be a number, got {value!r}")
    try:
        hours = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Hours must be a number, got {value!r}") from e
    if not math.isfinite(hours):
        raise ValidationError(f"Hours must be a finite number, got {value!r}")
    if hours < 0:
        raise ValidationError(f"Hours cannot be negative, got {hours:g}")
    return hours

def _require_status(value: Any) -> TaskStatus:
    try:
        return TaskStatus.parse(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e

def _require_date(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as e:
            raise ValidationError(f"{field} must be a date (yyyy-mm-dd), got {value!r}") from e
    raise ValidationError(f"{field} must be a date (yyyy-mm-dd), got {value!r}")


class TaskService:
    """Task operations for authenticated employees and managers."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    # ---- helpers ----

    def _owned_task(self, actor: Employee, task_id: int) -> Task:
        """The actor's task with this id; a task owned by someone else is reported as missing."""
        task = self.repository.find_task(task_id)
        if task is None or task.employee_id != actor.id:
            log.info(f"Task {task_id} not found for employee {actor.id}")
            raise NotFoundError(f"Task {task_id} not found")
        return task

    # ---- mutations ----

    def create_task(self, actor: Employee, name: str, hours: Union[float, str],
                    status: Union[TaskStatus, str, int], due_date: Union[date, str]) -> Task:
        """
        Log a new task owned by the actor.

        Raises:
            ValidationError: Empty name, bad hours, unknown status or bad due date.
        """
        task = Task(
            employee_id=actor.id,
            name=_require_text(name, "Task name"),
            hours_spent=_require_hours(hours),
            status=_require_status(status),
            due_date=_require_date(due_date, "Due date"),
            created_on=date.today(),
        )
        self.repository.add_task(task, actor.name)
        log.info(f"{actor.name} created task {task.id} '{task.name}'")
        return task

    def update_task(self, actor: Employee, task_id: int, patch: Union[TaskPatch, Dict[str, Any]]) -> Task:
        """
        Overwrite the supplied fields of one of the actor's tasks.

        A status change goes through change_status so it is recorded in the
        task's history. Nothing is applied unless every supplied field is valid.

        Raises:
            NotFoundError: The task does not exist or is not the actor's.
            ValidationError: A supplied field is invalid or unknown.
        """
        if not isinstance(patch, TaskPatch):
            try:
                patch = TaskPatch.model_validate(patch)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid task update: {e}") from e
        task = self._owned_task(actor, task_id)

        name = _require_text(patch.name, "Task name") if patch.name is not None else None
        hours = _require_hours(patch.hours_spent) if patch.hours_spent is not None else None
        status = _require_status(patch.status) if patch.status is not None else None
        due_date = _require_date(patch.due_date, "Due date") if patch.due_date is not None else None

        if name is not None:
            task.name = name
        if hours is not None:
            task.hours_spent = hours
        if status is not None:
            self.change_status(task, status, actor.name)
        if due_date is not None:
            task.due_date = due_date

        log.info(f"{actor.name} updated task {task.id}")
        return task

    def delete_task(self, actor: Employee, task_id: int) -> Task:
        """Remove one of the actor's tasks and return it."""
        task = self._owned_task(actor, task_id)
        self.repository.remove_task(task.id)
        log.info(f"{actor.name} deleted task {task.id}")
        return task

    def add_comment(self, actor: Employee, task_id: int, text: str) -> Comment:
        """
        Append a comment to one of the actor's tasks.

        Raises:
            ValidationError: The comment text is empty.
            NotFoundError: The task does not exist or is not the actor's.
        """
        text = _require_text(text, "Comment")
        task = self._owned_task(actor, task_id)
        comment = Comment(
            id=self.repository.next_comment_id(),
            task_id=task.id,
            text=text,
            added_by=actor.name,
            added_at=datetime.now(),
        )
        task.comments.append(comment)
        log.info(f"{actor.name} commented on task {task.id}")
        return comment

    def change_status(self, task: Task, new_status: Union[TaskStatus, str, int], actor_name: str) -> Task:
        """
        Move a task to a new status, recording the transition.

        Setting the status a task already has is a no-op: the task and its
        history are returned unchanged. This is the only place a task's status
        is written after creation.
        """
        new_status = _require_status(new_status)
        if task.status == new_status:
            return task

        task.status_history.append(StatusChange(
            old_status=task.status,
            new_status=new_status,
            changed_at=datetime.now(),
            changed_by=actor_name,
        ))
        log.info(f"Task {task.id} status {task.status.value} -> {new_status.value} by {actor_name}")
        task.status = new_status
        return task

    def set_status(self, actor: Employee, task_id: int, new_status: Union[TaskStatus, str, int]) -> Task:
        """change_status for one of the actor's own tasks, looked up by id."""
        new_status = _require_status(new_status)
        task = self._owned_task(actor, task_id)
        return self.change_status(task, new_status, actor.name)

    def assign_task(self, manager: Employee, employee_id: int, name: str,
                    hours: Union[float, str], due_date: Union[date, str]) -> Task:
        """
        Create a Pending task owned by another employee.

        Raises:
            PermissionDeniedError: The actor is not a manager.
            NotFoundError: No employee has employee_id.
            ValidationError: Empty name, bad hours or bad due date.
        """
        if not manager.is_manager:
            log.info(f"{manager.name} tried to assign a task without the manager role")
            raise PermissionDeniedError("Only managers can assign tasks")
        if self.repository.find_employee(employee_id) is None:
            raise NotFoundError(f"Employee {employee_id} not found")

        task = Task(
            employee_id=employee_id,
            name=_require_text(name, "Task name"),
            hours_spent=_require_hours(hours),
            status=TaskStatus.PENDING,
            due_date=_require_date(due_date, "Due date"),
            created_on=date.today(),
        )
        self.repository.add_task(task, manager.name)
        log.info(f"{manager.name} assigned task {task.id} '{task.name}' to employee {employee_id}")
        return task

    # ---- queries ----

    def employees(self) -> List[Employee]:
        return list(self.repository.employees)

    def find_employee(self, employee_id: int) -> Optional[Employee]:
        return self.repository.find_employee(employee_id)

    def find_task(self, task_id: int) -> Optional[Task]:
        return self.repository.find_task(task_id)

    def list_tasks(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        """All tasks matching the filter, ordered by id."""
        tasks = sorted(self.repository.tasks, key=lambda t: t.id)
        if task_filter is None:
            return tasks
        return [t for t in tasks if task_filter.matches(t)]

    def tasks_owned_by(self, employee_id: int) -> List[Task]:
        return sorted(self.repository.tasks_for_employee(employee_id), key=lambda t: t.id)

    def overdue_tasks(self, today: Optional[date] = None) -> List[Task]:
        """Tasks due strictly before today that are not Completed, ordered by id."""
        today = today or date.today()
        return [t for t in self.list_tasks() if t.is_overdue(today)]
