"""
TaskRepository - in-memory store of employees and tasks.

One repository is built per process (or per test) and handed to the service
and authentication layers. It owns the identifier counters and is the only
way a task enters the system.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from worktrack.models import Employee, Task, StatusChange
from worktrack.logs import get_logger

log = get_logger("data.repository")

class TaskRepository:
    """Employee and task collections plus their identifier counters."""

    def __init__(self):
        self._employees: List[Employee] = []
        self._tasks: List[Task] = []
        self._next_task_id = 1
        self._next_comment_id = 1

    @property
    def employees(self) -> Tuple[Employee, ...]:
        return tuple(self._employees)

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    def add_employee(self, employee: Employee) -> Employee:
        self._employees.append(employee)
        log.debug(f"Employee added id={employee.id} role={employee.role.value}")
        return employee

    def next_task_id(self) -> int:
        task_id = self._next_task_id
        self._next_task_id += 1
        return task_id

    def next_comment_id(self) -> int:
        comment_id = self._next_comment_id
        self._next_comment_id += 1
        return comment_id

    def add_task(self, task: Task, created_by: str) -> Task:
        """
        Store a new task.

        Assigns a fresh identifier and records the initial status-history entry
        (old and new status both equal to the task's status) before inserting.

        Args:
            task: The task to store; any identifier it carries is replaced.
            created_by: Name recorded as the actor of the initial entry.

        Returns:
            The stored task.
        """
        task.id = self.next_task_id()
        task.status_history.append(StatusChange(
            old_status=task.status,
            new_status=task.status,
            changed_at=datetime.now(),
            changed_by=created_by
        ))
        self._tasks.append(task)
        log.debug(f"Task added id={task.id} owner={task.employee_id} status={task.status.value} by={created_by}")
        return task

    def remove_task(self, task_id: int) -> bool:
        """Delete a task with its comments and history. Returns False if it was absent."""
        task = self.find_task(task_id)
        if task is None:
            return False
        self._tasks.remove(task)
        log.debug(f"Task removed id={task_id}")
        return True

    def find_task(self, task_id: int) -> Optional[Task]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def tasks_for_employee(self, employee_id: int) -> List[Task]:
        return [t for t in self._tasks if t.employee_id == employee_id]

    def find_employee(self, employee_id: int) -> Optional[Employee]:
        return next((e for e in self._employees if e.id == employee_id), None)

    def find_employee_by_credentials(self, email: str, secret: str) -> Optional[Employee]:
        """Find an employee by case-insensitive email and exact secret."""
        if not email:
            return None
        key = email.strip().casefold()
        return next(
            (e for e in self._employees if e.email.casefold() == key and e.password == secret),
            None
        )
