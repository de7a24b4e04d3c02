"""
Seed data - the employees and tasks a fresh tracker starts with.
"""
from datetime import date
from pathlib import Path
from typing import Optional, Union

from worktrack.models import Employee, Role, SeedData, Task, TaskStatus
from worktrack.recovery import FatalError, SeedFileError
from worktrack.logs import get_logger
from .io import load_yaml_file
from .repository import TaskRepository
from .validate import validate_seed_document

log = get_logger("data.seed")

def default_seed() -> SeedData:
    """The built-in demo organisation: two employees and one manager."""
    return SeedData(
        employees=[
            Employee(id=1, name="Shiv", department="IT", email="Shiv@gbsoft.com",
                     role=Role.EMPLOYEE, password="123"),
            Employee(id=2, name="Bhagwat", department="HR", email="bhagwat@gbsoft.com",
                     role=Role.EMPLOYEE, password="123"),
            Employee(id=3, name="Ganesh Bhutekar", department="IT", email="ganesh@gbsoft.com",
                     role=Role.MANAGER, password="admin"),
        ],
        tasks=[
            SeedData.Task(employee_id=1, name="Fix Bug #101", hours_spent=5,
                          status=TaskStatus.COMPLETED),
            SeedData.Task(employee_id=1, name="Develop Feature X", hours_spent=6,
                          status=TaskStatus.IN_PROGRESS, created_days_ago=2, due_in_days=1),
            SeedData.Task(employee_id=2, name="Recruitment Drive", hours_spent=4,
                          status=TaskStatus.PENDING),
        ]
    )

def load_seed_file(file_path: Union[Path, str]) -> SeedData:
    """
    Load a YAML seed file.

    The raw document is schema-validated before it is turned into models, so
    errors point at the offending location in the file.

    Raises:
        FileOperationError: If the file cannot be read.
        SeedFileError: If the file is not valid YAML or not a valid seed.
    """
    file_path = Path(file_path)
    try:
        data = load_yaml_file(file_path)
    except FatalError as e:
        raise SeedFileError(str(e)) from e

    validate_seed_document(data)
    seed = SeedData.model_validate(data)
    log.info(f"Loaded seed {file_path}: {len(seed.employees)} employees, {len(seed.tasks)} tasks")
    return seed

def seed_repository(repository: TaskRepository, seed: SeedData, today: Optional[date] = None) -> TaskRepository:
    """
    Register the seed's employees, then create its tasks through add_task.

    Raises:
        SeedFileError: If a task references an employee that is not in the seed
            or the repository.
    """
    today = today or date.today()
    known = {e.id for e in repository.employees} | {e.id for e in seed.employees}
    for entry in seed.tasks:
        if entry.employee_id not in known:
            raise SeedFileError(f"Seed task '{entry.name}' references unknown employee {entry.employee_id}")

    for employee in seed.employees:
        repository.add_employee(employee)

    for entry in seed.tasks:
        task = Task(
            employee_id=entry.employee_id,
            name=entry.name,
            hours_spent=entry.hours_spent,
            created_on=entry.resolve_created(today),
            due_date=entry.resolve_due(today),
            status=entry.status,
        )
        repository.add_task(task, entry.created_by)

    log.debug(f"Seeded repository with {len(seed.employees)} employees and {len(seed.tasks)} tasks")
    return repository
