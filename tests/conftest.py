"""Shared fixtures: a fresh repository per test with two employees and a manager."""

import logging

import pytest

from worktrack.auth import AuthGate
from worktrack.data import DataCore, TaskRepository
from worktrack.models import Employee, Role
from worktrack.service import TaskService


@pytest.fixture
def employee():
    return Employee(id=1, name="Asha", department="IT", email="asha@example.com",
                    role=Role.EMPLOYEE, password="123")


@pytest.fixture
def other_employee():
    return Employee(id=2, name="Ravi", department="HR", email="ravi@example.com",
                    role=Role.EMPLOYEE, password="456")


@pytest.fixture
def manager():
    return Employee(id=3, name="Meera", department="IT", email="Meera@Example.com",
                    role=Role.MANAGER, password="admin")


@pytest.fixture
def repository(employee, other_employee, manager):
    repo = TaskRepository()
    for e in (employee, other_employee, manager):
        repo.add_employee(e)
    return repo


@pytest.fixture
def service(repository):
    return TaskService(repository)


@pytest.fixture
def auth(repository):
    return AuthGate(repository)


@pytest.fixture(autouse=True)
def fresh_context():
    """Never leak the console's cached context or log handlers between tests."""
    DataCore.reset_context()
    yield
    DataCore.reset_context()
    logger = logging.getLogger("worktrack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
