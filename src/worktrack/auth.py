from datetime import datetime

from pydantic import BaseModel, Field

from .data.repository import TaskRepository
from .logs import get_logger
from .models import Employee
from .recovery import AuthError

log = get_logger("auth")

class Session(BaseModel):
    """The logged-in employee for one console session."""

    actor: Employee = Field(description="The authenticated employee")
    started_at: datetime = Field(default_factory=datetime.now, description="When the login succeeded")

    @property
    def is_manager(self) -> bool:
        return self.actor.is_manager


class AuthGate:
    """
    Checks credentials against the repository's employees.

    Secrets are compared in cleartext; this is a demo tracker, not a security
    boundary. Unknown emails and wrong secrets fail the same way.
    """

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def authenticate(self, email: str, secret: str) -> Employee:
        user = self.repository.find_employee_by_credentials(email, secret)
        if user is None:
            log.info("Login rejected")
            raise AuthError("Invalid credentials")
        log.info(f"Login accepted for employee {user.id} ({user.role.value})")
        return user

    def login(self, email: str, secret: str) -> Session:
        return Session(actor=self.authenticate(email, secret))
