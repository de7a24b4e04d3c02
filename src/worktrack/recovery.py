class WorkTrackError(Exception):
    """Base exception for all WorkTrack errors."""
    pass

class RecoverableError(WorkTrackError):
    """An error local to one request; state is left unchanged."""
    pass

class FatalError(WorkTrackError):
    """An error that requires application termination or major intervention."""
    pass

class ValidationError(RecoverableError):
    """Malformed input - empty name or comment, unknown status, negative hours."""
    pass

class NotFoundError(RecoverableError):
    """Unknown task or employee, or a task not owned by the acting employee."""
    pass

class AuthError(RecoverableError):
    """Credentials did not match any employee."""
    pass

class PermissionDeniedError(RecoverableError):
    """The acting employee's role does not allow the operation."""
    pass

class FileOperationError(RecoverableError):
    """File operation failed but can be retried."""
    pass

class SeedFileError(RecoverableError):
    """Seed document is unreadable, malformed or from a newer schema."""
    pass
