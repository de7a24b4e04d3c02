"""
DataCore - process-wide configuration and the tracker context for the console.

Library code receives its repository and service explicitly; DataCore only
caches one TrackerContext so the console commands share the same state.
"""
import os
from pathlib import Path
from typing import Optional, Union

from worktrack.auth import AuthGate
from worktrack.logs import get_logger
from worktrack.models import SeedData
from worktrack.service import TaskService
from .repository import TaskRepository
from .seed import default_seed, load_seed_file, seed_repository

log = get_logger("data")

class TrackerContext:
    """Repository, service and authentication gate for one tracker instance."""

    def __init__(self, repository: Optional[TaskRepository] = None, seed: Optional[SeedData] = None):
        self.repository = repository or TaskRepository()
        if seed is not None:
            seed_repository(self.repository, seed)
        self.service = TaskService(self.repository)
        self.auth = AuthGate(self.repository)

class DataCore:
    SEED_FILE_ENV = "WORKTRACK_SEED_FILE"
    EXPORT_DIR_ENV = "WORKTRACK_EXPORT_DIR"
    DEFAULT_EXPORT_DIR = Path("exports")
    context : Optional[TrackerContext] = None

    @classmethod
    def seed_file(cls) -> Optional[Path]:
        value = os.getenv(cls.SEED_FILE_ENV, '')
        return Path(value) if value else None

    @classmethod
    def export_dir(cls) -> Path:
        value = os.getenv(cls.EXPORT_DIR_ENV, '')
        return Path(value) if value else cls.DEFAULT_EXPORT_DIR

    @classmethod
    def load_seed(cls, seed_file: Optional[Union[Path, str]] = None) -> SeedData:
        """Seed from the given file, else WORKTRACK_SEED_FILE, else the built-in demo data."""
        seed_file = seed_file or cls.seed_file()
        if seed_file:
            return load_seed_file(seed_file)
        return default_seed()

    @classmethod
    def get_context(cls, seed_file: Optional[Union[Path, str]] = None) -> TrackerContext:
        if cls.context is None:
            cls.context = TrackerContext(seed=cls.load_seed(seed_file))
            log.info(f"Tracker ready: {len(cls.context.repository.employees)} employees, "
                     f"{len(cls.context.repository.tasks)} tasks")
        return cls.context

    @classmethod
    def reset_context(cls):
        cls.context = None
