"""
Data management submodule: the in-memory repository, seed data and file IO.
"""

from .repository import TaskRepository
from .io import atomic_write, export_tasks_csv, load_yaml_file, DATA_YAML, DATA_JSON, DATA_CSV
from .seed import default_seed, load_seed_file, seed_repository
from .validate import validate_seed_document
# Import the context last; it builds on the service layer
from .core import DataCore, TrackerContext

__all__ = [
    'TaskRepository',
    'atomic_write',
    'export_tasks_csv',
    'load_yaml_file',
    'DATA_YAML',
    'DATA_JSON',
    'DATA_CSV',
    'default_seed',
    'load_seed_file',
    'seed_repository',
    'validate_seed_document',
    'DataCore',
    'TrackerContext',
]
