import csv, json, os, tempfile, yaml
from typing import Any, Dict, Iterable, List, Union
from pathlib import Path
from worktrack.recovery import FileOperationError, FatalError
from worktrack.logs import get_logger
from worktrack.models import Employee, Task

log = get_logger("io")

DATA_YAML = 0
DATA_JSON = 1
DATA_CSV = 2

TASK_CSV_HEADER = ["TaskId", "EmployeeId", "Employee", "TaskName", "HoursSpent",
                   "Status", "Date", "DueDate", "Comments"]

def _cleanup(temp_path):
    if temp_path is not None and os.path.exists(temp_path):
        try:
            os.unlink(temp_path)
            log.debug(f"Cleaned up temporary file: {temp_path}")
        except OSError as cleanup_error:
            log.warning(f"Could not clean up temp file {temp_path}: {cleanup_error}")

def _create_dirs(file_path : Path):
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, PermissionError) as e:
        error_msg = f"Cannot create directory {file_path.parent}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def _serialize(data_type : int, data : Any, stream):
    if data_type == DATA_YAML:
        yaml.safe_dump(data, stream, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)
    elif data_type == DATA_JSON:
        json.dump(data, stream, indent=2, ensure_ascii=False)
    elif data_type == DATA_CSV:
        csv.writer(stream).writerows(data)
    else:
        raise FatalError("Unsupported Data Format")

def atomic_write(data_type : int, file_path : Union[Path, str], data : Union[Dict[str, Any], List[List[Any]]], create_dirs : bool = False):
    """
    Serialize data to a file using an atomic replace.

    YAML and JSON take a mapping; CSV takes a list of rows (header first).
    """
    file_path = Path(file_path)
    temp_path = None

    try:
        if create_dirs:
            _create_dirs(file_path)

        # Temporary file in the same directory as the target for atomicity
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='', dir=file_path.parent,
                                         prefix=f".{file_path.name}.", suffix='.tmp', delete=False) as temp_file:
            temp_path = temp_file.name
            _serialize(data_type, data, temp_file)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_path, file_path)
        log.debug(f"Successfully saved file: {file_path}")
        return True

    except FatalError:
        _cleanup(temp_path)
        raise

    except (yaml.YAMLError, TypeError, ValueError, csv.Error) as e:
        _cleanup(temp_path)
        # Data cannot be serialized
        error_msg = (f"Data serialization failed for {file_path}. "
                    f"In-memory data may be corrupt or contain non-serializable types: {e}")
        log.critical(error_msg)
        raise FatalError(error_msg) from e

    except OSError as e:
        _cleanup(temp_path)
        error_msg = f"I/O error saving file {file_path}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def load_yaml_file(file_path : Union[Path, str]) -> Dict[str, Any]:
    """
    Load and parse a YAML mapping.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed document (an empty file yields an empty dict)

    Raises:
        FileOperationError: If the file is missing or unreadable
        FatalError: If the file is not valid YAML or not a mapping
    """
    file_path = Path(file_path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise FatalError(f"YAML syntax error in {file_path}: {e}") from e
    except OSError as e:
        raise FileOperationError(f"Failed to read file {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FatalError(f"File {file_path} contains invalid data structure")
    return data

def task_rows(tasks : Iterable[Task], employees : Iterable[Employee]) -> List[List[Any]]:
    """Header plus one row per task, owners resolved to names."""
    names = {e.id: e.name for e in employees}
    rows: List[List[Any]] = [list(TASK_CSV_HEADER)]
    for t in tasks:
        rows.append([
            t.id,
            t.employee_id,
            names.get(t.employee_id, ""),
            t.name,
            t.hours_spent,
            t.status.value,
            t.created_on.isoformat(),
            t.due_date.isoformat(),
            len(t.comments),
        ])
    return rows

def export_tasks_csv(file_path : Union[Path, str], tasks : Iterable[Task], employees : Iterable[Employee]) -> Path:
    file_path = Path(file_path)
    atomic_write(DATA_CSV, file_path, task_rows(tasks, employees), create_dirs=True)
    log.info(f"Exported tasks to {file_path}")
    return file_path
