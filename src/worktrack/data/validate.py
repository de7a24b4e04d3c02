import json
from typing import Any, Dict

from jsonschema import validate, ValidationError, SchemaError
from packaging import version

from worktrack.logs import get_logger
from worktrack.models import SeedData
from worktrack.recovery import SeedFileError, FatalError
from worktrack.version import APP_SCHEMA_VERSION

log = get_logger("data.validate")

def seed_schema() -> dict:
    """JSON schema for seed documents, generated from the SeedData model."""
    schema = SeedData.model_json_schema()
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    return schema

def _as_json_document(data: Dict[str, Any]) -> Dict[str, Any]:
    # YAML resolves dates to date objects; the schema expects ISO strings
    return json.loads(json.dumps(data, default=str))

def check_schema_version(schema_version: str, app_version: str = APP_SCHEMA_VERSION) -> bool:
    """
    Check that a seed document was written for this application's format.

    Raises:
        SeedFileError: If the version is unparsable or newer than app_version.
    """
    try:
        document_version = version.parse(str(schema_version))
    except version.InvalidVersion as e:
        raise SeedFileError(f"Invalid seed schema version: {schema_version}") from e

    if document_version > version.parse(app_version):
        raise SeedFileError(
            f"Seed schema version {schema_version} is newer than supported version {app_version}"
        )
    return True

def validate_seed_document(data: Dict[str, Any]) -> bool:
    """
    Validate a raw seed document against the seed schema.

    Args:
        data: The parsed (YAML or JSON) document.

    Returns:
        True if the document is valid.

    Raises:
        SeedFileError: If the document does not match the schema or its
            schema_version is not supported.
        FatalError: If the generated schema itself is invalid.
    """
    try:
        validate(instance=_as_json_document(data), schema=seed_schema())
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        log.error(f"Seed document FAILED validation at {location}: {e.message}")
        raise SeedFileError(f"Invalid seed document at {location}: {e.message}") from e
    except SchemaError as e:
        log.critical(f"Seed schema is invalid: {e.message}")
        raise FatalError(f"Seed schema is invalid: {e.message}") from e

    check_schema_version(data.get("schema_version", APP_SCHEMA_VERSION))
    log.info("Seed document is VALID")
    return True
