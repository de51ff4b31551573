from functools import lru_cache
from typing import Any, Dict

from jsonschema import validate, ValidationError, SchemaError

from managerio.logs import get_logger
from managerio.models import PROJECT_LIST
from managerio.recovery import CorruptionError, FatalError

log = get_logger("data.validate")

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

@lru_cache(maxsize=1)
def projects_schema() -> Dict[str, Any]:
    """
    JSON Schema for the persisted blob: an array of projects keyed by their wire names.

    Generated from the pydantic `Project` model.
    """
    schema = PROJECT_LIST.json_schema(by_alias=True)
    schema["$schema"] = JSON_SCHEMA_DIALECT
    schema["title"] = "Projects"
    return schema

def validate_payload(data: Any) -> None:
    """
    Validate a decoded blob against the projects schema.

    Raises:
        CorruptionError: If the blob does not describe a list of projects.
        FatalError: If the generated schema itself is broken.
    """
    try:
        validate(instance=data, schema=projects_schema())
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        log.error(f"Stored projects FAILED validation at {location}: {e.message}")
        raise CorruptionError(f"Stored projects are invalid at {location}: {e.message}") from e
    except SchemaError as e:
        log.critical(f"Projects schema is invalid: {e.message}")
        raise FatalError(f"Projects schema is invalid: {e.message}") from e
    log.debug(f"Payload with {len(data)} projects is valid")
