"""
Validation of the tracker database document.

Two layers run on every read and write of the JSON file:

- the JSON Schema in ``schemas/state.schema.json`` checks the shape
  (required keys, numeric map keys, status tags);
- ``check_state_ids`` checks the shared id namespace, which a schema
  cannot express: ``last_item_id`` must cover every id in use, and an
  epic and a story may never share an id.

A document that passes both can be loaded and mutated without the id
counter handing out an id that is already taken.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema

STATE_SCHEMA = "state"


class ValidationError(Exception):
    """Database document failed validation."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


_schema_cache: dict[str, dict] = {}


def _load_schema(schema_name: str) -> dict:
    if schema_name not in _schema_cache:
        schema_path = Path(__file__).parent / "schemas" / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text(encoding="utf-8"))
    return _schema_cache[schema_name]


def validate(data: Any, schema_name: str) -> None:
    """
    Validate data against named schema.

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "(root)"
        raise ValidationError(schema_name, e.message, path) from None


def check_state_ids(data: dict) -> None:
    """Check the id namespace of a schema-valid state document.

    Raises:
        ValidationError: counter below an existing id, or an id used by
            both an epic and a story
    """
    epic_ids = {int(k) for k in data["epics"]}
    story_ids = {int(k) for k in data["stories"]}

    shared = sorted(epic_ids & story_ids)
    if shared:
        raise ValidationError(
            STATE_SCHEMA,
            f"id {shared[0]} is used by both an epic and a story",
            f"stories.{shared[0]}",
        )

    highest = max(epic_ids | story_ids, default=0)
    if data["last_item_id"] < highest:
        raise ValidationError(
            STATE_SCHEMA,
            f"last_item_id {data['last_item_id']} is below existing id {highest}",
            "last_item_id",
        )


def validate_state(data: Any) -> None:
    """Schema check followed by the id namespace check."""
    validate(data, STATE_SCHEMA)
    check_state_ids(data)


def validate_state_before_write(data: dict, filepath: Path) -> None:
    """
    Validate a state document before it replaces filepath, so the tracker
    never writes a file it would refuse to load.

    Raises:
        ValidationError: If data is not a valid state document
    """
    try:
        validate_state(data)
    except ValidationError as e:
        raise ValidationError(
            STATE_SCHEMA,
            f"Refusing to write invalid data to {filepath}: {e}"
        ) from None
