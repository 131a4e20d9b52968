"""JSON schema registry used to validate component metadata."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError as InvalidSchemaError

from .base import SchemaError

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"
INPUT_SCHEMA_FILE = SCHEMAS_DIR / "pattern-input.schema.json"
INPUT_SCHEMA_NAME = "patternsync-input-schema"


def load_schema(path: Path) -> Dict[str, Any]:
    """Read a JSON schema document from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


class SchemaValidator:
    """Validates data against named JSON schemas."""

    def __init__(self, schemas: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Draft7Validator] = {}
        if schemas is None:
            schemas = {INPUT_SCHEMA_NAME: load_schema(INPUT_SCHEMA_FILE)}
        for name, schema in schemas.items():
            self.register(name, schema)

    def register(self, name: str, schema: Mapping[str, Any]) -> None:
        """Add a schema under ``name``, replacing any previous registration."""
        document = dict(schema)
        try:
            Draft7Validator.check_schema(document)
        except InvalidSchemaError as exc:
            raise ValueError(f'Schema "{name}" is not a valid JSON schema: {exc.message}') from exc
        self._schemas[name] = document
        self._validators[name] = Draft7Validator(document)

    def validate(self, schema_name: str, data: Any) -> List[SchemaError]:
        """Return every violation of ``schema_name`` found in ``data``."""
        validator = self._get_validator(schema_name)
        errors = sorted(
            validator.iter_errors(data),
            key=lambda error: [str(part) for part in error.absolute_path],
        )
        return [
            SchemaError(path=_format_path(error.absolute_path), message=error.message)
            for error in errors
        ]

    def properties(self, schema_name: str) -> List[str]:
        """Declared top-level property names, in schema order."""
        self._get_validator(schema_name)
        properties = self._schemas[schema_name].get("properties", {})
        return list(properties.keys()) if isinstance(properties, dict) else []

    def _get_validator(self, schema_name: str) -> Draft7Validator:
        try:
            return self._validators[schema_name]
        except KeyError:
            raise KeyError(f'Schema "{schema_name}" is not registered') from None


def _format_path(parts: Iterable[Any]) -> str:
    rendered = "data"
    for part in parts:
        rendered += f"[{part}]" if isinstance(part, int) else f".{part}"
    return rendered


__all__ = ["INPUT_SCHEMA_NAME", "SchemaValidator", "load_schema"]
