"""Validation package for component metadata."""

from .base import (
    EMPTY_CATALOG_MESSAGE,
    ComponentValidationError,
    EmptyCatalogError,
    SchemaError,
    SchemaViolationError,
    UnmappedFolderError,
)
from .components import ComponentValidator
from .schema import INPUT_SCHEMA_NAME, SchemaValidator, load_schema

__all__ = [
    "EMPTY_CATALOG_MESSAGE",
    "ComponentValidationError",
    "ComponentValidator",
    "EmptyCatalogError",
    "INPUT_SCHEMA_NAME",
    "SchemaError",
    "SchemaValidator",
    "SchemaViolationError",
    "UnmappedFolderError",
    "load_schema",
]
