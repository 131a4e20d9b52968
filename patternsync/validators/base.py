"""Validation errors and issue records for component metadata."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

EMPTY_CATALOG_MESSAGE = "Component validation failed - no components found"


@dataclass(frozen=True)
class SchemaError:
    """A single schema violation reported by the schema engine."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path} {self.message}"


class ComponentValidationError(RuntimeError):
    """Base class for failures raised while validating the component tree."""


class EmptyCatalogError(ComponentValidationError):
    """Raised when the component root contains no components at all."""

    def __init__(self) -> None:
        super().__init__(EMPTY_CATALOG_MESSAGE)


class SchemaViolationError(ComponentValidationError):
    """Raised when a component's metadata does not satisfy the input schema."""

    def __init__(self, schema_name: str, meta_file: Path, errors: Sequence[SchemaError]) -> None:
        self.schema_name = schema_name
        self.meta_file = meta_file
        self.errors: List[SchemaError] = list(errors)
        details = ", ".join(str(error) for error in self.errors)
        super().__init__(
            f'Schema "{schema_name}" can\'t be applied for "{meta_file}" because {details}'
        )


class UnmappedFolderError(ComponentValidationError):
    """Raised when a component's type folder has no entry in the mapping."""

    def __init__(self, folder_name: str) -> None:
        self.folder_name = folder_name
        super().__init__(f'Folder name "{folder_name}" is not in the mapping.')
