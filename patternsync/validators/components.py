"""Validation of discovered components against the schema and folder mapping."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from ..logging import get_logger
from ..models import Component
from ..transfer import ComponentSource, derive_location
from .base import EmptyCatalogError, SchemaViolationError, UnmappedFolderError
from .schema import INPUT_SCHEMA_NAME, SchemaValidator


class ComponentValidator:
    """Checks every catalog component; the first failure aborts validation."""

    def __init__(
        self,
        catalog: ComponentSource,
        *,
        root_directory: Path,
        mapping: Mapping[str, str],
        schema_validator: SchemaValidator | None = None,
        schema_name: str = INPUT_SCHEMA_NAME,
    ) -> None:
        self.catalog = catalog
        self.root_directory = Path(root_directory)
        self.mapping = mapping
        self.schema_validator = schema_validator or SchemaValidator()
        self.schema_name = schema_name
        self.logger = get_logger("validators.components")

    async def validate_all(self) -> bool:
        """Return True when every component is valid, raise on the first invalid one."""
        components = await self.catalog.get_components()
        if not components:
            raise EmptyCatalogError()

        for key, component in components.items():
            self.validate_component(component)
            self.logger.debug("Component %s is valid", key)
        self.logger.info("Validated %d components", len(components))
        return True

    def validate_component(self, component: Component) -> bool:
        """Validate a single component's metadata and type folder."""
        errors = self.schema_validator.validate(self.schema_name, component.data)
        if errors:
            raise SchemaViolationError(self.schema_name, component.meta_file, errors)

        location = derive_location(component, self.root_directory)
        if location.folder_type not in self.mapping:
            raise UnmappedFolderError(location.folder_type)
        return True


__all__ = ["ComponentValidator"]
