"""Transfer data generation: component metadata to registry descriptors."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Protocol, Sequence

from .logging import get_logger
from .models import Component, ComponentLocation, Example, TransferData, Variation
from .utils import gather_all, relative_posix

NameProcessor = Callable[[str, str, str, str], str]
"""``(default_name, folder_name, folder_type, component_path) -> name``"""


class DuplicateVariationError(RuntimeError):
    """Raised when two examples of one component render to the same HTML file."""

    def __init__(self, first: str, second: str, html_path: str) -> None:
        self.html_path = html_path
        super().__init__(f'Examples "{first}" and "{second}" both render to "{html_path}"')


class ComponentSource(Protocol):
    """The catalog surface the pipeline depends on."""

    async def get_components(self) -> Dict[str, Component]:
        ...

    async def get_component_examples(self, directory: Path) -> Sequence[Example]:
        ...


def identity_name(name: str, folder_name: str, folder_type: str, component_path: str) -> str:
    return name


def derive_location(component: Component, root_directory: Path) -> ComponentLocation:
    """Resolve the folder name, type folder, and root-relative directory of ``component``."""
    return ComponentLocation(
        folder_name=component.folder_name,
        folder_type=component.type_folder_name,
        relative_directory=relative_posix(component.directory, root_directory),
    )


def example_qualifies(example: Example, *, legacy: bool = False) -> bool:
    """Whether an example is surfaced as a variation.

    Current pattern trees flag the surfaced examples with ``main``; legacy trees
    instead surface every example that is not ``hidden``.
    """
    if legacy:
        return not example.hidden
    return example.main


class TransferDataGenerator:
    """Maps raw component metadata and examples onto the registry descriptor."""

    def __init__(
        self,
        catalog: ComponentSource,
        *,
        root_directory: Path,
        mapping: Mapping[str, str],
        properties: Sequence[str],
        name_processor: Optional[NameProcessor] = None,
        legacy_examples: bool = False,
    ) -> None:
        self.catalog = catalog
        self.root_directory = Path(root_directory)
        self.mapping = dict(mapping)
        self.properties = list(properties)
        self.name_processor = name_processor or identity_name
        self.legacy_examples = legacy_examples
        self.logger = get_logger("transfer")

    async def to_transfer_data(self, component: Component) -> TransferData:
        """Build the transfer data for a single component."""
        location = derive_location(component, self.root_directory)

        # Only schema-declared fields are forwarded to the registry.
        properties = {
            key: component.data[key] for key in self.properties if key in component.data
        }
        default_name = properties.pop("name", None) or location.folder_name
        name = self.name_processor(
            default_name,
            location.folder_name,
            location.folder_type,
            str(component.directory),
        )
        component_type = properties.pop("type", None) or self.mapping.get(location.folder_type)

        examples = await self.catalog.get_component_examples(component.directory)
        variations: Dict[str, Variation] = {}
        destinations: Dict[str, str] = {}
        for example in examples:
            if not example_qualifies(example, legacy=self.legacy_examples):
                continue
            key = relative_posix(example.filepath, component.directory)
            variation = self._build_variation(name, location, example)
            html_path = variation.html[0]
            if html_path in destinations:
                raise DuplicateVariationError(destinations[html_path], key, html_path)
            destinations[html_path] = key
            variations[key] = variation

        self.logger.debug(
            "Generated transfer data for %s with %d variations",
            location.relative_directory,
            len(variations),
        )
        return TransferData(
            name=name,
            type=component_type,
            variations=variations,
            properties=properties,
        )

    async def generate_all(self) -> Dict[str, TransferData]:
        """Build transfer data for every component in the catalog."""
        components = await self.catalog.get_components()
        keys = list(components)
        results = await gather_all(self.to_transfer_data(components[key]) for key in keys)
        return dict(zip(keys, results))

    @staticmethod
    def _build_variation(name: str, location: ComponentLocation, example: Example) -> Variation:
        html_path = f"{location.relative_directory}/{example.name}.html"
        return Variation(name=f"{name} -- {example.name}", html=[html_path])


__all__ = [
    "ComponentSource",
    "DuplicateVariationError",
    "NameProcessor",
    "TransferDataGenerator",
    "derive_location",
    "example_qualifies",
    "identity_name",
]
