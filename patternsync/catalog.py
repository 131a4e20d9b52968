"""Component discovery for a pattern directory tree."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List

from .logging import get_logger
from .models import Component, Example
from .utils import relative_posix

META_FILENAME = "pattern.json"
EXAMPLES_DIRNAME = "_example"

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


class CatalogError(RuntimeError):
    """Raised when a component metadata file cannot be read."""


def _iter_meta_files(root: Path, meta_filename: str) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        # Underscore folders hold examples and partials, never nested components.
        dirnames[:] = sorted(
            name for name in dirnames if name not in _EXCLUDED_DIRS and not name.startswith("_")
        )
        current_dir = Path(dirpath)
        if current_dir != root and meta_filename in filenames:
            yield current_dir / meta_filename


def _read_meta(meta_file: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(meta_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CatalogError(f'Unable to read component metadata "{meta_file}": {exc}') from exc
    if not isinstance(payload, dict):
        raise CatalogError(f'Component metadata "{meta_file}" must contain a JSON object')
    return payload


def _is_example_file(path: Path) -> bool:
    return path.is_file() and not path.name.startswith(".") and path.name not in _EXCLUDED_FILES


class ComponentCatalog:
    """Enumerates components and their examples below a root directory.

    A component is any folder holding a ``pattern.json`` metadata file; its
    example templates live in the ``_example`` sub folder.
    """

    def __init__(self, root_directory: Path, *, meta_filename: str = META_FILENAME) -> None:
        self.root_directory = Path(root_directory).expanduser().resolve()
        self.meta_filename = meta_filename
        self.logger = get_logger("catalog")

    async def get_components(self) -> Dict[str, Component]:
        """Return every component keyed by its directory relative to the root."""
        return await asyncio.to_thread(self._scan)

    async def get_component(self, key: str) -> Component:
        """Return a single component by its relative directory, e.g. ``atoms/button``."""
        directory = (self.root_directory / key).resolve()
        meta_file = directory / self.meta_filename
        if not meta_file.is_file():
            raise CatalogError(f'Component "{key}" not found in "{self.root_directory}"')
        data = await asyncio.to_thread(_read_meta, meta_file)
        return Component(directory=directory, meta_file=meta_file, data=data)

    async def get_component_examples(self, directory: Path) -> List[Example]:
        """Return the example templates of the component at ``directory``."""
        return await asyncio.to_thread(self._list_examples, Path(directory))

    def _scan(self) -> Dict[str, Component]:
        if not self.root_directory.is_dir():
            raise CatalogError(f"Component root directory not found: {self.root_directory}")

        components: Dict[str, Component] = {}
        for meta_file in _iter_meta_files(self.root_directory, self.meta_filename):
            directory = meta_file.parent
            key = relative_posix(directory, self.root_directory)
            components[key] = Component(
                directory=directory,
                meta_file=meta_file,
                data=_read_meta(meta_file),
            )
        self.logger.debug("Catalog discovered %d components", len(components))
        return components

    def _list_examples(self, directory: Path) -> List[Example]:
        examples_dir = directory / EXAMPLES_DIRNAME
        if not examples_dir.is_dir():
            return []

        examples: List[Example] = []
        for path in sorted(examples_dir.iterdir()):
            if not _is_example_file(path):
                continue
            name = path.stem
            hidden = name.startswith("_")
            examples.append(Example(filepath=path, name=name, main=not hidden, hidden=hidden))
        return examples


__all__ = ["CatalogError", "ComponentCatalog", "EXAMPLES_DIRNAME", "META_FILENAME"]
