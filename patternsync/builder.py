"""Builds pattern packages: pattern.json plus rendered example markup."""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import ensure_unique_basenames
from .logging import get_logger
from .models import Component, TransferData
from .postproc.html import HtmlPrettifier
from .rendering.compilers import TemplateCompiler, render_template
from .transfer import ComponentSource, TransferDataGenerator, derive_location
from .utils import gather_all, relative_posix

PATTERN_FILENAME = "pattern.json"
CORE_ASSETS_DIR = Path("core") / "assets"
CORE_ASSETS_PATTERN: Dict[str, Any] = {
    "name": "core-assets",
    "type": "atom",
    "stability": "stable",
}


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)


def serialize_pattern(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


class ExampleBuilder:
    """Renders component examples into the target directory."""

    def __init__(
        self,
        catalog: ComponentSource,
        generator: TransferDataGenerator,
        compiler: TemplateCompiler,
        *,
        root_directory: Path,
        target_dir: Path,
        css_files: Sequence[Path] = (),
        js_files: Sequence[Path] = (),
        prettifier: Optional[HtmlPrettifier] = None,
    ) -> None:
        self.catalog = catalog
        self.generator = generator
        self.compiler = compiler
        self.root_directory = Path(root_directory)
        self.target_dir = Path(target_dir)
        self.css_files = [Path(path) for path in css_files]
        self.js_files = [Path(path) for path in js_files]
        self.prettifier = prettifier or HtmlPrettifier()
        self.logger = get_logger("builder")

    async def build(self, component: Component) -> TransferData:
        """Write pattern.json for ``component``, then render each variation."""
        transfer_data = await self.generator.to_transfer_data(component)
        location = derive_location(component, self.root_directory)
        pattern_file = self.target_dir / location.relative_directory / PATTERN_FILENAME
        await asyncio.to_thread(_write_text, pattern_file, serialize_pattern(transfer_data.to_dict()))

        for key, variation in transfer_data.variations.items():
            source = component.directory / key
            destination = self.target_dir / variation.html[0]
            await self._render_example(component, source, destination)

        self.logger.debug("Built %s into %s", location.relative_directory, pattern_file.parent)
        return transfer_data

    async def build_all(self) -> List[TransferData]:
        """Build every catalog component concurrently plus the core assets package."""
        components = await self.catalog.get_components()
        self.logger.info("Building %d components into %s", len(components), self.target_dir)
        results = await gather_all(self.build(component) for component in components.values())
        await self.build_core_assets()
        return results

    async def build_core_assets(self) -> Optional[Dict[str, Any]]:
        """Stage shared CSS/JS into ``core/assets`` as a pseudo pattern package.

        The registry only ingests stylesheets and scripts that belong to a
        pattern, so they travel inside a synthetic ``core-assets`` package.
        Returns ``None`` when no shared files are configured.
        """
        if not self.css_files and not self.js_files:
            return None

        ensure_unique_basenames("css_files", self.css_files)
        ensure_unique_basenames("js_files", self.js_files)
        assets_dir = self.target_dir / CORE_ASSETS_DIR
        staged: Dict[str, List[str]] = {"css": [], "js": []}
        for kind, files in (("css", self.css_files), ("js", self.js_files)):
            for source in files:
                destination = assets_dir / kind / source.name
                await asyncio.to_thread(_copy_file, source, destination)
                staged[kind].append(relative_posix(destination, self.target_dir))

        payload: Dict[str, Any] = dict(CORE_ASSETS_PATTERN)
        payload["variations"] = {}
        payload["assets"] = staged
        await asyncio.to_thread(
            _write_text, assets_dir / PATTERN_FILENAME, serialize_pattern(payload)
        )
        self.logger.info(
            "Staged %d css and %d js core assets", len(staged["css"]), len(staged["js"])
        )
        return payload

    async def _render_example(self, component: Component, source: Path, destination: Path) -> None:
        template = await asyncio.to_thread(source.read_text, encoding="utf-8")
        markup = render_template(self.compiler, template, source, component.data)
        await asyncio.to_thread(_write_text, destination, self.prettifier.prettify(markup))


__all__ = ["CORE_ASSETS_DIR", "ExampleBuilder", "PATTERN_FILENAME", "serialize_pattern"]
