"""Pipeline orchestration for validate, build, sync, and clean flows."""

from __future__ import annotations

import asyncio
import shutil
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .builder import ExampleBuilder
from .catalog import ComponentCatalog
from .config import (
    ConfigurationError,
    DeployerConfig,
    RegistryOptions,
    load_config,
    resolve_registry_options,
    validate_config,
)
from .logging import configure_logging, get_logger
from .models import Component, DeployResult, TransferData
from .postproc.html import HtmlPrettifier
from .registry.client import HttpRegistryClient, RegistryClient, require_sync_options
from .rendering.compilers import TemplateCompiler
from .transfer import ComponentSource, NameProcessor, TransferDataGenerator
from .utils import gather_all
from .validators import ComponentValidator, SchemaValidator
from .validators.schema import INPUT_SCHEMA_NAME

PATTERN_GLOBS = ("**/pattern.json",)


class DeployStage(str, Enum):
    """Lifecycle of a single deploy run."""

    IDLE = "idle"
    VALIDATING = "validating"
    BUILDING = "building"
    SYNCING = "syncing"
    DONE = "done"
    FAILED = "failed"


class Deployer:
    """Coordinates validation, build, and registry sync of a component tree."""

    def __init__(
        self,
        config: DeployerConfig,
        *,
        compiler: TemplateCompiler,
        name_processor: Optional[NameProcessor] = None,
        catalog: Optional[ComponentSource] = None,
        schema_validator: Optional[SchemaValidator] = None,
        registry_client: Optional[RegistryClient] = None,
        prettifier: Optional[HtmlPrettifier] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        validate_config(config)
        if compiler is None or not callable(compiler):
            raise ConfigurationError("Please specify a template compiler e.g. compiler=JinjaCompiler()")
        if name_processor is not None and not callable(name_processor):
            raise ConfigurationError("name_processor must be callable")

        self.config = config
        self.root_directory = Path(config.root_directory).expanduser().resolve()
        self.target_dir = Path(config.target_dir).expanduser().resolve()
        self.registry_options = resolve_registry_options(config.registry, environ)
        self.logger = get_logger("orchestrator")
        self.stage = DeployStage.IDLE

        self.catalog: ComponentSource = catalog or ComponentCatalog(self.root_directory)
        self.schema_validator = schema_validator or SchemaValidator()
        self.registry_client: RegistryClient = registry_client or HttpRegistryClient()
        self.validator = ComponentValidator(
            self.catalog,
            root_directory=self.root_directory,
            mapping=config.mapping,
            schema_validator=self.schema_validator,
        )
        self.generator = TransferDataGenerator(
            self.catalog,
            root_directory=self.root_directory,
            mapping=config.mapping,
            properties=self.schema_validator.properties(INPUT_SCHEMA_NAME),
            name_processor=name_processor,
            legacy_examples=config.legacy_examples,
        )
        self.builder = ExampleBuilder(
            self.catalog,
            self.generator,
            compiler,
            root_directory=self.root_directory,
            target_dir=self.target_dir,
            css_files=config.css_files,
            js_files=config.js_files,
            prettifier=prettifier,
        )

    @classmethod
    def from_config_file(
        cls,
        path: Path,
        *,
        compiler: TemplateCompiler,
        **kwargs: Any,
    ) -> "Deployer":
        """Create a deployer from a ``.patternsync.yml`` file.

        The file's ``logging`` section (``verbose``, ``file``) configures the
        package logger before the deployer is built.
        """
        config = load_config(Path(path))
        configure_logging(verbose=config.verbose, log_file=config.log_file)
        return cls(config, compiler=compiler, **kwargs)

    async def validate_components(self) -> bool:
        """Validate all components; raises on the first invalid component."""
        return await self.validator.validate_all()

    async def generate_transfer_data(self, component: Component) -> TransferData:
        """Return the transfer data the builder would write for ``component``."""
        return await self.generator.to_transfer_data(component)

    async def build_components(self) -> List[TransferData]:
        """Build every component into the target directory."""
        return await self.builder.build_all()

    async def sync_components(self) -> DeployResult:
        """Sync assets and built patterns to the registry concurrently."""
        options = require_sync_options(self.registry_options)
        assets, components = await gather_all(
            [
                self._sync_assets(options),
                self.registry_client.sync_patterns(options, list(PATTERN_GLOBS), cwd=self.target_dir),
            ]
        )
        return DeployResult(assets=assets, components=components)

    async def deploy(self) -> DeployResult:
        """Validate, build, and sync; any failing stage aborts the run."""
        self.logger.info("Starting deploy of %s", self.root_directory)
        try:
            self._enter(DeployStage.VALIDATING)
            await self.validate_components()
            self._enter(DeployStage.BUILDING)
            await self.build_components()
            self._enter(DeployStage.SYNCING)
            result = await self.sync_components()
        except Exception as exc:
            self.logger.error("Deploy failed while %s: %s", self.stage.value, exc)
            self.stage = DeployStage.FAILED
            raise
        self._enter(DeployStage.DONE)
        self.logger.info(
            "Deploy finished: %d components, %d assets",
            len(result.components),
            len(result.assets),
        )
        return result

    async def clean(self) -> None:
        """Remove the target directory; succeeds when it is already gone."""
        await asyncio.to_thread(self._remove_target_dir)

    # ------------------------------------------------------------------
    # Helpers

    def _enter(self, stage: DeployStage) -> None:
        self.logger.debug("Deploy stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    async def _sync_assets(self, options: RegistryOptions) -> List[Dict[str, Any]]:
        if self.config.asset_folder is None:
            return []
        return await self.registry_client.sync_assets(
            options, list(self.config.asset_filter), cwd=Path(self.config.asset_folder)
        )

    def _remove_target_dir(self) -> None:
        if not self.target_dir.exists():
            return
        shutil.rmtree(self.target_dir)
        self.logger.info("Removed %s", self.target_dir)


__all__ = ["DeployStage", "Deployer", "PATTERN_GLOBS"]
