"""Configuration loading for patternsync (.patternsync.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".patternsync.yml"
ACCESS_TOKEN_ENV = "PATTERNSYNC_ACCESS_TOKEN"


class ConfigurationError(RuntimeError):
    """Raised when deployer settings are missing or malformed."""


@dataclass
class RegistryOptions:
    """Connection settings for the pattern-library registry."""

    access_token: Optional[str] = None
    project: Optional[str] = None
    base_url: Optional[str] = None
    dry_run: bool = False
    request_timeout: Optional[float] = None


@dataclass
class DeployerConfig:
    """Represents the settings of one component tree deployment."""

    root_directory: Path
    target_dir: Path
    mapping: Dict[str, str] = field(default_factory=dict)
    css_files: List[Path] = field(default_factory=list)
    js_files: List[Path] = field(default_factory=list)
    asset_folder: Optional[Path] = None
    asset_filter: List[str] = field(default_factory=list)
    legacy_examples: bool = False
    registry: Optional[RegistryOptions] = None
    verbose: bool = False
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> DeployerConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        raise ConfigurationError(f"Configuration file not found: {config_file}")
    base = config_file.parent

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    root_directory = _as_path(data.get("root_directory"), base)
    if root_directory is None:
        raise ConfigurationError(
            "Please specify your component root_directory e.g. root_directory: src/components"
        )
    target_dir = _as_path(data.get("target_dir"), base)
    if target_dir is None:
        raise ConfigurationError("Please specify a target_dir e.g. target_dir: dist/patterns")

    mapping_data = data.get("mapping")
    if not isinstance(mapping_data, dict):
        raise ConfigurationError(
            "Please specify the folder name component type mapping e.g. mapping: {atoms: atom}"
        )
    mapping = {str(key): str(value) for key, value in mapping_data.items()}

    registry_data = _as_dict(data.get("registry"))
    registry = None
    if registry_data:
        registry = RegistryOptions(
            access_token=_as_str(registry_data.get("access_token")),
            project=_as_str(registry_data.get("project")),
            base_url=_as_str(registry_data.get("base_url")),
            dry_run=_as_bool(registry_data.get("dry_run")) or False,
            request_timeout=_as_float(registry_data.get("request_timeout")),
        )

    logging_data = _as_dict(data.get("logging"))

    return DeployerConfig(
        root_directory=root_directory,
        target_dir=target_dir,
        mapping=mapping,
        css_files=[(base / item).resolve() for item in _as_str_list(data.get("css_files"))],
        js_files=[(base / item).resolve() for item in _as_str_list(data.get("js_files"))],
        asset_folder=_as_path(data.get("asset_folder"), base),
        asset_filter=_as_str_list(data.get("asset_filter")),
        legacy_examples=_as_bool(data.get("legacy_examples")) or False,
        registry=registry,
        verbose=_as_bool(logging_data.get("verbose")) or False,
        log_file=_as_path(logging_data.get("file"), base),
    )


def validate_config(config: DeployerConfig) -> None:
    """Fail fast on settings the pipeline cannot run with."""
    root = config.root_directory
    if not root or not Path(root).is_dir():
        raise ConfigurationError(
            f"Please specify your component root_directory folder e.g. root_directory='/a/path' (got {root!r})"
        )
    if not config.target_dir or str(config.target_dir).strip() in {"", "."}:
        raise ConfigurationError(
            "Please specify your target_dir folder e.g. target_dir='/a/dist/path'"
        )
    root_path = Path(root).expanduser().resolve()
    target_path = Path(config.target_dir).expanduser().resolve()
    if target_path == root_path:
        raise ConfigurationError(f"target_dir must differ from root_directory ({root_path})")
    if target_path.is_relative_to(root_path) or root_path.is_relative_to(target_path):
        raise ConfigurationError(
            f"target_dir {target_path} must not be inside or contain root_directory {root_path}"
        )
    if not isinstance(config.mapping, Mapping) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in config.mapping.items()
    ):
        raise ConfigurationError(
            "Please specify the folder name component type mapping e.g. mapping={'atoms': 'atom'}"
        )
    for label, files in (("css_files", config.css_files), ("js_files", config.js_files)):
        if isinstance(files, (str, bytes)) or not isinstance(files, Sequence):
            raise ConfigurationError(f"{label} must be a list of file paths")
        ensure_unique_basenames(label, files)
    if config.asset_folder is not None and not config.asset_filter:
        raise ConfigurationError("asset_filter is required when asset_folder is set e.g. ['**/*.css']")


def ensure_unique_basenames(label: str, files: Sequence[Path]) -> None:
    """Raise when two shared files would be staged under the same file name."""
    seen: Dict[str, Path] = {}
    for item in files:
        path = Path(item)
        if path.name in seen:
            raise ConfigurationError(
                f'{label} contains "{seen[path.name]}" and "{path}" with the same file name'
            )
        seen[path.name] = path


def resolve_registry_options(
    options: Optional[RegistryOptions], environ: Mapping[str, str] | None = None
) -> Optional[RegistryOptions]:
    """Merge the environment access token into the registry options.

    An explicit ``access_token`` always wins over the environment.
    """
    env = os.environ if environ is None else environ
    if options is None:
        return None
    if options.access_token:
        return options
    token = env.get(ACCESS_TOKEN_ENV) or None
    return replace(options, access_token=token)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_path(value: Any, base: Path) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    return (base / Path(text).expanduser()).resolve()


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
