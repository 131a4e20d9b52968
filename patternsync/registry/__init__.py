"""Registry sync clients."""

from .client import (
    HttpRegistryClient,
    RegistryClient,
    RegistryError,
    RegistryRequest,
    SyncConfigurationError,
    collect_files,
    require_sync_options,
)

__all__ = [
    "HttpRegistryClient",
    "RegistryClient",
    "RegistryError",
    "RegistryRequest",
    "SyncConfigurationError",
    "collect_files",
    "require_sync_options",
]
