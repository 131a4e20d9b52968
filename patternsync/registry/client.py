"""Client for syncing built patterns and assets to the pattern-library registry."""

from __future__ import annotations

import asyncio
import base64
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import ACCESS_TOKEN_ENV, RegistryOptions
from ..logging import get_logger
from ..utils import relative_posix


class SyncConfigurationError(RuntimeError):
    """Raised when registry options are missing or incomplete at sync time."""


class RegistryError(RuntimeError):
    """Raised when the registry rejects a sync request."""


@dataclass
class RegistryRequest:
    """Represents a single HTTP call against the registry API."""

    method: str
    url: str
    payload: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: float = 30.0


class RegistryClient(Protocol):
    """Protocol implemented by registry sync clients."""

    async def sync_patterns(
        self, options: RegistryOptions, patterns: Sequence[str], *, cwd: Path
    ) -> List[Dict[str, Any]]:
        """Upload every pattern.json matching ``patterns`` below ``cwd``."""

    async def sync_assets(
        self, options: RegistryOptions, filters: Sequence[str], *, cwd: Path
    ) -> List[Dict[str, Any]]:
        """Upload every asset file matching ``filters`` below ``cwd``."""


def require_sync_options(options: Optional[RegistryOptions]) -> RegistryOptions:
    """Return ``options`` if they are complete enough to sync, raise otherwise."""
    if options is None:
        raise SyncConfigurationError(
            "Registry options are required to sync e.g. registry=RegistryOptions(project='...')"
        )
    if not options.access_token:
        raise SyncConfigurationError(
            f"Registry access token missing: set registry access_token or {ACCESS_TOKEN_ENV}"
        )
    if not options.dry_run:
        if not options.project:
            raise SyncConfigurationError("Registry project is required to sync")
        if not options.base_url:
            raise SyncConfigurationError("Registry base_url is required to sync")
    return options


def collect_files(cwd: Path, patterns: Sequence[str]) -> List[Path]:
    """Files below ``cwd`` matching any glob pattern, sorted and de-duplicated."""
    matches = {path for pattern in patterns for path in Path(cwd).glob(pattern) if path.is_file()}
    return sorted(matches)


class HttpRegistryClient:
    """Syncs patterns and assets over the registry's JSON HTTP API."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(self, transport: Callable[[RegistryRequest], Dict[str, Any]] | None = None) -> None:
        self._transport = transport or self._http_transport
        self.logger = get_logger("registry")

    async def sync_patterns(
        self, options: RegistryOptions, patterns: Sequence[str], *, cwd: Path
    ) -> List[Dict[str, Any]]:
        require_sync_options(options)
        results: List[Dict[str, Any]] = []
        for path in await asyncio.to_thread(collect_files, cwd, patterns):
            relative = relative_posix(path, cwd)
            pattern = json.loads(await asyncio.to_thread(path.read_text, encoding="utf-8"))
            entry: Dict[str, Any] = {"path": relative, "name": pattern.get("name")}
            if options.dry_run:
                entry["status"] = "dry-run"
            else:
                request = self._build_request(options, "patterns", {"path": relative, "pattern": pattern})
                entry["status"] = "synced"
                entry["response"] = await asyncio.to_thread(self._transport, request)
            results.append(entry)
        self.logger.info("Synced %d patterns%s", len(results), " (dry run)" if options.dry_run else "")
        return results

    async def sync_assets(
        self, options: RegistryOptions, filters: Sequence[str], *, cwd: Path
    ) -> List[Dict[str, Any]]:
        require_sync_options(options)
        results: List[Dict[str, Any]] = []
        for path in await asyncio.to_thread(collect_files, cwd, filters):
            relative = relative_posix(path, cwd)
            entry: Dict[str, Any] = {"path": relative}
            if options.dry_run:
                entry["status"] = "dry-run"
            else:
                content = await asyncio.to_thread(path.read_bytes)
                request = self._build_request(
                    options,
                    "assets",
                    {"path": relative, "content": base64.b64encode(content).decode("ascii")},
                )
                entry["status"] = "synced"
                entry["response"] = await asyncio.to_thread(self._transport, request)
            results.append(entry)
        self.logger.info("Synced %d assets%s", len(results), " (dry run)" if options.dry_run else "")
        return results

    def _build_request(
        self, options: RegistryOptions, resource: str, payload: Dict[str, Any]
    ) -> RegistryRequest:
        base_url = (options.base_url or "").rstrip("/")
        return RegistryRequest(
            method="POST",
            url=f"{base_url}/api/projects/{options.project}/{resource}",
            payload=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {options.access_token}",
            },
            timeout=options.request_timeout or self.DEFAULT_TIMEOUT,
        )

    @staticmethod
    def _http_transport(request: RegistryRequest) -> Dict[str, Any]:
        data = json.dumps(request.payload).encode("utf-8")
        http_request = Request(request.url, data=data, headers=request.headers, method=request.method)
        try:
            with urlopen(http_request, timeout=request.timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:  # pragma: no cover - depends on runtime
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or exc.reason
            raise RegistryError(f"Registry request to {request.url} failed with status {exc.code}: {message}") from exc
        except URLError as exc:  # pragma: no cover - depends on runtime
            raise RegistryError(f"Registry request to {request.url} failed: {exc.reason}") from exc

        if not raw.strip():
            return {}
        try:
            payload = json.loads(raw.decode("utf-8"))
        except json.JSONDecodeError as exc:
            raise RegistryError(f"Registry returned invalid JSON for {request.url}") from exc
        return payload if isinstance(payload, dict) else {"data": payload}


__all__ = [
    "HttpRegistryClient",
    "RegistryClient",
    "RegistryError",
    "RegistryRequest",
    "SyncConfigurationError",
    "collect_files",
    "require_sync_options",
]
