"""Core data models shared across patternsync components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Component:
    """A discovered pattern with its metadata file and raw declared fields."""

    directory: Path
    meta_file: Path
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def folder_name(self) -> str:
        return self.directory.name

    @property
    def type_folder_name(self) -> str:
        """Folder two levels above the metadata file, e.g. ``atoms``."""
        return self.meta_file.parent.parent.name


@dataclass(frozen=True)
class Example:
    """A renderable example template owned by a component."""

    filepath: Path
    name: str
    main: bool = True
    hidden: bool = False


@dataclass(frozen=True)
class ComponentLocation:
    """Where a component sits inside the component root."""

    folder_name: str
    folder_type: str
    relative_directory: str


@dataclass
class Variation:
    """Canonical, synced form of one example."""

    name: str
    html: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "assets": {"html": list(self.html)}}


@dataclass
class TransferData:
    """Schema-shaped descriptor for a component as consumed by the registry."""

    name: str
    type: Optional[str]
    variations: Dict[str, Variation] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.properties)
        payload["name"] = self.name
        payload["type"] = self.type
        payload["variations"] = {
            key: variation.to_dict() for key, variation in self.variations.items()
        }
        return payload


@dataclass
class DeployResult:
    """Aggregate of the asset and pattern sync calls."""

    assets: List[Dict[str, Any]] = field(default_factory=list)
    components: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"assets": list(self.assets), "components": list(self.components)}
