"""Helper utilities for constructing temporary component trees in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Dict, Mapping

from patternsync.config import DeployerConfig, RegistryOptions

BUTTON_EXPECTED: Dict[str, Any] = {
    "name": "button",
    "type": "atom",
    "stability": "stable",
    "variations": {
        "_example/example.hbs": {
            "name": "button -- example",
            "assets": {"html": ["atoms/button/example.html"]},
        }
    },
}

RADIO_DESKTOP = "<div>\n\t<span>fancy radio</span>\n</div>\n"


def upper_compiler(source: str, source_path: Path):
    """Compiler stand-in whose render function upper-cases the template source."""
    return lambda context: source.upper()


class ComponentTreeBuilder:
    """Utility for writing component folders into a throwaway tree."""

    def __init__(self, tmp_path: Path) -> None:
        self.base = tmp_path
        self.root = tmp_path / "components"
        self.root.mkdir()
        self.target = tmp_path / "dist"

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries below the component root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def add_component(
        self,
        relative: str,
        meta: Mapping[str, Any],
        examples: Mapping[str, str] | None = None,
    ) -> Path:
        """Create a component folder with a pattern.json and example templates."""
        files = {f"{relative}/pattern.json": json.dumps(dict(meta))}
        for name, content in (examples or {}).items():
            files[f"{relative}/_example/{name}"] = content
        self.write(files)
        return self.root / relative

    def seed_valid(self) -> None:
        """Populate the tree with a small, valid set of atoms and molecules."""
        self.add_component("atoms/button", {"stability": "stable"}, {"example.hbs": "hello world"})
        self.add_component(
            "atoms/radio",
            {"stability": "unstable"},
            {"desktop.hbs": RADIO_DESKTOP, "mobile.hbs": "<p>mobile radio</p>"},
        )
        self.add_component(
            "atoms/icon",
            {"stability": "beta", "tags": ["media"], "owner": "design"},
            {"example.hbs": "<i>icon</i>", "_partial.hbs": "<b>hidden</b>"},
        )
        self.add_component(
            "molecules/card",
            {"name": "Info Card", "stability": "stable", "description": "Card layout"},
            {"example.hbs": "<section><h2>{{ name }}</h2></section>"},
        )

    def seed_invalid(self) -> Path:
        """Add a component whose stability is outside the allowed values."""
        return self.add_component("atoms/broken", {"stability": "experimental"}, {"example.hbs": "x"})

    def config(self, **overrides: Any) -> DeployerConfig:
        """Return a deployer config pointing at this tree."""
        settings: Dict[str, Any] = {
            "root_directory": self.root,
            "target_dir": self.target,
            "mapping": {"atoms": "atom", "molecules": "molecule"},
            "registry": RegistryOptions(access_token="token", dry_run=True),
        }
        settings.update(overrides)
        return DeployerConfig(**settings)


__all__ = [
    "BUTTON_EXPECTED",
    "ComponentTreeBuilder",
    "RADIO_DESKTOP",
    "upper_compiler",
]
