"""Tests for transfer data generation."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, List

import pytest

from patternsync.catalog import ComponentCatalog
from patternsync.models import Component, Example
from patternsync.transfer import (
    DuplicateVariationError,
    TransferDataGenerator,
    derive_location,
    example_qualifies,
)
from patternsync.validators.schema import INPUT_SCHEMA_NAME, SchemaValidator
from tests._fixtures.component_builder import BUTTON_EXPECTED, ComponentTreeBuilder

MAPPING = {"atoms": "atom", "molecules": "molecule"}


def _generator(tree: ComponentTreeBuilder, **kwargs: Any) -> TransferDataGenerator:
    return TransferDataGenerator(
        ComponentCatalog(tree.root),
        root_directory=tree.root.resolve(),
        mapping=MAPPING,
        properties=SchemaValidator().properties(INPUT_SCHEMA_NAME),
        **kwargs,
    )


def _component(tree: ComponentTreeBuilder, key: str) -> Component:
    return asyncio.run(ComponentCatalog(tree.root).get_component(key))


def test_transfer_data_for_button(tree: ComponentTreeBuilder) -> None:
    tree.seed_valid()

    data = asyncio.run(_generator(tree).to_transfer_data(_component(tree, "atoms/button")))

    assert data.to_dict() == BUTTON_EXPECTED


def test_transfer_data_lists_every_main_example(tree: ComponentTreeBuilder) -> None:
    tree.seed_valid()

    data = asyncio.run(_generator(tree).to_transfer_data(_component(tree, "atoms/radio")))

    assert data.type == "atom"
    assert data.properties == {"stability": "unstable"}
    assert {key: variation.to_dict() for key, variation in data.variations.items()} == {
        "_example/desktop.hbs": {
            "name": "radio -- desktop",
            "assets": {"html": ["atoms/radio/desktop.html"]},
        },
        "_example/mobile.hbs": {
            "name": "radio -- mobile",
            "assets": {"html": ["atoms/radio/mobile.html"]},
        },
    }


def test_transfer_data_drops_undeclared_fields_and_hidden_examples(
    tree: ComponentTreeBuilder,
) -> None:
    tree.seed_valid()

    data = asyncio.run(_generator(tree).to_transfer_data(_component(tree, "atoms/icon")))

    payload = data.to_dict()
    assert "owner" not in payload
    assert payload["tags"] == ["media"]
    assert list(payload["variations"]) == ["_example/example.hbs"]


def test_legacy_mode_keeps_non_hidden_examples_only(tree: ComponentTreeBuilder) -> None:
    tree.seed_valid()

    data = asyncio.run(
        _generator(tree, legacy_examples=True).to_transfer_data(_component(tree, "atoms/icon"))
    )

    assert list(data.variations) == ["_example/example.hbs"]


def test_declared_name_and_type_override_defaults(tree: ComponentTreeBuilder) -> None:
    tree.seed_valid()
    tree.add_component("atoms/chip", {"name": "Chip", "type": "token", "stability": "beta"})

    card = asyncio.run(_generator(tree).to_transfer_data(_component(tree, "molecules/card")))
    chip = asyncio.run(_generator(tree).to_transfer_data(_component(tree, "atoms/chip")))

    assert card.name == "Info Card"
    assert card.type == "molecule"
    assert card.variations["_example/example.hbs"].name == "Info Card -- example"
    assert card.properties == {"stability": "stable", "description": "Card layout"}
    assert chip.type == "token"
    assert chip.variations == {}


def test_name_processor_receives_folder_context(tree: ComponentTreeBuilder) -> None:
    tree.seed_valid()
    calls: List[tuple] = []

    def processor(name: str, folder: str, folder_type: str, path: str) -> str:
        calls.append((name, folder, folder_type, path))
        return " - ".join([name, folder, folder_type, path])

    component = _component(tree, "atoms/button")
    data = asyncio.run(_generator(tree, name_processor=processor).to_transfer_data(component))

    expected = f"button - button - atoms - {component.directory}"
    assert data.name == expected
    assert data.variations["_example/example.hbs"].name == f"{expected} -- example"
    assert calls == [("button", "button", "atoms", str(component.directory))]


def test_to_transfer_data_is_repeatable(tree: ComponentTreeBuilder) -> None:
    tree.seed_valid()
    generator = _generator(tree)
    component = _component(tree, "atoms/radio")

    first = asyncio.run(generator.to_transfer_data(component))
    second = asyncio.run(generator.to_transfer_data(component))

    assert first.to_dict() == second.to_dict()
    assert component.data == {"stability": "unstable"}


def test_generate_all_keys_by_component(tree: ComponentTreeBuilder) -> None:
    tree.seed_valid()

    results = asyncio.run(_generator(tree).generate_all())

    assert list(results) == ["atoms/button", "atoms/icon", "atoms/radio", "molecules/card"]
    assert results["atoms/button"].to_dict() == BUTTON_EXPECTED


def test_derive_location(tmp_path: Path) -> None:
    directory = tmp_path / "atoms" / "button"
    component = Component(directory=directory, meta_file=directory / "pattern.json")

    location = derive_location(component, tmp_path)

    assert location.folder_name == "button"
    assert location.folder_type == "atoms"
    assert location.relative_directory == "atoms/button"


def test_example_qualifies(tmp_path: Path) -> None:
    main = Example(filepath=tmp_path / "example.hbs", name="example")
    hidden = Example(filepath=tmp_path / "_partial.hbs", name="_partial", main=False, hidden=True)
    secondary = Example(filepath=tmp_path / "extra.hbs", name="extra", main=False)

    assert example_qualifies(main)
    assert not example_qualifies(hidden)
    assert not example_qualifies(secondary)
    assert example_qualifies(secondary, legacy=True)
    assert not example_qualifies(hidden, legacy=True)


def test_dotted_example_names_keep_distinct_outputs(tree: ComponentTreeBuilder) -> None:
    tree.add_component(
        "atoms/button",
        {"stability": "stable"},
        {"example.hbs": "a", "example.mobile.hbs": "b"},
    )

    data = asyncio.run(_generator(tree).to_transfer_data(_component(tree, "atoms/button")))

    assert {key: variation.to_dict() for key, variation in data.variations.items()} == {
        "_example/example.hbs": {
            "name": "button -- example",
            "assets": {"html": ["atoms/button/example.html"]},
        },
        "_example/example.mobile.hbs": {
            "name": "button -- example.mobile",
            "assets": {"html": ["atoms/button/example.mobile.html"]},
        },
    }


def test_examples_rendering_to_same_file_are_rejected(tree: ComponentTreeBuilder) -> None:
    tree.add_component(
        "atoms/button",
        {"stability": "stable"},
        {"example.hbs": "a", "example.html": "b"},
    )

    with pytest.raises(DuplicateVariationError) as excinfo:
        asyncio.run(_generator(tree).to_transfer_data(_component(tree, "atoms/button")))

    assert excinfo.value.html_path == "atoms/button/example.html"
    assert '"_example/example.hbs" and "_example/example.html"' in str(excinfo.value)
