from __future__ import annotations

import json
from pathlib import Path

import pytest

from elemental_bias.bias_service import ElementalBiasService
from elemental_bias.bias_store import BiasConfigError, InMemoryBiasConfigStore, JsonBiasConfigStore
from elemental_bias.biome_bias import (
    BiasConflictError,
    BiasNotFoundError,
    BiomeBiasEditor,
    InvalidLocationKeyError,
    InvalidSelectorError,
    InvalidWeightError,
)
from elemental_bias.resolver import BiasParameters


def test_add_appends_canonical_line() -> None:
    store = InMemoryBiasConfigStore()
    editor = BiomeBiasEditor(store)

    assert editor.add("minecraft:desert", "Fire", 35) == "desert:fire,35.0"
    assert store.lines() == ["desert:fire,35.0"]


def test_add_rejects_duplicates_and_all_conflicts() -> None:
    editor = BiomeBiasEditor(InMemoryBiasConfigStore(["desert:all,10.0"]))

    with pytest.raises(BiasConflictError):
        editor.add("desert", "frost", 5)
    with pytest.raises(BiasConflictError):
        editor.add("desert", "all", 5)


def test_add_all_allowed_next_to_single_entries() -> None:
    store = InMemoryBiasConfigStore(["desert:fire,10.0"])
    BiomeBiasEditor(store).add("desert", "all", 5)

    assert store.lines() == ["desert:fire,10.0", "desert:all,5.0"]


@pytest.mark.parametrize(
    ("biome", "selector", "weight", "error"),
    [
        ("desert", "water", 5, InvalidSelectorError),
        ("desert", "none", 5, InvalidSelectorError),
        ("mod:volcano", "fire", 5, InvalidLocationKeyError),
        ("", "fire", 5, InvalidLocationKeyError),
        ("desert", "fire", 101, InvalidWeightError),
    ],
)
def test_add_validates_input(biome: str, selector: str, weight: float, error: type[Exception]) -> None:
    with pytest.raises(error):
        BiomeBiasEditor(InMemoryBiasConfigStore()).add(biome, selector, weight)


def test_remove_single_and_all() -> None:
    store = InMemoryBiasConfigStore(["desert:fire,10.0", "desert:frost,5.0", "desert_lakes:fire,1.0", "taiga:all,3.0"])
    editor = BiomeBiasEditor(store)

    assert editor.remove("desert", "fire") == 1
    assert editor.remove("desert", "all") == 1
    assert store.lines() == ["desert_lakes:fire,1.0", "taiga:all,3.0"]

    with pytest.raises(BiasNotFoundError):
        editor.remove("desert", "all")


def test_list_shows_suffixes_for_location() -> None:
    store = InMemoryBiasConfigStore(["# comment", "desert:fire,10.0", "", "taiga:all,3.0", "desert:all,2.0"])

    assert BiomeBiasEditor(store).list("minecraft:desert") == ["fire,10.0", "all,2.0"]


def test_store_notifies_subscribers_on_replace() -> None:
    store = InMemoryBiasConfigStore()
    calls: list[int] = []
    store.subscribe(lambda: calls.append(1))

    BiomeBiasEditor(store).add("desert", "fire", 1)

    assert calls == [1]


def test_json_store_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "config" / "bias.json"
    store = JsonBiasConfigStore(path)
    assert store.lines() == []

    BiomeBiasEditor(store).add("taiga", "frost", 45)

    assert json.loads(path.read_text(encoding="utf-8")) == {"custom_biome_attribute_bias": ["taiga:frost,45.0"]}
    assert JsonBiasConfigStore(path).lines() == ["taiga:frost,45.0"]


@pytest.mark.parametrize(
    "content",
    [
        '["desert:fire,10"]',
        '{"custom_biome_attribute_bias": "desert:fire,10"}',
        '{"custom_biome_attribute_bias": [10]}',
        "not json",
    ],
)
def test_json_store_rejects_malformed_documents(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bias.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(BiasConfigError):
        JsonBiasConfigStore(path).lines()


def test_resolve_over_malformed_store_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "bias.json"
    path.write_text('["desert:fire,10"]', encoding="utf-8")
    service = ElementalBiasService(JsonBiasConfigStore(path), BiasParameters)

    with pytest.raises(BiasConfigError):
        service.resolve("desert")


def test_json_store_ignores_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "bias.json"
    path.write_text('{"version": 2, "custom_biome_attribute_bias": ["taiga:all,5"]}', encoding="utf-8")

    assert JsonBiasConfigStore(path).lines() == ["taiga:all,5"]
