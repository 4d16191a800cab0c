"""Composition root wiring the bias store, cache, resolver, editor and scanner."""

from __future__ import annotations

from collections.abc import Callable

from elemental_bias.bias_store import BiasConfigStore
from elemental_bias.bias_table import BiasCache, BiasTable
from elemental_bias.biome_bias import BiomeBiasEditor
from elemental_bias.elements import Element
from elemental_bias.resolver import BiasParameters, ElementResolver, EnvironmentPredicates, RandomSource
from elemental_bias.spawn_scan import SpawnScanner
from elemental_bias.world import normalize_location_key


class ElementalBiasService:
    """Owns one bias cache and resolver; global parameters are read on every resolve."""

    def __init__(
        self,
        store: BiasConfigStore,
        params_provider: Callable[[], BiasParameters],
        *,
        rng: RandomSource | None = None,
    ):
        self.store = store
        self.params_provider = params_provider
        self.cache = BiasCache(store.lines)
        self.resolver = ElementResolver(self.cache, rng=rng)
        self.editor = BiomeBiasEditor(store)
        self.scanner = SpawnScanner(self.resolver.resolve)
        store.subscribe(self.cache.invalidate_all)

    def resolve(
        self,
        biome_id: str,
        *,
        is_stormy: bool = False,
        environment: EnvironmentPredicates | None = None,
    ) -> Element:
        return self.resolver.resolve(
            normalize_location_key(biome_id),
            is_stormy,
            self.params_provider(),
            environment,
        )

    def bias_table(self, biome_id: str) -> BiasTable:
        return self.cache.get(normalize_location_key(biome_id))

    def add_bias(self, biome_id: str, selector: str, weight: float) -> str:
        return self.editor.add(biome_id, selector, weight)

    def remove_bias(self, biome_id: str, selector: str) -> int:
        return self.editor.remove(biome_id, selector)

    def list_bias(self, biome_id: str) -> list[str]:
        return self.editor.list(biome_id)

    def reload(self) -> None:
        self.cache.invalidate_all()
