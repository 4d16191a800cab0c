"""Vanilla biome climate lookup for environment predicates."""

from __future__ import annotations

from dataclasses import dataclass

from elemental_bias.resolver import EnvironmentPredicates

VANILLA_NAMESPACE = "minecraft:"
DEFAULT_TEMPERATURE = 0.5
SNOW_TEMPERATURE = 0.15

FOREST_BIOMES = frozenset(
    {
        "forest",
        "dark_forest",
        "birch_forest",
        "old_growth_birch_forest",
        "jungle",
        "sparse_jungle",
        "bamboo_jungle",
        "flower_forest",
        "windswept_forest",
    }
)

VANILLA_BIOME_TEMPERATURES: dict[str, float] = {
    "badlands": 2.0,
    "eroded_badlands": 2.0,
    "wooded_badlands": 2.0,
    "desert": 2.0,
    "savanna": 2.0,
    "savanna_plateau": 2.0,
    "windswept_savanna": 2.0,
    "nether_wastes": 2.0,
    "jungle": 0.95,
    "sparse_jungle": 0.95,
    "bamboo_jungle": 0.95,
    "mangrove_swamp": 0.8,
    "swamp": 0.8,
    "plains": 0.8,
    "sunflower_plains": 0.8,
    "beach": 0.8,
    "mushroom_fields": 0.9,
    "forest": 0.7,
    "flower_forest": 0.7,
    "dark_forest": 0.7,
    "cherry_grove": 0.5,
    "river": 0.5,
    "ocean": 0.5,
    "meadow": 0.5,
    "birch_forest": 0.6,
    "old_growth_birch_forest": 0.6,
    "taiga": 0.25,
    "old_growth_pine_taiga": 0.3,
    "old_growth_spruce_taiga": 0.25,
    "windswept_hills": 0.2,
    "windswept_forest": 0.2,
    "windswept_gravelly_hills": 0.2,
    "stony_shore": 0.2,
    "grove": -0.2,
    "snowy_slopes": -0.3,
    "jagged_peaks": -0.7,
    "frozen_peaks": -0.7,
    "snowy_taiga": -0.5,
    "snowy_plains": 0.0,
    "ice_spikes": 0.0,
    "snowy_beach": 0.05,
    "frozen_river": 0.0,
    "frozen_ocean": 0.0,
    "deep_frozen_ocean": 0.5,
}


def normalize_location_key(biome_id: str) -> str:
    """Drop the vanilla namespace so a biome id fits the ``key:element`` line format."""
    key = biome_id.strip()
    if key.startswith(VANILLA_NAMESPACE):
        return key[len(VANILLA_NAMESPACE):]
    return key


@dataclass(frozen=True, slots=True)
class BiomeClimate:
    """Base climate of a biome at a spawn position."""

    biome: str
    temperature: float
    snowy: bool = False

    def predicates(self, hot_threshold: float = 0.95, cold_threshold: float = 0.05) -> EnvironmentPredicates:
        return EnvironmentPredicates(
            hot=self.temperature >= hot_threshold,
            cold=self.snowy or self.temperature <= cold_threshold,
            forest=normalize_location_key(self.biome) in FOREST_BIOMES,
        )


def climate_for_biome(biome_id: str, temperature: float | None = None) -> BiomeClimate:
    key = normalize_location_key(biome_id)
    if temperature is None:
        temperature = VANILLA_BIOME_TEMPERATURES.get(key, DEFAULT_TEMPERATURE)
    return BiomeClimate(biome=key, temperature=temperature, snowy=temperature < SNOW_TEMPERATURE)
