"""Biome climate facts used as environmental predicates."""

from elemental_bias.world.biomes import (
    FOREST_BIOMES,
    VANILLA_BIOME_TEMPERATURES,
    BiomeClimate,
    climate_for_biome,
    normalize_location_key,
)

__all__ = [
    "FOREST_BIOMES",
    "VANILLA_BIOME_TEMPERATURES",
    "BiomeClimate",
    "climate_for_biome",
    "normalize_location_key",
]
