"""Biome and weather driven elemental attribute assignment."""
