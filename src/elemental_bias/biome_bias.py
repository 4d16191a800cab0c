"""Add, remove and list custom biome bias lines."""

from __future__ import annotations

from elemental_bias.bias_config import ALL_SELECTOR, MAX_WEIGHT, MIN_WEIGHT, format_bias_line
from elemental_bias.bias_store import BiasConfigStore
from elemental_bias.elements import Element
from elemental_bias.world import normalize_location_key


class BiomeBiasError(ValueError):
    """Base error for rejected biome bias edits."""


class InvalidSelectorError(BiomeBiasError):
    pass


class InvalidLocationKeyError(BiomeBiasError):
    pass


class InvalidWeightError(BiomeBiasError):
    pass


class BiasConflictError(BiomeBiasError):
    """Raised when the location already has an entry covering the selector."""


class BiasNotFoundError(BiomeBiasError):
    pass


def _normalize_selector(selector: str) -> str:
    text = selector.strip().lower()
    if text == ALL_SELECTOR:
        return text
    element = Element.from_id(text)
    if element is None or element is Element.NONE:
        raise InvalidSelectorError(f"Unknown element '{selector}'; expected fire, frost, nature, thunder or all")
    return element.value


def _normalize_key(location_key: str) -> str:
    key = normalize_location_key(location_key)
    if not key or ":" in key:
        raise InvalidLocationKeyError(f"Location key '{location_key}' must be non-empty and contain no ':'")
    return key


def _active(lines: list[str]) -> list[str]:
    return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]


class BiomeBiasEditor:
    """Edits the custom bias list one location at a time.

    Each location holds either a single ``all`` line or at most one line per element.
    """

    def __init__(self, store: BiasConfigStore) -> None:
        self._store = store

    def add(self, location_key: str, selector: str, weight: float) -> str:
        key = _normalize_key(location_key)
        chosen = _normalize_selector(selector)
        if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            raise InvalidWeightError(f"Weight {weight} is outside [{MIN_WEIGHT}, {MAX_WEIGHT}]")

        current = self._store.lines()
        prefix = f"{key}:"
        has_all = any(line.startswith(f"{prefix}{ALL_SELECTOR},") for line in _active(current))
        has_target = any(line.startswith(f"{prefix}{chosen},") for line in _active(current))
        if has_all and chosen != ALL_SELECTOR:
            raise BiasConflictError(f"{key} already has an 'all' bias; remove it first")
        if has_target:
            raise BiasConflictError(f"{key} already has a '{chosen}' bias; remove it first")

        line = format_bias_line(key, chosen, weight)
        self._store.replace([*current, line])
        return line

    def remove(self, location_key: str, selector: str) -> int:
        key = _normalize_key(location_key)
        chosen = _normalize_selector(selector)
        target = f"{key}:" if chosen == ALL_SELECTOR else f"{key}:{chosen},"

        current = self._store.lines()
        kept = [line for line in current if not line.strip().startswith(target)]
        removed = len(current) - len(kept)
        if not removed:
            raise BiasNotFoundError(f"No '{chosen}' bias configured for {key}")

        self._store.replace(kept)
        return removed

    def list(self, location_key: str) -> list[str]:
        key = _normalize_key(location_key)
        prefix = f"{key}:"
        return [line[len(prefix):] for line in _active(self._store.lines()) if line.startswith(prefix)]
