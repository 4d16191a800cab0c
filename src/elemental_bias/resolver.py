"""Four-tier elemental attribute resolution.

Priority order: custom biome bias > thunderstorm > default biome bias > uniform fallback.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from elemental_bias.bias_table import BiasCache
from elemental_bias.elements import REAL_ELEMENTS, Element

CUSTOM_BIAS_THRESHOLD = 0.01
STORM_FALLBACK_ELEMENTS: tuple[Element, ...] = (Element.FIRE, Element.FROST, Element.NATURE)


class RandomSource(Protocol):
    def random(self) -> float: ...

    def choice(self, seq): ...


@dataclass(frozen=True, slots=True)
class BiasParameters:
    """Global bias percentages (0-100) read at resolution time."""

    hot_fire_bias: float = 60.0
    cold_frost_bias: float = 60.0
    forest_nature_bias: float = 60.0
    thunderstorm_thunder_bias: float = 80.0


@dataclass(frozen=True, slots=True)
class EnvironmentPredicates:
    """Climate facts about the spawn location, supplied by the caller."""

    hot: bool = False
    cold: bool = False
    forest: bool = False


@dataclass(frozen=True, slots=True)
class _ResolutionRequest:
    location_key: str
    is_stormy: bool
    params: BiasParameters
    environment: EnvironmentPredicates


class ElementResolver:
    """Resolves a real element for a spawn location; never returns ``Element.NONE``."""

    def __init__(
        self,
        cache: BiasCache,
        *,
        rng: RandomSource | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cache = cache
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger("elemental_bias.resolver")
        self._tiers: tuple[tuple[str, Callable[[_ResolutionRequest], Element | None]], ...] = (
            ("custom_bias", self._custom_bias_tier),
            ("storm", self._storm_tier),
            ("environment", self._environment_tier),
        )

    def resolve(
        self,
        location_key: str,
        is_stormy: bool,
        params: BiasParameters,
        environment: EnvironmentPredicates | None = None,
    ) -> Element:
        request = _ResolutionRequest(
            location_key=location_key,
            is_stormy=is_stormy,
            params=params,
            environment=environment or EnvironmentPredicates(),
        )
        tier_name, element = "fallback", None
        for name, tier in self._tiers:
            element = tier(request)
            if element is not None:
                tier_name = name
                break
        if element is None:
            element = self._rng.choice(REAL_ELEMENTS)

        self._logger.debug(
            "element_resolved",
            extra={"location_key": location_key, "tier": tier_name, "element": element.value},
        )
        return element

    def _custom_bias_tier(self, request: _ResolutionRequest) -> Element | None:
        table = self._cache.get(request.location_key)
        total = sum(table[element] for element in REAL_ELEMENTS)
        if total <= CUSTOM_BIAS_THRESHOLD:
            return None

        roll = self._rng.random() * total
        cumulative = 0.0
        last_weighted: Element | None = None
        for element in REAL_ELEMENTS:
            weight = table[element]
            if weight <= 0:
                continue
            cumulative += weight
            last_weighted = element
            if cumulative >= roll:
                return element
        # float round-off can leave the roll just above the final cumulative sum
        return last_weighted

    def _storm_tier(self, request: _ResolutionRequest) -> Element | None:
        if not request.is_stormy:
            return None
        if self._rng.random() < request.params.thunderstorm_thunder_bias / 100.0:
            return Element.THUNDER
        return self._rng.choice(STORM_FALLBACK_ELEMENTS)

    def _environment_tier(self, request: _ResolutionRequest) -> Element | None:
        environment, params = request.environment, request.params
        trials = (
            (environment.hot, params.hot_fire_bias, Element.FIRE),
            (environment.cold, params.cold_frost_bias, Element.FROST),
            (environment.forest, params.forest_nature_bias, Element.NATURE),
        )
        for applies, percent, element in trials:
            if applies and self._rng.random() < percent / 100.0:
                return element
        return None
