"""Parsing of ``<location>:<element|all>,<weight>`` custom bias lines."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from elemental_bias.elements import REAL_ELEMENTS, Element

ALL_SELECTOR = "all"
MIN_WEIGHT = 0.0
MAX_WEIGHT = 100.0

_logger = logging.getLogger("elemental_bias.bias_config")


@dataclass(frozen=True, slots=True)
class BiasEntry:
    """One weighted element contribution for a location."""

    location_key: str
    element: Element
    weight: float


def _parse_weight(text: str) -> float | None:
    try:
        weight = float(text)
    except ValueError:
        return None
    if math.isnan(weight):
        return None
    return max(MIN_WEIGHT, min(MAX_WEIGHT, weight))


def _discard(line: str, reason: str) -> list[BiasEntry]:
    _logger.debug("bias_line_discarded", extra={"line": line, "reason": reason})
    return []


def parse_bias_line(line: str) -> list[BiasEntry]:
    """Parse one config line; malformed lines yield no entries."""
    trimmed = line.strip()
    if not trimmed or trimmed.startswith("#"):
        return []

    key_part, comma, value_part = trimmed.partition(",")
    if not comma:
        return _discard(line, "missing_comma")

    location_key, colon, selector = key_part.partition(":")
    location_key = location_key.strip()
    selector = selector.strip()
    if not colon or not location_key:
        return _discard(line, "missing_colon")

    weight = _parse_weight(value_part.strip())
    if weight is None:
        return _discard(line, "invalid_weight")

    if selector.lower() == ALL_SELECTOR:
        return [BiasEntry(location_key, element, weight) for element in REAL_ELEMENTS]

    element = Element.from_id(selector)
    if element is None or element is Element.NONE:
        return _discard(line, "unknown_element")
    return [BiasEntry(location_key, element, weight)]


def parse_bias_lines(lines: Iterable[str]) -> Iterator[BiasEntry]:
    for line in lines:
        yield from parse_bias_line(line)


def format_bias_line(location_key: str, selector: str, weight: float) -> str:
    """Render the canonical line form stored by the biome bias editor."""
    return f"{location_key}:{selector.lower()},{weight:.1f}"
