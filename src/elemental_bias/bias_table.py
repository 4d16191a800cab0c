"""Per-location custom bias tables and their process-wide cache."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType

from elemental_bias.bias_config import parse_bias_lines
from elemental_bias.elements import REAL_ELEMENTS, Element

BiasTable = Mapping[Element, float]
LinesProvider = Callable[[], Sequence[str]]


def build_bias_table(lines: Iterable[str], location_key: str) -> BiasTable:
    """Sum every configured weight for ``location_key`` into a read-only table.

    Entries targeting the same element accumulate; the total is not capped.
    """
    weights = dict.fromkeys(REAL_ELEMENTS, 0.0)
    for entry in parse_bias_lines(lines):
        if entry.location_key == location_key:
            weights[entry.element] += entry.weight
    return MappingProxyType(weights)


class BiasCache:
    """Memoizes bias tables per location key until the next full invalidation.

    Tables are built outside the lock; on concurrent misses for one key the first
    stored table wins. A build that started before ``invalidate_all`` is never
    stored after it.
    """

    def __init__(self, lines_provider: LinesProvider, *, logger: logging.Logger | None = None) -> None:
        self._lines_provider = lines_provider
        self._logger = logger or logging.getLogger("elemental_bias.bias_table")
        self._lock = threading.Lock()
        self._tables: dict[str, BiasTable] = {}
        self._generation = 0

    def get(self, location_key: str) -> BiasTable:
        with self._lock:
            table = self._tables.get(location_key)
            generation = self._generation
        if table is not None:
            return table

        built = build_bias_table(self._lines_provider(), location_key)
        with self._lock:
            if generation != self._generation:
                return built
            table = self._tables.setdefault(location_key, built)

        if table is built:
            self._logger.debug(
                "bias_table_built",
                extra={"location_key": location_key, "total_weight": sum(built.values())},
            )
        return table

    def invalidate_all(self) -> None:
        with self._lock:
            dropped = len(self._tables)
            self._tables = {}
            self._generation += 1
        self._logger.info("bias_cache_invalidated", extra={"dropped_entries": dropped})

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

    def __contains__(self, location_key: object) -> bool:
        with self._lock:
            return location_key in self._tables
