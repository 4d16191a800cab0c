"""Scan-pass driver that assigns an element to each newly seen creature once."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from elemental_bias.elements import Element
from elemental_bias.resolver import BiasParameters, EnvironmentPredicates

ResolveFn = Callable[[str, bool, BiasParameters, EnvironmentPredicates | None], Element]


@dataclass(frozen=True, slots=True)
class CreatureSpawn:
    entity_id: str
    location_key: str
    environment: EnvironmentPredicates | None = None


@dataclass(frozen=True, slots=True)
class ElementAssignment:
    entity_id: str
    location_key: str
    element: Element


class SpawnScanner:
    """Tracks processed creatures so each one is resolved a single time."""

    def __init__(self, resolve: ResolveFn, *, logger: logging.Logger | None = None) -> None:
        self._resolve = resolve
        self._logger = logger or logging.getLogger("elemental_bias.spawn_scan")
        self._lock = threading.Lock()
        self._processed: set[str] = set()

    def scan(
        self,
        spawns: Iterable[CreatureSpawn],
        *,
        is_stormy: bool,
        params: BiasParameters,
    ) -> list[ElementAssignment]:
        assignments: list[ElementAssignment] = []
        for spawn in spawns:
            with self._lock:
                if spawn.entity_id in self._processed:
                    continue
                self._processed.add(spawn.entity_id)

            try:
                element = self._resolve(spawn.location_key, is_stormy, params, spawn.environment)
            except Exception:
                with self._lock:
                    self._processed.discard(spawn.entity_id)
                raise
            assignments.append(ElementAssignment(spawn.entity_id, spawn.location_key, element))

        self._logger.info("spawn_scan_finished", extra={"assigned": len(assignments), "stormy": is_stormy})
        return assignments

    def is_processed(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._processed

    def forget(self, entity_id: str) -> None:
        with self._lock:
            self._processed.discard(entity_id)
