"""Storage for custom biome bias configuration lines."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ChangeListener = Callable[[], None]


class BiasConfigStore(Protocol):
    """Persistence contract for custom bias lines."""

    def lines(self) -> list[str]:
        """Return the current configuration lines in order."""

    def replace(self, lines: Iterable[str]) -> None:
        """Store a new full list of lines and notify subscribers."""

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every change."""


class _ListenerMixin:
    def _init_listeners(self) -> None:
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


class InMemoryBiasConfigStore(_ListenerMixin):
    """Process-local store, seeded from settings."""

    def __init__(self, lines: Iterable[str] | None = None) -> None:
        self._init_listeners()
        self._lock = threading.Lock()
        self._lines: tuple[str, ...] = tuple(lines or ())

    def lines(self) -> list[str]:
        with self._lock:
            return list(self._lines)

    def replace(self, lines: Iterable[str]) -> None:
        with self._lock:
            self._lines = tuple(lines)
        self._notify()


class BiasConfigError(ValueError):
    """Raised when a bias config file is not a valid bias document."""


class BiasConfigDocument(BaseModel):
    """On-disk shape: ``{"custom_biome_attribute_bias": ["<line>", ...]}``."""

    model_config = ConfigDict(extra="ignore")

    custom_biome_attribute_bias: list[str] = Field(default_factory=list)


class JsonBiasConfigStore(_ListenerMixin):
    """JSON-file store validated against ``BiasConfigDocument``."""

    def __init__(self, file_path: str | Path, *, logger: logging.Logger | None = None) -> None:
        self._init_listeners()
        self._path = Path(file_path)
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger("elemental_bias.bias_store")

    @property
    def path(self) -> Path:
        return self._path

    def lines(self) -> list[str]:
        with self._lock:
            if not self._path.exists():
                return []
            text = self._path.read_text(encoding="utf-8")
        try:
            document = BiasConfigDocument.model_validate_json(text)
        except ValidationError as exc:
            raise BiasConfigError(f"Invalid bias config file {self._path}: {exc}") from exc
        return list(document.custom_biome_attribute_bias)

    def replace(self, lines: Iterable[str]) -> None:
        document = BiasConfigDocument(custom_biome_attribute_bias=list(lines))
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(document.model_dump_json(indent=2) + "\n", encoding="utf-8")
        self._logger.info(
            "bias_config_saved",
            extra={"path": str(self._path), "line_count": len(document.custom_biome_attribute_bias)},
        )
        self._notify()
