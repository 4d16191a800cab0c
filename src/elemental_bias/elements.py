"""Elemental attribute categories."""

from __future__ import annotations

from enum import Enum


class Element(str, Enum):
    """Elemental attribute a creature can carry; ``NONE`` marks no attribute."""

    NONE = "none"
    FIRE = "fire"
    FROST = "frost"
    NATURE = "nature"
    THUNDER = "thunder"

    @classmethod
    def from_id(cls, element_id: str | None) -> Element | None:
        """Look up an element by id, ignoring case and surrounding whitespace."""
        if not element_id:
            return None
        try:
            return cls(element_id.strip().lower())
        except ValueError:
            return None


# Fixed enumeration order for weighted walks and uniform draws.
REAL_ELEMENTS: tuple[Element, ...] = (Element.FIRE, Element.FROST, Element.NATURE, Element.THUNDER)
