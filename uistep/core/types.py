"""Core — query annotation model and shared enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from uistep.drivers.base import ElementHandle, QueryHandle


class ElementCategory(str, Enum):
    """Element categories a driver can resolve a query for."""

    ANY = "any"
    BUTTONS = "buttons"
    TEXT_FIELDS = "text_fields"
    SECURE_TEXT_FIELDS = "secure_text_fields"
    STATIC_TEXTS = "static_texts"
    LINKS = "links"
    IMAGES = "images"
    CELLS = "cells"
    TABLES = "tables"
    SWITCHES = "switches"
    NAVIGATION_BARS = "navigation_bars"
    SHEETS = "sheets"
    KEYBOARDS = "keyboards"


class SwipeDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


# ---------------------------------------------------------------------------
# QueryKind: how a query or element was derived. Diagnostics only.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoundBy:
    index: int
    of: QueryKind | None = None

    @property
    def description(self) -> str:
        if self.of is None:
            return f"Bound by {self.index}"
        return f"Bound by {self.index} of {self.of.description}"


@dataclass(frozen=True)
class MatchingText:
    text: str

    @property
    def description(self) -> str:
        return f"Matching {self.text}"


@dataclass(frozen=True)
class MatchingIdentifier:
    identifier: str

    @property
    def description(self) -> str:
        return f"Matching accessibility identifier {self.identifier}"


@dataclass(frozen=True)
class MatchingPredicate:
    format: str

    @property
    def description(self) -> str:
        return f"Matching predicate with format: {self.format}"


@dataclass(frozen=True)
class First:
    of: QueryKind | None = None

    @property
    def description(self) -> str:
        if self.of is None:
            return "First"
        return f"First of {self.of.description}"


@dataclass(frozen=True)
class OnlyElementOf:
    kind: QueryKind

    @property
    def description(self) -> str:
        return f"Only element of {self.kind.description}"


@dataclass(frozen=True)
class Keyboard:
    @property
    def description(self) -> str:
        return (
            "Keyboard wasn't displayed! Make sure the element has focus before "
            "typing. On a simulator, disable the connected hardware keyboard "
            "so the software keyboard is shown."
        )


QueryKind = Union[
    BoundBy, MatchingText, MatchingIdentifier, MatchingPredicate, First, OnlyElementOf, Keyboard
]


@dataclass(frozen=True)
class AnnotatedQuery:
    """A not-yet-resolved collection of candidate elements."""

    kind: QueryKind
    query: QueryHandle

    def __str__(self) -> str:
        return f"AnnotatedQuery({self.kind.description})"


@dataclass(frozen=True)
class AnnotatedElement:
    """A specific candidate element; existence is unverified until checked."""

    kind: QueryKind
    element: ElementHandle

    def __str__(self) -> str:
        return f"{self.element!r} ({self.kind.description})"
