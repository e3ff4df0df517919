"""Query layer — predicates over element and query attributes."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol


class SupportsValues(Protocol):
    def value_for(self, key: str) -> Any: ...


class Predicate(ABC):
    """A condition over named attributes, with a printable format for diagnostics."""

    @property
    @abstractmethod
    def format(self) -> str: ...

    @abstractmethod
    def evaluate(self, subject: SupportsValues) -> bool: ...

    def __and__(self, other: Predicate) -> AllOf:
        return AllOf((self, other))

    def __str__(self) -> str:
        return self.format


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@dataclass(frozen=True)
class Contains(Predicate):
    key: str
    value: str
    ignore_case: bool = True

    @property
    def format(self) -> str:
        op = "CONTAINS[c]" if self.ignore_case else "CONTAINS"
        return f"{self.key} {op} {_literal(self.value)}"

    def evaluate(self, subject: SupportsValues) -> bool:
        actual = subject.value_for(self.key)
        if actual is None:
            return False
        actual = str(actual)
        if self.ignore_case:
            return self.value.casefold() in actual.casefold()
        return self.value in actual


@dataclass(frozen=True)
class Equals(Predicate):
    key: str
    value: Any

    @property
    def format(self) -> str:
        return f"{self.key} == {_literal(self.value)}"

    def evaluate(self, subject: SupportsValues) -> bool:
        return subject.value_for(self.key) == self.value


@dataclass(frozen=True)
class AtLeast(Predicate):
    key: str
    minimum: int

    @property
    def format(self) -> str:
        return f"{self.key} >= {self.minimum}"

    def evaluate(self, subject: SupportsValues) -> bool:
        actual = subject.value_for(self.key)
        return actual is not None and actual >= self.minimum


@dataclass(frozen=True)
class AllOf(Predicate):
    predicates: tuple[Predicate, ...]

    @property
    def format(self) -> str:
        return " AND ".join(f"({p.format})" for p in self.predicates)

    def evaluate(self, subject: SupportsValues) -> bool:
        # short-circuits so later predicates never touch the driver
        return all(p.evaluate(subject) for p in self.predicates)


def contains_ignoring_case(key: str, value: str) -> Contains:
    return Contains(key=key, value=value, ignore_case=True)


def label_contains(value: str) -> Contains:
    return contains_ignoring_case("label", value)


def placeholder_contains(value: str) -> Contains:
    return contains_ignoring_case("placeholder", value)


def count_at_least(minimum: int) -> AtLeast:
    return AtLeast(key="count", minimum=minimum)


ENABLED = Equals(key="enabled", value=True)
DISABLED = Equals(key="enabled", value=False)
