"""Query layer — predicates, narrowing and element interaction."""

from uistep.query.predicates import (
    DISABLED,
    ENABLED,
    AllOf,
    AtLeast,
    Contains,
    Equals,
    Predicate,
    contains_ignoring_case,
    count_at_least,
    label_contains,
    placeholder_contains,
)
from uistep.query.steps import (
    ElementStep,
    FindStep,
    QueryStep,
    ScreenGestureStep,
    find,
    find_keyboard,
    screen,
)

__all__ = [
    "DISABLED",
    "ENABLED",
    "AllOf",
    "AtLeast",
    "Contains",
    "ElementStep",
    "Equals",
    "FindStep",
    "Predicate",
    "QueryStep",
    "ScreenGestureStep",
    "contains_ignoring_case",
    "count_at_least",
    "find",
    "find_keyboard",
    "label_contains",
    "placeholder_contains",
    "screen",
]
