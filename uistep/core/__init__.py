"""Core — Step, results, errors and settings."""

from uistep.core.blocks import given, screen_steps, steps, then, when
from uistep.core.config import StepSettings, get_settings, reset_settings
from uistep.core.errors import (
    AmbiguousMatch,
    AssertionFailed,
    ElementDoesNotExist,
    ErrorCause,
    NoElementsMatchingQuery,
    SourceLocation,
    StepError,
    TimedOutWaitingForElement,
    TimedOutWaitingForQuery,
    TimedOutWaitingForQueryWithPredicate,
)
from uistep.core.result import Either, Err, Left, Ok, Result, Right
from uistep.core.step import Step, always, fail, zip_n
from uistep.core.types import (
    AnnotatedElement,
    AnnotatedQuery,
    BoundBy,
    ElementCategory,
    First,
    Keyboard,
    MatchingIdentifier,
    MatchingPredicate,
    MatchingText,
    OnlyElementOf,
    QueryKind,
    SwipeDirection,
)
from uistep.core.wait import poll_until

__all__ = [
    "AmbiguousMatch",
    "AnnotatedElement",
    "AnnotatedQuery",
    "AssertionFailed",
    "BoundBy",
    "Either",
    "ElementCategory",
    "ElementDoesNotExist",
    "Err",
    "ErrorCause",
    "First",
    "Keyboard",
    "Left",
    "MatchingIdentifier",
    "MatchingPredicate",
    "MatchingText",
    "NoElementsMatchingQuery",
    "Ok",
    "OnlyElementOf",
    "QueryKind",
    "Result",
    "Right",
    "SourceLocation",
    "Step",
    "StepError",
    "StepSettings",
    "SwipeDirection",
    "TimedOutWaitingForElement",
    "TimedOutWaitingForQuery",
    "TimedOutWaitingForQueryWithPredicate",
    "always",
    "fail",
    "get_settings",
    "given",
    "poll_until",
    "reset_settings",
    "screen_steps",
    "steps",
    "then",
    "when",
    "zip_n",
]
