from uistep.core import (
    AmbiguousMatch,
    AnnotatedElement,
    AnnotatedQuery,
    AssertionFailed,
    Either,
    ElementCategory,
    ElementDoesNotExist,
    Err,
    Left,
    NoElementsMatchingQuery,
    Ok,
    QueryKind,
    Result,
    Right,
    SourceLocation,
    Step,
    StepError,
    StepSettings,
    SwipeDirection,
    TimedOutWaitingForElement,
    TimedOutWaitingForQuery,
    TimedOutWaitingForQueryWithPredicate,
    always,
    fail,
    get_settings,
    given,
    screen_steps,
    steps,
    then,
    when,
    zip_n,
)
from uistep.drivers import Driver, PlaywrightDriver, SimDriver, SimElement
from uistep.logging import configure_logging
from uistep.query import (
    DISABLED,
    ENABLED,
    ElementStep,
    FindStep,
    Predicate,
    QueryStep,
    find,
    find_keyboard,
    label_contains,
    placeholder_contains,
    screen,
)
from uistep.runner import StepRun, execute
from uistep.screens import Screen

__all__ = [
    "AmbiguousMatch",
    "AnnotatedElement",
    "AnnotatedQuery",
    "AssertionFailed",
    "DISABLED",
    "Driver",
    "ENABLED",
    "Either",
    "ElementCategory",
    "ElementDoesNotExist",
    "ElementStep",
    "Err",
    "FindStep",
    "Left",
    "NoElementsMatchingQuery",
    "Ok",
    "PlaywrightDriver",
    "Predicate",
    "QueryKind",
    "QueryStep",
    "Result",
    "Right",
    "Screen",
    "SimDriver",
    "SimElement",
    "SourceLocation",
    "Step",
    "StepError",
    "StepRun",
    "StepSettings",
    "SwipeDirection",
    "TimedOutWaitingForElement",
    "TimedOutWaitingForQuery",
    "TimedOutWaitingForQueryWithPredicate",
    "always",
    "configure_logging",
    "execute",
    "fail",
    "find",
    "find_keyboard",
    "get_settings",
    "given",
    "label_contains",
    "placeholder_contains",
    "screen",
    "screen_steps",
    "steps",
    "then",
    "when",
    "zip_n",
]
