"""Core — result values threaded through every step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar, Union

if TYPE_CHECKING:
    from uistep.core.errors import StepError

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: StepError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


@dataclass(frozen=True)
class Left(Generic[A]):
    """Produced by the receiver of ``or_else``."""

    value: A


@dataclass(frozen=True)
class Right(Generic[B]):
    """Produced by the fallback of ``or_else``."""

    value: B


Either = Union[Left[A], Right[B]]
