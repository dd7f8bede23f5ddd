"""Present/absent outcome of resolving a configuration document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Present(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Absent:
    reason: str = "no value"


Resolution = Union[Present[T], Absent]


def is_present(resolution: Resolution[T]) -> bool:
    return isinstance(resolution, Present)


def map_resolution(resolution: Resolution[T], func: Callable[[T], U]) -> Resolution[U]:
    """Apply ``func`` to a present value, leaving absence untouched."""

    if isinstance(resolution, Present):
        return Present(func(resolution.value))
    return resolution


def then(resolution: Resolution[T], func: Callable[[T], Resolution[U]]) -> Resolution[U]:
    """Chain a resolution-producing step onto a present value."""

    if isinstance(resolution, Present):
        return func(resolution.value)
    return resolution


def value_or(resolution: Resolution[T], default: U) -> T | U:
    if isinstance(resolution, Present):
        return resolution.value
    return default
