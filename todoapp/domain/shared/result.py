"""Result values for expected failures.

Domain methods, use cases and ports return ``Ok(value)`` or ``Err(error)``
for outcomes a caller is expected to handle: invalid input, a broken
business rule, a missing todo, a storage fault. Exceptions are left for
bugs.

Example usage:
    >>> title = TaskTitle.create("  Buy groceries ")
    >>> if is_ok(title):
    ...     print(title.value)
    Buy groceries
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``, usually a TodoError."""

    error: E


# Union instead of ``|``: the alias is subscripted with TypeVars at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    return isinstance(result, Err)
