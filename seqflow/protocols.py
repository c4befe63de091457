"""
Core protocol definitions for pull-based sequences.

A sequence hands out cursors; a cursor is advanced one step at a time and
reports either the next value or that it is done. Everything else in the
package (lazy views, producers, eager containers) is built on this contract.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from typing import (
    Any,
    NamedTuple,
    Protocol,
    Self,
    TypeVar,
    runtime_checkable,
)

T_co = TypeVar("T_co", covariant=True)  # Covariant: cursors only emit


class Step(NamedTuple):
    """
    Result of a single ``advance()`` call.

    A step is either the shared ``DONE`` marker or a not-done step carrying
    the next value. Use ``Step.of(value)`` to build the latter.
    """

    done: bool
    value: Any = None

    @classmethod
    def of(cls, value: Any) -> Step:
        """Build a not-done step carrying ``value``."""
        return cls(False, value)


DONE = Step(True)
"""The terminal step. Once a cursor returns it, it returns it forever."""


@runtime_checkable
class Cursor(Protocol[T_co]):
    """
    A mutable traversal position over a sequence.

    Once ``advance()`` has returned ``DONE`` every later call must return
    ``DONE`` again; exhaustion is terminal and never raises.
    """

    @abstractmethod
    def advance(self) -> Step:
        """
        Move to the next element.

        Returns:
            ``DONE`` if there are no more elements, otherwise
            ``Step.of(value)``
        """
        ...


@runtime_checkable
class Sequence(Protocol[T_co]):
    """
    Anything that can hand out fresh, independent cursors.

    A sequence carries no traversal position itself. Obtaining two cursors
    yields two positions that advance independently of each other.
    """

    @abstractmethod
    def cursor(self) -> Cursor[T_co]:
        """Return a new cursor positioned before the first element."""
        ...


class Gatherable(Protocol[T_co]):
    """
    A container family that can be built by draining any sequence.

    The new instance owns its storage; it never shares it with the sequence
    it was built from.
    """

    @classmethod
    @abstractmethod
    def from_sequence(cls, sequence: Sequence[Any] | Iterable[Any]) -> Self:
        """
        Drain ``sequence`` into a new instance of this family.

        Args:
            sequence: A sequence of this package or any Python iterable

        Returns:
            A fully materialized instance
        """
        ...

