"""
Eager operators and the built-in Gatherable families.

A Gatherable family is a container class with a ``from_sequence`` class
method. ``EagerOps`` gives such a family the same operator vocabulary as the
lazy views, except that every operator drains its output straight into a new
instance of the same family. The result never shares storage with its
source, so mutating the source afterwards cannot affect it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Self, TypeVar

from .adapters import IterableSource, IteratorCursor, seq
from .core import View
from .protocols import Sequence

T = TypeVar("T")
U = TypeVar("U")
S = TypeVar("S")


class EagerOps[T]:
    """
    Mixin implementing eager operators for an iterable container family.

    The family must be constructible from a single iterable argument, as
    ``list`` and ``tuple`` are.
    """

    @classmethod
    def from_sequence(cls, sequence: Sequence[Any] | Iterable[Any]) -> Self:
        """
        Drain ``sequence`` into a new instance.

        Args:
            sequence: A sequence of this package or any Python iterable,
                one-shot iterators included; it must be finite

        Returns:
            A new instance owning its own storage
        """
        # One-shot iterators are drained directly.
        if isinstance(sequence, Iterator):
            return cls(sequence)  # type: ignore[call-arg]
        return cls(seq(sequence))  # type: ignore[call-arg]

    def cursor(self) -> IteratorCursor[T]:
        """Return a fresh cursor over the container."""
        return IteratorCursor(iter(self))  # type: ignore[call-overload]

    def lazy(self) -> View[T]:
        """Return a lazy view sharing this container's storage."""
        return IterableSource(self)  # type: ignore[arg-type]

    def _rebuild(self, view: View[Any]) -> Self:
        return type(self).from_sequence(view)

    def map(self, func: Callable[[T], U]) -> Self:
        """
        Apply a function to each element.

        Args:
            func: Function to apply to each element

        Returns:
            A new container of transformed elements
        """
        return self._rebuild(self.lazy().map(func))

    def filter(self, predicate: Callable[[T], bool]) -> Self:
        """
        Keep the elements for which ``predicate`` holds.

        Args:
            predicate: Function that returns True for elements to keep

        Returns:
            A new container of the matching elements, in order
        """
        return self._rebuild(self.lazy().filter(predicate))

    def until(self, predicate: Callable[[T], bool]) -> Self:
        """Return a new container of the elements before the first match."""
        return self._rebuild(self.lazy().until(predicate))

    def take(self, n: int) -> Self:
        """Return a new container of at most the first ``n`` elements."""
        return self._rebuild(self.lazy().take(n))

    def drop(self, n: int) -> Self:
        """Return a new container without the first ``n`` elements."""
        return self._rebuild(self.lazy().drop(n))

    def rest(self) -> Self:
        """Return a new container without the first element."""
        return self._rebuild(self.lazy().rest())

    def stateful_map(
        self, transform: Callable[[S, T], tuple[S, U]], initial_state: S
    ) -> Self:
        """
        Map with an explicitly threaded state, starting from
        ``initial_state``.
        """
        view = self.lazy().stateful_map(transform, initial_state)
        return self._rebuild(view)

    def reduce(self, func: Callable[[U, T], U], seed: U) -> U:
        """
        Fold the elements from left to right.

        Args:
            func: Function of (accumulator, element) returning an accumulator
            seed: Initial accumulator

        Returns:
            The final accumulator
        """
        return self.lazy().reduce(func, seed)

    def find(
        self, predicate: Callable[[T], bool], default: Any = None
    ) -> T | Any:
        """
        Return the first element satisfying ``predicate``.

        Args:
            predicate: Function that returns True for the wanted element
            default: Value returned when nothing matches

        Returns:
            The first matching element, or ``default``
        """
        return self.lazy().find(predicate).first(default)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({super().__repr__()})"


class Vec[T](EagerOps[T], list[T]):
    """
    A list that is a Gatherable family.

    Example:
        >>> from seqflow import Vec
        >>> Vec([1, 2, 3, 4]).filter(lambda x: x % 2 == 0).map(str)
        Vec(['2', '4'])
    """


class FrozenVec[T](EagerOps[T], tuple[T, ...]):
    """An immutable, hashable Gatherable family backed by ``tuple``."""
