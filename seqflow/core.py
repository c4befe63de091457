"""
Core lazy view implementations.

This module contains the ``View`` base class, which provides the lazy
operator vocabulary (map, filter, find, until, take, rest, ...) and the
terminal operations that pull a chain of views, together with the concrete
views and their cursors.

Views share their source instead of copying it. Mutating a source collection
while one of its views is being traversed gives unspecified results; the
caller must not do it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from .protocols import DONE, Cursor, Sequence, Step

T = TypeVar("T")
U = TypeVar("U")
S = TypeVar("S")
G = TypeVar("G")


class BaseCursor[T](ABC):
    """
    Base class for the cursors handed out by views.

    Subclasses implement ``_pull``; this class latches the done state so that
    ``advance`` keeps returning ``DONE`` once exhaustion has been observed,
    and makes every cursor a Python iterator.
    """

    __slots__ = ("_done",)

    def __init__(self) -> None:
        self._done = False

    @abstractmethod
    def _pull(self) -> Step:
        """Produce the next step. Only called while not done."""
        ...

    def advance(self) -> Step:
        """
        Move to the next element.

        Returns:
            ``DONE`` when exhausted, otherwise ``Step.of(value)``
        """
        if self._done:
            return DONE
        step = self._pull()
        if step.done:
            self._done = True
        return step

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        step = self.advance()
        if step.done:
            raise StopIteration
        return step.value


class View[T](ABC):
    """
    Base class for lazy sequences.

    A view describes how to pull values; constructing one performs no work.
    Every call to ``cursor()`` starts an independent traversal, so a view can
    be traversed any number of times.

    Terminal operations that drain the whole view (``collect``, ``reduce``,
    ``count``, ``gather``) never return on an infinite view. Bound it first
    with ``take``, ``until`` or ``find``.
    """

    @abstractmethod
    def cursor(self) -> BaseCursor[T]:
        """Return a fresh cursor over this view."""
        ...

    def __iter__(self) -> Iterator[T]:
        return self.cursor()

    # Lazy operators

    def map(self, func: Callable[[T], U]) -> View[U]:
        """
        Apply a function to each element on demand.

        Args:
            func: Function to apply to each element

        Returns:
            A new view of transformed elements
        """
        return MapView(self, func)

    def filter(self, predicate: Callable[[T], bool]) -> View[T]:
        """
        Keep the elements for which ``predicate`` holds, in order.

        Args:
            predicate: Function that returns True for elements to keep

        Returns:
            A new view of the matching elements
        """
        return FilterView(self, predicate)

    def find(self, predicate: Callable[[T], bool]) -> View[T]:
        """
        Narrow the view to the first element satisfying ``predicate``.

        The source is not pulled any further once the element is found.

        Args:
            predicate: Function that returns True for the wanted element

        Returns:
            A view of at most one element
        """
        return FindView(self, predicate)

    def until(self, predicate: Callable[[T], bool]) -> View[T]:
        """
        Emit elements until ``predicate`` holds.

        The element that triggers the predicate is not emitted.

        Args:
            predicate: Stop condition

        Returns:
            A new view ending before the first matching element
        """
        return UntilView(self, predicate)

    def take(self, n: int) -> View[T]:
        """
        Emit at most the first ``n`` elements.

        Args:
            n: Maximum number of elements (must be >= 0)

        Returns:
            A new view of at most ``n`` elements

        Raises:
            ValueError: If n < 0
        """
        return TakeView(self, n)

    def drop(self, n: int) -> View[T]:
        """
        Skip the first ``n`` elements.

        Args:
            n: Number of elements to skip (must be >= 0)

        Returns:
            A new view starting after the skipped elements

        Raises:
            ValueError: If n < 0
        """
        return DropView(self, n)

    def rest(self) -> View[T]:
        """Return a view of every element after the first."""
        return DropView(self, 1)

    def stateful_map(
        self, transform: Callable[[S, T], tuple[S, U]], initial_state: S
    ) -> View[U]:
        """
        Map with an explicitly threaded state.

        ``transform(state, element)`` must return ``(new_state, output)``.
        Each traversal starts again from ``initial_state``.

        Args:
            transform: Function of (state, element) returning (state, output)
            initial_state: State used for the first element of a traversal

        Returns:
            A new view of the outputs
        """
        from .stateful import StatefulMapView

        return StatefulMapView(self, transform, initial_state)

    # Terminal operations

    def first(self, default: Any = None) -> T | Any:
        """
        Return the first element, pulling only as far as that element.

        Args:
            default: Value returned when the view is empty

        Returns:
            The first element, or ``default``
        """
        step = self.cursor().advance()
        return default if step.done else step.value

    def reduce(self, func: Callable[[U, T], U], seed: U) -> U:
        """
        Fold the elements from left to right.

        Args:
            func: Function of (accumulator, element) returning an accumulator
            seed: Initial accumulator

        Returns:
            The final accumulator, or ``seed`` for an empty view
        """
        accumulator = seed
        for item in self:
            accumulator = func(accumulator, item)
        return accumulator

    def collect(self) -> list[T]:
        """Drain the view into a new list."""
        return list(self)

    def gather(self, family: type[G]) -> G:
        """
        Drain the view into a new instance of a Gatherable family.

        Args:
            family: A class providing ``from_sequence``

        Returns:
            A materialized instance that owns its own storage
        """
        return family.from_sequence(self)  # type: ignore[attr-defined]

    def count(self) -> int:
        """Count the elements by draining the view."""
        count = 0
        for _ in self:
            count += 1
        return count

    def for_each(self, func: Callable[[T], None]) -> None:
        """Call ``func`` on every element."""
        for item in self:
            func(item)

    def any(self, predicate: Callable[[T], bool] | None = None) -> bool:
        """
        Check if any element matches the predicate.

        Stops at the first match.

        Args:
            predicate: Optional predicate function (defaults to bool)
        """
        if predicate is None:
            predicate = bool
        return not self.find(predicate).cursor().advance().done

    def all(self, predicate: Callable[[T], bool] | None = None) -> bool:
        """
        Check if all elements match the predicate.

        Stops at the first element that does not match.

        Args:
            predicate: Optional predicate function (defaults to bool)
        """
        if predicate is None:
            predicate = bool
        return self.find(lambda x: not predicate(x)).cursor().advance().done


# Concrete views


class MapCursor[T, U](BaseCursor[U]):
    __slots__ = ("_source", "_func")

    def __init__(self, source: Cursor[T], func: Callable[[T], U]):
        super().__init__()
        self._source = source
        self._func = func

    def _pull(self) -> Step:
        step = self._source.advance()
        if step.done:
            return DONE
        return Step.of(self._func(step.value))


class MapView[T, U](View[U]):
    """View that maps a function over elements."""

    def __init__(self, source: Sequence[T], func: Callable[[T], U]):
        self.source = source
        self.func = func

    def cursor(self) -> MapCursor[T, U]:
        return MapCursor(self.source.cursor(), self.func)


class FilterCursor[T](BaseCursor[T]):
    __slots__ = ("_source", "_predicate")

    def __init__(self, source: Cursor[T], predicate: Callable[[T], bool]):
        super().__init__()
        self._source = source
        self._predicate = predicate

    def _pull(self) -> Step:
        while True:
            step = self._source.advance()
            if step.done or self._predicate(step.value):
                return step


class FilterView[T](View[T]):
    """View that keeps elements matching a predicate."""

    def __init__(self, source: Sequence[T], predicate: Callable[[T], bool]):
        self.source = source
        self.predicate = predicate

    def cursor(self) -> FilterCursor[T]:
        return FilterCursor(self.source.cursor(), self.predicate)


class FindCursor[T](FilterCursor[T]):
    __slots__ = ("_found",)

    def __init__(self, source: Cursor[T], predicate: Callable[[T], bool]):
        super().__init__(source, predicate)
        self._found = False

    def _pull(self) -> Step:
        if self._found:
            return DONE
        step = super()._pull()
        self._found = not step.done
        return step


class FindView[T](View[T]):
    """View of the first element matching a predicate."""

    def __init__(self, source: Sequence[T], predicate: Callable[[T], bool]):
        self.source = source
        self.predicate = predicate

    def cursor(self) -> FindCursor[T]:
        return FindCursor(self.source.cursor(), self.predicate)


class UntilCursor[T](BaseCursor[T]):
    __slots__ = ("_source", "_predicate")

    def __init__(self, source: Cursor[T], predicate: Callable[[T], bool]):
        super().__init__()
        self._source = source
        self._predicate = predicate

    def _pull(self) -> Step:
        step = self._source.advance()
        if step.done or self._predicate(step.value):
            return DONE
        return step


class UntilView[T](View[T]):
    """View that stops before the first element matching a predicate."""

    def __init__(self, source: Sequence[T], predicate: Callable[[T], bool]):
        self.source = source
        self.predicate = predicate

    def cursor(self) -> UntilCursor[T]:
        return UntilCursor(self.source.cursor(), self.predicate)


class TakeCursor[T](BaseCursor[T]):
    __slots__ = ("_source", "_remaining")

    def __init__(self, source: Cursor[T], n: int):
        super().__init__()
        self._source = source
        self._remaining = n

    def _pull(self) -> Step:
        # Never touch the source once the quota is used up.
        if self._remaining <= 0:
            return DONE
        self._remaining -= 1
        return self._source.advance()


class TakeView[T](View[T]):
    """View of at most the first n elements."""

    def __init__(self, source: Sequence[T], n: int):
        if n < 0:
            raise ValueError(f"Cannot take a negative count: {n}")
        self.source = source
        self.n = n

    def cursor(self) -> TakeCursor[T]:
        return TakeCursor(self.source.cursor(), self.n)


class DropCursor[T](BaseCursor[T]):
    __slots__ = ("_source", "_pending")

    def __init__(self, source: Cursor[T], n: int):
        super().__init__()
        self._source = source
        self._pending = n

    def _pull(self) -> Step:
        while self._pending > 0:
            self._pending -= 1
            if self._source.advance().done:
                return DONE
        return self._source.advance()


class DropView[T](View[T]):
    """View that skips the first n elements."""

    def __init__(self, source: Sequence[T], n: int):
        if n < 0:
            raise ValueError(f"Cannot drop a negative count: {n}")
        self.source = source
        self.n = n

    def cursor(self) -> DropCursor[T]:
        return DropCursor(self.source.cursor(), self.n)
