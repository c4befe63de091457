"""
Adapters for turning standard Python objects into sequences.

This module provides the ergonomic entry points: ``seq`` wraps existing
data, while ``count_from``, ``iterate`` and ``repeat`` build sources that
may be infinite.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar

from .core import BaseCursor, View
from .protocols import DONE, Cursor, Sequence, Step

T = TypeVar("T")


class IteratorCursor[T](BaseCursor[T]):
    """Cursor over a plain Python iterator."""

    __slots__ = ("_iterator",)

    def __init__(self, iterator: Iterator[T]):
        super().__init__()
        self._iterator = iterator

    def _pull(self) -> Step:
        try:
            return Step.of(next(self._iterator))
        except StopIteration:
            return DONE


class ForeignCursor[T](BaseCursor[T]):
    """
    Cursor wrapping one obtained from a user-defined sequence.

    The wrapper enforces the terminal done state even if the wrapped cursor
    does not.
    """

    __slots__ = ("_cursor",)

    def __init__(self, cursor: Cursor[T]):
        super().__init__()
        self._cursor = cursor

    def _pull(self) -> Step:
        return self._cursor.advance()


class IterableSource[T](View[T]):
    """
    Sequence over a re-iterable Python collection.

    Each cursor calls ``iter()`` on the data again, so the data must not be
    a one-shot iterator; ``seq`` rejects those.
    """

    def __init__(self, data: Iterable[T]):
        self.data = data

    def cursor(self) -> IteratorCursor[T]:
        return IteratorCursor(iter(self.data))


class FactorySource[T](View[T]):
    """Sequence whose cursors iterate a fresh iterator from a factory."""

    def __init__(self, factory: Callable[[], Iterator[T]]):
        self.factory = factory

    def cursor(self) -> IteratorCursor[T]:
        return IteratorCursor(self.factory())


class SequenceSource[T](View[T]):
    """View over a user-defined object implementing the sequence protocol."""

    def __init__(self, sequence: Sequence[T]):
        self.sequence = sequence

    def cursor(self) -> ForeignCursor[T]:
        return ForeignCursor(self.sequence.cursor())


def seq[T](data: Sequence[T] | Iterable[T]) -> View[T]:
    """
    Wrap data in a lazy view.

    Args:
        data: A view (returned unchanged), an object with a ``cursor()``
            method, or any Python iterable

    Returns:
        A view over the data

    Raises:
        TypeError: If the data is neither a sequence nor iterable, or is a
            one-shot iterator whose cursors could not move independently

    Example:
        >>> from seqflow import seq
        >>> seq([1, 2, 3, 4]).map(lambda x: x * 10).take(2).collect()
        [10, 20]
    """
    if isinstance(data, View):
        return data
    elif isinstance(data, Iterator):
        raise TypeError(
            "Cannot build a re-traversable sequence from a one-shot "
            f"{type(data).__name__}; pass a factory to FactorySource or a "
            f"generator function to ProducerSequence instead"
        )
    elif isinstance(data, Iterable):
        return IterableSource(data)
    elif isinstance(data, Sequence):
        return SequenceSource(data)
    else:
        raise TypeError(
            f"Cannot build a sequence from {type(data).__name__}"
        )


def count_from(start: int = 0, step: int = 1) -> View[int]:
    """
    Infinite arithmetic sequence ``start, start + step, ...``.

    Args:
        start: First value
        step: Difference between consecutive values

    Returns:
        An infinite view
    """
    return FactorySource(lambda: itertools.count(start, step))


def iterate[T](func: Callable[[T], T], seed: T) -> View[T]:
    """
    Infinite sequence ``seed, func(seed), func(func(seed)), ...``.

    Args:
        func: Function producing the next value from the previous one
        seed: First value

    Returns:
        An infinite view
    """

    def generate() -> Iterator[T]:
        value = seed
        while True:
            yield value
            value = func(value)

    return FactorySource(generate)


def repeat[T](value: T, times: int | None = None) -> View[T]:
    """
    Repeat ``value`` forever, or ``times`` times.

    Raises:
        ValueError: If times < 0
    """
    if times is None:
        return FactorySource(lambda: itertools.repeat(value))
    if times < 0:
        raise ValueError(f"Cannot repeat a negative number of times: {times}")
    return FactorySource(lambda: itertools.repeat(value, times))


def empty() -> View[Any]:
    """Return a view with no elements."""
    return IterableSource(())
