"""
Stateful mapping.

``stateful_map`` threads an explicit state value through a transform instead
of relying on a closure over mutable outer variables. The state lives in the
cursor, so every traversal starts again from the initial state and two
traversals can never see each other's state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from .adapters import seq
from .core import BaseCursor, View
from .protocols import DONE, Cursor, Sequence, Step

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")


class StatefulMapCursor[S, T, U](BaseCursor[U]):
    __slots__ = ("_source", "_transform", "_state")

    def __init__(
        self,
        source: Cursor[T],
        transform: Callable[[S, T], tuple[S, U]],
        initial_state: S,
    ):
        super().__init__()
        self._source = source
        self._transform = transform
        self._state = initial_state

    @property
    def state(self) -> S:
        """The state that will be passed with the next element."""
        return self._state

    def _pull(self) -> Step:
        step = self._source.advance()
        if step.done:
            return DONE
        result = self._transform(self._state, step.value)
        if not isinstance(result, tuple) or len(result) != 2:
            raise TypeError(
                "stateful transform must return a (new_state, output) pair, "
                f"got {type(result).__name__}"
            )
        self._state, output = result
        return Step.of(output)


class StatefulMapView[S, T, U](View[U]):
    """
    View that maps with a state threaded from one element to the next.

    The transform must not keep hidden state of its own; everything it needs
    to remember goes through the returned state. A transform that violates
    this cannot be detected here.
    """

    def __init__(
        self,
        source: Sequence[T],
        transform: Callable[[S, T], tuple[S, U]],
        initial_state: S,
    ):
        self.source = source
        self.transform = transform
        self.initial_state = initial_state

    def cursor(self) -> StatefulMapCursor[S, T, U]:
        return StatefulMapCursor(
            self.source.cursor(), self.transform, self.initial_state
        )


def stateful_map(
    transform: Callable[[S, T], tuple[S, U]],
    initial_state: S,
    sequence: Sequence[T] | Iterable[T],
) -> View[U]:
    """
    Lazily map ``sequence`` with an explicitly threaded state.

    Args:
        transform: Function of (state, element) returning (new_state, output)
        initial_state: State passed with the first element of each traversal
        sequence: A sequence of this package or any re-iterable Python iterable

    Returns:
        A view of the outputs

    Example:
        >>> from seqflow import stateful_map
        >>> running = stateful_map(
        ...     lambda total, x: (total + x, total + x), 0, [1, 3, 5, 7]
        ... )
        >>> running.collect()
        [1, 4, 9, 16]
    """
    return StatefulMapView(seq(sequence), transform, initial_state)
