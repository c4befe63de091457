"""
Producer runtime: suspend/resume producers written as plain generators.

A producer is written as ordinary sequential code that ``yield``s values.
Calling a function decorated with :func:`producer` returns a fresh
:class:`ProducerRuntime`; each ``advance()`` resumes the body right after its
previous emission with every local binding intact. ``yield from`` forwards
all emissions of another producer (or of any sequence of this package), which
is how recursive structures are flattened without an explicit stack.
"""

from __future__ import annotations

import enum
import functools
import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any, TypeVar

from .core import BaseCursor, View
from .errors import ReentrantAdvanceError
from .protocols import DONE, Step

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProducerState(enum.Enum):
    """Lifecycle of a producer runtime instance."""

    NOT_STARTED = "not_started"
    SUSPENDED = "suspended"
    RUNNING = "running"
    EXHAUSTED = "exhausted"


class ProducerRuntime[T](BaseCursor[T]):
    """
    A single, independent run of a producer body.

    The instance starts in ``NOT_STARTED``. The first ``advance()`` runs the
    body up to its first emission; later calls resume it. When the body
    returns, or raises, the instance becomes ``EXHAUSTED`` for good: the
    exception propagates out of the triggering ``advance()`` and every later
    call returns ``DONE`` without running anything.
    """

    __slots__ = ("_generator", "_state", "_name")

    def __init__(
        self, generator: Generator[T, Any, Any], name: str = "producer"
    ):
        super().__init__()
        self._generator = generator
        self._state = ProducerState.NOT_STARTED
        self._name = name

    @property
    def state(self) -> ProducerState:
        return self._state

    def _pull(self) -> Step:
        if self._state is ProducerState.RUNNING:
            raise ReentrantAdvanceError(
                f"{self._name} was advanced from inside its own body"
            )
        self._state = ProducerState.RUNNING
        try:
            value = next(self._generator)
        except StopIteration:
            self._state = ProducerState.EXHAUSTED
            return DONE
        except BaseException:
            self._exhaust()
            logger.debug("%s exhausted by an uncaught exception", self._name)
            raise
        self._state = ProducerState.SUSPENDED
        return Step.of(value)

    def _exhaust(self) -> None:
        self._state = ProducerState.EXHAUSTED
        self._done = True

    def __repr__(self) -> str:
        return f"<ProducerRuntime {self._name} {self._state.value}>"


class ProducerSequence[T](View[T]):
    """
    Re-traversable sequence backed by a producer definition.

    Every ``cursor()`` invokes the definition again, so each traversal gets
    its own runtime instance and its own local state.
    """

    def __init__(
        self,
        definition: Callable[..., Generator[T, Any, Any]],
        *args: Any,
        **kwargs: Any,
    ):
        self.definition = definition
        self.args = args
        self.kwargs = kwargs

    def cursor(self) -> ProducerRuntime[T]:
        name = getattr(self.definition, "__qualname__", "producer")
        generator = self.definition(*self.args, **self.kwargs)
        return ProducerRuntime(generator, name)


class ProducerDefinition[T]:
    """
    Callable wrapper returned by :func:`producer`.

    Calling it starts nothing: it returns a not-started runtime instance.
    ``sequence(...)`` binds arguments into a re-traversable view instead.
    """

    def __init__(self, func: Callable[..., Generator[T, Any, Any]]):
        self.func = func
        functools.update_wrapper(self, func)

    def __call__(self, *args: Any, **kwargs: Any) -> ProducerRuntime[T]:
        generator = self.func(*args, **kwargs)
        return ProducerRuntime(generator, self.func.__qualname__)

    def sequence(self, *args: Any, **kwargs: Any) -> ProducerSequence[T]:
        """Bind arguments and return a sequence that restarts per cursor."""
        return ProducerSequence(self.func, *args, **kwargs)


def producer(
    func: Callable[..., Generator[T, Any, Any]],
) -> ProducerDefinition[T]:
    """
    Turn a generator function into a producer definition.

    Args:
        func: A generator function; every ``yield`` is an emission point

    Returns:
        A callable returning a fresh ``ProducerRuntime`` per call

    Example:
        >>> from seqflow import producer
        >>> @producer
        ... def phases():
        ...     yield "boot"
        ...     for i in range(2):
        ...         yield i
        ...     yield "halt"
        >>> list(phases())
        ['boot', 0, 1, 'halt']
    """
    return ProducerDefinition(func)


# Nested structures


@dataclass(frozen=True)
class Branch:
    """
    An inner node of a nested structure.

    Only ``Branch`` nodes are recursed into by :func:`flatten`; every other
    value is a leaf, including strings and other iterables.
    """

    children: tuple[Any, ...]


def nested(obj: Any) -> Any:
    """
    Convert a tree of Python lists and tuples into ``Branch`` nodes.

    The lists/tuples check happens here, once, when the structure is built,
    not during traversal.

    Args:
        obj: A value, or a list/tuple possibly containing further lists/tuples

    Returns:
        A ``Branch`` tree, or ``obj`` unchanged if it is a leaf
    """
    if isinstance(obj, Branch):
        return obj
    if isinstance(obj, list | tuple):
        return Branch(tuple([nested(child) for child in obj]))
    return obj


def _leaves(node: Any) -> Generator[Any, None, None]:
    # Plain generator recursion; only the outermost level gets a runtime.
    if isinstance(node, Branch):
        for child in node.children:
            yield from _leaves(child)
    else:
        yield node


def flatten(tree: Any) -> ProducerSequence[Any]:
    """
    Yield the leaves of a ``Branch`` tree depth-first, left to right.

    Args:
        tree: A ``Branch`` (see :func:`nested`) or a single leaf

    Returns:
        A sequence of leaves

    Example:
        >>> from seqflow import flatten, nested
        >>> flatten(nested([1, [2, [3, 4], 5]])).collect()
        [1, 2, 3, 4, 5]
    """
    return ProducerSequence(_leaves, tree)
