"""
seqflow - Lazy, pull-based sequence transformations for Python

A small sequence framework: a cursor protocol, composable lazy views
(map, filter, find, until, take, rest, first), generator-backed producers,
stateful mapping with explicit state, and eager Gatherable containers.
"""

from .adapters import FactorySource, count_from, empty, iterate, repeat, seq
from .core import BaseCursor, View
from .eager import EagerOps, FrozenVec, Vec
from .errors import ReentrantAdvanceError, SeqflowError
from .protocols import DONE, Cursor, Gatherable, Sequence, Step
from .runtime import (
    Branch,
    ProducerRuntime,
    ProducerSequence,
    ProducerState,
    flatten,
    nested,
    producer,
)
from .stateful import StatefulMapView, stateful_map

__version__ = "0.1.0"

__all__ = [
    "Step",
    "DONE",
    "Cursor",
    "Sequence",
    "Gatherable",
    "BaseCursor",
    "View",
    "seq",
    "FactorySource",
    "count_from",
    "iterate",
    "repeat",
    "empty",
    "producer",
    "ProducerRuntime",
    "ProducerSequence",
    "ProducerState",
    "Branch",
    "nested",
    "flatten",
    "stateful_map",
    "StatefulMapView",
    "EagerOps",
    "Vec",
    "FrozenVec",
    "SeqflowError",
    "ReentrantAdvanceError",
]
