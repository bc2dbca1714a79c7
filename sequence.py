"""
Lazy numeric sequences with chainable transformations.

A chain is a linked list of Range nodes. The root owns an ArithmeticEmitter
walking start, start + step, ... up to the exclusive end bound; every map,
filter, take_while or take call wraps the node it is called on. Values are
only computed when something pulls them through next().
"""

import logging
import math
from collections import deque
from typing import Any, Callable, NamedTuple, Optional

from models import SequenceBounds
from utils import (
    InvalidCount, InfiniteReversal, InfiniteReduction, InfiniteExport,
    adapt_callback, clamp_to_safe, is_safe_integer, saturating_increment,
)

logger = logging.getLogger(__name__)


class Iteration(NamedTuple):
    """Result of a single next() call"""
    done: bool
    value: Any = None


DONE = Iteration(True)


class ArithmeticEmitter:
    """Explicit state machine producing the raw progression of a chain's root."""

    __slots__ = ("bounds", "current")

    def __init__(self, bounds: SequenceBounds, current=None):
        self.bounds = bounds
        # Next value to hand out, not the last one handed out.
        self.current = bounds.start if current is None else current

    @property
    def done(self) -> bool:
        return self.bounds.has_passed(self.current)

    def advance(self) -> Iteration:
        if self.done:
            return DONE
        value = self.current
        self.current = clamp_to_safe(value + self.bounds.step)
        return Iteration(False, value)

    def copy(self) -> "ArithmeticEmitter":
        return ArithmeticEmitter(self.bounds, self.current)


class Range:
    """
    One node of a lazy sequence chain. Nodes are iterators over themselves,
    so `for value in node` and `list(node)` consume the node.
    """

    def __init__(self, bounds: SequenceBounds, filter_fn=None, map_fn=None,
                 stop_fn=None, parent: Optional["Range"] = None):
        self._bounds = bounds
        self._filter = filter_fn
        self._map = map_fn
        self._stop = stop_fn
        self._parent = parent
        self._emitter = ArithmeticEmitter(bounds) if parent is None else None

        self._current_value = bounds.start
        self._index = 0
        self._length = None
        self._pending = deque()          # (Iteration, next_index) pairs awaiting delivery
        self._original = None            # snapshot restored by reset() on buffered nodes
        self._produced = 0
        self._finite = bounds.is_finite if parent is None else parent.is_finite
        self._exhausted = False

    # --------- inspection ----------
    @property
    def start(self):
        return self._bounds.start

    @property
    def end(self):
        return self._bounds.end

    @property
    def step(self):
        return self._bounds.step

    @property
    def parent(self) -> Optional["Range"]:
        return self._parent

    @property
    def index(self):
        return self._index

    @property
    def produced(self):
        return self._produced

    @property
    def current_value(self):
        return self._current_value

    @property
    def is_finite(self) -> bool:
        return self._finite

    def __repr__(self):
        return (f"{type(self).__name__}(start={self.start!r}, end={self.end!r}, "
                f"step={self.step!r}, index={self._index!r})")

    # --------- length ----------
    @property
    def length(self):
        """Total number of values this node produces, memoized after the first call"""
        if self._length is not None:
            return self._length

        if not self._finite:
            node = self
            filtered = node._filter is not None
            while not filtered and node._parent is not None:
                node = node._parent
                filtered = node._filter is not None
            if filtered:
                logger.warning(
                    "The length of filtered infinite sequences is always assumed to be "
                    "infinite, even if that is not the case, because there is no way to "
                    "reliably determine whether a filtered infinite sequence would end up "
                    "having a finite number of elements in a finite time, given that the "
                    "filter is a callback."
                )
            self._length = math.inf
        elif self._filter is None and self._stop is None:
            if self._parent is not None:
                self._length = self._parent.length
            else:
                self._length = self._bounds.count()
        else:
            index = self._pending[-1][1] if self._pending else self._index
            iteration, next_index = self._generate(index)
            while not iteration.done:
                self._pending.append((iteration, next_index))
                iteration, next_index = self._generate(next_index)
            logger.debug("Pre-generated %d values to compute the length", len(self._pending))
            self._length = self._produced + len(self._pending)

        return self._length

    count = length

    # --------- iterator protocol ----------
    def next(self) -> Iteration:
        """Produce the next Iteration, draining pre-generated values first"""
        if self._pending:
            iteration, next_index = self._pending.popleft()
        else:
            iteration, next_index = self._generate(self._index)

        if iteration.done:
            return iteration

        self._index = next_index
        self._current_value = iteration.value
        self._produced = saturating_increment(self._produced)
        return iteration

    def __next__(self):
        iteration = self.next()
        if iteration.done:
            raise StopIteration
        return iteration.value

    def __iter__(self):
        return self

    def _pull(self) -> Iteration:
        if self._parent is not None:
            return self._parent.next()
        return self._emitter.advance()

    def _generate(self, index):
        """Compute a fresh (Iteration, next_index) pair, skipping filtered values"""
        next_index = saturating_increment(index)
        if self._exhausted:
            return DONE, next_index

        while True:
            iteration = self._pull()
            if iteration.done:
                self._exhausted = True
                return DONE, next_index
            if self._filter is None or self._filter(iteration.value, next_index, self):
                break

        value = iteration.value
        if self._map is not None:
            value = self._map(value, next_index, self)

        if self._stop is not None and not self._stop(value, next_index, self):
            self._exhausted = True
            return DONE, next_index

        return Iteration(False, value), next_index

    # --------- chainable operators (lazy) ----------
    def map(self, fn: Callable) -> "Range":
        return Range(self._bounds, map_fn=adapt_callback(fn, 3), parent=self)

    def filter(self, pred: Callable) -> "Range":
        return Range(self._bounds, filter_fn=adapt_callback(pred, 3), parent=self)

    def take_while(self, pred: Callable) -> "Range":
        """Stop the sequence at the first value for which pred returns False"""
        return Range(self._bounds, stop_fn=adapt_callback(pred, 3), parent=self)

    def take(self, count) -> "Range":
        """Limit the sequence to its first `count` values; the result is always finite"""
        if not is_safe_integer(count) or count < 0:
            raise InvalidCount(
                f"The count limit must be a non-negative safe integer, {count!r} was provided"
            )
        limited = self.take_while(lambda _, index: index <= count)
        limited._finite = True
        return limited

    def enumerate(self) -> "Range":
        """Pair every value with its 1-based position as (index, value)"""
        return self.map(lambda value, index: (index, value))

    def reverse(self) -> "Range":
        if not self._finite:
            raise InfiniteReversal("Infinite sequences cannot be reversed")

        if self._parent is None and not self._index and not self._pending:
            return Range(self._bounds.reversed())

        values = self.clone().to_list()
        values.reverse()
        logger.debug("Buffered %d values for reversal", len(values))
        bounds = self._bounds.reversed() if self._bounds.is_finite else self._bounds
        return Range._buffered(values, bounds)

    @classmethod
    def _buffered(cls, values, bounds: SequenceBounds) -> "Range":
        """Finite node replaying `values`; bounds only describe the reversed interval"""
        empty = cls(SequenceBounds(start=bounds.start, end=bounds.start, step=1))
        node = cls(bounds, parent=empty)
        node._pending = deque(
            (Iteration(False, value), index) for index, value in enumerate(values, 1)
        )
        node._original = list(node._pending)
        node._length = len(values)
        return node

    # --------- forcing evaluation ----------
    def reduce(self, initial, op: Callable):
        """Fold the remaining values left to right with op(accumulator, value, index, node)"""
        if not self._finite:
            raise InfiniteReduction(
                "The reduce() method cannot be applied to infinite sequences"
            )
        op = adapt_callback(op, 4)
        result = initial
        for value in self:
            result = op(result, value, self._index, self)
        return result

    def to_list(self) -> list:
        if not self._finite:
            raise InfiniteExport("Infinite sequences cannot be exported to a list")
        return list(self)

    to_array = to_list

    # --------- state ----------
    def reset(self) -> None:
        """Rewind the whole chain to its initial state"""
        if self._parent is not None:
            self._parent.reset()
        else:
            self._emitter = ArithmeticEmitter(self._bounds)
        self._current_value = self._bounds.start
        self._index = 0
        self._produced = 0
        self._exhausted = False
        if self._original is not None:
            self._pending = deque(self._original)
        else:
            self._pending = deque()

    def clone(self) -> "Range":
        """Independent copy of the chain positioned where this node currently is"""
        parent = self._parent.clone() if self._parent is not None else None
        twin = Range(self._bounds, self._filter, self._map, self._stop, parent)
        if self._emitter is not None:
            twin._emitter = self._emitter.copy()
        twin._current_value = self._current_value
        twin._index = self._index
        twin._length = self._length
        twin._pending = deque(self._pending)
        if self._original is not None:
            twin._original = list(self._original)
        twin._produced = self._produced
        twin._finite = self._finite
        twin._exhausted = self._exhausted
        return twin


def sequence(start, end, step: Optional[int] = None) -> Range:
    """
    Create a lazy arithmetic sequence from start (inclusive) to end (exclusive).

    end may be math.inf or -math.inf for an unbounded sequence. When step is
    omitted it is 1 if end >= start and -1 otherwise.
    """
    return Range(SequenceBounds.resolve(start, end, step))
