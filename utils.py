"""
Utility functions for the lazy numeric sequence.

This module holds the error taxonomy, the safe-integer guards shared by the
bounds resolver and the operator chain, and the helper that lets callbacks
accept fewer arguments than the chain passes them.
"""

import inspect
import math
from numbers import Integral
from typing import Any, Callable, Union

MAX_SAFE_INTEGER = 2 ** 53 - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER

Number = Union[int, float]


class SequenceError(Exception):
    """Base class for every error raised by the sequence library."""
    pass


class InvalidInputError(SequenceError, ValueError):
    """Raised when a constructor or chain method receives an unusable argument."""
    pass


class InvalidStart(InvalidInputError):
    """Raised when the starting value is not a safe integer."""
    pass


class InvalidEnd(InvalidInputError):
    """Raised when the ending value is neither a safe integer nor infinite."""
    pass


class InvalidStep(InvalidInputError):
    """Raised when the step is not a nonzero safe integer."""
    pass


class InvalidCount(InvalidInputError):
    """Raised when take() receives something other than a non-negative safe integer."""
    pass


class InfiniteSequenceError(SequenceError):
    """Raised when an eager operation is invoked on an infinite sequence."""
    pass


class InfiniteReversal(InfiniteSequenceError):
    """Raised when reversing a sequence that has no last element."""
    pass


class InfiniteReduction(InfiniteSequenceError):
    """Raised when reducing a sequence that never ends."""
    pass


class InfiniteExport(InfiniteSequenceError):
    """Raised when exporting a sequence that never ends to a list."""
    pass


def is_safe_integer(value: Any) -> bool:
    """Return True for ints (and integral floats) within the safe-integer range"""
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER
    if isinstance(value, float) and value.is_integer():
        return MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER
    return False


def is_integer_or_infinite(value: Any) -> bool:
    """Return True for any integer value or for positive/negative infinity"""
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return True
    if isinstance(value, float):
        return value.is_integer() or math.isinf(value)
    return False


def is_infinite(value: Any) -> bool:
    """Return True for positive/negative infinity without converting ints to float"""
    return isinstance(value, float) and math.isinf(value)


def saturating_increment(counter: Number) -> Number:
    """Add one to a counter, sticking at infinity once the safe range is used up"""
    if counter < MAX_SAFE_INTEGER:
        return counter + 1
    return math.inf


def clamp_to_safe(value: Number) -> Number:
    """Latch values outside the safe-integer range at the matching signed infinity"""
    if abs(value) > MAX_SAFE_INTEGER:
        return math.copysign(math.inf, value)
    return value


def adapt_callback(fn: Callable, arity: int) -> Callable:
    """
    Wrap fn so that it can always be called with `arity` positional arguments.

    The chain calls map/filter/stop callbacks as fn(value, index, node) and
    reduce operations as fn(accumulator, value, index, node). Most callbacks
    only care about the leading arguments, so a callback declaring fewer
    positional parameters receives just those. Callables whose signature
    cannot be inspected (some builtins and C types) get the mandatory leading
    arguments only: the value, or the accumulator and the value.
    """
    if not callable(fn):
        raise TypeError(f"Expected a callable, {fn!r} was provided")

    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        accepted = arity - 2
    else:
        accepted = 0
        for parameter in parameters:
            if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
                return fn
            if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY,
                                  inspect.Parameter.POSITIONAL_OR_KEYWORD):
                accepted += 1

    if accepted >= arity:
        return fn

    def adapted(*args):
        return fn(*args[:accepted])

    adapted.__wrapped__ = fn
    return adapted
