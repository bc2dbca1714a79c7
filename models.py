"""Pydantic model for the immutable bounds shared by every node of a sequence chain."""

import math
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from utils import (
    MAX_SAFE_INTEGER, MIN_SAFE_INTEGER,
    InvalidStart, InvalidEnd, InvalidStep,
    is_safe_integer, is_integer_or_infinite, is_infinite,
)


class SequenceBounds(BaseModel):
    """Start/end/step triple of an arithmetic progression (inclusive start, exclusive end)."""
    model_config = ConfigDict(frozen=True)

    start: int = Field(
        ...,
        description="First value of the progression"
    )
    end: Union[int, float] = Field(
        ...,
        description="Exclusive bound; a float only for positive/negative infinity"
    )
    step: int = Field(
        ...,
        description="Nonzero distance between consecutive values"
    )

    @classmethod
    def resolve(cls, start, end, step: Optional[int] = None) -> "SequenceBounds":
        """Validate user supplied bounds and derive the step when it is omitted"""
        if not is_safe_integer(start):
            raise InvalidStart(
                f"The starting value must be a safe integer, {start!r} was provided"
            )
        if not is_integer_or_infinite(end):
            raise InvalidEnd(
                f"The ending value must be an integer or infinity, {end!r} was provided"
            )
        if not is_infinite(end) and not MIN_SAFE_INTEGER <= end <= MAX_SAFE_INTEGER:
            raise InvalidEnd(
                f"The ending value must be within the [MIN_SAFE_INTEGER, "
                f"MAX_SAFE_INTEGER] range or infinite, {end!r} was provided"
            )

        if step is None:
            step = 1 if end >= start else -1
        else:
            if not is_safe_integer(step):
                raise InvalidStep(
                    f"The step must be either None or a safe integer, {step!r} was provided"
                )
            if not step:
                raise InvalidStep("The step cannot be 0")

        return cls(
            start=int(start),
            end=end if is_infinite(end) else int(end),
            step=int(step),
        )

    @property
    def is_finite(self) -> bool:
        return not is_infinite(self.end)

    def has_passed(self, value) -> bool:
        """Whether value lies at or beyond the end bound in the direction of the step"""
        if not self.is_finite:
            return False
        if self.step > 0:
            return value >= self.end
        return value <= self.end

    def count(self) -> Union[int, float]:
        """Number of values in the progression (ceiling of (end - start) / step, never negative)"""
        if not self.is_finite:
            return math.inf
        return max(0, -((self.start - self.end) // self.step))

    def last_value(self) -> Optional[int]:
        """Final value of a finite, non-empty progression"""
        total = self.count()
        if not total or is_infinite(total):
            return None
        return self.start + (total - 1) * self.step

    def reversed(self) -> "SequenceBounds":
        """Bounds walking the same values backwards. Only meaningful for finite bounds."""
        last = self.last_value()
        if last is None:
            return SequenceBounds(start=self.start, end=self.start, step=-self.step)
        # The end may leave the safe range here; the emitter latches and stops on it.
        return SequenceBounds(start=last, end=self.start - self.step, step=-self.step)
