"""Immutable span-of-time values.

A Duration is either a finite, non-negative count of milliseconds or the
distinguished ``forever`` value. Durations are only built through the
``from_*`` factories, ``forever()`` and the arithmetic operations, which
validate their inputs before an instance exists.

Warning:
    This is not calendar arithmetic. A day is always 24 hours here, which is
    not true of real dates. Use it to translate between units and to carry
    "how long" around, not to add time to datetimes.

Conversions chain through the intermediate units (milliseconds to seconds to
minutes to hours to days), so floating point error compounds along the way.
Prefer going from a bigger unit straight to the smallest one you need, e.g.
``Duration.from_days(2).to_seconds()``, over round-tripping.
"""

import logging
import math
import numbers
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from functools import total_ordering
from typing import Any

from typing_extensions import override

from timespan.errors import InvalidArgumentError, InvalidOperationError
from timespan.util import FOREVER_MILLISECONDS, SECOND

logger = logging.getLogger(__name__)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_magnitude(value: Any, unit: str) -> Any:
    """Return ``value`` if it is a usable magnitude, else raise."""
    if not _is_real(value):
        raise InvalidArgumentError(
            f"Duration {unit} must be a real number.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )
    if value < 0:
        raise InvalidArgumentError(
            f"Duration must be positive, got {value!r} {unit}"
        )
    try:
        finite = math.isfinite(value)
    except OverflowError as exc:
        # ints beyond the float range
        raise InvalidArgumentError(
            f"Duration {unit} is too large to represent, got {value!r}\n"
            f"Hint: use Duration.forever() for an unbounded duration"
        ) from exc
    if not finite:
        raise InvalidArgumentError(
            f"Duration {unit} must be finite, got {value!r}\n"
            f"Hint: use Duration.forever() for an unbounded duration"
        )
    return value


def _check_duration(value: Any, operation: str) -> "Duration":
    if value is None:
        raise InvalidArgumentError(
            f"Duration.{operation} requires a Duration, got None"
        )
    if not isinstance(value, Duration):
        raise InvalidArgumentError(
            f"Duration.{operation} requires a Duration.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Hint: wrap plain numbers first, e.g. Duration.from_seconds(5)"
        )
    return value


@total_ordering
class Duration(ABC):
    """A non-negative span of time, or forever.

    Use the factories rather than instantiating this class:

        >>> Duration.from_minutes(27).to_seconds()
        1620.0
        >>> Duration.forever().is_forever()
        True

    Durations are ordered by length, with forever longer than any finite
    duration, and can be combined with ``+`` and ``*``.
    """

    __slots__ = ()

    @abstractmethod
    def is_forever(self) -> bool:
        """True if this duration represents forever."""

    @abstractmethod
    def _finite_milliseconds(self, unit: str) -> float:
        """Magnitude in milliseconds; raises if there is none to convert to ``unit``."""

    @abstractmethod
    def _sort_key(self) -> tuple[int, float]:
        pass

    # Factories

    @staticmethod
    def from_milliseconds(milliseconds: float) -> "Duration":
        """Create a duration from milliseconds."""
        return _Finite(_check_magnitude(milliseconds, "milliseconds"))

    @staticmethod
    def from_seconds(seconds: float) -> "Duration":
        """Create a duration from seconds."""
        _check_magnitude(seconds, "seconds")
        return Duration.from_milliseconds(seconds * SECOND)

    @staticmethod
    def from_minutes(minutes: float) -> "Duration":
        """Create a duration from minutes."""
        _check_magnitude(minutes, "minutes")
        return Duration.from_seconds(minutes * 60)

    @staticmethod
    def from_hours(hours: float) -> "Duration":
        """Create a duration from hours."""
        _check_magnitude(hours, "hours")
        return Duration.from_minutes(hours * 60)

    @staticmethod
    def from_days(days: float) -> "Duration":
        """Create a duration from days (always 24 hours each)."""
        _check_magnitude(days, "days")
        return Duration.from_hours(days * 24)

    @staticmethod
    def from_timedelta(delta: timedelta) -> "Duration":
        """Create a duration from a non-negative ``datetime.timedelta``."""
        if not isinstance(delta, timedelta):
            raise InvalidArgumentError(
                f"Duration.from_timedelta requires a timedelta.\n"
                f"Got {type(delta).__name__!r}: {delta!r}"
            )
        return Duration.from_milliseconds(delta / timedelta(milliseconds=1))

    @staticmethod
    def zero() -> "Duration":
        """Create a zero-length duration."""
        return Duration.from_milliseconds(0)

    @staticmethod
    def forever() -> "Duration":
        """Return the duration representing forever.

        Forever cannot be converted to any unit; check ``is_forever()`` first.
        """
        return _FOREVER

    # Conversions

    def to_milliseconds(self) -> float:
        """Length of this duration in milliseconds."""
        return self._finite_milliseconds("milliseconds")

    def to_seconds(self) -> float:
        """Length of this duration in seconds."""
        return self._finite_milliseconds("seconds") / SECOND

    def to_minutes(self) -> float:
        """Length of this duration in minutes."""
        return self._finite_milliseconds("minutes") / SECOND / 60

    def to_hours(self) -> float:
        """Length of this duration in hours."""
        return self._finite_milliseconds("hours") / SECOND / 60 / 60

    def to_days(self) -> float:
        """Length of this duration in days."""
        return self._finite_milliseconds("days") / SECOND / 60 / 60 / 24

    def to_timedelta(self) -> timedelta:
        """This duration as a ``datetime.timedelta``."""
        milliseconds = self._finite_milliseconds("timedelta")
        try:
            return timedelta(milliseconds=milliseconds)
        except OverflowError as exc:
            raise InvalidOperationError(
                f"Can't convert {milliseconds!r}ms to timedelta\n"
                f"Hint: timedelta tops out at {timedelta.max}"
            ) from exc

    # Arithmetic

    def add(self, other: "Duration") -> "Duration":
        """Return the sum of this duration and ``other``.

        The sum is forever when either operand is forever.
        """
        _check_duration(other, "add")
        if isinstance(self, _Finite) and isinstance(other, _Finite):
            return _Finite(self.milliseconds + other.milliseconds)
        return _FOREVER

    def multiply(self, factor: float) -> "Duration":
        """Return this duration scaled by a strictly positive ``factor``.

        Forever stays forever.
        """
        if not _is_real(factor) or not factor > 0 or not math.isfinite(factor):
            raise InvalidArgumentError(
                f"Duration.multiply factor must be a positive finite number, "
                f"got {factor!r}"
            )
        if isinstance(self, _Finite):
            return _Finite(self.milliseconds * factor)
        return self

    @staticmethod
    def between(
        a: "Duration", b: "Duration", rng: random.Random | None = None
    ) -> "Duration":
        """Return a random duration in ``[min(a, b), max(a, b))`` milliseconds.

        The offset from the shorter duration is a whole number of
        milliseconds drawn uniformly. When ``a`` and ``b`` are equal, ``a``
        itself is returned; when both are forever, forever is returned.

        A single forever operand is treated as ``FOREVER_MILLISECONDS``, the
        largest finite float, so the result is finite but usually enormous.
        This is a known oddity kept for compatibility.

        Args:
            a: one end of the range
            b: the other end of the range
            rng: random source; defaults to the ``random`` module's shared
                generator. Pass a seeded ``random.Random`` for repeatable
                results.
        """
        _check_duration(a, "between")
        _check_duration(b, "between")
        if isinstance(a, _Forever) and isinstance(b, _Forever):
            return _FOREVER
        if isinstance(a, _Forever) or isinstance(b, _Forever):
            logger.debug(
                "Duration.between with one forever operand, using %r ms in its place",
                FOREVER_MILLISECONDS,
            )

        left = _between_milliseconds(a)
        right = _between_milliseconds(b)
        if left == right:
            return a

        low, high = min(left, right), max(left, right)
        draw = rng.random() if rng is not None else random.random()
        # Float product: offsets are not exact for spans above 2**53 ms
        return _Finite(low + math.floor(draw * (high - low)))

    # Operators

    def __add__(self, other: Any) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __mul__(self, factor: Any) -> "Duration":
        if not _is_real(factor):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @override
    def __hash__(self) -> int:
        return hash(self._sort_key())


@dataclass(frozen=True, eq=False)
class _Finite(Duration):
    milliseconds: float

    def __post_init__(self) -> None:
        _check_magnitude(self.milliseconds, "milliseconds")

    @override
    def is_forever(self) -> bool:
        return False

    @override
    def _finite_milliseconds(self, unit: str) -> float:
        return self.milliseconds

    @override
    def _sort_key(self) -> tuple[int, float]:
        return (0, self.milliseconds)

    @override
    def __str__(self) -> str:
        return f"Duration({self.milliseconds}ms)"

    @override
    def __repr__(self) -> str:
        return f"Duration.from_milliseconds({self.milliseconds!r})"


@dataclass(frozen=True, eq=False)
class _Forever(Duration):
    @override
    def is_forever(self) -> bool:
        return True

    @override
    def _finite_milliseconds(self, unit: str) -> float:
        raise InvalidOperationError(
            f"Can't convert forever to {unit}\n"
            f"Hint: check is_forever() before converting"
        )

    @override
    def _sort_key(self) -> tuple[int, float]:
        return (1, 0)

    @override
    def __str__(self) -> str:
        return "Duration(forever)"

    @override
    def __repr__(self) -> str:
        return "Duration.forever()"


_FOREVER = _Forever()


def _between_milliseconds(duration: Duration) -> float:
    if isinstance(duration, _Finite):
        return duration.milliseconds
    return FOREVER_MILLISECONDS
