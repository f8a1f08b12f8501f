"""Conversion between NTP fixed-point timestamps and calendar time.

An NTP timestamp is 64 bits: 32-bit unsigned seconds since the NTP epoch
(1900-01-01 00:00:00 UTC) followed by a 32-bit unsigned binary fraction
of a second. Calendar time here is seconds since the Unix epoch plus a
nanosecond remainder. All functions are pure.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import math
import time

from protocol.constants import (
    EPOCH_OFFSET,
    FRACTION_SCALE,
    NANOSECONDS_PER_SECOND,
    SECONDS_MODULUS,
    SHORT_FRACTION_SCALE,
)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class NtpTimestamp:
    """64-bit NTP timestamp as its two 32-bit wire words."""

    seconds: int = 0
    fraction: int = 0

    def __post_init__(self):
        _check_word('seconds', self.seconds)
        _check_word('fraction', self.fraction)

    def to_calendar_time(self) -> 'CalendarTime':
        """Convert to calendar time, see :func:`to_calendar_time`."""
        return to_calendar_time(self.seconds, self.fraction)


@dataclass(frozen=True)
class CalendarTime:
    """
    Absolute instant as Unix seconds plus nanoseconds.

    ``seconds`` is negative for instants before 1970; ``nanoseconds`` is
    always in ``[0, 1e9)`` and counts forward from ``seconds``.
    """

    seconds: int
    nanoseconds: int = 0

    @property
    def timestamp(self) -> float:
        """Float Unix timestamp (loses sub-microsecond precision)."""
        return self.seconds + self.nanoseconds / NANOSECONDS_PER_SECOND

    def to_datetime(self) -> datetime:
        """UTC-aware datetime, truncated to microseconds."""
        return _UNIX_EPOCH + timedelta(
            seconds=self.seconds,
            microseconds=self.nanoseconds // 1000,
        )

    def __str__(self) -> str:
        dt = self.to_datetime()
        return f"{dt:%Y-%m-%d %H:%M:%S}.{self.nanoseconds:09d} UTC"


def _check_word(name: str, value: int) -> None:
    if not 0 <= value < SECONDS_MODULUS:
        raise ValueError(f"{name} must be an unsigned 32-bit value, got {value}")


def to_calendar_time(seconds: int, fraction: int) -> CalendarTime:
    """
    Convert an NTP timestamp to calendar time.

    The fraction is converted to nanoseconds with floor truncation, in
    exact integer arithmetic: a 32-bit fraction cannot be reproduced
    exactly in nanoseconds, and truncation is the deterministic choice.

    Seconds values below the epoch offset give a pre-1970 instant with
    negative ``seconds``; this is a valid result, not an error.

    Args:
        seconds: Unsigned 32-bit seconds since the NTP epoch
        fraction: Unsigned 32-bit binary fraction of a second

    Returns:
        The equivalent CalendarTime

    Raises:
        ValueError: If either word is outside the unsigned 32-bit range
    """
    _check_word('seconds', seconds)
    _check_word('fraction', fraction)

    calendar_seconds = seconds - EPOCH_OFFSET
    nanoseconds = fraction * NANOSECONDS_PER_SECOND // FRACTION_SCALE
    return CalendarTime(seconds=calendar_seconds, nanoseconds=nanoseconds)


def to_protocol_timestamp(
    instant: Optional[float] = None,
    include_fraction: bool = False,
) -> NtpTimestamp:
    """
    Convert a Unix instant to an NTP timestamp.

    Seconds wrap modulo 2**32, so instants from 2036-02-07T06:28:16Z on
    map into the next NTP era starting again from zero. Era numbers are
    not carried on the wire.

    Args:
        instant: Unix time in seconds; current wall-clock time if None
        include_fraction: Encode the sub-second part. A minimal client
            request leaves the fraction zero.

    Returns:
        NtpTimestamp for the instant
    """
    if instant is None:
        instant = time.time()

    whole = math.floor(instant)
    seconds = (whole + EPOCH_OFFSET) % SECONDS_MODULUS

    fraction = 0
    if include_fraction:
        fraction = min(int((instant - whole) * FRACTION_SCALE), FRACTION_SCALE - 1)

    return NtpTimestamp(seconds=seconds, fraction=fraction)


def ntp_to_unix(timestamp: NtpTimestamp) -> float:
    """Float Unix time of an NTP timestamp, for offset and delay arithmetic."""
    return (timestamp.seconds - EPOCH_OFFSET) + timestamp.fraction / FRACTION_SCALE


def short_to_seconds(raw: int) -> float:
    """Value of an unsigned 16.16 fixed-point field in seconds."""
    return raw / SHORT_FRACTION_SCALE


def short_to_milliseconds(raw: int) -> float:
    """Value of an unsigned 16.16 fixed-point field in milliseconds."""
    return raw / SHORT_FRACTION_SCALE * 1000
