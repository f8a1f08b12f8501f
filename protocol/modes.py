"""Enumerations and text tables for NTP header fields."""

from enum import IntEnum


class LeapIndicator(IntEnum):
    """Warning of an impending leap second in the last minute of the day."""

    NO_WARNING = 0
    LAST_MINUTE_61 = 1          # Last minute of the day has 61 seconds
    LAST_MINUTE_59 = 2          # Last minute of the day has 59 seconds
    ALARM = 3                   # Clock unsynchronized


class Mode(IntEnum):
    """Association mode of the packet sender."""

    RESERVED = 0
    SYMMETRIC_ACTIVE = 1
    SYMMETRIC_PASSIVE = 2
    CLIENT = 3
    SERVER = 4
    BROADCAST = 5
    CONTROL = 6
    PRIVATE = 7


_LEAP_TEXT = {
    LeapIndicator.NO_WARNING: 'no warning',
    LeapIndicator.LAST_MINUTE_61: 'last minute has 61 seconds',
    LeapIndicator.LAST_MINUTE_59: 'last minute has 59 seconds',
    LeapIndicator.ALARM: 'alarm condition (clock not synchronized)',
}

_MODE_TEXT = {
    Mode.RESERVED: 'reserved',
    Mode.SYMMETRIC_ACTIVE: 'symmetric active',
    Mode.SYMMETRIC_PASSIVE: 'symmetric passive',
    Mode.CLIENT: 'client',
    Mode.SERVER: 'server',
    Mode.BROADCAST: 'broadcast',
    Mode.CONTROL: 'NTP control message',
    Mode.PRIVATE: 'reserved for private use',
}


def leap_to_text(leap: int) -> str:
    """Describe a leap indicator value."""
    return _LEAP_TEXT.get(leap, f'invalid ({leap})')


def mode_to_text(mode: int) -> str:
    """Describe an association mode value."""
    return _MODE_TEXT.get(mode, f'invalid ({mode})')


def stratum_to_text(stratum: int) -> str:
    """
    Describe a stratum value.

    Stratum 0 is "unspecified or invalid" and is also used by servers to
    send kiss-o'-death packets; 16 means unsynchronized.
    """
    if stratum == 0:
        return 'unspecified or invalid'
    if stratum == 1:
        return 'primary reference'
    if 2 <= stratum <= 15:
        return 'secondary reference'
    if stratum == 16:
        return 'unsynchronized'
    return 'reserved'


def ref_id_to_text(ref_id: int, stratum: int) -> str:
    """
    Render a reference identifier according to the stratum.

    Args:
        ref_id: 32-bit reference identifier as read from the wire
        stratum: Stratum of the packet carrying the identifier

    Returns:
        Four-character ASCII code for stratum 0 and 1 (kiss code or
        reference source, e.g. ``GPS``), dotted-quad address otherwise
    """
    raw = ref_id.to_bytes(4, byteorder='big')
    if stratum <= 1:
        return raw.rstrip(b'\x00').decode('ascii', errors='replace')
    return '.'.join(str(b) for b in raw)
