"""NTP packet structure definitions."""

from dataclasses import dataclass, field
from typing import Optional

from protocol.constants import (
    LEAP_MASK,
    MODE_MASK,
    REQUEST_PRECISION,
    REQUEST_VERSION,
    VERSION_MASK,
)
from protocol.modes import (
    LeapIndicator,
    Mode,
    leap_to_text,
    mode_to_text,
    ref_id_to_text,
    stratum_to_text,
)
from protocol.timestamps import (
    CalendarTime,
    NtpTimestamp,
    short_to_milliseconds,
    to_protocol_timestamp,
)

# (attribute, lowest, highest) for the integer header fields
_FIELD_RANGES = (
    ('leap', 0, LEAP_MASK),
    ('version', 0, VERSION_MASK),
    ('mode', 0, MODE_MASK),
    ('stratum', 0, 0xFF),
    ('poll', 0, 0xFF),
    ('precision', -0x80, 0x7F),
    ('root_delay', 0, 0xFFFFFFFF),
    ('root_dispersion', 0, 0xFFFFFFFF),
    ('ref_id', 0, 0xFFFFFFFF),
)


@dataclass(frozen=True)
class Packet:
    """
    Immutable NTP packet header (48 bytes on the wire).

    Every field has a legal zero value. Root delay and root dispersion
    hold the raw unsigned 16.16 fixed-point words; use the ``*_ms``
    properties for their value in milliseconds. Out-of-range field values
    are rejected at construction, so any Packet can be encoded.
    """

    leap: int = 0
    version: int = 0
    mode: int = 0
    stratum: int = 0
    poll: int = 0
    precision: int = 0
    root_delay: int = 0
    root_dispersion: int = 0
    ref_id: int = 0
    ref_timestamp: NtpTimestamp = field(default_factory=NtpTimestamp)
    orig_timestamp: NtpTimestamp = field(default_factory=NtpTimestamp)
    recv_timestamp: NtpTimestamp = field(default_factory=NtpTimestamp)
    tx_timestamp: NtpTimestamp = field(default_factory=NtpTimestamp)

    def __post_init__(self):
        for name, low, high in _FIELD_RANGES:
            value = getattr(self, name)
            if not low <= value <= high:
                raise ValueError(f"{name} must be in [{low}, {high}], got {value}")

    @classmethod
    def build_request(
        cls,
        instant: Optional[float] = None,
        version: int = REQUEST_VERSION,
    ) -> 'Packet':
        """
        Build a minimal client request.

        Only the version, mode, precision and transmit timestamp are set;
        the transmit timestamp carries whole seconds with a zero fraction.

        Args:
            instant: Unix time to stamp into the request; now if None
            version: NTP version number to advertise

        Returns:
            New request Packet
        """
        return cls(
            leap=LeapIndicator.NO_WARNING,
            version=version,
            mode=Mode.CLIENT,
            stratum=0,
            poll=0,
            precision=REQUEST_PRECISION,
            tx_timestamp=to_protocol_timestamp(instant),
        )

    @property
    def root_delay_ms(self) -> float:
        """Root delay in milliseconds."""
        return short_to_milliseconds(self.root_delay)

    @property
    def root_dispersion_ms(self) -> float:
        """Root dispersion in milliseconds."""
        return short_to_milliseconds(self.root_dispersion)

    @property
    def reference_time(self) -> CalendarTime:
        return self.ref_timestamp.to_calendar_time()

    @property
    def originate_time(self) -> CalendarTime:
        return self.orig_timestamp.to_calendar_time()

    @property
    def receive_time(self) -> CalendarTime:
        return self.recv_timestamp.to_calendar_time()

    @property
    def transmit_time(self) -> CalendarTime:
        return self.tx_timestamp.to_calendar_time()

    @property
    def leap_text(self) -> str:
        return leap_to_text(self.leap)

    @property
    def mode_text(self) -> str:
        return mode_to_text(self.mode)

    @property
    def stratum_text(self) -> str:
        return stratum_to_text(self.stratum)

    @property
    def ref_id_text(self) -> str:
        return ref_id_to_text(self.ref_id, self.stratum)
