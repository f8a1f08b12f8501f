"""Protocol module for NTP packet encoding, decoding, and timestamp conversion."""

from protocol.constants import EPOCH_OFFSET, FRACTION_SCALE, PACKET_FORMAT, PACKET_SIZE
from protocol.modes import LeapIndicator, Mode
from protocol.timestamps import (
    CalendarTime,
    NtpTimestamp,
    to_calendar_time,
    to_protocol_timestamp,
)
from protocol.messages import Packet
from protocol.encoding import encode_packet, decode_packet

__all__ = [
    'EPOCH_OFFSET',
    'FRACTION_SCALE',
    'PACKET_FORMAT',
    'PACKET_SIZE',
    'LeapIndicator',
    'Mode',
    'CalendarTime',
    'NtpTimestamp',
    'to_calendar_time',
    'to_protocol_timestamp',
    'Packet',
    'encode_packet',
    'decode_packet',
]
