"""NTP packet encoding and decoding functions."""

from typing import Tuple
import struct

from protocol.constants import (
    LEAP_MASK,
    LEAP_SHIFT,
    MODE_MASK,
    MODE_SHIFT,
    PACKET_FORMAT,
    PACKET_SIZE,
    VERSION_MASK,
    VERSION_SHIFT,
)
from protocol.messages import Packet
from protocol.timestamps import NtpTimestamp
from utils.exceptions import PacketLengthError
from utils.logging import get_logger

logger = get_logger(__name__)


def pack_flags(leap: int, version: int, mode: int) -> int:
    """
    Pack leap indicator, version and mode into the first header byte.

    Raises:
        ValueError: If a value does not fit its bit width
    """
    if not 0 <= leap <= LEAP_MASK:
        raise ValueError(f"leap indicator must fit in 2 bits, got {leap}")
    if not 0 <= version <= VERSION_MASK:
        raise ValueError(f"version must fit in 3 bits, got {version}")
    if not 0 <= mode <= MODE_MASK:
        raise ValueError(f"mode must fit in 3 bits, got {mode}")
    return (leap << LEAP_SHIFT) | (version << VERSION_SHIFT) | (mode << MODE_SHIFT)


def unpack_flags(flags: int) -> Tuple[int, int, int]:
    """Split the first header byte into (leap, version, mode)."""
    leap = (flags >> LEAP_SHIFT) & LEAP_MASK
    version = (flags >> VERSION_SHIFT) & VERSION_MASK
    mode = (flags >> MODE_SHIFT) & MODE_MASK
    return leap, version, mode


def encode_packet(packet: Packet) -> bytes:
    """
    Serialize a packet to its 48-byte wire form.

    Args:
        packet: Packet to serialize

    Returns:
        Exactly PACKET_SIZE bytes in network byte order
    """
    data = struct.pack(
        PACKET_FORMAT,
        pack_flags(packet.leap, packet.version, packet.mode),
        packet.stratum,
        packet.poll,
        packet.precision,
        packet.root_delay,
        packet.root_dispersion,
        packet.ref_id,
        packet.ref_timestamp.seconds,
        packet.ref_timestamp.fraction,
        packet.orig_timestamp.seconds,
        packet.orig_timestamp.fraction,
        packet.recv_timestamp.seconds,
        packet.recv_timestamp.fraction,
        packet.tx_timestamp.seconds,
        packet.tx_timestamp.fraction,
    )
    logger.debug(f"Encoded packet: version={packet.version}, mode={packet.mode}")
    return data


def decode_packet(data: bytes) -> Packet:
    """
    Parse a 48-byte wire buffer into a Packet.

    No protocol semantics are checked: any mode, stratum or version value
    is returned as received.

    Args:
        data: Raw datagram payload

    Returns:
        Decoded Packet

    Raises:
        PacketLengthError: If data is not exactly PACKET_SIZE bytes
    """
    if len(data) != PACKET_SIZE:
        raise PacketLengthError(len(data), PACKET_SIZE)

    (
        flags, stratum, poll, precision,
        root_delay, root_dispersion, ref_id,
        ref_sec, ref_frac,
        orig_sec, orig_frac,
        recv_sec, recv_frac,
        tx_sec, tx_frac,
    ) = struct.unpack(PACKET_FORMAT, data)

    leap, version, mode = unpack_flags(flags)

    packet = Packet(
        leap=leap,
        version=version,
        mode=mode,
        stratum=stratum,
        poll=poll,
        precision=precision,
        root_delay=root_delay,
        root_dispersion=root_dispersion,
        ref_id=ref_id,
        ref_timestamp=NtpTimestamp(ref_sec, ref_frac),
        orig_timestamp=NtpTimestamp(orig_sec, orig_frac),
        recv_timestamp=NtpTimestamp(recv_sec, recv_frac),
        tx_timestamp=NtpTimestamp(tx_sec, tx_frac),
    )
    logger.debug(
        f"Decoded packet: version={version}, mode={mode}, stratum={stratum}"
    )
    return packet
