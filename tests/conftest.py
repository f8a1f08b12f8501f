"""
Pytest configuration and fixtures for ntp-check tests.
"""

import socket
import struct

import pytest

# 2024-01-01 00:00:00 UTC in NTP seconds
NTP_2024 = 3913056000


@pytest.fixture
def response_bytes():
    """A stratum 1 server response built field by field, independent of the encoder."""
    return struct.pack(
        '!BBBbIII8I',
        0x24,               # LI=0, VN=4, Mode=4 (server)
        1,                  # stratum
        6,                  # poll
        -20,                # precision
        0x00010000,         # root delay: 1.0 s
        0x00008000,         # root dispersion: 0.5 s
        0x47505300,         # reference id: 'GPS\0'
        NTP_2024, 0,                    # reference timestamp
        NTP_2024 + 10, 0,               # originate timestamp
        NTP_2024 + 10, 0x40000000,      # receive timestamp (+0.25 s)
        NTP_2024 + 10, 0x80000000,      # transmit timestamp (+0.5 s)
    )


@pytest.fixture
def silent_peer():
    """Address of a bound UDP socket that never answers."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(('127.0.0.1', 0))
    try:
        yield sock.getsockname()
    finally:
        sock.close()
