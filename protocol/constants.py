"""Protocol constants for the NTP packet and timestamp formats.

These are wire-level constants defined by RFC 5905 and must not be
changed without breaking interoperability with time servers.
"""

import struct

# Packet format: network byte order
# 'B' flags (LI/VN/Mode), 'B' stratum, 'B' poll, 'b' precision,
# 'I' root delay, 'I' root dispersion, 'I' reference id,
# then 8 'I' words for the four 64-bit timestamps (seconds, fraction)
PACKET_FORMAT = '!BBBbIII8I'

# Size of an NTP packet without extension fields or MAC (48 bytes)
PACKET_SIZE = struct.calcsize(PACKET_FORMAT)

# Receive buffer size; larger than PACKET_SIZE so oversized datagrams
# are seen at full length instead of being truncated to look valid
RECV_BUFFER_SIZE = 512

# First byte layout, most significant bit first: [LI(2)][VN(3)][Mode(3)]
LEAP_BITS = 2
VERSION_BITS = 3
MODE_BITS = 3

MODE_SHIFT = 0
VERSION_SHIFT = MODE_SHIFT + MODE_BITS
LEAP_SHIFT = VERSION_SHIFT + VERSION_BITS

MODE_MASK = (1 << MODE_BITS) - 1
VERSION_MASK = (1 << VERSION_BITS) - 1
LEAP_MASK = (1 << LEAP_BITS) - 1

# Seconds between the NTP epoch (1900-01-01) and the Unix epoch (1970-01-01)
EPOCH_OFFSET = 2208988800

# Scale of the 32-bit binary fraction in a 64-bit timestamp
FRACTION_SCALE = 1 << 32

# Scale of the 16-bit binary fraction in a 32-bit short format (16.16) value
SHORT_FRACTION_SCALE = 1 << 16

# Seconds wrap at 2**32 (era boundary, 2036-02-07T06:28:16Z)
SECONDS_MODULUS = 1 << 32

NANOSECONDS_PER_SECOND = 1_000_000_000

# Default UDP port for NTP
DEFAULT_PORT = 123

# Default deadline in seconds for each step of an exchange
DEFAULT_TIMEOUT = 5.0

# Request defaults: a minimal NTPv4 client request
REQUEST_VERSION = 4
REQUEST_PRECISION = -6
