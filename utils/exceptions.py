"""Custom exception classes for the NTP client."""


class NtpError(Exception):
    """Base exception class for all NTP client errors."""
    pass


class PacketLengthError(NtpError, ValueError):
    """Exception raised when a buffer is not exactly one NTP packet long."""

    def __init__(self, length: int, expected: int = 48):
        self.length = length
        self.expected = expected
        super().__init__(
            f"Invalid NTP packet size: {length} bytes (expected {expected})"
        )


class NtpTimeoutError(NtpError, TimeoutError):
    """Exception raised when the server does not answer before the deadline."""

    def __init__(self, message: str, timeout: float):
        self.timeout = timeout
        super().__init__(message)


class NtpConnectionError(NtpError, ConnectionError):
    """Exception raised on transport failure: resolution, refusal, unreachable peer."""
    pass


class ConfigurationError(NtpError, ValueError):
    """Exception raised when configuration is invalid or missing."""
    pass
