"""Utility modules for logging and exception handling."""

from utils.logging import setup_logging, get_logger
from utils.exceptions import (
    NtpError,
    PacketLengthError,
    NtpTimeoutError,
    NtpConnectionError,
    ConfigurationError,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'NtpError',
    'PacketLengthError',
    'NtpTimeoutError',
    'NtpConnectionError',
    'ConfigurationError',
]
