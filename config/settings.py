"""Configuration management for the NTP client."""

from dataclasses import dataclass
from typing import Optional
import os
from pathlib import Path

from dotenv import load_dotenv

from protocol.constants import DEFAULT_PORT, DEFAULT_TIMEOUT, REQUEST_VERSION
from utils.exceptions import ConfigurationError


# Load .env file from project root
# This is called at module import time to ensure env vars are available
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path, override=False)

DEFAULT_SERVER = "time.google.com"


@dataclass
class QueryConfig:
    """Configuration for a single NTP query."""

    server: str = DEFAULT_SERVER
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    version: int = REQUEST_VERSION

    def validate(self) -> None:
        """Validate query configuration parameters."""
        if not self.server:
            raise ValueError("NTP server address is required")
        if not isinstance(self.port, int) or self.port < 1 or self.port > 65535:
            raise ValueError("NTP port must be between 1 and 65535")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        if not 1 <= self.version <= 4:
            raise ValueError(f"NTP version must be between 1 and 4, got {self.version}")


def _env_number(name: str, default: str, convert):
    raw = os.getenv(name, default)
    try:
        return convert(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be a valid {convert.__name__}, got: {raw}"
        )


class Config:
    """Main configuration loader and manager."""

    def __init__(self):
        """Initialize configuration manager."""
        self.query: Optional[QueryConfig] = None

    def load_query_config(
        self,
        server: Optional[str] = None,
        port: Optional[int] = None,
        timeout: Optional[float] = None,
        version: Optional[int] = None,
    ) -> QueryConfig:
        """
        Load query configuration from environment variables.

        Explicit arguments (e.g. from the command line) take precedence
        over the environment when not None.

        Environment variables:
            NTP_SERVER: Server hostname or address (default: time.google.com)
            NTP_PORT: Server UDP port (default: 123)
            NTP_TIMEOUT: Exchange timeout in seconds (default: 5.0)
            NTP_VERSION: Version number sent in the request (default: 4)

        Returns:
            Validated QueryConfig instance

        Raises:
            ConfigurationError: If an environment value cannot be parsed
            ValueError: If configuration is invalid
        """
        config = QueryConfig(
            server=os.getenv('NTP_SERVER', DEFAULT_SERVER),
            port=_env_number('NTP_PORT', str(DEFAULT_PORT), int),
            timeout=_env_number('NTP_TIMEOUT', str(DEFAULT_TIMEOUT), float),
            version=_env_number('NTP_VERSION', str(REQUEST_VERSION), int),
        )

        if server is not None:
            config.server = server
        if port is not None:
            config.port = port
        if timeout is not None:
            config.timeout = timeout
        if version is not None:
            config.version = version

        config.validate()
        self.query = config
        return config
