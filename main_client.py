#!/usr/bin/env python3
"""
Main entry point for the NTP check client.

Queries one time server once and prints the decoded response.
Configuration is loaded from environment variables and overridden by
command-line arguments.
"""

import argparse
import asyncio
import sys
import os

from config.settings import Config
from client.ntp_client import NtpClient
from client.report import format_report
from utils.logging import setup_logging, get_logger
from utils.exceptions import ConfigurationError, NtpError

logger = get_logger(__name__)


class ClientApplication:
    """Main application class for the NTP check."""

    def __init__(self, args: argparse.Namespace):
        """Initialize application."""
        self.args = args
        self.config = Config()

    async def run(self) -> int:
        """
        Run one query and print the report.

        Returns:
            Process exit status
        """
        try:
            query_config = self.config.load_query_config(
                server=self.args.server,
                port=self.args.port,
                timeout=self.args.timeout,
                version=self.args.ntp_version,
            )

            logger.debug(
                f"Configuration loaded: "
                f"server={query_config.server}:{query_config.port}, "
                f"timeout={query_config.timeout}s"
            )

            client = NtpClient(
                query_config.server,
                port=query_config.port,
                timeout=query_config.timeout,
                version=query_config.version,
            )
            result = await client.query()

        except ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            logger.error(
                "Please check your environment variables. "
                "See .env.example for the available settings."
            )
            return 1
        except NtpError as e:
            logger.error(f"NTP query failed: {e}")
            return 1
        except ValueError as e:
            logger.error(f"Configuration validation error: {e}")
            return 1
        except Exception as e:
            logger.error(f"Unexpected error: {e}", exc_info=True)
            return 1

        for line in format_report(result):
            print(line)
        print("Successfully received NTP response from server.")
        return 0


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='ntp-check: query an NTP server once and report its time',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Query the configured server (NTP_SERVER, default time.google.com)
    ntp-check

    # Query a specific server with a short timeout
    ntp-check pool.ntp.org --timeout 1.5
        """
    )

    parser.add_argument(
        'server',
        nargs='?',
        help='Server hostname or address (overrides NTP_SERVER)'
    )
    parser.add_argument(
        '--port', '-p',
        type=int,
        help='Server UDP port (overrides NTP_PORT, default: 123)'
    )
    parser.add_argument(
        '--timeout', '-t',
        type=float,
        help='Timeout in seconds (overrides NTP_TIMEOUT, default: 5.0)'
    )
    parser.add_argument(
        '--ntp-version',
        type=int,
        help='Version number sent in the request (overrides NTP_VERSION, default: 4)'
    )
    parser.add_argument(
        '--log-level',
        default=os.getenv('LOG_LEVEL', 'INFO'),
        help='Logging level (default: LOG_LEVEL or INFO)'
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        setup_logging(args.log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = ClientApplication(args)
    try:
        return asyncio.run(app.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
