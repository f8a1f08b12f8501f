"""Human-readable report of a query result."""

from typing import List

from client.ntp_client import QueryResult


def format_report(result: QueryResult) -> List[str]:
    """
    Build the report lines for a completed query.

    Args:
        result: Result of a successful exchange

    Returns:
        Lines to print, in display order
    """
    packet = result.response
    return [
        f"NTP Server: {result.server} ({result.address[0]})",
        f"Leap Indicator: {packet.leap} ({packet.leap_text})",
        f"Version Number: {packet.version}",
        f"Mode: {packet.mode} ({packet.mode_text})",
        f"Stratum: {packet.stratum} ({packet.stratum_text})",
        f"Reference ID: {packet.ref_id_text}",
        f"Root Delay (ms): {packet.root_delay_ms}",
        f"Root Dispersion (ms): {packet.root_dispersion_ms}",
        f"Reference Time: {packet.reference_time}",
        f"Transmit Time: {packet.transmit_time}",
        f"Clock Offset (s): {result.offset:+.6f}",
        f"Round-trip Delay (s): {result.delay:.6f}",
    ]
