"""NTP client: one request/response exchange with a single time server."""

from dataclasses import dataclass
from typing import Any, Awaitable, Tuple
import asyncio
import socket
import time

from protocol.constants import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    RECV_BUFFER_SIZE,
    REQUEST_VERSION,
)
from protocol.encoding import decode_packet, encode_packet
from protocol.messages import Packet
from protocol.timestamps import ntp_to_unix
from utils.exceptions import NtpConnectionError, NtpError, NtpTimeoutError
from utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of one exchange with a time server.

    ``originate_time`` (T1) and ``destination_time`` (T4) are local Unix
    times taken just before sending and just after receiving. They are
    recorded here at full precision because the request itself only
    carries whole seconds.
    """

    server: str
    address: Tuple[Any, ...]
    request: Packet
    response: Packet
    originate_time: float
    destination_time: float

    @property
    def offset(self) -> float:
        """Estimated offset of the server clock from the local clock, in seconds."""
        t1 = self.originate_time
        t2 = ntp_to_unix(self.response.recv_timestamp)
        t3 = ntp_to_unix(self.response.tx_timestamp)
        t4 = self.destination_time
        return ((t2 - t1) + (t3 - t4)) / 2

    @property
    def delay(self) -> float:
        """Round-trip network delay excluding server processing, in seconds."""
        t1 = self.originate_time
        t2 = ntp_to_unix(self.response.recv_timestamp)
        t3 = ntp_to_unix(self.response.tx_timestamp)
        t4 = self.destination_time
        return (t4 - t1) - (t3 - t2)


class NtpClient:
    """
    Single-shot NTP client.

    Each call to :meth:`query` resolves the server, opens its own UDP
    socket, sends one request and waits for one response. There is no
    retry and no shared state between calls, so concurrent queries need
    no locking.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        version: int = REQUEST_VERSION,
    ):
        """
        Initialize the client.

        Args:
            host: Server hostname or IP address
            port: Server UDP port
            timeout: Deadline in seconds for each of resolve, send and receive
            version: NTP version number to put in the request
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self.version = version

    async def query(self) -> QueryResult:
        """
        Perform one request/response exchange.

        Returns:
            QueryResult holding the request, the decoded response and the
            local send/receive instants

        Raises:
            NtpTimeoutError: If any step exceeds the timeout
            NtpConnectionError: If resolution or the transport fails
            PacketLengthError: If the response is not exactly 48 bytes
        """
        loop = asyncio.get_running_loop()
        family, sockaddr = await self._resolve(loop)

        request = Packet.build_request(version=self.version)
        payload = encode_packet(request)

        logger.info(f"Querying NTP server {self.host} at {sockaddr[0]}:{sockaddr[1]}")

        sock = None
        try:
            sock = socket.socket(family, socket.SOCK_DGRAM)
            sock.setblocking(False)
            await loop.sock_connect(sock, sockaddr)

            originate_time = time.time()
            await self._with_timeout(loop.sock_sendall(sock, payload), 'send request')
            logger.debug(f"Sent {len(payload)} byte request to {self.host}")

            data = await self._with_timeout(
                loop.sock_recv(sock, RECV_BUFFER_SIZE), 'receive response'
            )
            destination_time = time.time()
            logger.debug(f"Received {len(data)} byte response from {self.host}")
        except NtpError:
            raise
        except OSError as e:
            logger.debug(f"Transport failure talking to {self.host}: {e}")
            raise NtpConnectionError(
                f"Failed to exchange packets with {self.host}:{self.port}: {e}"
            ) from e
        finally:
            if sock is not None:
                sock.close()

        response = decode_packet(data)

        return QueryResult(
            server=self.host,
            address=sockaddr,
            request=request,
            response=response,
            originate_time=originate_time,
            destination_time=destination_time,
        )

    async def _resolve(self, loop: asyncio.AbstractEventLoop) -> Tuple[int, Tuple[Any, ...]]:
        """
        Resolve the server to a UDP socket address.

        Returns:
            Tuple of (address family, socket address) for the first result

        Raises:
            NtpConnectionError: If the name cannot be resolved
        """
        try:
            infos = await self._with_timeout(
                loop.getaddrinfo(self.host, self.port, type=socket.SOCK_DGRAM),
                f'resolve {self.host}',
            )
        except NtpError:
            raise
        except OSError as e:
            raise NtpConnectionError(f"Failed to resolve {self.host}: {e}") from e

        if not infos:
            raise NtpConnectionError(f"No addresses found for {self.host}")

        family, _, _, _, sockaddr = infos[0]
        return family, sockaddr

    async def _with_timeout(self, awaitable: Awaitable, action: str):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.debug(f"Timed out after {self.timeout}s waiting to {action}")
            raise NtpTimeoutError(
                f"Timed out after {self.timeout}s waiting to {action} "
                f"({self.host}:{self.port})",
                self.timeout,
            ) from e


def query_server(
    host: str,
    port: int = DEFAULT_PORT,
    timeout: float = DEFAULT_TIMEOUT,
    version: int = REQUEST_VERSION,
) -> QueryResult:
    """Blocking convenience wrapper around :meth:`NtpClient.query`."""
    client = NtpClient(host, port=port, timeout=timeout, version=version)
    return asyncio.run(client.query())
