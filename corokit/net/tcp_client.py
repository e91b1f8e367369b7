"""Non-blocking TCP client driven by the running asyncio event loop."""

from __future__ import annotations

import asyncio
import enum
import errno
import ipaddress
import socket as _socket
from dataclasses import dataclass

from corokit.net.status import ConnectStatus, RecvStatus, SendStatus

_IN_PROGRESS = {errno.EINPROGRESS, errno.EWOULDBLOCK, errno.EAGAIN, errno.EALREADY}


class PollOp(enum.Flag):
    """Readiness a poll waits for."""

    READ = enum.auto()
    WRITE = enum.auto()
    READ_WRITE = READ | WRITE


class PollStatus(enum.Enum):
    """Outcome of polling a socket."""

    EVENT = "event"
    """The requested operation is ready."""
    TIMEOUT = "timeout"
    """The timeout expired before the socket became ready."""
    ERROR = "error"
    """The socket is invalid or has a pending error."""
    CLOSED = "closed"
    """The socket was closed."""


@dataclass(frozen=True)
class TcpClientOptions:
    """Where a :class:`TcpClient` connects to."""

    address: str = "127.0.0.1"
    """The ip address to connect to."""
    port: int = 8080
    """The port to connect to."""


def _family_of(address: str) -> int | None:
    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        return None
    return _socket.AF_INET6 if parsed.version == 6 else _socket.AF_INET


class TcpClient:
    """A TCP connection whose socket is always in non-blocking mode.

    Use :meth:`poll` to wait for readiness before :meth:`recv`, and after a
    :meth:`send` that left bytes unsent.
    """

    def __init__(self, options: TcpClientOptions | None = None, sock: _socket.socket | None = None) -> None:
        self._options = options if options is not None else TcpClientOptions()
        self._connect_status: ConnectStatus | None = None
        if sock is not None:
            # An already connected socket, such as one accepted by a server.
            self._sock = sock
            self._connect_status = ConnectStatus.CONNECTED
        else:
            family = _family_of(self._options.address) or _socket.AF_INET
            self._sock = _socket.socket(family, _socket.SOCK_STREAM)
        self._sock.setblocking(False)

    def socket(self) -> _socket.socket:
        """Return the underlying socket."""
        return self._sock

    async def connect(self, timeout: float = 0.0) -> ConnectStatus:
        """Connect to the configured address and port.

        A *timeout* of zero waits indefinitely. Once a connection attempt has
        finished its status is cached and returned by later calls.
        """
        if self._connect_status is not None:
            return self._connect_status

        if _family_of(self._options.address) is None:
            self._connect_status = ConnectStatus.INVALID_IP_ADDRESS
            return self._connect_status

        result = self._sock.connect_ex((self._options.address, self._options.port))
        if result == 0:
            self._connect_status = ConnectStatus.CONNECTED
        elif result in _IN_PROGRESS:
            status = await self.poll(PollOp.WRITE, timeout)
            if status is PollStatus.EVENT:
                self._connect_status = ConnectStatus.CONNECTED
            elif status is PollStatus.TIMEOUT:
                self._connect_status = ConnectStatus.TIMEOUT
            else:
                self._connect_status = ConnectStatus.ERROR
        else:
            self._connect_status = ConnectStatus.ERROR
        return self._connect_status

    async def poll(self, op: PollOp = PollOp.READ, timeout: float = 0.0) -> PollStatus:
        """Wait until the socket is ready for *op*.

        A *timeout* of zero, in seconds, waits indefinitely.
        """
        fd = self._sock.fileno()
        if fd == -1:
            return PollStatus.ERROR

        loop = asyncio.get_running_loop()
        ready: asyncio.Future[None] = loop.create_future()

        def on_ready() -> None:
            if not ready.done():
                ready.set_result(None)

        if op & PollOp.READ:
            loop.add_reader(fd, on_ready)
        if op & PollOp.WRITE:
            loop.add_writer(fd, on_ready)
        try:
            if timeout > 0:
                await asyncio.wait_for(ready, timeout)
            else:
                await ready
        except asyncio.TimeoutError:
            return PollStatus.TIMEOUT
        finally:
            if op & PollOp.READ:
                loop.remove_reader(fd)
            if op & PollOp.WRITE:
                loop.remove_writer(fd)

        if self._sock.fileno() == -1:
            return PollStatus.CLOSED
        try:
            pending = self._sock.getsockopt(_socket.SOL_SOCKET, _socket.SO_ERROR)
        except OSError:
            return PollStatus.ERROR
        return PollStatus.ERROR if pending else PollStatus.EVENT

    def recv(self, buffer: bytearray | memoryview) -> tuple[RecvStatus, memoryview]:
        """Receive into *buffer*, up to its size.

        Returns the status and a view of the bytes received within *buffer*.
        """
        view = memoryview(buffer)
        if len(view) == 0:
            return RecvStatus.OK, view[:0]
        try:
            received = self._sock.recv_into(view)
        except OSError as exc:
            return RecvStatus(exc.errno if exc.errno is not None else errno.EBADF), view[:0]
        if received == 0:
            # On a stream socket zero bytes means the peer closed the connection.
            return RecvStatus.CLOSED, view[:0]
        return RecvStatus.OK, view[:received]

    def send(self, data: bytes | bytearray | memoryview) -> tuple[SendStatus, memoryview]:
        """Send *data*.

        Returns the status and a view of the bytes that were not sent; it is
        empty when everything was written.
        """
        view = memoryview(data)
        if len(view) == 0:
            return SendStatus.OK, view
        try:
            sent = self._sock.send(view)
        except OSError as exc:
            return SendStatus(exc.errno if exc.errno is not None else errno.EBADF), view
        return SendStatus.OK, view[sent:]

    def close(self) -> None:
        """Close the connection."""
        self._sock.close()

    def __enter__(self) -> TcpClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()