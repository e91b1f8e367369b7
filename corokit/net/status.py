"""Result codes reported by the networking layer."""

from __future__ import annotations

import enum
import errno


class ConnectStatus(enum.Enum):
    """Outcome of an attempt to connect to a peer."""

    CONNECTED = enum.auto()
    """The connection has been established."""
    INVALID_IP_ADDRESS = enum.auto()
    """The given ip address could not be parsed or is invalid."""
    TIMEOUT = enum.auto()
    """The connection attempt timed out."""
    ERROR = enum.auto()
    """An error occurred; the socket error carries the details."""


class RecvStatus(enum.IntEnum):
    """Outcome of a receive call; errors carry their errno value."""

    OK = 0
    CLOSED = -1
    """The peer closed the socket."""
    UDP_NOT_BOUND = -2
    """The udp socket has not been bound to a local port."""
    SSL_ERROR = -3
    TRY_AGAIN = errno.EAGAIN
    WOULD_BLOCK = errno.EWOULDBLOCK
    BAD_FILE_DESCRIPTOR = errno.EBADF
    CONNECTION_REFUSED = errno.ECONNREFUSED
    MEMORY_FAULT = errno.EFAULT
    INTERRUPTED = errno.EINTR
    INVALID_ARGUMENT = errno.EINVAL
    NO_MEMORY = errno.ENOMEM
    NOT_CONNECTED = errno.ENOTCONN
    NOT_A_SOCKET = errno.ENOTSOCK


class SendStatus(enum.IntEnum):
    """Outcome of a send call; errors carry their errno value."""

    OK = 0
    SSL_ERROR = -3
    PERMISSION_DENIED = errno.EACCES
    TRY_AGAIN = errno.EAGAIN
    WOULD_BLOCK = errno.EWOULDBLOCK
    ALREADY_IN_PROGRESS = errno.EALREADY
    BAD_FILE_DESCRIPTOR = errno.EBADF
    CONNECTION_RESET = errno.ECONNRESET
    NO_PEER_ADDRESS = errno.EDESTADDRREQ
    MEMORY_FAULT = errno.EFAULT
    INTERRUPTED = errno.EINTR
    IS_CONNECTION = errno.EISCONN
    MESSAGE_SIZE = errno.EMSGSIZE
    OUTPUT_QUEUE_FULL = errno.ENOBUFS
    NO_MEMORY = errno.ENOMEM
    NOT_CONNECTED = errno.ENOTCONN
    NOT_A_SOCKET = errno.ENOTSOCK
    OPERATION_NOT_SUPPORTED = errno.EOPNOTSUPP
    PIPE_CLOSED = errno.EPIPE


class SslHandshakeStatus(enum.Enum):
    """Outcome of a TLS handshake."""

    OK = enum.auto()
    """The handshake was successful."""
    NOT_CONNECTED = enum.auto()
    """The connection has not been established yet."""
    SSL_CONTEXT_REQUIRED = enum.auto()
    """The connection needs a TLS context to perform the handshake."""
    SSL_RESOURCE_ALLOCATION_FAILED = enum.auto()
    """Allocating the TLS connection state failed."""
    SSL_SET_FD_FAILURE = enum.auto()
    """Attaching the socket to the TLS connection failed."""
    HANDSHAKE_FAILED = enum.auto()
    """The handshake had an error."""
    TIMEOUT = enum.auto()
    """The handshake timed out."""
    POLL_ERROR = enum.auto()
    """Polling the socket for readiness failed."""
    UNEXPECTED_CLOSE = enum.auto()
    """The socket was closed during the handshake."""


_STATUS_TYPES = (ConnectStatus, RecvStatus, SendStatus, SslHandshakeStatus)


def to_string(status: enum.Enum) -> str:
    """Return the lower-case name of a status value.

    Raises ValueError if *status* is not a member of one of the status enums.
    """
    if not isinstance(status, _STATUS_TYPES):
        raise ValueError(f"unknown status value: {status!r}")
    return status.name.lower()