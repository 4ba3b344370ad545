"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    TransportClosed,
    TransportTimeout,
    TransportConnectionError,
)

from .network import SocketTransport
from .pipe import PipeTransport


def create(host='127.0.0.1', port=None, path=None):
    """Pick the transport implied by the connection options: a socket when a
    port or a path is given, otherwise the standard input and output.
    """

    if port or path:
        return SocketTransport(host, port, path)
    return PipeTransport()
