"""TCP and UNIX domain socket transport.

The engine's extmodule listener accepts connections on a TCP port or a
filesystem socket. Connection attempts are non-blocking: :meth:`open`
starts the attempt, and the caller is expected to poll the descriptor for
writability and then call :meth:`finish_connect`. Once connected the socket
is switched back to blocking mode; reads only happen after a poll reports
the descriptor readable, and writes are short.
"""

from __future__ import annotations

import errno
import os
import socket as pysocket
from typing import List, Optional

from .base import Transport, TransportClosed, TransportConnectionError
from .stream import LineBuffer, frame


_in_progress = set((0, errno.EINPROGRESS, errno.EWOULDBLOCK, errno.EAGAIN))


class SocketTransport(Transport):
    """Connect to the engine over TCP (*host*, *port*) or a UNIX *path*."""

    piped = False
    chunk = 65536

    def __init__(self, host: str = '127.0.0.1', port: Optional[int] = None, path: Optional[str] = None):
        if port is None and path is None:
            raise ValueError('a port or a path is required')

        self.host = host
        self.port = port
        self.path = path

        self.socket: Optional[pysocket.socket] = None
        self.buffer = LineBuffer()
        self._connecting = False

    def __repr__(self):
        if self.path:
            return 'SocketTransport(%r)' % (self.path)
        return 'SocketTransport(%s:%d)' % (self.host, self.port)

    def _address(self):
        if self.path:
            return pysocket.AF_UNIX, self.path

        # Resolve first; this also sorts out IPv4 versus IPv6.
        family, _type, _proto, _name, address = pysocket.getaddrinfo(
            self.host, self.port, type=pysocket.SOCK_STREAM)[0]
        return family, address

    def open(self) -> None:
        self.close()

        family, address = self._address()
        sock = pysocket.socket(family, pysocket.SOCK_STREAM)
        sock.setblocking(False)

        error = sock.connect_ex(address)
        if error not in _in_progress:
            sock.close()
            raise TransportConnectionError(
                f"{self!r}: {os.strerror(error)}")

        self.socket = sock
        self._connecting = True

    def finish_connect(self) -> None:
        error = self.socket.getsockopt(pysocket.SOL_SOCKET, pysocket.SO_ERROR)
        if error != 0:
            self.close()
            raise TransportConnectionError(
                f"{self!r}: {os.strerror(error)}")

        self.socket.setblocking(True)
        self._connecting = False

    def close(self) -> None:
        sock = self.socket
        self.socket = None
        self._connecting = False
        self.buffer.clear()

        if sock is not None:
            try:
                sock.close()
            except OSError:
                pass

    def fileno(self) -> int:
        return self.socket.fileno()

    def read(self) -> List[str]:
        data = self.socket.recv(self.chunk)
        if data == b'':
            raise TransportClosed(f"{self!r}: closed by the engine")
        return self.buffer.feed(data)

    def write(self, line: str) -> None:
        self.socket.sendall(frame(line))

    @property
    def connecting(self) -> bool:
        return self._connecting

    @property
    def is_open(self) -> bool:
        return self.socket is not None
