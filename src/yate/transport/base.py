"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`yate.protocol` so the protocol remains transport-agnostic.
The connection polls :meth:`Transport.fileno` and calls back into the
transport when the descriptor is ready; no transport method may block for
longer than it takes to move bytes that are already available.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportClosed(TransportError):
    """The remote end closed the connection."""


class TransportTimeout(TransportError):
    """A connection attempt did not complete in time."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class Transport(ABC):
    """Minimal contract for a line-oriented transport."""

    #: A piped transport is the standard input and output of this process,
    #: connected directly to the engine; it cannot be reconnected.
    piped = False

    @abstractmethod
    def open(self) -> None:
        """Begin establishing the underlying connection."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection."""

    @abstractmethod
    def fileno(self) -> int:
        """The descriptor to poll for readiness."""

    @abstractmethod
    def read(self) -> List[str]:
        """Return the complete lines available now.

        Raises :class:`TransportClosed` at end of stream.
        """

    @abstractmethod
    def write(self, line: str) -> None:
        """Send one line; the terminating newline is added here."""

    def finish_connect(self) -> None:
        """Complete a connection attempt once the descriptor is writable."""

    @property
    def connecting(self) -> bool:
        """Whether a connection attempt is still in progress."""
        return False

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently usable or being connected."""
        return False
