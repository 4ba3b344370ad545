"""Line framing for byte streams.

The protocol is one message per newline-terminated line; a single read from
a socket or pipe may hold a fraction of a line, or several lines at once.
"""

from __future__ import annotations

from typing import List


class LineBuffer:
    """Accumulate bytes and hand back complete, decoded lines."""

    encoding = 'utf-8'

    def __init__(self):
        self._pending = b''

    def feed(self, data: bytes) -> List[str]:
        """Add *data* and return every line it completed, without newlines."""

        data = self._pending + data
        *complete, self._pending = data.split(b'\n')

        lines = list()
        for line in complete:
            if line.endswith(b'\r'):
                line = line[:-1]
            lines.append(line.decode(self.encoding, errors='replace'))
        return lines

    def clear(self) -> None:
        self._pending = b''

    @property
    def pending(self) -> bytes:
        """Bytes received after the last complete line."""
        return self._pending


def frame(line: str, encoding: str = LineBuffer.encoding) -> bytes:
    """Encode a single outbound *line*, newline-terminated."""
    return (line + '\n').encode(encoding)
