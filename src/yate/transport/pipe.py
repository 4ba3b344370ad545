"""Standard input/output transport.

When the engine launches the external module itself, the protocol runs over
the child's standard input and output. There is nothing to connect; the
descriptors are usable as soon as the process starts, and end of input
means the engine has gone away.
"""

from __future__ import annotations

import os
import sys
from typing import BinaryIO, List, Optional

from .base import Transport, TransportClosed
from .stream import LineBuffer, frame


class PipeTransport(Transport):
    """Talk to the engine over a pair of file objects, by default the
    standard input and output of this process.
    """

    piped = True
    chunk = 65536

    def __init__(self, input: Optional[BinaryIO] = None, output: Optional[BinaryIO] = None):
        if input is None:
            input = sys.stdin.buffer
        if output is None:
            output = sys.stdout.buffer

        self.input = input
        self.output = output
        self.buffer = LineBuffer()
        self._open = False

    def __repr__(self):
        return 'PipeTransport(%d, %d)' % (self.input.fileno(), self.output.fileno())

    def open(self) -> None:
        self._open = True

    def close(self) -> None:
        # The descriptors belong to the process, not to us; leave them be.
        self._open = False
        self.buffer.clear()

    def fileno(self) -> int:
        return self.input.fileno()

    def read(self) -> List[str]:
        # os.read() returns whatever is available; reading through the
        # buffered file object could block waiting for a full chunk.
        data = os.read(self.input.fileno(), self.chunk)
        if data == b'':
            raise TransportClosed(f"{self!r}: end of input")
        return self.buffer.feed(data)

    def write(self, line: str) -> None:
        self.output.write(frame(line))
        self.output.flush()

    @property
    def is_open(self) -> bool:
        return self._open
