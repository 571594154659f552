"""Line-protocol writer for standard output."""

import sys
from typing import Iterable, TextIO

from ..utils.metrics import OutputLine


class LineWriter:
    """Writes rendered lines to a text stream, one per record."""

    def __init__(self, stream: TextIO = None):
        """
        Initialize writer.

        Args:
            stream: Destination stream, defaults to sys.stdout at write time
        """
        self.stream = stream

    def write(self, lines: Iterable[OutputLine]) -> int:
        """
        Write all lines and flush.

        Args:
            lines: Records to write

        Returns:
            int: Number of lines written
        """
        stream = self.stream or sys.stdout
        count = 0
        for line in lines:
            stream.write(line.render())
            stream.write("\n")
            count += 1
        stream.flush()
        return count
