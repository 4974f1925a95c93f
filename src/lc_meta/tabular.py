"""
Elastic tab-stop alignment for plain-text tables.

TabWriter buffers rows of cells and, on flush(), pads every cell except the
last one in its row to the width of the widest cell in its column plus a
fixed padding. Widths are computed per block of consecutive rows that share
the column, so a short row ends the column block above it.
"""

from __future__ import annotations

from typing import Sequence, TextIO


class TabWriter:
    """Buffered column aligner writing to a text stream."""

    def __init__(self, out: TextIO, padding: int = 1) -> None:
        self.out = out
        self.padding = padding
        self._lines: list[list[str]] = []

    def add_row(self, cells: Sequence[object]) -> None:
        """Queue one line. Cells are converted with str()."""
        self._lines.append([str(c) for c in cells])

    def column_widths(self) -> list[list[int]]:
        """
        Compute the padded width of every aligned cell in the buffer.

        Returns:
            One list per buffered line, holding a width for each cell but the
            last one of that line.
        """
        widths = [[0] * max(len(line) - 1, 0) for line in self._lines]
        ncols = max((len(w) for w in widths), default=0)
        for col in range(ncols):
            i = 0
            while i < len(self._lines):
                if len(widths[i]) <= col:
                    i += 1
                    continue
                start = i
                while i < len(self._lines) and len(widths[i]) > col:
                    i += 1
                width = max(len(self._lines[k][col]) for k in range(start, i)) + self.padding
                for k in range(start, i):
                    widths[k][col] = width
        return widths

    def render(self) -> str:
        """Return the aligned text for the buffered lines."""
        parts: list[str] = []
        for line, widths in zip(self._lines, self.column_widths()):
            aligned = "".join(cell.ljust(w) for cell, w in zip(line, widths))
            tail = line[-1] if line else ""
            parts.append(f"{aligned}{tail}\n")
        return "".join(parts)

    def flush(self) -> None:
        """Write the aligned lines to the stream and clear the buffer."""
        text = self.render()
        self._lines = []
        self.out.write(text)
        self.out.flush()
