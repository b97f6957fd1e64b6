"""DataTable listing the backtrace frames of one entry, in received order."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import DataTable

from dumpview.ingest.decoder import BacktraceFrame


class BacktraceTable(DataTable):
    """Read-only table of BacktraceFrame rows."""

    COLUMNS: list[tuple[str, int | None]] = [
        ("#", 4),
        ("File", None),
        ("Line", 6),
        ("Function", None),
    ]

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes, cursor_type="row", zebra_stripes=True)
        self._frames: tuple[BacktraceFrame, ...] = ()

    def load_frames(self, frames: tuple[BacktraceFrame, ...]) -> None:
        """Replace the table contents with ``frames``."""
        self.clear(columns=True)
        for name, width in self.COLUMNS:
            self.add_column(name, width=width)

        self._frames = frames
        if not frames:
            self.add_row("--", "No backtrace", "--", "--")
            return

        for index, frame in enumerate(frames):
            self.add_row(
                str(index),
                Text(frame.file),
                str(frame.line),
                Text(frame.qualified_function),
                key=str(index),
            )

    @property
    def frames(self) -> tuple[BacktraceFrame, ...]:
        return self._frames
