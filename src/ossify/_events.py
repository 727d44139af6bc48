"""Transfer events and the sinks that receive them."""

from __future__ import annotations

import dataclasses
import sys
from typing import Callable, TextIO, Union


@dataclasses.dataclass(frozen=True)
class FileDownloaded:
    """A remote file was written to the local tree."""

    remote: str
    local: str
    size: int


@dataclasses.dataclass(frozen=True)
class UploadProgress:
    """Throttled progress of one streaming upload."""

    local: str
    remote: str
    bytes_written: int
    total: int

    @property
    def percent(self) -> int:
        return int(self.bytes_written * 100 / self.total) if self.total else 100


@dataclasses.dataclass(frozen=True)
class FileUploaded:
    """A streaming upload was finalized on the backend."""

    local: str
    remote: str
    size: int


TransferEvent = Union[FileDownloaded, UploadProgress, FileUploaded]
EventSink = Callable[[TransferEvent], None]


def format_event(event: TransferEvent) -> str:
    """Render an event as the line shown on the console."""
    if isinstance(event, FileDownloaded):
        return f"Downloaded: {event.remote} → {event.local}"
    if isinstance(event, UploadProgress):
        return f"Uploading {event.local}: {event.percent}%"
    return f"Uploaded: {event.local} → {event.remote} ({event.size} bytes)"


def discard_events(event: TransferEvent) -> None:
    """Sink that ignores every event."""


class ConsoleReporter:
    """Event sink writing human-readable lines to a text stream.

    Progress is redrawn in place with a carriage return; the completion
    line of the same upload starts on a fresh line.

    :param stream: Target stream. Defaults to ``sys.stdout`` at call time.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._progress_pending = False

    def __call__(self, event: TransferEvent) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        line = format_event(event)
        if isinstance(event, UploadProgress):
            stream.write(f"\r{line}")
            stream.flush()
            self._progress_pending = True
            return
        self.end_line()
        stream.write(f"{line}\n")

    def end_line(self) -> None:
        """Terminate a pending progress line, e.g. after a failed upload."""
        if self._progress_pending:
            stream = self._stream if self._stream is not None else sys.stdout
            stream.write("\n")
            self._progress_pending = False
