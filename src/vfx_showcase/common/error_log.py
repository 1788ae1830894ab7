from __future__ import annotations

import sys
import time
import traceback
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO


@dataclass
class ErrorEntry:
    context: str
    message: str
    tb: str | None = None
    count: int = 1
    last_seen: float = field(default_factory=time.time)

    @property
    def key(self) -> tuple[str, str]:
        return self.context, self.message

    def summary_line(self) -> str:
        line = f"{self.context}: {self.message}"
        return line if self.count <= 1 else f"{line} (x{self.count})"

    def report(self) -> str:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(self.last_seen))
        text = f"[{stamp}] {self.context}: {self.message}"
        if self.tb and self.tb.strip():
            text += "\n" + self.tb.rstrip()
        return text


class ErrorLog:
    """
    Runtime failures caught by the showcase's input handlers and frame task.

    A broken effect fails every frame, so a failure identical to the previous
    one only bumps its counter; it is written to the stream (and the optional
    file) once. `banner()` is the one-line text the app keeps on screen.
    """

    def __init__(
        self,
        *,
        max_entries: int = 30,
        persist_path: Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._entries: deque[ErrorEntry] = deque(maxlen=max(1, int(max_entries)))
        self._persist_path = Path(persist_path) if persist_path is not None else None
        self._stream = stream

    def entries(self) -> list[ErrorEntry]:
        return list(self._entries)

    def latest(self) -> ErrorEntry | None:
        return self._entries[-1] if self._entries else None

    def banner(self) -> str:
        last = self.latest()
        return "" if last is None else f"[ERROR] {last.summary_line()}"

    def record_message(self, *, context: str, message: str) -> ErrorEntry:
        text = str(message or "").strip() or "Unknown error"
        return self._record(ErrorEntry(context=str(context or "unknown"), message=text))

    def record_exception(self, *, context: str, exc: BaseException) -> ErrorEntry:
        return self._record(
            ErrorEntry(
                context=str(context or "unknown"),
                message=f"{type(exc).__name__}: {exc}".strip(),
                tb="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            )
        )

    def _record(self, entry: ErrorEntry) -> ErrorEntry:
        last = self.latest()
        if last is not None and last.key == entry.key:
            last.count += 1
            last.last_seen = entry.last_seen
            return last
        self._entries.append(entry)
        self._emit(entry)
        return entry

    def _emit(self, entry: ErrorEntry) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        text = f"[ERROR] {entry.context}: {entry.message}"
        if entry.tb:
            text += "\n" + entry.tb.rstrip()
        print(text, file=stream)

        if self._persist_path is None:
            return
        try:
            self._persist_path.parent.mkdir(parents=True, exist_ok=True)
            with self._persist_path.open("a", encoding="utf-8") as fh:
                fh.write(entry.report() + "\n")
        except OSError:
            pass
