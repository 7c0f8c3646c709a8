from pathlib import Path

import re
import sys
import datetime as dt
from typing import Optional

from agent_relay.modules.config import Config


def _one_line(text: str) -> str:
    return re.sub(r"\s+", " ", str(text).replace("\r", " ").replace("\n", " ")).strip()


class ChatLogger:
    """Simple, file-based logger for chat turns, tool calls and transfers."""

    _CFG: Config = Config.load()

    def __init__(self, file_path: Optional[Path | str] = None) -> None:
        """Initialize the logger with a unique file path per run."""

        # Determine base log file path (from config or override)
        base_path = Path(file_path) if file_path is not None else self._CFG.log_file
        base_name = base_path.stem
        ext = base_path.suffix or ".log"

        # Generate a unique filename using UTC timestamp
        timestamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        self._path = base_path.parent / f"{base_name}_{timestamp}{ext}"

    @property
    def path(self) -> Path:
        return self._path

    def _write(self, line: str) -> None:
        if self._CFG.verbose:
            print(line, end="", file=sys.stderr)
        if not self._CFG.log_enabled:
            return

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(line)

    def log(self, role: str, content: str) -> None:
        """Append a single chat message or agent step to the log."""
        if not (self._CFG.log_enabled or self._CFG.verbose):
            return

        timestamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds")
        self._write(f"[{timestamp}] {role}: {_one_line(content)}\n")

    def event(self, name: str, **fields: str) -> None:
        """Log a structured app event."""
        if not (self._CFG.log_enabled or self._CFG.verbose):
            return

        timestamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds")
        parts = [f"{k}={_one_line(v)}" for k, v in fields.items()]
        self._write(f"[{timestamp}] event:{name} " + " ".join(parts) + "\n")


# Create global logger
logger = ChatLogger()
