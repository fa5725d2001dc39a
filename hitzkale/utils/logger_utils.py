# logger_utils.py - app-level log file, metrics and timestamps

import os
import time
from datetime import datetime
from typing import Optional

from rich.console import Console

# Directory where log files are stored, created on first write
LOG_DIR = os.environ.get("HITZKALE_LOG_DIR", "logs")

# Path to the default log file, can be overriden
DEFAULT_LOG_PATH = os.path.join(LOG_DIR, "hitzkale.log")

_stderr = Console(stderr=True, highlight=False)


def _append(path: str, line: str) -> None:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")


class Log:
    """Lightweight logger for writing messages and tracking metrics."""
    STYLES = {
        "DEBUG": "dim",
        "INFO": "blue",
        "WARNING": "yellow",
        "ERROR": "bold red",
    }

    def __init__(self, path: Optional[str] = None, echo: bool = False):
        self.path = path or DEFAULT_LOG_PATH
        self.echo = echo

    def log(self, level: str, msg: str) -> None:
        """
        Append a message to the log file with a timestamp.
        Each entry is written as: [YYYY-MM-DD HH:MM:SS] LEVEL   | message
        """
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{ts}] {level:<7} | {msg}"
        _append(self.path, line)

        if self.echo:
            _stderr.print(line, style=self.STYLES.get(level, ""), markup=False)

    # Public logging methods
    def debug(self, msg: str) -> None:
        self.log("DEBUG", msg)

    def info(self, msg: str) -> None:
        self.log("INFO", msg)

    def warning(self, msg: str) -> None:
        self.log("WARNING", msg)

    def error(self, msg: str) -> None:
        self.log("ERROR", msg)

    @staticmethod
    def write(msg: str, path: Optional[str] = None) -> None:
        """Append a bare timestamped line, no level."""
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        _append(path or DEFAULT_LOG_PATH, f"[{ts}] {msg}")

    @staticmethod
    def metric(tag: str, value, unit: str = "", path: Optional[str] = None) -> None:
        """
        Record a metric (timing, counts).
        Example: [12:45:02] match done: 0.003s
        """
        ts = datetime.now().strftime("%H:%M:%S")
        _append(path or DEFAULT_LOG_PATH, f"[{ts}] {tag}: {value}{unit}")

    @staticmethod
    def time_block(label: str, path: Optional[str] = None) -> "_Timer":
        """
        Measure how long a block takes and record it as a metric:
            with Log.time_block("load dictionary"):
                store = DictionaryStore.load_default()
        """
        return _Timer(label, path)


class _Timer:
    """Context manager used internally to time a code block."""
    def __init__(self, label: str, path: Optional[str] = None):
        self.label = label
        self.path = path
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        Log.metric(f"{self.label} done", round(self.elapsed, 3), "s", path=self.path)
