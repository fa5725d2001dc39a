# metrics_tracker.py - query timings and outcome counters for the REPL /stats view

import json
import logging
import os
from collections import Counter, defaultdict
from typing import Optional

from rich.table import Table
from rich import box

from hitzkale.core.models import QueryState

logger = logging.getLogger(__name__)


class Metrics:
    """
    Running totals, kept in seconds:
      timings  - key -> sum / count / slowest
      outcomes - how many queries ended in each status
    Pass a path to keep the numbers between sessions (JSON).
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.total = defaultdict(float)
        self.calls = defaultdict(int)
        self.slowest = defaultdict(float)
        self.outcomes = Counter()
        self._load()

    def _load(self):
        if not (self.path and os.path.exists(self.path)):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                d = json.load(f)
            for k, v in d.get("timings", {}).items():
                self.total[k] = float(v["sum"])
                self.calls[k] = int(v["count"])
                self.slowest[k] = float(v.get("max", 0.0))
            self.outcomes.update(d.get("outcomes", {}))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("ignoring unreadable metrics file %s: %s", self.path, e)

    def save(self):
        if not self.path:
            return
        d = {
            "timings": {
                k: {"sum": self.total[k], "count": self.calls[k], "max": self.slowest[k]}
                for k in self.total
            },
            "outcomes": dict(self.outcomes),
        }
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key: str, seconds: float) -> None:
        self.total[key] += seconds
        self.calls[key] += 1
        self.slowest[key] = max(self.slowest[key], seconds)
        self.save()

    def record_query(self, state: QueryState, seconds: float) -> None:
        """One finished query: overall and per-kind match time, plus its outcome."""
        self.outcomes[state.status.value] += 1
        self.total[f"{state.kind.value}_match_time"] += seconds
        self.calls[f"{state.kind.value}_match_time"] += 1
        self.slowest[f"{state.kind.value}_match_time"] = max(
            self.slowest[f"{state.kind.value}_match_time"], seconds
        )
        self.record("match_time", seconds)

    def count(self, key: str) -> int:
        return self.calls.get(key, 0)

    def avg(self, key: str) -> float:
        if not self.calls.get(key):
            return 0.0
        return self.total[key] / self.calls[key]

    def table(self) -> Table:
        t = Table(title="Metrics", box=box.SIMPLE)
        t.add_column("Metric", style="cyan")
        t.add_column("Count", justify="right")
        t.add_column("Avg (ms)", justify="right", style="magenta")
        t.add_column("Max (ms)", justify="right")
        for k in sorted(self.total):
            t.add_row(k, str(self.calls[k]), f"{self.avg(k) * 1000:.2f}", f"{self.slowest[k] * 1000:.2f}")
        for status, n in sorted(self.outcomes.items()):
            t.add_row(f"queries: {status}", str(n), "", "")
        return t
