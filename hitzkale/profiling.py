# hitzkale/profiling.py
"""
Small profiling harness for the matchers.
Usage:
  python -m hitzkale.profiling --iters 1000
  python -m hitzkale.profiling --iters 500 --out last_profile.json

Times every query against the indexed store and against a plain list of the
same entries, and prints median/p90/max latency for both.
"""

import argparse
import json
import random
import time
from pathlib import Path
from statistics import median
from typing import Callable, Dict, List, Sequence

from hitzkale.core.dictionary import DictionaryStore
from hitzkale.core.matchers import extract_suffixed_forms, find_words_ending_with
from hitzkale.core.models import WordEntry

QUERIES = ["etxe", "lan", "ikas", "*kide", "*tegi", "*tasun", "*keria", "*kor", "zor", "hil"]


def run_query(query: str, entries: Sequence[WordEntry]):
    if query.startswith("*"):
        return find_words_ending_with(query[1:], entries)
    return extract_suffixed_forms(query, entries)


def benchmark(fn: Callable[[str], object], queries: List[str], iterations: int = 200,
              seed: int = 0) -> List[float]:
    rng = random.Random(seed)
    times = []
    for _ in range(iterations):
        q = rng.choice(queries)
        t0 = time.perf_counter()
        fn(q)
        times.append((time.perf_counter() - t0) * 1000.0)  # ms
    return times


def summarize(times: List[float]) -> Dict[str, float]:
    if not times:
        return {"count": 0, "median_ms": 0.0, "p90_ms": 0.0, "max_ms": 0.0}
    times_sorted = sorted(times)
    return {
        "count": len(times_sorted),
        "median_ms": median(times_sorted),
        "p90_ms": times_sorted[max(0, int(0.9 * len(times_sorted)) - 1)],
        "max_ms": times_sorted[-1],
    }


def profile(store: DictionaryStore, iterations: int = 500) -> Dict[str, Dict[str, float]]:
    flat = list(store)
    return {
        "indexed": summarize(benchmark(lambda q: run_query(q, store), QUERIES, iterations)),
        "linear": summarize(benchmark(lambda q: run_query(q, flat), QUERIES, iterations)),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="profile hitzkale matchers")
    parser.add_argument("--iters", type=int, default=500, help="measured iterations")
    parser.add_argument("--out", type=str, default=None, help="write the summary as JSON")
    args = parser.parse_args(argv)

    store = DictionaryStore.load_default()
    summary = profile(store, args.iters)
    for name, s in summary.items():
        print(f"{name:8} median={s['median_ms']:.4f}ms p90={s['p90_ms']:.4f}ms max={s['max_ms']:.4f}ms")
    if args.out:
        Path(args.out).write_text(json.dumps(summary, indent=2))
        print("Saved profile summary to", args.out)
    return summary


if __name__ == "__main__":
    main()
