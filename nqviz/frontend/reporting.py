"""CSV export and tabular summaries for finished runs.

These helpers materialize the solution list and the event log of a run as CSV
files, expose the event log as a pandas ``DataFrame`` for inspection, and
collect per-N search effort for the effort chart. Filenames carry the board
size and the optional run tag/datestamp from ``nqviz.settings``.
"""
from __future__ import annotations

import csv
import os
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from .. import settings
from ..engine import SearchEngine, SearchMode
from ..sinks import LogEntry


def build_suffix() -> str:
    """Return the ``_RUNTAG_RUNID`` filename suffix configured in settings."""
    parts: List[str] = []
    if settings.RUN_TAG:
        parts.append(str(settings.RUN_TAG))
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        parts.append(str(settings.RUN_ID))
    return ("_" + "_".join(parts)) if parts else ""


def save_solutions_to_csv(solutions: Sequence[Sequence[int]], size: int, out_dir: str) -> str:
    """Write one row per solution: index, then the column of each row.

    Column names follow lowercase snake_case: ``solution, row_0, ..., row_{N-1}``.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"solutions_N{size}{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["solution"] + [f"row_{r}" for r in range(size)])
        for index, solution in enumerate(solutions, start=1):
            writer.writerow([index] + list(solution))

    print(f"Saved {len(solutions)} solutions to {filename}")
    return filename


def save_event_log_to_csv(entries: Iterable[LogEntry], size: int, out_dir: str) -> str:
    """Write the event log as ``step, category, message`` rows."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"events_N{size}{build_suffix()}.csv")

    count = 0
    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["step", "category", "message"])
        for step, entry in enumerate(entries, start=1):
            writer.writerow([step, entry.category.value, entry.message])
            count = step

    print(f"Saved {count} log records to {filename}")
    return filename


def events_frame(entries: Iterable[LogEntry]) -> pd.DataFrame:
    """Return the event log as a DataFrame with ``step``, ``category``, ``message``."""
    rows = [
        {"step": step, "category": entry.category.value, "message": entry.message}
        for step, entry in enumerate(entries, start=1)
    ]
    return pd.DataFrame(rows, columns=["step", "category", "message"])


def summarize_events(entries: Iterable[LogEntry]) -> Dict[str, int]:
    """Count log records per category (categories with no records are omitted)."""
    frame = events_frame(entries)
    if frame.empty:
        return {}
    counts = frame["category"].value_counts()
    return {str(category): int(count) for category, count in counts.items()}


def collect_search_effort(n_values: Iterable[int]) -> List[Dict[str, Any]]:
    """Run an unanimated find-all search for each N and record its effort.

    Returns dicts with ``n``, ``solutions``, ``trials``, ``placements``,
    ``backtracks`` and ``dead_ends``, in the order of ``n_values``.
    """
    records: List[Dict[str, Any]] = []
    for n in n_values:
        engine = SearchEngine(delay=0.0, solution_pause=0.0, auto_skip_threshold=None)
        engine.begin(n)
        engine.control.request_skip()
        engine.run(SearchMode.FIND_ALL)
        engine.control.finish()
        record: Dict[str, Any] = {"n": n}
        record.update(engine.context.stats.to_dict())
        records.append(record)
        print(f"[effort] N={n}: {record['solutions']} solutions, {record['trials']} trials")
    return records


def save_effort_to_csv(records: List[Dict[str, Any]], out_dir: str) -> str:
    """Write effort records via pandas, one row per N."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"effort_vs_N{build_suffix()}.csv")
    columns = ["n", "solutions", "trials", "placements", "backtracks", "dead_ends"]
    pd.DataFrame(records, columns=columns).to_csv(filename, index=False)
    print(f"Saved effort table to {filename}")
    return filename
