#!/usr/bin/env python
"""Visual verification report for work-planner.

Run:  uv run python scripts/verify.py

Produces a formatted report showing:
  1. Reference data (window, granularity, tasks, plans)
  2. Heuristic scores at the first decision point
  3. Every scheduling decision with the cursor before and after
  4. The day-grouped schedule, ASCII day view and missed deadlines
"""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
CONFIG = ROOT / "data" / "fixtures" / "reference_config.json"

sys.path.insert(0, str(ROOT / "src"))

from work_planner.loaders import load_config_json
from work_planner.render import format_missed, format_schedule, group_by_day, show_days

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        print(fmt.format(*row))


def _hm(dt, tz) -> str:
    return dt.astimezone(tz).strftime("%a %H:%M")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
def section_reference(scheduler, tz):
    banner("REFERENCE DATA")
    print(f"\n    Window:       {_hm(scheduler.window.start, tz)} -> {_hm(scheduler.window.end, tz)}")
    print(f"    Granularity:  {scheduler.state.granularity}")
    print(f"    Heuristics:   {', '.join(scheduler.heuristics.names)}\n")

    table(
        ["Id", "Description", "Deadline", "Priority", "Volume", "Depends on"],
        [
            [
                str(t.task_id), t.description, _hm(t.deadline, tz),
                f"{t.priority:g}", f"{t.volume:g}h",
                ", ".join(str(d) for d in t.dependencies) or "-",
            ]
            for t in scheduler.tasks
        ],
    )
    print()
    table(
        ["Start", "End", "Plan"],
        [[_hm(e.start, tz), _hm(e.end, tz), e.description] for e in scheduler.plans],
    )


def section_scores(scheduler):
    banner("HEURISTIC SCORES AT WINDOW START")
    state = scheduler.state
    rows = []
    for task in scheduler.tasks:
        parts = [f"{h.evaluate(state, task.task_id):.4g}" for h in scheduler.heuristics]
        rows.append([str(task.task_id), *parts, f"{scheduler.heuristics.score(state, task.task_id):.4g}"])
    table(["Id", *scheduler.heuristics.names, "combined"], rows)


def section_decisions(scheduler, tz):
    banner("DECISIONS")
    rows = []
    for n, decision in enumerate(scheduler, start=1):
        rows.append([
            str(n), str(decision.task_id), _hm(decision.start, tz), _hm(decision.end, tz),
            f"{scheduler.committed_hours(decision.task_id):g}h",
        ])
    table(["#", "Task", "Start", "End", "Committed"], rows)
    print(f"\n    Stopped at {_hm(scheduler.current_time, tz)}")


def section_schedule(scheduler, tz):
    banner("SCHEDULE")
    grouped = group_by_day(scheduler, tz)
    print(format_schedule(grouped))
    print()
    first = scheduler.window.start.astimezone(tz).date()
    last = scheduler.window.end.astimezone(tz).date()
    print(show_days(scheduler, tz, first, max(last, first + timedelta(days=1))))
    print()
    for line in format_missed(scheduler) or ["No missed deadlines."]:
        print(f"    {line}")


def main() -> int:
    loaded = load_config_json(CONFIG)
    scheduler, tz = loaded.scheduler, loaded.tz
    section_reference(scheduler, tz)
    section_scores(scheduler)
    section_decisions(scheduler, tz)
    section_schedule(scheduler, tz)
    return 0


if __name__ == "__main__":
    sys.exit(main())
