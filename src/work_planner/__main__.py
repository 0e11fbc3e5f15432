"""Command line entry point: python -m work_planner CONFIG."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from work_planner.loaders import load_config_json
from work_planner.render import format_missed, format_schedule, group_by_day
from work_planner.types import PlannerError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="work_planner",
        description="Schedule tasks around blocked calendar time.",
    )
    parser.add_argument("config", type=Path, help="JSON config file")
    parser.add_argument(
        "--out", type=Path, default=None,
        help="write the day-grouped schedule as JSON instead of printing it",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        loaded = load_config_json(args.config)
    except (PlannerError, OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    scheduler = loaded.scheduler
    scheduler.run()
    grouped = group_by_day(scheduler, loaded.tz)

    if args.out is not None:
        with open(args.out, "w") as f:
            json.dump(
                {
                    day: {f"{start} - {end}": description for start, end, description in entries}
                    for day, entries in grouped.items()
                },
                f,
                indent=2,
            )
    else:
        print(format_schedule(grouped))

    for line in format_missed(scheduler):
        print(line, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
