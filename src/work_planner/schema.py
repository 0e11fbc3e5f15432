"""Input validation for planner config files."""

from __future__ import annotations

from datetime import datetime, timedelta

from work_planner.heuristics import HEURISTIC_NAMES
from work_planner.plans import cron_expression, split_range
from work_planner.resolution import parse_granularity, parse_timestamp, resolve_tz
from work_planner.types import PlanError

_REQUIRED_KEYS = ("start", "end", "granularity", "tasks")


def validate_config(data: dict) -> list[str]:
    """Validate a config dict. Returns list of error messages (empty = valid).

    Checks:
    - Required keys are present and the timezone resolves
    - start/end parse and start < end; granularity parses and is positive
    - Each task has a description, a parsable deadline, non-negative
      priority and volume, and in-range integer dependencies
    - Plan rules are valid cron day rules with well-formed time ranges
    - Overrides have parsable, ordered start/end
    - Heuristic names are known
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        return ["Config must be a JSON object"]

    for key in _REQUIRED_KEYS:
        if key not in data:
            errors.append(f"Missing required key '{key}'")
    if errors:
        return errors

    try:
        tz = resolve_tz(data.get("timezone"))
    except ValueError as e:
        return [str(e)]

    bounds = []
    for key in ("start", "end"):
        try:
            bounds.append(parse_timestamp(str(data[key]), tz))
        except ValueError:
            errors.append(f"Invalid {key} timestamp '{data[key]}'")
    if len(bounds) == 2 and bounds[0] >= bounds[1]:
        errors.append(f"start '{data['start']}' must be before end '{data['end']}'")

    try:
        if parse_granularity(str(data["granularity"])) <= timedelta(0):
            errors.append(f"granularity '{data['granularity']}' must be positive")
    except ValueError:
        errors.append(f"Invalid granularity '{data['granularity']}'")

    errors.extend(_validate_tasks(data["tasks"], tz))
    errors.extend(_validate_plans(data.get("plans", [])))
    errors.extend(_validate_overrides(data.get("overrides", []), tz))

    for name in data.get("heuristics", []):
        if name not in HEURISTIC_NAMES:
            errors.append(f"Unknown heuristic '{name}'")

    return errors


def _validate_tasks(tasks, tz) -> list[str]:
    errors: list[str] = []
    if not isinstance(tasks, list):
        return ["'tasks' must be a list"]

    for i, task in enumerate(tasks):
        if not isinstance(task, dict):
            errors.append(f"Task {i}: expected an object, got {task!r}")
            continue
        if "description" not in task:
            errors.append(f"Task {i}: missing 'description'")
        if "deadline" not in task:
            errors.append(f"Task {i}: missing 'deadline'")
        else:
            try:
                parse_timestamp(str(task["deadline"]), tz)
            except ValueError:
                errors.append(f"Task {i}: invalid deadline '{task['deadline']}'")

        for field in ("priority", "volume"):
            value = task.get(field, 0.0)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"Task {i}: '{field}' must be a number")
            elif value < 0:
                errors.append(f"Task {i}: '{field}' must be non-negative, got {value}")

        deps = task.get("dependencies", [])
        if not isinstance(deps, list):
            errors.append(f"Task {i}: 'dependencies' must be a list")
            continue
        for dep in deps:
            if isinstance(dep, bool) or not isinstance(dep, int):
                errors.append(f"Task {i}: dependency {dep!r} is not a task index")
            elif not 0 <= dep < len(tasks):
                errors.append(f"Task {i}: dependency {dep} is out of range")

    return errors


def _validate_plans(plans) -> list[str]:
    errors: list[str] = []
    if not isinstance(plans, list):
        return ["'plans' must be a list"]

    for i, plan in enumerate(plans):
        if not isinstance(plan, dict) or "rule" not in plan or "ranges" not in plan:
            errors.append(f"Plan {i}: expected {{'rule': ..., 'ranges': {{...}}}}")
            continue
        try:
            cron_expression(str(plan["rule"]))
        except PlanError as e:
            errors.append(f"Plan {i}: {e.reason} in rule '{plan['rule']}'")
        if not isinstance(plan["ranges"], dict):
            errors.append(f"Plan {i}: 'ranges' must map time ranges to descriptions")
            continue
        for time_range in plan["ranges"]:
            try:
                start_s, end_s = split_range(time_range, str(plan["rule"]))
            except PlanError as e:
                errors.append(f"Plan {i}: {e.reason}")
                continue
            for clock in (start_s, "00" + end_s[2:] if end_s.startswith("24") else end_s):
                if not _is_clock(clock):
                    errors.append(f"Plan {i}: invalid clock time '{clock}' in '{time_range}'")

    return errors


def _validate_overrides(overrides, tz) -> list[str]:
    errors: list[str] = []
    if not isinstance(overrides, list):
        return ["'overrides' must be a list"]

    for i, override in enumerate(overrides):
        if not isinstance(override, dict):
            errors.append(f"Override {i}: expected an object")
            continue
        try:
            start = parse_timestamp(str(override["start"]), tz)
            end = parse_timestamp(str(override["end"]), tz)
        except (KeyError, ValueError):
            errors.append(f"Override {i}: missing or invalid start/end")
            continue
        if start >= end:
            errors.append(f"Override {i}: start must be before end")

    return errors


def _is_clock(s: str) -> bool:
    try:
        datetime.strptime(s, "%H:%M")
    except ValueError:
        return False
    return True
