from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

from staffing.config import Config
from staffing.generate.roster import (
    RosterGenConfig,
    create_assignments,
    default_shift_catalog,
)
from staffing.models import Assignment, RequirementWindow, ShiftTemplate
from staffing.windows import crosses_midnight


@dataclass
class InputData:
    """Everything one evaluation run needs, already mapped to typed models."""

    shifts: dict[str, ShiftTemplate]
    requirements: list[RequirementWindow]
    assignments: list[Assignment] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.shifts, dict):
            self.shifts = {s.id: s for s in self.shifts}


# ----------------------------
# Record mappers
# ----------------------------
def _require(raw: Mapping[str, Any], key: str, kind: str) -> Any:
    value = raw.get(key)
    if value is None:
        raise ValueError(f"{kind} record missing '{key}'.")
    return value


def _to_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"Invalid integer for '{name}': {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer for '{name}': {value!r}") from exc


def _check_stored_midnight_flag(raw: Mapping[str, Any], kind: str) -> None:
    stored = raw.get("crosses_midnight")
    if stored is None:
        return
    derived = crosses_midnight(raw["start_time"], raw["end_time"])
    if bool(stored) != derived:
        raise ValueError(
            f"{kind} {raw.get('id')!r}: crosses_midnight={stored!r} disagrees with "
            f"{raw['start_time']}-{raw['end_time']}."
        )


def shift_from_record(raw: Mapping[str, Any]) -> ShiftTemplate:
    if not isinstance(raw, Mapping):
        raise TypeError("Each shift entry must be an object/dict.")
    _require(raw, "start_time", "Shift")
    _require(raw, "end_time", "Shift")
    _check_stored_midnight_flag(raw, "Shift")
    return ShiftTemplate(
        id=str(_require(raw, "id", "Shift")),
        name=str(raw.get("name", "")),
        start_time=raw["start_time"],
        end_time=raw["end_time"],
        requires_supervisor=bool(raw.get("requires_supervisor", False)),
    )


def requirement_from_record(raw: Mapping[str, Any]) -> RequirementWindow:
    """
    Map a stored requirement row. This is the data-entry boundary, so the
    ``min_supervisors <= min_total_staff`` invariant is enforced here.
    """
    if not isinstance(raw, Mapping):
        raise TypeError("Each requirement entry must be an object/dict.")
    _require(raw, "start_time", "Requirement")
    _require(raw, "end_time", "Requirement")
    _check_stored_midnight_flag(raw, "Requirement")

    min_total = _to_int(_require(raw, "min_total_staff", "Requirement"), "min_total_staff")
    min_sup = _to_int(raw.get("min_supervisors", 0), "min_supervisors")
    if min_sup > min_total:
        raise ValueError(
            f"Requirement {raw.get('id')!r}: min_supervisors ({min_sup}) exceeds "
            f"min_total_staff ({min_total})."
        )

    dow_raw = raw.get("day_of_week")
    return RequirementWindow(
        id=str(_require(raw, "id", "Requirement")),
        start_time=raw["start_time"],
        end_time=raw["end_time"],
        min_total_staff=min_total,
        min_supervisors=min_sup,
        is_active=bool(raw.get("is_active", True)),
        day_of_week=None if dow_raw is None else _to_int(dow_raw, "day_of_week"),
    )


def assignment_from_record(raw: Mapping[str, Any]) -> Assignment:
    """
    Map a stored assignment row. A joined shift may be embedded under
    ``shift`` or ``shifts``; otherwise only ``shift_id`` is kept and resolved
    later against the shift table.
    """
    if not isinstance(raw, Mapping):
        raise TypeError("Each assignment entry must be an object/dict.")

    embedded = raw.get("shift") or raw.get("shifts")
    shift = shift_from_record(embedded) if isinstance(embedded, Mapping) else None
    shift_id = raw.get("shift_id")

    return Assignment(
        id=str(_require(raw, "id", "Assignment")),
        employee_id=str(_require(raw, "employee_id", "Assignment")),
        date=_require(raw, "date", "Assignment"),
        shift_id=None if shift_id in (None, "") else str(shift_id),
        shift=shift,
        is_supervisor_shift=bool(raw.get("is_supervisor_shift", False)),
        schedule_id=None if raw.get("schedule_id") is None else str(raw["schedule_id"]),
    )


def _entries(data: Mapping[str, Any], key: str, path: Path) -> Sequence[Any]:
    entries = data.get(key, [])
    if isinstance(entries, (str, bytes, bytearray)) or not isinstance(entries, Sequence):
        raise TypeError(f"'{key}' in {path} must be a list of objects.")
    return entries


def input_from_json(path: str | Path, cfg: Optional[Config] = None) -> InputData:
    """
    Load shifts, requirements and assignments from a JSON file on disk.

    The file holds an object with ``shifts``, ``requirements`` and
    ``assignments`` arrays. When ``requirements`` is absent the requirement
    windows of ``cfg`` are used.
    """
    file_path = Path(path).expanduser()

    if file_path.suffix.lower() != ".json":
        raise ValueError("input_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Input JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if not isinstance(data, Mapping):
        raise TypeError("JSON file must contain an object with shifts/assignments.")

    shifts = [shift_from_record(r) for r in _entries(data, "shifts", file_path)]
    if "requirements" in data:
        requirements = [
            requirement_from_record(r) for r in _entries(data, "requirements", file_path)
        ]
    else:
        requirements = list(cfg.REQUIREMENTS) if cfg is not None else []
    assignments = [
        assignment_from_record(r) for r in _entries(data, "assignments", file_path)
    ]

    return InputData(
        shifts={s.id: s for s in shifts},
        requirements=requirements,
        assignments=assignments,
    )


def build_input(
    cfg: Config,
    seed: int = 7,
    shifts: Iterable[ShiftTemplate] | None = None,
) -> InputData:
    """
    Build an InputData object with a synthetic roster.

    Parameters:
    cfg (Config): the configuration to use (horizon, requirement windows, roster size)
    seed (int, optional): the random seed to use. Defaults to 7.
    shifts (Iterable[ShiftTemplate], optional): shift catalogue; defaults to the
        standard 4h/10h/12h catalogue.

    Returns:
    InputData: the generated input data
    """
    catalog = list(shifts) if shifts is not None else default_shift_catalog()
    gen_cfg = RosterGenConfig(
        n_employees=cfg.N,
        days=cfg.DAYS,
        shifts_per_day=cfg.SHIFTS_PER_DAY,
        supervisor_share=cfg.SUPERVISOR_SHARE,
        seed=seed,
    )
    gen_cfg.validate()

    assignments = create_assignments(gen_cfg, catalog, cfg.START_DATE.date())
    return InputData(
        shifts={s.id: s for s in catalog},
        requirements=list(cfg.REQUIREMENTS),
        assignments=assignments,
    )


def horizon_dates(cfg: Config) -> list[date]:
    start = cfg.START_DATE.date()
    return [start + timedelta(days=d) for d in range(cfg.DAYS)]
