from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from staffing.config import Config
from staffing.input_data import (
    InputData,
    assignment_from_record,
    build_input,
    horizon_dates,
    input_from_json,
    requirement_from_record,
    shift_from_record,
)
from staffing.models import ShiftTemplate


def _write_json(tmp_path: Path, payload, name: str = "input.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload))
    return path


def test_shift_from_record_normalizes_times() -> None:
    shift = shift_from_record(
        {"id": "grave-10", "name": "Graveyard (10h)", "start_time": "19:00", "end_time": "05:00"}
    )
    assert shift.start_time == "19:00:00"
    assert shift.crosses_midnight
    assert not shift.requires_supervisor


def test_shift_from_record_rejects_inconsistent_midnight_flag() -> None:
    with pytest.raises(ValueError, match="crosses_midnight"):
        shift_from_record(
            {
                "id": "s",
                "start_time": "08:00:00",
                "end_time": "16:00:00",
                "crosses_midnight": True,
            }
        )


def test_shift_from_record_requires_times() -> None:
    with pytest.raises(ValueError, match="end_time"):
        shift_from_record({"id": "s", "start_time": "08:00:00"})
    with pytest.raises(TypeError):
        shift_from_record(["s", "08:00", "16:00"])  # type: ignore[arg-type]


def test_requirement_from_record_maps_row() -> None:
    req = requirement_from_record(
        {
            "id": 12,
            "start_time": "21:00:00",
            "end_time": "01:00:00",
            "min_total_staff": "7",
            "min_supervisors": 1,
            "crosses_midnight": True,
            "is_active": True,
            "day_of_week": 5,
        }
    )
    assert req.id == "12"
    assert req.min_total_staff == 7
    assert req.min_dispatchers == 6
    assert req.day_of_week == 5
    assert req.crosses_midnight


def test_requirement_from_record_defaults() -> None:
    req = requirement_from_record(
        {"id": "r", "start_time": "08:00", "end_time": "16:00", "min_total_staff": 2}
    )
    assert req.min_supervisors == 0
    assert req.is_active
    assert req.day_of_week is None


def test_requirement_from_record_rejects_supervisors_above_total() -> None:
    with pytest.raises(ValueError, match="min_supervisors"):
        requirement_from_record(
            {
                "id": "r",
                "start_time": "08:00",
                "end_time": "16:00",
                "min_total_staff": 1,
                "min_supervisors": 2,
            }
        )


def test_requirement_from_record_rejects_bad_numbers() -> None:
    base = {"id": "r", "start_time": "08:00", "end_time": "16:00"}
    with pytest.raises(ValueError):
        requirement_from_record({**base, "min_total_staff": "lots"})
    with pytest.raises(TypeError):
        requirement_from_record({**base, "min_total_staff": True})
    with pytest.raises(ValueError):
        requirement_from_record({**base, "min_total_staff": -2})


def test_assignment_from_record_uses_embedded_join() -> None:
    a = assignment_from_record(
        {
            "id": "a1",
            "employee_id": "E001",
            "date": "2024-01-01",
            "is_supervisor_shift": True,
            "shifts": {
                "id": "swing-10",
                "name": "Swing Shift (10h)",
                "start_time": "15:00:00",
                "end_time": "01:00:00",
                "crosses_midnight": True,
            },
        }
    )
    assert a.date == date(2024, 1, 1)
    assert a.shift is not None
    assert a.shift.crosses_midnight
    assert a.shift_id == "swing-10"
    assert a.is_supervisor_shift
    assert a.schedule_id is None


def test_assignment_from_record_blank_shift_id() -> None:
    a = assignment_from_record(
        {"id": "a1", "employee_id": "E001", "date": "2024-01-01", "shift_id": ""}
    )
    assert a.shift_id is None
    assert a.shift is None


def test_assignment_from_record_requires_id() -> None:
    with pytest.raises(ValueError, match="'id'"):
        assignment_from_record({"employee_id": "E001", "date": "2024-01-01"})


def test_input_data_accepts_shift_iterable() -> None:
    shift = ShiftTemplate("day", "Day", "08:00", "16:00")
    data = InputData(shifts=[shift], requirements=[])  # type: ignore[arg-type]
    assert data.shifts == {"day": shift}
    assert data.assignments == []


def test_input_from_json_loads_example(project_root: Path) -> None:
    data = input_from_json(project_root / "src" / "example_input.json")
    assert set(data.shifts) == {"day-early-10", "day-12", "swing-10", "grave-10"}
    assert [r.id for r in data.requirements] == ["early", "day", "evening", "overnight"]
    assert len(data.assignments) == 8
    assert {a.date for a in data.assignments} == {date(2024, 1, 1), date(2024, 1, 2)}


def test_input_from_json_falls_back_to_config_requirements(tmp_path: Path) -> None:
    path = _write_json(
        tmp_path,
        {
            "shifts": [{"id": "d", "start_time": "08:00", "end_time": "16:00"}],
            "assignments": [
                {"id": "a", "employee_id": "E1", "date": "2024-01-01", "shift_id": "d"}
            ],
        },
    )
    c = Config()
    data = input_from_json(path, c)
    assert data.requirements == c.REQUIREMENTS
    assert data.requirements is not c.REQUIREMENTS
    assert input_from_json(path).requirements == []


def test_input_from_json_errors(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        input_from_json(tmp_path / "input.csv")
    with pytest.raises(FileNotFoundError):
        input_from_json(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ValueError, match="Invalid JSON"):
        input_from_json(broken)

    with pytest.raises(TypeError):
        input_from_json(_write_json(tmp_path, [1, 2], "list.json"))
    with pytest.raises(TypeError):
        input_from_json(_write_json(tmp_path, {"shifts": "day"}, "str.json"))


def test_build_input_is_deterministic_and_resolvable() -> None:
    c = Config(N=10, DAYS=3, SHIFTS_PER_DAY=6, START_DATE=datetime(2024, 1, 1))
    a = build_input(c, seed=5)
    b = build_input(c, seed=5)

    assert a.assignments == b.assignments
    assert len(a.assignments) == 18
    assert all(x.shift_id in a.shifts for x in a.assignments)
    assert a.requirements == c.REQUIREMENTS


def test_build_input_caps_daily_assignments_at_headcount() -> None:
    c = Config(N=3, DAYS=2, SHIFTS_PER_DAY=10, START_DATE=datetime(2024, 1, 1))
    data = build_input(c, seed=1)
    assert len(data.assignments) == 6


def test_horizon_dates() -> None:
    c = Config(DAYS=3, START_DATE=datetime(2024, 12, 31))
    assert horizon_dates(c) == [date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)]


def test_shift_from_record_accepts_seconds_level_midnight_flag() -> None:
    shift = shift_from_record(
        {
            "id": "late",
            "start_time": "23:59:30",
            "end_time": "23:59:10",
            "crosses_midnight": True,
        }
    )
    assert shift.crosses_midnight
    with pytest.raises(ValueError, match="crosses_midnight"):
        shift_from_record(
            {
                "id": "late",
                "start_time": "23:59:30",
                "end_time": "23:59:10",
                "crosses_midnight": False,
            }
        )
