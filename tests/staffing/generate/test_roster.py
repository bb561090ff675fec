from __future__ import annotations

from collections import Counter
from datetime import date

import pytest

from staffing.generate.roster import (
    RosterGenConfig,
    assignments_to_dataframe,
    create_assignments,
    default_shift_catalog,
    employee_ids,
)

START = date(2024, 1, 1)


def test_default_shift_catalog() -> None:
    catalog = default_shift_catalog()
    assert len(catalog) == 12
    assert len({s.id for s in catalog}) == 12
    overnight = {s.id for s in catalog if s.crosses_midnight}
    assert overnight == {"swing-10", "swing-12", "grave-10", "grave-12"}
    assert {s.duration_hours() for s in catalog} == {4.0, 10.0, 12.0}


def test_employee_ids() -> None:
    assert employee_ids(3) == ["E001", "E002", "E003"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"n_employees": 0},
        {"days": 0},
        {"shifts_per_day": -1},
        {"supervisor_share": 1.1},
        {"orphan_rate": -0.1},
        {"seed": "7"},
    ],
)
def test_roster_config_validate(overrides) -> None:
    with pytest.raises(ValueError):
        RosterGenConfig(**overrides).validate()


def test_create_assignments_shape() -> None:
    cfg = RosterGenConfig(n_employees=8, days=3, shifts_per_day=5, seed=2)
    catalog = default_shift_catalog()
    out = create_assignments(cfg, catalog, START, schedule_id="s-9")

    assert len(out) == 15
    per_day = Counter(a.date for a in out)
    assert per_day == {date(2024, 1, 1): 5, date(2024, 1, 2): 5, date(2024, 1, 3): 5}
    for d in per_day:
        staff = [a.employee_id for a in out if a.date == d]
        assert len(set(staff)) == len(staff)
    assert {a.shift_id for a in out} <= {s.id for s in catalog}
    assert {a.schedule_id for a in out} == {"s-9"}
    assert out[0].id == "2024-01-01-000"


def test_create_assignments_is_seeded() -> None:
    cfg = RosterGenConfig(n_employees=8, days=2, shifts_per_day=4, seed=11)
    catalog = default_shift_catalog()
    assert create_assignments(cfg, catalog, START) == create_assignments(
        cfg, catalog, START
    )


def test_supervisor_share_extremes() -> None:
    catalog = default_shift_catalog()
    none = RosterGenConfig(n_employees=5, days=1, shifts_per_day=5, supervisor_share=0.0)
    every = RosterGenConfig(n_employees=5, days=1, shifts_per_day=5, supervisor_share=1.0)
    assert not any(a.is_supervisor_shift for a in create_assignments(none, catalog, START))
    assert all(a.is_supervisor_shift for a in create_assignments(every, catalog, START))


def test_orphaned_assignments_point_at_missing_shifts() -> None:
    catalog = default_shift_catalog()
    cfg = RosterGenConfig(n_employees=5, days=1, shifts_per_day=5, orphan_rate=1.0)
    out = create_assignments(cfg, catalog, START)
    known = {s.id for s in catalog}
    assert all(a.shift_id.startswith("missing-") for a in out)
    assert not any(a.shift_id in known for a in out)


def test_create_assignments_requires_shifts() -> None:
    with pytest.raises(ValueError):
        create_assignments(RosterGenConfig(), [], START)


def test_assignments_to_dataframe() -> None:
    catalog = default_shift_catalog()
    cfg = RosterGenConfig(n_employees=4, days=1, shifts_per_day=3, orphan_rate=0.0)
    out = create_assignments(cfg, catalog, START)
    df = assignments_to_dataframe(out, {s.id: s for s in catalog})

    assert len(df) == 3
    assert list(df.columns) == [
        "id",
        "schedule_id",
        "employee_id",
        "date",
        "shift_id",
        "shift_name",
        "start_time",
        "end_time",
        "crosses_midnight",
        "is_supervisor_shift",
    ]
    assert df["shift_name"].notna().all()
    assert set(df["date"]) == {"2024-01-01"}

    unresolved = assignments_to_dataframe(out)
    assert unresolved["shift_name"].isna().all()
