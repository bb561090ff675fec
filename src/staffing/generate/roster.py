# staffing/generate/roster.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from staffing.models import Assignment, ShiftTemplate


# ----------------------------
# Configuration container
# ----------------------------
@dataclass(slots=True)
class RosterGenConfig:
    """
    Configuration for generation of a synthetic assignment roster.
    """

    n_employees: int = 40
    days: int = 7

    # Average number of assignments per date (capped at n_employees)
    shifts_per_day: int = 24

    # Probability that an assignment counts towards the supervisor quota
    supervisor_share: float = 0.15

    # Probability that an assignment is written without a resolvable shift
    orphan_rate: float = 0.0

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if self.n_employees <= 0:
            raise ValueError("n_employees must be > 0.")
        if self.days <= 0:
            raise ValueError("days must be > 0.")
        if self.shifts_per_day < 0:
            raise ValueError("shifts_per_day must be non-negative.")
        for name in ("supervisor_share", "orphan_rate"):
            if not (0.0 <= getattr(self, name) <= 1.0):
                raise ValueError(f"{name} must be in [0,1].")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")


# ----------------------------
# Generation helpers
# ----------------------------
def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def default_shift_catalog() -> list[ShiftTemplate]:
    """The 4h / 10h / 12h variants of the four dispatch shifts."""
    rows = [
        ("day-early-4", "Day Shift Early (4h)", "05:00:00", "09:00:00"),
        ("day-early-10", "Day Shift Early (10h)", "05:00:00", "15:00:00"),
        ("day-early-12", "Day Shift Early (12h)", "05:00:00", "17:00:00"),
        ("day-4", "Day Shift (4h)", "09:00:00", "13:00:00"),
        ("day-10", "Day Shift (10h)", "09:00:00", "19:00:00"),
        ("day-12", "Day Shift (12h)", "09:00:00", "21:00:00"),
        ("swing-4", "Swing Shift (4h)", "13:00:00", "17:00:00"),
        ("swing-10", "Swing Shift (10h)", "15:00:00", "01:00:00"),
        ("swing-12", "Swing Shift (12h)", "15:00:00", "03:00:00"),
        ("grave-4", "Graveyard (4h)", "01:00:00", "05:00:00"),
        ("grave-10", "Graveyard (10h)", "19:00:00", "05:00:00"),
        ("grave-12", "Graveyard (12h)", "17:00:00", "05:00:00"),
    ]
    return [
        ShiftTemplate(id=sid, name=name, start_time=s, end_time=e, requires_supervisor=True)
        for sid, name, s, e in rows
    ]


def employee_ids(n: int) -> list[str]:
    return [f"E{i:03d}" for i in range(1, n + 1)]


# ----------------------------
# Core API
# ----------------------------
def create_assignments(
    cfg: RosterGenConfig,
    shifts: Sequence[ShiftTemplate],
    start_date: date,
    schedule_id: str = "sched-1",
) -> list[Assignment]:
    """
    Draw a random roster: each date gets up to ``shifts_per_day`` distinct
    employees, each on one shift from ``shifts``.

    Orphaned assignments keep a ``shift_id`` that matches no template, which
    is how a dangling foreign key looks to the evaluator.
    """
    cfg.validate()
    if not shifts:
        raise ValueError("At least one shift template is required.")
    g = _rng(cfg.seed)
    staff = employee_ids(cfg.n_employees)
    per_day = min(cfg.shifts_per_day, cfg.n_employees)

    out: list[Assignment] = []
    for d in range(cfg.days):
        day = start_date + timedelta(days=d)
        chosen = g.choice(len(staff), size=per_day, replace=False)
        shift_idx = g.integers(0, len(shifts), size=per_day)
        sup_flags = g.random(per_day) < cfg.supervisor_share
        orphan_flags = g.random(per_day) < cfg.orphan_rate
        for k in range(per_day):
            shift = shifts[int(shift_idx[k])]
            orphan = bool(orphan_flags[k])
            out.append(
                Assignment(
                    id=f"{day.isoformat()}-{k:03d}",
                    employee_id=staff[int(chosen[k])],
                    date=day,
                    shift_id=f"missing-{shift.id}" if orphan else shift.id,
                    is_supervisor_shift=bool(sup_flags[k]),
                    schedule_id=schedule_id,
                )
            )
    return out


# ----------------------------
# Convenience utilities
# ----------------------------
def assignments_to_dataframe(
    assignments: Sequence[Assignment],
    shifts: Optional[dict[str, ShiftTemplate]] = None,
) -> pd.DataFrame:
    rows = []
    for a in assignments:
        shift = a.shift or (shifts or {}).get(a.shift_id or "")
        rows.append(
            {
                "id": a.id,
                "schedule_id": a.schedule_id,
                "employee_id": a.employee_id,
                "date": a.date.isoformat(),
                "shift_id": a.shift_id,
                "shift_name": shift.name if shift else None,
                "start_time": shift.start_time if shift else None,
                "end_time": shift.end_time if shift else None,
                "crosses_midnight": shift.crosses_midnight if shift else np.nan,
                "is_supervisor_shift": bool(a.is_supervisor_shift),
            }
        )
    return pd.DataFrame(rows)
