from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from staffing.windows import (
    TimeLike,
    ZeroLengthPolicy,
    crosses_midnight,
    normalize_time,
    window_seconds,
)


def _normalize_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise ValueError(f"Invalid ISO date string: {value!r}") from exc
    raise TypeError("Assignment dates must be datetime.date, datetime or ISO strings.")


def _non_negative_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int; got {type(value)!r}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0; got {value}")
    return value


@dataclass(frozen=True, slots=True)
class ShiftTemplate:
    """
    A reusable shift definition (e.g. "Graveyard (10h)", 19:00-05:00).
    """

    id: str
    name: str
    start_time: TimeLike
    end_time: TimeLike
    requires_supervisor: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_time", normalize_time(self.start_time))
        object.__setattr__(self, "end_time", normalize_time(self.end_time))

    @property
    def crosses_midnight(self) -> bool:
        return crosses_midnight(self.start_time, self.end_time)

    def duration_hours(
        self, policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY
    ) -> float:
        return window_seconds(self.start_time, self.end_time, policy=policy) / 3600.0


@dataclass(frozen=True, slots=True)
class RequirementWindow:
    """
    Minimum staffing for a time-of-day window, independent of any date.

    ``day_of_week`` restricts the window to one weekday (0 = Sunday ..
    6 = Saturday); ``None`` applies it every day.
    """

    id: str
    start_time: TimeLike
    end_time: TimeLike
    min_total_staff: int
    min_supervisors: int
    is_active: bool = True
    day_of_week: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_time", normalize_time(self.start_time))
        object.__setattr__(self, "end_time", normalize_time(self.end_time))
        _non_negative_int(self.min_total_staff, "min_total_staff")
        _non_negative_int(self.min_supervisors, "min_supervisors")
        if self.day_of_week is not None and not (0 <= int(self.day_of_week) <= 6):
            raise ValueError("day_of_week must be within [0, 6] (0 = Sunday).")

    @property
    def crosses_midnight(self) -> bool:
        return crosses_midnight(self.start_time, self.end_time)

    @property
    def min_dispatchers(self) -> int:
        return self.min_total_staff - self.min_supervisors

    @property
    def label(self) -> str:
        return f"{self.start_time} - {self.end_time}"


@dataclass(frozen=True, slots=True)
class Assignment:
    """
    One employee on one shift on one concrete date.

    ``shift`` is an optional embedded snapshot of the shift template; when it
    is missing the evaluator resolves ``shift_id`` against a shift lookup.
    """

    id: str
    employee_id: str
    date: date
    shift_id: Optional[str] = None
    shift: Optional[ShiftTemplate] = None
    is_supervisor_shift: bool = False
    schedule_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _normalize_date(self.date))
        if self.shift is not None and self.shift_id is None:
            object.__setattr__(self, "shift_id", self.shift.id)


@dataclass(frozen=True, slots=True)
class CoverageStatus:
    """Computed staffing status of one requirement window on one date."""

    requirement: RequirementWindow
    total_assigned: int
    supervisors_assigned: int
    dispatchers_assigned: int
    is_met: bool
    assignment_ids: tuple[str, ...] = field(default=(), compare=False)

    @property
    def staff_shortfall(self) -> int:
        return max(self.requirement.min_total_staff - self.total_assigned, 0)

    @property
    def supervisor_shortfall(self) -> int:
        return max(self.requirement.min_supervisors - self.supervisors_assigned, 0)
