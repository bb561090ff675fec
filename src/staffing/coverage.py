# src/staffing/coverage.py
from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from staffing.models import Assignment, CoverageStatus, RequirementWindow, ShiftTemplate
from staffing.selector import shift_overlaps
from staffing.windows import ZeroLengthPolicy

ShiftLookup = Mapping[str, ShiftTemplate]


def resolve_shift(
    assignment: Assignment, shifts: Optional[ShiftLookup] = None
) -> Optional[ShiftTemplate]:
    """Embedded shift snapshot first, then ``shift_id`` lookup; None if neither resolves."""
    if assignment.shift is not None:
        return assignment.shift
    if assignment.shift_id is None or shifts is None:
        return None
    return shifts.get(assignment.shift_id)


def unresolved_assignments(
    assignments: Iterable[Assignment], shifts: Optional[ShiftLookup] = None
) -> list[Assignment]:
    """Assignments the aggregator excludes because their shift cannot be resolved."""
    return [a for a in assignments if resolve_shift(a, shifts) is None]


def _build_status(
    requirement: RequirementWindow, overlapping: Sequence[Assignment]
) -> CoverageStatus:
    total = len(overlapping)
    supervisors = sum(1 for a in overlapping if a.is_supervisor_shift)
    return CoverageStatus(
        requirement=requirement,
        total_assigned=total,
        supervisors_assigned=supervisors,
        dispatchers_assigned=total - supervisors,
        is_met=(
            total >= requirement.min_total_staff
            and supervisors >= requirement.min_supervisors
        ),
        assignment_ids=tuple(a.id for a in overlapping),
    )


def compute_coverage_statuses(
    assignments: Iterable[Assignment],
    requirements: Iterable[RequirementWindow],
    *,
    shifts: Optional[ShiftLookup] = None,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> list[CoverageStatus]:
    """
    Evaluate every active requirement window against one day's assignments.

    Each window counts every assignment whose shift overlaps it, regardless of
    which other windows that shift also overlaps. Assignments whose shift
    cannot be resolved count towards nothing.
    """
    resolved = [
        (a, shift)
        for a in assignments
        if (shift := resolve_shift(a, shifts)) is not None
    ]

    statuses: list[CoverageStatus] = []
    for requirement in requirements:
        if not requirement.is_active:
            continue
        overlapping = [
            a for a, shift in resolved if shift_overlaps(shift, requirement, policy=policy)
        ]
        statuses.append(_build_status(requirement, overlapping))
    return statuses


def day_of_week(day: date) -> int:
    """Weekday index with Sunday = 0, as stored on requirement rows."""
    return (day.weekday() + 1) % 7


def requirements_for_date(
    requirements: Iterable[RequirementWindow], day: date
) -> list[RequirementWindow]:
    dow = day_of_week(day)
    return [
        r
        for r in requirements
        if r.is_active and (r.day_of_week is None or r.day_of_week == dow)
    ]


def group_assignments(
    assignments: Iterable[Assignment],
) -> dict[date, dict[str, list[Assignment]]]:
    """Group assignments by date, then by shift id. Assignments with no shift id are dropped."""
    grouped: dict[date, dict[str, list[Assignment]]] = defaultdict(
        lambda: defaultdict(list)
    )
    for a in assignments:
        if not a.shift_id:
            continue
        grouped[a.date][a.shift_id].append(a)
    return {d: dict(by_shift) for d, by_shift in grouped.items()}


def compute_daily_coverage(
    assignments: Iterable[Assignment],
    requirements: Sequence[RequirementWindow],
    *,
    shifts: Optional[ShiftLookup] = None,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
    dates: Optional[Iterable[date]] = None,
) -> dict[date, list[CoverageStatus]]:
    """
    Run the aggregator once per date.

    Assignments are bucketed with ``group_assignments``, so ones without a
    shift id never reach the aggregator; their dates are still evaluated.
    ``dates`` adds days that have no assignments yet, so their windows are
    still reported (as unmet unless the minimum is zero).
    """
    assignments = list(assignments)
    grouped = group_assignments(assignments)
    by_date: dict[date, list[Assignment]] = {
        d: [a for on_shift in by_shift.values() for a in on_shift]
        for d, by_shift in grouped.items()
    }
    for d in [a.date for a in assignments] + list(dates or ()):
        by_date.setdefault(d, [])

    return {
        d: compute_coverage_statuses(
            by_date[d],
            requirements_for_date(requirements, d),
            shifts=shifts,
            policy=policy,
        )
        for d in sorted(by_date)
    }
