from __future__ import annotations

from typing import Iterable, Optional, Sequence

from staffing.models import Assignment, CoverageStatus, RequirementWindow, ShiftTemplate
from staffing.windows import ZeroLengthPolicy, intervals_overlap


def shift_overlaps(
    shift: ShiftTemplate,
    requirement: RequirementWindow,
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> bool:
    return intervals_overlap(
        shift.start_time,
        shift.end_time,
        requirement.start_time,
        requirement.end_time,
        policy=policy,
    )


def select_requirements(
    shift: ShiftTemplate,
    requirements: Iterable[RequirementWindow],
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> list[RequirementWindow]:
    """Return every active requirement whose window overlaps the shift, in input order."""
    return [
        r
        for r in requirements
        if r.is_active and shift_overlaps(shift, r, policy=policy)
    ]


def most_stringent_requirement(
    shift: ShiftTemplate,
    requirements: Iterable[RequirementWindow],
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> Optional[RequirementWindow]:
    """
    Pick the single requirement that governs a shift.

    The highest ``min_total_staff`` wins; ties keep the first one found.
    """
    candidates = select_requirements(shift, requirements, policy=policy)
    if not candidates:
        return None
    return max(candidates, key=lambda r: r.min_total_staff)


def evaluate_shift_coverage(
    shift: ShiftTemplate,
    assignments: Sequence[Assignment],
    requirements: Iterable[RequirementWindow],
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> Optional[CoverageStatus]:
    """
    Per-shift view: count the assignments placed on ``shift`` against the
    most stringent requirement it overlaps. Returns None when no requirement
    applies to the shift.
    """
    requirement = most_stringent_requirement(shift, requirements, policy=policy)
    if requirement is None:
        return None

    on_shift = [a for a in assignments if a.shift_id == shift.id]
    supervisors = sum(1 for a in on_shift if a.is_supervisor_shift)
    total = len(on_shift)
    return CoverageStatus(
        requirement=requirement,
        total_assigned=total,
        supervisors_assigned=supervisors,
        dispatchers_assigned=total - supervisors,
        is_met=(
            total >= requirement.min_total_staff
            and supervisors >= requirement.min_supervisors
        ),
        assignment_ids=tuple(a.id for a in on_shift),
    )
