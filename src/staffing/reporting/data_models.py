from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CoverageMetrics:
    """Headline numbers summarising window coverage across all evaluated dates."""

    dates_evaluated: int
    windows_evaluated: int
    windows_met: int
    windows_short_staff: int  # total below min_total_staff
    windows_short_supervisors: int  # supervisors below min_supervisors
    total_staff_shortfall: int
    total_supervisor_shortfall: int
    unresolved_assignments: int

    @property
    def met_ratio(self) -> float:
        if self.windows_evaluated == 0:
            return 1.0
        return self.windows_met / self.windows_evaluated


@dataclass(frozen=True)
class WindowGap:
    """Gap record for one requirement window on one date."""

    date: date
    start_time: str
    end_time: str
    min_total_staff: int
    total_assigned: int
    min_supervisors: int
    supervisors_assigned: int
    staff_shortfall: int  # max(min_total_staff - total_assigned, 0)
    supervisor_shortfall: int  # max(min_supervisors - supervisors_assigned, 0)
