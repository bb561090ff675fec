# staffing/result_types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pandas as pd

from staffing.models import Assignment, CoverageStatus


@dataclass
class EvaluationResult:
    """Structured output of a coverage evaluation run."""

    statuses_by_date: dict[date, list[CoverageStatus]]
    df_status: pd.DataFrame
    unresolved: list[Assignment] = field(default_factory=list)
    zero_length_policy: str = "full_day"

    @property
    def all_met(self) -> bool:
        return all(s.is_met for rows in self.statuses_by_date.values() for s in rows)
