from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Protocol, Sequence, cast

import pandas as pd

from staffing.models import CoverageStatus

STATUS_COLUMNS = [
    "date",
    "requirement_id",
    "start_time",
    "end_time",
    "crosses_midnight",
    "min_total_staff",
    "min_supervisors",
    "min_dispatchers",
    "total_assigned",
    "supervisors_assigned",
    "dispatchers_assigned",
    "staff_shortfall",
    "supervisor_shortfall",
    "is_met",
]


def statuses_to_dataframe(
    statuses_by_date: Mapping[date, Sequence[CoverageStatus]],
) -> pd.DataFrame:
    """Flatten {date -> [CoverageStatus]} into one row per (date, window)."""
    rows = []
    for d, statuses in statuses_by_date.items():
        for s in statuses:
            r = s.requirement
            rows.append(
                {
                    "date": d,
                    "requirement_id": r.id,
                    "start_time": r.start_time,
                    "end_time": r.end_time,
                    "crosses_midnight": r.crosses_midnight,
                    "min_total_staff": r.min_total_staff,
                    "min_supervisors": r.min_supervisors,
                    "min_dispatchers": r.min_dispatchers,
                    "total_assigned": s.total_assigned,
                    "supervisors_assigned": s.supervisors_assigned,
                    "dispatchers_assigned": s.dispatchers_assigned,
                    "staff_shortfall": s.staff_shortfall,
                    "supervisor_shortfall": s.supervisor_shortfall,
                    "is_met": s.is_met,
                }
            )
    if not rows:
        return pd.DataFrame(columns=STATUS_COLUMNS)
    return pd.DataFrame(rows, columns=STATUS_COLUMNS)


class StatusAdapter(Protocol):
    """Minimal interface the Reporter needs to work with any evaluation result."""

    def zero_length_policy(self, res: Any) -> str: ...
    def unresolved_count(self, res: Any) -> int: ...
    def df_status(self, res: Any) -> pd.DataFrame: ...


class PandasStatusAdapter:
    """Default adapter for the shipped EvaluationResult dataclass."""

    def zero_length_policy(self, res: Any) -> str:
        return str(getattr(res, "zero_length_policy", "full_day"))

    def unresolved_count(self, res: Any) -> int:
        return len(getattr(res, "unresolved", None) or [])

    def df_status(self, res: Any) -> pd.DataFrame:
        df = cast(pd.DataFrame, getattr(res, "df_status", None))
        if not isinstance(df, pd.DataFrame) or df.empty:
            by_date = getattr(res, "statuses_by_date", None)
            return statuses_to_dataframe(by_date) if by_date else pd.DataFrame()

        cols = {str(c).lower(): c for c in df.columns}
        missing = [c for c in STATUS_COLUMNS if c not in cols]
        if missing:
            return pd.DataFrame()
        out = df[[cols[c] for c in STATUS_COLUMNS]].copy()
        out.columns = STATUS_COLUMNS
        out["date"] = pd.to_datetime(out["date"]).dt.date
        int_cols = [
            "min_total_staff",
            "min_supervisors",
            "min_dispatchers",
            "total_assigned",
            "supervisors_assigned",
            "dispatchers_assigned",
            "staff_shortfall",
            "supervisor_shortfall",
        ]
        out = out.astype({c: int for c in int_cols})
        out["is_met"] = out["is_met"].astype(bool)
        out["crosses_midnight"] = out["crosses_midnight"].astype(bool)
        return out
