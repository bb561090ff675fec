from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence, cast

import pandas as pd

from staffing.coverage import resolve_shift
from staffing.models import Assignment, RequirementWindow, ShiftTemplate
from staffing.windows import ZeroLengthPolicy, is_time_between

from .adapters import StatusAdapter
from .data_models import CoverageMetrics, WindowGap


def compute_coverage_metrics(res: Any, adapter: StatusAdapter) -> CoverageMetrics:
    """Compute CoverageMetrics for an evaluation result."""
    df = adapter.df_status(res)
    unresolved = adapter.unresolved_count(res)
    if df.empty:
        return CoverageMetrics(
            dates_evaluated=0,
            windows_evaluated=0,
            windows_met=0,
            windows_short_staff=0,
            windows_short_supervisors=0,
            total_staff_shortfall=0,
            total_supervisor_shortfall=0,
            unresolved_assignments=unresolved,
        )

    return CoverageMetrics(
        dates_evaluated=int(df["date"].nunique()),
        windows_evaluated=int(len(df)),
        windows_met=int(df["is_met"].sum()),
        windows_short_staff=int((df["staff_shortfall"] > 0).sum()),
        windows_short_supervisors=int((df["supervisor_shortfall"] > 0).sum()),
        total_staff_shortfall=int(df["staff_shortfall"].sum()),
        total_supervisor_shortfall=int(df["supervisor_shortfall"].sum()),
        unresolved_assignments=unresolved,
    )


def compute_window_gaps(
    res: Any,
    adapter: StatusAdapter,
    top: int = 15,
) -> tuple[list[WindowGap], pd.DataFrame]:
    """Return the worst unmet windows plus the full DataFrame of unmet rows."""
    df = adapter.df_status(res)
    cols = list(WindowGap.__dataclass_fields__)
    if df.empty:
        return [], pd.DataFrame(columns=cols)

    unmet = df[~df["is_met"]][cols]
    df_sorted = unmet.sort_values(
        ["staff_shortfall", "supervisor_shortfall", "min_total_staff", "date"],
        ascending=[False, False, False, True],
    )
    top_rows = [
        WindowGap(**cast(dict[str, Any], r))
        for r in df_sorted.head(top).to_dict(orient="records")
    ]
    return top_rows, df_sorted


def met_ratio_by_window(res: Any, adapter: StatusAdapter) -> pd.DataFrame:
    """Share of dates on which each requirement window was met."""
    df = adapter.df_status(res)
    if df.empty:
        return pd.DataFrame(
            columns=["requirement_id", "start_time", "end_time", "met_ratio"]
        )
    g = df.groupby(["requirement_id", "start_time", "end_time"], sort=False)
    out = g["is_met"].mean().rename("met_ratio").reset_index()
    return out


def headcount_by_hour(
    assignments: Iterable[Assignment],
    shifts: Optional[Mapping[str, ShiftTemplate]] = None,
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> pd.Series:
    """
    Average number of people on shift at the top of each hour of day.

    Averaged over the distinct dates present in ``assignments``; overnight
    shifts count on the hours past midnight of their start date's roster.
    """
    counts = [0] * 24
    dates: set[date] = set()
    for a in assignments:
        dates.add(a.date)
        shift = resolve_shift(a, shifts)
        if shift is None:
            continue
        for h in range(24):
            if is_time_between(h * 60, shift.start_time, shift.end_time, policy=policy):
                counts[h] += 1

    n_days = len(dates)
    if n_days == 0:
        return pd.Series([0.0] * 24, index=range(24))
    return pd.Series([c / n_days for c in counts], index=range(24))


def required_by_hour(
    requirements: Sequence[RequirementWindow],
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> pd.Series:
    """Highest min_total_staff among active windows covering each hour of day."""
    req = [0] * 24
    for r in requirements:
        if not r.is_active:
            continue
        for h in range(24):
            if is_time_between(h * 60, r.start_time, r.end_time, policy=policy):
                req[h] = max(req[h], int(r.min_total_staff))
    return pd.Series(req, index=range(24))
