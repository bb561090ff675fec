from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pandas as pd

from staffing.models import Assignment, CoverageStatus, RequirementWindow, ShiftTemplate
from staffing.reporting import data_models, metrics
from staffing.reporting.adapters import PandasStatusAdapter, statuses_to_dataframe
from staffing.windows import ZeroLengthPolicy

EARLY = RequirementWindow("early", "05:00", "09:00", 2, 1)
EVENING = RequirementWindow("evening", "21:00", "01:00", 4, 1)
D1 = date(2024, 1, 1)
D2 = date(2024, 1, 2)


def make_result(unresolved: int = 0) -> SimpleNamespace:
    statuses = {
        D1: [
            CoverageStatus(EARLY, 2, 1, 1, True),
            CoverageStatus(EVENING, 3, 0, 3, False),
        ],
        D2: [
            CoverageStatus(EARLY, 1, 1, 0, False),
            CoverageStatus(EVENING, 1, 1, 0, False),
        ],
    }
    return SimpleNamespace(
        statuses_by_date=statuses,
        df_status=statuses_to_dataframe(statuses),
        unresolved=[object()] * unresolved,
        zero_length_policy="full_day",
    )


def test_compute_coverage_metrics() -> None:
    cov = metrics.compute_coverage_metrics(make_result(unresolved=2), PandasStatusAdapter())
    assert cov == data_models.CoverageMetrics(
        dates_evaluated=2,
        windows_evaluated=4,
        windows_met=1,
        windows_short_staff=3,
        windows_short_supervisors=1,
        total_staff_shortfall=5,
        total_supervisor_shortfall=1,
        unresolved_assignments=2,
    )
    assert cov.met_ratio == 0.25


def test_compute_coverage_metrics_empty() -> None:
    res = SimpleNamespace(df_status=pd.DataFrame(), statuses_by_date={}, unresolved=[])
    cov = metrics.compute_coverage_metrics(res, PandasStatusAdapter())
    assert cov.windows_evaluated == 0
    assert cov.met_ratio == 1.0


def test_compute_window_gaps_orders_worst_first() -> None:
    gaps, df = metrics.compute_window_gaps(make_result(), PandasStatusAdapter())
    assert len(df) == 3
    assert [(g.date, g.start_time) for g in gaps] == [
        (D2, "21:00:00"),
        (D1, "21:00:00"),
        (D2, "05:00:00"),
    ]
    assert isinstance(gaps[0], data_models.WindowGap)
    assert gaps[0].staff_shortfall == 3
    assert gaps[1].supervisor_shortfall == 1

    top_one, _ = metrics.compute_window_gaps(make_result(), PandasStatusAdapter(), top=1)
    assert len(top_one) == 1


def test_compute_window_gaps_empty_when_all_met() -> None:
    statuses = {D1: [CoverageStatus(EARLY, 2, 1, 1, True)]}
    res = SimpleNamespace(df_status=statuses_to_dataframe(statuses))
    gaps, df = metrics.compute_window_gaps(res, PandasStatusAdapter())
    assert gaps == []
    assert df.empty


def test_met_ratio_by_window() -> None:
    out = metrics.met_ratio_by_window(make_result(), PandasStatusAdapter())
    assert out["requirement_id"].tolist() == ["early", "evening"]
    assert out["met_ratio"].tolist() == [0.5, 0.0]


def test_headcount_by_hour_wraps_midnight() -> None:
    night = ShiftTemplate("night", "Night", "22:00", "06:00")
    day = ShiftTemplate("day", "Day", "08:00", "16:00")
    assignments = [
        Assignment("a1", "E1", D1, shift=night),
        Assignment("a2", "E2", D1, shift_id="day"),
        Assignment("a3", "E3", D2, shift=night),
        Assignment("a4", "E4", D2, shift_id="retired"),
    ]
    counts = metrics.headcount_by_hour(assignments, {"day": day})
    assert counts[23] == 1.0
    assert counts[0] == 1.0
    assert counts[5] == 1.0
    assert counts[6] == 0.0
    assert counts[8] == 0.5
    assert counts[16] == 0.0
    assert metrics.headcount_by_hour([]).sum() == 0.0


def test_required_by_hour_takes_max_of_active_windows() -> None:
    reqs = [
        EARLY,
        EVENING,
        RequirementWindow("peak", "08:00", "10:00", 6, 1),
        RequirementWindow("off", "12:00", "13:00", 9, 1, is_active=False),
    ]
    req = metrics.required_by_hour(reqs)
    assert req[5] == 2
    assert req[8] == 6
    assert req[9] == 6
    assert req[10] == 0
    assert req[12] == 0
    assert req[21] == 4
    assert req[0] == 4
    assert req[1] == 0


def test_required_by_hour_zero_length_policy() -> None:
    reqs = [RequirementWindow("all", "07:00", "07:00", 3, 0)]
    assert metrics.required_by_hour(reqs).tolist() == [3] * 24
    assert metrics.required_by_hour(reqs, policy=ZeroLengthPolicy.EMPTY).sum() == 0
