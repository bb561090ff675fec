from __future__ import annotations

from .adapters import PandasStatusAdapter, StatusAdapter, statuses_to_dataframe
from .data_models import CoverageMetrics, WindowGap
from .reporter import Reporter

__all__ = [
    "Reporter",
    "StatusAdapter",
    "PandasStatusAdapter",
    "statuses_to_dataframe",
    "CoverageMetrics",
    "WindowGap",
]
