from __future__ import annotations

from typing import Any

from staffing.input_data import InputData
from staffing.result_types import EvaluationResult
from staffing.reporting.adapters import PandasStatusAdapter, StatusAdapter
from staffing.reporting.plots import show_hourly_headcount, show_requirement_coverage
from staffing.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)


class Reporter:
    """High-level orchestrator: renders the text report, plots and the PDF."""

    def __init__(
        self,
        cfg: Any,
        adapter: StatusAdapter | None = None,
        num_print_examples: int | None = None,
        enable_plots: bool | None = None,
    ) -> None:
        """
        cfg must expose:
          - REPORT_PATH
          - ZERO_LENGTH_POLICY
          - NUM_PRINT_EXAMPLES / ENABLE_PLOTS (used when not overridden)
        """
        self.cfg = cfg
        self.adapter: StatusAdapter = adapter or PandasStatusAdapter()
        self.num_print_examples = (
            num_print_examples
            if num_print_examples is not None
            else int(getattr(cfg, "NUM_PRINT_EXAMPLES", 6))
        )
        self.enable_plots = (
            enable_plots
            if enable_plots is not None
            else bool(getattr(cfg, "ENABLE_PLOTS", True))
        )

    def render_text_report(self, res: object) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(
            self.adapter,
            res,
            num_print_examples=self.num_print_examples,
        )

    def post_evaluate(self, res: EvaluationResult, data: InputData) -> None:
        """Render textual report (and optional plots) after evaluating."""
        report_doc = ReportDocument(self.cfg.REPORT_PATH)
        set_active_report(report_doc)
        try:
            self.render_text_report(res)
            if not self.enable_plots:
                return
            show_requirement_coverage(res, self.adapter, enable_plot=True)
            show_hourly_headcount(
                data.assignments,
                data.requirements,
                data.shifts,
                policy=self.cfg.ZERO_LENGTH_POLICY,
                enable_plot=True,
            )
        finally:
            set_active_report(None)
            report_doc.write()
