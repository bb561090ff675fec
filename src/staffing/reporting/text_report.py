from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from .adapters import StatusAdapter
from .metrics import compute_coverage_metrics, compute_window_gaps, met_ratio_by_window


A4_PORTRAIT = (8.27, 11.69)
LINES_PER_PAGE = 110


class ReportDocument:
    """Printed report text plus figures, written out as one PDF."""

    def __init__(self, path: Path, title: str = "Staffing coverage report") -> None:
        self.path = path
        self.title = title
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        # multi-line prints are split so pagination counts real lines
        self.lines.extend(text.split("\n"))

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def _text_pages(self) -> list[list[str]]:
        if not self.lines:
            return [] if self.figures else [["Report contains no data."]]
        return [
            self.lines[i : i + LINES_PER_PAGE]
            for i in range(0, len(self.lines), LINES_PER_PAGE)
        ]

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        pages = self._text_pages()
        with PdfPages(self.path) as pdf:
            for n, page in enumerate(pages, start=1):
                fig, ax = plt.subplots(figsize=A4_PORTRAIT)
                ax.axis("off")
                header = self.title
                if len(pages) > 1:
                    header = f"{self.title} ({n}/{len(pages)})"
                ax.set_title(header, loc="left", fontsize=9)
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(page),
                    ha="left",
                    va="top",
                    fontsize=7,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_pct(x: float | None, nd: int = 1) -> str:
    if x is None or pd.isna(x):
        return "nan"
    return f"{100 * float(x):.{nd}f}%"


def format_status_card(row: Any) -> str:
    """One window as the dashboard shows it: badge, required vs assigned."""
    badge = "Met" if bool(row["is_met"]) else "Not Met"
    return (
        f"  {row['start_time']} - {row['end_time']}  [{badge}]\n"
        f"      Required: Total {int(row['min_total_staff'])} | "
        f"Sup {int(row['min_supervisors'])} | Disp {int(row['min_dispatchers'])}\n"
        f"      Assigned: Total {int(row['total_assigned'])} | "
        f"Sup {int(row['supervisors_assigned'])} | Disp {int(row['dispatchers_assigned'])}"
    )


def render_text_report(
    adapter: StatusAdapter,
    res: Any,
    *,
    num_print_examples: int = 6,
) -> None:
    df = adapter.df_status(res)
    _log_print(
        f"Coverage evaluation (zero-length windows: {adapter.zero_length_policy(res)})"
    )

    unresolved = adapter.unresolved_count(res)
    if unresolved:
        _log_print(
            f"⚠️ {unresolved:,} assignment(s) had no resolvable shift and were excluded."
        )

    if df.empty:
        _log_print("No requirement windows were evaluated.")
        return

    dates = sorted(df["date"].unique())
    shown = dates[:num_print_examples]
    _log_print(f"\nPer-date coverage (first {len(shown)} of {len(dates)} dates):")
    for d in shown:
        day_rows = df[df["date"] == d]
        n_met = int(day_rows["is_met"].sum())
        _log_print(f"\n{pd.Timestamp(d):%Y-%m-%d (%a)}: {n_met}/{len(day_rows)} met")
        for _, row in day_rows.iterrows():
            _log_print(format_status_card(row))

    cov = compute_coverage_metrics(res, adapter)
    _log_print(
        f"\nSummary: windows_met={cov.windows_met:,} / "
        f"windows_evaluated={cov.windows_evaluated:,} "
        f"({_fmt_pct(cov.met_ratio)}) across {cov.dates_evaluated} date(s)"
    )
    _log_print(
        f"Short on total staff: {cov.windows_short_staff:,} window(s), "
        f"{cov.total_staff_shortfall:,} people missing in total"
    )
    _log_print(
        f"Short on supervisors: {cov.windows_short_supervisors:,} window(s), "
        f"{cov.total_supervisor_shortfall:,} supervisor(s) missing in total"
    )
    _log_print(
        "\nDefinitions:"
        "\n- window: a requirement's time-of-day span evaluated on one date."
        "\n- assigned: people whose shift overlaps the window at any point."
        "\n- Disp: assigned people not on a supervisor shift.\n"
    )

    ratios = met_ratio_by_window(res, adapter)
    if not ratios.empty:
        _log_print("Met ratio by window:")
        for _, r in ratios.iterrows():
            _log_print(
                f"  {r['start_time']} - {r['end_time']}: {_fmt_pct(r['met_ratio'])}"
            )

    top_gaps, df_gaps = compute_window_gaps(res, adapter, top=5)
    if not top_gaps:
        _log_print("\nWindow gaps: every window met its minimums.")
    else:
        _log_print("\nTop window gaps (against required minimums):")
        _log_print(
            df_gaps.rename(
                columns={
                    "min_total_staff": "required",
                    "total_assigned": "assigned",
                    "min_supervisors": "required_sup",
                    "supervisors_assigned": "assigned_sup",
                }
            )
            .head(5)
            .to_string(index=False)
        )
