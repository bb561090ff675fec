from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import matplotlib.pyplot as plt

from staffing.models import Assignment, RequirementWindow, ShiftTemplate
from staffing.windows import ZeroLengthPolicy

from .adapters import StatusAdapter
from .metrics import headcount_by_hour, required_by_hour
from .text_report import get_active_report


def _save_and_show(fig: plt.Figure, filename: str, out_dir: Path = Path("outputs")) -> None:
    """Persist the plot under outputs/ and show it."""
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def show_requirement_coverage(
    res: Any,
    adapter: StatusAdapter,
    enable_plot: bool = True,
) -> None:
    """Grouped bars of required vs average assigned staff for each requirement window."""
    if not enable_plot:
        return
    df = adapter.df_status(res)
    if df.empty:
        return

    g = df.groupby(["requirement_id", "start_time", "end_time"], sort=False)
    agg = g.agg(
        required=("min_total_staff", "max"),
        assigned=("total_assigned", "mean"),
        required_sup=("min_supervisors", "max"),
        assigned_sup=("supervisors_assigned", "mean"),
    ).reset_index()

    labels = [f"{s[:5]}-{e[:5]}" for s, e in zip(agg["start_time"], agg["end_time"])]
    xs = list(range(len(labels)))
    width = 0.38

    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("Required vs assigned staff by window", pad=35)
    ax.bar(
        [x - width / 2 for x in xs],
        agg["required"],
        width=width,
        label="Required (total)",
        color="tab:gray",
        alpha=0.6,
        edgecolor="none",
    )
    ax.bar(
        [x + width / 2 for x in xs],
        agg["assigned"],
        width=width,
        label="Assigned (avg total)",
        color="tab:blue",
        alpha=0.8,
        edgecolor="none",
    )
    ax.plot(
        xs,
        agg["assigned_sup"],
        marker="o",
        linewidth=1,
        color="black",
        label="Supervisors (avg)",
    )
    ax.set_xticks(xs)
    ax.set_xticklabels(labels)
    ax.set_xlabel("Requirement window")
    ax.set_ylabel("Staff")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(
        ncol=3,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.15),
        borderaxespad=0.3,
    )
    fig.tight_layout(rect=(0, 0, 1, 0.92))
    _save_and_show(fig, "requirement_coverage.png")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_hourly_headcount(
    assignments: Sequence[Assignment],
    requirements: Sequence[RequirementWindow],
    shifts: Optional[Mapping[str, ShiftTemplate]] = None,
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
    enable_plot: bool = True,
) -> None:
    """Average on-shift headcount by hour of day against the required minimum."""
    if not enable_plot or not assignments:
        return

    on_shift = headcount_by_hour(assignments, shifts, policy=policy)
    required = required_by_hour(requirements, policy=policy)
    hours = list(on_shift.index)

    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("On-shift headcount by hour of day", pad=35)
    ax.bar(
        hours,
        [float(on_shift.loc[h]) for h in hours],
        width=0.9,
        color="tab:blue",
        alpha=0.6,
        edgecolor="none",
        label="Avg on shift",
    )
    ax.step(
        hours,
        [float(required.loc[h]) for h in hours],
        where="mid",
        color="tab:red",
        linewidth=1.25,
        label="Required (max window minimum)",
    )
    ax.set_xlim(-0.5, 23.5)
    ax.set_xticks(hours)
    ax.set_xlabel("Hour of day")
    ax.set_ylabel("People")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(
        ncol=2,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.15),
        borderaxespad=0.3,
    )
    fig.tight_layout(rect=(0, 0, 1, 0.92))
    _save_and_show(fig, "hourly_headcount.png")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)
