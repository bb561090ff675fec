from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Callable, Sequence

from staffing.config import Config, cfg
from staffing.coverage import compute_daily_coverage, unresolved_assignments
from staffing.generate.roster import assignments_to_dataframe
from staffing.input_data import InputData, build_input, horizon_dates, input_from_json
from staffing.reporting import Reporter
from staffing.reporting.adapters import statuses_to_dataframe
from staffing.result_types import EvaluationResult

InputBuilder = Callable[[Config], InputData]


def default_input_builder(config: Config) -> InputData:
    """Build a synthetic roster using the project's helper."""
    seed = config.SEED if config.SEED is not None else 42
    return build_input(config, seed=seed)


def run_evaluation(
    config: Config | None = None,
    data: InputData | None = None,
    input_builder: InputBuilder | None = None,
    reporter: Reporter | None = None,
    validate_config: bool = True,
    enable_reporting: bool = True,
    export_dir: Path | None = None,
) -> EvaluationResult:
    """
    Evaluate staffing coverage for every date in the input and optionally report.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `staffing.config.cfg` when omitted.
    data:
        Pre-built `InputData`. When omitted then `input_builder` (or the default synthetic
        builder) is used to construct data from the given config.
    input_builder:
        Optional callable that accepts a `Config` and returns `InputData`. Ignored when
        `data` is supplied.
    reporter:
        Custom reporter instance. When `enable_reporting` is True and no reporter is
        provided, the default `Reporter` is used.
    validate_config:
        Toggle to run `Config.validate()` before building inputs.
    enable_reporting:
        When False, skips the text report, plots and PDF entirely.
    export_dir:
        When given, per-window statuses and the assignment roster are written there as CSV.

    Returns
    -------
    EvaluationResult
        Per-date coverage statuses plus the assignments that were excluded.
    """
    cfg_obj = config or cfg

    if validate_config:
        cfg_obj.validate()

    input_data = data
    if input_data is None:
        builder = input_builder or default_input_builder
        input_data = builder(cfg_obj)

    unresolved = unresolved_assignments(input_data.assignments, input_data.shifts)
    if unresolved:
        preview = ", ".join(
            f"{a.id} (shift_id={a.shift_id!r})" for a in unresolved[:5]
        )
        more = f" … {len(unresolved) - 5} more" if len(unresolved) > 5 else ""
        print(
            f"⚠️ Excluding {len(unresolved)} assignment(s) with no resolvable shift: "
            f"{preview}{more}"
        )

    # Synthetic runs cover the whole horizon even on dates nobody was rostered.
    dates = horizon_dates(cfg_obj) if data is None else None
    statuses = compute_daily_coverage(
        input_data.assignments,
        input_data.requirements,
        shifts=input_data.shifts,
        policy=cfg_obj.ZERO_LENGTH_POLICY,
        dates=dates,
    )

    result = EvaluationResult(
        statuses_by_date=statuses,
        df_status=statuses_to_dataframe(statuses),
        unresolved=unresolved,
        zero_length_policy=cfg_obj.ZERO_LENGTH_POLICY.value,
    )

    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(cfg_obj)
    if active_reporter is not None:
        active_reporter.post_evaluate(result, input_data)

    if export_dir is not None:
        _export_reports(result, input_data, export_dir)

    return result


def _export_reports(res: EvaluationResult, data: InputData, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    res.df_status.to_csv(out_dir / "coverage_status.csv", index=False)
    roster = assignments_to_dataframe(data.assignments, data.shifts)
    roster.to_csv(out_dir / "assignments.csv", index=False)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate staffing coverage.")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="JSON file with shifts, requirements and assignments "
        "(default: generate a synthetic roster).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the synthetic roster.",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip plots (text report and PDF are still written).",
    )
    parser.add_argument(
        "--export-dir",
        type=Path,
        default=None,
        help="Directory for CSV exports of statuses and assignments.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> EvaluationResult:
    """CLI entry point."""
    args = parse_args(argv)
    run_cfg = replace(
        cfg,
        SEED=args.seed if args.seed is not None else cfg.SEED,
        ENABLE_PLOTS=cfg.ENABLE_PLOTS and not args.no_plots,
        REQUIREMENTS=list(cfg.REQUIREMENTS),
    )

    data = input_from_json(args.input, run_cfg) if args.input is not None else None
    return run_evaluation(
        config=run_cfg,
        data=data,
        input_builder=default_input_builder,
        reporter=Reporter(run_cfg),
        enable_reporting=True,
        export_dir=args.export_dir,
    )


if __name__ == "__main__":
    main()
