from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from staffing.models import RequirementWindow
from staffing.windows import TimeLike, ZeroLengthPolicy


def _default_requirements() -> list[RequirementWindow]:
    # Dispatch-centre baseline: one supervisor on the floor around the clock.
    return [
        RequirementWindow("early", "05:00:00", "09:00:00", 6, 1),
        RequirementWindow("day", "09:00:00", "21:00:00", 8, 1),
        RequirementWindow("evening", "21:00:00", "01:00:00", 7, 1),
        RequirementWindow("overnight", "01:00:00", "05:00:00", 6, 1),
    ]


@dataclass
class Config:

    # Number of synthetic employees (only used when input is generated)
    N: int = 40

    # Evaluation horizon
    DAYS: int = 7
    START_DATE: datetime = datetime(2025, 1, 13)  # Monday

    # Staffing requirement windows evaluated on each date
    REQUIREMENTS: list[RequirementWindow] = field(
        default_factory=_default_requirements
    )

    # start == end windows: FULL_DAY covers 24h, EMPTY covers nothing
    ZERO_LENGTH_POLICY: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY

    ### SYNTHETIC ROSTER ###

    # Share of generated assignments flagged as supervisor shifts
    SUPERVISOR_SHARE: float = 0.15

    # Average number of employees working on each date
    SHIFTS_PER_DAY: int = 24

    # RANDOM SEED
    SEED: Optional[int] = None

    ### REPORTING ###

    ENABLE_PLOTS: bool = True
    NUM_PRINT_EXAMPLES: int = 6
    REPORT_PATH: Path = Path("outputs/coverage_report.pdf")

    def validate(self) -> None:
        """
        Validate the Config object has sensible values before evaluating.
        """
        if self.DAYS <= 0:
            raise ValueError("DAYS must be > 0.")
        if self.N <= 0:
            raise ValueError("N must be > 0.")
        if not (0.0 <= self.SUPERVISOR_SHARE <= 1.0):
            raise ValueError("SUPERVISOR_SHARE must be in [0, 1].")
        if self.SHIFTS_PER_DAY < 0:
            raise ValueError("SHIFTS_PER_DAY must be non-negative.")
        if self.NUM_PRINT_EXAMPLES < 0:
            raise ValueError("NUM_PRINT_EXAMPLES must be non-negative.")
        if not isinstance(self.ZERO_LENGTH_POLICY, ZeroLengthPolicy):
            raise ValueError("ZERO_LENGTH_POLICY must be a ZeroLengthPolicy member.")
        seen: set[str] = set()
        for req in self.REQUIREMENTS:
            if req.id in seen:
                raise ValueError(f"Duplicate requirement id {req.id!r}.")
            seen.add(req.id)
            if req.min_supervisors > req.min_total_staff:
                raise ValueError(
                    f"Requirement {req.id!r}: min_supervisors ({req.min_supervisors}) "
                    f"exceeds min_total_staff ({req.min_total_staff})."
                )


def add_requirement(
    C: Config,
    start: TimeLike,
    end: TimeLike,
    min_total_staff: int,
    min_supervisors: int = 0,
    day_of_week: int | None = None,
    req_id: str | None = None,
) -> RequirementWindow:
    if min_supervisors > min_total_staff:
        raise ValueError("min_supervisors must not exceed min_total_staff")
    req = RequirementWindow(
        id=req_id or f"req{len(C.REQUIREMENTS)}",
        start_time=start,
        end_time=end,
        min_total_staff=min_total_staff,
        min_supervisors=min_supervisors,
        day_of_week=day_of_week,
    )
    C.REQUIREMENTS.append(req)
    return req


def clear_requirements(C: Config) -> None:
    C.REQUIREMENTS = []


cfg = Config(
    N=40,
    DAYS=7,
    START_DATE=datetime(2025, 1, 13),
    SHIFTS_PER_DAY=28,
    SUPERVISOR_SHARE=0.15,
    SEED=3,
)
