from .config import Config, cfg
from .coverage import compute_coverage_statuses, compute_daily_coverage
from .input_data import InputData, build_input
from .main import run_evaluation
from .models import Assignment, CoverageStatus, RequirementWindow, ShiftTemplate
from .selector import most_stringent_requirement, select_requirements
from .windows import ZeroLengthPolicy, intervals_overlap, is_time_between

__all__ = [
    "Config",
    "cfg",
    "InputData",
    "build_input",
    "run_evaluation",
    "Assignment",
    "CoverageStatus",
    "RequirementWindow",
    "ShiftTemplate",
    "ZeroLengthPolicy",
    "intervals_overlap",
    "is_time_between",
    "select_requirements",
    "most_stringent_requirement",
    "compute_coverage_statuses",
    "compute_daily_coverage",
]
