"""buildcleaner: find and remove disposable build artifacts.

Typical use::

    from buildcleaner import ExecutionMode, clean

    report = clean(["~/projects/app"], mode=ExecutionMode.DRY_RUN)
    print(report.stats.matched_size)
"""

from buildcleaner.core.config import ConfigResolver
from buildcleaner.core.errors import (
    CleanerError,
    EmptyRuleSetError,
    PathNotFoundError,
    PermissionDeniedError,
    SafetyViolationError,
    UserCancelledError,
)
from buildcleaner.core.executor import DeletionExecutor
from buildcleaner.core.pipeline import CleanReport, clean
from buildcleaner.core.planner import build_plan
from buildcleaner.core.report import aggregate
from buildcleaner.core.scanner import Scanner
from buildcleaner.models import (
    CleaningRule,
    Decision,
    DeletionOutcome,
    DeletionPlan,
    ExecutionMode,
    RuleConfig,
    ScanOptions,
    ScanResult,
    Stats,
)

__version__ = "0.1.0"

__all__ = [
    "CleanReport",
    "CleanerError",
    "CleaningRule",
    "ConfigResolver",
    "Decision",
    "DeletionExecutor",
    "DeletionOutcome",
    "DeletionPlan",
    "EmptyRuleSetError",
    "ExecutionMode",
    "PathNotFoundError",
    "PermissionDeniedError",
    "RuleConfig",
    "SafetyViolationError",
    "ScanOptions",
    "ScanResult",
    "Scanner",
    "Stats",
    "UserCancelledError",
    "__version__",
    "aggregate",
    "build_plan",
    "clean",
]
