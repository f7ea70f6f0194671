"""Data models for buildcleaner.

This module exports the plain data structures passed between the
pipeline stages.
"""

from buildcleaner.models.outcome import (
    Decision,
    DeletionOutcome,
    ExecutionMode,
    FailedItem,
    FailureReason,
    ItemKind,
    PendingItem,
)
from buildcleaner.models.plan import DeletionPlan
from buildcleaner.models.rules import (
    CleaningRule,
    CleanSection,
    OptionsSection,
    ProjectType,
    ResolvedConfig,
    RuleConfig,
    RuleKind,
    ScanOptions,
)
from buildcleaner.models.scan_result import ScanProgress, ScanResult
from buildcleaner.models.stats import Stats

__all__ = [
    "CleanSection",
    "CleaningRule",
    "Decision",
    "DeletionOutcome",
    "DeletionPlan",
    "ExecutionMode",
    "FailedItem",
    "FailureReason",
    "ItemKind",
    "OptionsSection",
    "PendingItem",
    "ProjectType",
    "ResolvedConfig",
    "RuleConfig",
    "RuleKind",
    "ScanOptions",
    "ScanProgress",
    "ScanResult",
    "Stats",
]
