"""Utility modules for buildcleaner.

This module exports the console helpers and confirmation sources.
"""

from buildcleaner.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from buildcleaner.utils.prompts import PromptConfirmer, ScriptedConfirmer

__all__ = [
    "PromptConfirmer",
    "ScriptedConfirmer",
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
