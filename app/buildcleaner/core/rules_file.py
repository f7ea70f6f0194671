"""Rules file I/O operations.

This module provides functions for loading and saving rule files in
TOML format with validation through the RuleConfig Pydantic model.

Example rules.toml::

    exclude = ["~/work/keep-me"]

    [clean]
    folders = ["node_modules", ".venv"]
    files = ["*.log"]

    [options]
    recursive = true
    minAgeDays = 7
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from buildcleaner.core.errors import CleanerError
from buildcleaner.core.paths import get_rules_path
from buildcleaner.models.rules import RuleConfig


class RulesFileError(CleanerError):
    """Base exception for rules file errors."""


class RulesFileNotFoundError(RulesFileError):
    """Raised when the rules file is not found."""


class RulesFileParseError(RulesFileError):
    """Raised when the rules file cannot be parsed."""


class RulesFileValidationError(RulesFileError):
    """Raised when the rules file content is invalid."""


def load_rules(path: Path | None = None) -> RuleConfig:
    """Load and validate a rule object from a TOML file.

    Args:
        path: Path to the rules file. If None, uses the default rules path.

    Returns:
        Validated RuleConfig.

    Raises:
        RulesFileNotFoundError: If the rules file doesn't exist.
        RulesFileParseError: If the TOML syntax is invalid.
        RulesFileValidationError: If the content doesn't match the schema.
    """
    rules_path = path or get_rules_path()

    if not rules_path.exists():
        raise RulesFileNotFoundError(f"Rules file not found: {rules_path}")

    try:
        with open(rules_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise RulesFileParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise RulesFileError(f"Failed to read rules file: {e}") from e

    try:
        return RuleConfig.model_validate(data)
    except ValidationError as e:
        raise RulesFileValidationError(f"Invalid rules file content: {e}") from e


def save_rules(config: RuleConfig, path: Path | None = None) -> Path:
    """Save a rule object to a TOML file.

    The file is written to a temporary file in the same directory and
    then moved into place with os.replace(). The temporary file is
    removed on failure.

    Args:
        config: The RuleConfig to save.
        path: Destination path. If None, uses the default rules path.

    Returns:
        Path where the rules were saved.

    Raises:
        RulesFileError: If the file cannot be written.
    """
    rules_path = path or get_rules_path()
    rules_path.parent.mkdir(parents=True, exist_ok=True)

    data = _rules_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=rules_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(rules_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise RulesFileError(f"Failed to write rules file: {e}") from e

    return rules_path


def rules_file_exists(path: Path | None = None) -> bool:
    """Check if a rules file exists.

    Args:
        path: Path to check. If None, uses the default rules path.
    """
    return (path or get_rules_path()).exists()


def _rules_to_dict(config: RuleConfig) -> dict[str, Any]:
    """Convert a RuleConfig to a TOML-ready dictionary.

    TOML has no null, so unset options are omitted.
    """
    return {
        "exclude": list(config.exclude),
        "clean": {
            "folders": list(config.clean.folders),
            "files": list(config.clean.files),
        },
        "options": config.options.model_dump(by_alias=True, exclude_none=True),
    }
