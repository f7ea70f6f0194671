"""Rule models for cleaning configuration.

This module defines two layers of rule data:

- ``RuleConfig`` and its sections are Pydantic models describing the
  structured rule object handed in by a caller or loaded from a rules
  file (``clean``/``exclude``/``options``).
- ``CleaningRule``, ``ScanOptions`` and ``ResolvedConfig`` are the
  immutable, already-merged values the scanner and executor work with.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_SEPARATORS: tuple[str, ...] = tuple({"/", os.sep})


class ProjectType(str, Enum):
    """Project ecosystem detected from marker files in a root directory."""

    NODE = "node"
    RUST = "rust"
    PYTHON = "python"
    GO = "go"
    JAVA = "java"
    GENERIC = "generic"


class RuleKind(Enum):
    """Kind of cleaning rule.

    Attributes:
        FOLDER: Exact directory name; a match covers the whole subtree.
        FILE: Glob pattern applied to a bare file name.
    """

    FOLDER = "folder"
    FILE = "file"


# =============================================================================
# External rule object (validated input)
# =============================================================================


class CleanSection(BaseModel):
    """The ``clean`` section: folder names and file patterns to remove.

    Attributes:
        folders: Directory names. One trailing ``/`` (or ``os.sep``) is
            accepted and stripped.
        files: Glob patterns matched against file names.
    """

    model_config = ConfigDict(extra="forbid")

    folders: Annotated[
        list[str],
        Field(default_factory=list, description="Directory names to remove"),
    ]
    files: Annotated[
        list[str],
        Field(default_factory=list, description="File glob patterns to remove"),
    ]

    @field_validator("folders")
    @classmethod
    def strip_folder_separators(cls, value: list[str]) -> list[str]:
        """Normalize ``node_modules/`` to ``node_modules``."""
        stripped = [entry[:-1] if entry.endswith(_SEPARATORS) else entry for entry in value]
        if any(not entry for entry in stripped):
            msg = "Folder names cannot be empty"
            raise ValueError(msg)
        return stripped

    @field_validator("files")
    @classmethod
    def reject_empty_patterns(cls, value: list[str]) -> list[str]:
        """Reject empty file patterns, which would never match."""
        if any(not entry for entry in value):
            msg = "File patterns cannot be empty"
            raise ValueError(msg)
        return value


class OptionsSection(BaseModel):
    """The ``options`` section. Every field is optional.

    A field left as None does not override the built-in default when
    the rule object is merged.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    recursive: Annotated[bool | None, Field(description="Descend into subdirectories")] = None
    follow_symlinks: Annotated[
        bool | None,
        Field(alias="followSymlinks", description="Follow symlinked directories"),
    ] = None
    min_size: Annotated[
        int | None,
        Field(alias="minSize", ge=0, description="Minimum file size in bytes"),
    ] = None
    max_size: Annotated[
        int | None,
        Field(alias="maxSize", ge=0, description="Maximum file size in bytes"),
    ] = None
    min_age_days: Annotated[
        int | None,
        Field(alias="minAgeDays", ge=0, description="Minimum file age in days"),
    ] = None
    max_age_days: Annotated[
        int | None,
        Field(alias="maxAgeDays", ge=0, description="Maximum file age in days"),
    ] = None
    max_depth: Annotated[
        int | None,
        Field(alias="maxDepth", ge=1, description="Maximum traversal depth"),
    ] = None

    @model_validator(mode="after")
    def validate_bounds(self) -> OptionsSection:
        """Validate that lower bounds do not exceed upper bounds."""
        if self.min_size is not None and self.max_size is not None:
            if self.min_size > self.max_size:
                msg = f"minSize ({self.min_size}) cannot exceed maxSize ({self.max_size})"
                raise ValueError(msg)
        if self.min_age_days is not None and self.max_age_days is not None:
            if self.min_age_days > self.max_age_days:
                msg = (
                    f"minAgeDays ({self.min_age_days}) cannot exceed "
                    f"maxAgeDays ({self.max_age_days})"
                )
                raise ValueError(msg)
        return self


class RuleConfig(BaseModel):
    """Structured rule object supplied by a caller or a rules file.

    Attributes:
        clean: Folder names and file patterns to clean.
        exclude: Paths that are never scanned or cleaned (``~`` allowed).
        options: Traversal and filter options.
    """

    model_config = ConfigDict(extra="forbid")

    clean: Annotated[CleanSection, Field(default_factory=CleanSection)]
    exclude: Annotated[
        list[str],
        Field(default_factory=list, description="Excluded path prefixes"),
    ]
    options: Annotated[OptionsSection, Field(default_factory=OptionsSection)]


# =============================================================================
# Resolved values
# =============================================================================


@dataclass(frozen=True, slots=True)
class CleaningRule:
    """Merged set of folder and file rules.

    Attributes:
        folder_names: Exact directory names (no trailing separator).
        file_patterns: Glob patterns over bare file names.
    """

    folder_names: frozenset[str] = frozenset()
    file_patterns: frozenset[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        """True if there is nothing to match."""
        return not self.folder_names and not self.file_patterns

    def patterns(self, kind: RuleKind) -> frozenset[str]:
        """Return the rules of the given kind."""
        if kind is RuleKind.FOLDER:
            return self.folder_names
        if kind is RuleKind.FILE:
            return self.file_patterns
        msg = f"Unknown rule kind: {kind!r}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Traversal and filter options. None means "no constraint".

    Attributes:
        recursive: Descend below the root's immediate children.
        follow_symlinks: Classify symlinks by their target and descend
            into symlinked directories.
        min_size: Inclusive lower bound on file size in bytes.
        max_size: Inclusive upper bound on file size in bytes.
        min_age_days: Inclusive lower bound on file age in whole days.
        max_age_days: Inclusive upper bound on file age in whole days.
        max_depth: Deepest level whose entries are visited (root children are 1).
    """

    recursive: bool = True
    follow_symlinks: bool = False
    min_size: int | None = None
    max_size: int | None = None
    min_age_days: int | None = None
    max_age_days: int | None = None
    max_depth: int | None = None

    @property
    def effective_max_depth(self) -> int | None:
        """Depth limit after applying ``recursive=False``."""
        if not self.recursive:
            return 1 if self.max_depth is None else min(self.max_depth, 1)
        return self.max_depth


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Final configuration produced by the ConfigResolver.

    Attributes:
        rules: Merged cleaning rules.
        exclusions: Normalized absolute paths that are never visited.
        options: Merged scan options.
        project_type: Project type detected for the root path.
    """

    rules: CleaningRule
    exclusions: tuple[Path, ...] = field(default_factory=tuple)
    options: ScanOptions = field(default_factory=ScanOptions)
    project_type: ProjectType = ProjectType.GENERIC
