"""DevOps tasks for buildcleaner.

Usage: uv run devops.py <task>
Tasks: fmt, test, clean
"""

import subprocess
import sys


def _run(commands: list[list[str]]) -> None:
    """Execute a sequence of shell commands, exiting on first failure."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format the codebase with Ruff."""
    _run(
        [
            ["ruff", "format", "."],
            ["ruff", "check", "--fix", "."],
        ]
    )


def test() -> None:
    """Run tests with PyTest."""
    _run([["uv", "run", "pytest", "-q"]])


def clean() -> None:
    """Remove caches and build artifacts from the project with buildcleaner itself."""
    from buildcleaner import ExecutionMode, RuleConfig
    from buildcleaner import clean as run_clean
    from buildcleaner.models import CleanSection
    from buildcleaner.utils.formatting import format_size, print_success

    rules = RuleConfig(
        clean=CleanSection(
            folders=[".pytest_cache", ".ruff_cache", ".mypy_cache", "htmlcov", "dist"],
            files=["*.pyc", "*.pyo", ".coverage"],
        ),
        exclude=[".venv", ".git"],
    )
    report = run_clean(["."], rules, mode=ExecutionMode.BATCH)
    stats = report.stats
    print_success(
        f"Removed {stats.total_deleted} items ({format_size(stats.bytes_freed)}), "
        f"{stats.total_failed} failed"
    )


TASKS = {
    "fmt": format_code,
    "test": test,
    "clean": clean,
}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
