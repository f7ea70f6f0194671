"""Confirmation sources for interactive execution.

The executor only needs a callable taking a PendingItem and returning a
Decision. PromptConfirmer asks on the terminal;
ScriptedConfirmer replays a fixed list of answers.
"""

from collections.abc import Iterable

import typer
from rich.console import Console
from rich.markup import escape

from buildcleaner.models.outcome import Decision, ItemKind, PendingItem
from buildcleaner.utils.formatting import console as default_console
from buildcleaner.utils.formatting import format_size, print_info, print_success, print_warning

# Prompt answer -> decision
ANSWERS: dict[str, Decision] = {
    "y": Decision.CONFIRM,
    "n": Decision.SKIP,
    "a": Decision.CONFIRM_ALL,
    "q": Decision.ABORT,
}


class PromptConfirmer:
    """Asks the user about each item on the terminal.

    Answers: ``y`` delete, ``n`` skip (default), ``a`` delete this and
    all remaining items, ``q`` abort.

    Args:
        console: Console the item is shown on. Defaults to the shared console.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or default_console

    def __call__(self, item: PendingItem) -> Decision:
        label = "Directory" if item.kind is ItemKind.DIRECTORY else "File"
        self._console.print(
            f"\n{label}: [path]{escape(str(item.path))}[/] "
            f"[muted]({format_size(item.size_bytes)})[/]"
        )
        while True:
            answer = typer.prompt(
                "Delete? [y]es / [n]o / [a]ll / [q]uit",
                default="n",
                show_default=False,
            )
            decision = ANSWERS.get(answer.strip().lower())
            if decision is not None:
                break
            print_warning(f"Please answer one of: {', '.join(ANSWERS)}")

        if decision is Decision.SKIP:
            print_info(f"Skipped: {item.path}")
        elif decision is Decision.CONFIRM_ALL:
            print_success("All remaining items will be deleted")
        return decision


class ScriptedConfirmer:
    """Replays a fixed sequence of decisions.

    Useful for non-terminal callers and tests.

    Attributes:
        asked: Items that were presented, in order.
    """

    def __init__(self, decisions: Iterable[Decision]) -> None:
        self._decisions = list(decisions)
        self.asked: list[PendingItem] = []

    def __call__(self, item: PendingItem) -> Decision:
        if len(self.asked) >= len(self._decisions):
            msg = f"No scripted decision left for {item.path}"
            raise RuntimeError(msg)
        decision = self._decisions[len(self.asked)]
        self.asked.append(item)
        return decision
