"""
webhatch.prompts - Line-Based Prompts and Menus
===============================================

The wizard speaks a deliberately simple protocol: every question reads
one line. Menus print numbered options and expect the number; yes/no
questions treat ``y``/``Y`` as yes and anything else (including an empty
answer) as no.

Reading a line goes through the ``Prompter`` protocol. The interactive
implementation uses questionary; tests feed scripted answers instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

import questionary
import typer
from rich.console import Console


T = TypeVar("T")


class Prompter(Protocol):
    """Source of user answers."""

    def ask(self, message: str) -> str:
        """Show ``message`` and return one line of input."""
        ...


class QuestionaryPrompter:
    """
    ``Prompter`` backed by ``questionary.text``.

    Ctrl-C or EOF makes questionary return None, which aborts the run.
    """

    def ask(self, message: str) -> str:
        result = questionary.text(message).ask()

        if result is None:
            raise typer.Abort()

        return result


def confirm(prompter: Prompter, message: str) -> bool:
    """
    Ask a yes/no question.

    Returns
    -------
    bool
        True only for ``y`` or ``Y``.
    """
    return prompter.ask(message).strip().lower() == "y"


def choose(
    prompter: Prompter,
    console: Console,
    title: str,
    choices: Sequence[tuple[str, T]],
    *,
    reprompt: bool,
) -> T | None:
    """
    Show a numbered menu and map the answer to a value.

    Parameters
    ----------
    prompter : Prompter
        Source of the answer.

    console : Console
        Where the menu is printed.

    title : str
        Heading printed above the options.

    choices : Sequence[tuple[str, T]]
        ``(label, value)`` pairs, numbered from 1 in order.

    reprompt : bool
        Ask again on an unrecognized answer instead of returning None.

    Returns
    -------
    T | None
        The selected value, or None for an unrecognized answer when
        ``reprompt`` is False.

    Examples
    --------
    With answers ``"9"`` then ``"2"`` and ``reprompt=True`` the menu is
    shown once, the invalid answer is reported, and the second choice is
    returned.
    """
    console.print(f"\n{title}")
    for number, (label, _) in enumerate(choices, 1):
        console.print(f"{number}) {label}", highlight=False)

    by_number = {str(number): value for number, (_, value) in enumerate(choices, 1)}
    question = f"→ Your choice [1-{len(choices)}]:"

    while True:
        answer = prompter.ask(question).strip()
        if answer in by_number:
            return by_number[answer]
        if not reprompt:
            return None
        console.print("❌ Invalid option. Please try again.\n")
