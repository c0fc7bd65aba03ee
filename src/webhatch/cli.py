"""
webhatch.cli - Command Line Interface
=====================================

This module provides the command-line interface for webhatch using Typer.

Architecture
------------
    app (main entry point)
    ├── new       - Run the project wizard
    └── licenses  - List the license templates

Every ``new`` option pre-answers one wizard question; anything not given
on the command line is asked interactively.

Usage Examples
--------------
Fully interactive:
    $ webhatch new

Pre-answer the menus:
    $ webhatch new mysite --type astro --package-manager pnpm --license mit

Show help:
    $ webhatch --help
    $ webhatch new --help
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from webhatch import __version__
from webhatch.models import (
    EditorChoice,
    LicenseChoice,
    PackageManager,
    ProjectType,
    WizardConfig,
    check_project_name,
)
from webhatch.prompts import Prompter, QuestionaryPrompter
from webhatch.runner import CommandRunner
from webhatch.runtime import NvmProbe, RuntimeProbe
from webhatch.wizard import Wizard, WizardPresets


E = TypeVar("E", bound=Enum)


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="webhatch",
    help="Interactive wizard for new web projects (HTML, React, Next.js, Astro).",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

console = Console()


def make_prompter() -> Prompter:
    """Prompter used by ``new``."""
    return QuestionaryPrompter()


def make_probe(runner: CommandRunner) -> RuntimeProbe:
    """Runtime probe used by ``new``."""
    return NvmProbe(runner)


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]webhatch[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Interactive web project wizard[/]\n"
            f"[dim]Templates: HTML/CSS, React (Vite), Next.js, Astro[/]",
            border_style="green",
        ))
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]webhatch[/] - Interactive web project wizard.

    [bold]Quick Start:[/]

        webhatch new
    """


# =============================================================================
# Option Parsing
# =============================================================================

def parse_choice(enum_cls: type[E], value: str | None, what: str) -> E | None:
    """
    Convert an option value to an enum member, or exit with an error.

    Parameters
    ----------
    enum_cls : type[E]
        Target enumeration.

    value : str | None
        Raw option value. None means "ask interactively".

    what : str
        Name used in the error message.
    """
    if value is None:
        return None
    try:
        return enum_cls(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        rprint(f"[red]Error:[/] Invalid {what} '{escape(value)}'. Valid: {valid}")
        raise typer.Exit(1)


# =============================================================================
# New Command
# =============================================================================

@app.command()
def new(
    name: Annotated[
        str | None,
        typer.Argument(help="Project name (asked interactively if omitted)"),
    ] = None,
    package_manager: Annotated[
        str | None,
        typer.Option("--package-manager", "-m", help="Package manager: npm, yarn, pnpm"),
    ] = None,
    project_type: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Project type: html, react, next, astro"),
    ] = None,
    license_: Annotated[
        str | None,
        typer.Option("--license", "-l", help="License: mit, apache2, gpl3, none"),
    ] = None,
    editor: Annotated[
        str | None,
        typer.Option("--editor", "-e", help="Open in editor: vscode, windsurf, none"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the project in (default: current directory)",
            file_okay=False,
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML config file (default: ~/.config/webhatch/config.toml)",
            dir_okay=False,
        ),
    ] = None,
    reprompt_invalid: Annotated[
        bool,
        typer.Option(
            "--reprompt-invalid",
            help="Ask again on an invalid project type or license instead of giving up",
        ),
    ] = False,
    skip_bmad: Annotated[
        bool,
        typer.Option("--skip-bmad", help="Don't offer the BMAD method installer"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Echo every external command"),
    ] = False,
) -> None:
    """
    Create a new web project.

    Walks through the Node.js check, package manager, project type,
    README, ESLint/Prettier, .gitignore, license, git and editor.

    [bold]Examples:[/]

        # Fully interactive
        webhatch new

        # React app with pnpm and an MIT license
        webhatch new mysite --type react --package-manager pnpm --license mit
    """
    presets = WizardPresets(
        package_manager=parse_choice(PackageManager, package_manager, "package manager"),
        project_type=parse_choice(ProjectType, project_type, "project type"),
        license_choice=parse_choice(LicenseChoice, license_, "license"),
        editor_choice=parse_choice(EditorChoice, editor, "editor"),
        skip_bmad=skip_bmad,
    )

    try:
        if name is not None:
            presets.project_name = check_project_name(name)
        config = WizardConfig.load(config_file)
    except (OSError, ValueError) as e:
        rprint(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    overrides: dict[str, object] = {}
    if output_dir is not None:
        overrides["output_dir"] = output_dir.resolve()
    if reprompt_invalid:
        overrides["reprompt_invalid"] = True
    if overrides:
        config = config.model_copy(update=overrides)

    runner = CommandRunner(console, verbose=verbose)
    wizard = Wizard(
        config,
        make_prompter(),
        make_probe(runner),
        runner,
        console=console,
        presets=presets,
    )
    result = wizard.run()

    if not result.success:
        raise typer.Exit(result.exit_code)


# =============================================================================
# Licenses Command
# =============================================================================

@app.command()
def licenses() -> None:
    """
    List the licenses the wizard can add.

    [bold]Example:[/]

        webhatch licenses
    """
    table = Table(title="Licenses", show_header=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Option", style="cyan")
    table.add_column("License", style="green")
    table.add_column("Template", style="dim")

    for number, choice in enumerate(LicenseChoice, 1):
        table.add_row(str(number), choice.value, choice.label, choice.template or "-")

    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
