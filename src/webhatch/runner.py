"""
webhatch.runner - External Command Execution
============================================

Every tool the wizard delegates to (package managers, project generators,
git, editors) is started through a ``CommandRunner``. Centralizing this
gives the wizard one place to echo commands in verbose mode, and gives
the tests one seam to replace with a recording fake.

Commands run in the foreground with inherited stdin/stdout/stderr so the
delegated tools can ask their own questions. Failures raise
``subprocess.CalledProcessError``; the wizard turns that into a failed
stage.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from rich.console import Console
from rich.markup import escape


class CommandRunner:
    """
    Run external commands and look up executables on ``PATH``.

    Parameters
    ----------
    console : Console | None
        Console used to echo commands when ``verbose`` is set.

    verbose : bool, default=False
        Echo each command before running it.
    """

    def __init__(self, console: Console | None = None, *, verbose: bool = False) -> None:
        self.console = console or Console()
        self.verbose = verbose

    def which(self, executable: str) -> str | None:
        """Full path of ``executable`` on the current ``PATH``, or None."""
        return shutil.which(executable, path=os.environ.get("PATH"))

    def run(self, args: list[str], cwd: Path | None = None) -> None:
        """
        Run a command to completion.

        Parameters
        ----------
        args : list[str]
            Argument vector; ``args[0]`` is resolved on ``PATH``.

        cwd : Path | None
            Working directory for the child process.

        Raises
        ------
        subprocess.CalledProcessError
            If the command exits non-zero.
        FileNotFoundError
            If the executable doesn't exist.
        """
        if self.verbose:
            self.console.print(f"[dim]$ {escape(subprocess.list2cmdline(args))}[/]")

        subprocess.run(args, cwd=cwd, check=True)

    def capture(self, args: list[str], cwd: Path | None = None) -> str:
        """
        Run a command and return its stripped stdout.

        Used for quick probes such as ``node -v``; the command must not
        need user input.

        Raises
        ------
        subprocess.CalledProcessError
            If the command exits non-zero.
        FileNotFoundError
            If the executable doesn't exist.
        """
        if self.verbose:
            self.console.print(f"[dim]$ {escape(subprocess.list2cmdline(args))}[/]")

        result = subprocess.run(
            args,
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()
