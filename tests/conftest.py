"""
pytest configuration and shared fixtures for webhatch tests.

Nothing in the test suite talks to a real terminal, Node.js, nvm or
package manager. The fixtures below replace every external effect:

Fixtures
--------
console : Console
    A Rich console writing into a StringIO buffer.

prompter_factory : Callable[[list[str]], ScriptedPrompter]
    Builds a prompter that returns the given answers in order.

runner : FakeRunner
    Records commands instead of running them.

probe : FakeProbe
    Runtime probe reporting Node.js 20 and no nvm.

output : Callable[[], str]
    Returns everything printed to ``console`` so far.
"""

from __future__ import annotations

import io
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from webhatch.runner import CommandRunner


# =============================================================================
# Fakes
# =============================================================================

class ScriptedPrompter:
    """Prompter that replays canned answers and records the questions."""

    def __init__(self, answers: list[str]) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []

    def ask(self, message: str) -> str:
        self.questions.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


class FakeRunner(CommandRunner):
    """
    CommandRunner that records commands instead of running them.

    Attributes
    ----------
    installed : set[str]
        Executables ``which`` reports as present.

    outputs : dict[str, str]
        ``capture`` output keyed by a substring of the command line.

    failures : dict[str, int]
        Commands (by substring) that fail with the given exit code.

    creates_projects : bool
        Make ``create`` commands (vite, next, astro) create the project
        directory, like the real generators do.
    """

    def __init__(self, console: Console) -> None:
        super().__init__(console)
        self.installed: set[str] = {"node", "npm", "npx", "git"}
        self.outputs: dict[str, str] = {}
        self.failures: dict[str, int] = {}
        self.creates_projects = True
        self.commands: list[tuple[list[str], Path | None]] = []

    def which(self, executable: str) -> str | None:
        return f"/usr/bin/{executable}" if executable in self.installed else None

    def run(self, args: list[str], cwd: Path | None = None) -> None:
        self.commands.append((list(args), cwd))
        line = " ".join(args)

        for needle, code in self.failures.items():
            if needle in line:
                raise subprocess.CalledProcessError(code, args)

        if self.creates_projects and cwd is not None:
            if args[:3] in (["npm", "create", "vite@latest"], ["npm", "create", "astro@latest"]):
                (cwd / args[3] / "src").mkdir(parents=True)
            elif args[:2] == ["npx", "create-next-app@latest"]:
                (cwd / args[2] / "src").mkdir(parents=True)

    def capture(self, args: list[str], cwd: Path | None = None) -> str:
        self.commands.append((list(args), cwd))
        line = " ".join(args)
        for needle, text in self.outputs.items():
            if needle in line:
                return text
        raise subprocess.CalledProcessError(1, args)

    @property
    def argvs(self) -> list[list[str]]:
        return [args for args, _ in self.commands]


class FakeProbe:
    """RuntimeProbe with a fixed answer for every question."""

    def __init__(
        self,
        version: str | None = "20.11.1",
        available: bool = False,
        installed: list[str] | None = None,
    ) -> None:
        self.version = version
        self.available = available
        self.installed = installed or []
        self.activations: list[tuple[int, bool]] = []

    def detect_version(self) -> str | None:
        return self.version

    def is_available(self) -> bool:
        return self.available

    def list_available(self, major: int) -> list[str]:
        return [v for v in self.installed if v.split(".")[0] == str(major)]

    def install_and_activate(self, major: int, *, install: bool) -> str:
        self.activations.append((major, install))
        self.version = f"{major}.0.0"
        return self.version


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def console() -> Console:
    """Console that records into a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=120, color_system=None, force_terminal=False)


@pytest.fixture
def output(console: Console) -> Callable[[], str]:
    """Read back everything printed so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def prompter_factory() -> Callable[[list[str]], ScriptedPrompter]:
    """Build a ScriptedPrompter from a list of answers."""
    return ScriptedPrompter


@pytest.fixture
def runner(console: Console) -> FakeRunner:
    """Recording command runner."""
    return FakeRunner(console)


@pytest.fixture
def probe() -> FakeProbe:
    """Probe reporting a supported Node.js and no nvm."""
    return FakeProbe()


@pytest.fixture
def probe_factory() -> Callable[..., FakeProbe]:
    """Build a FakeProbe with custom answers."""
    return FakeProbe


@pytest.fixture
def temp_project_dir(tmp_path: Path) -> Path:
    """Clean directory to create projects in."""
    project_dir = tmp_path / "projects"
    project_dir.mkdir()
    return project_dir


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that run the whole wizard pipeline"
    )
