"""
webhatch.wizard - The Stage Pipeline
====================================

This module contains the ``Wizard``, which drives one session from the
Node.js check to opening the finished project in an editor.

Architecture
------------
The wizard is a fixed pipeline of stages:

    1.  runtime          Node.js version gate (nvm-assisted upgrade)
    2.  project_name     Capture the project name
    3.  package_manager  Choose npm/yarn/pnpm, install it if missing
    4.  project_type     Choose a template and run its generator
    5.  metadata         Description and author, README.md
    6.  lint             ESLint + Prettier and their config stubs
    7.  gitignore        .gitignore
    8.  license          LICENSE (MIT, Apache 2.0, GPL v3 or none)
    9.  git              git init
    10. bmad             Optional BMAD method installer
    11. editor           Optionally open the project in an editor

Each stage is a method returning a ``StageResult``. ``Wizard.run`` calls
them in order and stops at the first failure. A failing external command
(``CalledProcessError``) or a missing tool / filesystem error
(``OSError``) inside a stage is reported as that stage's failure. Nothing
is rolled back: files created before the failure stay on disk.

Everything the wizard touches outside of Python is injected (prompter,
runtime probe, command runner, generators, console), so the whole
pipeline can be exercised with fakes.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from webhatch.files import (
    LINT_STUBS,
    TemplateParams,
    render_gitignore,
    render_license,
    render_readme,
    write_files,
)
from webhatch.generators import GeneratorOptions, ProjectGenerator, build_generators
from webhatch.models import (
    EditorChoice,
    LicenseChoice,
    PackageManager,
    ProjectType,
    ReactLayout,
    SessionState,
    WizardConfig,
    check_project_name,
)
from webhatch.prompts import Prompter, choose, confirm
from webhatch.runner import CommandRunner
from webhatch.runtime import NODE_DOWNLOAD_URL, NVM_INSTALL_URL, RuntimeProbe, major_version


if TYPE_CHECKING:
    from collections.abc import Callable


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class StageResult:
    """
    Outcome of a single stage.

    Attributes
    ----------
    success : bool
        Whether the pipeline may continue.

    message : str
        Reason for a failure.

    exit_code : int
        Process exit status to use when the stage failed.

    warnings : list[str]
        Non-fatal problems (e.g. an editor that isn't installed).
    """

    success: bool
    message: str = ""
    exit_code: int = 0
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, warnings: list[str] | None = None) -> StageResult:
        return cls(success=True, warnings=warnings or [])

    @classmethod
    def fail(cls, message: str, exit_code: int = 1) -> StageResult:
        return cls(success=False, message=message, exit_code=exit_code or 1)


@dataclass
class PipelineResult:
    """
    Outcome of a whole wizard run.

    Attributes
    ----------
    success : bool
        True when every stage completed.

    exit_code : int
        0 on success, otherwise the failed stage's exit code.

    completed_stages : list[str]
        Names of the stages that completed, in order.

    failed_stage : str | None
        Name of the stage that stopped the run.

    message : str
        Failure message of that stage.

    warnings : list[str]
        Warnings collected from all completed stages.

    project_dir : Path | None
        The project directory, once the project_type stage created it.
    """

    success: bool = False
    exit_code: int = 0
    completed_stages: list[str] = field(default_factory=list)
    failed_stage: str | None = None
    message: str = ""
    warnings: list[str] = field(default_factory=list)
    project_dir: Path | None = None


@dataclass
class WizardPresets:
    """
    Answers supplied up front (e.g. from CLI options).

    A preset replaces the matching prompt; the stage still runs and
    commits the value to the session.
    """

    project_name: str | None = None
    package_manager: PackageManager | None = None
    project_type: ProjectType | None = None
    license_choice: LicenseChoice | None = None
    editor_choice: EditorChoice | None = None
    skip_bmad: bool = False


# =============================================================================
# Wizard
# =============================================================================

class Wizard:
    """
    Drive one project-creation session.

    Parameters
    ----------
    config : WizardConfig
        User configuration.

    prompter : Prompter
        Source of answers.

    probe : RuntimeProbe
        Node.js / nvm capability for the runtime gate.

    runner : CommandRunner
        Runs every external command.

    generators : dict[ProjectType, ProjectGenerator] | None
        Generator per project type. Defaults to ``build_generators(runner)``.

    console : Console | None
        Output console. Defaults to the runner's console.

    presets : WizardPresets | None
        Answers that skip their prompt.

    year : int | None
        Copyright year for the LICENSE. Defaults to the current year.

    Examples
    --------
    >>> from webhatch.prompts import QuestionaryPrompter
    >>> from webhatch.runtime import NvmProbe
    >>> runner = CommandRunner()
    >>> wizard = Wizard(WizardConfig(), QuestionaryPrompter(), NvmProbe(runner), runner)
    >>> result = wizard.run()  # doctest: +SKIP
    """

    STAGES: list[tuple[str, str]] = [
        ("runtime", "check_runtime"),
        ("project_name", "capture_project_name"),
        ("package_manager", "select_package_manager"),
        ("project_type", "scaffold_project"),
        ("metadata", "write_readme"),
        ("lint", "setup_lint_tools"),
        ("gitignore", "write_gitignore"),
        ("license", "write_license"),
        ("git", "init_git"),
        ("bmad", "install_bmad"),
        ("editor", "open_editor"),
    ]

    def __init__(
        self,
        config: WizardConfig,
        prompter: Prompter,
        probe: RuntimeProbe,
        runner: CommandRunner,
        generators: dict[ProjectType, ProjectGenerator] | None = None,
        console: Console | None = None,
        presets: WizardPresets | None = None,
        year: int | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter
        self.probe = probe
        self.runner = runner
        self.console = console or runner.console
        self.generators = generators if generators is not None else build_generators(runner, self.console)
        self.presets = presets or WizardPresets()
        self.year = year
        self.state = SessionState()

    # -------------------------------------------------------------------------
    # Driver
    # -------------------------------------------------------------------------

    def run(self) -> PipelineResult:
        """
        Run every stage in order, stopping at the first failure.

        Returns
        -------
        PipelineResult
            ``exit_code`` is the status the process should exit with.
        """
        result = PipelineResult()

        self.console.print()
        self.console.print(Panel(
            "[bold blue]Creating a new web project[/]\n"
            f"[dim]Node.js {self.config.node_required}+ | "
            f"Output: {escape(str(self.config.output_dir))}[/]",
            title="[bold]webhatch[/]",
            border_style="blue",
        ))

        for name, method_name in self.STAGES:
            outcome = self._run_stage(getattr(self, method_name))

            for warning in outcome.warnings:
                self.console.print(f"  [yellow]⚠[/] {escape(warning)}")
            result.warnings.extend(outcome.warnings)
            result.project_dir = self.state.project_dir

            if not outcome.success:
                self.console.print(f"\n[bold red]Error:[/] {escape(outcome.message)}")
                result.failed_stage = name
                result.exit_code = outcome.exit_code
                result.message = outcome.message
                return result

            result.completed_stages.append(name)

        result.success = True
        self.console.print()
        self.console.print(Panel(
            f"[bold green]🎉 Project {escape(self.state.require('project_name'))} "
            "is ready to code![/]\n\n"
            f"[dim]Location:[/] {escape(str(self.state.require('project_dir')))}",
            title="[bold green]Success[/]",
            border_style="green",
        ))
        return result

    @staticmethod
    def _run_stage(stage: Callable[[], StageResult]) -> StageResult:
        try:
            return stage()
        except subprocess.CalledProcessError as e:
            command = subprocess.list2cmdline(e.cmd) if isinstance(e.cmd, list) else str(e.cmd)
            return StageResult.fail(
                f"Command failed with exit code {e.returncode}: {command}",
                exit_code=e.returncode,
            )
        except OSError as e:
            return StageResult.fail(str(e))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def project_dir(self) -> Path:
        return self.state.require("project_dir")

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def check_runtime(self) -> StageResult:
        """Stage 1: make sure a recent enough Node.js is active."""
        required = self.config.node_required
        version = self.probe.detect_version()

        if version is not None and major_version(version) >= required:
            self._say(f"✓ Using Node.js {version}")
            return StageResult.ok()

        if not self.probe.is_available():
            if version is None:
                self._say("❌ Node.js is not installed.")
            else:
                self._say(f"❌ Node.js version {version} is not supported.")
            self._say(
                f"Please install Node.js version {required} or higher, "
                "or install nvm to manage Node.js versions."
            )
            self._say(f"- Download Node.js: {NODE_DOWNLOAD_URL}")
            self._say(f"- Install nvm: {NVM_INSTALL_URL}")
            return StageResult.fail(f"Node.js {required}+ is required")

        self._say(f"⚠️  Node.js {required}+ is required (found {version or 'none'}).")
        self._say(f"🔍 nvm is detected. We can help you switch to Node.js {required}.")

        if self.probe.list_available(required):
            self._say(f"✓ Found Node.js {required} in nvm")
            active = self.probe.install_and_activate(required, install=False)
            self._say(f"✓ Switched to Node.js {active}")
            return StageResult.ok()

        if not confirm(
            self.prompter,
            f"🔧 Node.js {required} is not installed via nvm. "
            "Would you like to install it? (y/n)",
        ):
            self._say(f"❌ Node.js {required}+ is required. Please install it manually.")
            return StageResult.fail(f"Node.js {required}+ is required")

        self._say(f"⏳ Installing Node.js {required} via nvm (this may take a few minutes)...")
        active = self.probe.install_and_activate(required, install=True)
        self._say(f"✓ Node.js {active} installed and activated")
        return StageResult.ok()

    def capture_project_name(self) -> StageResult:
        """Stage 2: the project (and directory) name."""
        name = self.presets.project_name

        while name is None:
            try:
                name = check_project_name(self.prompter.ask("📁 Project name:"))
            except ValueError as e:
                self._say(f"❌ {e}")

        self.state.commit("project_name", name)
        return StageResult.ok()

    def select_package_manager(self) -> StageResult:
        """Stage 3: choose a package manager and install it if needed."""
        manager = self.presets.package_manager or choose(
            self.prompter,
            self.console,
            "📦 Choose your package manager:",
            [(f"{pm.value} - {pm.description}", pm) for pm in PackageManager],
            reprompt=True,
        )
        self.state.commit("package_manager", manager)
        self._say(f"\n✅ Selected package manager: {manager.value}\n")

        if self.runner.which(manager.value) is not None:
            return StageResult.ok()

        if not confirm(
            self.prompter,
            f"❌ {manager.value} is not installed. Would you like to install it? (y/n)",
        ):
            return StageResult.fail("Script stopped.")

        if not manager.installable:
            return StageResult.fail(
                f"{manager.value} cannot be installed automatically. "
                f"Please install Node.js from {NODE_DOWNLOAD_URL}"
            )

        self.runner.run(["npm", "install", "-g", manager.value], cwd=self.config.output_dir)
        return StageResult.ok()

    def scaffold_project(self) -> StageResult:
        """Stage 4: choose a project type and run its generator."""
        project_type = self.presets.project_type or choose(
            self.prompter,
            self.console,
            "🌐 Project type:",
            [(pt.label, pt) for pt in ProjectType],
            reprompt=self.config.reprompt_invalid,
        )
        if project_type is None:
            return StageResult.fail("Invalid option")
        self.state.commit("project_type", project_type)

        options = GeneratorOptions(
            base_dir=self.config.output_dir,
            package_manager=self.state.require("package_manager"),
            next_flags=list(self.config.next_flags),
        )

        if project_type is ProjectType.REACT:
            layout = choose(
                self.prompter,
                self.console,
                "Single page or multi-page app?",
                [("Single", ReactLayout.SINGLE), ("Multi-page", ReactLayout.MULTI)],
                reprompt=False,
            ) or ReactLayout.SINGLE
            self.state.commit("react_layout", layout)
            options.react_layout = layout

        project_dir = self.generators[project_type].materialize(
            self.state.require("project_name"), options,
        )
        if not project_dir.is_dir():
            return StageResult.fail(f"{project_type.label} generator did not create {project_dir}")

        self.state.commit("project_dir", project_dir)
        return StageResult.ok()

    def write_readme(self) -> StageResult:
        """Stage 5: description, author and README.md."""
        self.state.commit("description", self.prompter.ask("📝 Project description:"))
        self.state.commit("author", self.prompter.ask("👤 Author name:"))

        write_files(self.project_dir, {Path("README.md"): render_readme(self._params())})
        return StageResult.ok()

    def setup_lint_tools(self) -> StageResult:
        """Stage 6: install ESLint + Prettier and write their config stubs."""
        manager: PackageManager = self.state.require("package_manager")
        self.runner.run(manager.add_dev_command(["eslint", "prettier"]), cwd=self.project_dir)

        write_files(self.project_dir, {Path(name): content for name, content in LINT_STUBS.items()})
        return StageResult.ok()

    def write_gitignore(self) -> StageResult:
        """Stage 7: .gitignore."""
        write_files(self.project_dir, {
            Path(".gitignore"): render_gitignore(self.config.gitignore_entries),
        })
        return StageResult.ok()

    def write_license(self) -> StageResult:
        """Stage 8: LICENSE, unless the user picks none."""
        choice = self.presets.license_choice or choose(
            self.prompter,
            self.console,
            "📄 Choose a license",
            [(lc.label, lc) for lc in LicenseChoice],
            reprompt=self.config.reprompt_invalid,
        ) or LicenseChoice.NONE
        self.state.commit("license_choice", choice)

        text = render_license(choice, self._params())
        if text is None:
            self._say("No license added.")
            return StageResult.ok()

        write_files(self.project_dir, {Path("LICENSE"): text})
        self._say(f"📄 {choice.label} license added.")
        return StageResult.ok()

    def init_git(self) -> StageResult:
        """Stage 9: git init, unless the generator already did."""
        if (self.project_dir / ".git").exists():
            self._say("ℹ️  Git repository already initialized")
            return StageResult.ok()

        self.runner.run(["git", "init"], cwd=self.project_dir)
        self._say("✅ Git repository initialized")
        return StageResult.ok()

    def install_bmad(self) -> StageResult:
        """Stage 10: optional BMAD method installer."""
        if self.presets.skip_bmad:
            return StageResult.ok()

        if not confirm(
            self.prompter,
            '🤖 Would you like to "BMAD-ify" this project for AI-assisted development? (y/n)',
        ):
            return StageResult.ok()

        if self.runner.which("npx") is None:
            return StageResult.ok(warnings=["npx is not installed or not in PATH, BMAD skipped"])

        self._say("⏳ Preparing BMAD expert team...")
        self.runner.run(["npx", self.config.bmad_package, "install"], cwd=self.project_dir)
        self._say("✅ BMAD structure ready.")
        return StageResult.ok()

    def open_editor(self) -> StageResult:
        """Stage 11: optionally open the project in an editor."""
        editor = self.presets.editor_choice or choose(
            self.prompter,
            self.console,
            "🛠️  Open project in editor?",
            [(ec.label, ec) for ec in EditorChoice],
            reprompt=True,
        )
        self.state.commit("editor_choice", editor)

        if editor.command is None:
            self._say("✅ Alright, you can open it later with:")
            self._say(f"   cd {self.project_dir}")
            return StageResult.ok()

        if self.runner.which(editor.command) is None:
            return StageResult.ok(warnings=[f"{editor.label} is not installed or not in PATH"])

        self.runner.run([editor.command, "."], cwd=self.project_dir)
        self._say(f"✅ Project opened in {editor.label}")
        return StageResult.ok()

    def _params(self) -> TemplateParams:
        params = TemplateParams(
            project_name=self.state.require("project_name"),
            description=self.state.require("description"),
            author=self.state.require("author"),
            package_manager=self.state.require("package_manager").value,
        )
        if self.year is not None:
            params.year = self.year
        return params
