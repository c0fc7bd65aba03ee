"""
webhatch.generators - Project Generators
========================================

One generator per project type. Each knows how to turn a project name
into a project directory, either by writing files itself (plain HTML) or
by delegating to the framework's own scaffolding tool.

    ProjectType.HTML  -> StaticGenerator     (files written by webhatch)
    ProjectType.REACT -> ViteReactGenerator  (npm create vite@latest)
    ProjectType.NEXT  -> NextGenerator       (npx create-next-app@latest)
    ProjectType.ASTRO -> AstroGenerator      (npm create astro@latest)

The wizard only talks to the ``ProjectGenerator`` protocol and looks
generators up in ``GENERATORS``, so tests can swap in fakes.

Delegated tools are interactive and run in the foreground. Their
failures are not caught here: ``subprocess.CalledProcessError`` and
``FileNotFoundError`` propagate to the wizard, which fails the stage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from rich.console import Console

from webhatch.files import TemplateParams, render_index_html, render_react_pages, write_files
from webhatch.models import PackageManager, ProjectType, ReactLayout
from webhatch.runner import CommandRunner


@dataclass
class GeneratorOptions:
    """
    Inputs a generator may need besides the project name.

    Attributes
    ----------
    base_dir : Path
        Directory in which the project directory is created.

    package_manager : PackageManager
        Manager used for any extra dependencies.

    react_layout : ReactLayout
        Single page or multi-page, only read by the React generator.

    next_flags : list[str]
        Flags passed to create-next-app.
    """

    base_dir: Path
    package_manager: PackageManager = PackageManager.NPM
    react_layout: ReactLayout = ReactLayout.SINGLE
    next_flags: list[str] = field(default_factory=list)


class ProjectGenerator(Protocol):
    """Capability that materializes a project directory."""

    def materialize(self, project_name: str, options: GeneratorOptions) -> Path:
        """
        Create the project and return its directory.

        Raises
        ------
        subprocess.CalledProcessError
            If a delegated command fails.
        OSError
            If the directory can't be created or a tool is missing.
        """
        ...


class _BaseGenerator:
    def __init__(self, runner: CommandRunner, console: Console | None = None) -> None:
        self.runner = runner
        self.console = console or runner.console


class StaticGenerator(_BaseGenerator):
    """Plain HTML/CSS project: ``<name>/src/index.html``."""

    def materialize(self, project_name: str, options: GeneratorOptions) -> Path:
        project_dir = options.base_dir / project_name
        # Refuse to reuse an existing directory
        project_dir.mkdir()
        (project_dir / "src").mkdir()

        write_files(project_dir, {
            Path("src/index.html"): render_index_html(TemplateParams(project_name=project_name)),
        })
        self.console.print("🧱 HTML/CSS project created.")
        return project_dir


class ViteReactGenerator(_BaseGenerator):
    """
    React app scaffolded by create-vite.

    A multi-page layout adds react-router-dom (installed with the chosen
    package manager), three page components and a route table.
    """

    def materialize(self, project_name: str, options: GeneratorOptions) -> Path:
        self.runner.run(
            ["npm", "create", "vite@latest", project_name, "--", "--template", "react"],
            cwd=options.base_dir,
        )
        project_dir = options.base_dir / project_name
        if not project_dir.is_dir():
            # create-vite exits 0 when its own prompt is cancelled
            return project_dir
        self.console.print("⚛️  React project with Vite created.")

        (project_dir / "src" / "components").mkdir(exist_ok=True)

        if options.react_layout is ReactLayout.MULTI:
            self.runner.run(
                options.package_manager.add_command(["react-router-dom"]),
                cwd=project_dir,
            )
            write_files(project_dir, render_react_pages())
            self.console.print("🧭 Pages and routes added (react-router-dom).")

        return project_dir


class NextGenerator(_BaseGenerator):
    """Next.js app scaffolded by create-next-app."""

    def materialize(self, project_name: str, options: GeneratorOptions) -> Path:
        self.runner.run(
            ["npx", "create-next-app@latest", project_name, *options.next_flags],
            cwd=options.base_dir,
        )
        self.console.print(
            "⚡ Next.js project created with TypeScript, ESLint, Tailwind CSS and app directory."
        )
        return options.base_dir / project_name


class AstroGenerator(_BaseGenerator):
    """Astro site scaffolded by create-astro."""

    def materialize(self, project_name: str, options: GeneratorOptions) -> Path:
        self.runner.run(
            ["npm", "create", "astro@latest", project_name],
            cwd=options.base_dir,
        )
        self.console.print("🚀 Astro project created.")
        return options.base_dir / project_name


# =============================================================================
# Dispatch Table
# =============================================================================

GENERATORS: dict[ProjectType, type[_BaseGenerator]] = {
    ProjectType.HTML: StaticGenerator,
    ProjectType.REACT: ViteReactGenerator,
    ProjectType.NEXT: NextGenerator,
    ProjectType.ASTRO: AstroGenerator,
}


def build_generators(
    runner: CommandRunner,
    console: Console | None = None,
) -> dict[ProjectType, ProjectGenerator]:
    """
    Instantiate one generator per project type.

    Parameters
    ----------
    runner : CommandRunner
        Runner shared by all generators.

    console : Console | None
        Console for status messages. Defaults to the runner's console.
    """
    return {
        project_type: generator_cls(runner, console)
        for project_type, generator_cls in GENERATORS.items()
    }
