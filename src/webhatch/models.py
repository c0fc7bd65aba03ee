"""
webhatch.models - Pydantic Models for Session State and Configuration
=====================================================================

This module defines the data models used throughout webhatch:

- The menu enumerations (package manager, project type, license, editor)
- ``SessionState``: the answers collected during one wizard run
- ``WizardConfig``: user configuration loaded from TOML

Architecture Notes
------------------
    SessionState
    ├── project_name: str
    ├── package_manager: PackageManager (enum)
    ├── project_type: ProjectType (enum)
    ├── react_layout: ReactLayout (enum, React only)
    ├── project_dir: Path
    ├── description: str
    ├── author: str
    ├── license_choice: LicenseChoice (enum)
    └── editor_choice: EditorChoice (enum)

Every session field is write-once. Stages commit values in pipeline
order, and reading a value that has not been committed is an error.

Usage Example
-------------
>>> from webhatch.models import SessionState, PackageManager
>>> state = SessionState()
>>> state.commit("package_manager", PackageManager.PNPM)
>>> state.require("package_manager").add_dev_command(["eslint"])
['pnpm', 'add', '-D', 'eslint']
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# Exceptions
# =============================================================================

class SessionStateError(RuntimeError):
    """Raised when a session field is written twice or read before it is set."""


# =============================================================================
# Enumerations
# =============================================================================

class PackageManager(str, Enum):
    """
    JavaScript package managers offered by the wizard.

    The menu order matches the declaration order: ``1`` is npm,
    ``2`` is yarn and ``3`` is pnpm.
    """

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @property
    def description(self) -> str:
        """Human-readable description for the menu."""
        descriptions = {
            PackageManager.NPM: "Standard Node.js package manager (recommended)",
            PackageManager.YARN: "Fast and reliable package manager",
            PackageManager.PNPM: "Fast, disk space efficient package manager",
        }
        return descriptions[self]

    @property
    def installable(self) -> bool:
        """
        Whether the wizard can install this manager with ``npm install -g``.

        npm ships with Node.js, so there is nothing to fall back on when
        it is missing.
        """
        return self is not PackageManager.NPM

    def add_command(self, packages: list[str]) -> list[str]:
        """
        Build the command that adds runtime dependencies.

        Parameters
        ----------
        packages : list[str]
            Package names to add.

        Returns
        -------
        list[str]
            Argument vector, e.g. ``['yarn', 'add', 'react-router-dom']``.
        """
        return [self.value, self._add_verb, *packages]

    def add_dev_command(self, packages: list[str]) -> list[str]:
        """Build the command that adds development dependencies."""
        return [self.value, self._add_verb, "-D", *packages]

    @property
    def _add_verb(self) -> str:
        return "install" if self is PackageManager.NPM else "add"


class ProjectType(str, Enum):
    """
    Project templates offered by the wizard.

    Attributes
    ----------
    HTML : str
        Plain HTML/CSS, created by hand without any generator.

    REACT : str
        React single-page or multi-page app scaffolded by create-vite.

    NEXT : str
        Next.js app with TypeScript, ESLint, Tailwind and the app router.

    ASTRO : str
        Astro site scaffolded by create-astro.
    """

    HTML = "html"
    REACT = "react"
    NEXT = "next"
    ASTRO = "astro"

    @property
    def label(self) -> str:
        """Menu label."""
        labels = {
            ProjectType.HTML: "HTML/CSS",
            ProjectType.REACT: "React",
            ProjectType.NEXT: "Next.js",
            ProjectType.ASTRO: "Astro",
        }
        return labels[self]


class ReactLayout(str, Enum):
    """Single page or multi-page (react-router) React app."""

    SINGLE = "single"
    MULTI = "multi"


class LicenseChoice(str, Enum):
    """
    Licenses the wizard can write into the project.

    ``NONE`` skips the LICENSE file entirely.
    """

    MIT = "mit"
    APACHE2 = "apache2"
    GPL3 = "gpl3"
    NONE = "none"

    @property
    def label(self) -> str:
        """Menu label."""
        labels = {
            LicenseChoice.MIT: "MIT",
            LicenseChoice.APACHE2: "Apache 2.0",
            LicenseChoice.GPL3: "GPL v3",
            LicenseChoice.NONE: "None",
        }
        return labels[self]

    @property
    def template(self) -> str | None:
        """Jinja2 template for the LICENSE file, or None for no license."""
        templates = {
            LicenseChoice.MIT: "LICENSE_MIT.j2",
            LicenseChoice.APACHE2: "LICENSE_APACHE2.j2",
            LicenseChoice.GPL3: "LICENSE_GPL3.j2",
        }
        return templates.get(self)


class EditorChoice(str, Enum):
    """Editors the finished project can be opened in."""

    VSCODE = "vscode"
    WINDSURF = "windsurf"
    NONE = "none"

    @property
    def label(self) -> str:
        """Menu label."""
        labels = {
            EditorChoice.VSCODE: "VS Code",
            EditorChoice.WINDSURF: "Windsurf",
            EditorChoice.NONE: "No thanks",
        }
        return labels[self]

    @property
    def command(self) -> str | None:
        """Executable that opens a directory in this editor."""
        commands = {
            EditorChoice.VSCODE: "code",
            EditorChoice.WINDSURF: "windsurf",
        }
        return commands.get(self)


# =============================================================================
# Validation
# =============================================================================

def check_project_name(name: str) -> str:
    """
    Validate a project name before it is used as a directory name.

    The generators accept a wide range of names, so only names that
    can't be a single directory are rejected.

    Parameters
    ----------
    name : str
        Raw user input.

    Returns
    -------
    str
        The name with surrounding whitespace removed.

    Raises
    ------
    ValueError
        If the name is empty, ``.``/``..`` or contains a path separator.

    Examples
    --------
    >>> check_project_name("  my-site ")
    'my-site'
    """
    name = name.strip()

    if not name:
        raise ValueError("Project name cannot be empty.")
    if name in {".", ".."} or "/" in name or "\\" in name:
        msg = f"Invalid project name '{name}'. It must be a single directory name."
        raise ValueError(msg)

    return name


# =============================================================================
# Session State
# =============================================================================

class SessionState(BaseModel):
    """
    Answers collected during one wizard run.

    All fields start unset (``None``). A stage stores its answer with
    :meth:`commit`; later stages read earlier answers with
    :meth:`require`. Neither operation is ever undone: a failed stage
    leaves the previously committed answers in place.

    Examples
    --------
    >>> state = SessionState()
    >>> state.commit("project_name", "mysite")
    >>> state.require("project_name")
    'mysite'
    >>> state.commit("project_name", "other")
    Traceback (most recent call last):
    ...
    webhatch.models.SessionStateError: project_name is already set
    """

    project_name: str | None = None
    package_manager: PackageManager | None = None
    project_type: ProjectType | None = None
    react_layout: ReactLayout | None = None
    project_dir: Path | None = None
    description: str | None = None
    author: str | None = None
    license_choice: LicenseChoice | None = None
    editor_choice: EditorChoice | None = None

    def commit(self, name: str, value: Any) -> None:
        """
        Set a field exactly once.

        Raises
        ------
        SessionStateError
            If the field is unknown or already holds a value.
        """
        if name not in type(self).model_fields:
            raise SessionStateError(f"Unknown session field: {name}")
        if getattr(self, name) is not None:
            raise SessionStateError(f"{name} is already set")
        if value is None:
            raise SessionStateError(f"{name} cannot be committed as None")
        setattr(self, name, value)

    def require(self, name: str) -> Any:
        """
        Read a field that an earlier stage must have committed.

        Raises
        ------
        SessionStateError
            If the field has not been set yet.
        """
        if name not in type(self).model_fields:
            raise SessionStateError(f"Unknown session field: {name}")
        value = getattr(self, name)
        if value is None:
            raise SessionStateError(f"{name} has not been set yet")
        return value

    def is_set(self, name: str) -> bool:
        """Whether a field already holds a value."""
        return getattr(self, name) is not None


# =============================================================================
# Configuration
# =============================================================================

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "webhatch" / "config.toml"


class WizardConfig(BaseModel):
    """
    User configuration for the wizard.

    Every field has a default, so an empty or missing config file gives
    the stock behaviour.

    Attributes
    ----------
    node_required : int
        Minimum Node.js major version.

    reprompt_invalid : bool
        Re-prompt on invalid project type and license input instead of
        aborting (project type) or falling back to no license.

    bmad_package : str
        npx package spec of the BMAD method installer.

    next_flags : list[str]
        Flags passed to create-next-app.

    gitignore_entries : list[str]
        Lines written to the generated .gitignore.

    output_dir : Path
        Directory in which the project directory is created.

    Examples
    --------
    >>> WizardConfig().node_required
    20
    """

    node_required: int = Field(
        default=20,
        ge=1,
        description="Minimum Node.js major version",
    )
    reprompt_invalid: bool = Field(
        default=False,
        description="Re-prompt on every invalid menu answer",
    )
    bmad_package: str = Field(
        default="bmad-method@alpha",
        description="npx package spec of the BMAD method installer",
    )
    next_flags: list[str] = Field(
        default_factory=lambda: [
            "--typescript",
            "--eslint",
            "--tailwind",
            "--app",
            "--src-dir",
            "--import-alias",
            "@/*",
        ],
        description="Flags passed to create-next-app",
    )
    gitignore_entries: list[str] = Field(
        default_factory=lambda: [
            "node_modules",
            "dist",
            ".next",
            ".vite",
            ".env",
            ".DS_Store",
        ],
        description="Entries written to .gitignore",
    )
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory where the project will be created",
    )

    @field_validator("output_dir")
    @classmethod
    def expand_output_dir(cls, v: Path) -> Path:
        """Expand ``~`` so config files can use home-relative paths."""
        return Path(os.path.expanduser(v))

    @classmethod
    def from_toml(cls, path: Path) -> WizardConfig:
        """
        Load configuration from a TOML file.

        Parameters
        ----------
        path : Path
            Path to the TOML configuration file.

        Raises
        ------
        FileNotFoundError
            If the config file doesn't exist.
        ValidationError
            If the config file has invalid values.
        """
        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

        return cls(**data.get("webhatch", data))

    @classmethod
    def load(cls, path: Path | None = None) -> WizardConfig:
        """
        Load the explicit config file, else the default one, else defaults.
        """
        if path is not None:
            return cls.from_toml(path)
        if DEFAULT_CONFIG_PATH.is_file():
            return cls.from_toml(DEFAULT_CONFIG_PATH)
        return cls()
