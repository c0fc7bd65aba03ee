"""
webhatch.files - Template Rendering and File Writing
====================================================

This module turns session answers into file contents. Each ``render_*``
function is a pure mapping from a small parameter struct to a string,
so the templates can be tested without running the wizard. Writing to
disk is a separate step (``write_files``).

Template System
---------------
Templates are Jinja2 files in the ``templates/`` package. They receive
the fields of ``TemplateParams`` as top-level variables:

    - project_name: Name captured by the wizard
    - description: Free-form description (may be empty)
    - author: Free-form author (may be empty)
    - year: Copyright year
    - package_manager: npm, yarn or pnpm

Usage Example
-------------
>>> from webhatch.files import TemplateParams, render_readme
>>> params = TemplateParams(project_name="mysite", package_manager="pnpm")
>>> render_readme(params).splitlines()[0]
'# mysite'
"""

from __future__ import annotations

from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape
from pydantic import BaseModel, Field

from webhatch.models import LicenseChoice


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Lint/format config stubs written in every project: relative path -> content
LINT_STUBS: dict[str, str] = {
    ".eslintrc": "{}\n",
    ".prettierrc": "{}\n",
    ".eslintignore": "node_modules\n",
    ".prettierignore": "node_modules\n",
}

# Pages written for a multi-page React app: (component name, route path)
REACT_PAGES: list[tuple[str, str]] = [
    ("Home", "/"),
    ("Contact", "/contact"),
    ("About", "/about"),
]


class TemplateParams(BaseModel):
    """
    Values substituted into the project templates.

    Description and author are not validated; empty strings are allowed
    and rendered as-is.
    """

    project_name: str
    description: str = ""
    author: str = ""
    year: int = Field(default_factory=lambda: datetime.now(UTC).year)
    package_manager: str = "npm"


# =============================================================================
# Template Engine Setup
# =============================================================================

def create_jinja_env() -> Environment:
    """
    Create and configure the Jinja2 template environment.

    Autoescaping is disabled: the output is markdown, license text and
    source files, and the captured values are written verbatim.

    Returns
    -------
    Environment
        Configured Jinja2 environment.
    """
    return Environment(
        loader=PackageLoader("webhatch", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


@lru_cache(maxsize=1)
def _default_env() -> Environment:
    return create_jinja_env()


def render_template(template_name: str, params: TemplateParams | None = None, **extra: Any) -> str:
    """
    Render one template.

    Parameters
    ----------
    template_name : str
        Template path inside the templates package (e.g. "README.md.j2").

    params : TemplateParams | None
        Project values exposed as top-level template variables.

    **extra
        Additional template variables.

    Raises
    ------
    jinja2.TemplateNotFound
        If the template file doesn't exist.
    """
    context = params.model_dump() if params is not None else {}
    context.update(extra)
    return _default_env().get_template(template_name).render(**context)


# =============================================================================
# Renderers
# =============================================================================

def render_readme(params: TemplateParams) -> str:
    """README.md: title, description, Installation and Getting Started."""
    return render_template("README.md.j2", params)


def render_license(choice: LicenseChoice, params: TemplateParams) -> str | None:
    """
    LICENSE text for the chosen license.

    Returns
    -------
    str | None
        The license text, or None when ``choice`` is ``LicenseChoice.NONE``.
    """
    if choice.template is None:
        return None
    return render_template(choice.template, params)


def render_gitignore(entries: list[str]) -> str:
    """One ignore pattern per line."""
    return render_template("gitignore.j2", entries=entries)


def render_index_html(params: TemplateParams) -> str:
    """Starter page for HTML/CSS projects."""
    return render_template("index.html.j2", params)


def render_react_pages() -> dict[Path, str]:
    """
    Page components and the router for a multi-page React app.

    Returns
    -------
    dict[Path, str]
        Mapping of paths relative to the project root to file contents.
    """
    files = {
        Path("src/pages") / f"{name}.jsx": render_template("react/page.jsx.j2", page=name)
        for name, _ in REACT_PAGES
    }
    files[Path("src/routes/routes.jsx")] = render_template(
        "react/routes.jsx.j2",
        pages=[{"name": name, "path": path} for name, path in REACT_PAGES],
    )
    return files


# =============================================================================
# File Writing
# =============================================================================

def write_files(project_dir: Path, files: dict[Path, str]) -> list[Path]:
    """
    Write rendered files into the project directory.

    Parent directories are created as needed. Existing files are
    overwritten, which matters for generators that ship their own
    README or .gitignore.

    Parameters
    ----------
    project_dir : Path
        Root directory of the project.

    files : dict[Path, str]
        Mapping of relative paths to file contents.

    Returns
    -------
    list[Path]
        Absolute paths of the written files.
    """
    created_files: list[Path] = []

    for relative_path, content in files.items():
        full_path = project_dir / relative_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        created_files.append(full_path)

    return created_files
