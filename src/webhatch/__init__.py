"""
webhatch - Interactive Web Project Wizard
=========================================

A CLI wizard that walks you through creating a new web project and
delegates the heavy lifting to the tools you already use: npm, yarn or
pnpm, create-vite, create-next-app, create-astro, git and your editor.

Features
--------
- **Runtime Gate**: Checks the installed Node.js and offers an nvm upgrade
- **Project Types**: Plain HTML/CSS, React (Vite), Next.js or Astro
- **Boilerplate**: README, .gitignore, ESLint/Prettier stubs and a LICENSE
- **Finishing Touches**: git init, optional BMAD method, open in an editor

Quick Start
-----------
```bash
# Install webhatch
pip install webhatch

# Start the wizard
webhatch new

# Or pre-answer some questions
webhatch new mysite --type react --package-manager pnpm
```

Architecture
------------
- ``cli``: Typer-based command line interface
- ``wizard``: The stage pipeline that drives a session
- ``prompts``: Line-based menus and yes/no questions
- ``generators``: Delegated project generators (Vite, Next.js, Astro, ...)
- ``runtime``: Node.js version detection and nvm integration
- ``runner``: Subprocess execution
- ``files``: Jinja2 rendering of README/LICENSE/ignore files
- ``models``: Pydantic models for session state and configuration

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "Technical-1"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from webhatch.models import (
    EditorChoice,
    LicenseChoice,
    PackageManager,
    ProjectType,
    SessionState,
    WizardConfig,
)
from webhatch.wizard import PipelineResult, Wizard


__all__ = [
    "EditorChoice",
    "LicenseChoice",
    "PackageManager",
    "PipelineResult",
    "ProjectType",
    "SessionState",
    "Wizard",
    "WizardConfig",
    "__author__",
    "__version__",
]
