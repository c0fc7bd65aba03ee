"""
webhatch.runtime - Node.js Detection and nvm Integration
========================================================

The runtime gate needs three things from the environment: the installed
Node.js version, whether nvm can help, and a way to install or switch
versions. These are grouped behind the ``RuntimeProbe`` protocol so the
gate logic in the wizard can be tested with a fake probe.

nvm Notes
---------
nvm is a shell function, not an executable, so every nvm call runs in
``bash -c '. "$NVM_DIR/nvm.sh" && nvm ...'``. Switching versions inside
that child shell does not affect this process, so after installing or
selecting a version the probe asks ``nvm which`` for the node binary and
prepends its directory to ``PATH``. Every later subprocess the wizard
starts then sees the selected Node.js.
"""

from __future__ import annotations

import os
import re
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from webhatch.runner import CommandRunner


NODE_DOWNLOAD_URL = "https://nodejs.org/"
NVM_INSTALL_URL = "https://github.com/nvm-sh/nvm#installing-and-updating"

_VERSION_RE = re.compile(r"v?(\d+)\.(\d+)\.(\d+)")


def parse_node_version(text: str) -> str | None:
    """
    Extract a ``major.minor.patch`` version from ``node -v`` style output.

    Examples
    --------
    >>> parse_node_version("v20.11.1")
    '20.11.1'
    >>> parse_node_version("garbage") is None
    True
    """
    match = _VERSION_RE.search(text)
    if match is None:
        return None
    return ".".join(match.groups())


def major_version(version: str) -> int:
    """Major component of a ``major.minor.patch`` string."""
    return int(version.split(".", 1)[0])


class RuntimeProbe(Protocol):
    """Capability the runtime gate uses to inspect and fix the environment."""

    def detect_version(self) -> str | None:
        """Installed Node.js version (``'20.11.1'``), or None if absent."""
        ...

    def is_available(self) -> bool:
        """Whether the assisted-upgrade path (nvm) can be offered."""
        ...

    def list_available(self, major: int) -> list[str]:
        """Versions of the given major already installed in the manager."""
        ...

    def install_and_activate(self, major: int, *, install: bool) -> str:
        """
        Make ``major`` the active Node.js for the rest of the session.

        Parameters
        ----------
        major : int
            Major version to activate.

        install : bool
            Install it first (it isn't in ``list_available``).

        Returns
        -------
        str
            The activated version.
        """
        ...


class NvmProbe:
    """
    ``RuntimeProbe`` backed by the ``node`` executable and nvm.

    Parameters
    ----------
    runner : CommandRunner
        Runner used for all subprocesses.

    nvm_dir : str | None
        nvm installation directory. Defaults to ``$NVM_DIR``.
    """

    def __init__(self, runner: CommandRunner, nvm_dir: str | None = None) -> None:
        self.runner = runner
        self.nvm_dir = nvm_dir if nvm_dir is not None else os.environ.get("NVM_DIR", "")

    @property
    def nvm_script(self) -> Path:
        return Path(self.nvm_dir) / "nvm.sh"

    def detect_version(self) -> str | None:
        if self.runner.which("node") is None:
            return None
        try:
            output = self.runner.capture(["node", "-v"])
        except (subprocess.CalledProcessError, FileNotFoundError):
            return None
        return parse_node_version(output)

    def is_available(self) -> bool:
        if not self.nvm_dir:
            return False
        script = self.nvm_script
        return script.is_file() and script.stat().st_size > 0

    def _nvm_args(self, command: str) -> list[str]:
        script = shlex.quote(str(self.nvm_script))
        return ["bash", "-c", f". {script} && nvm {command}"]

    def list_available(self, major: int) -> list[str]:
        try:
            output = self.runner.capture(self._nvm_args(f"ls --no-colors {major}"))
        except subprocess.CalledProcessError:
            # nvm ls exits non-zero when nothing matches
            return []
        versions = []
        for line in output.splitlines():
            version = parse_node_version(line)
            if version and major_version(version) == major and version not in versions:
                versions.append(version)
        return versions

    def install_and_activate(self, major: int, *, install: bool) -> str:
        if install:
            self.runner.run(self._nvm_args(f"install {major}"))

        node_path = self.runner.capture(self._nvm_args(f"which {major}"))
        lines = node_path.splitlines()
        if not lines:
            raise FileNotFoundError(f"nvm has no Node.js {major} to activate")
        node_bin = Path(lines[-1].strip()).parent
        os.environ["PATH"] = os.pathsep.join([str(node_bin), os.environ.get("PATH", "")])

        version = self.detect_version()
        if version is None:
            raise FileNotFoundError(f"node not found in {node_bin} after nvm activation")
        return version
