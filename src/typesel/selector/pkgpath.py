"""Go import path resolution for an input file or package directory.

Module mode looks for the nearest ``go.mod``; GOPATH mode strips a
``$GOPATH/src/`` prefix. Module mode is skipped when ``GO111MODULE=off``.
"""

from __future__ import annotations

import os
import posixpath
import re
import subprocess
from pathlib import Path

from typesel.exceptions import PathResolveError

_MODULE_RE = re.compile(r"^\s*module\s+(\"[^\"]+\"|`[^`]+`|\S+)")


def read_module_path(go_mod: Path) -> str:
    """Return the module path declared by a go.mod file.

    Raises:
        PathResolveError: If the file cannot be read or has no module directive.
    """
    try:
        text = go_mod.read_text(encoding="utf-8")
    except OSError as exc:
        raise PathResolveError(f"Cannot read {go_mod}: {exc}") from exc

    for line in text.splitlines():
        line = line.split("//", 1)[0]
        m = _MODULE_RE.match(line)
        if m is not None:
            return m.group(1).strip("\"`")
    raise PathResolveError(f"No module directive in {go_mod}")


def find_go_mod(directory: Path) -> Path | None:
    """Return the nearest go.mod in ``directory`` or its ancestors."""
    for candidate in (directory, *directory.parents):
        go_mod = candidate / "go.mod"
        if go_mod.is_file():
            return go_mod
    return None


class ModulePathResolver:
    """Maps files and package directories to Go import paths.

    Args:
        gopath: GOPATH list to use in GOPATH mode. Empty means ask
            ``go env GOPATH``.
        go_command: Go toolchain binary.
    """

    def __init__(self, gopath: str = "", go_command: str = "go") -> None:
        self._gopath = gopath
        self._go_command = go_command

    def resolve(self, input_path: Path, is_dir: bool) -> str:
        """Return the import path of the package containing ``input_path``.

        Args:
            input_path: A ``.go`` file or a package directory.
            is_dir: True if ``input_path`` names a directory.

        Raises:
            PathResolveError: If no go.mod or GOPATH entry covers the path.
        """
        path = Path(os.path.abspath(input_path))
        pkg_dir = path if is_dir else path.parent

        if os.environ.get("GO111MODULE", "").lower() != "off":
            go_mod = find_go_mod(pkg_dir)
            if go_mod is not None:
                return self._from_go_mod(pkg_dir, go_mod)

        return self._from_gopath(path, is_dir)

    @staticmethod
    def _from_go_mod(pkg_dir: Path, go_mod: Path) -> str:
        module_path = read_module_path(go_mod)
        rel = pkg_dir.relative_to(go_mod.parent).as_posix()
        return posixpath.normpath(posixpath.join(module_path, rel))

    def _from_gopath(self, path: Path, is_dir: bool) -> str:
        gopath = self._gopath or os.environ.get("GOPATH", "") or self._default_gopath()
        for entry in gopath.split(os.pathsep):
            if not entry:
                continue
            src = Path(os.path.abspath(entry)) / "src"
            try:
                rel = path.relative_to(src).as_posix()
            except ValueError:
                continue
            if rel == ".":
                continue
            if not is_dir:
                return posixpath.dirname(rel) or "."
            return posixpath.normpath(rel)

        raise PathResolveError(f"file '{path}' is not in GOPATH '{gopath}'")

    def _default_gopath(self) -> str:
        """Ask the Go toolchain for its default GOPATH."""
        try:
            result = subprocess.run(
                [self._go_command, "env", "GOPATH"],
                capture_output=True, text=True, check=False,
            )
        except FileNotFoundError as exc:
            raise PathResolveError(
                f"GOPATH is not set and '{self._go_command}' was not found"
            ) from exc
        if result.returncode != 0:
            raise PathResolveError(f"'{self._go_command} env GOPATH' failed: {result.stderr.strip()}")
        return result.stdout.strip()
