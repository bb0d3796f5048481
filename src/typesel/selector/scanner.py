"""Source file discovery for package (directory) runs."""

from __future__ import annotations

from pathlib import Path

from typesel.exceptions import ScanError

GO_SUFFIX = ".go"


class SourceScanner:
    """Lists the Go files of one package directory.

    Only the directory itself is scanned, like the Go toolchain's directory
    parser: subdirectories are separate packages. Test files are included.

    Usage::

        scanner = SourceScanner(Path("./models"))
        files = scanner.scan()
    """

    def __init__(self, directory: Path) -> None:
        """Initialize the scanner.

        Args:
            directory: Package directory.

        Raises:
            ScanError: If directory does not exist.
        """
        self._directory = directory.resolve()
        if not self._directory.is_dir():
            raise ScanError(f"Package directory does not exist: {self._directory}")

    @property
    def directory(self) -> Path:
        return self._directory

    def scan(self) -> list[Path]:
        """Return the directory's ``.go`` files sorted by file name.

        Raises:
            ScanError: If the directory cannot be listed.
        """
        try:
            results = [
                entry
                for entry in self._directory.iterdir()
                if entry.suffix == GO_SUFFIX and entry.is_file()
            ]
        except OSError as exc:
            raise ScanError(f"Failed to scan package directory: {exc}") from exc

        results.sort(key=lambda p: p.name)
        return results
