"""Selection run driver: resolve, scan, parse, walk."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from typesel.config import TypeselConfig
from typesel.selector.goparser import GoSourceParser
from typesel.selector.nodes import CompilationUnit, DeclGroup, RecordBody, TypeDecl
from typesel.selector.pkgpath import ModulePathResolver
from typesel.selector.policy import SelectionPolicy
from typesel.selector.scanner import SourceScanner
from typesel.selector.walker import SelectionResult, TreeWalker

console = Console(stderr=True)


class TypeSelector:
    """Runs the type selection for one input file or package directory.

    Every file is parsed before traversal starts, so a path or syntax error
    aborts the run without a partial result.
    """

    def __init__(
        self,
        config: TypeselConfig | None = None,
        parser: GoSourceParser | None = None,
        resolver: ModulePathResolver | None = None,
    ) -> None:
        """Initialize the selector.

        Args:
            config: Run configuration (``all_structs``, GOPATH, verbosity).
            parser: Go parser; created on demand.
            resolver: Import path resolver; built from ``config`` by default.
        """
        self._config = config or TypeselConfig()
        self._parser = parser
        self._resolver = resolver or ModulePathResolver(
            gopath=self._config.gopath, go_command=self._config.go_command
        )

    @property
    def parser(self) -> GoSourceParser:
        if self._parser is None:
            self._parser = GoSourceParser()
        return self._parser

    def run(self, path: Path, is_dir: bool | None = None) -> SelectionResult:
        """Select the types of ``path`` that need generated code.

        Args:
            path: A ``.go`` file or a package directory.
            is_dir: Whether ``path`` is a directory; detected when None.

        Returns:
            The SelectionResult for the whole file or package.

        Raises:
            PathResolveError: If the import path cannot be determined.
            ScanError: If the package directory cannot be listed.
            SourceParseError: If any file is unreadable or malformed.
        """
        if is_dir is None:
            is_dir = path.is_dir()

        module_path = self._resolver.resolve(path, is_dir)

        files = SourceScanner(path).scan() if is_dir else [path]
        units = [self.parser.parse_file(f) for f in files]

        walker = TreeWalker(SelectionPolicy(all_mode=self._config.all_structs))
        result = SelectionResult(module_path=module_path)
        for unit in units:
            before = len(result.selected_names)
            walker.walk(unit, result)
            if self._config.debug:
                self._report_unit(unit, result.selected_names[before:])

        console.print(
            f"[green]Selector[/green] found [bold]{len(result.selected_names)}[/bold] "
            f"types in [bold]{len(units)}[/bold] files"
        )
        return result

    @staticmethod
    def _report_unit(unit: CompilationUnit, selected: list[str]) -> None:
        names = ", ".join(selected) if selected else "[dim]none[/dim]"
        console.print(
            f"[blue]Selector[/blue] {unit.filename} (package {unit.module_name}): "
            f"{len(unit.type_names)} types declared, selected: {names}"
        )
        for decl in unit.decls:
            if not isinstance(decl, DeclGroup):
                continue
            for spec in decl.specs:
                mark = "[green]+[/green]" if spec.name in selected else "[dim]-[/dim]"
                console.print(f"  {mark} {spec.name} (line {spec.line}): {describe_type(spec)}")


def describe_type(spec: TypeDecl) -> str:
    """One-line summary of a declaration for diagnostics."""
    expr = spec.type_expr
    if isinstance(expr, RecordBody):
        fields = ", ".join(expr.fields) if expr.fields else "no fields"
        shape = f"struct {{{fields}}}"
    else:
        shape = expr.kind
    return f"alias of {shape}" if spec.alias else shape


def select_types(
    path: Path, *, all_mode: bool = False, is_dir: bool | None = None
) -> SelectionResult:
    """Convenience wrapper: run a TypeSelector with default settings."""
    config = TypeselConfig(all_structs=all_mode)
    return TypeSelector(config).run(path, is_dir=is_dir)
