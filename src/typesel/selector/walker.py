"""Tree walker that collects the types needing generated marshalers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from typesel.selector.nodes import (
    CompilationUnit,
    DeclGroup,
    Node,
    RecordBody,
    TypeDecl,
)
from typesel.selector.policy import SelectionPolicy, Verdict, type_verdict


@dataclass
class SelectionResult:
    """Accumulated output of one run.

    Attributes:
        module_path: Import path of the package, set once by the resolver.
        module_name: Package name of the last compilation unit visited.
        selected_names: Selected type names in traversal order.
    """

    module_path: str = ""
    module_name: str = ""
    selected_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Plain-data form handed to code emitters."""
        return {
            "module_path": self.module_path,
            "module_name": self.module_name,
            "types": list(self.selected_names),
        }


@dataclass
class _WalkState:
    result: SelectionResult
    explicit: bool = False
    name: str = ""


class TreeWalker:
    """Depth-first walk over compilation units driven by a SelectionPolicy.

    Usage::

        walker = TreeWalker(SelectionPolicy(all_mode=True))
        result = walker.walk_units(units, SelectionResult(module_path="example.com/m"))
    """

    def __init__(self, policy: SelectionPolicy | None = None) -> None:
        self.policy = policy or SelectionPolicy()

    def walk(self, unit: CompilationUnit, result: SelectionResult | None = None) -> SelectionResult:
        """Walk one compilation unit, appending to ``result``.

        Returns:
            The accumulator, created fresh when ``result`` is None.
        """
        if result is None:
            result = SelectionResult()
        self._visit(unit, _WalkState(result=result))
        return result

    def walk_units(
        self, units: Iterable[CompilationUnit], result: SelectionResult | None = None
    ) -> SelectionResult:
        """Walk several units in the given order, sharing one accumulator."""
        if result is None:
            result = SelectionResult()
        for unit in units:
            self.walk(unit, result)
        return result

    def _visit(self, node: Node, state: _WalkState) -> None:
        if isinstance(node, CompilationUnit):
            state.result.module_name = node.module_name
            for decl in node.decls:
                self._visit(decl, state)

        elif isinstance(node, DeclGroup):
            verdict, state.explicit = self.policy.group_verdict(node.doc)
            if verdict is Verdict.SKIP:
                return
            for spec in node.specs:
                self._visit(spec, state)

        elif isinstance(node, TypeDecl):
            state.name = node.name
            # Explicit pragmas select the type whatever its underlying type is.
            if type_verdict(state.explicit) is Verdict.SELECT:
                state.result.selected_names.append(state.name)
                return
            self._visit(node.type_expr, state)

        elif isinstance(node, RecordBody):
            state.result.selected_names.append(state.name)

        # OtherNode and anything unrecognised: no selection, no descent.
