"""Syntax node model consumed by the tree walker.

The set of node variants is closed: a compilation unit holds top-level
declarations, which are either declaration groups or ``OtherNode``; a group
holds type declarations; a type declaration's underlying type is either a
``RecordBody`` or an ``OtherNode``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class OtherNode:
    """Any node the selection logic does not look into.

    Attributes:
        kind: Short description of the node (e.g. "function", "map", "pointer").
    """

    kind: str


@dataclass(frozen=True, slots=True)
class RecordBody:
    """A struct literal with named fields.

    Attributes:
        fields: Declared field names in source order (embedded fields use
            their type name).
    """

    fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TypeDecl:
    """A named type introduced within a declaration group.

    Attributes:
        name: Type identifier, unique within its compilation unit.
        type_expr: Underlying type expression.
        alias: True for ``type A = B`` declarations.
        line: 1-based source line of the declaration (0 when unknown).
    """

    name: str
    type_expr: RecordBody | OtherNode
    alias: bool = False
    line: int = 0


@dataclass(frozen=True, slots=True)
class DeclGroup:
    """A ``type`` declaration with its attached documentation block.

    Attributes:
        doc: Documentation text; empty when the group has none.
        specs: Type declarations in source order.
    """

    doc: str = ""
    specs: tuple[TypeDecl, ...] = ()


TopLevelNode = Union[DeclGroup, OtherNode]
Node = Union["CompilationUnit", DeclGroup, TypeDecl, RecordBody, OtherNode]


@dataclass(frozen=True, slots=True)
class CompilationUnit:
    """One parsed source file.

    Attributes:
        module_name: Declared package name.
        decls: Top-level declarations in source order.
        filename: Source file name (empty for in-memory sources).
    """

    module_name: str
    decls: tuple[TopLevelNode, ...] = field(default_factory=tuple)
    filename: str = ""

    @property
    def type_names(self) -> list[str]:
        """All type names declared at the top level, in source order."""
        return [
            spec.name
            for decl in self.decls
            if isinstance(decl, DeclGroup)
            for spec in decl.specs
        ]
