"""Type selection: Go parsing, pragma policy, and the selecting tree walker."""

from __future__ import annotations

from typesel.selector.engine import TypeSelector, select_types
from typesel.selector.goparser import GoSourceParser
from typesel.selector.nodes import CompilationUnit, DeclGroup, OtherNode, RecordBody, TypeDecl
from typesel.selector.pkgpath import ModulePathResolver
from typesel.selector.policy import IGNORE_PRAGMA, INCLUDE_PRAGMA, SelectionPolicy, Verdict
from typesel.selector.scanner import SourceScanner
from typesel.selector.walker import SelectionResult, TreeWalker

__all__ = [
    "IGNORE_PRAGMA",
    "INCLUDE_PRAGMA",
    "CompilationUnit",
    "DeclGroup",
    "GoSourceParser",
    "ModulePathResolver",
    "OtherNode",
    "RecordBody",
    "SelectionPolicy",
    "SelectionResult",
    "SourceScanner",
    "TreeWalker",
    "TypeDecl",
    "TypeSelector",
    "Verdict",
    "select_types",
]
