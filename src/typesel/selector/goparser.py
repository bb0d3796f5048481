"""Go source parsing with tree-sitter.

Turns a ``.go`` file into the node model of :mod:`typesel.selector.nodes`.
Documentation is attached and normalised the way the Go toolchain does it:
a comment group (comments separated by at most one line break) is the doc
of the declaration that starts on the line right after the group ends.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, NoReturn

import tree_sitter as ts
import tree_sitter_go

from typesel.exceptions import SourceParseError
from typesel.selector.nodes import (
    CompilationUnit,
    DeclGroup,
    OtherNode,
    RecordBody,
    TopLevelNode,
    TypeDecl,
)

_DECL_KINDS: dict[str, str] = {
    "function_declaration": "function",
    "method_declaration": "method",
    "import_declaration": "import",
    "var_declaration": "var",
    "const_declaration": "const",
}

_TYPE_KINDS: dict[str, str] = {
    "type_identifier": "named",
    "qualified_type": "named",
    "generic_type": "generic",
    "pointer_type": "pointer",
    "slice_type": "slice",
    "array_type": "array",
    "implicit_length_array_type": "array",
    "map_type": "map",
    "channel_type": "channel",
    "function_type": "function",
    "interface_type": "interface",
    "parenthesized_type": "parenthesized",
}

_DIRECTIVE_PREFIXES = ("line ", "extern ", "export ")


def comment_text(comments: Sequence[str]) -> str:
    """Return the text of a comment group with comment markers removed.

    Mirrors Go's ``CommentGroup.Text``: one space after ``//`` is dropped,
    ``//tool:directive`` comments are omitted, trailing whitespace is
    stripped, leading blank lines are removed, runs of blank lines collapse
    to one, and non-empty results end with a newline. Indentation inside
    ``/* */`` blocks is kept.
    """
    lines: list[str] = []
    for raw in comments:
        text = raw.replace("\r", "")
        if text.startswith("//"):
            text = text[2:]
            if text.startswith(" "):
                text = text[1:]
            elif text and _is_directive(text):
                continue
        elif text.startswith("/*"):
            text = text[2:-2]
        lines.extend(line.rstrip(" \t\n\r") for line in text.split("\n"))

    out: list[str] = []
    for line in lines:
        if line or (out and out[-1]):
            out.append(line)
    if out and out[-1]:
        out.append("")
    return "\n".join(out)


def _is_directive(text: str) -> bool:
    """Report whether a ``//`` comment body is a tool directive like ``go:generate``."""
    if text.startswith(_DIRECTIVE_PREFIXES):
        return True
    colon = text.find(":")
    if colon <= 0 or colon + 1 >= len(text):
        return False
    for i in range(colon + 2):
        if i == colon:
            continue
        ch = text[i]
        if not ("a" <= ch <= "z" or "0" <= ch <= "9"):
            return False
    return True


class GoSourceParser:
    """Parses Go compilation units into declaration trees.

    Usage::

        parser = GoSourceParser()
        unit = parser.parse_file(Path("models.go"))
    """

    def __init__(self) -> None:
        """Load the tree-sitter Go grammar."""
        self._language = ts.Language(tree_sitter_go.language())
        self._parser = ts.Parser()
        self._parser.language = self._language

    def parse_file(self, file_path: Path) -> CompilationUnit:
        """Parse a Go source file.

        Args:
            file_path: Path to a ``.go`` file.

        Returns:
            The parsed CompilationUnit.

        Raises:
            SourceParseError: If the file cannot be read or is not valid Go.
        """
        try:
            content = file_path.read_bytes()
        except OSError as exc:
            raise SourceParseError(f"Cannot read file: {exc}", path=file_path) from exc
        return self.parse_source(content, filename=str(file_path))

    def parse_source(self, content: bytes | str, filename: str = "") -> CompilationUnit:
        """Parse Go source held in memory.

        Raises:
            SourceParseError: If the source has syntax errors or no package clause.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        tree = self._parser.parse(content)
        root = tree.root_node
        if root.has_error:
            bad = self._first_error(root)
            line: int | None = None
            column: int | None = None
            what = "syntax error"
            if bad is not None:
                line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
                if bad.is_missing:
                    what = f"missing {bad.type!r}"
            raise SourceParseError(what, path=filename or "<source>", line=line, column=column)

        return self._build_unit(root, content, filename)

    def _build_unit(self, root: Any, content: bytes, filename: str) -> CompilationUnit:
        """Walk the top-level children, attaching comment groups to declarations."""
        module_name: str | None = None
        decls: list[TopLevelNode] = []

        group: list[Any] = []
        prev_end = -1
        seen_decl = False

        for child in root.named_children:
            if child.type == "comment":
                start = child.start_point[0]
                if not group and start == prev_end:
                    continue  # trailing comment of the previous declaration
                if group and start > self._end_row(group[-1]) + 1:
                    group = []
                group.append(child)
                continue

            doc_nodes: list[Any] = []
            if group and self._end_row(group[-1]) + 1 == child.start_point[0]:
                doc_nodes = group
            group = []
            prev_end = self._end_row(child)

            if child.type == "package_clause":
                if module_name is not None:
                    self._reject(child, "duplicate 'package' clause", filename)
                name_node = self._child_by_type(child, "package_identifier")
                module_name = self._node_text(name_node, content) if name_node is not None else ""
                continue

            if module_name is None:
                self._reject(child, "expected 'package' clause", filename)
            if child.type not in _DECL_KINDS and child.type != "type_declaration":
                self._reject(child, "non-declaration statement outside function body", filename)
            if child.type == "import_declaration" and seen_decl:
                self._reject(child, "imports must appear before other declarations", filename)
            seen_decl = seen_decl or child.type != "import_declaration"

            if child.type == "type_declaration":
                doc = comment_text([self._node_text(c, content) for c in doc_nodes])
                decls.append(DeclGroup(doc=doc, specs=self._type_specs(child, content)))
            else:
                decls.append(OtherNode(kind=_DECL_KINDS[child.type]))

        if module_name is None:
            raise SourceParseError("expected 'package' clause", path=filename or "<source>")

        return CompilationUnit(module_name=module_name, decls=tuple(decls), filename=filename)

    def _type_specs(self, decl: Any, content: bytes) -> tuple[TypeDecl, ...]:
        """Extract the type declarations of a (possibly parenthesised) ``type`` block."""
        specs: list[TypeDecl] = []
        for node in decl.named_children:
            if node.type not in ("type_spec", "type_alias"):
                continue
            name_node = node.child_by_field_name("name")
            type_node = node.child_by_field_name("type")
            specs.append(
                TypeDecl(
                    name=self._node_text(name_node, content) if name_node else "",
                    type_expr=self._type_expr(type_node, content),
                    alias=node.type == "type_alias",
                    line=node.start_point[0] + 1,
                )
            )
        return tuple(specs)

    def _type_expr(self, node: Any | None, content: bytes) -> RecordBody | OtherNode:
        """Classify an underlying type expression."""
        if node is None:
            return OtherNode(kind="unknown")
        if node.type != "struct_type":
            return OtherNode(kind=_TYPE_KINDS.get(node.type, node.type))

        fields: list[str] = []
        body = self._child_by_type(node, "field_declaration_list")
        if body is not None:
            for field_decl in body.named_children:
                if field_decl.type != "field_declaration":
                    continue
                names = field_decl.children_by_field_name("name")
                if names:
                    fields.extend(self._node_text(n, content) for n in names)
                else:
                    embedded = field_decl.child_by_field_name("type")
                    if embedded is not None:
                        fields.append(self._embedded_name(self._node_text(embedded, content)))
        return RecordBody(fields=tuple(fields))

    @staticmethod
    def _embedded_name(type_text: str) -> str:
        """Field name of an embedded field: ``*pkg.Base[T]`` -> ``Base``."""
        name = type_text.lstrip("*").split("[", 1)[0]
        return name.rsplit(".", 1)[-1]

    @staticmethod
    def _reject(node: Any, message: str, filename: str) -> NoReturn:
        """Raise a SourceParseError located at ``node``."""
        raise SourceParseError(
            message,
            path=filename or "<source>",
            line=node.start_point[0] + 1,
            column=node.start_point[1] + 1,
        )

    @staticmethod
    def _first_error(node: Any) -> Any | None:
        """Return the first ERROR or missing node in document order."""
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                found = GoSourceParser._first_error(child)
                if found is not None:
                    return found
        return None

    # Tree-sitter helpers

    @staticmethod
    def _end_row(node: Any) -> int:
        """Last source row covered by a node, ignoring a trailing line break."""
        row, column = node.end_point[0], node.end_point[1]
        if column == 0 and row > node.start_point[0]:
            return row - 1
        return row

    @staticmethod
    def _child_by_type(node: Any, type_name: str) -> Any | None:
        """Return first child of node with the given type."""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @staticmethod
    def _node_text(node: Any, content: bytes) -> str:
        """Extract source text for a tree-sitter node."""
        return content[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
