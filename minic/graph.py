"""Render an abstract syntax tree as a Graphviz DOT document."""

from __future__ import annotations

import os
from typing import Optional

from .syntax_tree import AstNode, AstOperatorType, BasicType

_INTERNAL_NAMES = {
    AstOperatorType.BLOCK: "block",
    AstOperatorType.RETURN: "return",
    AstOperatorType.FUNC_DEF: "func-def",
    AstOperatorType.COMPILE_UNIT: "compile-unit",
    AstOperatorType.FUNC_FORMAL_PARAMS: "formal-params",
    AstOperatorType.VAR_DECL: "var-decl",
    AstOperatorType.DECL_STMT: "decl-stmt",
    AstOperatorType.ADD: "+",
    AstOperatorType.SUB: "-",
    AstOperatorType.ASSIGN: "=",
    AstOperatorType.FUNC_CALL: "func-call",
    AstOperatorType.FUNC_REAL_PARAMS: "real-params",
    AstOperatorType.MUL: "*",
    AstOperatorType.DIV: "/",
    AstOperatorType.MOD: "%",
    AstOperatorType.NEG: "-",
}

_TYPE_NAMES = {
    BasicType.TYPE_INT: "int",
    BasicType.TYPE_VOID: "void",
    BasicType.TYPE_FLOAT: "float",
}

# Extensions for which a DOT document is written.
DOT_EXTENSIONS = frozenset({"dot", "gv"})


def _as_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def node_name(node: AstNode) -> str:
    """Return the text shown for node in the rendered tree."""
    kind = node.node_type
    if kind is AstOperatorType.LEAF_LITERAL_UINT:
        return str(_as_int32(node.integer_val))
    if kind is AstOperatorType.LEAF_LITERAL_FLOAT:
        return f"{node.float_val:f}"
    if kind is AstOperatorType.LEAF_VAR_ID:
        return node.name
    if kind is AstOperatorType.LEAF_TYPE:
        return _TYPE_NAMES.get(node.type, "unknown")
    return _INTERNAL_NAMES.get(kind, "unknown")


def _quote(text: str, record: bool = False) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    if record:
        for ch in "{}|<>":
            escaped = escaped.replace(ch, "\\" + ch)
    return '"' + escaped + '"'


class _DotBuilder:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self._count = 0

    def _new_id(self) -> str:
        node_id = f"n{self._count}"
        self._count += 1
        return node_id

    def visit(self, node: Optional[AstNode]) -> Optional[str]:
        if node is None:
            return None
        if node.is_leaf_node():
            return self._leaf(node)
        return self._internal(node)

    def _leaf(self, node: AstNode) -> str:
        node_id = self._new_id()
        attrs = [
            ("fontcolor", _quote("black")),
            ("fontname", _quote("SimSun")),
            ("label", _quote(node_name(node), record=True)),
            ("shape", _quote("record")),
            ("style", _quote("filled")),
            ("fillcolor", _quote("yellow")),
        ]
        self.lines.append(f"  {node_id} [{', '.join(f'{k}={v}' for k, v in attrs)}];")
        return node_id

    def _internal(self, node: AstNode) -> str:
        son_ids = [son_id for son_id in map(self.visit, node.sons) if son_id]
        node_id = self._new_id()
        self.lines.append(
            f"  {node_id} [label={_quote(node_name(node))}, shape={_quote('ellipse')}];"
        )
        self.lines.extend(f"  {node_id} -> {son_id};" for son_id in son_ids)
        return node_id


def ast_to_dot(root: Optional[AstNode]) -> str:
    """Return a directed DOT graph of the tree rooted at root."""
    builder = _DotBuilder()
    builder.visit(root)
    body = "\n".join(builder.lines)
    header = 'digraph ast {\n  dpi="600";\n'
    return header + (body + "\n" if body else "") + "}\n"


def output_ast(root: Optional[AstNode], file_path: str) -> None:
    """Write the tree to file_path as DOT.

    The format follows the file extension; a path without one is written as DOT.
    Raises ValueError for an image format that cannot be produced.
    """
    _, ext = os.path.splitext(file_path)
    ext = ext[1:].lower()
    if ext and ext not in DOT_EXTENSIONS:
        raise ValueError(f"unsupported output format: {ext}")
    with open(file_path, "w", encoding="utf-8") as out:
        out.write(ast_to_dot(root))