"""
Debug pretty-printer for minilang ASTs.

Renders one labelled line per node, children indented two spaces below
their parent, e.g.::

    Program
      VarDecl: x
      Assign
        Identifier: x
        Number: 5
"""

from typing import List

from .ast_nodes import (
    ASTNode, Program, Block, VarDecl, Assign, Print, If, While, Repeat,
    Number, Identifier, BinOp, FunCall
)

INDENT = "  "


def node_label(node: ASTNode) -> str:
    """Return the one-line label of a single node."""
    if isinstance(node, VarDecl):
        return f"VarDecl: {node.name}"
    elif isinstance(node, Number):
        return f"Number: {node.value}"
    elif isinstance(node, Identifier):
        return f"Identifier: {node.name}"
    elif isinstance(node, BinOp):
        return f"BinaryOp: {node.operator}"
    elif isinstance(node, FunCall):
        return f"FuncCall: {node.name}"
    elif isinstance(node, Repeat):
        return "Repeat-Until"
    elif isinstance(node, (Program, Block, Assign, Print, If, While)):
        return node.node_type.value

    return node.__class__.__name__


def format_ast(node: ASTNode, level: int = 0) -> str:
    """Render ``node`` and its subtree as indented text."""
    lines: List[str] = []
    _format_node(node, level, lines)
    return "\n".join(lines)


def _format_node(node: ASTNode, level: int, lines: List[str]):
    lines.append(f"{INDENT * level}{node_label(node)}")
    for child in node.children():
        _format_node(child, level + 1, lines)
