"""
minilang Parser Package

Recursive-descent parser that builds an Abstract Syntax Tree from the token
stream, plus the AST node classes and a debug pretty-printer.
"""

from .parser import Parser, parse_string, parse_file
from .ast_nodes import *
from .errors import ParseError, ParseErrorKind
from .printer import format_ast

__all__ = [
    "Parser",
    "parse_string",
    "parse_file",
    "format_ast",
    "ParseError",
    "ParseErrorKind",
    "AST",
    "ASTNode",
    "ASTNodeType",
    "Program",
    "Statement",
    "Expression",
    "Block",
    "VarDecl",
    "Assign",
    "Print",
    "If",
    "While",
    "Repeat",
    "Number",
    "Identifier",
    "BinOp",
    "FunCall",
]
