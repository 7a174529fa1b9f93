"""
minilang front end

Lexer, recursive-descent parser and semantic analyzer for a small
imperative language with integer variables, arithmetic and comparison
expressions, if/while/repeat-until control flow, blocks and print.

Architecture:
    minilang/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and AST generation
    ├── analyzer/        # Scope checking and symbol table
    └── cli.py           # Command line interface

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser, parse_string, parse_file
from .analyzer import SemanticAnalyzer, analyze

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SemanticAnalyzer",

    # Convenience functions
    "parse_string",
    "parse_file",
    "analyze",

    # Version info
    "__version__",
    "__license__",
]
