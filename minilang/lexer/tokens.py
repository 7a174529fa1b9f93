"""
Token definitions for the minilang lexer.

This module defines every token type the language knows about:
- Keywords (if, while, repeat, until, int, print)
- Arithmetic and comparison operators
- Number literals and identifiers
- Delimiters
- End-of-file and error tokens
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


# Lexemes longer than this are split across consecutive tokens
MAX_LEXEME_LENGTH = 99


class TokenType(Enum):
    """
    Enumeration of all token types in minilang.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    ERROR = auto()                  # Unrecognized character

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    NUMBER = auto()                 # 42
    IDENTIFIER = auto()             # counter, total_1

    # ========================================================================
    # Keywords
    # ========================================================================
    IF = auto()                     # if
    WHILE = auto()                  # while
    REPEAT = auto()                 # repeat
    UNTIL = auto()                  # until
    INT = auto()                    # int (the only type keyword)
    PRINT = auto()                  # print

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    LESS_EQUAL = auto()             # <=
    GREATER_EQUAL = auto()          # >=
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=

    # ========================================================================
    # Delimiters
    # ========================================================================
    ASSIGN = auto()                 # =
    SEMICOLON = auto()              # ;
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }


class LexErrorKind(Enum):
    """Lexical error categories attached to error tokens."""
    INVALID_CHARACTER = "L001"
    INVALID_NUMBER = "L002"          # reserved for stricter lexing
    CONSECUTIVE_OPERATORS = "L003"   # reserved for stricter lexing
    INVALID_IDENTIFIER = "L004"      # reserved for stricter lexing
    UNEXPECTED_TOKEN = "L005"        # reserved for stricter lexing


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the minilang language.

    Contains the token type, lexeme (raw text), semantic value, source
    location and, for error tokens, the lexical error category.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # int for NUMBER, name for IDENTIFIER
    location: SourceLocation        # Source location
    error: Optional[LexErrorKind] = None

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator."""
        return self.type in OPERATOR_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer for keyword/operator recognition

KEYWORDS = {
    "if": TokenType.IF,
    "while": TokenType.WHILE,
    "repeat": TokenType.REPEAT,
    "until": TokenType.UNTIL,
    "int": TokenType.INT,
    "print": TokenType.PRINT,
}

# Two-character lexemes are tried before single characters
OPERATORS = {
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,

    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,

    "=": TokenType.ASSIGN,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
}

OPERATOR_TYPES = {
    TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE,
    TokenType.LESS_THAN, TokenType.GREATER_THAN, TokenType.LESS_EQUAL,
    TokenType.GREATER_EQUAL, TokenType.EQUAL, TokenType.NOT_EQUAL,
}

# Declared type keywords and the primitive type each one names
TYPE_KEYWORDS = {
    TokenType.INT: "int",
}
