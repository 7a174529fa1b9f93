"""
minilang Lexer Package

Implements the lexical analyzer for minilang. Converts raw source text into
tokens one at a time, tracking line numbers, skipping whitespace and block
comments, and flagging unrecognized characters with error tokens.
"""

from .tokens import Token, TokenType, SourceLocation, LexErrorKind
from .lexer import Lexer, LexerState, get_next_token, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "LexerState",
    "get_next_token",
    "tokenize_string",
    "tokenize_file",
    "Token",
    "TokenType",
    "SourceLocation",
    "LexErrorKind",
    "Diagnostic",
    "LexerError",
]
