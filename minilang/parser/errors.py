"""
Error handling for the minilang parser.

Every syntax error is fatal: the parser raises ParseError at the first
malformed construct and does not try to resynchronize. The error carries
its category, the offending token and a Diagnostic for reporting.
"""

from enum import Enum
from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseErrorKind(Enum):
    """Categories of syntax errors, valued by their error code."""
    UNEXPECTED_TOKEN = "P001"
    MISSING_SEMICOLON = "P002"
    MISSING_IDENTIFIER = "P003"
    MISSING_EQUALS = "P004"
    INVALID_EXPRESSION = "P005"
    MISSING_LPAREN = "P006"
    MISSING_RPAREN = "P007"
    MISSING_CONDITION = "P008"
    MISSING_BLOCK = "P009"
    INVALID_OPERATOR = "P010"
    FUNCTION_CALL = "P011"


# Message templates; {found} is the offending token, {previous} the one before it
_MESSAGES = {
    ParseErrorKind.UNEXPECTED_TOKEN: "Unexpected token '{found}'",
    ParseErrorKind.MISSING_SEMICOLON: "Missing semicolon after '{previous}'",
    ParseErrorKind.MISSING_IDENTIFIER: "Expected identifier after '{previous}'",
    ParseErrorKind.MISSING_EQUALS: "Expected '=' after '{previous}'",
    ParseErrorKind.INVALID_EXPRESSION: "Invalid expression at '{found}'",
    ParseErrorKind.MISSING_LPAREN: "Missing '(' after '{previous}'",
    ParseErrorKind.MISSING_RPAREN: "Missing ')' after '{previous}'",
    ParseErrorKind.MISSING_CONDITION: "Missing condition after '{previous}'",
    ParseErrorKind.MISSING_BLOCK: "Missing block braces after '{previous}'",
    ParseErrorKind.INVALID_OPERATOR: "Invalid operator '{found}'",
    ParseErrorKind.FUNCTION_CALL: "Function call error near '{found}'",
}

_HELP = {
    ParseErrorKind.MISSING_SEMICOLON: "Statements end with ';'.",
    ParseErrorKind.MISSING_IDENTIFIER: "A declaration needs a variable name: 'int name;'.",
    ParseErrorKind.MISSING_EQUALS: "Only assignments may start with an identifier: 'name = expression;'.",
    ParseErrorKind.INVALID_EXPRESSION: "Expected a number, an identifier or a parenthesized expression.",
    ParseErrorKind.MISSING_CONDITION: "Conditions cannot be empty.",
    ParseErrorKind.MISSING_BLOCK: "The block was never closed with '}'.",
    ParseErrorKind.INVALID_OPERATOR: "Supported comparisons are '<', '>', '==' and '!='.",
    ParseErrorKind.FUNCTION_CALL: "A call takes exactly one argument: 'factorial(expression)'.",
}

# Expected token type -> category used when it is missing
EXPECTED_TOKEN_ERRORS = {
    TokenType.SEMICOLON: ParseErrorKind.MISSING_SEMICOLON,
    TokenType.LEFT_PAREN: ParseErrorKind.MISSING_LPAREN,
    TokenType.RIGHT_PAREN: ParseErrorKind.MISSING_RPAREN,
    TokenType.IDENTIFIER: ParseErrorKind.MISSING_IDENTIFIER,
    TokenType.ASSIGN: ParseErrorKind.MISSING_EQUALS,
    TokenType.RIGHT_BRACE: ParseErrorKind.MISSING_BLOCK,
}


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains the error category, the offending token and detailed
    diagnostic information for error reporting.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        token: Token,
        previous: Optional[Token] = None,
        suggestions: Optional[List[str]] = None
    ):
        previous_lexeme = previous.lexeme if previous is not None else token.lexeme
        message = _MESSAGES[kind].format(found=token.lexeme, previous=previous_lexeme)
        super().__init__(message)
        self.kind = kind
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            location=token.location,
            severity="error",
            category="Parse Error",
            code=kind.value,
            help_text=_HELP.get(kind),
            suggestions=suggestions
        )

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        return str(self.diagnostic)


def create_expected_token_error(expected: TokenType, found: Token,
                                previous: Optional[Token] = None) -> ParseError:
    """Create the categorized error for a missing expected token."""
    kind = EXPECTED_TOKEN_ERRORS.get(expected, ParseErrorKind.UNEXPECTED_TOKEN)
    return ParseError(kind, found, previous)
