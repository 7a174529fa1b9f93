"""
Error handling for the minilang lexer.

Provides the Diagnostic record shared by every compiler phase, plus the
lexer's own error type. Diagnostics print in the one-line form
``<category> at line <n>: <message>``; ``render()`` adds location, help
text and suggestions.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation, LexErrorKind


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    category: str  # "Lexical Error", "Parse Error", "Semantic Error", ...
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def line(self) -> int:
        return self.location.line

    def __str__(self) -> str:
        return f"{self.category} at line {self.location.line}: {self.message}"

    def render(self) -> str:
        """Detailed multi-line form with location, help and suggestions."""
        code = f"[{self.code}] " if self.code else ""
        result = f"{self.severity.upper()}: {code}{self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when an invalid character reaches the parser.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        kind: LexErrorKind = LexErrorKind.INVALID_CHARACTER,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            category="Lexical Error",
            code=kind.value,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def line(self) -> int:
        return self.diagnostic.line

    def __str__(self) -> str:
        return str(self.diagnostic)


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    if char == "!":
        help_text = "'!' is only valid as part of the '!=' operator."
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in minilang source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character '{char}'",
        location=location,
        kind=LexErrorKind.INVALID_CHARACTER,
        help_text=help_text,
    )
