"""
Semantic analysis error handling for minilang.

Provides error reporting for scope resolution: undeclared and redeclared
variables, plus the warning for reading a variable that may not have been
assigned yet.
"""

from enum import Enum
from typing import Optional, List

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import ASTNode


class SemanticErrorKind(Enum):
    """Categories of semantic diagnostics, valued by their error code."""
    UNDECLARED_VARIABLE = "S001"
    REDECLARED_VARIABLE = "S002"
    TYPE_MISMATCH = "S003"           # reserved, single-type language
    UNINITIALIZED_VARIABLE = "S004"
    INVALID_OPERATION = "S005"       # reserved, single-type language


class SemanticError(Exception):
    """
    Exception raised when semantic analysis finds an error.

    The analyzer catches it, records the diagnostic and keeps going, so one
    bad statement never hides the errors in the ones after it.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        kind: SemanticErrorKind,
        node: Optional[ASTNode] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        related_locations: Optional[List[SourceLocation]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            category="Semantic Error",
            code=kind.value,
            help_text=help_text,
            suggestions=suggestions
        )
        self.node = node
        self.related_locations = related_locations or []

    @property
    def line(self) -> int:
        return self.diagnostic.line

    def __str__(self) -> str:
        return str(self.diagnostic)


class SemanticWarning:
    """
    Represents a semantic warning that doesn't affect validity.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        kind: SemanticErrorKind,
        node: Optional[ASTNode] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.kind = kind
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            category="Semantic Warning",
            code=kind.value,
            help_text=help_text,
            suggestions=suggestions
        )
        self.node = node

    @property
    def line(self) -> int:
        return self.diagnostic.line

    def __str__(self) -> str:
        return str(self.diagnostic)


# Helper functions for creating specific semantic diagnostics

def create_undeclared_variable_error(
    name: str,
    location: SourceLocation,
    node: Optional[ASTNode] = None,
    similar_names: Optional[List[str]] = None
) -> SemanticError:
    """Create an undeclared variable error."""
    suggestions = []
    if similar_names:
        suggestions.extend([f"Did you mean '{similar}'?" for similar in similar_names[:3]])
    suggestions.append(f"Declare '{name}' before using it: 'int {name};'")

    return SemanticError(
        message=f"Undeclared variable '{name}'",
        location=location,
        kind=SemanticErrorKind.UNDECLARED_VARIABLE,
        node=node,
        help_text=f"No declaration of '{name}' is visible from this scope.",
        suggestions=suggestions
    )


def create_redeclared_variable_error(
    name: str,
    location: SourceLocation,
    original_location: Optional[SourceLocation] = None,
    node: Optional[ASTNode] = None
) -> SemanticError:
    """Create an error for a second declaration in the same scope."""
    related_locations = [original_location] if original_location else []
    help_text = None
    if original_location is not None:
        help_text = f"'{name}' was first declared at line {original_location.line}."

    return SemanticError(
        message=f"Variable '{name}' already declared in this scope",
        location=location,
        kind=SemanticErrorKind.REDECLARED_VARIABLE,
        node=node,
        help_text=help_text,
        suggestions=[
            f"Remove the duplicate declaration of '{name}'",
            "Declare it inside a new block to shadow the outer variable",
        ],
        related_locations=related_locations
    )


def create_uninitialized_variable_warning(
    name: str,
    location: SourceLocation,
    node: Optional[ASTNode] = None
) -> SemanticWarning:
    """Create a warning for reading a variable before any assignment."""
    return SemanticWarning(
        message=f"Variable '{name}' may be used uninitialized",
        location=location,
        kind=SemanticErrorKind.UNINITIALIZED_VARIABLE,
        node=node,
        help_text=f"Assign a value to '{name}' before reading it.",
    )
