"""
Symbol table and scope management for minilang semantic analysis.

Scopes form an explicit stack: entering a block pushes a frame, leaving it
pops the frame and discards every symbol declared inside. Lookup walks the
stack from the innermost frame outwards, so inner declarations shadow outer
ones.
"""

import sys
from typing import Dict, List, Optional, TextIO
from dataclasses import dataclass, field

from ..lexer.tokens import SourceLocation
from .errors import create_redeclared_variable_error


@dataclass(frozen=True)
class SymbolType:
    """Represents a type in the type system."""
    name: str
    kind: str  # "primitive"

    def __str__(self) -> str:
        return self.name


INT_TYPE = SymbolType("int", "primitive")

# Declared type keyword -> SymbolType
BUILTIN_TYPES = {
    "int": INT_TYPE,
}


@dataclass
class Symbol:
    """Represents a variable in the symbol table."""
    name: str
    symbol_type: SymbolType
    scope_level: int
    location: SourceLocation
    is_initialized: bool = False

    @property
    def declaration_line(self) -> int:
        return self.location.line

    def __str__(self) -> str:
        return f"{self.name}: {self.symbol_type}"


@dataclass
class Scope:
    """Represents one lexical scope: the global scope or a block."""
    level: int
    symbols: Dict[str, Symbol] = field(default_factory=dict)

    def define_symbol(self, symbol: Symbol) -> None:
        """Define a symbol in this scope."""
        if symbol.name in self.symbols:
            existing = self.symbols[symbol.name]
            raise create_redeclared_variable_error(symbol.name, symbol.location, existing.location)

        self.symbols[symbol.name] = symbol

    def lookup_symbol_local(self, name: str) -> Optional[Symbol]:
        """Look up a symbol only in this scope."""
        return self.symbols.get(name)

    def __str__(self) -> str:
        return f"Scope(level {self.level}, {len(self.symbols)} symbols)"


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate edit distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


class SymbolTable:
    """
    Manages the stack of scopes.

    The global scope (level 0) is created up front and is never popped.
    """

    def __init__(self):
        """Initialize the symbol table with a global scope."""
        self.global_scope = Scope(0)
        self.scopes: List[Scope] = [self.global_scope]

    @property
    def current_scope(self) -> Scope:
        return self.scopes[-1]

    @property
    def current_level(self) -> int:
        return self.current_scope.level

    def enter_scope(self) -> Scope:
        """Push a new scope one level deeper than the current one."""
        new_scope = Scope(self.current_level + 1)
        self.scopes.append(new_scope)
        return new_scope

    def exit_scope(self) -> Optional[Scope]:
        """Pop the current scope, discarding its symbols, and return it."""
        if len(self.scopes) > 1:
            return self.scopes.pop()
        return None

    def define_variable(self, name: str, var_type: SymbolType,
                        location: SourceLocation) -> Symbol:
        """
        Define an uninitialized variable in the current scope.

        Raises:
            SemanticError: If the name is already declared in the current scope
        """
        symbol = Symbol(
            name=name,
            symbol_type=var_type,
            scope_level=self.current_level,
            location=location,
        )
        self.current_scope.define_symbol(symbol)
        return symbol

    def lookup_symbol(self, name: str) -> Optional[Symbol]:
        """Look up a symbol from the innermost scope outwards."""
        for scope in reversed(self.scopes):
            symbol = scope.lookup_symbol_local(name)
            if symbol is not None:
                return symbol
        return None

    def lookup_symbol_local(self, name: str) -> Optional[Symbol]:
        """Look up a symbol in the current scope only."""
        return self.current_scope.lookup_symbol_local(name)

    def get_visible_symbols(self) -> Dict[str, Symbol]:
        """Get all symbols visible from the current scope."""
        result = {}
        for scope in self.scopes:
            # Inner scopes override outer ones
            result.update(scope.symbols)
        return result

    def get_similar_names(self, name: str, max_distance: int = 2) -> List[str]:
        """Get visible names similar to the given name (for error suggestions)."""
        similar_names = []
        for symbol_name in self.get_visible_symbols():
            distance = levenshtein_distance(name.lower(), symbol_name.lower())
            if distance <= max_distance:
                similar_names.append((symbol_name, distance))

        similar_names.sort(key=lambda x: x[1])
        return [similar for similar, _ in similar_names[:5]]

    def symbols(self) -> List[Symbol]:
        """All live symbols, outermost scope first, in declaration order."""
        return [symbol for scope in self.scopes for symbol in scope.symbols.values()]

    def dump(self, stream: Optional[TextIO] = None):
        """Print every live symbol to ``stream`` (default stdout)."""
        stream = stream or sys.stdout
        live_symbols = self.symbols()

        print("== SYMBOL TABLE DUMP ==", file=stream)
        print(f"Total symbols: {len(live_symbols)}", file=stream)
        print(file=stream)

        for index, symbol in enumerate(live_symbols):
            print(f"Symbol[{index}]:", file=stream)
            print(f"  Name: {symbol.name}", file=stream)
            print(f"  Type: {symbol.symbol_type}", file=stream)
            print(f"  Scope Level: {symbol.scope_level}", file=stream)
            print(f"  Line Declared: {symbol.declaration_line}", file=stream)
            print(f"  Initialized: {'Yes' if symbol.is_initialized else 'No'}", file=stream)
            print(file=stream)

        print("===================", file=stream)

    def __str__(self) -> str:
        return f"SymbolTable(current: {self.current_scope})"
