"""
minilang Semantic Analyzer Package

Implements scope-aware semantic checking:
- Block-structured scopes with shadowing
- Undeclared and redeclared variable detection
- Warnings for possibly uninitialized reads
- Symbol table dumps for debugging
"""

from .semantic_analyzer import SemanticAnalyzer, AnalysisResult, analyze
from .symbol_table import SymbolTable, Symbol, SymbolType, Scope, INT_TYPE
from .errors import SemanticError, SemanticWarning, SemanticErrorKind

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult", "analyze",

    # Symbol management
    "SymbolTable", "Symbol", "SymbolType", "Scope", "INT_TYPE",

    # Error handling
    "SemanticError", "SemanticWarning", "SemanticErrorKind",
]
