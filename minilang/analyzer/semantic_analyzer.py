"""
Main semantic analyzer for minilang.

Walks the AST once, maintaining the scope stack as it enters and leaves
blocks, and reports:
- use or assignment of undeclared variables (error)
- redeclaration of a variable in the same scope (error)
- reads of declared but never assigned variables (warning)

The walk is fail-soft: every statement is checked even after an error, so a
single run reports all problems in the program.
"""

import sys
import logging
from typing import List, Optional, TextIO
from dataclasses import dataclass

from ..parser.ast_nodes import (
    ASTNode, Program, Expression, Block, VarDecl, Assign, Print,
    If, While, Number, Identifier, BinOp, FunCall
)
from .symbol_table import SymbolTable, Symbol, BUILTIN_TYPES, INT_TYPE
from .errors import (
    SemanticError, SemanticWarning, create_undeclared_variable_error,
    create_uninitialized_variable_warning
)

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    is_valid: bool
    errors: List[SemanticError]
    warnings: List[SemanticWarning]
    symbols: List[Symbol]  # Live symbols once analysis finished

    def has_errors(self) -> bool:
        """Check if analysis found any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if analysis found any warnings."""
        return len(self.warnings) > 0


class SemanticAnalyzer:
    """
    Main semantic analyzer for minilang.

    Diagnostics are written to ``stream`` as they are found and also
    collected on the analyzer. With ``dump_symbols`` the live symbol table
    is printed to the same stream once analysis is done.
    """

    def __init__(self, stream: Optional[TextIO] = None, dump_symbols: bool = False):
        """
        Initialize the semantic analyzer.

        Args:
            stream: Where diagnostics are printed (default stdout)
            dump_symbols: Print the symbol table after analysis
        """
        self.stream = stream
        self.dump_symbols = dump_symbols
        self.symbol_table = SymbolTable()
        self.errors: List[SemanticError] = []
        self.warnings: List[SemanticWarning] = []

    def analyze(self, ast: Program) -> AnalysisResult:
        """
        Perform semantic analysis on the AST.

        Args:
            ast: The abstract syntax tree to analyze

        Returns:
            AnalysisResult with the validity verdict and all diagnostics
        """
        self.symbol_table = SymbolTable()
        self.errors = []
        self.warnings = []

        valid = True
        for statement in ast.statements:
            valid &= self._check_statement(statement)

        if self.dump_symbols:
            self.symbol_table.dump(self._output)

        logger.debug("Analysis finished: valid=%s, %d errors, %d warnings",
                     valid, len(self.errors), len(self.warnings))

        return AnalysisResult(
            is_valid=valid,
            errors=self.errors,
            warnings=self.warnings,
            symbols=self.symbol_table.symbols()
        )

    @property
    def _output(self) -> TextIO:
        return self.stream or sys.stdout

    # ========================================================================
    # Statements
    # ========================================================================

    def _check_statement(self, stmt: ASTNode) -> bool:
        """Check one statement, returning whether it is valid."""
        if isinstance(stmt, VarDecl):
            return self._check_declaration(stmt)
        elif isinstance(stmt, Assign):
            return self._check_assignment(stmt)
        elif isinstance(stmt, Block):
            return self._check_block(stmt)
        elif isinstance(stmt, If):
            return self._check_if_statement(stmt)
        elif isinstance(stmt, While):
            return self._check_while_statement(stmt)
        elif isinstance(stmt, Print):
            return self._check_expression(stmt.expression)
        else:
            return self._check_expression(stmt)

    def _check_declaration(self, decl: VarDecl) -> bool:
        """Declare a variable in the current scope."""
        var_type = BUILTIN_TYPES.get(decl.type_token.lexeme, INT_TYPE)
        try:
            self.symbol_table.define_variable(decl.name, var_type, decl.token.location)
        except SemanticError as e:
            e.node = decl
            self._report_error(e)
            return False
        return True

    def _check_assignment(self, assign: Assign) -> bool:
        """Check an assignment and mark its target initialized on success."""
        symbol = self.symbol_table.lookup_symbol(assign.target.name)
        if symbol is None:
            self._report_undeclared(assign.target)
            return False

        valid = self._check_expression(assign.value)
        if valid:
            symbol.is_initialized = True
        return valid

    def _check_block(self, block: Block) -> bool:
        """Check a block in its own scope."""
        scope = self.symbol_table.enter_scope()
        logger.debug("Entered scope level %d at line %d", scope.level, block.line)

        valid = True
        try:
            for stmt in block.statements:
                valid &= self._check_statement(stmt)
        finally:
            self.symbol_table.exit_scope()
            logger.debug("Left scope level %d, discarding %d symbols", scope.level, len(scope.symbols))

        return valid

    def _check_if_statement(self, if_stmt: If) -> bool:
        valid = self._check_condition(if_stmt.condition)
        valid &= self._check_statement(if_stmt.then_branch)
        if if_stmt.else_branch:
            valid &= self._check_statement(if_stmt.else_branch)
        return valid

    def _check_while_statement(self, while_stmt: While) -> bool:
        valid = self._check_condition(while_stmt.condition)
        valid &= self._check_statement(while_stmt.body)
        return valid

    def _check_condition(self, condition: Expression) -> bool:
        return self._check_expression(condition)

    # ========================================================================
    # Expressions
    # ========================================================================

    def _check_expression(self, expr: ASTNode) -> bool:
        """Check an expression, returning whether it is valid."""
        if isinstance(expr, Number):
            return True
        elif isinstance(expr, Identifier):
            return self._check_identifier(expr)
        elif isinstance(expr, BinOp):
            valid = self._check_expression(expr.left)
            valid &= self._check_expression(expr.right)
            return valid
        elif isinstance(expr, FunCall):
            return self._check_expression(expr.argument)
        else:
            # Any other composite node (e.g. Repeat): all children must be valid
            valid = True
            for child in expr.children():
                valid &= self._check_expression(child)
            return valid

    def _check_identifier(self, identifier: Identifier) -> bool:
        symbol = self.symbol_table.lookup_symbol(identifier.name)
        if symbol is None:
            self._report_undeclared(identifier)
            return False

        if not symbol.is_initialized:
            self._report_warning(create_uninitialized_variable_warning(
                identifier.name, identifier.token.location, identifier
            ))
        return True

    # ========================================================================
    # Reporting
    # ========================================================================

    def _report_undeclared(self, identifier: Identifier):
        similar_names = self.symbol_table.get_similar_names(identifier.name)
        self._report_error(create_undeclared_variable_error(
            identifier.name, identifier.token.location, identifier, similar_names
        ))

    def _report_error(self, error: SemanticError):
        self.errors.append(error)
        print(error, file=self._output)

    def _report_warning(self, warning: SemanticWarning):
        self.warnings.append(warning)
        print(warning, file=self._output)


def analyze(program: Program, stream: Optional[TextIO] = None,
            dump_symbols: bool = False) -> bool:
    """
    Analyze a program and return whether it is semantically valid.

    Warnings are printed but never make a program invalid.
    """
    return SemanticAnalyzer(stream, dump_symbols).analyze(program).is_valid
