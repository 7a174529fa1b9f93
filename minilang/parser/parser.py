"""
minilang recursive-descent parser.

Pulls tokens from the lexer on demand with a single token of lookahead.
The one place that needs a second token (telling a ``factorial(...)`` call
apart from a plain identifier) peeks by saving and restoring the lexer
state.

Expressions are parsed by layered precedence levels, each a
left-associative loop over the next tighter level:

    expression -> equality   (== !=)
               -> comparison (< >)
               -> term       (+ -)
               -> factor     (* /)
               -> primary    (number, identifier, call, parenthesized)

The first syntax error raises ParseError; there is no recovery.
"""

import logging
from typing import Callable, List, Optional, Set

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType, TYPE_KEYWORDS
from ..lexer.errors import create_invalid_character_error
from .ast_nodes import (
    Program, Statement, Expression, Block, VarDecl, Assign, Print, If, While,
    Repeat, Number, Identifier, BinOp, FunCall
)
from .errors import ParseError, ParseErrorKind, create_expected_token_error

logger = logging.getLogger(__name__)


# Operator sets for each precedence level, loosest first
EQUALITY_OPERATORS = {TokenType.EQUAL, TokenType.NOT_EQUAL}
COMPARISON_OPERATORS = {TokenType.LESS_THAN, TokenType.GREATER_THAN}
TERM_OPERATORS = {TokenType.PLUS, TokenType.MINUS}
FACTOR_OPERATORS = {TokenType.MULTIPLY, TokenType.DIVIDE}

# Identifiers parsed as calls when directly followed by '('
CALLABLE_FUNCTIONS = {"factorial"}


class Parser:
    """
    minilang recursive-descent parser.

    Builds a Program AST from source text, raising ParseError (or
    LexerError for an invalid character) at the first malformed construct.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the parser over a source string.

        Args:
            source: Source code string
            filename: Filename for error reporting
        """
        self.filename = filename
        self.lexer = Lexer(source, filename)
        self.current_token: Optional[Token] = None
        self.previous_token: Optional[Token] = None

    def reset(self):
        """Rewind to the beginning of the source and fetch the first token."""
        self.lexer.reset()
        self.current_token = None
        self.previous_token = None
        self._advance()

    def parse(self) -> Program:
        """
        Parse the whole source into an AST.

        Returns:
            Program AST node holding the top-level statements in order

        Raises:
            ParseError: On the first syntax error
            LexerError: On the first invalid character
        """
        logger.debug("Parsing %s", self.filename)
        self.reset()

        start_token = self.current_token
        statements: List[Statement] = []
        while not self._check(TokenType.EOF):
            statements.append(self._parse_statement())

        logger.debug("Parsed %d top-level statements from %s", len(statements), self.filename)
        return Program(statements, start_token)

    # ========================================================================
    # Statements
    # ========================================================================

    def _parse_statement(self) -> Statement:
        """Parse one statement, dispatching on the current token."""
        token_type = self.current_token.type

        if token_type in TYPE_KEYWORDS:
            return self._parse_declaration()
        elif token_type == TokenType.IDENTIFIER:
            return self._parse_assignment()
        elif token_type == TokenType.IF:
            return self._parse_if_statement()
        elif token_type == TokenType.WHILE:
            return self._parse_while_statement()
        elif token_type == TokenType.REPEAT:
            return self._parse_repeat_statement()
        elif token_type == TokenType.PRINT:
            return self._parse_print_statement()
        elif token_type == TokenType.LEFT_BRACE:
            return self._parse_block()

        raise ParseError(ParseErrorKind.UNEXPECTED_TOKEN, self.current_token, self.previous_token)

    def _parse_declaration(self) -> VarDecl:
        """Parse ``int name;``."""
        type_token = self._advance()

        if not self._check(TokenType.IDENTIFIER):
            raise ParseError(ParseErrorKind.MISSING_IDENTIFIER, self.current_token, type_token)
        name_token = self._advance()

        self._expect(TokenType.SEMICOLON)
        return VarDecl(name_token, type_token)

    def _parse_assignment(self) -> Assign:
        """Parse ``name = expression;``."""
        target = Identifier(self._advance())

        self._expect(TokenType.ASSIGN)
        value = self._parse_expression()
        self._expect(TokenType.SEMICOLON)

        return Assign(target, value)

    def _parse_if_statement(self) -> If:
        """Parse ``if (condition) statement``."""
        if_token = self._advance()
        condition = self._parse_condition()
        then_branch = self._parse_statement()
        return If(condition, then_branch, if_token)

    def _parse_while_statement(self) -> While:
        """Parse ``while (condition) statement``."""
        while_token = self._advance()
        condition = self._parse_condition()
        body = self._parse_statement()
        return While(condition, body, while_token)

    def _parse_repeat_statement(self) -> Repeat:
        """Parse ``repeat statement until (condition);``."""
        repeat_token = self._advance()
        body = self._parse_statement()

        if not self._check(TokenType.UNTIL):
            raise ParseError(ParseErrorKind.UNEXPECTED_TOKEN, self.current_token, self.previous_token)
        self._advance()

        condition = self._parse_condition()
        self._expect(TokenType.SEMICOLON)
        return Repeat(body, condition, repeat_token)

    def _parse_print_statement(self) -> Print:
        """Parse ``print expression;``."""
        print_token = self._advance()
        expression = self._parse_expression()
        self._expect(TokenType.SEMICOLON)
        return Print(expression, print_token)

    def _parse_block(self) -> Block:
        """Parse ``{ statement* }``."""
        open_token = self._expect(TokenType.LEFT_BRACE)

        statements: List[Statement] = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._check(TokenType.EOF):
            statements.append(self._parse_statement())

        self._expect(TokenType.RIGHT_BRACE)
        return Block(statements, open_token)

    def _parse_condition(self) -> Expression:
        """Parse a parenthesized, non-empty condition."""
        self._expect(TokenType.LEFT_PAREN)
        if self._check(TokenType.RIGHT_PAREN):
            raise ParseError(ParseErrorKind.MISSING_CONDITION, self.current_token, self.previous_token)

        condition = self._parse_expression()
        self._expect(TokenType.RIGHT_PAREN)
        return condition

    # ========================================================================
    # Expressions
    # ========================================================================

    def _parse_expression(self) -> Expression:
        """Parse a full expression."""
        expression = self._parse_equality()

        # Lexed operators with no precedence level of their own (<=, >=)
        if self.current_token.is_operator:
            raise ParseError(ParseErrorKind.INVALID_OPERATOR, self.current_token, self.previous_token)

        return expression

    def _parse_equality(self) -> Expression:
        return self._parse_left_associative(self._parse_comparison, EQUALITY_OPERATORS)

    def _parse_comparison(self) -> Expression:
        return self._parse_left_associative(self._parse_term, COMPARISON_OPERATORS)

    def _parse_term(self) -> Expression:
        return self._parse_left_associative(self._parse_factor, TERM_OPERATORS)

    def _parse_factor(self) -> Expression:
        return self._parse_left_associative(self._parse_primary, FACTOR_OPERATORS)

    def _parse_left_associative(self, parse_operand: Callable[[], Expression],
                                operators: Set[TokenType]) -> Expression:
        """Parse ``operand (op operand)*`` folding into left-leaning BinOps."""
        left = parse_operand()

        while self.current_token.type in operators:
            operator_token = self._advance()
            right = parse_operand()
            left = BinOp(left, operator_token, right)

        return left

    def _parse_primary(self) -> Expression:
        """Parse a number, identifier, call or parenthesized expression."""
        token = self.current_token

        if token.type == TokenType.NUMBER:
            return Number(self._advance())

        if token.type == TokenType.IDENTIFIER:
            if token.lexeme in CALLABLE_FUNCTIONS and self._peek_next().type == TokenType.LEFT_PAREN:
                return self._parse_function_call()
            return Identifier(self._advance())

        if token.type == TokenType.LEFT_PAREN:
            self._advance()
            expression = self._parse_expression()
            self._expect(TokenType.RIGHT_PAREN)
            return expression

        raise ParseError(ParseErrorKind.INVALID_EXPRESSION, token, self.previous_token)

    def _parse_function_call(self) -> FunCall:
        """Parse ``name(expression)``."""
        name_token = self._advance()
        self._expect(TokenType.LEFT_PAREN)

        argument = self._parse_expression()

        if not self._check(TokenType.RIGHT_PAREN):
            raise ParseError(ParseErrorKind.FUNCTION_CALL, self.current_token, self.previous_token)
        self._advance()

        return FunCall(name_token, argument)

    # ========================================================================
    # Utility methods
    # ========================================================================

    def _advance(self) -> Optional[Token]:
        """Consume the current token, fetch the next one and return the consumed one."""
        token = self.lexer.next_token()
        if token.type == TokenType.ERROR:
            raise create_invalid_character_error(token.lexeme, token.location)

        self.previous_token = self.current_token
        self.current_token = token
        return self.previous_token

    def _peek_next(self) -> Token:
        """Return the token after the current one without consuming anything."""
        saved = self.lexer.save()
        try:
            return self.lexer.next_token()
        finally:
            self.lexer.restore(saved)

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self.current_token.type == token_type

    def _expect(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise the matching categorized error."""
        if self._check(token_type):
            return self._advance()

        raise create_expected_token_error(token_type, self.current_token, self.previous_token)


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails
        LexerError: If the source contains an invalid character
    """
    return Parser(source, filename).parse()


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
