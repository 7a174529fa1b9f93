"""
Abstract Syntax Tree node definitions for minilang.

One class per node kind. Every node keeps a copy of the token it was built
from (lexeme and line for diagnostics, plus the name, operator or literal
it represents) and exposes its children in role order.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    PROGRAM = "Program"
    VAR_DECL = "VarDecl"
    ASSIGN = "Assign"
    PRINT = "Print"
    NUMBER = "Number"
    IDENTIFIER = "Identifier"
    BIN_OP = "BinOp"
    IF = "If"
    WHILE = "While"
    REPEAT = "Repeat"
    BLOCK = "Block"
    FUN_CALL = "FunCall"


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, token: Token):
        self.node_type = node_type
        self.token = token

    @property
    def line(self) -> int:
        return self.token.line

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.line}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(token={self.token.lexeme!r}, line={self.line})"


class Statement(ASTNode):
    """Base class for statements."""
    pass


class Expression(ASTNode):
    """Base class for expressions."""
    pass


# ============================================================================
# Statement sequences
# ============================================================================

class Program(ASTNode):
    """Root AST node: the ordered top-level statements."""

    def __init__(self, statements: List[Statement], token: Token):
        super().__init__(ASTNodeType.PROGRAM, token)
        self.statements = statements

    def children(self) -> List[ASTNode]:
        return list(self.statements)


class Block(Statement):
    """Braced statement sequence; opens a new scope."""

    def __init__(self, statements: List[Statement], token: Token):
        super().__init__(ASTNodeType.BLOCK, token)
        self.statements = statements

    def children(self) -> List[ASTNode]:
        return list(self.statements)


# ============================================================================
# Statements
# ============================================================================

class VarDecl(Statement):
    """Variable declaration ``int name;``. The token is the name."""

    def __init__(self, token: Token, type_token: Token):
        super().__init__(ASTNodeType.VAR_DECL, token)
        self.type_token = type_token

    @property
    def name(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return []


class Assign(Statement):
    """Assignment ``target = value;``."""

    def __init__(self, target: 'Identifier', value: Expression):
        super().__init__(ASTNodeType.ASSIGN, target.token)
        self.target = target
        self.value = value

    def children(self) -> List[ASTNode]:
        return [self.target, self.value]


class Print(Statement):
    """``print expression;``."""

    def __init__(self, expression: Expression, token: Token):
        super().__init__(ASTNodeType.PRINT, token)
        self.expression = expression

    def children(self) -> List[ASTNode]:
        return [self.expression]


class If(Statement):
    """If statement. ``else_branch`` is reserved; the grammar never sets it."""

    def __init__(self, condition: Expression, then_branch: Statement, token: Token,
                 else_branch: Optional[Statement] = None):
        super().__init__(ASTNodeType.IF, token)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

    def children(self) -> List[ASTNode]:
        children = [self.condition, self.then_branch]
        if self.else_branch:
            children.append(self.else_branch)
        return children


class While(Statement):
    """While loop statement."""

    def __init__(self, condition: Expression, body: Statement, token: Token):
        super().__init__(ASTNodeType.WHILE, token)
        self.condition = condition
        self.body = body

    def children(self) -> List[ASTNode]:
        return [self.condition, self.body]


class Repeat(Statement):
    """Repeat-until loop: the body runs before the condition is tested."""

    def __init__(self, body: Statement, condition: Expression, token: Token):
        super().__init__(ASTNodeType.REPEAT, token)
        self.body = body
        self.condition = condition

    def children(self) -> List[ASTNode]:
        return [self.body, self.condition]


# ============================================================================
# Expressions
# ============================================================================

class Number(Expression):
    """Integer literal."""

    def __init__(self, token: Token):
        super().__init__(ASTNodeType.NUMBER, token)

    @property
    def value(self) -> int:
        return self.token.value

    def children(self) -> List[ASTNode]:
        return []


class Identifier(Expression):
    """Variable reference."""

    def __init__(self, token: Token):
        super().__init__(ASTNodeType.IDENTIFIER, token)

    @property
    def name(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return []


class BinOp(Expression):
    """Binary operation; the token is the operator."""

    def __init__(self, left: Expression, operator: Token, right: Expression):
        super().__init__(ASTNodeType.BIN_OP, operator)
        self.left = left
        self.right = right

    @property
    def operator(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


class FunCall(Expression):
    """Single-argument call such as ``factorial(n)``; the token is the callee."""

    def __init__(self, token: Token, argument: Expression):
        super().__init__(ASTNodeType.FUN_CALL, token)
        self.argument = argument

    @property
    def name(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return [self.argument]


# Alias for the main AST type
AST = Program
