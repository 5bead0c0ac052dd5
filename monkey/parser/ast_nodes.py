"""
Abstract Syntax Tree node definitions for Monkey.

The node set is closed: a Program of statements, three statement kinds and
four expression kinds. Every node keeps the token that started it, can
render itself back to canonical source text with str(), and supports the
visitor pattern for the stages that consume the tree.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"

    # Statements
    LET_STATEMENT = "LetStatement"
    RETURN_STATEMENT = "ReturnStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"

    # Expressions
    IDENTIFIER = "Identifier"
    INTEGER_LITERAL = "IntegerLiteral"
    PREFIX_EXPRESSION = "PrefixExpression"
    INFIX_EXPRESSION = "InfixExpression"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


def _render(node: Optional['ASTNode']) -> str:
    # Children left absent by a failed sub-parse render as nothing
    return "" if node is None else str(node)


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, token: Optional[Token]):
        self.node_type = node_type
        self.token = token

    def token_literal(self) -> str:
        """Literal of the token this node was built from."""
        return self.token.literal

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes that are present."""
        pass

    @abstractmethod
    def __str__(self) -> str:
        """Canonical source rendering of this subtree."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"


class Statement(ASTNode):
    """Base class for statements."""
    pass


class Expression(ASTNode):
    """Base class for expressions."""
    pass


# ============================================================================
# Top-level nodes
# ============================================================================

class Program(ASTNode):
    """Root AST node representing a complete program."""
    statements: List[Statement]

    def __init__(self, statements: Optional[List[Statement]] = None):
        super().__init__(ASTNodeType.PROGRAM, None)
        self.statements = statements if statements is not None else []

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def __str__(self) -> str:
        return "".join(str(stmt) for stmt in self.statements)


# ============================================================================
# Statements
# ============================================================================

class LetStatement(Statement):
    """let <name> = <value>;"""
    name: Optional['Identifier']
    value: Optional[Expression]

    def __init__(self, token: Token, name: Optional['Identifier'] = None,
                 value: Optional[Expression] = None):
        super().__init__(ASTNodeType.LET_STATEMENT, token)
        self.name = name
        self.value = value

    def children(self) -> List[ASTNode]:
        return [child for child in (self.name, self.value) if child is not None]

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.name)} = {_render(self.value)};"


class ReturnStatement(Statement):
    """return <value>;"""
    return_value: Optional[Expression]

    def __init__(self, token: Token, return_value: Optional[Expression] = None):
        super().__init__(ASTNodeType.RETURN_STATEMENT, token)
        self.return_value = return_value

    def children(self) -> List[ASTNode]:
        return [self.return_value] if self.return_value is not None else []

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.return_value)};"


class ExpressionStatement(Statement):
    """A bare expression used as a statement, e.g. `x + 10;`."""
    expression: Optional[Expression]

    def __init__(self, token: Token, expression: Optional[Expression] = None):
        super().__init__(ASTNodeType.EXPRESSION_STATEMENT, token)
        self.expression = expression

    def children(self) -> List[ASTNode]:
        return [self.expression] if self.expression is not None else []

    def __str__(self) -> str:
        return _render(self.expression)


# ============================================================================
# Expressions
# ============================================================================

class Identifier(Expression):
    """A name reference."""
    value: str

    def __init__(self, token: Token, value: str):
        super().__init__(ASTNodeType.IDENTIFIER, token)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.value


class IntegerLiteral(Expression):
    """Integer literal. `value` is only meaningful if parsing succeeded."""
    value: Optional[int]

    def __init__(self, token: Token, value: Optional[int] = None):
        super().__init__(ASTNodeType.INTEGER_LITERAL, token)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.token_literal()


class PrefixExpression(Expression):
    """Unary operation: <operator><right>, e.g. -5 or !ok."""
    operator: str
    right: Optional[Expression]

    def __init__(self, token: Token, operator: str, right: Optional[Expression] = None):
        super().__init__(ASTNodeType.PREFIX_EXPRESSION, token)
        self.operator = operator
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.right] if self.right is not None else []

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"


class InfixExpression(Expression):
    """Binary operation: <left> <operator> <right>."""
    left: Optional[Expression]
    operator: str
    right: Optional[Expression]

    def __init__(self, token: Token, left: Optional[Expression], operator: str,
                 right: Optional[Expression] = None):
        super().__init__(ASTNodeType.INFIX_EXPRESSION, token)
        self.left = left
        self.operator = operator
        self.right = right

    def children(self) -> List[ASTNode]:
        return [child for child in (self.left, self.right) if child is not None]

    def __str__(self) -> str:
        return f"({_render(self.left)} {self.operator} {_render(self.right)})"
