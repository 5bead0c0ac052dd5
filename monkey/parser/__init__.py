"""
Monkey Parser Package

Pratt (top-down operator precedence) parser producing the Monkey AST.

Key Features:
- Prefix/infix parse function tables keyed by token type
- Precedence table driving grouping and left associativity
- Errors collected rather than raised, with statement-level resynchronization
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, Program, Statement, Expression,
    LetStatement, ReturnStatement, ExpressionStatement,
    Identifier, IntegerLiteral, PrefixExpression, InfixExpression,
)
from .parser import Parser, Precedence, PRECEDENCES, parse_string, parse_file
from .errors import (
    ParseError, UnexpectedTokenError, MissingPrefixParserError,
    IntegerLiteralError, IllegalTokenError,
)

__all__ = [
    # Core parser
    "Parser", "Precedence", "PRECEDENCES", "parse_string", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor",
    "Program", "Statement", "Expression",
    "LetStatement", "ReturnStatement", "ExpressionStatement",
    "Identifier", "IntegerLiteral", "PrefixExpression", "InfixExpression",

    # Error handling
    "ParseError", "UnexpectedTokenError", "MissingPrefixParserError",
    "IntegerLiteralError", "IllegalTokenError",
]
