"""
Monkey Pratt Parser Implementation

Implements a top-down operator precedence (Pratt) parser. Every token type
can register a prefix parse function (it starts an expression) and/or an
infix parse function (it continues one); the precedence table decides how
far an infix loop is allowed to run.

The parser holds two tokens, cur_token and peek_token, and pulls new ones
from the lexer on demand. Errors are collected, never raised, so one run
reports as much as possible.
"""

import logging
from typing import List, Optional, Dict, Callable
from enum import IntEnum

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, Identifier, IntegerLiteral, PrefixExpression,
    InfixExpression
)
from .errors import (
    ParseError, create_unexpected_token_error, create_missing_prefix_error,
    create_integer_literal_error
)

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Optional[Expression]], Optional[Expression]]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    LOWEST = 1
    EQUALS = 2          # ==, !=
    LESSGREATER = 3     # <, >
    SUM = 4             # +, -
    PRODUCT = 5         # *, /
    PREFIX = 6          # -x, !x
    CALL = 7            # fn(x)


# Operator precedence table; anything missing binds at LOWEST
PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQUAL: Precedence.EQUALS,
    TokenType.NOT_EQUAL: Precedence.EQUALS,
    TokenType.LESS_THAN: Precedence.LESSGREATER,
    TokenType.GREATER_THAN: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.MULTIPLY: Precedence.PRODUCT,
    TokenType.DIVIDE: Precedence.PRODUCT,
}

# Token types that begin a statement; used to resynchronize after an error
STATEMENT_STARTS = frozenset({TokenType.LET, TokenType.RETURN})


class Parser:
    """
    Monkey Pratt parser.

    Builds a Program from the tokens of one Lexer. A parser is single use:
    create a new one (with a new lexer) for every independent input.
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize the parser and fill both lookahead slots.

        Args:
            lexer: Lexer positioned at the start of the input
        """
        self.lexer = lexer
        self.diagnostics: List[ParseError] = []

        self.cur_token: Optional[Token] = None
        self.peek_token: Optional[Token] = None

        self._init_parsing_tables()

        # Read two tokens, so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    def _init_parsing_tables(self):
        """Register the built-in prefix and infix parse functions."""
        self.prefix_parsers: Dict[TokenType, PrefixParseFn] = {}
        self.infix_parsers: Dict[TokenType, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENTIFIER, self._parse_identifier)
        self.register_prefix(TokenType.INTEGER, self._parse_integer_literal)
        self.register_prefix(TokenType.LOGICAL_NOT, self._parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self._parse_prefix_expression)

        for token_type in (
            TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE,
            TokenType.EQUAL, TokenType.NOT_EQUAL,
            TokenType.LESS_THAN, TokenType.GREATER_THAN,
        ):
            self.register_infix(token_type, self._parse_infix_expression)

    def register_prefix(self, token_type: TokenType, fn: PrefixParseFn):
        """Use `fn` when `token_type` starts an expression."""
        self.prefix_parsers[token_type] = fn

    def register_infix(self, token_type: TokenType, fn: InfixParseFn):
        """Use `fn` when `token_type` follows an already parsed left operand."""
        self.infix_parsers[token_type] = fn

    def errors(self) -> List[str]:
        """Messages of every error recorded so far, in order."""
        return [error.message for error in self.diagnostics]

    def next_token(self):
        """Shift peek_token into cur_token and pull a new peek_token."""
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def parse_program(self) -> Program:
        """
        Parse statements until EOF.

        Returns:
            Program node; check errors() before trusting it
        """
        program = Program()

        while not self._cur_token_is(TokenType.EOF):
            errors_before = len(self.diagnostics)
            start = self.cur_token

            statement = self._parse_statement()
            if statement is not None:
                program.statements.append(statement)

            if len(self.diagnostics) > errors_before and self._synchronize(start):
                # Already standing on the next statement's first token
                continue

            self.next_token()

        if self.diagnostics:
            logger.debug("parsed %d statements with %d errors",
                         len(program.statements), len(self.diagnostics))
        return program

    # Statements

    def _parse_statement(self) -> Optional[Statement]:
        if self.cur_token.type == TokenType.LET:
            return self._parse_let_statement()
        elif self.cur_token.type == TokenType.RETURN:
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> Optional[LetStatement]:
        """let <identifier> = <expression>;"""
        statement = LetStatement(self.cur_token)

        if not self._expect_peek(TokenType.IDENTIFIER):
            return None

        statement.name = Identifier(self.cur_token, self.cur_token.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        statement.value = self.parse_expression(Precedence.LOWEST)

        if self._peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return statement

    def _parse_return_statement(self) -> ReturnStatement:
        """return <expression>;"""
        statement = ReturnStatement(self.cur_token)

        self.next_token()
        statement.return_value = self.parse_expression(Precedence.LOWEST)

        if self._peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return statement

    def _parse_expression_statement(self) -> ExpressionStatement:
        statement = ExpressionStatement(self.cur_token)
        statement.expression = self.parse_expression(Precedence.LOWEST)

        # Semicolon is optional so that `5 + 5` works in the REPL
        if self._peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return statement

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """
        Parse an expression whose operators bind tighter than `precedence`.

        Leaves cur_token on the last token of the expression.
        """
        prefix = self.prefix_parsers.get(self.cur_token.type)
        if prefix is None:
            self._record(create_missing_prefix_error(self.cur_token))
            return None

        left = prefix()

        while (not self._peek_token_is(TokenType.SEMICOLON)
               and precedence < self._peek_precedence()):
            infix = self.infix_parsers.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def _parse_integer_literal(self) -> Optional[IntegerLiteral]:
        token = self.cur_token
        try:
            value = int(token.literal, 10)
        except ValueError:
            value = None

        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self._record(create_integer_literal_error(token))
            return None

        return IntegerLiteral(token, value)

    def _parse_prefix_expression(self) -> PrefixExpression:
        expression = PrefixExpression(self.cur_token, self.cur_token.literal)

        self.next_token()
        expression.right = self.parse_expression(Precedence.PREFIX)

        return expression

    def _parse_infix_expression(self, left: Optional[Expression]) -> InfixExpression:
        expression = InfixExpression(self.cur_token, left, self.cur_token.literal)

        # Same precedence on the right keeps equal operators left associative
        precedence = self._cur_precedence()
        self.next_token()
        expression.right = self.parse_expression(precedence)

        return expression

    # Utility methods

    def _cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type == token_type

    def _peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def _expect_peek(self, token_type: TokenType) -> bool:
        """Advance if peek_token has the expected type, else record an error."""
        if self._peek_token_is(token_type):
            self.next_token()
            return True

        self._record(create_unexpected_token_error(token_type, self.peek_token))
        return False

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def _record(self, error: ParseError):
        self.diagnostics.append(error)
        logger.debug("parse error at %s: %s", error.location, error.message)

    def _synchronize(self, start: Token) -> bool:
        """
        Skip the rest of a broken statement that began at `start`.

        Returns True when cur_token is a later `let`/`return`, which the caller
        parses next without advancing. Otherwise stops with cur_token on ';' or
        EOF, or just before a statement start, and returns False so the
        caller's next_token() lands on a fresh start.
        """
        while True:
            if self.cur_token is not start and self.cur_token.type in STATEMENT_STARTS:
                return True
            if (self._cur_token_is(TokenType.SEMICOLON)
                    or self._cur_token_is(TokenType.EOF)
                    or self.peek_token.type in STATEMENT_STARTS):
                return False
            self.next_token()


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        Program AST

    Raises:
        ParseError: If any parse error was recorded (the first one)
    """
    parser = Parser(Lexer(source, filename))
    program = parser.parse_program()

    if parser.diagnostics:
        raise parser.diagnostics[0]

    return program


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        ParseError: If any parse error was recorded
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
