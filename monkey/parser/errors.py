"""
Error handling for the Monkey parser.

The parser records these instead of raising them so that one run reports as
many problems as it can find. Each error keeps the message shown by
Parser.errors() plus a Diagnostic with code and location for richer output.
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    A syntax problem found while parsing.

    `message` is the short human-readable text; str() gives the full
    diagnostic with location, help and suggestions.
    """

    code = "P000"

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=self.code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnexpectedTokenError(ParseError):
    """A required token kind was not the next token."""
    code = "P001"

    def __init__(self, expected: TokenType, found: Token, **kwargs):
        self.expected = expected
        self.found = found.type
        super().__init__(
            f"expected next token to be {expected.name}, got {found.type.name} instead",
            found.location,
            token=found,
            **kwargs
        )


class MissingPrefixParserError(ParseError):
    """A token kind started an expression but has no prefix handler."""
    code = "P002"


class IntegerLiteralError(ParseError):
    """Integer literal text could not be turned into a signed 64-bit value."""
    code = "P003"


class IllegalTokenError(ParseError):
    """The lexer produced an ILLEGAL token where an expression should start."""
    code = "P004"


_MISSING_TOKEN_SUGGESTIONS = {
    TokenType.IDENTIFIER: ["Add a name after 'let'"],
    TokenType.ASSIGN: ["Add an assignment operator '='"],
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: TokenType, found: Token) -> UnexpectedTokenError:
    """Create an error for a peek token of the wrong kind."""
    return UnexpectedTokenError(
        expected,
        found,
        help_text=f"The parser expected to see {expected.name} at this position, "
                  f"but found {found.type.name} instead.",
        suggestions=_MISSING_TOKEN_SUGGESTIONS.get(expected, [])
    )


def create_missing_prefix_error(token: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    if token.type == TokenType.ILLEGAL:
        return IllegalTokenError(
            f"illegal token {token.literal!r} found",
            token.location,
            token=token,
            help_text="The lexer could not match this character to any token."
        )

    return MissingPrefixParserError(
        f"no prefix parse function for {token.type.name} found",
        token.location,
        token=token,
        help_text=f"{token.type.name} cannot start an expression.",
        suggestions=["Check for a missing operand"]
    )


def create_integer_literal_error(token: Token) -> IntegerLiteralError:
    """Create an error for integer text that does not fit in 64 bits."""
    return IntegerLiteralError(
        f"could not parse {token.literal!r} as integer",
        token.location,
        token=token,
        help_text="Integer literals must fit in a signed 64-bit integer."
    )
