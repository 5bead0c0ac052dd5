"""
Token definitions for the Monkey lexer.

This module defines every token type the language knows about:
- Keywords (fn, let, true, false, if, else, return)
- Operators (one and two characters)
- Literals (integers) and identifiers
- Punctuation and delimiters

The lookup tables at the bottom are shared by every Lexer instance and are
never mutated after import.
"""

from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    """
    Enumeration of all token types in Monkey.

    Organized by category, same order as the lexer checks them.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    ILLEGAL = auto()                # Unrecognized character
    EOF = auto()                    # End of input

    # ========================================================================
    # Identifiers and Literals
    # ========================================================================
    IDENTIFIER = auto()             # add, foobar, x, y
    INTEGER = auto()                # 1343456

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = auto()                 # =
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    LOGICAL_NOT = auto()            # !
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /

    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    COMMA = auto()                  # ,
    SEMICOLON = auto()              # ;

    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }

    # ========================================================================
    # Keywords
    # ========================================================================
    FN = auto()                     # fn
    LET = auto()                    # let
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    IF = auto()                     # if
    ELSE = auto()                   # else
    RETURN = auto()                 # return


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Only used for diagnostics; two tokens with the same type and literal are
    the same token as far as the parser is concerned.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


UNKNOWN_LOCATION = SourceLocation("<unknown>", 0, 0, 0)


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Monkey language.

    Holds the token type and the exact source text it was read from.
    """
    type: TokenType
    literal: str
    location: SourceLocation = UNKNOWN_LOCATION

    def __str__(self) -> str:
        return f"{self.type.name}({self.literal!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r}, {self.location!r})"

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator."""
        return self.type in OPERATOR_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer for keyword/operator recognition

KEYWORDS = {
    "fn": TokenType.FN,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

SINGLE_CHAR_TOKENS = {
    # Operators
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.LOGICAL_NOT,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,

    # Delimiters
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
}

# Only '=' and '!' can start a two-character operator, and only with '='
TWO_CHAR_OPERATORS = {
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
}

KEYWORD_TYPES = frozenset(KEYWORDS.values())

OPERATOR_TYPES = frozenset({
    TokenType.ASSIGN, TokenType.PLUS, TokenType.MINUS, TokenType.LOGICAL_NOT,
    TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.LESS_THAN,
    TokenType.GREATER_THAN, TokenType.EQUAL, TokenType.NOT_EQUAL,
})


def lookup_identifier(name: str) -> TokenType:
    """Return the keyword type for `name`, or IDENTIFIER for user names."""
    return KEYWORDS.get(name, TokenType.IDENTIFIER)
