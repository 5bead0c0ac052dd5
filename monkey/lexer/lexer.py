"""
Monkey Lexer - turns source text into tokens, one at a time.

The lexer is pull-based: the parser asks for the next token and the lexer
reads just enough characters to produce it. There is exactly one character
of lookahead (peek_char), which is all the two-character operators need.
"""

import logging
from typing import Iterator, List

from .tokens import (
    Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS, TWO_CHAR_OPERATORS,
    lookup_identifier
)
from .errors import LexerError, create_invalid_character_error

logger = logging.getLogger(__name__)

# Current character once the cursor has run past the input
NUL = "\0"

WHITESPACE = frozenset(" \t\n\r")


def is_letter(ch: str) -> bool:
    """ASCII letters and underscore start and continue identifiers."""
    return "a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """
    Monkey lexical analyzer.

    Keeps three cursors over the source: `position` (index of `ch`),
    `read_position` (index of the next character) and `ch` itself.
    `read_char` is the only method that moves them.
    """

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer and load the first character.

        Args:
            source: Source code string
            filename: Name used in diagnostics
        """
        self.source = source
        self.filename = filename
        self.position = 0
        self.read_position = 0
        self.ch = NUL
        self.line = 1
        self.column = 0
        self.errors: List[LexerError] = []

        self.read_char()

    @property
    def at_end(self) -> bool:
        """True once the cursor has moved past the last character."""
        return self.position >= len(self.source)

    def read_char(self):
        """Load the next character into `ch` and advance both cursors."""
        if self.ch == "\n":
            self.line += 1
            self.column = 0

        if self.read_position >= len(self.source):
            self.ch = NUL
        else:
            self.ch = self.source[self.read_position]

        self.position = self.read_position
        self.read_position += 1
        self.column += 1

    def peek_char(self) -> str:
        """Look at the next character without advancing."""
        if self.read_position >= len(self.source):
            return NUL
        return self.source[self.read_position]

    def next_token(self) -> Token:
        """
        Return the next token and advance past it.

        Once the input is exhausted every call returns an EOF token and the
        cursors stay where they are.
        """
        self._skip_whitespace()

        location = self._location()

        if self.at_end:
            return Token(TokenType.EOF, "", location)

        ch = self.ch

        two_chars = ch + self.peek_char()
        if two_chars in TWO_CHAR_OPERATORS:
            self.read_char()
            token = Token(TWO_CHAR_OPERATORS[two_chars], two_chars, location)
        elif ch in SINGLE_CHAR_TOKENS:
            token = Token(SINGLE_CHAR_TOKENS[ch], ch, location)
        elif is_letter(ch):
            # _read_identifier leaves the cursor on the first non-letter
            literal = self._read_identifier()
            return Token(lookup_identifier(literal), literal, location)
        elif is_digit(ch):
            return Token(TokenType.INTEGER, self._read_number(), location)
        else:
            token = self._illegal(ch, location)

        self.read_char()
        return token

    def tokenize(self) -> List[Token]:
        """
        Pull every remaining token.

        Returns:
            List of tokens ending with the EOF token
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _illegal(self, ch: str, location: SourceLocation) -> Token:
        error = create_invalid_character_error(ch, location)
        self.errors.append(error)
        logger.debug("illegal character %r at %s", ch, location)
        return Token(TokenType.ILLEGAL, ch, location)

    def _read_identifier(self) -> str:
        return self._read_while(is_letter)

    def _read_number(self) -> str:
        return self._read_while(is_digit)

    def _read_while(self, predicate) -> str:
        """Advance while `predicate(ch)` holds and return the text spanned."""
        start = self.position
        while not self.at_end and predicate(self.ch):
            self.read_char()
        return self.source[start:self.position]

    def _skip_whitespace(self):
        while not self.at_end and self.ch in WHITESPACE:
            self.read_char()

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.position)

    def has_errors(self) -> bool:
        """Check if the lexer met any illegal characters so far."""
        return len(self.errors) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If the source contains an illegal character
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If the file contains an illegal character
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
