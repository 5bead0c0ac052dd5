"""
Monkey Lexer Package

Pull-based lexical analyzer for the Monkey language. Tokens are produced on
demand with one character of lookahead.

Key Features:
- Keyword recognition from a fixed table
- Two-character operators (==, !=)
- Illegal characters become ILLEGAL tokens instead of stopping the scan
- Source location tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
