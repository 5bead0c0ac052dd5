"""
Monkey Front End Package

Lexer and Pratt parser for the Monkey scripting language: source text goes
in, an abstract syntax tree plus a list of diagnostics comes out.

Architecture:
    monkey/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and AST generation
    ├── config.py        # REPL configuration
    └── repl.py          # Interactive read-loop and console entry point
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType
from .parser import Parser, Program, parse_string

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "Program",
    "parse_string",

    # Version info
    "__version__",
    "__license__",
]
