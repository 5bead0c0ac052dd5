"""
Error handling for the Monkey lexer.

The lexer never stops on bad input: an unrecognized character becomes an
ILLEGAL token and a LexerError is recorded next to it. These records carry
the same Diagnostic payload the parser uses, so both stages print alike.
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    A lexical problem found while scanning.

    Recorded on the lexer rather than raised; `tokenize_string` is the only
    place that raises one.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Characters people tend to type from other languages
_CHARACTER_HINTS = {
    "&": ["Monkey has no '&' operator"],
    "|": ["Monkey has no '|' operator"],
    "%": ["Monkey has no modulo operator, use a - (a / b) * b"],
    '"': ["String literals are not supported"],
    "'": ["String literals are not supported"],
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character no token rule accepts."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Monkey source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=_CHARACTER_HINTS.get(char, [])
    )
