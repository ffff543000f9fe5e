"""
Diagnostics for the scrapelang lexer.

The lexer never fails: malformed input degrades into UNKNOWN tokens or is
dropped, and the problem is recorded as a warning with its source location.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None
    title: Optional[str] = None

    def __str__(self) -> str:
        header = self.severity.upper()
        if self.code:
            header += f"[{self.code}]"
        if self.title:
            header += f" {self.title}"
        result = f"{header}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerWarning:
    """
    Represents a lexical problem that does not stop tokenization.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            title=LEXER_WARNING_CODES.get(code)
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"LexerWarning({self.diagnostic.message!r}, {self.diagnostic.location!r})"


LEXER_WARNING_CODES = {
    "L001": "Unknown character",
    "L002": "Unterminated string literal",
    "L003": "Unterminated block comment",
}


def create_unknown_character_warning(char: str, location: SourceLocation) -> LexerWarning:
    """Create a warning for a character no token starts with."""
    if char in "&|":
        help_text = f"Use '{char}{char}' for the logical operator."
        suggestions = [f"{char}{char}"]
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in scrapelang source code."
        suggestions = None
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."
        suggestions = None

    return LexerWarning(
        message=f"Unknown character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_unterminated_string_warning(location: SourceLocation) -> LexerWarning:
    """Create a warning for a string literal that runs to end of input."""
    return LexerWarning(
        message="Unterminated string literal",
        location=location,
        code="L002",
        help_text="String literals must be closed with a matching '\"'. No token was produced.",
        suggestions=["Add a closing '\"' quote"]
    )


def create_unterminated_comment_warning(location: SourceLocation) -> LexerWarning:
    """Create a warning for a block comment without its closing '*/'."""
    return LexerWarning(
        message="Unterminated block comment",
        location=location,
        code="L003",
        help_text="The comment consumed the rest of the input.",
        suggestions=["Add a closing '*/'"]
    )
