"""
Error handling for the scrapelang parser.

Syntax errors carry the offending token (line, column, lexeme) and a
human-readable expectation message. They are raised inside the parser and
caught at the declaration boundary, where SyntaxErrorRecovery decides how
far to skip.
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Raised when the parser cannot match the grammar at a token.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            title=PARSER_ERROR_CODES.get(code)
        )
        self.token = token

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def line(self) -> int:
        return self.diagnostic.location.line

    @property
    def column(self) -> int:
        return self.diagnostic.location.column

    @property
    def lexeme(self) -> str:
        return self.token.lexeme if self.token is not None else ""

    def report(self) -> str:
        """One-line form: [line L, column C] Error at 'x': message"""
        if self.token is not None and self.token.type == TokenType.EOF:
            where = "at end"
        else:
            where = f"at '{self.lexeme}'"
        return f"[line {self.line}, column {self.column}] Error {where}: {self.message}"

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Error recovery for the parser.

    After a failed declaration the parser discards tokens until the next
    point where an independent statement can begin.
    """

    # Token types that start a new statement
    STATEMENT_STARTS = frozenset({
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.FETCH,
        TokenType.SAVE,
        TokenType.PRINT,
    })

    @staticmethod
    def synchronize_to_statement_boundary(tokens: List[Token], current_pos: int) -> int:
        """
        Find where parsing should resume after an error at `current_pos`.

        At least one token is always discarded. Stops right after a
        semicolon, in front of a statement keyword, or at EOF.

        Returns the position to resume parsing from.
        """
        last = len(tokens) - 1
        if current_pos < last:
            current_pos += 1

        while current_pos < last:
            if tokens[current_pos - 1].type == TokenType.SEMICOLON:
                return current_pos

            if tokens[current_pos].type in SyntaxErrorRecovery.STATEMENT_STARTS:
                return current_pos

            current_pos += 1

        return current_pos

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.LEFT_PAREN: ["Add an opening parenthesis '('"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.COMMA: ["Separate the arguments with ','"],
            TokenType.IN: ["Write the loop header as 'for (item in items)'"],
        }

        return token_suggestions.get(expected, [])


# Parser error codes
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P006": "Invalid assignment target",
    "P013": "Nesting too deep",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: Union[TokenType, str], found: Token,
                                  message: Optional[str] = None) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    found_str = found.type.name

    suggestions = SyntaxErrorRecovery.suggest_missing_token(expected) if isinstance(expected, TokenType) else []

    return ParseError(
        message=message or f"Expected {expected_str}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=suggestions
    )


def create_invalid_expression_error(found: Token,
                                    message: str = "Expect expression.") -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        message=message,
        location=found.location,
        token=found,
        code="P005",
        help_text=f"'{found.lexeme}' cannot start an expression.",
        suggestions=["Check the expression syntax", "Ensure all operators have operands"]
    )


def create_invalid_assignment_error(equals: Token) -> ParseError:
    """Create an error for assigning to something that is not a variable."""
    return ParseError(
        message="Invalid assignment target.",
        location=equals.location,
        token=equals,
        code="P006",
        help_text="Only variables can appear on the left side of '='.",
        suggestions=["Use '==' for comparison"]
    )


def create_nesting_depth_error(found: Token, max_depth: int) -> ParseError:
    """Create an error for input nested deeper than the parser allows."""
    return ParseError(
        message="Expression nested too deeply.",
        location=found.location,
        token=found,
        code="P013",
        help_text=f"Nesting is limited to {max_depth} levels.",
        suggestions=["Split the expression into several variables"]
    )
