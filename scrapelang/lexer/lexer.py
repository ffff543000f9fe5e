"""
scrapelang Lexer - turns script source into tokens

Single cursor, one character at a time. Each token kind gets its own small
scanner; two-character operators are resolved with one character of
lookahead. The lexer never raises: anything it cannot classify becomes an
UNKNOWN token and the parser reports it with a position.

Comments and whitespace come out as COMMENT / WHITESPACE tokens so tools can
see them. Run filter_trivia() before handing tokens to the parser.
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, SINGLE_CHAR_TOKENS,
    TWO_CHAR_OPERATORS, TRIVIA_TYPES, WHITESPACE_CHARS
)
from .errors import (
    LexerWarning, create_unknown_character_warning,
    create_unterminated_string_warning, create_unterminated_comment_warning
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    scrapelang lexical analyzer.

    Converts source text into a list of tokens terminated by exactly one
    EOF token. All cursor state lives on the instance and is reset by each
    call to tokenize().
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Script source text
            filename: Name of source file for diagnostics
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.warnings: List[LexerWarning] = []

        # Start of the lexeme currently being scanned
        self._start = 0
        self._start_line = 1
        self._start_column = 1

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source, trivia included.

        Returns:
            List of tokens ending with EOF
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self.warnings = []

        while not self._is_at_end():
            self._start = self.pos
            self._start_line = self.line
            self._start_column = self.column
            self._scan_token()

        eof_location = SourceLocation(self.filename, self.line, self.column, self.pos)
        self.tokens.append(Token(TokenType.EOF, "", None, eof_location))

        logger.debug(f"Tokenized {self.filename}: {len(self.tokens)} tokens, "
                     f"{len(self.warnings)} warnings")
        return self.tokens

    def _scan_token(self):
        c = self._advance()

        # A leading dot followed by a digit is a number (.5), not a DOT
        if c == '.' and self._is_digit(self._peek()):
            self._number()
            return

        token_type = SINGLE_CHAR_TOKENS.get(c)
        if token_type is not None:
            self._add_token(token_type)
            return

        if c in TWO_CHAR_OPERATORS:
            second, double_type, single_type = TWO_CHAR_OPERATORS[c]
            if self._match(second):
                self._add_token(double_type)
            elif single_type is not None:
                self._add_token(single_type)
            else:
                # Lone '&' or '|'
                self._unknown(c)
            return

        if c == '/':
            if self._match('/'):
                self._line_comment()
            elif self._match('*'):
                self._block_comment()
            else:
                self._add_token(TokenType.DIVIDE)
        elif c == '"':
            self._string()
        elif c in WHITESPACE_CHARS:
            self._whitespace()
        elif self._is_digit(c):
            self._number()
        elif self._is_alpha(c):
            self._identifier()
        else:
            self._unknown(c)

    def _line_comment(self):
        """Skip to end of line; the newline itself is whitespace."""
        while self._peek() != '\n' and not self._is_at_end():
            self._advance()
        self._add_token(TokenType.COMMENT)

    def _block_comment(self):
        """Consume up to the closing */, or to end of input if there is none."""
        while not (self._peek() == '*' and self._peek_next() == '/') and not self._is_at_end():
            self._advance()

        if self._is_at_end():
            self._warn(create_unterminated_comment_warning(self._start_location()))
        else:
            self._advance()
            self._advance()

        self._add_token(TokenType.COMMENT)

    def _whitespace(self):
        while self._peek() in WHITESPACE_CHARS and not self._is_at_end():
            self._advance()
        self._add_token(TokenType.WHITESPACE)

    def _string(self):
        """
        Scan a string literal.

        No escapes are interpreted, but a backslash always takes the next
        character with it so that \\" does not end the string.
        """
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == '\\' and self.pos + 1 < len(self.source):
                self._advance()
            self._advance()

        if self._is_at_end():
            # Tolerated: the malformed string produces no token
            self._warn(create_unterminated_string_warning(self._start_location()))
            return

        self._advance()  # Closing quote

        value = self.source[self._start + 1:self.pos - 1]
        self._add_token(TokenType.STRING, value)

    def _number(self):
        """Scan digits with an optional fractional part. No sign, no exponent."""
        if self.source[self._start] != '.':
            while self._is_digit(self._peek()):
                self._advance()

            if self._peek() == '.' and self._is_digit(self._peek_next()):
                self._advance()  # Consume the .

        while self._is_digit(self._peek()):
            self._advance()

        lexeme = self.source[self._start:self.pos]
        self._add_token(TokenType.NUMBER, float(lexeme))

    def _identifier(self):
        while self._is_alphanumeric(self._peek()):
            self._advance()

        text = self.source[self._start:self.pos]
        token_type = KEYWORDS.get(text, TokenType.IDENTIFIER)

        if token_type == TokenType.BOOLEAN:
            value = text == "true"
        elif token_type == TokenType.IDENTIFIER:
            value = text
        else:
            value = None

        self._add_token(token_type, value)

    def _unknown(self, char: str):
        self._warn(create_unknown_character_warning(char, self._start_location()))
        self._add_token(TokenType.UNKNOWN)

    # Cursor helpers

    def _advance(self) -> str:
        """Consume one character, updating line/column."""
        char = self.source[self.pos]
        self.pos += 1
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _match(self, expected: str) -> bool:
        if self._is_at_end() or self.source[self.pos] != expected:
            return False
        self._advance()
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return '\0'
        return self.source[self.pos]

    def _peek_next(self) -> str:
        if self.pos + 1 >= len(self.source):
            return '\0'
        return self.source[self.pos + 1]

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _start_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._start_line, self._start_column, self._start)

    def _add_token(self, token_type: TokenType, value=None):
        lexeme = self.source[self._start:self.pos]
        self.tokens.append(Token(token_type, lexeme, value, self._start_location()))

    def _warn(self, warning: LexerWarning):
        self.warnings.append(warning)
        location = warning.location
        logger.warning(f"[line {location.line}, column {location.column}] "
                       f"{warning.diagnostic.message}")

    @staticmethod
    def _is_digit(char: str) -> bool:
        return '0' <= char <= '9'

    @staticmethod
    def _is_alpha(char: str) -> bool:
        return ('a' <= char <= 'z') or ('A' <= char <= 'Z') or char == '_'

    @classmethod
    def _is_alphanumeric(cls, char: str) -> bool:
        return cls._is_alpha(char) or cls._is_digit(char)

    def has_warnings(self) -> bool:
        """Check if the lexer recorded any warnings."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[LexerWarning]:
        """Get all diagnostics recorded by the last tokenize() call."""
        return list(self.warnings)


def filter_trivia(tokens: List[Token]) -> List[Token]:
    """Drop COMMENT and WHITESPACE tokens; the parser must never see them."""
    return [token for token in tokens if token.type not in TRIVIA_TYPES]


def tokenize_string(source: str, filename: str = "<string>",
                    warnings: Optional[List[LexerWarning]] = None) -> List[Token]:
    """
    Convenience function to tokenize a source string for parsing.

    Args:
        source: Script source text
        filename: Filename for diagnostics
        warnings: Optional list that receives the lexer warnings

    Returns:
        List of tokens with trivia removed, ending with EOF
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if warnings is not None:
        warnings.extend(lexer.warnings)

    return filter_trivia(tokens)


def tokenize_file(filepath: str,
                  warnings: Optional[List[LexerWarning]] = None) -> List[Token]:
    """
    Convenience function to tokenize a script file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath, warnings)
