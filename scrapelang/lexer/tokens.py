"""
Token definitions for the scrapelang lexer.

This module defines all token types of the scraping language:
- Keywords (var, if, else, for, in)
- Scraping verbs (fetch, select, xpath, text, attr, html, save, print)
- Literals (identifiers, strings, numbers, booleans)
- Operators and punctuation
- Structural tokens (comments, whitespace, EOF, unknown characters)
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in scrapelang.

    The set is closed; the parser never sees anything outside of it.
    """

    # ========================================================================
    # Keywords
    # ========================================================================
    VAR = auto()                    # var
    IF = auto()                     # if
    ELSE = auto()                   # else
    FOR = auto()                    # for
    IN = auto()                     # in

    # ========================================================================
    # Scraping verbs
    # ========================================================================
    FETCH = auto()                  # fetch
    SELECT = auto()                 # select
    XPATH = auto()                  # xpath
    TEXT = auto()                   # text
    ATTR = auto()                   # attr
    HTML = auto()                   # html
    SAVE = auto()                   # save
    PRINT = auto()                  # print

    # ========================================================================
    # Literals
    # ========================================================================
    IDENTIFIER = auto()             # products, _tmp1
    STRING = auto()                 # "https://example.com"
    NUMBER = auto()                 # 42, 3.14, .5
    BOOLEAN = auto()                # true, false

    # ========================================================================
    # Operators
    # ========================================================================
    EQUALS = auto()                 # =
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    GREATER = auto()                # >
    LESS = auto()                   # <
    GREATER_EQUAL = auto()          # >=
    LESS_EQUAL = auto()             # <=
    EQUAL_EQUAL = auto()            # ==
    NOT_EQUAL = auto()              # !=
    AND = auto()                    # &&
    OR = auto()                     # ||
    NOT = auto()                    # !

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    SEMICOLON = auto()              # ;
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    DOLLAR = auto()                 # $

    # ========================================================================
    # Structural tokens
    # ========================================================================
    COMMENT = auto()                # // line, /* block */
    WHITESPACE = auto()             # spaces, tabs, newlines
    EOF = auto()                    # End of file
    UNKNOWN = auto()                # Unrecognized character


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Line and column are 1-based; offset is the 0-based character index
    into the source string.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, the exact lexeme, its semantic value
    and the location of the lexeme's first character.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # float for NUMBER, unquoted str for STRING, ...
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword or scraping verb."""
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator."""
        return self.type in OPERATOR_TYPES

    @property
    def is_trivia(self) -> bool:
        """Comments and whitespace never reach the parser."""
        return self.type in TRIVIA_TYPES


# Keyword table; identifiers are looked up here by exact match
KEYWORDS = {
    # Control flow and declarations
    "var": TokenType.VAR,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "in": TokenType.IN,

    # Scraping verbs
    "fetch": TokenType.FETCH,
    "select": TokenType.SELECT,
    "xpath": TokenType.XPATH,
    "text": TokenType.TEXT,
    "attr": TokenType.ATTR,
    "html": TokenType.HTML,
    "save": TokenType.SAVE,
    "print": TokenType.PRINT,

    # Boolean literals
    "true": TokenType.BOOLEAN,
    "false": TokenType.BOOLEAN,
}

# Single-character tokens that never need lookahead
SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "$": TokenType.DOLLAR,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
}

# Characters whose meaning depends on the next character.
# Maps first char -> (second char, two-char type, one-char type or None)
TWO_CHAR_OPERATORS = {
    "=": ("=", TokenType.EQUAL_EQUAL, TokenType.EQUALS),
    "!": ("=", TokenType.NOT_EQUAL, TokenType.NOT),
    "<": ("=", TokenType.LESS_EQUAL, TokenType.LESS),
    ">": ("=", TokenType.GREATER_EQUAL, TokenType.GREATER),
    "&": ("&", TokenType.AND, None),
    "|": ("|", TokenType.OR, None),
}

KEYWORD_TYPES = frozenset({
    TokenType.VAR, TokenType.IF, TokenType.ELSE, TokenType.FOR, TokenType.IN,
    TokenType.FETCH, TokenType.SELECT, TokenType.XPATH, TokenType.TEXT,
    TokenType.ATTR, TokenType.HTML, TokenType.SAVE, TokenType.PRINT,
})

LITERAL_TYPES = frozenset({
    TokenType.STRING, TokenType.NUMBER, TokenType.BOOLEAN,
})

OPERATOR_TYPES = frozenset({
    TokenType.EQUALS, TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY,
    TokenType.DIVIDE, TokenType.GREATER, TokenType.LESS,
    TokenType.GREATER_EQUAL, TokenType.LESS_EQUAL, TokenType.EQUAL_EQUAL,
    TokenType.NOT_EQUAL, TokenType.AND, TokenType.OR, TokenType.NOT,
})

TRIVIA_TYPES = frozenset({TokenType.COMMENT, TokenType.WHITESPACE})

WHITESPACE_CHARS = frozenset(" \t\r\n")
