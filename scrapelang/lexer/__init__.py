"""
scrapelang Lexer Package

Implements the tokenizer for the scrapelang web-scraping language.

Key Features:
- Character-scanning lexer with one-character lookahead
- Keyword table for control flow and scraping verbs
- Comments and whitespace emitted as trivia tokens, removed by filter_trivia()
- Never fails: unknown characters become UNKNOWN tokens
- Line/column tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, filter_trivia, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "LexerWarning",
    "filter_trivia",
    "tokenize_string",
    "tokenize_file",
]
