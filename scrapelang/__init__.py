"""
scrapelang Front End Package

Lexer and parser for scrapelang, a small scripting language for describing
web-scraping tasks: fetching a page, selecting elements, extracting text and
attributes, looping over results, filtering and saving.

Architecture:
    scrapelang/
    ├── lexer/           # Tokenization
    └── parser/          # Syntax analysis, AST, tree printer

Evaluation of the resulting AST is left to the caller.
"""

__version__ = "0.1.0"
__author__ = "scrapelang developers"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, filter_trivia, tokenize_string
from .parser import Parser, ParserConfig, ParseResult, ParseError, AstPrinter, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParserConfig",
    "ParseResult",
    "ParseError",
    "AstPrinter",
    "Token",
    "TokenType",

    # Convenience functions
    "filter_trivia",
    "tokenize_string",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
