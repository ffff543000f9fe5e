"""
scrapelang Parser Package

Implements the recursive descent parser for the scrapelang web-scraping
language and the AST it produces.

Key Features:
- One routine per grammar rule, nested precedence levels for operators
- Left-associative binary operators, right-associative assignment
- `select(...)` and `.method()` call chains
- Immutable, closed AST hierarchies with an exhaustive visitor interface
- Error recovery by synchronizing to the next statement
"""

from .ast_nodes import *
from .parser import Parser, ParserConfig, ParseResult, parse_string, parse_file
from .errors import ParseError
from .ast_printer import AstPrinter

__all__ = [
    # Core parser
    "Parser",
    "ParserConfig",
    "ParseResult",
    "parse_string",
    "parse_file",

    # AST nodes
    "ASTNode", "ASTVisitor", "Expression", "Statement",
    "Binary", "Grouping", "Literal", "Variable", "Unary", "Call", "PropertyAccess",
    "ExpressionStatement", "If", "For", "Block", "VarDecl", "Fetch", "Save", "Print",
    "walk",

    # Debug output
    "AstPrinter",

    # Error handling
    "ParseError",
]
