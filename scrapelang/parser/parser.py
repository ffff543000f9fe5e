"""
scrapelang Recursive Descent Parser

One method per grammar rule. Binary operators are parsed by nested
precedence levels, lowest binding first:

    assignment -> or -> and -> equality -> comparison -> term -> factor
    -> unary -> call -> primary

Every binary level folds left, so `a - b - c` is `(a - b) - c`. Assignment
recurses on its right side and is therefore right-associative.

Syntax errors are raised as ParseError and caught in exactly one place,
_declaration(). There the error is recorded and the parser skips ahead to
the next statement boundary, so one malformed statement yields one
diagnostic and parsing continues with the rest of the program.
"""

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.lexer import filter_trivia
from ..lexer.errors import LexerWarning
from .ast_nodes import (
    Expression, Statement, Binary, Grouping, Literal, Variable, Unary, Call,
    PropertyAccess, ExpressionStatement, If, For, Block, VarDecl, Fetch,
    Save, Print
)
from .errors import (
    ParseError, SyntaxErrorRecovery, create_unexpected_token_error,
    create_invalid_expression_error, create_invalid_assignment_error,
    create_nesting_depth_error
)

logger = logging.getLogger(__name__)


# Tokens allowed as a property name after '.', e.g. `product.select(...)`
PROPERTY_NAME_TYPES = (
    TokenType.IDENTIFIER,
    TokenType.SELECT,
    TokenType.XPATH,
    TokenType.TEXT,
    TokenType.ATTR,
    TokenType.HTML,
)


@dataclass(frozen=True)
class ParserConfig:
    """
    Parser settings.

    max_depth bounds how deeply expressions and statements may nest.
    Each level costs roughly a dozen Python frames, so the default stays
    well inside the interpreter's recursion limit.
    """
    max_depth: int = 50
    filename: str = "<unknown>"


class ParseResult(NamedTuple):
    """Statements that parsed, plus everything reported along the way."""
    statements: List[Statement]
    errors: List[ParseError]
    warnings: List[LexerWarning]

    @property
    def ok(self) -> bool:
        return not self.errors


class Parser:
    """
    scrapelang parser.

    Consumes a token list (trivia is dropped on construction) and produces
    the list of top-level statements. parse() never raises ParseError;
    failures end up in `errors`.
    """

    def __init__(self, tokens: List[Token], config: Optional[ParserConfig] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer, with or without trivia
            config: Optional parser settings
        """
        self.config = config or ParserConfig()
        self.tokens = filter_trivia(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            self.tokens.append(self._synthetic_eof())

        self.current = 0
        self.errors: List[ParseError] = []
        self._depth = 0

    def parse(self) -> List[Statement]:
        """
        Parse the token stream into a list of statements.

        Returns:
            Statements that parsed successfully, in source order
        """
        self.current = 0
        self.errors = []
        self._depth = 0

        statements = []
        while not self._is_at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)

        logger.debug(f"Parsed {len(statements)} statements with {len(self.errors)} errors")
        return statements

    # ------------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------------

    def _declaration(self) -> Optional[Statement]:
        """Parse a declaration; on a syntax error, report it and synchronize."""
        try:
            if self._match(TokenType.VAR):
                return self._var_declaration()
            return self._statement()
        except ParseError as e:
            self._report(e)
            self.current = SyntaxErrorRecovery.synchronize_to_statement_boundary(
                self.tokens, self.current
            )
            return None

    def _var_declaration(self) -> VarDecl:
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenType.EQUALS):
            initializer = self._expression()

        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name, initializer)

    def _statement(self) -> Statement:
        self._enter()
        try:
            if self._match(TokenType.IF):
                return self._if_statement()
            if self._match(TokenType.FOR):
                return self._for_statement()
            if self._match(TokenType.LEFT_BRACE):
                return Block(self._block())
            if self._match(TokenType.FETCH):
                return self._fetch_statement()
            if self._match(TokenType.SAVE):
                return self._save_statement()
            if self._match(TokenType.PRINT):
                return self._print_statement()
            return self._expression_statement()
        finally:
            self._leave()

    def _if_statement(self) -> If:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        # The inner statement takes any 'else' it can, so a dangling
        # else binds to the nearest if
        then_branch = self._statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._statement()

        return If(condition, then_branch, else_branch)

    def _for_statement(self) -> For:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")
        variable = self._consume(TokenType.IDENTIFIER, "Expect variable name in for loop.")
        self._consume(TokenType.IN, "Expect 'in' after variable name in for loop.")
        iterable = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for loop header.")

        body = self._statement()
        return For(variable, iterable, body)

    def _block(self) -> tuple:
        statements = []

        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)

        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return tuple(statements)

    def _fetch_statement(self) -> Fetch:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'fetch'.")
        url = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after URL.")
        self._consume(TokenType.SEMICOLON, "Expect ';' after fetch statement.")
        return Fetch(url)

    def _save_statement(self) -> Save:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'save'.")
        data = self._expression()
        self._consume(TokenType.COMMA, "Expect ',' after data expression.")
        filename = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after filename.")
        self._consume(TokenType.SEMICOLON, "Expect ';' after save statement.")
        return Save(data, filename)

    def _print_statement(self) -> Print:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'print'.")
        value = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
        self._consume(TokenType.SEMICOLON, "Expect ';' after print statement.")
        return Print(value)

    def _expression_statement(self) -> ExpressionStatement:
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStatement(expr)

    # ------------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------------

    def _expression(self) -> Expression:
        self._enter()
        try:
            return self._assignment()
        finally:
            self._leave()

    def _assignment(self) -> Expression:
        expr = self._or()

        if self._match(TokenType.EQUALS):
            equals = self._previous()
            self._enter()
            try:
                value = self._assignment()
            finally:
                self._leave()

            if isinstance(expr, Variable):
                return Binary(expr, equals, value)

            raise create_invalid_assignment_error(equals)

        return expr

    def _or(self) -> Expression:
        expr = self._and()

        while self._match(TokenType.OR):
            operator = self._previous()
            right = self._and()
            expr = Binary(expr, operator, right)

        return expr

    def _and(self) -> Expression:
        expr = self._equality()

        while self._match(TokenType.AND):
            operator = self._previous()
            right = self._equality()
            expr = Binary(expr, operator, right)

        return expr

    def _equality(self) -> Expression:
        expr = self._comparison()

        while self._match(TokenType.EQUAL_EQUAL, TokenType.NOT_EQUAL):
            operator = self._previous()
            right = self._comparison()
            expr = Binary(expr, operator, right)

        return expr

    def _comparison(self) -> Expression:
        expr = self._term()

        while self._match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                          TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self._previous()
            right = self._term()
            expr = Binary(expr, operator, right)

        return expr

    def _term(self) -> Expression:
        expr = self._factor()

        while self._match(TokenType.PLUS, TokenType.MINUS):
            operator = self._previous()
            right = self._factor()
            expr = Binary(expr, operator, right)

        return expr

    def _factor(self) -> Expression:
        expr = self._unary()

        while self._match(TokenType.MULTIPLY, TokenType.DIVIDE):
            operator = self._previous()
            right = self._unary()
            expr = Binary(expr, operator, right)

        return expr

    def _unary(self) -> Expression:
        if self._match(TokenType.NOT, TokenType.MINUS):
            operator = self._previous()
            self._enter()
            try:
                operand = self._unary()
            finally:
                self._leave()
            return Unary(operator, operand)

        return self._call()

    def _call(self) -> Expression:
        expr = self._primary()

        while True:
            if self._match(TokenType.LEFT_PAREN):
                expr = self._finish_call(expr)
            elif self._match(TokenType.DOT):
                if not self._check(*PROPERTY_NAME_TYPES):
                    raise create_unexpected_token_error(
                        "property name", self._peek(), "Expect property name after '.'."
                    )
                expr = PropertyAccess(expr, self._advance())
            else:
                break

        return expr

    def _finish_call(self, callee: Expression) -> Call:
        arguments = []

        if not self._check(TokenType.RIGHT_PAREN):
            arguments.append(self._expression())
            while self._match(TokenType.COMMA):
                arguments.append(self._expression())

        paren = self._consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def _primary(self) -> Expression:
        if self._match(TokenType.BOOLEAN, TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().value)

        if self._match(TokenType.IDENTIFIER):
            return Variable(self._previous())

        if self._match(TokenType.SELECT):
            # select(...) at expression start is an ordinary call to "select"
            keyword = self._previous()
            self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'select'.")
            selector = self._expression()
            paren = self._consume(TokenType.RIGHT_PAREN, "Expect ')' after selector.")
            return Call(Variable(keyword), paren, (selector,))

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise create_invalid_expression_error(self._peek())

    # ------------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------------

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        if self._check(*token_types):
            self._advance()
            return True
        return False

    def _check(self, *token_types: TokenType) -> bool:
        """Check the current token's type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type in token_types

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()

        raise create_unexpected_token_error(token_type, self._peek(), message)

    def _enter(self):
        self._depth += 1
        if self._depth > self.config.max_depth:
            self._depth -= 1
            raise create_nesting_depth_error(self._peek(), self.config.max_depth)

    def _leave(self):
        self._depth -= 1

    def _report(self, error: ParseError):
        self.errors.append(error)
        logger.warning(error.report())

    def _synthetic_eof(self) -> Token:
        if self.tokens:
            last = self.tokens[-1]
            location = SourceLocation(
                last.location.filename,
                last.location.line,
                last.location.column + len(last.lexeme),
                last.location.offset + len(last.lexeme)
            )
        else:
            location = SourceLocation(self.config.filename, 1, 1, 0)
        return Token(TokenType.EOF, "", None, location)

    def has_errors(self) -> bool:
        """Check if parser encountered any errors."""
        return len(self.errors) > 0

    def get_diagnostics(self) -> List[ParseError]:
        """Get all errors from the last parse() call."""
        return list(self.errors)


def parse_string(source: str, filename: str = "<string>",
                 config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Convenience function to lex and parse a source string.

    Args:
        source: Script source text
        filename: Filename for diagnostics
        config: Optional parser settings

    Returns:
        ParseResult with the statements, parse errors and lexer warnings
    """
    from ..lexer import tokenize_string

    warnings: List[LexerWarning] = []
    tokens = tokenize_string(source, filename, warnings)
    parser = Parser(tokens, config)
    statements = parser.parse()
    return ParseResult(statements, parser.errors, warnings)


def parse_file(filepath: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Convenience function to lex and parse a script file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath, config)
