"""
Abstract Syntax Tree node definitions for scrapelang.

Two closed hierarchies: Expression and Statement. Nodes are frozen
dataclasses, so a tree cannot change once the parser has built it; child
sequences are stored as tuples. Operator and name tokens are kept as-is so
consumers can cite exact lexemes and positions.

Every node supports the visitor pattern. ASTVisitor declares one abstract
method per node class, so a visitor that forgets a variant cannot be
instantiated.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass

from ..lexer.tokens import Token


LiteralValue = Union[str, float, bool, None]


class ASTVisitor(ABC):
    """Visitor interface with one method per node class."""

    def visit(self, node: 'ASTNode') -> Any:
        return node.accept(self)

    # Expressions

    @abstractmethod
    def visit_binary(self, node: 'Binary') -> Any:
        pass

    @abstractmethod
    def visit_grouping(self, node: 'Grouping') -> Any:
        pass

    @abstractmethod
    def visit_literal(self, node: 'Literal') -> Any:
        pass

    @abstractmethod
    def visit_variable(self, node: 'Variable') -> Any:
        pass

    @abstractmethod
    def visit_unary(self, node: 'Unary') -> Any:
        pass

    @abstractmethod
    def visit_call(self, node: 'Call') -> Any:
        pass

    @abstractmethod
    def visit_property_access(self, node: 'PropertyAccess') -> Any:
        pass

    # Statements

    @abstractmethod
    def visit_expression_statement(self, node: 'ExpressionStatement') -> Any:
        pass

    @abstractmethod
    def visit_if(self, node: 'If') -> Any:
        pass

    @abstractmethod
    def visit_for(self, node: 'For') -> Any:
        pass

    @abstractmethod
    def visit_block(self, node: 'Block') -> Any:
        pass

    @abstractmethod
    def visit_var_decl(self, node: 'VarDecl') -> Any:
        pass

    @abstractmethod
    def visit_fetch(self, node: 'Fetch') -> Any:
        pass

    @abstractmethod
    def visit_save(self, node: 'Save') -> Any:
        pass

    @abstractmethod
    def visit_print(self, node: 'Print') -> Any:
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        pass

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes in syntactic order."""
        pass


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """Base class for expressions."""
    pass


@dataclass(frozen=True)
class Binary(Expression):
    """Binary operation, including assignment (operator '=')."""
    left: Expression
    operator: Token
    right: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Grouping(Expression):
    """Parenthesized expression."""
    expression: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_grouping(self)

    def children(self) -> List[ASTNode]:
        return [self.expression]


@dataclass(frozen=True)
class Literal(Expression):
    """Literal value: str, float, bool or None."""
    value: LiteralValue

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_literal(self)

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class Variable(Expression):
    """Reference to a named variable."""
    name: Token

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable(self)

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class Unary(Expression):
    """Prefix '!' or '-'."""
    operator: Token
    operand: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary(self)

    def children(self) -> List[ASTNode]:
        return [self.operand]


@dataclass(frozen=True)
class Call(Expression):
    """
    Call expression.

    `paren` is the closing parenthesis, kept for diagnostics. Arguments are
    in source order.
    """
    callee: Expression
    paren: Token
    arguments: Tuple[Expression, ...] = ()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_call(self)

    def children(self) -> List[ASTNode]:
        return [self.callee] + list(self.arguments)


@dataclass(frozen=True)
class PropertyAccess(Expression):
    """Property access, as in `product.select` or `node.text`."""
    obj: Expression
    name: Token

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_property_access(self)

    def children(self) -> List[ASTNode]:
        return [self.obj]


# ============================================================================
# Statements
# ============================================================================

class Statement(ASTNode):
    """Base class for statements."""
    pass


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """Expression evaluated for its effect."""
    expression: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_expression_statement(self)

    def children(self) -> List[ASTNode]:
        return [self.expression]


@dataclass(frozen=True)
class If(Statement):
    """If statement with optional else clause."""
    condition: Expression
    then_branch: Statement
    else_branch: Optional[Statement] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_if(self)

    def children(self) -> List[ASTNode]:
        children = [self.condition, self.then_branch]
        if self.else_branch is not None:
            children.append(self.else_branch)
        return children


@dataclass(frozen=True)
class For(Statement):
    """for (variable in iterable) body"""
    variable: Token
    iterable: Expression
    body: Statement

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_for(self)

    def children(self) -> List[ASTNode]:
        return [self.iterable, self.body]


@dataclass(frozen=True)
class Block(Statement):
    """Braced list of declarations."""
    statements: Tuple[Statement, ...] = ()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_block(self)

    def children(self) -> List[ASTNode]:
        return list(self.statements)


@dataclass(frozen=True)
class VarDecl(Statement):
    """Variable declaration with optional initializer."""
    name: Token
    initializer: Optional[Expression] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_var_decl(self)

    def children(self) -> List[ASTNode]:
        return [self.initializer] if self.initializer is not None else []


@dataclass(frozen=True)
class Fetch(Statement):
    """fetch(url);"""
    url: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_fetch(self)

    def children(self) -> List[ASTNode]:
        return [self.url]


@dataclass(frozen=True)
class Save(Statement):
    """save(data, filename);"""
    data: Expression
    filename: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_save(self)

    def children(self) -> List[ASTNode]:
        return [self.data, self.filename]


@dataclass(frozen=True)
class Print(Statement):
    """print(expression);"""
    expression: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_print(self)

    def children(self) -> List[ASTNode]:
        return [self.expression]


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield `node` and all of its descendants, depth-first, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))
