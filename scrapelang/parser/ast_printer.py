"""
Human-readable tree dump of a parsed program.

Debug output only; the layout is not a stable format. Every node is
visited and children appear under their parent in source order.
"""

from typing import List

from .ast_nodes import (
    ASTVisitor, Statement, Binary, Grouping, Literal, Variable,
    Unary, Call, PropertyAccess, ExpressionStatement, If, For, Block,
    VarDecl, Fetch, Save, Print, LiteralValue
)

INDENT = "  "


def format_literal(value: LiteralValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if value.is_integer():
        return str(int(value))
    return repr(value)


class AstPrinter(ASTVisitor):
    """
    Renders statements as an indented tree with box-drawing branches:

        └─ Print
           └─ Expression:
            └─ Literal: "low"

    Rendering recurses once per tree level. Trees deeper than a few hundred
    levels, such as a long `1 + 1 + ... + 1` chain, exceed the interpreter's
    recursion limit.
    """

    def __init__(self):
        self._level = 0

    def print(self, statements: List[Statement]) -> str:
        return "\n".join(self._render(stmt, 0) for stmt in statements)

    def _render(self, node, level: int) -> str:
        self._level = level
        return node.accept(self)

    def _pad(self) -> str:
        return INDENT * self._level

    # Statements

    def visit_expression_statement(self, node: ExpressionStatement) -> str:
        pad, level = self._pad(), self._level
        return f"{pad}└─ Expression\n{self._render(node.expression, level + 1)}"

    def visit_if(self, node: If) -> str:
        pad, level = self._pad(), self._level
        then_glyph = "├─" if node.else_branch is not None else "└─"
        lines = [
            f"{pad}└─ If",
            f"{pad}   ├─ Condition:\n{self._render(node.condition, level + 2)}",
            f"{pad}   {then_glyph} Then:\n{self._render(node.then_branch, level + 2)}",
        ]
        if node.else_branch is not None:
            lines.append(f"{pad}   └─ Else:\n{self._render(node.else_branch, level + 2)}")
        return "\n".join(lines)

    def visit_for(self, node: For) -> str:
        pad, level = self._pad(), self._level
        return "\n".join([
            f"{pad}└─ For",
            f"{pad}   ├─ Variable: {node.variable.lexeme}",
            f"{pad}   ├─ Iterable:\n{self._render(node.iterable, level + 2)}",
            f"{pad}   └─ Body:\n{self._render(node.body, level + 2)}",
        ])

    def visit_block(self, node: Block) -> str:
        pad, level = self._pad(), self._level
        lines = [f"{pad}└─ Block"]
        last = len(node.statements) - 1
        for index, stmt in enumerate(node.statements):
            glyph = "└─" if index == last else "├─"
            lines.append(f"{pad}   {glyph} Statement {index + 1}:\n{self._render(stmt, level + 2)}")
        return "\n".join(lines)

    def visit_var_decl(self, node: VarDecl) -> str:
        pad, level = self._pad(), self._level
        header = f"{pad}└─ Variable Declaration: {node.name.lexeme}"
        if node.initializer is None:
            return f"{header}\n{pad}   └─ Initializer: null"
        return f"{header}\n{pad}   └─ Initializer:\n{self._render(node.initializer, level + 2)}"

    def visit_fetch(self, node: Fetch) -> str:
        pad, level = self._pad(), self._level
        return f"{pad}└─ Fetch\n{pad}   └─ URL:\n{self._render(node.url, level + 2)}"

    def visit_save(self, node: Save) -> str:
        pad, level = self._pad(), self._level
        return "\n".join([
            f"{pad}└─ Save",
            f"{pad}   ├─ Data:\n{self._render(node.data, level + 2)}",
            f"{pad}   └─ Filename:\n{self._render(node.filename, level + 2)}",
        ])

    def visit_print(self, node: Print) -> str:
        pad, level = self._pad(), self._level
        return f"{pad}└─ Print\n{pad}   └─ Expression:\n{self._render(node.expression, level + 2)}"

    # Expressions

    def visit_binary(self, node: Binary) -> str:
        pad, level = self._pad(), self._level
        return "\n".join([
            f"{pad}└─ Binary: {node.operator.lexeme}",
            f"{pad}   ├─ Left:\n{self._render(node.left, level + 2)}",
            f"{pad}   └─ Right:\n{self._render(node.right, level + 2)}",
        ])

    def visit_grouping(self, node: Grouping) -> str:
        pad, level = self._pad(), self._level
        return f"{pad}└─ Grouping\n{self._render(node.expression, level + 1)}"

    def visit_literal(self, node: Literal) -> str:
        return f"{self._pad()}└─ Literal: {format_literal(node.value)}"

    def visit_variable(self, node: Variable) -> str:
        return f"{self._pad()}└─ Variable: {node.name.lexeme}"

    def visit_unary(self, node: Unary) -> str:
        pad, level = self._pad(), self._level
        return (f"{pad}└─ Unary: {node.operator.lexeme}\n"
                f"{pad}   └─ Right:\n{self._render(node.operand, level + 2)}")

    def visit_call(self, node: Call) -> str:
        pad, level = self._pad(), self._level
        if isinstance(node.callee, Variable):
            lines = [f"{pad}└─ Call: {node.callee.name.lexeme}"]
        else:
            lines = [f"{pad}└─ Call",
                     f"{pad}   ├─ Callee:\n{self._render(node.callee, level + 2)}"]

        last = len(node.arguments) - 1
        for index, arg in enumerate(node.arguments):
            glyph = "└─" if index == last else "├─"
            lines.append(f"{pad}   {glyph} Arg {index + 1}:\n{self._render(arg, level + 2)}")
        return "\n".join(lines)

    def visit_property_access(self, node: PropertyAccess) -> str:
        pad, level = self._pad(), self._level
        return (f"{pad}└─ Property Access: {node.name.lexeme}\n"
                f"{pad}   └─ Object:\n{self._render(node.obj, level + 2)}")


def dump(node: Statement) -> str:
    """Render a single statement."""
    return AstPrinter().print([node])
