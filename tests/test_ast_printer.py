"""
Test suite for the AST tree printer.
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from scrapelang.lexer.lexer import tokenize_string
from scrapelang.parser.parser import Parser
from scrapelang.parser.ast_nodes import Literal, Print, walk, Variable, VarDecl, For
from scrapelang.parser.ast_printer import AstPrinter, format_literal, dump


def render(source: str) -> str:
    parser = Parser(tokenize_string(source))
    statements = parser.parse()
    assert not parser.errors, [e.report() for e in parser.errors]
    return AstPrinter().print(statements)


class TestAstPrinter(unittest.TestCase):
    """Test cases for AstPrinter output."""

    def test_print_statement(self):
        self.assertEqual(
            render('print("low");'),
            '└─ Print\n'
            '   └─ Expression:\n'
            '    └─ Literal: "low"'
        )

    def test_select_call(self):
        self.assertEqual(
            render('select("a");'),
            '└─ Expression\n'
            '  └─ Call: select\n'
            '     └─ Arg 1:\n'
            '      └─ Literal: "a"'
        )

    def test_declaration_without_initializer(self):
        self.assertEqual(
            render("var x;"),
            "└─ Variable Declaration: x\n"
            "   └─ Initializer: null"
        )

    def test_if_branch_glyphs(self):
        without_else = render("if (a) print(1);")
        with_else = render("if (a) print(1); else print(2);")

        self.assertIn("└─ Then:", without_else)
        self.assertNotIn("Else:", without_else)
        self.assertIn("├─ Then:", with_else)
        self.assertIn("└─ Else:", with_else)

    def test_binary_operands_are_labelled(self):
        output = render("x < 10;")
        self.assertIn("└─ Binary: <", output)
        self.assertIn("├─ Left:", output)
        self.assertIn("└─ Right:", output)

    def test_children_are_indented_below_parent(self):
        lines = render("for (p in ps) { print(p.text()); }").splitlines()
        depths = [len(line) - len(line.lstrip()) for line in lines]

        self.assertEqual(depths[0], 0)
        self.assertTrue(lines[0].endswith("For"))
        self.assertTrue(all(depth > 0 for depth in depths[1:]))

    def test_every_variable_is_printed(self):
        source = """
        fetch(site);
        var products = select(".product-item");
        for (product in products) {
          var name = product.select(".name").text();
          if (price < limit && !(skip == true)) save(name + "," + price, out);
          else print(-missing);
        }
        """
        parser = Parser(tokenize_string(source))
        statements = parser.parse()
        self.assertEqual(parser.errors, [])

        output = AstPrinter().print(statements)

        names = set()
        for stmt in statements:
            for node in walk(stmt):
                if isinstance(node, Variable):
                    names.add(node.name.lexeme)
                elif isinstance(node, VarDecl):
                    names.add(node.name.lexeme)
                elif isinstance(node, For):
                    names.add(node.variable.lexeme)

        self.assertTrue({"site", "products", "product", "name", "price", "limit",
                         "skip", "out", "missing"} <= names)
        for name in names:
            with self.subTest(name=name):
                self.assertIn(name, output)

        for text in ['".product-item"', '","', "Property Access: text",
                     "Unary: !", "Unary: -", "Grouping", "Literal: true"]:
            with self.subTest(text=text):
                self.assertIn(text, output)

    def test_long_operator_chain(self):
        output = render(" + ".join(["1"] * 100) + ";")

        self.assertEqual(output.count("Binary: +"), 99)
        self.assertEqual(output.count("Literal: 1"), 100)

    def test_dump_single_statement(self):
        self.assertEqual(dump(Print(Literal(None))),
                         "└─ Print\n   └─ Expression:\n    └─ Literal: null")

    def test_format_literal(self):
        cases = [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            ("abc", '"abc"'),
            (5.0, "5"),
            (0.0, "0"),
            (2.5, "2.5"),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(format_literal(value), expected)

    def test_printer_is_reusable(self):
        printer = AstPrinter()
        statements = Parser(tokenize_string("print(1); print(2);")).parse()

        self.assertEqual(printer.print(statements), printer.print(statements))
        self.assertEqual(printer.print([]), "")


if __name__ == '__main__':
    unittest.main()
