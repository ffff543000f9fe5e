"""
Test suite for the scrapelang lexer.

Tests cover:
- Token kinds for keywords, literals, operators and punctuation
- Keyword boundaries and two-character operators
- Line/column tracking
- Comment and whitespace trivia and their filtering
- Tolerant handling of unterminated and unknown input
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from scrapelang.lexer.lexer import Lexer, filter_trivia, tokenize_string
from scrapelang.lexer.tokens import TokenType


SAMPLE_SCRIPT = """// Fetch a webpage
fetch("https://example.com");

/* Select all
   product items */
var products = select(".product-item");

for (product in products) {
  var name = product.select(".name").text();
  var price = product.select(".price").text();
  if (price <= 100 && name != "") {
    print("Found affordable product: " + name);
    save(name + "," + price, "affordable_products.csv");
  }
}
"""


class TestLexer(unittest.TestCase):
    """Test cases for tokenization."""

    def _types(self, source: str):
        """Token types after trivia filtering, EOF excluded."""
        return [token.type for token in tokenize_string(source)[:-1]]

    def test_always_ends_with_single_eof(self):
        """Every input, however broken, ends with exactly one EOF token."""
        sources = ["", "   ", "var x = 1;", '"never closed', "/* never closed",
                   "@@@", "\n\n\n", SAMPLE_SCRIPT]

        for source in sources:
            with self.subTest(source=source):
                tokens = Lexer(source).tokenize()
                self.assertEqual(tokens[-1].type, TokenType.EOF)
                self.assertEqual(tokens[-1].lexeme, "")
                eof_count = sum(1 for token in tokens if token.type == TokenType.EOF)
                self.assertEqual(eof_count, 1)

    def test_single_character_tokens(self):
        """Test punctuation and one-character operators."""
        self.assertEqual(
            self._types("( ) { } [ ] ; , . $ + - * /"),
            [TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
             TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
             TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
             TokenType.SEMICOLON, TokenType.COMMA, TokenType.DOT, TokenType.DOLLAR,
             TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY, TokenType.DIVIDE]
        )

    def test_two_character_operators(self):
        """Two-character operators win over their one-character prefixes."""
        self.assertEqual(
            self._types("== != >= <= && || = ! > <"),
            [TokenType.EQUAL_EQUAL, TokenType.NOT_EQUAL, TokenType.GREATER_EQUAL,
             TokenType.LESS_EQUAL, TokenType.AND, TokenType.OR,
             TokenType.EQUALS, TokenType.NOT, TokenType.GREATER, TokenType.LESS]
        )

    def test_operators_without_spaces(self):
        """Test that adjacent operators split correctly."""
        tokens = tokenize_string("a==b!=!c")
        self.assertEqual(
            [(t.type, t.lexeme) for t in tokens[:-1]],
            [(TokenType.IDENTIFIER, "a"), (TokenType.EQUAL_EQUAL, "=="),
             (TokenType.IDENTIFIER, "b"), (TokenType.NOT_EQUAL, "!="),
             (TokenType.NOT, "!"), (TokenType.IDENTIFIER, "c")]
        )

    def test_keywords_and_verbs(self):
        """Test keyword table lookups."""
        self.assertEqual(
            self._types("var if else for in fetch select xpath text attr html save print"),
            [TokenType.VAR, TokenType.IF, TokenType.ELSE, TokenType.FOR, TokenType.IN,
             TokenType.FETCH, TokenType.SELECT, TokenType.XPATH, TokenType.TEXT,
             TokenType.ATTR, TokenType.HTML, TokenType.SAVE, TokenType.PRINT]
        )

    def test_boolean_literals(self):
        """Test true/false lex as BOOLEAN with a bool value."""
        tokens = tokenize_string("true false")
        self.assertEqual([t.type for t in tokens[:-1]], [TokenType.BOOLEAN, TokenType.BOOLEAN])
        self.assertIs(tokens[0].value, True)
        self.assertIs(tokens[1].value, False)

    def test_keyword_boundary(self):
        """An identifier that starts with a keyword is one IDENTIFIER."""
        for word in ["variables", "iffy", "printer", "selector", "truely", "in_stock", "for2"]:
            with self.subTest(word=word):
                tokens = tokenize_string(word)
                self.assertEqual(len(tokens), 2)
                self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)
                self.assertEqual(tokens[0].lexeme, word)
                self.assertEqual(tokens[0].value, word)

    def test_identifiers(self):
        """Test identifier character classes."""
        tokens = tokenize_string("_tmp price2 CamelCase")
        self.assertEqual([t.lexeme for t in tokens[:-1]], ["_tmp", "price2", "CamelCase"])
        self.assertTrue(all(t.type == TokenType.IDENTIFIER for t in tokens[:-1]))

    def test_numbers(self):
        """Test integer and fractional number literals."""
        tokens = tokenize_string("42 3.14 .5 007")
        self.assertEqual([t.type for t in tokens[:-1]], [TokenType.NUMBER] * 4)
        self.assertEqual([t.value for t in tokens[:-1]], [42.0, 3.14, 0.5, 7.0])
        self.assertTrue(all(isinstance(t.value, float) for t in tokens[:-1]))

    def test_number_with_trailing_dot(self):
        """A dot not followed by a digit is not part of the number."""
        tokens = tokenize_string("1.")
        self.assertEqual([(t.type, t.lexeme) for t in tokens[:-1]],
                         [(TokenType.NUMBER, "1"), (TokenType.DOT, ".")])

    def test_number_followed_by_method(self):
        """Test `1.5.text` splits at the second dot."""
        tokens = tokenize_string("1.5.text")
        self.assertEqual([(t.type, t.lexeme) for t in tokens[:-1]],
                         [(TokenType.NUMBER, "1.5"), (TokenType.DOT, "."), (TokenType.TEXT, "text")])

    def test_negative_number_is_minus_then_number(self):
        """Signs are never part of the number literal."""
        self.assertEqual(self._types("-5"), [TokenType.MINUS, TokenType.NUMBER])

    def test_string_literal(self):
        """Test string lexeme keeps quotes and value drops them."""
        tokens = tokenize_string('"https://example.com"')
        self.assertEqual(tokens[0].type, TokenType.STRING)
        self.assertEqual(tokens[0].lexeme, '"https://example.com"')
        self.assertEqual(tokens[0].value, "https://example.com")

    def test_empty_string_literal(self):
        tokens = tokenize_string('""')
        self.assertEqual(tokens[0].type, TokenType.STRING)
        self.assertEqual(tokens[0].value, "")

    def test_escaped_quote_does_not_end_string(self):
        """Test backslash-quote stays inside the string, uninterpreted."""
        source = '"say \\"hi\\"" x'
        tokens = tokenize_string(source)
        self.assertEqual([t.type for t in tokens[:-1]], [TokenType.STRING, TokenType.IDENTIFIER])
        self.assertEqual(tokens[0].value, 'say \\"hi\\"')

    def test_comment_like_text_inside_string(self):
        tokens = tokenize_string('"a // b /* c" d')
        self.assertEqual(tokens[0].value, "a // b /* c")
        self.assertEqual(tokens[1].lexeme, "d")

    def test_unterminated_string_is_dropped_with_warning(self):
        """No token for the broken string; a warning records where it began."""
        lexer = Lexer('print("oops')
        tokens = filter_trivia(lexer.tokenize())

        self.assertEqual([t.type for t in tokens],
                         [TokenType.PRINT, TokenType.LEFT_PAREN, TokenType.EOF])
        self.assertTrue(lexer.has_warnings())
        self.assertEqual(len(lexer.warnings), 1)
        self.assertEqual(lexer.warnings[0].code, "L002")
        self.assertEqual(lexer.warnings[0].location.column, 7)

    def test_warning_text_names_code(self):
        lexer = Lexer('print("oops', "job.scrape")
        lexer.tokenize()

        text = str(lexer.warnings[0])
        self.assertTrue(text.startswith(
            "WARNING[L002] Unterminated string literal: Unterminated string literal\n"
            "  --> job.scrape:1:7\n"
        ))
        self.assertIn("help:", text)

    def test_line_comment_is_trivia(self):
        """Test // comments are emitted as COMMENT and filtered for parsing."""
        raw = Lexer("x // trailing note\ny").tokenize()
        comments = [t for t in raw if t.type == TokenType.COMMENT]
        self.assertEqual(len(comments), 1)
        self.assertEqual(comments[0].lexeme, "// trailing note")

        self.assertEqual([t.lexeme for t in filter_trivia(raw)[:-1]], ["x", "y"])

    def test_block_comment_spanning_lines(self):
        """Test line numbers keep counting inside block comments."""
        tokens = tokenize_string("/* a\nb */ x")
        self.assertEqual(tokens[0].lexeme, "x")
        self.assertEqual(tokens[0].line, 2)
        self.assertEqual(tokens[0].column, 6)

    def test_unterminated_block_comment(self):
        """An open block comment swallows the rest of the input."""
        lexer = Lexer("x /* never closed\nvar y = 1;")
        raw = lexer.tokenize()

        self.assertEqual([t.type for t in raw],
                         [TokenType.IDENTIFIER, TokenType.WHITESPACE,
                          TokenType.COMMENT, TokenType.EOF])
        self.assertEqual(raw[2].lexeme, "/* never closed\nvar y = 1;")
        self.assertEqual([w.code for w in lexer.warnings], ["L003"])

    def test_whitespace_runs_are_single_tokens(self):
        raw = Lexer("a  \t\r\n b").tokenize()
        self.assertEqual([t.type for t in raw],
                         [TokenType.IDENTIFIER, TokenType.WHITESPACE,
                          TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(raw[1].lexeme, "  \t\r\n ")
        self.assertTrue(raw[1].is_trivia)

    def test_unknown_characters(self):
        """Unrecognized characters become one UNKNOWN token each."""
        lexer = Lexer("a & b @ #")
        tokens = filter_trivia(lexer.tokenize())

        self.assertEqual(
            [(t.type, t.lexeme) for t in tokens[:-1]],
            [(TokenType.IDENTIFIER, "a"), (TokenType.UNKNOWN, "&"),
             (TokenType.IDENTIFIER, "b"), (TokenType.UNKNOWN, "@"),
             (TokenType.UNKNOWN, "#")]
        )
        self.assertEqual([w.code for w in lexer.warnings], ["L001", "L001", "L001"])

    def test_non_ascii_letter_is_unknown(self):
        self.assertEqual(self._types("é"), [TokenType.UNKNOWN])

    def test_eof_position(self):
        """EOF sits at the final line/column reached."""
        tokens = tokenize_string("ab\ncd")
        eof = tokens[-1]
        self.assertEqual((eof.line, eof.column), (2, 3))
        self.assertEqual(eof.location.offset, 5)

    def test_positions_point_at_lexemes(self):
        """Every token's (line, column) slices back to its lexeme."""
        lines = SAMPLE_SCRIPT.split("\n")
        line_starts = [0]
        for line in lines:
            line_starts.append(line_starts[-1] + len(line) + 1)

        for token in Lexer(SAMPLE_SCRIPT).tokenize()[:-1]:
            with self.subTest(token=token):
                offset = line_starts[token.line - 1] + token.column - 1
                self.assertEqual(offset, token.location.offset)
                self.assertEqual(SAMPLE_SCRIPT[offset:offset + len(token.lexeme)], token.lexeme)

    def test_sample_script_has_no_warnings(self):
        lexer = Lexer(SAMPLE_SCRIPT)
        tokens = filter_trivia(lexer.tokenize())

        self.assertFalse(lexer.has_warnings())
        self.assertNotIn(TokenType.UNKNOWN, [t.type for t in tokens])
        self.assertFalse(any(t.is_trivia for t in tokens))

    def test_tokenize_resets_state(self):
        """Calling tokenize() twice gives the same result."""
        lexer = Lexer('var x = "a";\n@')
        first = lexer.tokenize()
        first_copy = list(first)
        second = lexer.tokenize()

        self.assertEqual(first_copy, second)
        self.assertEqual(len(lexer.warnings), 1)

    def test_token_predicates(self):
        tokens = tokenize_string('var x = "s" + 1;')
        var, name, equals, string, plus, number = tokens[:6]

        self.assertTrue(var.is_keyword)
        self.assertFalse(name.is_keyword)
        self.assertTrue(equals.is_operator)
        self.assertTrue(plus.is_operator)
        self.assertTrue(string.is_literal)
        self.assertTrue(number.is_literal)
        self.assertFalse(name.is_literal)

    def test_filename_in_locations(self):
        tokens = tokenize_string("x", filename="job.scrape")
        self.assertEqual(str(tokens[0].location), "job.scrape:1:1")


if __name__ == '__main__':
    unittest.main()
