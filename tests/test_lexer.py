"""
Test suite for the Monkey lexer.

Tests cover:
- Single and two-character operators
- Keywords versus identifiers
- Illegal characters and EOF behaviour
- Source locations
"""

import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from monkey.lexer import Lexer, TokenType, LexerError, tokenize_string, tokenize_file
from monkey.lexer.tokens import Token, lookup_identifier


def kinds_and_literals(source: str):
    return [(tok.type, tok.literal) for tok in Lexer(source).tokenize()]


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def test_single_character_tokens(self):
        """Every single-character operator and delimiter maps directly."""
        expected = [
            (TokenType.ASSIGN, "="),
            (TokenType.PLUS, "+"),
            (TokenType.LEFT_PAREN, "("),
            (TokenType.RIGHT_PAREN, ")"),
            (TokenType.LEFT_BRACE, "{"),
            (TokenType.RIGHT_BRACE, "}"),
            (TokenType.COMMA, ","),
            (TokenType.SEMICOLON, ";"),
            (TokenType.MINUS, "-"),
            (TokenType.LOGICAL_NOT, "!"),
            (TokenType.MULTIPLY, "*"),
            (TokenType.DIVIDE, "/"),
            (TokenType.LESS_THAN, "<"),
            (TokenType.GREATER_THAN, ">"),
            (TokenType.EOF, ""),
        ]
        self.assertEqual(kinds_and_literals("=+(){},;-!*/<>"), expected)

    def test_full_program(self):
        """A realistic snippet with keywords, identifiers and numbers."""
        source = """let five = 5;
let ten = 10;

let add = fn(x, y) {
  x + y;
};

let result = add(five, ten);
!-/*5;
5 < 10 > 5;

if (5 < 10) {
    return true;
} else {
    return false;
}

10 == 10;
10 != 9;
"""
        expected = [
            (TokenType.LET, "let"), (TokenType.IDENTIFIER, "five"), (TokenType.ASSIGN, "="),
            (TokenType.INTEGER, "5"), (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"), (TokenType.IDENTIFIER, "ten"), (TokenType.ASSIGN, "="),
            (TokenType.INTEGER, "10"), (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"), (TokenType.IDENTIFIER, "add"), (TokenType.ASSIGN, "="),
            (TokenType.FN, "fn"), (TokenType.LEFT_PAREN, "("), (TokenType.IDENTIFIER, "x"),
            (TokenType.COMMA, ","), (TokenType.IDENTIFIER, "y"), (TokenType.RIGHT_PAREN, ")"),
            (TokenType.LEFT_BRACE, "{"), (TokenType.IDENTIFIER, "x"), (TokenType.PLUS, "+"),
            (TokenType.IDENTIFIER, "y"), (TokenType.SEMICOLON, ";"), (TokenType.RIGHT_BRACE, "}"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"), (TokenType.IDENTIFIER, "result"), (TokenType.ASSIGN, "="),
            (TokenType.IDENTIFIER, "add"), (TokenType.LEFT_PAREN, "("), (TokenType.IDENTIFIER, "five"),
            (TokenType.COMMA, ","), (TokenType.IDENTIFIER, "ten"), (TokenType.RIGHT_PAREN, ")"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LOGICAL_NOT, "!"), (TokenType.MINUS, "-"), (TokenType.DIVIDE, "/"),
            (TokenType.MULTIPLY, "*"), (TokenType.INTEGER, "5"), (TokenType.SEMICOLON, ";"),
            (TokenType.INTEGER, "5"), (TokenType.LESS_THAN, "<"), (TokenType.INTEGER, "10"),
            (TokenType.GREATER_THAN, ">"), (TokenType.INTEGER, "5"), (TokenType.SEMICOLON, ";"),
            (TokenType.IF, "if"), (TokenType.LEFT_PAREN, "("), (TokenType.INTEGER, "5"),
            (TokenType.LESS_THAN, "<"), (TokenType.INTEGER, "10"), (TokenType.RIGHT_PAREN, ")"),
            (TokenType.LEFT_BRACE, "{"), (TokenType.RETURN, "return"), (TokenType.TRUE, "true"),
            (TokenType.SEMICOLON, ";"), (TokenType.RIGHT_BRACE, "}"), (TokenType.ELSE, "else"),
            (TokenType.LEFT_BRACE, "{"), (TokenType.RETURN, "return"), (TokenType.FALSE, "false"),
            (TokenType.SEMICOLON, ";"), (TokenType.RIGHT_BRACE, "}"),
            (TokenType.INTEGER, "10"), (TokenType.EQUAL, "=="), (TokenType.INTEGER, "10"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.INTEGER, "10"), (TokenType.NOT_EQUAL, "!="), (TokenType.INTEGER, "9"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, ""),
        ]
        self.assertEqual(kinds_and_literals(source), expected)

    def test_two_character_operators_need_both_characters(self):
        """'=' and '!' only combine with a directly following '='."""
        self.assertEqual(kinds_and_literals("= ="), [
            (TokenType.ASSIGN, "="), (TokenType.ASSIGN, "="), (TokenType.EOF, ""),
        ])
        self.assertEqual(kinds_and_literals("!a"), [
            (TokenType.LOGICAL_NOT, "!"), (TokenType.IDENTIFIER, "a"), (TokenType.EOF, ""),
        ])
        self.assertEqual(kinds_and_literals("==="), [
            (TokenType.EQUAL, "=="), (TokenType.ASSIGN, "="), (TokenType.EOF, ""),
        ])
        self.assertEqual(kinds_and_literals("!=="), [
            (TokenType.NOT_EQUAL, "!="), (TokenType.ASSIGN, "="), (TokenType.EOF, ""),
        ])

    def test_operator_at_end_of_input(self):
        """Peeking past the last character must not fake a two-char operator."""
        self.assertEqual(kinds_and_literals("x ="), [
            (TokenType.IDENTIFIER, "x"), (TokenType.ASSIGN, "="), (TokenType.EOF, ""),
        ])
        self.assertEqual(kinds_and_literals("!"), [
            (TokenType.LOGICAL_NOT, "!"), (TokenType.EOF, ""),
        ])

    def test_keywords_and_identifiers(self):
        """Keyword table lookup; near-misses stay identifiers."""
        for word, token_type in [
            ("fn", TokenType.FN), ("let", TokenType.LET), ("true", TokenType.TRUE),
            ("false", TokenType.FALSE), ("if", TokenType.IF), ("else", TokenType.ELSE),
            ("return", TokenType.RETURN), ("lets", TokenType.IDENTIFIER),
            ("Let", TokenType.IDENTIFIER), ("_private", TokenType.IDENTIFIER),
        ]:
            with self.subTest(word=word):
                self.assertEqual(lookup_identifier(word), token_type)
                self.assertEqual(kinds_and_literals(word)[0], (token_type, word))

    def test_identifier_stops_at_digit(self):
        """Identifiers are letters and underscores only."""
        self.assertEqual(kinds_and_literals("foo_bar1"), [
            (TokenType.IDENTIFIER, "foo_bar"), (TokenType.INTEGER, "1"), (TokenType.EOF, ""),
        ])

    def test_integers_have_no_sign_or_fraction(self):
        """'-12.5' is MINUS, INTEGER, ILLEGAL '.', INTEGER."""
        self.assertEqual(kinds_and_literals("-12.5"), [
            (TokenType.MINUS, "-"), (TokenType.INTEGER, "12"), (TokenType.ILLEGAL, "."),
            (TokenType.INTEGER, "5"), (TokenType.EOF, ""),
        ])

    def test_illegal_character(self):
        """An unknown symbol is one ILLEGAL token followed by EOF."""
        lexer = Lexer("@")
        self.assertEqual([(t.type, t.literal) for t in lexer.tokenize()],
                         [(TokenType.ILLEGAL, "@"), (TokenType.EOF, "")])
        self.assertTrue(lexer.has_errors())
        self.assertEqual(lexer.errors[0].diagnostic.code, "L001")

    def test_lexer_advances_past_illegal_characters(self):
        """Illegal characters never stall the scan."""
        self.assertEqual(kinds_and_literals("a$#b"), [
            (TokenType.IDENTIFIER, "a"), (TokenType.ILLEGAL, "$"), (TokenType.ILLEGAL, "#"),
            (TokenType.IDENTIFIER, "b"), (TokenType.EOF, ""),
        ])

    def test_embedded_nul_is_illegal_not_eof(self):
        """Only the cursor decides end of input."""
        self.assertEqual(kinds_and_literals("a\0b"), [
            (TokenType.IDENTIFIER, "a"), (TokenType.ILLEGAL, "\0"),
            (TokenType.IDENTIFIER, "b"), (TokenType.EOF, ""),
        ])

    def test_eof_is_idempotent(self):
        """After EOF, next_token keeps returning EOF without moving."""
        lexer = Lexer("x")
        self.assertEqual(lexer.next_token().type, TokenType.IDENTIFIER)
        first_eof = lexer.next_token()
        position = lexer.position
        for _ in range(5):
            token = lexer.next_token()
            self.assertEqual(token.type, TokenType.EOF)
            self.assertEqual(token.literal, "")
            self.assertEqual(token, first_eof)
        self.assertEqual(lexer.position, position)

    def test_empty_and_whitespace_only_input(self):
        """Whitespace of all four kinds is skipped."""
        self.assertEqual(kinds_and_literals(""), [(TokenType.EOF, "")])
        self.assertEqual(kinds_and_literals(" \t\r\n "), [(TokenType.EOF, "")])

    def test_retokenizing_literals_reproduces_tokens(self):
        """Joining literals with the same whitespace gives the same stream."""
        source = "let x = 10 == 9 != !y;\nreturn -a * b / c < d > e;"
        tokens = Lexer(source).tokenize()
        rebuilt = " ".join(tok.literal for tok in tokens if tok.type != TokenType.EOF)
        self.assertEqual(kinds_and_literals(rebuilt), [(t.type, t.literal) for t in tokens])

    def test_peek_char_does_not_advance(self):
        lexer = Lexer("ab")
        self.assertEqual(lexer.ch, "a")
        self.assertEqual(lexer.peek_char(), "b")
        self.assertEqual(lexer.peek_char(), "b")
        self.assertEqual(lexer.position, 0)
        self.assertEqual(lexer.read_position, 1)

    def test_source_locations(self):
        """Tokens record the line and column where they start."""
        tokens = Lexer("let x\n  = 5;", "demo.mk").tokenize()
        locations = [(t.literal, t.location.line, t.location.column) for t in tokens]
        self.assertEqual(locations, [
            ("let", 1, 1), ("x", 1, 5), ("=", 2, 3), ("5", 2, 5), (";", 2, 6), ("", 2, 7),
        ])
        self.assertEqual(str(tokens[0].location), "demo.mk:1:1")

    def test_iteration_stops_after_eof(self):
        tokens = list(Lexer("1 + 2"))
        self.assertEqual(len(tokens), 4)
        self.assertEqual(tokens[-1].type, TokenType.EOF)

    def test_token_properties(self):
        self.assertTrue(Token(TokenType.LET, "let").is_keyword)
        self.assertTrue(Token(TokenType.EQUAL, "==").is_operator)
        self.assertTrue(Token(TokenType.IDENTIFIER, "x").is_identifier)
        self.assertFalse(Token(TokenType.SEMICOLON, ";").is_operator)
        self.assertEqual(str(Token(TokenType.LET, "let")), "LET('let')")

    def test_tokenize_string_raises_on_illegal_character(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string("let a = 1 % 2;")
        self.assertIn("Invalid character: '%'", str(ctx.exception))
        self.assertEqual(ctx.exception.location.column, 11)

    def test_tokenize_string_clean_input(self):
        tokens = tokenize_string("let a = 1;")
        self.assertEqual(len(tokens), 6)

    def test_tokenize_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.mk")
            with open(path, "w", encoding="utf-8") as f:
                f.write("return x;\n")
            tokens = tokenize_file(path)
        self.assertEqual([t.type for t in tokens],
                         [TokenType.RETURN, TokenType.IDENTIFIER, TokenType.SEMICOLON, TokenType.EOF])
        self.assertEqual(tokens[0].location.filename, path)


if __name__ == "__main__":
    unittest.main()
