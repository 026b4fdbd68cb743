import unittest

from picolang.lexer import Lexer, tokenize, render
from picolang.ontology import Token, TokenKind

IDENT, INT, STRING = TokenKind.IDENT, TokenKind.INT, TokenKind.STRING
OP, DELIM, KW = TokenKind.OPERATOR, TokenKind.DELIMITER, TokenKind.KEYWORD
EOF, ILLEGAL = TokenKind.EOF, TokenKind.ILLEGAL

SAMPLE = """let five = 5;
let add = fn(x, y) {
  x + y;
};
!-/*5;
5 < 10 >= 5;
if (5 <= 10) { return true; } else { return false; }
10 == 10; 10 != 9;
"foo bar"
[1, 2];
{"foo": "bar"}
"""

class LexerTests(unittest.TestCase):

	def test_sample_program(self):
		expect = [
			(KW, "let"), (IDENT, "five"), (OP, "="), (INT, "5"), (DELIM, ";"),
			(KW, "let"), (IDENT, "add"), (OP, "="), (KW, "fn"), (DELIM, "("), (IDENT, "x"),
			(DELIM, ","), (IDENT, "y"), (DELIM, ")"), (DELIM, "{"),
			(IDENT, "x"), (OP, "+"), (IDENT, "y"), (DELIM, ";"),
			(DELIM, "}"), (DELIM, ";"),
			(OP, "!"), (OP, "-"), (OP, "/"), (OP, "*"), (INT, "5"), (DELIM, ";"),
			(INT, "5"), (OP, "<"), (INT, "10"), (OP, ">="), (INT, "5"), (DELIM, ";"),
			(KW, "if"), (DELIM, "("), (INT, "5"), (OP, "<="), (INT, "10"), (DELIM, ")"), (DELIM, "{"),
			(KW, "return"), (KW, "true"), (DELIM, ";"), (DELIM, "}"),
			(KW, "else"), (DELIM, "{"), (KW, "return"), (KW, "false"), (DELIM, ";"), (DELIM, "}"),
			(INT, "10"), (OP, "=="), (INT, "10"), (DELIM, ";"),
			(INT, "10"), (OP, "!="), (INT, "9"), (DELIM, ";"),
			(STRING, '"foo bar"'),
			(DELIM, "["), (INT, "1"), (DELIM, ","), (INT, "2"), (DELIM, "]"), (DELIM, ";"),
			(DELIM, "{"), (STRING, '"foo"'), (DELIM, ":"), (STRING, '"bar"'), (DELIM, "}"),
			(EOF, ""),
		]
		actual = [(t.kind, t.literal) for t in tokenize(SAMPLE)]
		self.assertEqual(expect, actual)

	def test_identifiers_are_maximal_munch(self):
		self.assertEqual(
			[(IDENT, "letter"), (IDENT, "fn_2"), (IDENT, "_x"), (KW, "if"), (EOF, "")],
			[(t.kind, t.literal) for t in tokenize("letter fn_2 _x if")],
		)

	def test_numbers_then_letters_split(self):
		self.assertEqual([INT, IDENT, EOF], [t.kind for t in tokenize("5abc")])

	def test_negative_numbers_are_not_literals(self):
		self.assertEqual([(OP, "-"), (INT, "5"), (EOF, "")], [(t.kind, t.literal) for t in tokenize("-5")])

	def test_illegal_characters_do_not_stop_the_scan(self):
		tokens = tokenize("1 @ 2 $")
		self.assertEqual([INT, ILLEGAL, INT, ILLEGAL, EOF], [t.kind for t in tokens])
		self.assertEqual("@", tokens[1].literal)

	def test_unterminated_string_is_illegal(self):
		tokens = tokenize('let s = "abc def')
		self.assertEqual(ILLEGAL, tokens[-2].kind)
		self.assertEqual('"abc def', tokens[-2].literal)
		self.assertEqual(EOF, tokens[-1].kind)

	def test_strings_keep_their_quotes_and_skip_escapes(self):
		token = tokenize(r'"a\nb"')[0]
		self.assertEqual(STRING, token.kind)
		self.assertEqual(r'"a\nb"', token.literal)

	def test_empty_input_is_just_eof(self):
		for text in ["", "   \n\t  "]:
			with self.subTest(repr(text)):
				self.assertEqual([EOF], [t.kind for t in tokenize(text)])

	def test_spots_are_offsets_from_the_base(self):
		tokens = tokenize("a  bc", base=10)
		self.assertEqual([10, 13, 15], [t.spot for t in tokens])
		self.assertEqual((13, 15), tokens[1].span())

	def test_restartable(self):
		lexer = Lexer(SAMPLE)
		first = list(lexer)
		second = list(lexer)
		self.assertEqual(first, second)
		self.assertEqual([t.spot for t in first], [t.spot for t in second])

	def test_round_trip_through_rendering(self):
		for text in [SAMPLE, "a==b=!c", "!=== <=>=", '"x" "y"z 12ab', "@#", 'x "dangling']:
			with self.subTest(text):
				tokens = tokenize(text)
				self.assertEqual(tokens, tokenize(render(tokens)))

class TokenTests(unittest.TestCase):

	def test_keys(self):
		self.assertEqual("==", Token(OP, "==").key())
		self.assertEqual("let", Token(KW, "let").key())
		self.assertEqual(";", Token(DELIM, ";").key())
		self.assertIs(IDENT, Token(IDENT, "x").key())
		self.assertIs(INT, Token(INT, "5").key())

	def test_equality_ignores_spot(self):
		self.assertEqual(Token(IDENT, "x", 3), Token(IDENT, "x", 99))
		self.assertNotEqual(Token(IDENT, "x"), Token(STRING, "x"))

	def test_immutable(self):
		token = Token(IDENT, "x")
		with self.assertRaises(AttributeError):
			token.literal = "y"

	def test_describe(self):
		self.assertEqual("'='", Token(OP, "=").describe())
		self.assertEqual("end of input", Token(EOF, "").describe())

if __name__ == '__main__':
	unittest.main()
