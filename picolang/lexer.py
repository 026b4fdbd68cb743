"""
Turn PicoLang source text into a stream of tokens.

The scanner walks the text one character at a time with a single character
of lookahead. It never fails: anything it does not recognize comes out as an
ILLEGAL token, and the parser complains about it in context.
"""
from typing import Iterable, Iterator
from .ontology import Token, TokenKind

KEYWORDS = frozenset(["fn", "let", "true", "false", "if", "else", "return"])
WHITESPACE = frozenset(" \t\r\n")
OPERATORS = frozenset("=+-!*/<>")
TWO_CHARACTER_OPERATORS = frozenset(["==", "!=", "<=", ">="])
DELIMITERS = frozenset(",;:(){}[]")
QUOTE = '"'

def _is_letter(ch:str) -> bool:
	return ch.isalpha() or ch == "_"

def _is_digit(ch:str) -> bool:
	return "0" <= ch <= "9"

class Lexer:
	"""
	Iterating a Lexer yields tokens from the start of the text, ending with one EOF token.
	Iterate again and you get the same tokens again.
	"""
	def __init__(self, text:str, base:int=0):
		self.text = text
		self.base = base

	def __iter__(self) -> Iterator[Token]:
		text, size = self.text, len(self.text)
		position = 0

		def peek(at:int) -> str:
			return text[at] if at < size else ""

		def make(kind:TokenKind, start:int, stop:int) -> Token:
			return Token(kind, text[start:stop], self.base + start)

		while True:
			while position < size and text[position] in WHITESPACE:
				position += 1
			if position >= size:
				yield Token(TokenKind.EOF, "", self.base + size)
				return
			start = position
			ch = text[position]
			if _is_letter(ch):
				while _is_letter(peek(position)) or _is_digit(peek(position)):
					position += 1
				word = text[start:position]
				yield make(TokenKind.KEYWORD if word in KEYWORDS else TokenKind.IDENT, start, position)
			elif _is_digit(ch):
				while _is_digit(peek(position)):
					position += 1
				yield make(TokenKind.INT, start, position)
			elif ch == QUOTE:
				position = text.find(QUOTE, start + 1)
				if position < 0:
					# Unterminated: the rest of the input is one bad token.
					position = size
					yield make(TokenKind.ILLEGAL, start, position)
				else:
					position += 1
					yield make(TokenKind.STRING, start, position)
			elif ch in OPERATORS:
				position += 1
				if ch + peek(position) in TWO_CHARACTER_OPERATORS:
					position += 1
				yield make(TokenKind.OPERATOR, start, position)
			elif ch in DELIMITERS:
				position += 1
				yield make(TokenKind.DELIMITER, start, position)
			else:
				position += 1
				yield make(TokenKind.ILLEGAL, start, position)

def tokenize(text:str, base:int=0) -> list[Token]:
	return list(Lexer(text, base))

def render(tokens:Iterable[Token]) -> str:
	""" Source text which lexes back into an equivalent sequence of tokens. """
	return " ".join(t.literal for t in tokens if t.kind is not TokenKind.EOF)
