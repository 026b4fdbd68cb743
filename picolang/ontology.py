"""
These most-fundamental classes sit apart from the rest to avoid circular imports.
Everything the parser builds is a Phrase, and every Phrase can say where it lives
in the source text, so that diagnostics can point at it.
"""
import enum

class Phrase:
	def left(self) -> int:
		""" Return the global offset of the first character of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the global offset just past the last character of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class TokenKind(enum.Enum):
	IDENT = "identifier"
	INT = "integer"
	STRING = "string"
	OPERATOR = "operator"
	DELIMITER = "delimiter"
	KEYWORD = "keyword"
	EOF = "end of input"
	ILLEGAL = "illegal"

# For these kinds, each distinct literal is effectively its own terminal symbol.
_KEYED_BY_LITERAL = frozenset([TokenKind.OPERATOR, TokenKind.DELIMITER, TokenKind.KEYWORD])

class Token(Phrase):
	""" Representing the occurrence of a lexeme anywhere. """
	__slots__ = ("kind", "literal", "spot")
	kind: TokenKind
	literal: str  # The exact source text, quotes and all.
	spot: int

	def __init__(self, kind:TokenKind, literal:str, spot:int=0):
		assert isinstance(kind, TokenKind), kind
		assert isinstance(literal, str)
		object.__setattr__(self, "kind", kind)
		object.__setattr__(self, "literal", literal)
		object.__setattr__(self, "spot", spot)

	def __setattr__(self, key, value):
		raise AttributeError("Tokens are immutable")

	def __eq__(self, other):
		return isinstance(other, Token) and self.kind is other.kind and self.literal == other.literal
	def __hash__(self): return hash((self.kind, self.literal))
	def __repr__(self): return "<%s %r>" % (self.kind.name, self.literal)

	def key(self):
		""" What the parser's dispatch tables get keyed on. """
		return self.literal if self.kind in _KEYED_BY_LITERAL else self.kind

	def describe(self) -> str:
		if self.kind is TokenKind.EOF: return "end of input"
		return repr(self.literal)

	def left(self): return self.spot
	def right(self): return self.spot + len(self.literal)
