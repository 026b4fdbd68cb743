"""
Recursive-descent for statements, Pratt-style precedence climbing for expressions.

The parser never raises on bad input. Each complaint lands in `parser.errors`
and the parser skips ahead to the next statement boundary to look for more.
Callers must check `errors` before trusting the Program.
"""
import enum
from typing import Callable, Iterable, Optional
from boozetools.parsing.interface import ParseError
from .ontology import Token, TokenKind
from . import syntax

INT64_MAX = 2**63 - 1

class PicoParseError(ParseError):
	""" Arguments are (expected:str, token:Token) """
	@property
	def expected(self) -> str: return self.args[0]
	@property
	def token(self) -> Token: return self.args[1]
	@property
	def message(self) -> str:
		return "expected %s, got %s" % (self.expected, self.token.describe())
	def __str__(self): return self.message

class Precedence(enum.IntEnum):
	LOWEST = enum.auto()
	EQUALS = enum.auto()        # == !=
	LESS_GREATER = enum.auto()  # < > <= >=
	SUM = enum.auto()           # + -
	PRODUCT = enum.auto()       # * /
	PREFIX = enum.auto()        # -x !x
	CALL = enum.auto()          # f(x)
	INDEX = enum.auto()         # a[i]

PRECEDENCES = {
	"==": Precedence.EQUALS,
	"!=": Precedence.EQUALS,
	"<": Precedence.LESS_GREATER,
	">": Precedence.LESS_GREATER,
	"<=": Precedence.LESS_GREATER,
	">=": Precedence.LESS_GREATER,
	"+": Precedence.SUM,
	"-": Precedence.SUM,
	"*": Precedence.PRODUCT,
	"/": Precedence.PRODUCT,
	"(": Precedence.CALL,
	"[": Precedence.INDEX,
}

_BOUNDARY_KEYWORDS = frozenset(["let", "return"])

ParseNud = Callable[[], Optional[syntax.Expression]]
ParseLed = Callable[[syntax.Expression], Optional[syntax.Expression]]

class Parser:
	current: Token
	peek: Token

	def __init__(self, tokens:Iterable[Token]):
		self._tokens = iter(tokens)
		self.errors: list[PicoParseError] = []
		self.current = self.peek = None
		self._advance()
		self._advance()

		self._prefix: dict[object, ParseNud] = {
			TokenKind.IDENT: self._parse_identifier,
			TokenKind.INT: self._parse_integer,
			TokenKind.STRING: self._parse_string,
			"true": self._parse_boolean,
			"false": self._parse_boolean,
			"!": self._parse_prefix,
			"-": self._parse_prefix,
			"(": self._parse_grouped,
			"if": self._parse_if,
			"fn": self._parse_function,
			"[": self._parse_array,
			"{": self._parse_hash,
		}
		self._infix: dict[object, ParseLed] = {
			op: self._parse_infix for op in PRECEDENCES if op not in ("(", "[")
		}
		self._infix["("] = self._parse_call
		self._infix["["] = self._parse_index

	###########################################################################
	# Token-stream plumbing

	def _advance(self):
		self.current = self.peek
		if self.peek is None or self.peek.kind is not TokenKind.EOF:
			self.peek = next(self._tokens, None)
			if self.peek is None:
				# A stream with no EOF still gets one, right after whatever came last.
				spot = self.current.right() if self.current is not None else 0
				self.peek = Token(TokenKind.EOF, "", spot)

	def _current_is(self, key) -> bool: return self.current.key() == key
	def _peek_is(self, key) -> bool: return self.peek.key() == key

	def _expect_peek(self, key, expected:str) -> bool:
		if self._peek_is(key):
			self._advance()
			return True
		self._complain(expected, self.peek)
		return False

	def _peek_precedence(self) -> Precedence:
		return PRECEDENCES.get(self.peek.key(), Precedence.LOWEST)

	def _complain(self, expected:str, token:Token):
		self.errors.append(PicoParseError(expected, token))

	def _synchronize(self):
		""" Skip to the next statement boundary after a failed statement. """
		while not (
			self._current_is(";")
			or self.current.kind is TokenKind.EOF
			or self.peek.key() in _BOUNDARY_KEYWORDS
		):
			self._advance()

	###########################################################################
	# Statements

	def parse_program(self) -> syntax.Program:
		statements = []
		while self.current.kind is not TokenKind.EOF:
			if self._current_is(";"):
				self._advance()
				continue
			statement = self._parse_statement()
			if statement is None:
				self._synchronize()
			else:
				statements.append(statement)
			self._advance()
		return syntax.Program(statements, self.current)

	def _parse_statement(self) -> Optional[syntax.Statement]:
		if self._current_is("let"): return self._parse_let()
		if self._current_is("return"): return self._parse_return()
		return self._parse_expression_statement()

	def _parse_let(self) -> Optional[syntax.LetStatement]:
		token = self.current
		if not self._expect_peek(TokenKind.IDENT, "an identifier after 'let'"): return None
		name = syntax.Identifier(self.current)
		if not self._expect_peek("=", "'=' after the name in a let-statement"): return None
		self._advance()
		value = self._parse_expression(Precedence.LOWEST)
		if value is None: return None
		if self._peek_is(";"): self._advance()
		return syntax.LetStatement(token, name, value)

	def _parse_return(self) -> Optional[syntax.ReturnStatement]:
		token = self.current
		self._advance()
		value = self._parse_expression(Precedence.LOWEST)
		if value is None: return None
		if self._peek_is(";"): self._advance()
		return syntax.ReturnStatement(token, value)

	def _parse_expression_statement(self) -> Optional[syntax.ExpressionStatement]:
		expression = self._parse_expression(Precedence.LOWEST)
		if expression is None: return None
		if self._peek_is(";"): self._advance()
		return syntax.ExpressionStatement(expression)

	def _parse_block(self) -> Optional[syntax.BlockStatement]:
		opener = self.current
		statements = []
		self._advance()
		while not self._current_is("}"):
			if self.current.kind is TokenKind.EOF:
				self._complain("'}' to close the block", self.current)
				return None
			if self._current_is(";"):
				self._advance()
				continue
			statement = self._parse_statement()
			if statement is None: return None
			statements.append(statement)
			self._advance()
		return syntax.BlockStatement(opener, statements, self.current)

	###########################################################################
	# Expressions

	def _parse_expression(self, precedence:Precedence) -> Optional[syntax.Expression]:
		prefix = self._prefix.get(self.current.key())
		if prefix is None:
			self._complain("an expression", self.current)
			return None
		left = prefix()
		while left is not None and not self._peek_is(";") and precedence < self._peek_precedence():
			infix = self._infix.get(self.peek.key())
			if infix is None: return left
			self._advance()
			left = infix(left)
		return left

	def _parse_identifier(self):
		return syntax.Identifier(self.current)

	def _parse_integer(self):
		value = int(self.current.literal)
		if value > INT64_MAX:
			self._complain("an integer that fits in 64 bits", self.current)
			return None
		return syntax.IntegerLiteral(self.current, value)

	def _parse_string(self):
		return syntax.StringLiteral(self.current)

	def _parse_boolean(self):
		return syntax.Boolean(self.current)

	def _parse_prefix(self):
		token = self.current
		self._advance()
		operand = self._parse_expression(Precedence.PREFIX)
		if operand is None: return None
		return syntax.PrefixExpression(token, operand)

	def _parse_infix(self, lhs:syntax.Expression):
		token = self.current
		precedence = PRECEDENCES[token.literal]
		self._advance()
		rhs = self._parse_expression(precedence)
		if rhs is None: return None
		return syntax.InfixExpression(lhs, token, rhs)

	def _parse_grouped(self):
		self._advance()
		inner = self._parse_expression(Precedence.LOWEST)
		if inner is None: return None
		if not self._expect_peek(")", "')' to close the parenthesized expression"): return None
		return inner

	def _parse_if(self):
		token = self.current
		if not self._expect_peek("(", "'(' after 'if'"): return None
		self._advance()
		condition = self._parse_expression(Precedence.LOWEST)
		if condition is None: return None
		if not self._expect_peek(")", "')' after the condition"): return None
		if not self._expect_peek("{", "'{' to begin the consequence"): return None
		consequence = self._parse_block()
		if consequence is None: return None
		alternative = None
		if self._peek_is("else"):
			self._advance()
			if not self._expect_peek("{", "'{' after 'else'"): return None
			alternative = self._parse_block()
			if alternative is None: return None
		return syntax.IfExpression(token, condition, consequence, alternative)

	def _parse_function(self):
		token = self.current
		if not self._expect_peek("(", "'(' after 'fn'"): return None
		parameters = self._parse_parameters()
		if parameters is None: return None
		if not self._expect_peek("{", "'{' to begin the function body"): return None
		body = self._parse_block()
		if body is None: return None
		return syntax.FunctionLiteral(token, parameters, body)

	def _parse_parameters(self) -> Optional[list[syntax.Identifier]]:
		parameters = []
		if self._peek_is(")"):
			self._advance()
			return parameters
		if not self._expect_peek(TokenKind.IDENT, "a parameter name"): return None
		parameters.append(syntax.Identifier(self.current))
		while self._peek_is(","):
			self._advance()
			if not self._expect_peek(TokenKind.IDENT, "a parameter name"): return None
			parameters.append(syntax.Identifier(self.current))
		if not self._expect_peek(")", "',' or ')' in the parameter list"): return None
		return parameters

	def _parse_expression_list(self, closer:str) -> Optional[list[syntax.Expression]]:
		""" Leaves the closing delimiter as the current token. """
		items = []
		if self._peek_is(closer):
			self._advance()
			return items
		self._advance()
		item = self._parse_expression(Precedence.LOWEST)
		if item is None: return None
		items.append(item)
		while self._peek_is(","):
			self._advance()
			self._advance()
			item = self._parse_expression(Precedence.LOWEST)
			if item is None: return None
			items.append(item)
		if not self._expect_peek(closer, "',' or %r" % closer): return None
		return items

	def _parse_call(self, function:syntax.Expression):
		token = self.current
		arguments = self._parse_expression_list(")")
		if arguments is None: return None
		return syntax.CallExpression(function, token, arguments, self.current)

	def _parse_array(self):
		token = self.current
		elements = self._parse_expression_list("]")
		if elements is None: return None
		return syntax.ArrayLiteral(token, elements, self.current)

	def _parse_index(self, lhs:syntax.Expression):
		token = self.current
		self._advance()
		index = self._parse_expression(Precedence.LOWEST)
		if index is None: return None
		if not self._expect_peek("]", "']' to close the index"): return None
		return syntax.IndexExpression(lhs, token, index, self.current)

	def _parse_hash(self):
		token = self.current
		pairs = []
		while not self._peek_is("}"):
			self._advance()
			key = self._parse_expression(Precedence.LOWEST)
			if key is None: return None
			if not self._expect_peek(":", "':' after the hash key"): return None
			self._advance()
			value = self._parse_expression(Precedence.LOWEST)
			if value is None: return None
			pairs.append((key, value))
			if not self._peek_is("}") and not self._expect_peek(",", "',' or '}' in the hash literal"):
				return None
		self._advance()
		return syntax.HashLiteral(token, pairs, self.current)

def parse_tokens(tokens:Iterable[Token]) -> tuple[syntax.Program, list[PicoParseError]]:
	parser = Parser(tokens)
	program = parser.parse_program()
	return program, parser.errors
