"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate nodes as it goes.
Every node keeps the token it came from, so diagnostics can point back at the source.
The str() of any node is canonical, fully-parenthesized PicoLang which parses back to the same thing.
"""
from typing import Optional, Sequence
from .ontology import Phrase, Token

class Statement(Phrase):
	token: Token
	def left(self): return self.token.left()

class Expression(Phrase):
	token: Token
	def left(self): return self.token.left()
	def right(self): return self.token.right()

###############################################################################

class Identifier(Expression):
	def __init__(self, token:Token):
		self.token = token
		self.value = token.literal
	def __str__(self): return self.value

class IntegerLiteral(Expression):
	def __init__(self, token:Token, value:int):
		self.token, self.value = token, value
	def __str__(self): return self.token.literal

class StringLiteral(Expression):
	def __init__(self, token:Token):
		self.token = token
		self.value = token.literal[1:-1]
	def __str__(self): return self.token.literal

class Boolean(Expression):
	def __init__(self, token:Token):
		self.token = token
		self.value = token.literal == "true"
	def __str__(self): return self.token.literal

class PrefixExpression(Expression):
	def __init__(self, token:Token, right:Expression):
		self.token, self.operator, self.operand = token, token.literal, right
	def right(self): return self.operand.right()
	def __str__(self): return "(%s%s)" % (self.operator, self.operand)

class InfixExpression(Expression):
	def __init__(self, lhs:Expression, token:Token, rhs:Expression):
		self.lhs, self.token, self.operator, self.rhs = lhs, token, token.literal, rhs
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.operator, self.rhs)

class BlockStatement(Statement):
	def __init__(self, token:Token, statements:Sequence[Statement], closer:Token):
		self.token, self.statements, self._closer = token, tuple(statements), closer
	def right(self): return self._closer.right()
	def __str__(self):
		if not self.statements: return "{ }"
		return "{ %s }" % " ".join(map(str, self.statements))

class IfExpression(Expression):
	def __init__(self, token:Token, condition:Expression, consequence:BlockStatement, alternative:Optional[BlockStatement]):
		self.token = token
		self.condition, self.consequence, self.alternative = condition, consequence, alternative
	def right(self): return (self.alternative or self.consequence).right()
	def __str__(self):
		text = "if (%s) %s" % (self.condition, self.consequence)
		if self.alternative is not None:
			text += " else %s" % self.alternative
		return text

class FunctionLiteral(Expression):
	def __init__(self, token:Token, parameters:Sequence[Identifier], body:BlockStatement):
		self.token, self.parameters, self.body = token, tuple(parameters), body
	def right(self): return self.body.right()
	def __str__(self):
		return "fn(%s) %s" % (", ".join(map(str, self.parameters)), self.body)

class CallExpression(Expression):
	def __init__(self, function:Expression, token:Token, arguments:Sequence[Expression], closer:Token):
		self.function, self.token, self.arguments = function, token, tuple(arguments)
		self._closer = closer
	def left(self): return self.function.left()
	def right(self): return self._closer.right()
	def __str__(self): return "%s(%s)" % (self.function, ", ".join(map(str, self.arguments)))

class ArrayLiteral(Expression):
	def __init__(self, token:Token, elements:Sequence[Expression], closer:Token):
		self.token, self.elements, self._closer = token, tuple(elements), closer
	def right(self): return self._closer.right()
	def __str__(self): return "[%s]" % ", ".join(map(str, self.elements))

class IndexExpression(Expression):
	def __init__(self, lhs:Expression, token:Token, index:Expression, closer:Token):
		self.lhs, self.token, self.index, self._closer = lhs, token, index, closer
	def left(self): return self.lhs.left()
	def right(self): return self._closer.right()
	def __str__(self): return "(%s[%s])" % (self.lhs, self.index)

class HashLiteral(Expression):
	# Pairs stay in source order; evaluation order depends on it.
	def __init__(self, token:Token, pairs:Sequence[tuple[Expression, Expression]], closer:Token):
		self.token, self.pairs, self._closer = token, tuple(pairs), closer
	def right(self): return self._closer.right()
	def __str__(self): return "{%s}" % ", ".join("%s: %s" % (k, v) for k, v in self.pairs)

###############################################################################

class LetStatement(Statement):
	def __init__(self, token:Token, name:Identifier, value:Expression):
		self.token, self.name, self.value = token, name, value
	def right(self): return self.value.right()
	def __str__(self): return "let %s = %s;" % (self.name, self.value)

class ReturnStatement(Statement):
	def __init__(self, token:Token, value:Expression):
		self.token, self.value = token, value
	def right(self): return self.value.right()
	def __str__(self): return "return %s;" % self.value

class ExpressionStatement(Statement):
	def __init__(self, expression:Expression):
		self.token, self.expression = expression.token, expression
	def left(self): return self.expression.left()
	def right(self): return self.expression.right()
	def __str__(self): return "%s;" % self.expression

class Program(Phrase):
	""" The root of every parse: top-level statements in order. """
	def __init__(self, statements:Sequence[Statement], eof:Token):
		self.statements = tuple(statements)
		self.token = self.statements[0].token if self.statements else eof
		self._eof = eof
	def left(self): return self.statements[0].left() if self.statements else self._eof.left()
	def right(self): return self.statements[-1].right() if self.statements else self._eof.right()
	def __str__(self): return " ".join(map(str, self.statements))
