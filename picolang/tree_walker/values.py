"""
This module defines the run-time values the tree-walker operates in terms of,
and the interface agreement between the evaluator and those values.

Every value answers `type_name` (for error messages) and `inspect()` (for display).
Booleans and null are shared singletons, so identity comparison works on them.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence
from ..ontology import Phrase
from .. import syntax
from ..environment import Environment
from .evaluator import evaluate

class PicoValue(ABC):
	""" Root for all run-time values """
	type_name: str

	@abstractmethod
	def inspect(self) -> str: pass

	def __str__(self): return self.inspect()
	def __repr__(self): return "<%s %s>" % (self.type_name, self.inspect())

class Hashable(PicoValue):
	""" Values which may serve as keys in a hash """
	@abstractmethod
	def hash_key(self) -> tuple: pass

###############################################################################

_INT64_MODULUS = 2**64
_INT64_HALF = 2**63

def wrap_int64(n:int) -> int:
	""" Reduce to two's-complement 64-bit range, the way the hardware would. """
	return (n + _INT64_HALF) % _INT64_MODULUS - _INT64_HALF

class Integer(Hashable):
	type_name = "INTEGER"
	def __init__(self, value:int):
		self.value = wrap_int64(value)
	def inspect(self): return str(self.value)
	def hash_key(self): return self.type_name, self.value
	def __eq__(self, other): return isinstance(other, Integer) and self.value == other.value
	def __hash__(self): return hash(self.hash_key())

class Boolean(Hashable):
	type_name = "BOOLEAN"
	def __init__(self, value:bool):
		self.value = value
	def inspect(self): return "true" if self.value else "false"
	def hash_key(self): return self.type_name, self.value

TRUE = Boolean(True)
FALSE = Boolean(False)

def native_bool(flag:bool) -> Boolean:
	return TRUE if flag else FALSE

class String(Hashable):
	type_name = "STRING"
	def __init__(self, value:str):
		self.value = value
	def inspect(self): return self.value
	def hash_key(self): return self.type_name, self.value
	def __eq__(self, other): return isinstance(other, String) and self.value == other.value
	def __hash__(self): return hash(self.hash_key())

class Null(PicoValue):
	type_name = "NULL"
	def inspect(self): return "null"

NULL = Null()

class Array(PicoValue):
	type_name = "ARRAY"
	def __init__(self, elements:Sequence[PicoValue]):
		self.elements = tuple(elements)
	def inspect(self): return "[%s]" % ", ".join(e.inspect() for e in self.elements)

class Hash(PicoValue):
	""" Maps each key's hash_key() to the (key, value) pair, in insertion order. """
	type_name = "HASH"
	def __init__(self, pairs:dict[tuple, tuple[Hashable, PicoValue]]):
		self.pairs = dict(pairs)
	def inspect(self):
		return "{%s}" % ", ".join("%s: %s" % (k.inspect(), v.inspect()) for k, v in self.pairs.values())
	def get(self, key:Hashable) -> Optional[PicoValue]:
		pair = self.pairs.get(key.hash_key())
		return None if pair is None else pair[1]

###############################################################################

class Error(PicoValue):
	"""
	Language-level errors are values: they short-circuit the evaluation
	of whatever expression encloses them, all the way to the top.
	The site is the phrase to blame, if known.
	"""
	type_name = "ERROR"
	def __init__(self, message:str, site:Optional[Phrase]=None):
		self.message = message
		self.site = site
	def inspect(self): return "ERROR: " + self.message
	def at(self, site:Phrase) -> "Error":
		""" The same complaint, blaming a particular site if none was known. """
		return self if self.site is not None else Error(self.message, site)

class ReturnValue(PicoValue):
	""" Internal signal: carries a returned value out through enclosing blocks. """
	type_name = "RETURN_VALUE"
	def __init__(self, value:PicoValue):
		self.value = value
	def inspect(self): return self.value.inspect()

def is_error(value) -> bool:
	return isinstance(value, Error)

def halts(value) -> bool:
	""" Should the enclosing expression stop and pass this value outward? """
	return isinstance(value, (Error, ReturnValue))

def is_truthy(value:PicoValue) -> bool:
	return value is not FALSE and value is not NULL

###############################################################################

class Function(PicoValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def apply(self, args:Sequence[PicoValue]) -> PicoValue: pass

class Closure(Function):
	""" The run-time manifestation of a function literal: a callable value tied to its natal environment. """
	type_name = "FUNCTION"

	def __init__(self, literal:syntax.FunctionLiteral, env:Environment):
		self.literal = literal
		self.env = env

	@property
	def parameters(self): return self.literal.parameters
	@property
	def body(self): return self.literal.body

	def inspect(self):
		return "fn(%s) { ... }" % ", ".join(p.value for p in self.parameters)

	def apply(self, args:Sequence[PicoValue]) -> PicoValue:
		if len(args) != len(self.parameters):
			return Error("wrong number of arguments: want=%d, got=%d" % (len(self.parameters), len(args)))
		# Parameters bind in a child of the defining scope, not the caller's.
		inner = self.env.child()
		for param, arg in zip(self.parameters, args):
			inner.define(param.value, arg)
		result = evaluate(self.body, inner)
		if isinstance(result, ReturnValue):
			return result.value
		return result

class Builtin(Function):
	""" Built-in functions get their arguments already evaluated, and check them themselves. """
	type_name = "BUILTIN"
	def __init__(self, name:str, fn:Callable[..., PicoValue]):
		self.name = name
		self._fn = fn
	def inspect(self): return "builtin function"
	def apply(self, args:Sequence[PicoValue]) -> PicoValue:
		return self._fn(*args)
