"""
Simplest possible environment concept.

This is the canonical list-structured search: each scope knows only its own
bindings and a static link to the scope it was born in. Lookup walks outward;
definition always lands in the innermost scope.

Lookup of an unbound name raises KeyError; the evaluator turns that into a
language-level error value.
"""
from typing import Any
import abc

class Environment(abc.ABC):
	@abc.abstractmethod
	def resolve(self, name:str) -> Any:
		pass

	def child(self) -> "InnerEnv":
		return InnerEnv({}, self)

class BuiltinEnv(Environment):
	""" Effectively the built-in scope. Read-only; it ends every chain. """
	def __init__(self, builtins:dict[str, Any]):
		self._builtins = dict(builtins)

	def resolve(self, name:str) -> Any:
		return self._builtins[name]

	def __contains__(self, name:str) -> bool:
		return name in self._builtins

null_env = BuiltinEnv({})

class InnerEnv(Environment):
	def __init__(self, bindings:dict[str, Any], static_link:Environment):
		self._bindings = bindings
		self._static_link = static_link

	def resolve(self, name:str) -> Any:
		try: return self._bindings[name]
		except KeyError: return self._static_link.resolve(name)

	def define(self, name:str, value:Any) -> Any:
		""" Bind (or re-bind) in this scope only, shadowing anything further out. """
		self._bindings[name] = value
		return value

	def __contains__(self, name:str) -> bool:
		""" Is the name bound anywhere along the chain? """
		try: self.resolve(name)
		except KeyError: return False
		return True

	def local_names(self):
		return self._bindings.keys()
