"""
Build the primitive namespace: the built-in functions every program can see.
They live in the outermost scope, beneath every session's root environment.
"""
from .environment import BuiltinEnv
from .tree_walker.values import (
	PicoValue, Builtin, Error, Integer, String, Array, NULL,
)

BUILTINS: dict[str, Builtin] = {}

def _built_in(name:str, arity:int=None):
	""" Register a built-in, with an argument-count check if the arity is fixed. """
	def decorate(fn):
		def checked(*args):
			if arity is not None and len(args) != arity:
				return Error("wrong number of arguments. got=%d, want=%d" % (len(args), arity))
			return fn(*args)
		BUILTINS[name] = Builtin(name, checked)
		return fn
	return decorate

def _unsupported(name:str, arg:PicoValue) -> Error:
	return Error("argument to `%s` not supported, got %s" % (name, arg.type_name))

@_built_in("len", 1)
def _len(arg):
	if isinstance(arg, String): return Integer(len(arg.value))
	if isinstance(arg, Array): return Integer(len(arg.elements))
	return _unsupported("len", arg)

@_built_in("first", 1)
def _first(arg):
	if not isinstance(arg, Array): return _unsupported("first", arg)
	return arg.elements[0] if arg.elements else NULL

@_built_in("last", 1)
def _last(arg):
	if not isinstance(arg, Array): return _unsupported("last", arg)
	return arg.elements[-1] if arg.elements else NULL

@_built_in("rest", 1)
def _rest(arg):
	if not isinstance(arg, Array): return _unsupported("rest", arg)
	return Array(arg.elements[1:]) if arg.elements else NULL

@_built_in("push", 2)
def _push(arg, item):
	# Arrays are immutable; push builds a new one.
	if not isinstance(arg, Array): return _unsupported("push", arg)
	return Array(arg.elements + (item,))

@_built_in("puts")
def _puts(*args):
	for arg in args:
		print(arg.inspect())
	return NULL

root_env = BuiltinEnv(BUILTINS)
