"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.
Those live in the runtime module, which registers them here.
"""

from typing import Any
from ..ontology import Phrase
from ..environment import Environment

EVALUATE = {}

def evaluate(node:Phrase, env:Environment) -> Any:
	"""
	Total over every kind of node the parser can build.
	A missing entry is a bug in the interpreter, not in the user's program.
	"""
	try: fn = EVALUATE[type(node)]
	except KeyError: raise NotImplementedError(type(node), node)
	return fn(node, env)

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["node"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
