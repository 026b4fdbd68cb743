"""
The evaluation rules, one per kind of syntax node.

Errors are values here: whenever a sub-expression produces an Error,
that Error becomes the result of the enclosing expression straight away.
A `return` travels outward the same way, wrapped as a ReturnValue,
until a function call (or the top of the program) unwraps it.
That holds even when the `return` sits in an `if` nested inside some
larger expression, so every sub-expression result passes through `halts`.
"""
import operator
from .. import syntax
from ..environment import Environment, InnerEnv
from .evaluator import evaluate, attach_evaluation_methods
from .values import (
	PicoValue, Integer, String, Array, Hash, Hashable, Function, Closure,
	Error, ReturnValue, NULL, native_bool, is_error, halts, is_truthy,
)

def _divide(a:int, b:int) -> int:
	""" Integer division truncating toward zero, as opposed to Python's floor. """
	quotient = abs(a) // abs(b)
	return quotient if (a < 0) == (b < 0) else -quotient

INTEGER_BINARY = {
	"+"  : operator.add,
	"-"  : operator.sub,
	"*"  : operator.mul,
	"/"  : _divide,
	"<"  : operator.lt,
	">"  : operator.gt,
	"<=" : operator.le,
	">=" : operator.ge,
	"==" : operator.eq,
	"!=" : operator.ne,
}
STRING_BINARY = {
	"+"  : operator.add,
	"==" : operator.eq,
	"!=" : operator.ne,
}

def _wrap(result):
	if isinstance(result, bool): return native_bool(result)
	if isinstance(result, int): return Integer(result)
	return String(result)

def _unknown_infix(left:PicoValue, op:str, right:PicoValue, node) -> Error:
	return Error("unknown operator: %s %s %s" % (left.type_name, op, right.type_name), node)

def infix_operation(left:PicoValue, op:str, right:PicoValue, node:syntax.InfixExpression) -> PicoValue:
	if isinstance(left, Integer) and isinstance(right, Integer):
		try: fn = INTEGER_BINARY[op]
		except KeyError: return _unknown_infix(left, op, right, node)
		try: return _wrap(fn(left.value, right.value))
		except ZeroDivisionError: return Error("division by zero", node)
	if isinstance(left, String) and isinstance(right, String):
		try: fn = STRING_BINARY[op]
		except KeyError: return _unknown_infix(left, op, right, node)
		return _wrap(fn(left.value, right.value))
	# Everything else compares by identity; booleans and null are singletons.
	if op == "==": return native_bool(left is right)
	if op == "!=": return native_bool(left is not right)
	if left.type_name != right.type_name:
		return Error("type mismatch: %s %s %s" % (left.type_name, op, right.type_name), node)
	return _unknown_infix(left, op, right, node)

def prefix_operation(op:str, operand:PicoValue, node:syntax.PrefixExpression) -> PicoValue:
	if op == "!":
		return native_bool(not is_truthy(operand))
	if op == "-" and isinstance(operand, Integer):
		return Integer(-operand.value)
	return Error("unknown operator: %s%s" % (op, operand.type_name), node)

###############################################################################

def _eval_program(node:syntax.Program, env:Environment):
	result = None
	for statement in node.statements:
		result = evaluate(statement, env)
		if isinstance(result, ReturnValue): return result.value
		if is_error(result): return result
	return result

def _eval_block(node:syntax.BlockStatement, env:Environment):
	result = None
	for statement in node.statements:
		result = evaluate(statement, env)
		# Both of these must reach the nearest function call untouched.
		if halts(result): return result
	return NULL if result is None else result

def _eval_expression_statement(node:syntax.ExpressionStatement, env:Environment):
	return evaluate(node.expression, env)

def _eval_let(node:syntax.LetStatement, env:InnerEnv):
	value = evaluate(node.value, env)
	if halts(value): return value
	env.define(node.name.value, value)

def _eval_return(node:syntax.ReturnStatement, env:Environment):
	value = evaluate(node.value, env)
	if halts(value): return value
	return ReturnValue(value)

def _eval_integer(node:syntax.IntegerLiteral, env:Environment):
	return Integer(node.value)

def _eval_string(node:syntax.StringLiteral, env:Environment):
	return String(node.value)

def _eval_boolean(node:syntax.Boolean, env:Environment):
	return native_bool(node.value)

def _eval_identifier(node:syntax.Identifier, env:Environment):
	try: return env.resolve(node.value)
	except KeyError: return Error("identifier not found: " + node.value, node)

def _eval_prefix(node:syntax.PrefixExpression, env:Environment):
	operand = evaluate(node.operand, env)
	if halts(operand): return operand
	return prefix_operation(node.operator, operand, node)

def _eval_infix(node:syntax.InfixExpression, env:Environment):
	left = evaluate(node.lhs, env)
	if halts(left): return left
	right = evaluate(node.rhs, env)
	if halts(right): return right
	return infix_operation(left, node.operator, right, node)

def _eval_if(node:syntax.IfExpression, env:Environment):
	condition = evaluate(node.condition, env)
	if halts(condition): return condition
	if is_truthy(condition): return evaluate(node.consequence, env)
	if node.alternative is not None: return evaluate(node.alternative, env)
	return NULL

def _eval_function_literal(node:syntax.FunctionLiteral, env:Environment):
	return Closure(node, env)

def _eval_call(node:syntax.CallExpression, env:Environment):
	function = evaluate(node.function, env)
	if halts(function): return function
	args = []
	for expr in node.arguments:
		arg = evaluate(expr, env)
		if halts(arg): return arg
		args.append(arg)
	if not isinstance(function, Function):
		return Error("not a function: " + function.type_name, node)
	result = function.apply(args)
	if is_error(result): return result.at(node)
	return result

def _eval_array(node:syntax.ArrayLiteral, env:Environment):
	elements = []
	for expr in node.elements:
		element = evaluate(expr, env)
		if halts(element): return element
		elements.append(element)
	return Array(elements)

def _eval_index(node:syntax.IndexExpression, env:Environment):
	lhs = evaluate(node.lhs, env)
	if halts(lhs): return lhs
	index = evaluate(node.index, env)
	if halts(index): return index
	if isinstance(lhs, Array) and isinstance(index, Integer):
		if 0 <= index.value < len(lhs.elements): return lhs.elements[index.value]
		return NULL
	if isinstance(lhs, Hash):
		if not isinstance(index, Hashable):
			return Error("unusable as hash key: " + index.type_name, node.index)
		found = lhs.get(index)
		return NULL if found is None else found
	return Error("index operator not supported: " + lhs.type_name, node)

def _eval_hash(node:syntax.HashLiteral, env:Environment):
	pairs = {}
	for key_expr, value_expr in node.pairs:
		key = evaluate(key_expr, env)
		if halts(key): return key
		if not isinstance(key, Hashable):
			return Error("unusable as hash key: " + key.type_name, key_expr)
		value = evaluate(value_expr, env)
		if halts(value): return value
		pairs[key.hash_key()] = key, value
	return Hash(pairs)

attach_evaluation_methods(globals())
