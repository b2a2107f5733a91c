"""
The tree-walking interpreter.

Statements run strictly one after another, and only the statement
interpreter ever writes the global names. Expressions get evaluated
against an environment that never changes while they are looked at:
either the global names (between statements, nobody is writing them)
or a fresh lambda environment holding only the lambda's own arguments.

Parallelism lives entirely inside `map` and `reduce`. Each lambda
evaluation gets its own interpreter over its own little environment,
so concurrent evaluations share nothing mutable.
"""
import operator
from dataclasses import dataclass
from concurrent.futures import Executor
from functools import partial
from types import MappingProxyType
from typing import Iterator, Mapping, NamedTuple, Optional, Union
from . import fraction, syntax
from .associativity import is_associative
from .diagnostics import (
	EvaluationError, UndefinedVariable, TypeMismatch, SequenceBoundsError,
	UnsupportedExponent, NonAssociativeLambda, Canceled, NestingTooDeep,
)
from .fraction import Fraction
from .scheduler import CancelToken, TaskScope, fork_join
from .traversal import ExpressionVisitor, StatementVisitor
from .values import PRECISION, Value, NumberValue, Sequence, RangeSequence, ListSequence

ARITHMETIC = {
	syntax.Operator.ADD: operator.add,
	syntax.Operator.SUB: operator.sub,
	syntax.Operator.MUL: operator.mul,
	syntax.Operator.DIV: fraction.divide,
}

# A map over a big sequence goes out in about this many batches per worker.
BATCHES_PER_WORKER = 4
# Below this many items, a reduction just folds left-to-right on the spot.
FOLD_GRAIN = 8

@dataclass(frozen=True)
class Standard:
	text: str

@dataclass(frozen=True)
class Error:
	text: str

OutputEvent = Union[Standard, Error]

class Context(NamedTuple):
	""" What every evaluation needs besides its environment """
	pool: Executor
	token: CancelToken
	precision: int = PRECISION
	nr_workers: int = 1

	def under(self, token:CancelToken) -> "Context":
		return self._replace(token=token)

	def render(self, value:Value) -> str:
		return value.text_content(self.precision)


class ExpressionInterpreter(ExpressionVisitor):
	def __init__(self, names:Mapping[str, Value], context:Context):
		self.names = names
		self.context = context

	def visit(self, expr:syntax.Expression, *args, **kwargs) -> Value:
		self.context.token.check()
		return super().visit(expr, *args, **kwargs)

	def _expect(self, expr:syntax.Expression, kind:type, where:str):
		value = self.visit(expr)
		if not isinstance(value, kind):
			raise TypeMismatch(where, kind.KIND, self.context.render(value))
		return value

	def visit_NumberLiteral(self, expr:syntax.NumberLiteral) -> Value:
		return NumberValue(expr.value)

	def visit_Identifier(self, expr:syntax.Identifier) -> Value:
		try: return self.names[expr.name]
		except KeyError: raise UndefinedVariable(expr.name) from None

	def _bound(self, expr:syntax.Expression, label:str) -> int:
		value = self.visit(expr)
		if not isinstance(value, NumberValue):
			text = "Sequence %s value is not a number: %s" % (label, self.context.render(value))
			raise SequenceBoundsError(SequenceBoundsError.NON_NUMBER, text)
		if not fraction.is_int(value.value):
			text = "Sequence %s value is not an integer: %s" % (label, self.context.render(value))
			raise SequenceBoundsError(SequenceBoundsError.NON_INTEGER, text)
		return fraction.to_int(value.value)

	def visit_SequenceLiteral(self, expr:syntax.SequenceLiteral) -> Value:
		start = self._bound(expr.start, "start")
		end = self._bound(expr.end, "end")
		if start > end:
			text = "Sequence start value is greater than end value: {%d, %d}" % (start, end)
			raise SequenceBoundsError(SequenceBoundsError.START_AFTER_END, text)
		return RangeSequence(start, end)

	def visit_Operation(self, expr:syntax.Operation) -> Value:
		# A chain like 1+2+3+... leans all the way down the left side.
		chain = [expr]
		while isinstance(chain[-1].left, syntax.Operation):
			chain.append(chain[-1].left)
		left = self._expect(chain[-1].left, NumberValue, "for left operand").value
		for node in reversed(chain):
			right = self._expect(node.right, NumberValue, "for right operand").value
			left = _arithmetic(node.operator, left, right)
		return NumberValue(left)

	def visit_Reduce(self, expr:syntax.Reduce) -> Value:
		sequence = self._expect(expr.input, Sequence, "Input value")
		initial = self._expect(expr.initial, NumberValue, "Initial value")
		if not is_associative(expr.body, expr.arg_a, expr.arg_b):
			raise NonAssociativeLambda()
		if isinstance(sequence, RangeSequence) and is_plain_sum(expr):
			return NumberValue(initial.value + Fraction(range_sum(sequence.first, sequence.last)))
		items = [initial]
		items.extend(sequence)
		return _fold(expr, items, 0, len(items), self.context)

	def visit_Map(self, expr:syntax.Map) -> Value:
		sequence = self._expect(expr.input, Sequence, "Input for `map`")
		if expr.body == syntax.Identifier(expr.arg):
			# Sequences are immutable, so the very same one will do.
			return sequence
		elements = sequence.values()
		size = max(1, -(-len(elements) // (self.context.nr_workers * BATCHES_PER_WORKER)))
		jobs = [
			partial(_map_batch, expr, elements[i:i+size], self.context)
			for i in range(0, len(elements), size)
		]
		results = []
		for batch in TaskScope(self.context.pool, self.context.token).run(jobs):
			results.extend(batch)
		return ListSequence(results)

def _arithmetic(op:syntax.Operator, left:Fraction, right:Fraction) -> Fraction:
	if op is syntax.Operator.EXP:
		if not fraction.is_int(right): raise UnsupportedExponent()
		return fraction.power(left, right.numerator)
	return ARITHMETIC[op](left, right)

def is_plain_sum(expr:syntax.Reduce) -> bool:
	""" Is the lambda literally a+b or b+a? """
	a, b = syntax.Identifier(expr.arg_a), syntax.Identifier(expr.arg_b)
	return expr.arg_a != expr.arg_b and expr.body in (a + b, b + a)

def range_sum(first:int, last:int) -> int:
	return last * (last + 1) // 2 - (first - 1) * first // 2

def apply_lambda(body:syntax.Expression, bindings:dict, context:Context) -> Value:
	""" Evaluate a lambda body seeing nothing but its own arguments """
	return ExpressionInterpreter(MappingProxyType(bindings), context).visit(body)

def _fold(expr:syntax.Reduce, items:list, lo:int, hi:int, context:Context) -> Value:
	size = hi - lo
	if size <= FOLD_GRAIN:
		result = items[lo]
		for i in range(lo+1, hi):
			result = apply_lambda(expr.body, {expr.arg_a: result, expr.arg_b: items[i]}, context)
		return result
	mid = lo + size // 2
	left, right = fork_join(
		context.pool, context.token,
		lambda token: _fold(expr, items, lo, mid, context.under(token)),
		lambda token: _fold(expr, items, mid, hi, context.under(token)),
	)
	return apply_lambda(expr.body, {expr.arg_a: left, expr.arg_b: right}, context)

def _map_batch(expr:syntax.Map, elements:list, context:Context, token:CancelToken) -> list:
	context = context.under(token)
	results = []
	for element in elements:
		value = apply_lambda(expr.body, {expr.arg: element}, context)
		if not isinstance(value, NumberValue):
			raise TypeMismatch("Result of `map` lambda", NumberValue.KIND, context.render(value))
		results.append(value)
	return results


class Interpreter(StatementVisitor):
	"""
	Runs programs against a set of global names that persists from one
	program to the next. A bare expression's value only gets shown if
	it comes from the program's final statement.
	"""
	def __init__(self, pool:Executor, *, precision:int=PRECISION, nr_workers:int=1):
		self.names = {}
		self._pool = pool
		self._precision = precision
		self._nr_workers = nr_workers

	def interpret(self, program:syntax.Program, token:Optional[CancelToken]=None) -> Iterator[OutputEvent]:
		token = token or CancelToken()
		context = Context(self._pool, token, self._precision, self._nr_workers)
		pending = None
		for stmt in program.statements:
			pending = None
			try:
				token.check()
				event = self.visit(stmt, context)
			except (EvaluationError, RecursionError) as ex:
				if token.is_cancelled(): ex = Canceled()
				elif isinstance(ex, RecursionError): ex = NestingTooDeep()
				yield Error(str(ex))
				return
			if isinstance(event, _Provisional): pending = event.standard
			elif event is not None: yield event
		if pending is not None:
			yield pending

	def _evaluate(self, expr:syntax.Expression, context:Context) -> Value:
		return ExpressionInterpreter(self.names, context).visit(expr)

	def visit_Print(self, stmt:syntax.Print, context:Context):
		return Standard(stmt.text)

	def visit_Out(self, stmt:syntax.Out, context:Context):
		return Standard(context.render(self._evaluate(stmt.expr, context)))

	def visit_Var(self, stmt:syntax.Var, context:Context):
		self.names[stmt.name] = self._evaluate(stmt.expr, context)

	def visit_ExpressionStatement(self, stmt:syntax.ExpressionStatement, context:Context):
		return _Provisional(Standard(context.render(self._evaluate(stmt.expr, context))))

class _Provisional(NamedTuple):
	standard: Standard
