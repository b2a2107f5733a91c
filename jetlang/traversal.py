"""
Visitor capabilities over the syntax tree, and two generic walks built on them.

The ExpressionTransformer rebuilds a tree, recursing into every child and
leaving leaves alone unless told otherwise. The BooleanQuery folds a tree
down to a single flag. Between them, they carry the associativity analysis.
"""
from enum import Enum
from boozetools.support.foundation import Visitor
from . import syntax

class StatementVisitor(Visitor):
	def visit_Print(self, stmt:syntax.Print): raise NotImplementedError(type(self))
	def visit_Out(self, stmt:syntax.Out): raise NotImplementedError(type(self))
	def visit_Var(self, stmt:syntax.Var): raise NotImplementedError(type(self))
	def visit_ExpressionStatement(self, stmt:syntax.ExpressionStatement): raise NotImplementedError(type(self))

class ExpressionVisitor(Visitor):
	def visit_NumberLiteral(self, expr:syntax.NumberLiteral): raise NotImplementedError(type(self))
	def visit_Identifier(self, expr:syntax.Identifier): raise NotImplementedError(type(self))
	def visit_SequenceLiteral(self, expr:syntax.SequenceLiteral): raise NotImplementedError(type(self))
	def visit_Operation(self, expr:syntax.Operation): raise NotImplementedError(type(self))
	def visit_Reduce(self, expr:syntax.Reduce): raise NotImplementedError(type(self))
	def visit_Map(self, expr:syntax.Map): raise NotImplementedError(type(self))

class AstVisitor(StatementVisitor, ExpressionVisitor):
	""" Both capabilities at once, plus the program that holds them. """
	def visit_Program(self, program:syntax.Program):
		for stmt in program.statements:
			self.visit(stmt)


class ExpressionTransformer(ExpressionVisitor):
	""" Identity on leaves; fresh nodes with transformed children everywhere else. """
	def visit_NumberLiteral(self, expr:syntax.NumberLiteral) -> syntax.Expression:
		return expr

	def visit_Identifier(self, expr:syntax.Identifier) -> syntax.Expression:
		return expr

	def visit_SequenceLiteral(self, expr:syntax.SequenceLiteral) -> syntax.Expression:
		return syntax.SequenceLiteral(self.visit(expr.start), self.visit(expr.end))

	def visit_Operation(self, expr:syntax.Operation) -> syntax.Expression:
		return syntax.Operation(self.visit(expr.left), expr.operator, self.visit(expr.right))

	def visit_Reduce(self, expr:syntax.Reduce) -> syntax.Expression:
		return syntax.Reduce(
			self.visit(expr.input), self.visit(expr.initial),
			expr.arg_a, expr.arg_b, self.visit(expr.body),
		)

	def visit_Map(self, expr:syntax.Map) -> syntax.Expression:
		return syntax.Map(self.visit(expr.input), expr.arg, self.visit(expr.body))


class Strategy(Enum):
	AND = True   # Every child must agree; the empty case is True.
	OR = False   # Any child will do; the empty case is False.

	@property
	def identity(self) -> bool:
		return self.value

	def combine(self, results) -> bool:
		if self is Strategy.AND: return all(results)
		else: return any(results)

class BooleanQuery(ExpressionVisitor):
	"""
	Folds an expression to one flag. Leaves answer the strategy's
	identity element unless a subclass says otherwise. Children are
	visited lazily, so the fold stops as soon as its answer is settled.
	"""
	def __init__(self, strategy:Strategy):
		self.strategy = strategy

	def _fold(self, *children:syntax.Expression) -> bool:
		return self.strategy.combine(self.visit(c) for c in children)

	def visit_NumberLiteral(self, expr:syntax.NumberLiteral) -> bool:
		return self.strategy.identity

	def visit_Identifier(self, expr:syntax.Identifier) -> bool:
		return self.strategy.identity

	def visit_SequenceLiteral(self, expr:syntax.SequenceLiteral) -> bool:
		return self._fold(expr.start, expr.end)

	def visit_Operation(self, expr:syntax.Operation) -> bool:
		return self._fold(expr.left, expr.right)

	def visit_Reduce(self, expr:syntax.Reduce) -> bool:
		return self._fold(expr.input, expr.initial, expr.body)

	def visit_Map(self, expr:syntax.Map) -> bool:
		return self._fold(expr.input, expr.body)
