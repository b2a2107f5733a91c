"""
Decide whether a two-argument lambda is safe to fold in parallel.

The answer must never be "yes" for a lambda that is not associative.
Saying "no" to something that actually is associative merely costs
the caller its chance at a parallel reduction, so when in doubt: "no".

The approach is to simplify the body with a handful of algebraic rewrites,
then insist on a very particular shape: one operator throughout, either
addition or multiplication, with each argument appearing at most once.
A constant body is trivially fine. A nested `reduce` never is.
"""
from typing import Optional
from .fraction import Fraction, ZERO as _ZERO, ONE as _ONE
from .syntax import Expression, Operation, Operator, NumberLiteral, Identifier, Reduce
from .traversal import ExpressionTransformer, BooleanQuery, Strategy

ZERO = NumberLiteral(_ZERO)
ONE = NumberLiteral(_ONE)
TWO = NumberLiteral(Fraction(2))

class AssociativeSimplifier(ExpressionTransformer):
	"""
	Rewrites bottom-up into a smaller equivalent tree, with an eye to
	the features that matter for the structural check. Produces new
	nodes; the input tree is untouched.
	"""
	def __init__(self, a:str, b:str):
		self.subjects = (Identifier(a), Identifier(b))

	def visit_Operation(self, expr:Operation) -> Expression:
		left = self.visit(expr.left)
		right = self.visit(expr.right)
		op = expr.operator
		if op is Operator.SUB:
			if right == ZERO: return left
			if left == right: return ZERO
			return self._fewer(left, right) or Operation(left, op, right)
		if op is Operator.MUL:
			if ZERO in (left, right): return ZERO
			if left == ONE: return right
			if right == ONE: return left
			if _both_literal(left, right):
				return NumberLiteral(left.value * right.value)
			return Operation(left, op, right)
		if op is Operator.DIV:
			if right == ONE: return left
			return Operation(left, op, right)
		if op is Operator.EXP:
			if right == ZERO: return ONE
			if right == ONE: return left
			return Operation(left, op, right)
		assert op is Operator.ADD, op
		for subject in self.subjects:
			if left == subject and right == subject:
				return Operation(subject, Operator.MUL, TWO)
		more = self._more(left, right)
		if more is not None: return more
		if _both_literal(left, right):
			return NumberLiteral(left.value + right.value)
		return Operation(left, op, right)

	def _more(self, left:Expression, right:Expression) -> Optional[Expression]:
		""" a + c*a -> (c+1)*a, with the operands in either order """
		for subject in self.subjects:
			for plain, scaled in ((left, right), (right, left)):
				if plain != subject: continue
				c = _coefficient(scaled, subject)
				if c is not None:
					return self.visit(Operation(subject, Operator.MUL, NumberLiteral(c + _ONE)))

	def _fewer(self, left:Expression, right:Expression) -> Optional[Expression]:
		""" c*a - a -> (c-1)*a, but only with the scaled term first. """
		for subject in self.subjects:
			if right != subject: continue
			c = _coefficient(left, subject)
			if c is not None:
				return self.visit(Operation(subject, Operator.MUL, NumberLiteral(c - _ONE)))

def _both_literal(left, right) -> bool:
	return isinstance(left, NumberLiteral) and isinstance(right, NumberLiteral)

def _coefficient(term:Expression, subject:Identifier) -> Optional[Fraction]:
	""" If term is subject*c or c*subject for a literal c, then c. """
	if isinstance(term, Operation) and term.operator is Operator.MUL:
		for x, c in ((term.left, term.right), (term.right, term.left)):
			if x == subject and isinstance(c, NumberLiteral):
				return c.value


class StructuralCheck(BooleanQuery):
	""" All-must-pass fold over the simplified tree, tallying what it sees along the way. """
	def __init__(self, a:str, b:str):
		super().__init__(Strategy.AND)
		self.a, self.b = a, b
		self.found_a = self.found_b = False
		self.operator = None

	def visit_Identifier(self, expr:Identifier) -> bool:
		if expr.name == self.a:
			if self.found_a: return False
			self.found_a = True
		if expr.name == self.b:
			if self.found_b: return False
			self.found_b = True
		return True

	def visit_Operation(self, expr:Operation) -> bool:
		if self.operator is None:
			self.operator = expr.operator
		elif expr.operator is not self.operator:
			return False
		return super().visit_Operation(expr)

	def visit_Reduce(self, expr:Reduce) -> bool:
		return False

	def verdict(self) -> bool:
		if self.a == self.b:
			# The second binding shadows the first, so only a constant will do.
			return not self.found_a
		if not (self.found_a or self.found_b):
			return True
		return self.found_a and self.found_b and self.operator in (Operator.ADD, Operator.MUL)

def simplify(expr:Expression, a:str, b:str) -> Expression:
	return AssociativeSimplifier(a, b).visit(expr)

def is_associative(expr:Expression, a:str, b:str) -> bool:
	check = StructuralCheck(a, b)
	return check.visit(simplify(expr, a, b)) and check.verdict()
