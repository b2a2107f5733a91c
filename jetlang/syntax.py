"""
The set of parse-nodes.
The parser calls these constructors bottom-up; nothing modifies a node afterward.
Nodes compare structurally, which the associativity analysis leans on heavily.

Walking the tree is double-dispatch: a node's `accept` hands it to
`visitor.visit`, which finds the `visit_<ClassName>` method for that node.
"""
from enum import Enum
from typing import Sequence
from .fraction import Fraction, to_string

class Node:
	_fields: tuple[str, ...] = ()

	def accept(self, visitor, *args):
		return visitor.visit(self, *args)

	def _key(self):
		return tuple(getattr(self, f) for f in self._fields)

	def __eq__(self, other):
		if type(other) is not type(self): return NotImplemented
		return self._key() == other._key()

	def __hash__(self): return hash((type(self).__name__, self._key()))

	def __repr__(self):
		return "%s(%s)" % (type(self).__name__, ", ".join(repr(x) for x in self._key()))

class Program(Node):
	_fields = ("statements",)
	def __init__(self, statements:Sequence["Statement"]):
		self.statements = tuple(statements)

###############################################################################

class Statement(Node): pass

class Print(Statement):
	_fields = ("text",)
	def __init__(self, text:str): self.text = text

class Out(Statement):
	_fields = ("expr",)
	def __init__(self, expr:"Expression"): self.expr = expr

class Var(Statement):
	_fields = ("name", "expr")
	def __init__(self, name:str, expr:"Expression"):
		self.name, self.expr = name, expr

class ExpressionStatement(Statement):
	_fields = ("expr",)
	def __init__(self, expr:"Expression"): self.expr = expr

###############################################################################

class Expression(Node):
	# These make tests and the simplifier read like algebra.
	def __add__(self, other): return Operation(self, Operator.ADD, other)
	def __sub__(self, other): return Operation(self, Operator.SUB, other)
	def __mul__(self, other): return Operation(self, Operator.MUL, other)
	def __truediv__(self, other): return Operation(self, Operator.DIV, other)
	def __pow__(self, other): return Operation(self, Operator.EXP, other)

class Operator(Enum):
	ADD = "+"
	SUB = "-"
	MUL = "*"
	DIV = "/"
	EXP = "^"

	@property
	def precedence(self) -> int:
		return PRECEDENCE[self]

PRECEDENCE = {
	Operator.ADD: 10, Operator.SUB: 10,
	Operator.MUL: 20, Operator.DIV: 20,
	Operator.EXP: 30,
}

class NumberLiteral(Expression):
	_fields = ("value",)
	def __init__(self, value:Fraction):
		if isinstance(value, int): value = Fraction(value)
		assert isinstance(value, Fraction), type(value)
		self.value = value
	def __str__(self): return to_string(self.value, 30)

class Identifier(Expression):
	_fields = ("name",)
	def __init__(self, name:str): self.name = name
	def __str__(self): return self.name

class SequenceLiteral(Expression):
	_fields = ("start", "end")
	def __init__(self, start:Expression, end:Expression):
		self.start, self.end = start, end
	def __str__(self): return "{%s, %s}" % (self.start, self.end)

class Operation(Expression):
	_fields = ("left", "operator", "right")
	def __init__(self, left:Expression, operator:Operator, right:Expression):
		assert isinstance(operator, Operator), operator
		self.left, self.operator, self.right = left, operator, right
	def __str__(self): return "(%s %s %s)" % (self.left, self.operator.value, self.right)

class Reduce(Expression):
	_fields = ("input", "initial", "arg_a", "arg_b", "body")
	def __init__(self, input:Expression, initial:Expression, arg_a:str, arg_b:str, body:Expression):
		self.input, self.initial = input, initial
		self.arg_a, self.arg_b = arg_a, arg_b
		self.body = body
	def __str__(self):
		return "reduce(%s, %s, %s %s -> %s)" % (self.input, self.initial, self.arg_a, self.arg_b, self.body)

class Map(Expression):
	_fields = ("input", "arg", "body")
	def __init__(self, input:Expression, arg:str, body:Expression):
		self.input, self.arg, self.body = input, arg, body
	def __str__(self): return "map(%s, %s -> %s)" % (self.input, self.arg, self.body)
