"""
Text in, syntax tree out.

Binary operators are handled by precedence climbing over an operand
parser; everything else is assembled from the combinators. Every
operator is left-associative, including `^`, so `1 ^ 2 ^ 3` is `(1^2)^3`.
"""
from . import syntax
from .combinators import (
	Parser, ParserContext, ParseFailure, skip_space, ALL_SPACE,
	LiteralToken, CharIn, ManyCharsNotIn, Digits, IdentifierToken,
	RequiredWhitespace, OptionalWhitespace, EndOfInput,
	Maybe, Sequence, Choice, SeparatedBy, Lazy,
)
from .diagnostics import ParseError, NestingTooDeep
from .fraction import from_decimal

OPERATORS = {op.value: op for op in syntax.Operator}

space = RequiredWhitespace()
maybe_space = OptionalWhitespace()
comma = Sequence(maybe_space, CharIn(","), maybe_space)
arrow = Sequence(maybe_space, LiteralToken("->"), maybe_space)
identifier = IdentifierToken()

class OperationParser(Parser):
	"""
	Precedence climbing: an operand, then as long as the next operator
	binds at least as tightly as the current floor, its right-hand side
	parsed with the floor raised one notch past that operator.
	"""
	name = "OperationParser"
	def __init__(self, operand:Parser):
		self.operand = operand
		self.operator = CharIn("".join(OPERATORS))

	def parse(self, ctx, offset):
		return self._climb(ctx, offset, 0)

	def _climb(self, ctx:ParserContext, offset:int, floor:int):
		left, offset = self.operand.parse(ctx, offset)
		while True:
			try: glyph, after = self.operator.parse(ctx, skip_space(ctx.text, offset))
			except ParseFailure: return left, offset
			op = OPERATORS[glyph]
			if op.precedence < floor:
				return left, offset
			right, offset = self._climb(ctx, skip_space(ctx.text, after), op.precedence + 1)
			left = syntax.Operation(left, op, right)

def _number(parts) -> syntax.NumberLiteral:
	sign, whole, fraction = parts
	text = (sign or "") + whole + ("." + fraction[1] if fraction else "")
	return syntax.NumberLiteral(from_decimal(text))

def _grammar() -> Parser:
	expression = Lazy()

	parenthesized = Sequence(
		CharIn("("), maybe_space, expression, maybe_space, CharIn(")"),
	).mapped(lambda it: it[2])

	sequence_literal = Sequence(
		CharIn("{"), maybe_space, expression, comma, expression, maybe_space, CharIn("}"),
	).mapped(lambda it: syntax.SequenceLiteral(it[2], it[4]))

	number = Sequence(
		Maybe(CharIn("-")), Digits(), Maybe(Sequence(CharIn("."), Digits())),
	).mapped(_number)

	map_form = Sequence(
		LiteralToken("map("), maybe_space,
		expression, comma,
		identifier, arrow,
		expression, maybe_space, CharIn(")"),
	).mapped(lambda it: syntax.Map(it[2], it[4], it[6]))

	reduce_form = Sequence(
		LiteralToken("reduce("), maybe_space,
		expression, comma,
		expression, comma,
		identifier, space, identifier, arrow,
		expression, maybe_space, CharIn(")"),
	).mapped(lambda it: syntax.Reduce(it[2], it[4], it[6], it[8], it[10]))

	atom = Choice(
		parenthesized,
		sequence_literal,
		number,
		map_form,
		reduce_form,
		identifier.mapped(syntax.Identifier),
	)
	expression.uses(OperationParser(atom))

	statement = Choice(
		Sequence(
			LiteralToken("var"), space, identifier, maybe_space, CharIn("="), maybe_space, expression,
		).mapped(lambda it: syntax.Var(it[2], it[6])),
		Sequence(LiteralToken("out"), space, expression).mapped(lambda it: syntax.Out(it[2])),
		Sequence(
			LiteralToken("print"), maybe_space, CharIn('"'), ManyCharsNotIn('"\n'), CharIn('"'),
		).mapped(lambda it: syntax.Print(it[3])),
		expression.mapped(syntax.ExpressionStatement),
	)
	return Sequence(
		OptionalWhitespace(ALL_SPACE),
		SeparatedBy(statement, LineBreak()),
		EndOfInput(),
	).mapped(lambda it: syntax.Program(it[1]))

class LineBreak(Parser):
	"""
	Statements go one per line. Blank lines, indentation, and trailing
	spaces are all fine. Failure is reported where the statement ended.
	"""
	name = "LineBreakParser"
	def parse(self, ctx, offset):
		end = skip_space(ctx.text, offset)
		if end < len(ctx.text) and ctx.text[end] == "\n":
			return None, skip_space(ctx.text, end, ALL_SPACE)
		self.fail(ctx, offset, "Expected a new line")

PROGRAM = _grammar()

def parse_text(text:str) -> syntax.Program:
	"""
	The whole text must be a program, or else ParseError.
	Nesting too deep for the stack is NestingTooDeep instead.
	"""
	ctx = ParserContext(text)
	try:
		program, _ = PROGRAM.parse(ctx, 0)
		return program
	except ParseFailure:
		failure = ctx.furthest
		line, column = _row_col(text, failure.offset)
		raise ParseError(line, column, failure.rule, failure.message, text) from None
	except RecursionError:
		raise NestingTooDeep() from None

def _row_col(text:str, offset:int) -> tuple[int, int]:
	line = text.count("\n", 0, offset) + 1
	column = offset - (text.rfind("\n", 0, offset) + 1) + 1
	return line, column
