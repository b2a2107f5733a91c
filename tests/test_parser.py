import unittest
from jetlang.front_end import parse_text
from jetlang.diagnostics import ParseError
from jetlang.fraction import Fraction
from jetlang.syntax import (
	Program, Print, Out, Var, ExpressionStatement,
	NumberLiteral, Identifier, SequenceLiteral, Operation, Operator, Map, Reduce,
)

one, two, three = NumberLiteral(1), NumberLiteral(2), NumberLiteral(3)
a, b, x = Identifier("a"), Identifier("b"), Identifier("x")

def _expr(text):
	program = parse_text(text)
	assert len(program.statements) == 1, program
	stmt = program.statements[0]
	assert isinstance(stmt, ExpressionStatement), stmt
	return stmt.expr

class StatementTests(unittest.TestCase):
	
	def test_each_kind(self):
		program = parse_text('var a = 1\nout a\nprint "hello there"\na + 1')
		self.assertEqual(Program([
			Var("a", one),
			Out(a),
			Print("hello there"),
			ExpressionStatement(a + one),
		]), program)
	
	def test_print_needs_no_space(self):
		self.assertEqual(Program([Print("b")]), parse_text('print"b"'))
	
	def test_keywords_inside_names(self):
		program = parse_text("variable\noutput")
		self.assertEqual(Program([
			ExpressionStatement(Identifier("variable")),
			ExpressionStatement(Identifier("output")),
		]), program)
	
	def test_blank_lines_and_indentation(self):
		program = parse_text("\n\n  var a = 1  \n\n\t out a\n\n")
		self.assertEqual(Program([Var("a", one), Out(a)]), program)

class ExpressionTests(unittest.TestCase):
	
	def test_precedence(self):
		self.assertEqual(one + two * three, _expr("1 + 2 * 3"))
		self.assertEqual((one + two) * three, _expr("(1 + 2) * 3"))
		self.assertEqual(one - two / three ** two, _expr("1 - 2 / 3 ^ 2"))
	
	def test_left_associative(self):
		self.assertEqual((one ** two) ** three, _expr("1 ^ 2 ^ 3"))
		self.assertEqual((one - two) - three, _expr("1-2-3"))
		self.assertEqual((one / two) * three, _expr("1 / 2 * 3"))
	
	def test_numbers_are_exact(self):
		self.assertEqual(NumberLiteral(Fraction(1, 10)), _expr("0.1"))
		self.assertEqual(NumberLiteral(Fraction(99, 8)), _expr("12.375"))
	
	def test_negative_literals(self):
		self.assertEqual(NumberLiteral(-1) ** Identifier("i"), _expr("-1^i"))
		self.assertEqual(two - one, _expr("2-1"))
		self.assertEqual(two - NumberLiteral(-1), _expr("2 - -1"))
	
	def test_sequence(self):
		self.assertEqual(SequenceLiteral(one, a + two), _expr("{1, a+2}"))
		self.assertEqual(SequenceLiteral(one, three), _expr("{ 1 ,3 }"))
	
	def test_map_and_reduce(self):
		self.assertEqual(
			Map(SequenceLiteral(one, three), "x", x * two),
			_expr("map({1, 3}, x -> x * 2)"),
		)
		self.assertEqual(
			Reduce(Identifier("seq"), NumberLiteral(0), "a", "b", a + b),
			_expr("reduce(seq, 0, a b -> a + b)"),
		)
		self.assertEqual(
			Reduce(Map(a, "x", x), one, "a", "b", a * b),
			_expr("reduce( map(a,x->x) ,1,a b->a*b )"),
		)
	
	def test_builtin_names_are_still_names(self):
		self.assertEqual(Identifier("map"), _expr("map"))
		self.assertEqual(Identifier("reduce") + one, _expr("reduce + 1"))
	
	def test_operator_enum(self):
		self.assertIs(Operator.EXP, _expr("a^b").operator)
		self.assertLess(Operator.SUB.precedence, Operator.DIV.precedence)
		self.assertLess(Operator.MUL.precedence, Operator.EXP.precedence)

class ParseErrorTests(unittest.TestCase):
	
	def _error(self, text) -> ParseError:
		with self.assertRaises(ParseError) as cm:
			parse_text(text)
		return cm.exception
	
	def test_leftover_input(self):
		ex = self._error('print "a" print"b')
		self.assertEqual((1, 10, "EndOfInputParser"), (ex.line, ex.column, ex.rule))
		self.assertEqual(
			'Parse error at 1:10 (EndOfInputParser)\n\n'
			'Expected end of input, but still had input remaining\n\n'
			'1|print "a" print"b\n'
			'>>>>>>>>>>>^',
			str(ex),
		)
	
	def test_nothing_matches(self):
		ex = self._error("<>")
		self.assertEqual(
			"Parse error at 1:1 (Choice4Parser)\n\n"
			"No inputs matched\n\n"
			"1|<>\n"
			">>^",
			str(ex),
		)
	
	def test_error_on_a_later_line(self):
		ex = self._error("var a = 1\nout a\nout <>")
		self.assertEqual(3, ex.line)
		self.assertTrue(str(ex).endswith("3|out <>\n" + ">" * (2 + ex.column - 1) + "^"))
	
	def test_empty_program(self):
		ex = self._error("")
		self.assertEqual((1, 1), (ex.line, ex.column))
	
	def test_unclosed_forms(self):
		for text in ["(1 + 2", "{1, 2", "map({1, 2}, x -> x", "reduce({1,2}, 0, a -> a)", 'print "oops']:
			with self.subTest(text):
				self._error(text)
