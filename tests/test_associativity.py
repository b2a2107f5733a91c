import unittest
from jetlang.associativity import simplify, is_associative
from jetlang.syntax import NumberLiteral, Identifier, SequenceLiteral, Reduce, Map

y, z = Identifier("y"), Identifier("z")
zero, one, two, three = (NumberLiteral(n) for n in range(4))

def _simplify(expr):
	return simplify(expr, "y", "z")

class AssociativityTests(unittest.TestCase):
	
	def assertAssociative(self, expr):
		self.assertTrue(is_associative(expr, "y", "z"), str(expr))
	
	def assertDisassociative(self, expr):
		self.assertFalse(is_associative(expr, "y", "z"), str(expr))
	
	def test_constants(self):
		for expr in [one, one + two, one - two, two * three, two / three, two ** three, Identifier("k") - one]:
			with self.subTest(str(expr)):
				self.assertAssociative(expr)
	
	def test_simple_positive(self):
		for expr in [y + z, z + y, y * z, y + z + three, y * z * three]:
			with self.subTest(str(expr)):
				self.assertAssociative(expr)
	
	def test_simple_negative(self):
		for expr in [y - z, z - y, y / z, z / y, y ** z, z ** y, y, z]:
			with self.subTest(str(expr)):
				self.assertDisassociative(expr)
	
	def test_only_one_argument(self):
		# Adding a constant to one argument forgets the other, so nothing folds right.
		for expr in [y + three, three + z, z * two, y + y]:
			with self.subTest(str(expr)):
				self.assertDisassociative(expr)
	
	def test_mixed_operators(self):
		self.assertDisassociative((y + z) * three)
		self.assertDisassociative((y * z) + three)
		self.assertDisassociative((y + z) * two)
	
	def test_repeated_argument(self):
		self.assertDisassociative(y + z + z)
		self.assertDisassociative(y * z * y)
	
	def test_positive_via_simplification(self):
		for expr in [
			(y - zero) * z,
			y * zero,
			zero * y,
			(y * one) + z,
			(one * y) + z,
			y / one + z,
			y ** zero,
			(y ** one) + z,
		]:
			with self.subTest(str(expr)):
				self.assertAssociative(expr)
	
	def test_positive_complex(self):
		self.assertAssociative((y + y) * (z + z) * NumberLiteral(7))
		self.assertAssociative(y * (z + z + z))
		self.assertAssociative(y + (z + z - z))
		self.assertAssociative(y * (z * two + z))
	
	def test_no_false_positives_from_scaling(self):
		# y * (z + 1) is not associative, nor is y - 2*y style rewriting.
		self.assertDisassociative(y * (z + one))
		self.assertDisassociative(y + (z - z * two))
		self.assertDisassociative(zero - y + z)
	
	def test_nested_reduce(self):
		inner = Reduce(SequenceLiteral(y, z), one, "a", "b", Identifier("a") + Identifier("b"))
		self.assertDisassociative(inner)
		self.assertDisassociative(inner + y + z)
		self.assertDisassociative(Reduce(one, one, "a", "b", one))
	
	def test_map_is_just_walked(self):
		self.assertDisassociative(Map(SequenceLiteral(y, z), "q", Identifier("q")) + y)
	
	def test_same_name_twice(self):
		self.assertFalse(is_associative(y + y, "y", "y"))
		self.assertFalse(is_associative(y, "y", "y"))
		self.assertTrue(is_associative(one + two, "y", "y"))

class SimplifierTests(unittest.TestCase):
	
	def test_doubling(self):
		self.assertEqual(y * two, _simplify(y + y))
		self.assertEqual(z * two, _simplify(z + z))
	
	def test_scaling(self):
		self.assertEqual(y * three, _simplify(y + y * two))
		self.assertEqual(y * three, _simplify(two * y + y))
		self.assertEqual(z, _simplify(z * two - z))
	
	def test_constant_folding(self):
		self.assertEqual(NumberLiteral(5), _simplify(three + two))
		self.assertEqual(NumberLiteral(6), _simplify(three * two))
	
	def test_subtraction(self):
		self.assertEqual(y, _simplify(y - zero))
		self.assertEqual(zero, _simplify(y - y))
		self.assertEqual(zero - y, _simplify(zero - y))
	
	def test_no_rule_applies(self):
		self.assertEqual(y + two, _simplify(y + two))
		self.assertEqual(y / z, _simplify(y / z))
	
	def test_input_untouched(self):
		expr = (y - zero) * (z + z)
		before = repr(expr)
		_simplify(expr)
		self.assertEqual(before, repr(expr))
