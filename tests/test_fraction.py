import unittest
from jetlang import fraction
from jetlang.fraction import Fraction, ZERO, ONE
from jetlang.diagnostics import DivisionByZero

class EngineTests(unittest.TestCase):
	
	def test_lowest_terms(self):
		f = Fraction(6, -8)
		self.assertEqual((-3, 4), (f.numerator, f.denominator))
		self.assertEqual(f, Fraction(f.numerator, f.denominator))
	
	def test_integers(self):
		self.assertTrue(fraction.is_int(Fraction(10, 2)))
		self.assertFalse(fraction.is_int(Fraction(1, 2)))
		self.assertEqual(-4, fraction.to_int(Fraction(-8, 2)))
		with self.assertRaises(ArithmeticError):
			fraction.to_int(Fraction(3, 2))
	
	def test_from_decimal(self):
		self.assertEqual(Fraction(99, 8), fraction.from_decimal("12.375"))
		self.assertEqual(Fraction(-1, 2), fraction.from_decimal("-0.5"))
		self.assertEqual(Fraction(3, 5), fraction.from_decimals("1.5", "2.5"))
	
	def test_division(self):
		self.assertEqual(Fraction(3, 2), fraction.divide(Fraction(1, 2), Fraction(1, 3)))
		with self.assertRaises(DivisionByZero) as cm:
			fraction.divide(ONE, ZERO)
		self.assertEqual("Division by zero", str(cm.exception))
		with self.assertRaises(ZeroDivisionError):
			fraction.from_decimals("1", "0.0")
	
	def test_powers(self):
		self.assertEqual(Fraction(8, 27), fraction.power(Fraction(2, 3), 3))
		self.assertEqual(Fraction(9, 4), fraction.power(Fraction(2, 3), -2))
		self.assertEqual(ONE, fraction.power(Fraction(7, 3), 0))
		self.assertEqual(ONE, fraction.power(ZERO, 0))
		self.assertEqual(Fraction(-1), fraction.power(Fraction(-1), 5))
		with self.assertRaises(DivisionByZero):
			fraction.power(ZERO, -1)

class RenderingTests(unittest.TestCase):
	
	def test_terminating(self):
		for f, text in [
			(Fraction(5), "5"),
			(Fraction(-3, 4), "-0.75"),
			(Fraction(1, 8), "0.125"),
			(Fraction(99, 8), "12.375"),
			(Fraction(1, 1024), "0.0009765625"),
			(ZERO, "0"),
			(Fraction(10**40), "1" + "0"*40),
		]:
			with self.subTest(text):
				self.assertEqual(text, fraction.to_string(f, 30))
	
	def test_recurring(self):
		self.assertEqual("0.333333333333333333333333333333", fraction.to_string(Fraction(1, 3), 30))
		self.assertEqual("0.666666666666666666666666666667", fraction.to_string(Fraction(2, 3), 30))
		self.assertEqual("-0.666666666666666666666666666667", fraction.to_string(Fraction(-2, 3), 30))
		self.assertEqual("0.14285714", fraction.to_string(Fraction(1, 7), 8))
	
	def test_trailing_zeros_are_dropped(self):
		self.assertEqual("0.033", fraction.to_string(Fraction(1, 30), 2))
		self.assertEqual("0.033", fraction.to_string(Fraction(10, 303), 2))
	
	def test_big_operands_keep_their_digits(self):
		self.assertEqual("3"*40 + ".7", fraction.to_string(Fraction(10**40 + 1, 3), 30))
