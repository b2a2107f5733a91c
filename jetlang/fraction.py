"""
Exact rational arithmetic, on top of the standard `Fraction`.

A Fraction is always in lowest terms with a positive denominator, and
comparisons never go near floating point. What this module adds is the
bits the language needs beyond that: division and powers that fail in
the language's own terms, and decimal rendering.

Decimal rendering prefers an exact terminating expansion, and only
rounds (half-up) when the expansion would recur forever.
"""
from decimal import Decimal, Context, ROUND_HALF_UP
from fractions import Fraction
from .diagnostics import DivisionByZero

ZERO = Fraction(0)
ONE = Fraction(1)

def from_decimal(text:str) -> Fraction:
	""" Exact value of a decimal literal such as "12.375" or "-0.5" """
	return Fraction(text)

def from_decimals(numerator:str, denominator:str) -> Fraction:
	return divide(from_decimal(numerator), from_decimal(denominator))

def is_int(value:Fraction) -> bool:
	return value.denominator == 1

def to_int(value:Fraction) -> int:
	if value.denominator != 1:
		raise ArithmeticError("Not an integer")
	return value.numerator

def divide(dividend:Fraction, divisor:Fraction) -> Fraction:
	if not divisor:
		raise DivisionByZero()
	return dividend / divisor

def power(base:Fraction, exponent:int) -> Fraction:
	""" Zero to a negative power is a division by zero; anything to the zero is one. """
	if exponent < 0 and not base:
		raise DivisionByZero()
	return base ** exponent

def to_string(value:Fraction, max_digits:int) -> str:
	exact = _terminating_decimal(value)
	if exact is None:
		precision = max(_precision(value.numerator), _precision(value.denominator), max_digits)
		context = Context(prec=precision, rounding=ROUND_HALF_UP)
		exact = context.divide(Decimal(value.numerator), Decimal(value.denominator))
		exact = _strip_trailing_zeros(exact)
	return format(exact, "f")

def _terminating_decimal(value:Fraction):
	"""
	The exact decimal expansion when there is one, at the smallest scale that holds it.
	Otherwise None, because the denominator has a prime factor other than 2 or 5.
	"""
	rest, twos, fives = value.denominator, 0, 0
	while rest % 2 == 0:
		rest //= 2
		twos += 1
	while rest % 5 == 0:
		rest //= 5
		fives += 1
	if rest != 1:
		return None
	scale = max(twos, fives)
	sign, digits, _ = Decimal(value.numerator * 10**scale // value.denominator).as_tuple()
	return Decimal((sign, digits, -scale))

def _precision(n:int) -> int:
	return len(str(abs(n)))

def _strip_trailing_zeros(d:Decimal) -> Decimal:
	if d.is_zero(): return Decimal(0)
	sign, digits, exponent = d.as_tuple()
	digits = list(digits)
	while exponent < 0 and digits[-1] == 0:
		digits.pop()
		exponent += 1
	return Decimal((sign, tuple(digits), exponent))
