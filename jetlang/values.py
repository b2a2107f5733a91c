"""
Run-time values: numbers and sequences of numbers.

A range sequence is just its two (inclusive) bounds; the elements
appear only when something iterates over it. A list sequence holds
materialized numbers, such as what `map` produces.
Equality is by value throughout.
"""
from abc import ABC, abstractmethod
from typing import Iterator, Sequence as PySequence
from .fraction import Fraction, to_string

PRECISION = 30

class Value(ABC):
	KIND: str

	@abstractmethod
	def text_content(self, precision:int=PRECISION) -> str:
		pass

	def __str__(self): return self.text_content()

class NumberValue(Value):
	KIND = "number"

	def __init__(self, value:Fraction):
		assert isinstance(value, Fraction), type(value)
		self.value = value

	@staticmethod
	def of(n:int) -> "NumberValue":
		return NumberValue(Fraction(n))

	def text_content(self, precision:int=PRECISION) -> str:
		return to_string(self.value, precision)

	def __eq__(self, other):
		if not isinstance(other, NumberValue): return NotImplemented
		return self.value == other.value

	def __hash__(self): return hash(self.value)
	def __repr__(self): return "NumberValue(%r)" % (self.value,)

class Sequence(Value):
	KIND = "sequence"

	@abstractmethod
	def __iter__(self) -> Iterator[NumberValue]:
		pass

	@abstractmethod
	def __len__(self) -> int:
		pass

	def values(self) -> list[NumberValue]:
		return list(self)

	def text_content(self, precision:int=PRECISION) -> str:
		return "{" + " ".join(v.text_content(precision) for v in self) + "}"

	def __eq__(self, other):
		if not isinstance(other, Sequence): return NotImplemented
		return len(self) == len(other) and all(a == b for a, b in zip(self, other))

	def __hash__(self): return hash(tuple(self))

class RangeSequence(Sequence):
	""" Inclusive on both ends, and first <= last. """
	def __init__(self, first:int, last:int):
		assert first <= last, (first, last)
		self.first, self.last = first, last

	def __iter__(self):
		for i in range(self.first, self.last+1):
			yield NumberValue(Fraction(i))

	def __len__(self): return self.last - self.first + 1

	def __eq__(self, other):
		if isinstance(other, RangeSequence):
			return self.first == other.first and self.last == other.last
		return super().__eq__(other)

	def __hash__(self): return super().__hash__()
	def __repr__(self): return "RangeSequence(%d, %d)" % (self.first, self.last)

class ListSequence(Sequence):
	def __init__(self, items:PySequence[NumberValue]):
		self.items = tuple(items)

	def __iter__(self): return iter(self.items)
	def __len__(self): return len(self.items)
	def values(self): return list(self.items)
	def __repr__(self): return "ListSequence(%r)" % (list(self.items),)
