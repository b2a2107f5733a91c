"""
A small kit of parser combinators.

Each parser has a rule-name (for error messages) and a `parse` method
taking a context and an offset, answering with a semantic value and the
offset just past what it consumed. Failure is an exception carrying the
offset, rule, and a description of what was expected there.

Choice is ordered and backtracking, so a failure is not necessarily the
end of the story. The context remembers the failure that got furthest
into the text; when the parse as a whole fails, that is the one to report.
"""
from typing import Any, Callable, Optional

INLINE_SPACE = " \t\r"
ALL_SPACE = INLINE_SPACE + "\n"

class ParseFailure(Exception):
	def __init__(self, offset:int, rule:str, message:str):
		super().__init__(offset, rule, message)
		self.offset, self.rule, self.message = offset, rule, message

class ParserContext:
	furthest: Optional[ParseFailure]

	def __init__(self, text:str):
		self.text = text
		self.furthest = None

	def note(self, failure:ParseFailure):
		# Later failures win ties: they come from the rules further out.
		if self.furthest is None or failure.offset >= self.furthest.offset:
			self.furthest = failure

class Parser:
	name = "Parser"

	def parse(self, ctx:ParserContext, offset:int) -> tuple[Any, int]:
		raise NotImplementedError(type(self))

	def fail(self, ctx:ParserContext, offset:int, message:str):
		failure = ParseFailure(offset, self.name, message)
		ctx.note(failure)
		raise failure

	def mapped(self, fn:Callable) -> "Parser":
		return Mapped(self, fn)

class LiteralToken(Parser):
	name = "LiteralTokenParser"
	def __init__(self, token:str): self.token = token
	def parse(self, ctx, offset):
		if ctx.text.startswith(self.token, offset):
			return self.token, offset + len(self.token)
		self.fail(ctx, offset, "Expected '%s'" % self.token)

class CharIn(Parser):
	name = "CharInParser"
	def __init__(self, chars:str): self.chars = chars
	def parse(self, ctx, offset):
		text = ctx.text
		if offset < len(text) and text[offset] in self.chars:
			return text[offset], offset + 1
		self.fail(ctx, offset, "Expected one of [%s]" % ", ".join(repr(c) for c in self.chars))

class ManyCharsNotIn(Parser):
	""" Zero or more characters, stopping at any of the given ones. """
	name = "CharNotInParser"
	def __init__(self, chars:str): self.chars = chars
	def parse(self, ctx, offset):
		text, end = ctx.text, offset
		while end < len(text) and text[end] not in self.chars:
			end += 1
		return text[offset:end], end

class Digits(Parser):
	name = "DigitParser"
	def parse(self, ctx, offset):
		text, end = ctx.text, offset
		while end < len(text) and text[end] in "0123456789":
			end += 1
		if end == offset: self.fail(ctx, offset, "Expected a digit")
		return text[offset:end], end

class IdentifierToken(Parser):
	name = "IdentifierTokenParser"
	def parse(self, ctx, offset):
		text, end = ctx.text, offset
		if end < len(text) and (text[end].isalpha() or text[end] == "_"):
			end += 1
			while end < len(text) and (text[end].isalnum() or text[end] == "_"):
				end += 1
			return text[offset:end], end
		self.fail(ctx, offset, "Expected an identifier")

class RequiredWhitespace(Parser):
	name = "RequiredWhitespaceParser"
	def parse(self, ctx, offset):
		end = skip_space(ctx.text, offset)
		if end == offset: self.fail(ctx, offset, "Expected whitespace")
		return None, end

class OptionalWhitespace(Parser):
	name = "OptionalWhitespaceParser"
	def __init__(self, chars:str=INLINE_SPACE): self.chars = chars
	def parse(self, ctx, offset):
		return None, skip_space(ctx.text, offset, self.chars)

def skip_space(text:str, offset:int, chars:str=INLINE_SPACE) -> int:
	while offset < len(text) and text[offset] in chars:
		offset += 1
	return offset

class EndOfInput(Parser):
	""" Trailing whitespace is not input. """
	name = "EndOfInputParser"
	def parse(self, ctx, offset):
		if skip_space(ctx.text, offset, ALL_SPACE) < len(ctx.text):
			self.fail(ctx, offset, "Expected end of input, but still had input remaining")
		return None, offset

class Maybe(Parser):
	name = "MaybeParser"
	def __init__(self, inner:Parser): self.inner = inner
	def parse(self, ctx, offset):
		try: return self.inner.parse(ctx, offset)
		except ParseFailure: return None, offset

class Sequence(Parser):
	name = "SequenceParser"
	def __init__(self, *parts:Parser): self.parts = parts
	def parse(self, ctx, offset):
		values = []
		for p in self.parts:
			value, offset = p.parse(ctx, offset)
			values.append(value)
		return tuple(values), offset

class Choice(Parser):
	def __init__(self, *alternatives:Parser):
		self.alternatives = alternatives
		self.name = "Choice%dParser" % len(alternatives)

	def parse(self, ctx, offset):
		for alt in self.alternatives:
			try: return alt.parse(ctx, offset)
			except ParseFailure: pass
		self.fail(ctx, offset, "No inputs matched")

class SeparatedBy(Parser):
	""" One or more items. A separator not followed by an item is given back. """
	name = "SeparatedByParser"
	def __init__(self, item:Parser, separator:Parser):
		self.item, self.separator = item, separator

	def parse(self, ctx, offset):
		value, offset = self.item.parse(ctx, offset)
		items = [value]
		while True:
			try:
				_, after = self.separator.parse(ctx, offset)
				value, after = self.item.parse(ctx, after)
			except ParseFailure:
				return items, offset
			items.append(value)
			offset = after

class Lazy(Parser):
	""" Stands in for a parser defined later, so grammars can be recursive. """
	name = "LazyParser"
	def __init__(self): self.inner = None
	def uses(self, inner:Parser): self.inner = inner
	def parse(self, ctx, offset):
		return self.inner.parse(ctx, offset)

class Mapped(Parser):
	def __init__(self, inner:Parser, fn:Callable):
		self.inner, self.fn = inner, fn
		self.name = inner.name
	def parse(self, ctx, offset):
		value, offset = self.inner.parse(ctx, offset)
		return self.fn(value), offset
