"""
Everything that can go wrong, and the means to complain about it.

Evaluation errors are ordinary exceptions whose text is the message
a user sees. They get raised wherever the trouble is noticed and caught
once, at the statement boundary, where they become an Error event.
"""
import sys

class EvaluationError(Exception):
	""" Base of every failure that can happen while evaluating a program """

class UndefinedVariable(EvaluationError):
	def __init__(self, name:str):
		super().__init__('Variable "%s" not defined' % name)
		self.name = name

class TypeMismatch(EvaluationError):
	def __init__(self, context:str, expected_kind:str, got_rendering:str):
		super().__init__("%s expected %s, got %s" % (context, expected_kind, got_rendering))
		self.context = context
		self.expected_kind = expected_kind
		self.got_rendering = got_rendering

class SequenceBoundsError(EvaluationError):
	NON_NUMBER = "non-number"
	NON_INTEGER = "non-integer"
	START_AFTER_END = "start-after-end"

	def __init__(self, reason:str, text:str):
		super().__init__(text)
		self.reason = reason

class DivisionByZero(EvaluationError, ZeroDivisionError):
	def __init__(self, text="Division by zero"):
		super().__init__(text)

class UnsupportedExponent(EvaluationError):
	def __init__(self):
		super().__init__("Raising to a decimal is not supported")

class NonAssociativeLambda(EvaluationError):
	def __init__(self):
		super().__init__("The lambda expression of `reduce` must be an associative operation")

class Canceled(EvaluationError):
	def __init__(self):
		super().__init__("Canceled")

class NestingTooDeep(EvaluationError):
	""" Ran out of stack on a deeply nested expression, while parsing or evaluating. """
	def __init__(self):
		super().__init__("Expression is nested too deeply")


class ParseError(Exception):
	"""
	The parser gave up at a particular line and column.
	The string form is the complete diagnostic, with a one-line excerpt
	of the source and a caret under the offending column.
	"""
	def __init__(self, line:int, column:int, rule:str, message:str, source:str):
		super().__init__(line, column, rule, message)
		self.line, self.column = line, column
		self.rule, self.message = rule, message
		self.source = source

	def excerpt(self) -> str:
		lines = self.source.split("\n")
		text = lines[self.line-1] if self.line <= len(lines) else ""
		prefix = "%d|" % self.line
		return prefix + text + "\n" + ">" * (len(prefix) + self.column - 1) + "^"

	def __str__(self):
		return "Parse error at %d:%d (%s)\n\n%s\n\n%s" % (
			self.line, self.column, self.rule, self.message, self.excerpt()
		)


class Report:
	""" Chatter and complaints for the console go through here, to stderr. """

	def __init__(self, *, verbose:int=0, stream=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._stream = stream
		self.nr_complaints = 0

	def sick(self): return bool(self.nr_complaints)

	def _out(self):
		return self._stream or sys.stderr

	def info(self, *args, level:int=1):
		if self._verbose >= level:
			print(*args, file=self._out())

	def complain(self, text:str):
		self.nr_complaints += 1
		print(text, file=self._out())
		self._out().flush()

	def reset(self):
		self.nr_complaints = 0
