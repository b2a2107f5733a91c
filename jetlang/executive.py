"""
The overall control for running programs: one session per editor, console, or test.

A session owns the worker pool and the global names. Programs are submitted
one at a time; each submission gets a fresh cancel-token, which `cancel`
trips from whatever thread happens to call it.
"""
from threading import Lock
from typing import Iterator, Optional
from .diagnostics import ParseError, NestingTooDeep
from .evaluator import Interpreter, OutputEvent, Error
from .front_end import parse_text
from .scheduler import POOL_SIZE, CancelToken, make_pool
from .values import PRECISION

class Session:
	def __init__(self, *, precision:int=PRECISION, workers:int=POOL_SIZE):
		self._pool = make_pool(workers)
		self._interpreter = Interpreter(self._pool, precision=precision, nr_workers=workers)
		self._mutex = Lock()
		self._current:Optional[CancelToken] = None

	@property
	def names(self):
		return self._interpreter.names

	@property
	def busy(self) -> bool:
		with self._mutex:
			return self._current is not None

	def submit(self, source:str) -> Iterator[OutputEvent]:
		"""
		Parse and run a program, yielding its output events as they happen.
		A program that does not parse produces exactly one Error event and no other effect.
		The submission counts as current from the moment of this call, so a
		`cancel` that comes before the first event is still honored.
		"""
		token = CancelToken()
		with self._mutex:
			self._current = token
		return self._events(source, token)

	def _events(self, source:str, token:CancelToken) -> Iterator[OutputEvent]:
		try:
			try: program = parse_text(source)
			except (ParseError, NestingTooDeep) as ex:
				yield Error(str(ex))
				return
			yield from self._interpreter.interpret(program, token)
		finally:
			with self._mutex:
				if self._current is token:
					self._current = None

	def run(self, source:str) -> list:
		return list(self.submit(source))

	def cancel(self):
		""" Stop whatever is running now. Harmless when nothing is. """
		with self._mutex:
			if self._current is not None:
				self._current.cancel()

	def close(self):
		self.cancel()
		self._pool.shutdown(wait=True)

	def __enter__(self): return self
	def __exit__(self, *exc): self.close()
