"""
Fork-join over a pool of worker threads, with cooperative cancellation.

A TaskScope runs a batch of sibling jobs and answers with all of their
results, or else with the first failure any of them observed. A failure
trips the scope's cancel-token, which every sibling (and anything they
spawned in turn) checks as it goes, so the rest of the batch winds down
promptly. Cancelling from outside works the same way, from further up.

The thread that opens a scope does not just sit and wait. It runs the
first job itself, and then any job no worker has picked up yet. That way
nested scopes cannot starve the pool: a thread only ever blocks on a job
that some other thread is actively running.
"""
import os
from concurrent.futures import Executor, ThreadPoolExecutor
from threading import Event, Lock
from typing import Callable, Optional, Sequence, TypeVar
from .diagnostics import Canceled, NestingTooDeep

POOL_SIZE = min(32, (os.cpu_count() or 1) + 4)

T = TypeVar("T")
JOB = Callable[["CancelToken"], T]

class CancelToken:
	""" Trips when cancelled directly, or when any ancestor does. """
	def __init__(self, parent:Optional["CancelToken"]=None):
		self._parent = parent
		self._tripped = Event()

	def cancel(self):
		self._tripped.set()

	def is_cancelled(self) -> bool:
		token = self
		while token is not None:
			if token._tripped.is_set(): return True
			token = token._parent
		return False

	def check(self):
		if self.is_cancelled(): raise Canceled()

	def child(self) -> "CancelToken":
		return CancelToken(self)

def make_pool(nr_workers:int=POOL_SIZE) -> Executor:
	return ThreadPoolExecutor(max_workers=nr_workers, thread_name_prefix="jetlang worker")

class TaskScope:
	def __init__(self, pool:Executor, parent:CancelToken):
		self._pool = pool
		self.token = parent.child()
		self._mutex = Lock()
		self._failure = None

	def _fail(self, ex:BaseException):
		with self._mutex:
			if self._failure is None:
				self._failure = ex
		self.token.cancel()

	def _attempt(self, job:JOB, index:int, results:list):
		try:
			self.token.check()
			results[index] = job(self.token)
		except RecursionError:
			self._fail(NestingTooDeep())
		except BaseException as ex:
			self._fail(ex)

	def run(self, jobs:Sequence[JOB]) -> list:
		""" Results in the same order as the jobs, or else the first failure raised. """
		results = [None] * len(jobs)
		if not jobs: return results
		futures = []
		for index in range(1, len(jobs)):
			if self.token.is_cancelled(): break
			futures.append(self._pool.submit(self._attempt, jobs[index], index, results))
		self._attempt(jobs[0], 0, results)
		for index, future in enumerate(futures, 1):
			if future.cancel():
				if not self.token.is_cancelled():
					self._attempt(jobs[index], index, results)
			else:
				future.result()
		if self._failure is not None:
			raise self._failure
		# Cancellation from above can stop the submissions without any job failing.
		self.token.check()
		return results

def fork_join(pool:Executor, token:CancelToken, *jobs:JOB) -> list:
	return TaskScope(pool, token).run(jobs)
