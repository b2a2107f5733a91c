"""
A little expression language of exact rational arithmetic,
with sequences and a parallel `map` and `reduce` over them.
"""
from .executive import Session
from .evaluator import Standard, Error
from .diagnostics import ParseError, EvaluationError
