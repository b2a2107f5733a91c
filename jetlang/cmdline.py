"""
This is an interpreter for a small language of exact arithmetic over numbers and sequences.

{0}

For example:

    jetlang program.jet

will run program.jet if possible, or else try to explain why not.

    jetlang -e "out reduce({{1, 10}}, 0, a b -> a + b)"

runs a one-line program, and plain

    jetlang -i

starts a console session where each line is its own little program.
Names defined on one line stay defined for the next. Ctrl-C stops
whatever is running without leaving the session.

    jetlang -h

will explain all the arguments.
"""
import sys, argparse, threading
from pathlib import Path

def positive(text:str) -> int:
	value = int(text)
	if value < 1:
		raise argparse.ArgumentTypeError("must be at least 1, not %d" % value)
	return value

parser = argparse.ArgumentParser(
	prog="jetlang",
	description="Interpreter for a little language of exact arithmetic, with parallel map and reduce.",
)
parser.add_argument("program", nargs="?", help="a file with one statement per line.")
parser.add_argument('-e', "--expression", help="Run this program text instead of a file.")
parser.add_argument('-i', "--interactive", action="store_true", help="Read programs from the console, one per line.")
parser.add_argument('-c', "--check", action="store_true", help="Parse the program and report any syntax error, but do not run it.")
parser.add_argument('-p', "--precision", type=positive, help="Significant digits for decimals that never end. (Default 30.)")
parser.add_argument('-w', "--workers", type=positive, help="How many worker threads evaluate map and reduce.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on, on stderr.")

def run(args) -> int:
	from .diagnostics import Report, ParseError, NestingTooDeep
	from .executive import Session
	from .front_end import parse_text
	from .scheduler import POOL_SIZE
	from .values import PRECISION
	report = Report(verbose=args.verbose)
	if args.expression is not None:
		source = args.expression
	elif args.program is not None:
		try: source = (Path.cwd() / args.program).read_text()
		except OSError as ex:
			report.complain("Could not read %s: %s" % (args.program, ex.strerror))
			return 1
	elif args.interactive:
		source = None
	else:
		parser.print_usage(sys.stderr)
		return 2
	if args.check:
		if source is None:
			report.complain("Nothing to check.")
			return 2
		try: program = parse_text(source)
		except (ParseError, NestingTooDeep) as ex:
			report.complain(str(ex))
			return 1
		report.info("%d statement(s)." % len(program.statements))
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	precision = args.precision or PRECISION
	workers = args.workers or POOL_SIZE
	report.info("Precision %d, with %d worker(s)." % (precision, workers))
	with Session(precision=precision, workers=workers) as session:
		if source is None:
			return console(session, report)
		emit(session, source, report)
	return 1 if report.sick() else 0

def emit(session, source:str, report) -> None:
	""" Run one submission in the background, so Ctrl-C can cancel it from here. """
	from .evaluator import Standard
	events = []
	done = threading.Event()
	def work():
		try: events.extend(session.submit(source))
		finally: done.set()
	worker = threading.Thread(target=work, name="jetlang submission", daemon=True)
	worker.start()
	while True:
		try:
			done.wait()
			break
		except KeyboardInterrupt:
			report.info("Cancelling...")
			session.cancel()
	worker.join()
	for event in events:
		if isinstance(event, Standard): print(event.text)
		else: report.complain(event.text)

def console(session, report) -> int:
	print("Enter one program per line. Ctrl-D (or Ctrl-Z on Windows) to quit.", file=sys.stderr)
	while True:
		try: line = input("> ")
		except EOFError:
			print(file=sys.stderr)
			return 0
		except KeyboardInterrupt:
			print(file=sys.stderr)
			continue
		if line.strip():
			emit(session, line, report)
			report.reset()

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
