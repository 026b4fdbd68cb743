"""
This is an interpreter for the PicoLang programming language.

For example:

    picolang

starts an interactive session, while

    picolang program.pico

runs program.pico and prints its final value, or else tries to explain why not.
"""
import sys, argparse, getpass
from pathlib import Path

PROMPT = ">> "

parser = argparse.ArgumentParser(
	prog="picolang",
	description=__doc__,
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", help="Run this file. Without it, start an interactive session.")
parser.add_argument('-i', "--interactive", action="store_true", help="Stay for an interactive session after running the program.")
parser.add_argument('-v', "--verbose", action="count", help="Trace what the interpreter is up to, on stderr.")
parser.add_argument('-t', "--tokens", action="store_true", help="Print the token stream instead of evaluating.")
parser.add_argument('-a', "--ast", action="store_true", help="Print the parsed program in canonical form instead of evaluating.")
parser.add_argument('-q', "--quiet", action="store_true", help="Skip the greeting.")
parser.add_argument("--max-issues", type=int, default=10, help="Give up after this many issues in one input.")

def greeting() -> str:
	try: user = getpass.getuser()
	except (KeyError, OSError): user = "friend"
	return "Hello %s! This is the PicoLang programming language!\nFeel free to type in commands" % user

def _show(session, text:str, source:str, args, stdout) -> bool:
	""" Handle one chunk of input according to the flags. Answer whether it went well. """
	from .diagnostics import TooManyIssues
	from .lexer import Lexer
	from . import front_end
	report = session.report
	report.reset()
	try:
		if args.tokens:
			for token in Lexer(text):
				print("%-10s %s" % (token.kind.name, token.literal), file=stdout)
			return True
		if args.ast:
			program = front_end.parse_text(text, report, source)
			if program is not None:
				print(program, file=stdout)
		else:
			result = session.execute(text, source)
			if result is not None and report.ok():
				print(result.inspect(), file=stdout)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return False
	if report.sick():
		report.complain_to_console()
		return False
	return True

def repl(session, args, stdin=None, stdout=None):
	""" Read a line, evaluate it, print the outcome; until end-of-input. """
	stdin = stdin or sys.stdin
	stdout = stdout or sys.stdout
	line_number = 0
	while True:
		print(PROMPT, end="", file=stdout, flush=True)
		line = stdin.readline()
		if not line:
			print(file=stdout)
			return
		line_number += 1
		if line.strip():
			_show(session, line, "<stdin:%d>" % line_number, args, stdout)

def run(args, stdin=None, stdout=None):
	from .diagnostics import Report
	from .tree_walker.executive import Session
	stdout = stdout or sys.stdout
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	session = Session(report)
	if args.program:
		path = Path.cwd() / args.program
		try: text = path.read_text(encoding="utf-8")
		except OSError as ex:
			print("Could not read %s: %s" % (path, ex), file=sys.stderr)
			return 1
		ok = _show(session, text, str(path), args, stdout)
		if not args.interactive:
			return 0 if ok else 1
	if not args.quiet:
		print(greeting(), file=stdout)
	repl(session, args, stdin, stdout)
	return 0

def main():
	exit(run(parser.parse_args()))
