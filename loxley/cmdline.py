"""
This is an interpreter for the Loxley dialect of Lox.

For example:

    loxley program.lox

will run program.lox if possible, or else try to explain why not.

    loxley

with no program starts an interactive prompt. End it with end-of-file.

    loxley -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="loxley",
	description=__doc__,
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", help="try examples/closures.lox for example.")
parser.add_argument('-c', "--check", action="store_true", help="Parse and resolve the program but do not actually execute it.")
parser.add_argument('-d', "--dump", action="store_true", help="Print each parsed statement in prefix form, then stop.")
parser.add_argument('-a', "--arena", action="store_true", help="Keep run-time scopes in an arena rather than a chain.")
parser.add_argument('-v', "--verbose", action="count", help="Chatter about progress on stderr.")

def run(args):
	from .diagnostics import Report, TooManyIssues, Yuck
	from .executive import Session
	report = Report(verbose=args.verbose)
	session = Session(report, arena=args.arena)
	if args.program is None:
		session.repl()
		return 0
	try:
		path = Path.cwd() / args.program
		text = session.load(path)
		if args.dump:
			session.dump(text, path)
		elif args.check:
			session.check_text(text, path)
			print("Looks plausible to me.", file=sys.stderr)
		else:
			session.run_text(text, path)
	except Yuck as ex:
		report.info("Failed in phase", ex.args[0])
		report.complain_to_console()
		return 1
	except TooManyIssues:
		report.complain_to_console()
		print("Giving up after a few issues.", file=sys.stderr)
		return 1
	return 0

def main(argv=None):
	exit(run(parser.parse_args(argv)))
