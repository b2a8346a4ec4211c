"""
Exemplar generates type declarations from example values.

{0}

For example:

    exemplar shapes.exm

will print the declarations that shapes.exm generates, or else try to explain why not.

    exemplar shapes.exm -d player.exm -o generated.exm

will first read the existing declarations in player.exm,
then write whatever shapes.exm generates into generated.exm.

    exemplar -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="exemplar",
	description="Generate type declarations from example values.",
)
parser.add_argument("program", help="try examples/tutorial.exm for example.")
parser.add_argument('-d', "--declarations", action="append", default=[], metavar="FILE", help="Read existing declarations from FILE first. May be given more than once.")
parser.add_argument('-o', "--output", metavar="FILE", help="Write the generated declarations to FILE instead of the console.")
parser.add_argument('-c', "--check", action="count", help="Generate verbosely but do not write anything.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .session import generate, Yuck
	report = Report(verbose=args.check)
	here = Path.cwd()
	try:
		session = generate(report, here / args.program, [here / d for d in args.declarations])
	except Yuck:
		assert report.sick()
		report.complain_to_console()
		return 1
	except TooManyIssues:
		report.complain_to_console()
		return 1
	report.assert_no_issues("Generation reported an issue but failed to fail.")
	if args.check:
		print("Generated %d declaration(s). Looks plausible to me." % len(session.generated), file=sys.stderr)
	elif args.output:
		with open(here / args.output, "w", encoding="utf-8") as fh:
			fh.write(session.output())
	else:
		sys.stdout.write(session.output())
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
