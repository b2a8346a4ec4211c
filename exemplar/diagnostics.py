import sys, random
from typing import Sequence, Any
from pathlib import Path
from boozetools.support.failureprone import SourceText, illustration

from .location import lookup_span
from .ontology import Phrase
from .errors import GenerationError, RedefinitionError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Blasted Thing',
		'Confound it', 'Crud', 'Curses', "Crikey",
		'Dag Nabbit', 'Drat', 'Fiddlesticks',
		'Gack', 'Good Grief', 'Great Googly Moogly', "Great Scott",
		'SNAP', "Infernal Tarnation", 'Jeepers', 'Heavens',
		"Mercy", 'Nuts', 'Rats', 'Woe is me',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'No declarations for you.',
		'I have no idea what the right type is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues until somebody asks to see them. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def error(self, guilty: Sequence[Phrase], msg: str):
		""" Actually make an entry of an issue """
		for g in guilty: assert isinstance(g, Phrase), g
		problem = [Annotation(g, "") for g in guilty]
		self.issue(Pic(msg, problem))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:
	def generic_parse_error(self, token:Phrase, message:str, hint:str):
		intro = "Exemplar got confused: %s" % message
		problem = [Annotation(token, "Exemplar got confused here")]
		footer = ["Here's my best guess:\n\t"+hint] if hint else []
		self.issue(Pic(intro, problem, footer))

	def _file_error(self, path:Path, prefix:str):
		intro = prefix+" "+str(path)
		self.issue(Pic(intro, []))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path):
		self._file_error(path, "Something went pear-shaped while trying to read")

	def not_utf8(self, path:Path):
		self._file_error(path, "This is not UTF-8 text:")

	# Methods the session calls when a form fails:
	def generation_error(self, form:Phrase, ex:GenerationError):
		intro = "%s %s" % (ex.headline, ex.message)
		problem = [Annotation(ex.phrase, type(ex).__name__)]
		if isinstance(ex, RedefinitionError) and ex.first is not None:
			problem.insert(0, Annotation(ex.first, "Earliest definition"))
		if form is not ex.phrase:
			problem.append(Annotation(form, "while generating this"))
		self.issue(Pic(intro, problem))

class Annotation:
	path: Path
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		span = lookup_span(*node.span())
		self.path = span.path
		self.slice = span.slice
		self.text = span.text
		self.caption = caption
	def illustrate(self):
		source = SourceText(self.text, filename=str(self.path))
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
