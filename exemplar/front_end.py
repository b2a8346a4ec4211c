"""
Scanner, parser, and the recognizer for top-level forms.

The grammar in Exemplar.md covers only s-expressions: atoms and three
kinds of brackets. What makes a form a declaration or a generator is
decided afterwards, by looking at the shape of each top-level group.
"""
import re, sys
from pathlib import Path
from typing import Optional

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from . import syntax
from .location import start_segment, insert_token
from .ontology import Nom, Phrase
from .errors import ExemplarParseError
from .table import Kind
from .values import Char
from .diagnostics import Report

_tables = make_tables(Path(__file__).parent/"Exemplar.md")

_CHAR_NAMES = {"space": " ", "newline": "\n", "tab": "\t", "nul": "\0"}
_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}
_KEYWORDS = {"true": True, "false": False}
_OPENERS = {"(", "[", "{", "&"}

class _Spot(Phrase):
	""" Blame-able position of a single token that never became a datum. """
	def __init__(self, spot:int): self.spot = spot
	def left(self): return self.spot
	def right(self): return self.spot

def _blame(semantic) -> Phrase:
	return semantic if isinstance(semantic, Phrase) else _Spot(semantic)

def _unescape(body:str) -> str:
	return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)

class ExemplarParser(TypicalApplication):

	def scan_ignore(self, yy: IterableScanner): pass

	@staticmethod
	def scan_punctuation(yy: IterableScanner):
		yy.token(sys.intern(yy.match()), insert_token(yy.slice()))

	@staticmethod
	def scan_integer(yy: IterableScanner): yy.token("integer", syntax.Literal(int(yy.match()), insert_token(yy.slice())))

	@staticmethod
	def scan_real(yy: IterableScanner): yy.token("real", syntax.Literal(float(yy.match()), insert_token(yy.slice())))

	@staticmethod
	def scan_string(yy: IterableScanner):
		yy.token("string", syntax.Literal(_unescape(yy.match()[1:-1]), insert_token(yy.slice())))

	@staticmethod
	def scan_character(yy: IterableScanner):
		text = yy.match()[1:]
		yy.token("character", syntax.Literal(Char(_CHAR_NAMES.get(text, text)), insert_token(yy.slice())))

	@staticmethod
	def scan_word(yy: IterableScanner):
		text, spot = yy.match(), insert_token(yy.slice())
		if text in _KEYWORDS: yy.token("word", syntax.Literal(_KEYWORDS[text], spot))
		else: yy.token("word", Nom(sys.intern(text), spot))

	@staticmethod
	def parse_empty(): return []
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some

	@staticmethod
	def parse_ampersand(spot, inner):
		return syntax.Paren(spot, [Nom("ref", spot), inner], inner.right())

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	def unexpected_token(self, kind, semantic, pds):
		if kind in (")", "]", "}"):
			raise ExemplarParseError(_blame(semantic), "This '%s' does not close anything."%kind, "Perhaps there is an extra bracket, or a missing one earlier on.")
		raise ExemplarParseError(_blame(semantic), "I did not expect to see this here.", "")

	def unexpected_eof(self, pds):
		# The innermost bracket still open gets the blame.
		symbols = self.stack_symbols(pds)
		semantics = [semantic for _, semantic in pds.stack]
		opener = [s for symbol, s in zip(symbols, semantics) if symbol in _OPENERS][-1]
		raise ExemplarParseError(_Spot(opener), "The text ends before this is finished.", "Look for a missing closing bracket.")

	def on_stuck(self, yy: IterableScanner):
		raise ExemplarParseError(_Spot(insert_token(yy.slice())), "I don't recognize this character.", "")

_parser = ExemplarParser(_tables)

def read_data(text:str, path:Optional[Path]=None) -> list[Phrase]:
	""" Just the s-expressions, as a list. May raise ExemplarParseError. """
	start_segment(path, text)
	return _parser.parse(text, filename=str(path) if path else None)

###############################################################################
#
#  Recognizing the top-level forms
#

def _fail(where:Phrase, message:str, hint:str=""):
	raise ExemplarParseError(where, message, hint)

def _name(datum:Phrase, what:str) -> Nom:
	if not isinstance(datum, Nom): _fail(datum, "Expected %s here."%what)
	return datum

def _decl_head(datum:Phrase) -> syntax.DeclHead:
	if isinstance(datum, Nom):
		return syntax.DeclHead(datum, ())
	if isinstance(datum, syntax.Paren) and datum.items:
		nom = _name(datum.items[0], "the name of the type")
		params = [_name(p, "a type-parameter") for p in datum.items[1:]]
		for p in params:
			if not p.is_variable(): _fail(p, "Type-parameters are lower-case words.")
		return syntax.DeclHead(nom, params)
	_fail(datum, "Expected a type name, or else (Name param ...) here.")

def _pairs(group:syntax.Group, what:str) -> list[tuple[Nom, Phrase]]:
	items = group.items
	if len(items) % 2: _fail(group, "This needs an even number of items: each %s with its type."%what)
	return [(_name(items[i], "a %s name"%what), items[i+1]) for i in range(0, len(items), 2)]

def _deftype(form:syntax.Paren) -> syntax.DefType:
	if len(form.items) < 2: _fail(form, "A deftype needs at least a name.")
	head = _decl_head(form.items[1])
	rest = form.items[2:]
	if len(rest) == 1 and isinstance(rest[0], syntax.Square):
		return syntax.DefType(form, head, syntax.RecordBody(_pairs(rest[0], "field")))
	cases = []
	for case in rest:
		if not (isinstance(case, syntax.Paren) and case.head()):
			_fail(case, "Each case of a sum type looks like (Name [Type ...]).", "A product type has one [field Type ...] list.")
		if len(case.items) > 2 or (len(case.items) == 2 and not isinstance(case.items[1], syntax.Square)):
			_fail(case, "The component types of a case go in one pair of [square brackets].")
		components = case.items[1].items if len(case.items) == 2 else ()
		cases.append((case.head(), components))
	return syntax.DefType(form, head, syntax.VariantBody(cases))

def _deffunction(form:syntax.Paren, kind:Kind) -> syntax.DefFunction:
	if len(form.items) != 3: _fail(form, "This takes a name and a type, like (%s name (Fn [Arg ...] Result))."%kind.value)
	return syntax.DefFunction(form, kind, _name(form.items[1], "a function name"), form.items[2])

def _product(form:syntax.Paren) -> syntax.GenerateProduct:
	if len(form.items) < 2: _fail(form, "A product needs at least a name.")
	fields = []
	for item in form.items[2:]:
		if not (isinstance(item, syntax.Paren) and len(item.items) == 2):
			_fail(item, "Each field looks like (name example).")
		fields.append((_name(item.items[0], "a field name"), item.items[1]))
	return syntax.GenerateProduct(form, _decl_head(form.items[1]), fields)

def _sum(form:syntax.Paren) -> syntax.GenerateSum:
	if len(form.items) < 2: _fail(form, "A sum needs at least a name.")
	cases = []
	for item in form.items[2:]:
		if not (isinstance(item, syntax.Paren) and item.head()):
			_fail(item, "Each case looks like (Constructor example ...).")
		cases.append((item.head(), item.items[1:]))
	return syntax.GenerateSum(form, _decl_head(form.items[1]), cases)

def _function(form:syntax.Paren, kind:Kind) -> syntax.GenerateFunction:
	if len(form.items) != 4 or not isinstance(form.items[2], (syntax.Paren, syntax.Square)):
		_fail(form, "This takes a name, a list of example arguments, and an example result.", "Like so: (signature repeat (1 \"blah\") \"blahblah\")")
	nom = _name(form.items[1], "a function name")
	return syntax.GenerateFunction(form, kind, nom, form.items[2].items, form.items[3])

_SHAPES = {
	"deftype": _deftype,
	"sig": lambda form: _deffunction(form, Kind.SIGNATURE),
	"definterface": lambda form: _deffunction(form, Kind.INTERFACE),
	"register": lambda form: _deffunction(form, Kind.EXTERNAL),
	"product": _product,
	"sum": _sum,
	"signature": lambda form: _function(form, Kind.SIGNATURE),
	"interface": lambda form: _function(form, Kind.INTERFACE),
	"external": lambda form: _function(form, Kind.EXTERNAL),
}

def recognize(datum:Phrase) -> syntax.TopLevel:
	head = datum.head() if isinstance(datum, syntax.Paren) else None
	if head is None or head.text not in _SHAPES:
		_fail(datum, "This is neither a declaration nor a generator.", "Top-level forms start with one of: "+", ".join(_SHAPES))
	return _SHAPES[head.text](datum)

def read_module(text:str, path:Optional[Path]) -> syntax.Module:
	""" May raise ExemplarParseError. """
	return syntax.Module(path, [recognize(d) for d in read_data(text, path)])

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Module]:
	""" Submit text to reader; report trouble in the customary way. """
	try:
		return read_module(text, path)
	except ExemplarParseError as ex:
		where, message, hint = ex.args
		report.generic_parse_error(where, message, hint)

def parse_file(path:Path, report:Report) -> Optional[syntax.Module]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except UnicodeDecodeError:
		report.not_utf8(path)
	except OSError:
		report.broken_file(path)
	else:
		return parse_text(text, path, report)
