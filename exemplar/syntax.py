"""
The set of parse-nodes in simple form.

The reader produces data: literals, names, and bracketed groups.
The front-end then recognizes certain shapes of data at top level as
declarations (which already exist) or generator forms (which make more).
Example expressions stay as plain data until the evaluator gets to them.
"""
from typing import Any, Sequence, NamedTuple, Optional
from .ontology import Phrase, Nom
from .table import Kind

class Literal(Phrase):
	def __init__(self, value:Any, spot:int):
		self.value, self.spot = value, spot
	def __repr__(self): return "<Literal %r>" % (self.value,)
	def left(self): return self.spot
	def right(self): return self.spot

class Group(Phrase):
	""" Some items between brackets. The brackets say what kind. """
	opener = closer = ""
	def __init__(self, first:int, items:list[Phrase], last:int):
		self.items = items
		self._first, self._last = first, last
	def left(self): return self._first
	def right(self): return self._last
	def __repr__(self):
		return self.opener + " ".join(map(repr, self.items)) + self.closer
	def head(self) -> Optional[Nom]:
		if self.items and isinstance(self.items[0], Nom):
			return self.items[0]

class Paren(Group):
	opener, closer = "(", ")"

class Square(Group):
	opener, closer = "[", "]"

class Curly(Group):
	opener, closer = "{", "}"

#######################################################################
#
#  Top-level forms. Each wraps the group it came from, for location.
#

class TopLevel(Phrase):
	form: Paren
	def left(self): return self.form.left()
	def right(self): return self.form.right()

class DeclHead(NamedTuple):
	nom: Nom
	params: Sequence[Nom]

class RecordBody(NamedTuple):
	fields: Sequence[tuple[Nom, Phrase]]

class VariantBody(NamedTuple):
	cases: Sequence[tuple[Nom, Sequence[Phrase]]]

class DefType(TopLevel):
	""" An existing product or sum declaration: (deftype ...) """
	def __init__(self, form:Paren, head:DeclHead, body):
		self.form, self.head, self.body = form, head, body
	def __repr__(self): return "<deftype %s>" % self.head.nom.text

class DefFunction(TopLevel):
	""" An existing (sig ...), (definterface ...) or (register ...) """
	def __init__(self, form:Paren, kind:Kind, nom:Nom, type_expr:Phrase):
		self.form, self.kind, self.nom, self.type_expr = form, kind, nom, type_expr
	def __repr__(self): return "<%s %s>" % (self.kind.value, self.nom.text)

class GenerateProduct(TopLevel):
	def __init__(self, form:Paren, head:DeclHead, fields:Sequence[tuple[Nom, Phrase]]):
		self.form, self.head, self.fields = form, head, fields
	def __repr__(self): return "<product %s>" % self.head.nom.text

class GenerateSum(TopLevel):
	def __init__(self, form:Paren, head:DeclHead, cases:Sequence[tuple[Nom, Sequence[Phrase]]]):
		self.form, self.head, self.cases = form, head, cases
	def __repr__(self): return "<sum %s>" % self.head.nom.text

class GenerateFunction(TopLevel):
	def __init__(self, form:Paren, kind:Kind, nom:Nom, arguments:Sequence[Phrase], result:Phrase):
		self.form, self.kind, self.nom = form, kind, nom
		self.arguments, self.result = arguments, result
	def __repr__(self): return "<%s %s>" % (self.kind.name.lower(), self.nom.text)

class Module(NamedTuple):
	path: Any
	forms: Sequence[TopLevel]
