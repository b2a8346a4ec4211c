"""
Type Expressions -- Syntax -- express types in the way that "11" expresses eleven-ness.
Declarations already on the books are written with them, and so are examples
that name a type directly. Either way, the convenient thing is a way to map
that syntax into the TypeRep algebra, checking names and arities as we go.
"""

from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .ontology import Nom, Phrase
from .syntax import Paren, Square, Curly, Literal
from .domain import TypeRep, Reference, Function, Variable
from .table import DeclarationTable, TypeDeclaration
from .errors import TypeExpressionError

REF, FN = "Ref", "Fn"

def translate(table:DeclarationTable, tx:Phrase, params:Optional[Sequence[str]]=None) -> TypeRep:
	"""
	For the body of a declaration: only the declared type-parameters may
	appear as variables, and every generic type gets all its arguments.
	With params=None, as for an example, any variable goes and a bare
	generic name stands for that type with its arguments yet unknown.
	"""
	return Translator(table, params).visit(tx)

class Translator(Visitor):
	def __init__(self, table:DeclarationTable, params:Optional[Sequence[str]]):
		self._table = table
		self._params = params

	def tour(self, items): return tuple(map(self.visit, items))

	def _declared(self, nom:Nom) -> TypeDeclaration:
		decl = self._table.lookup_type(nom.text)
		if decl is None:
			raise TypeExpressionError(nom, "There is no type called '%s'." % nom.text)
		return decl

	def visit_Nom(self, nom:Nom):
		if nom.is_variable():
			if self._params is not None and nom.text not in self._params:
				raise TypeExpressionError(nom, "'%s' is not a type-parameter of this declaration." % nom.text)
			return Variable(nom.text)
		if nom.text in (REF, FN):
			raise TypeExpressionError(nom, "'%s' needs arguments." % nom.text)
		decl = self._declared(nom)
		if decl.type_arity() and self._params is not None:
			raise TypeExpressionError(nom, "%d type-arguments were given; %d are needed." % (0, decl.type_arity()))
		return decl.instance()

	def visit_Paren(self, group:Paren):
		head = group.head()
		if head is None:
			raise TypeExpressionError(group, "A type-application starts with the name of a type.")
		args = group.items[1:]
		if head.text == REF:
			if len(args) != 1: raise TypeExpressionError(group, "A reference type looks like (Ref Type).")
			return Reference(self.visit(args[0]))
		if head.text == FN:
			if len(args) != 2 or not isinstance(args[0], Square):
				raise TypeExpressionError(group, "A function type looks like (Fn [Arg ...] Result).")
			return Function(self.tour(args[0].items), self.visit(args[1]))
		if head.is_variable():
			raise TypeExpressionError(group, "'%s' is a type-parameter, which cannot take type-arguments itself." % head.text)
		decl = self._declared(head)
		if len(args) != decl.type_arity():
			raise TypeExpressionError(group, "%d type-arguments were given; %d are needed." % (len(args), decl.type_arity()))
		return decl.instance(self.tour(args))

	@staticmethod
	def visit_Square(group:Square):
		raise TypeExpressionError(group, "Square brackets only make sense inside (Fn [...] ...).")

	@staticmethod
	def visit_Curly(group:Curly):
		raise TypeExpressionError(group, "Curly braces are not a type.")

	@staticmethod
	def visit_Literal(literal:Literal):
		raise TypeExpressionError(literal, "A literal value is not a type.")
