"""
The declaration generators.

Each of these is the same pipeline: reflect every example, normalize the
results, resolve polymorphism across the whole lot, assemble a declaration,
and finally register it. Registration comes last, so a generator that fails
part-way leaves the table exactly as it found it.

Product and sum types are about storage, so they drop reference wrappers.
Function declarations are about calling convention, so they keep them.
"""
from typing import Iterable
from .ontology import Nom, Phrase
from .syntax import GenerateProduct, GenerateSum, GenerateFunction, DeclHead
from .domain import TypeRep
from .table import (
	DeclarationTable, Declaration, AlreadyExists,
	ProductDeclaration, SumDeclaration, FunctionDeclaration, Field, Variant,
)
from .errors import RedefinitionError
from .evaluator import Evaluator
from .reflection import reflect
from .normalize import normalize
from .polymorphism import resolve

STORAGE = True
CALLING = False

class Generator:
	def __init__(self, table:DeclarationTable):
		self._table = table
		self._evaluator = Evaluator(table)

	def type_of(self, example:Phrase, drop_references:bool) -> TypeRep:
		return normalize(reflect(self._evaluator, example), drop_references)

	def product(self, form:GenerateProduct) -> ProductDeclaration:
		names = distinct_names(form.head.nom, (nom for nom, _ in form.fields), "field")
		types = [self.type_of(example, STORAGE) for _, example in form.fields]
		params, types = resolve(types, _head_params(form.head))
		fields = [Field(name, t) for name, t in zip(names, types)]
		decl = ProductDeclaration(form.head.nom.text, params, fields)
		return self._register(decl, form.head.nom)

	def sum(self, form:GenerateSum) -> SumDeclaration:
		names = distinct_names(form.head.nom, (nom for nom, _ in form.cases), "case")
		per_case = [[self.type_of(x, STORAGE) for x in examples] for _, examples in form.cases]
		flat = [t for case in per_case for t in case]
		params, flat = resolve(flat, _head_params(form.head))
		variants, start = [], 0
		for name, case in zip(names, per_case):
			variants.append(Variant(name, flat[start:start+len(case)]))
			start += len(case)
		decl = SumDeclaration(form.head.nom.text, params, variants)
		return self._register(decl, form.head.nom)

	def function(self, form:GenerateFunction) -> FunctionDeclaration:
		examples = list(form.arguments) + [form.result]
		types = [self.type_of(x, CALLING) for x in examples]
		_, types = resolve(types)
		decl = FunctionDeclaration(form.kind, form.nom.text, types[:-1], types[-1])
		return self._register(decl, form.nom)

	def _register(self, decl:Declaration, nom:Nom) -> Declaration:
		try: return self._table.declare(decl, nom)
		except AlreadyExists:
			raise RedefinitionError(nom, "'%s' is already declared." % decl.name, self._table.origin_of(decl))

def _head_params(head:DeclHead) -> list[str]:
	distinct_names(head.nom, head.params, "type-parameter")
	return [p.text for p in head.params]

def distinct_names(owner:Nom, noms:Iterable[Nom], what:str) -> list[str]:
	seen = {}
	for nom in noms:
		if nom.text in seen:
			raise RedefinitionError(nom, "'%s' has more than one %s called '%s'." % (owner.text, what, nom.text), seen[nom.text])
		seen[nom.text] = nom
	return list(seen)
