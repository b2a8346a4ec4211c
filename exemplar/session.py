"""
One run of the generator, start to finish.

First the preamble, then any files of existing declarations, then the program
itself, one top-level form at a time in the order written. Existing
declarations go straight into the table. Generator forms run the pipeline and
their declarations are both registered and kept for emission.

There is exactly one thread of control, and each form finishes before the
next begins. The first failure ends the compilation unit; nothing it would
have emitted gets written.
"""
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, preamble
from .ontology import Nom
from .diagnostics import Report
from .errors import GenerationError, RedefinitionError, TypeExpressionError
from .table import (
	DeclarationTable, AlreadyExists, Declaration,
	ProductDeclaration, SumDeclaration, FunctionDeclaration, Field, Variant,
)
from .manifest import translate
from .domain import Function
from .generators import Generator, distinct_names
from .emitter import emit_all
from .front_end import parse_file, parse_text

class Yuck(Exception):
	"""
	The first argument will be the name of the phase fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class Session(Visitor):
	table: DeclarationTable
	generated: list[Declaration]

	def __init__(self, report:Report, table:Optional[DeclarationTable]=None):
		self._report = report
		self.table = preamble.fresh_table() if table is None else table
		self.generated = []
		self._generator = Generator(self.table)

	def load_declarations(self, path:Path):
		""" A file of existing declarations. It must not try to generate anything. """
		module = self._parse(parse_file(path, self._report))
		for form in module.forms:
			if not isinstance(form, (syntax.DefType, syntax.DefFunction)):
				self._report.error([form], "Only existing declarations belong in a declarations file.")
				raise Yuck("parse")
		self.run_module(module)

	def run_file(self, path:Path) -> list[Declaration]:
		return self.run_module(self._parse(parse_file(path, self._report)))

	def run_text(self, text:str, path:Optional[Path]=None) -> list[Declaration]:
		return self.run_module(self._parse(parse_text(text, path, self._report)))

	def _parse(self, module:Optional[syntax.Module]) -> syntax.Module:
		if module is None:
			assert self._report.sick()
			raise Yuck("parse")
		return module

	def run_module(self, module:syntax.Module) -> list[Declaration]:
		""" Returns the declarations generated by this module, in order. """
		self._report.info("Generate", module.path or "<text>")
		fresh = []
		for form in module.forms:
			try: decl = self.visit(form)
			except GenerationError as ex:
				self._report.generation_error(form, ex)
				raise Yuck("generate")
			if decl is not None:
				self._report.info("  ", decl)
				fresh.append(decl)
		self.generated.extend(fresh)
		return fresh

	def output(self) -> str:
		return emit_all(self.generated)

	# Existing declarations

	def _existing(self, decl:Declaration, nom:Nom):
		try: self.table.declare(decl, nom)
		except AlreadyExists:
			raise RedefinitionError(nom, "'%s' is already declared." % decl.name, self.table.origin_of(decl))

	def visit_DefType(self, form:syntax.DefType):
		head = form.head
		params = distinct_names(head.nom, head.params, "type-parameter")
		if isinstance(form.body, syntax.RecordBody):
			decl = ProductDeclaration(head.nom.text, params, ())
		else:
			decl = SumDeclaration(head.nom.text, params, ())
		# Register first, so the declaration may refer to itself.
		self._existing(decl, head.nom)
		try: self._fill(decl, form)
		except GenerationError:
			self.table.withdraw_type(decl.name)
			raise

	def _fill(self, decl, form:syntax.DefType):
		head = form.head
		if isinstance(form.body, syntax.RecordBody):
			names = distinct_names(head.nom, (nom for nom, _ in form.body.fields), "field")
			decl.fields = tuple(Field(name, self._type(head, tx)) for name, (_, tx) in zip(names, form.body.fields))
		else:
			names = distinct_names(head.nom, (nom for nom, _ in form.body.cases), "case")
			decl.variants = tuple(
				Variant(name, tuple(self._type(head, tx) for tx in body))
				for name, (_, body) in zip(names, form.body.cases)
			)

	def _type(self, head:syntax.DeclHead, tx):
		return translate(self.table, tx, [p.text for p in head.params])

	def visit_DefFunction(self, form:syntax.DefFunction):
		typ = translate(self.table, form.type_expr, _variables_allowed)
		if not isinstance(typ, Function):
			raise TypeExpressionError(form.type_expr, "A function declaration needs a function type, like (Fn [Arg ...] Result).")
		self._existing(FunctionDeclaration(form.kind, form.nom.text, typ.params, typ.result), form.nom)

	# Generators

	def visit_GenerateProduct(self, form:syntax.GenerateProduct):
		return self._generator.product(form)

	def visit_GenerateSum(self, form:syntax.GenerateSum):
		return self._generator.sum(form)

	def visit_GenerateFunction(self, form:syntax.GenerateFunction):
		return self._generator.function(form)

class _AnyVariable:
	""" Function signatures are implicitly quantified over whatever variables they mention. """
	def __contains__(self, item): return True

_variables_allowed = _AnyVariable()

def generate(report:Report, program:Path, declarations:Sequence[Path]=()) -> Session:
	session = Session(report)
	for path in declarations:
		session.load_declarations(path)
	session.run_file(program)
	return session
