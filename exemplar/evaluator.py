"""
The embedded evaluator for example expressions.

Examples only ever need evaluating far enough to know their types, so
this is a very small interpreter: literals, containers, references,
names of types and declared functions, calls to declared functions,
and the handful of special forms that are the point of the exercise.
"""
from typing import Any
from boozetools.support.foundation import Visitor
from .ontology import Nom
from .syntax import Literal, Paren, Square, Curly
from .domain import Applied, Unknown
from .table import DeclarationTable
from .errors import EvaluationError, MissingZeroValueError
from .values import (
	Char, Ref, ArrayValue, MapValue, OpaqueValue, FunctionValue, TypeValue,
	ANY, type_of, zero_value, NoZeroValue,
)
from . import manifest, reflection, selection

ANY_WORD = "any"
REF_WORD = "ref"

class Evaluator(Visitor):
	def __init__(self, table:DeclarationTable):
		self._table = table
		self._special = {
			REF_WORD: self._ref,
			"select-from": self._select_from,
			"value-of": self._value_of,
			"get-type": self._get_type,
		}

	def evaluate(self, example) -> Any:
		return self.visit(example)

	def _proper_value(self, example) -> Any:
		""" Something that can go in a container or behind a reference. """
		value = self.visit(example)
		if isinstance(value, TypeValue):
			raise EvaluationError(example, "A type is not a value; perhaps (value-of %s) was meant?" % value.denotes)
		return value

	@staticmethod
	def visit_Literal(literal:Literal):
		value = literal.value
		if isinstance(value, str) and not isinstance(value, Char):
			return Ref(value)  # String literals refer to static strings.
		return value

	def visit_Nom(self, nom:Nom):
		if nom.text == ANY_WORD: return ANY
		fn = self._table.lookup_term(nom.text)
		if fn is not None: return FunctionValue(fn.name, fn.type())
		if nom.text in self._table.types:
			return TypeValue(manifest.translate(self._table, nom))
		raise EvaluationError(nom, "I don't see what '%s' refers to." % nom.text)

	def visit_Square(self, group:Square):
		items = [self._proper_value(x) for x in group.items]
		element_type = type_of(items[0]) if items else Unknown()
		return ArrayValue(items, element_type)

	def visit_Curly(self, group:Curly):
		if len(group.items) % 2:
			raise EvaluationError(group, "A map needs an even number of items: each key followed by its value.")
		items = [self._proper_value(x) for x in group.items]
		pairs = list(zip(items[0::2], items[1::2]))
		if pairs: return MapValue(pairs, type_of(pairs[0][0]), type_of(pairs[0][1]))
		else: return MapValue((), Unknown(), Unknown())

	def visit_Paren(self, group:Paren):
		head = group.head()
		if head is None:
			raise EvaluationError(group, "I don't know how to evaluate this; it does not start with a name.")
		args = group.items[1:]
		if head.text in self._special:
			return self._special[head.text](group, args)
		fn = self._table.lookup_term(head.text)
		if fn is not None:
			if len(args) != len(fn.params):
				pattern = "'%s' takes %d argument(s), but got %d instead."
				raise EvaluationError(group, pattern % (fn.name, len(fn.params), len(args)))
			for a in args: self._proper_value(a)
			return OpaqueValue(fn.result)
		if head.text in (manifest.REF, manifest.FN) or head.text in self._table.types:
			return TypeValue(manifest.translate(self._table, group))
		raise EvaluationError(head, "I don't see what '%s' refers to." % head.text)

	def _arity(self, group:Paren, args, nr:int, usage:str):
		if len(args) != nr:
			raise EvaluationError(group, "This looks like %s." % usage)

	def _ref(self, group:Paren, args):
		self._arity(group, args, 1, "(ref example)")
		return Ref(self._proper_value(args[0]))

	def _select_from(self, group:Paren, args):
		self._arity(group, args, 2, "(select-from Type field)")
		if not all(isinstance(a, Nom) for a in args):
			raise EvaluationError(group, "Both the type and the field must be plain names.")
		return TypeValue(selection.select_from(self._table, *args))

	def _value_of(self, group:Paren, args):
		self._arity(group, args, 1, "(value-of Type)")
		typ = manifest.translate(self._table, args[0])
		try: return zero_value(self._table, typ)
		except NoZeroValue as ex:
			culprit = ex.args[0]
			if isinstance(culprit, Unknown):
				name = typ.constructor if isinstance(typ, Applied) else typ
				message = "Type %s has no default value, because its type-arguments are not known." % name
			elif culprit == typ: message = "Type %s has no default value." % typ
			else: message = "Type %s has no default value, because %s does not." % (typ, culprit)
			raise MissingZeroValueError(args[0], message)

	def _get_type(self, group:Paren, args):
		self._arity(group, args, 1, "(get-type example)")
		return TypeValue(reflection.reflect(self, args[0]))