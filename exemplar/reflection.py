"""
Ask the host what type an example has.
"""
from .ontology import Phrase
from .domain import TypeRep, TYPE_MARKER
from .values import type_of, TypeValue

def reflect(evaluator, example:Phrase) -> TypeRep:
	"""
	Evaluate the example and introspect the value.

	When the example names a type rather than producing a value, the
	introspection says only "this is a type", which helps nobody.
	In that case the type the example denotes is the answer.
	"""
	value = evaluator.evaluate(example)
	typ = type_of(value)
	if typ is TYPE_MARKER:
		assert isinstance(value, TypeValue)
		return value.denotes
	return typ
