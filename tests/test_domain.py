"""
The type algebra, the normalizer, and the polymorphism resolver,
exercised directly without any source text involved.
"""
import unittest

from exemplar.domain import Atomic, Applied, Reference, Function, Variable, Unknown, WILDCARD, substitute
from exemplar.normalize import normalize
from exemplar.polymorphism import resolve, letter

INT = Atomic("Int")
STRING = Atomic("String")

def array(t): return Applied("Array", [t])
def mapping(k, v): return Applied("Map", [k, v])

class TypeRepresentationTests(unittest.TestCase):

	def test_structural_equality(self):
		self.assertEqual(mapping(STRING, INT), mapping(Atomic("String"), Atomic("Int")))
		self.assertEqual(hash(Reference(INT)), hash(Reference(Atomic("Int"))))
		self.assertNotEqual(Atomic("a"), Variable("a"))
		self.assertNotEqual(Unknown(), Unknown())

	def test_render(self):
		for expect, t in [
			("Int", INT),
			("(Map String Int)", mapping(STRING, INT)),
			("(Ref String)", Reference(STRING)),
			("(Fn [Int (Ref String)] (Ref String))", Function([INT, Reference(STRING)], Reference(STRING))),
			("(Fn [] Int)", Function([], INT)),
			("a", Variable("a")),
		]:
			with self.subTest(expect):
				self.assertEqual(expect, str(t))

	def test_substitute(self):
		pair = Applied("Pair", [Variable("a"), array(Variable("b"))])
		self.assertEqual(Applied("Pair", [INT, array(STRING)]), substitute(pair, {"a": INT, "b": STRING}))
		self.assertEqual(Applied("Pair", [INT, array(Variable("b"))]), substitute(pair, {"a": INT}))

class NormalizerTests(unittest.TestCase):

	def test_reference_dropped_only_when_asked(self):
		self.assertEqual(STRING, normalize(Reference(STRING), True))
		self.assertEqual(Reference(STRING), normalize(Reference(STRING), False))

	def test_function_result_but_not_parameters(self):
		fn = Function([Reference(STRING)], Reference(INT))
		self.assertEqual(Function([Reference(STRING)], INT), normalize(fn, True))
		self.assertEqual(fn, normalize(fn, False))

	def test_nested_function_results(self):
		curried = Function([INT], Function([INT], Reference(STRING)))
		self.assertEqual(Function([INT], Function([INT], STRING)), normalize(curried, True))

	def test_everything_else_unchanged(self):
		for t in [INT, mapping(Reference(STRING), INT), Variable("a")]:
			with self.subTest(str(t)):
				self.assertEqual(t, normalize(t, True))

class ResolverTests(unittest.TestCase):

	def test_letters(self):
		self.assertEqual(["a", "b", "c"], [letter(i) for i in range(3)])
		self.assertEqual("z", letter(25))
		self.assertEqual("a1", letter(26))

	def test_arity_determines_names(self):
		params, types = resolve([mapping(Unknown(), Unknown())])
		self.assertEqual(("a", "b"), params)
		self.assertEqual((mapping(Variable("a"), Variable("b")),), types)

	def test_position_not_field_identity(self):
		params, types = resolve([array(Unknown()), array(Unknown())])
		self.assertEqual(("a",), params)
		self.assertEqual(types[0], types[1])

	def test_nested_unknown_takes_inner_position(self):
		params, types = resolve([mapping(STRING, array(Unknown()))])
		self.assertEqual(("a",), params)
		self.assertEqual(mapping(STRING, array(Variable("a"))), types[0])

	def test_any_collapses_to_one_variable(self):
		params, types = resolve([WILDCARD, INT, WILDCARD, array(WILDCARD)])
		self.assertEqual(("a",), params)
		self.assertEqual((Variable("a"), INT, Variable("a"), array(Variable("a"))), types)

	def test_any_meets_empty_container(self):
		params, types = resolve([mapping(Unknown(), Unknown()), WILDCARD])
		self.assertEqual(("a", "b"), params)
		self.assertEqual(Variable("a"), types[1])

	def test_existing_variables_kept(self):
		params, _ = resolve([Applied("Pair", [Variable("t"), INT]), array(Unknown())])
		self.assertEqual(("t", "a"), params)

	def test_explicit_head_comes_first(self):
		params, _ = resolve([mapping(Unknown(), Unknown())], ["b", "z"])
		self.assertEqual(("b", "z", "a"), params)

	def test_inside_functions(self):
		_, types = resolve([Function([WILDCARD], array(Unknown()))])
		self.assertEqual(Function([Variable("a")], array(Variable("a"))), types[0])

	def test_concrete_types_untouched(self):
		params, types = resolve([INT, Reference(STRING)])
		self.assertEqual((), params)
		self.assertEqual((INT, Reference(STRING)), types)

if __name__ == '__main__':
	unittest.main()
