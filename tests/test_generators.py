"""
The generation pipeline end to end: source text in, declarations out.
"""
import unittest
from unittest import mock

from exemplar.diagnostics import Report
from exemplar.session import Session, Yuck
from exemplar.front_end import read_module
from exemplar.emitter import emit
from exemplar.domain import Atomic, Applied, Reference, Function, Variable
from exemplar.table import ProductDeclaration, SumDeclaration, FunctionDeclaration, Kind
from exemplar import errors

INT = Atomic("Int")
CHAR = Atomic("Char")
STRING = Atomic("String")
DOUBLE = Atomic("Double")
BOOL = Atomic("Bool")

PLAYER = """
	(deftype Player [name String health Int equipment (Map String Int)])
	(deftype (Pair a b) [first a second b])
	(deftype Shape (Circle [Double]) (Rectangle [Double Double]))
	(register engine-tick (Fn [(Ref Player) Double] Bool))
"""

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()

def _generate(text, prelude=PLAYER) -> Session:
	session = Session(Silence())
	session.run_text(prelude)
	session.run_text(text)
	return session

def _one(text, prelude=PLAYER):
	[decl] = _generate(text, prelude).generated
	return decl

class ScenarioTests(unittest.TestCase):
	""" The canonical examples, one per generator family. """

	def test_product_of_int_and_char(self):
		decl = _one("(product Foo (bar 1) (baz \\a))")
		self.assertEqual(ProductDeclaration("Foo", (), [("bar", INT), ("baz", CHAR)]), decl)
		self.assertEqual("(deftype Foo [bar Int baz Char])", emit(decl))

	def test_product_of_int_and_string(self):
		decl = _one('(product Foo (bar 1) (baz "foo"))')
		self.assertEqual([("bar", INT), ("baz", STRING)], list(decl.fields))

	def test_select_from(self):
		decl = _one("(product Loadout (items (select-from Player equipment)))")
		self.assertEqual(Applied("Map", [STRING, INT]), decl.fields[0].type)

	def test_sum(self):
		decl = _one('(sum TwoIntsOrString (TwoInts 1 2) (StringThing "foo"))')
		self.assertIsInstance(decl, SumDeclaration)
		self.assertEqual([("TwoInts", (INT, INT)), ("StringThing", (STRING,))], list(decl.variants))
		self.assertEqual("(deftype TwoIntsOrString (TwoInts [Int Int]) (StringThing [String]))", emit(decl))

	def test_empty_sequence_is_polymorphic(self):
		decl = _one("(product (Foo a) (things []))")
		self.assertEqual(("a",), decl.type_params)
		self.assertEqual(Applied("Array", [Variable("a")]), decl.fields[0].type)
		self.assertEqual("(deftype (Foo a) [things (Array a)])", emit(decl))

	def test_signature(self):
		decl = _one('(signature repeat (1 "blah") "blahblah")')
		self.assertIsInstance(decl, FunctionDeclaration)
		self.assertEqual(Kind.SIGNATURE, decl.kind)
		self.assertEqual(Function([INT, Reference(STRING)], Reference(STRING)), decl.type())
		self.assertEqual("(sig repeat (Fn [Int (Ref String)] (Ref String)))", emit(decl))

class PropertyTests(unittest.TestCase):

	def test_field_order_preserved(self):
		names = ["zeta", "alpha", "mu", "beta", "omega"]
		text = "(product Ordered %s)" % " ".join("(%s 1)" % n for n in names)
		self.assertEqual(names, _one(text).field_names())

	def test_variant_order_preserved(self):
		names = ["Zed", "Alpha", "Mu"]
		text = "(sum Ordered %s)" % " ".join("(%s)" % n for n in names)
		self.assertEqual(names, _one(text).variant_names())

	def test_round_trip_selection(self):
		session = _generate("(product Foo (bar {1 \\a}) (baz 2.5))")
		copy = session.run_text("(product Copy (bar (select-from Foo bar)) (baz (select-from Foo baz)))")[0]
		self.assertEqual(session.table.lookup_type("Foo").fields, copy.fields)

	def test_reference_dropped_for_storage_kept_for_calls(self):
		session = _generate("""
			(product Stored (s "text") (r &1))
			(signature call ("text" &1) &1)
		""")
		stored, call = session.generated
		self.assertEqual([STRING, INT], [f.type for f in stored.fields])
		self.assertEqual(Function([Reference(STRING), Reference(INT)], Reference(INT)), call.type())

	def test_sum_components_drop_references(self):
		decl = _one('(sum Words (One "a") (Two "a" &\\b))')
		self.assertEqual((STRING, CHAR), decl.variants[1].components)

	def test_arity_determined_naming(self):
		for text, params, expect in [
			("(product Foo (m {}))", ("a", "b"), "(deftype (Foo a b) [m (Map a b)])"),
			("(product Foo (p Pair))", ("a", "b"), "(deftype (Foo a b) [p (Pair a b)])"),
			("(product Foo (x []) (y []))", ("a",), "(deftype (Foo a) [x (Array a) y (Array a)])"),
			("(product Foo (x [[]]))", ("a",), "(deftype (Foo a) [x (Array (Array a))])"),
			("(product Foo (x {1 []}))", ("a",), "(deftype (Foo a) [x (Map Int (Array a))])"),
			("(product Foo (x (value-of Map)))", ("a", "b"), "(deftype (Foo a b) [x (Map a b)])"),
		]:
			with self.subTest(text):
				decl = _one(text)
				self.assertEqual(params, decl.type_params)
				self.assertEqual(expect, emit(decl))

	def test_single_variable_collapse(self):
		decl = _one("(product Foo (x any) (y any) (z [any]))")
		self.assertEqual(("a",), decl.type_params)
		self.assertEqual([Variable("a"), Variable("a"), Applied("Array", [Variable("a")])], [f.type for f in decl.fields])

	def test_any_in_functions(self):
		self.assertEqual("(sig identity (Fn [a] a))", emit(_one("(signature identity (any) any)")))

	def test_explicit_head_is_honored(self):
		self.assertEqual("(deftype (Foo z a) [x (Array a)])", emit(_one("(product (Foo z) (x []))")))

	def test_function_kinds(self):
		for form, expect in [
			("interface", "(definterface describe (Fn [Player] (Ref String)))"),
			("external", "(register describe (Fn [Player] (Ref String)))"),
		]:
			with self.subTest(form):
				decl = _one('(%s describe ((value-of Player)) "x")' % form)
				self.assertEqual(expect, emit(decl))

class ExampleTests(unittest.TestCase):
	""" The less obvious kinds of example. """

	def test_bare_type_names(self):
		decl = _one("(product Foo (a Int) (b (Map String Double)) (c (Ref Char)))")
		self.assertEqual([INT, Applied("Map", [STRING, DOUBLE]), CHAR], [f.type for f in decl.fields])

	def test_value_of(self):
		decl = _one("(product Foo (p (value-of Player)) (q (value-of (Pair Int String))) (s (value-of String)))")
		self.assertEqual([Atomic("Player"), Applied("Pair", [INT, STRING]), STRING], [f.type for f in decl.fields])

	def test_get_type(self):
		decl = _one('(product Foo (x (get-type "abc")) (y (get-type (get-type 1))))')
		self.assertEqual([STRING, INT], [f.type for f in decl.fields])

	def test_function_reference_and_call(self):
		decl = _one("(product Foo (tick engine-tick) (alive (engine-tick (value-of Player) 1.5)))")
		self.assertEqual(Function([Reference(Atomic("Player")), DOUBLE], BOOL), decl.fields[0].type)
		self.assertEqual(BOOL, decl.fields[1].type)

	def test_generated_declarations_are_usable(self):
		session = _generate("""
			(product Foo (bar 1))
			(signature make-foo (1) (value-of Foo))
			(product Bar (foo (make-foo 2)) (n (select-from Foo bar)))
		""")
		self.assertEqual("(deftype Bar [foo Foo n Int])", emit(session.generated[-1]))

	def test_output_reads_back_in(self):
		session = _generate("""
			(product (Foo a) (things []) (n 1))
			(sum Either (Left any) (Right "x"))
			(external strlen ("x") 0)
		""")
		again = Session(Silence())
		again.run_text(session.output())
		for decl in session.generated:
			with self.subTest(decl.name):
				if isinstance(decl, FunctionDeclaration): self.assertEqual(decl, again.table.lookup_term(decl.name))
				else: self.assertEqual(decl, again.table.lookup_type(decl.name))

class FailureTests(unittest.TestCase):
	""" Each failure is the right exception, and leaves no trace in the table. """

	def assert_fails(self, error_class, text, prelude=PLAYER):
		session = Session(Silence())
		session.run_text(prelude)
		*setup, last = read_module(text, None).forms
		for form in setup: session.visit(form)
		with self.assertRaises(error_class):
			session.visit(last)
		return session

	def test_evaluation_errors(self):
		for text in [
			"(product Foo (x nope))",
			"(product Foo (x (nope 1)))",
			"(product Foo (x (1 2)))",
			"(product Foo (x {1}))",
			"(product Foo (x [Int]))",
			"(product Foo (x (ref Int)))",
			"(product Foo (x (engine-tick 1)))",
			"(product Foo (x (select-from Player)))",
			"(product Foo (x (select-from (Player) name)))",
			"(signature f (1 undefined) 2)",
		]:
			with self.subTest(text):
				self.assert_fails(errors.EvaluationError, text)

	def test_not_a_struct(self):
		for text in ["(product Foo (x (select-from Int bar)))", "(product Foo (x (select-from Shape bar)))", "(product Foo (x (select-from Nope bar)))"]:
			with self.subTest(text):
				self.assert_fails(errors.NotAStructError, text)

	def test_field_not_found(self):
		self.assert_fails(errors.FieldNotFoundError, "(product Foo (x (select-from Player score)))")

	def test_missing_zero_value(self):
		for text in [
			"(product Foo (x (value-of Shape)))",
			"(product Foo (x (value-of (Ref Int))))",
			"(product Foo (x (value-of (Fn [] Int))))",
			"(product Foo (x (value-of Pair)))",
			"(deftype Loop [next Loop]) (product Foo (x (value-of Loop)))",
		]:
			with self.subTest(text):
				self.assert_fails(errors.MissingZeroValueError, text)

	def test_unknown_type_arguments_have_no_zero(self):
		session = Session(Silence())
		session.run_text(PLAYER)
		[form] = read_module("(product Foo (x (value-of Pair)))", None).forms
		with self.assertRaises(errors.MissingZeroValueError) as cm:
			session.visit(form)
		self.assertEqual("Type Pair has no default value, because its type-arguments are not known.", cm.exception.message)

	def test_redefinition(self):
		for text in [
			"(product Foo (x 1)) (product Foo (y 2))",
			"(product Int (x 1))",
			"(product Foo (x 1) (x 2))",
			"(sum Foo (A 1) (A 2))",
			"(product (Foo a a) (x 1))",
			"(external engine-tick (1) 2)",
		]:
			with self.subTest(text):
				self.assert_fails(errors.RedefinitionError, text)

	def test_bad_type_expressions(self):
		for text in [
			"(deftype Foo [x Nope])",
			"(deftype Foo [x Array])",
			"(deftype Foo [x t])",
			"(deftype (Foo t) [x (t Int)])",
			"(deftype Foo [x (Map Int)])",
			"(deftype Foo [x (Ref)])",
			"(deftype Foo [x (Fn Int Int)])",
			"(sig f Int)",
			"(product Foo (x (value-of Nope)))",
		]:
			with self.subTest(text):
				self.assert_fails(errors.TypeExpressionError, text)

	def test_failed_generator_contributes_nothing(self):
		session = self.assert_fails(errors.EvaluationError, "(product Foo (x 1) (y nope))")
		self.assertIsNone(session.table.lookup_type("Foo"))
		session = self.assert_fails(errors.EvaluationError, "(signature f (1) nope)")
		self.assertIsNone(session.table.lookup_term("f"))

	def test_failed_deftype_leaves_nothing_behind(self):
		for text in ["(deftype Foo [x Nope])", "(deftype Foo (A [Int]) (B [Nope]))", "(deftype Foo [x Int x Int])"]:
			with self.subTest(text):
				session = self.assert_fails(errors.GenerationError, text)
				self.assertIsNone(session.table.lookup_type("Foo"))
				session.run_text("(deftype Foo [next Foo])")
				self.assertEqual([("next", Atomic("Foo"))], list(session.table.lookup_type("Foo").fields))

	def test_session_stops_at_first_failure(self):
		report = Silence()
		session = Session(report)
		with self.assertRaises(Yuck) as cm:
			session.run_text("(product Foo (x 1)) (product Bar (y nope)) (product Baz (z 1))")
		self.assertEqual("generate", cm.exception.args[0])
		self.assertEqual([], session.generated)
		self.assertIsNone(session.table.lookup_type("Baz"))
		self.assertEqual(1, len(report.issues))
		self.assertIn("could not be evaluated", report.issues[0].description)

if __name__ == '__main__':
	unittest.main()
