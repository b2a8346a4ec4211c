"""
Declarations, and the table that holds them for the duration of a run.

The table is a lightly-enhanced pair of dictionaries, one for types and one
for terms. It does not like duplicate keys, and it never forgets anything:
generation only ever appends.
"""
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Iterable, Union
from .ontology import Phrase
from .domain import TypeRep, Atomic, Applied, Variable, Function, Unknown

class Field(NamedTuple):
	name: str
	type: TypeRep

class Variant(NamedTuple):
	name: str
	components: tuple[TypeRep, ...]

class TypeDeclaration:
	name: str
	type_params: tuple[str, ...]

	def type_arity(self) -> int: return len(self.type_params)

	def instance(self, args:Sequence[TypeRep]=()) -> TypeRep:
		"""
		The type this declaration's name means when applied to args.
		A bare name (no args) of a generic type gets Unknown args,
		one per parameter, for the resolver to name later.
		"""
		if not self.type_params: return Atomic(self.name)
		args = tuple(args) or Unknown.several(self.type_arity())
		assert len(args) == self.type_arity()
		return Applied(self.name, args)

	def __repr__(self):
		return "{%s:%s}" % (self.name, type(self).__name__)

class OpaqueType(TypeDeclaration):
	""" Built-in types. They have no visible structure. """
	def __init__(self, name:str, type_params:Sequence[str]=()):
		self.name = name
		self.type_params = tuple(type_params)

class ProductDeclaration(TypeDeclaration):
	def __init__(self, name:str, type_params:Sequence[str], fields:Sequence[Field]):
		self.name = name
		self.type_params = tuple(type_params)
		self.fields = tuple(fields)

	def field_names(self):
		return [f.name for f in self.fields]

	def __eq__(self, other):
		return (
			isinstance(other, ProductDeclaration)
			and (self.name, self.type_params, self.fields) == (other.name, other.type_params, other.fields)
		)

class SumDeclaration(TypeDeclaration):
	def __init__(self, name:str, type_params:Sequence[str], variants:Sequence[Variant]):
		self.name = name
		self.type_params = tuple(type_params)
		self.variants = tuple(variants)

	def variant_names(self):
		return [v.name for v in self.variants]

	def __eq__(self, other):
		return (
			isinstance(other, SumDeclaration)
			and (self.name, self.type_params, self.variants) == (other.name, other.type_params, other.variants)
		)

class Kind(Enum):
	SIGNATURE = "sig"
	INTERFACE = "definterface"
	EXTERNAL = "register"

class FunctionDeclaration:
	def __init__(self, kind:Kind, name:str, params:Sequence[TypeRep], result:TypeRep):
		assert isinstance(kind, Kind)
		self.kind = kind
		self.name = name
		self.params = tuple(params)
		self.result = result

	def type(self) -> Function:
		return Function(self.params, self.result)

	def __eq__(self, other):
		return (
			isinstance(other, FunctionDeclaration)
			and (self.kind, self.name, self.type()) == (other.kind, other.name, other.type())
		)

	def __repr__(self):
		return "{%s:%s %s}" % (self.name, self.kind.value, self.type())

Declaration = Union[ProductDeclaration, SumDeclaration, FunctionDeclaration]

def variables_of(types:Iterable[TypeRep]) -> list[str]:
	""" Distinct variable symbols, in order of first appearance. """
	found = []
	for t in types:
		for part in t.each_part():
			if isinstance(part, Variable) and part.symbol not in found:
				found.append(part.symbol)
	return found

class AlreadyExists(KeyError): pass

class _Space:
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	def __init__(self):
		self._locate: dict[str, Optional[Phrase]] = {}
		self._symbol: dict = {}

	def __contains__(self, key: str) -> bool:
		return key in self._symbol

	def symbol(self, key:str):
		return self._symbol.get(key)

	def locate(self, key:str) -> Optional[Phrase]:
		return self._locate[key]

	def mount(self, key:str, phrase:Optional[Phrase], symbol):
		if key in self._locate:
			raise AlreadyExists(key)
		self._locate[key] = phrase
		self._symbol[key] = symbol
		return symbol

	def withdraw(self, key:str):
		del self._locate[key], self._symbol[key]

class DeclarationTable:
	"""
	Process-wide state for one run of the generator.
	Populated first from the preamble and any existing declarations,
	then appended to by each generator call in program order.
	"""
	def __init__(self):
		self.types = _Space()
		self.terms = _Space()

	def declare_type(self, decl:TypeDeclaration, origin:Optional[Phrase]=None) -> TypeDeclaration:
		assert isinstance(decl, TypeDeclaration)
		return self.types.mount(decl.name, origin, decl)

	def withdraw_type(self, name:str):
		""" Undo a declare_type whose declaration could not be completed. """
		self.types.withdraw(name)

	def declare_term(self, decl:FunctionDeclaration, origin:Optional[Phrase]=None) -> FunctionDeclaration:
		assert isinstance(decl, FunctionDeclaration)
		return self.terms.mount(decl.name, origin, decl)

	def declare(self, decl:Declaration, origin:Optional[Phrase]=None) -> Declaration:
		if isinstance(decl, FunctionDeclaration): return self.declare_term(decl, origin)
		else: return self.declare_type(decl, origin)

	def lookup_type(self, name:str) -> Optional[TypeDeclaration]:
		return self.types.symbol(name)

	def lookup_term(self, name:str) -> Optional[FunctionDeclaration]:
		return self.terms.symbol(name)

	def origin_of(self, decl:Declaration) -> Optional[Phrase]:
		space = self.terms if isinstance(decl, FunctionDeclaration) else self.types
		return space.locate(decl.name)
