"""
Run-time values of the declaration language, as far as examples need them.

Booleans, integers, and reals are ordinary Python objects. Everything else
gets a small class, mainly so that introspection can tell them apart and so
that containers remember their element types even when empty.

Also here: the introspection facility (``type_of``) and the zero-value
protocol behind ``value-of``.
"""
from typing import Any, Sequence
from .domain import (
	TypeRep, Atomic, Applied, Reference, Function,
	TYPE_MARKER, WILDCARD, substitute,
)
from .table import DeclarationTable, ProductDeclaration
from . import preamble

class Char(str):
	""" A single character, as distinct from a one-character string. """
	def __repr__(self): return "\\" + str.__repr__(self)

class Ref:
	""" A reference to some other value. String literals are references to static strings. """
	def __init__(self, referent:Any):
		self.referent = referent
	def __repr__(self): return "&%r" % (self.referent,)

class ArrayValue:
	def __init__(self, items:Sequence[Any], element_type:TypeRep):
		self.items = tuple(items)
		self.element_type = element_type

class MapValue:
	def __init__(self, pairs:Sequence[tuple[Any, Any]], key_type:TypeRep, value_type:TypeRep):
		self.pairs = tuple(pairs)
		self.key_type, self.value_type = key_type, value_type

class StructValue:
	""" An instance of some product type, with its type-arguments already known. """
	def __init__(self, typ:TypeRep, fields:dict[str, Any]):
		self.type = typ
		self.fields = fields

class OpaqueValue:
	""" Standing in for the result of calling a declared function. """
	def __init__(self, typ:TypeRep):
		self.type = typ

class FunctionValue:
	def __init__(self, name:str, typ:Function):
		self.name, self.type = name, typ

class TypeValue:
	""" What a type-expression evaluates to when used as an example. """
	def __init__(self, denotes:TypeRep):
		self.denotes = denotes
	def __repr__(self): return "<type %s>" % self.denotes

class _AnyMarker:
	def __repr__(self): return "any"

ANY = _AnyMarker()

_NATIVE = {
	bool: preamble.literal_bool,
	int: preamble.literal_int,
	float: preamble.literal_double,
	Char: preamble.literal_char,
	str: preamble.literal_string,
}

def type_of(value:Any) -> TypeRep:
	"""
	The host's introspection facility.
	A value which is itself a type introspects as the abstract TYPE_MARKER.
	"""
	if type(value) in _NATIVE: return _NATIVE[type(value)]
	if isinstance(value, Ref): return Reference(type_of(value.referent))
	if isinstance(value, ArrayValue): return Applied(preamble.ARRAY.name, [value.element_type])
	if isinstance(value, MapValue): return Applied(preamble.MAP.name, [value.key_type, value.value_type])
	if isinstance(value, (StructValue, OpaqueValue, FunctionValue)): return value.type
	if isinstance(value, TypeValue): return TYPE_MARKER
	if value is ANY: return WILDCARD
	raise TypeError(type(value))

###############################################################################
#
#  The zero-value protocol
#

class NoZeroValue(Exception):
	""" Argument is the type that lacks a zero. The evaluator gives it a location. """
	pass

_ZEROS = {
	preamble.BOOL.name: False,
	preamble.INT.name: 0,
	preamble.DOUBLE.name: 0.0,
	preamble.CHAR.name: Char("\0"),
	preamble.STRING.name: "",
}

def zero_value(table:DeclarationTable, typ:TypeRep, _pending=()) -> Any:
	if isinstance(typ, Atomic):
		if typ.name in _ZEROS: return _ZEROS[typ.name]
		return _zero_struct(table, typ, typ.name, (), _pending)
	if isinstance(typ, Applied):
		if typ.constructor == preamble.ARRAY.name: return ArrayValue((), typ.args[0])
		if typ.constructor == preamble.MAP.name: return MapValue((), *typ.args)
		return _zero_struct(table, typ, typ.constructor, typ.args, _pending)
	raise NoZeroValue(typ)

def _zero_struct(table:DeclarationTable, typ:TypeRep, name:str, args:Sequence[TypeRep], pending) -> StructValue:
	decl = table.lookup_type(name)
	# A product which contains itself has no finite zero.
	if not isinstance(decl, ProductDeclaration) or name in pending: raise NoZeroValue(typ)
	gamma = dict(zip(decl.type_params, args))
	pending = pending + (name,)
	return StructValue(typ, {
		f.name: zero_value(table, substitute(f.type, gamma), pending)
		for f in decl.fields
	})
