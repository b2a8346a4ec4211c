"""
The Algebra of Type Representation
===================================

These classes are the symbolic, declaration-level form of a type.
They are what example values reflect into, what existing declarations
translate into, and what the emitter renders back out.

All of them are immutable values: two representations are equal
exactly when they have the same shape. Each renders in the same
syntax the declaration language uses, so ``str(t)`` is suitable
for splicing straight into generated source text.

Two markers live alongside the proper representations:

* ``Unknown`` stands for an argument-type nobody has committed to yet,
  such as the element type of an empty array.
* ``WILDCARD`` is the type of the ``any`` example.

The polymorphism resolver replaces both with ``Variable`` before any
declaration gets assembled.

---------------------------------------------------------------------------
"""

from typing import Sequence, Iterator

class TypeRep:
	def _key(self) -> tuple:
		raise NotImplementedError(type(self))

	def __eq__(self, other):
		return type(self) is type(other) and self._key() == other._key()

	def __hash__(self):
		return hash((type(self), self._key()))

	def __repr__(self) -> str:
		return "<%s %s>" % (type(self).__name__, self)

	def __str__(self) -> str:
		return self.render()

	def render(self) -> str:
		raise NotImplementedError(type(self))

	def each_part(self) -> Iterator["TypeRep"]:
		""" Depth-first, left-to-right: self first, then components. """
		yield self

	def is_marker(self) -> bool: return False

class Atomic(TypeRep):
	""" A nullary type name. """
	def __init__(self, name:str):
		assert isinstance(name, str)
		self.name = name
	def _key(self): return self.name,
	def render(self): return self.name

class Applied(TypeRep):
	""" A parametrized type; the number of args is the constructor's arity. """
	def __init__(self, constructor:str, args:Sequence[TypeRep]):
		assert args, "Zero-arity constructors are Atomic."
		assert all(isinstance(a, TypeRep) for a in args), args
		self.constructor = constructor
		self.args = tuple(args)
	def _key(self): return self.constructor, self.args
	def render(self): return "(%s %s)" % (self.constructor, _spaced(self.args))
	def each_part(self):
		yield self
		for a in self.args: yield from a.each_part()

class Reference(TypeRep):
	""" A borrowed / reference wrapper around some other type. """
	def __init__(self, inner:TypeRep):
		assert isinstance(inner, TypeRep)
		self.inner = inner
	def _key(self): return self.inner,
	def render(self): return "(Ref %s)" % self.inner.render()
	def each_part(self):
		yield self
		yield from self.inner.each_part()

class Function(TypeRep):
	def __init__(self, params:Sequence[TypeRep], result:TypeRep):
		assert all(isinstance(p, TypeRep) for p in params), params
		assert isinstance(result, TypeRep)
		self.params = tuple(params)
		self.result = result
	def _key(self): return self.params, self.result
	def render(self): return "(Fn [%s] %s)" % (_spaced(self.params), self.result.render())
	def each_part(self):
		yield self
		for p in self.params: yield from p.each_part()
		yield from self.result.each_part()

class Variable(TypeRep):
	def __init__(self, symbol:str):
		self.symbol = symbol
	def _key(self): return self.symbol,
	def render(self): return self.symbol

class Unknown(TypeRep):
	"""
	Argument-type of a structurally-empty polymorphic container.
	Every occurrence is distinct; what name it eventually gets depends
	only on which argument-position it occupies.
	"""
	def _key(self): return id(self),
	def render(self): return "?"
	def is_marker(self) -> bool: return True
	@staticmethod
	def several(nr:int) -> tuple["Unknown", ...]:
		return tuple(Unknown() for _ in range(nr))

class _Wildcard(TypeRep):
	def _key(self): return ()
	def render(self): return "<any>"
	def is_marker(self) -> bool: return True

class _TypeMarker(TypeRep):
	"""
	What introspection says about a value which is itself a type.
	The reflector treats this as a signal to use the denoted type directly.
	"""
	def _key(self): return ()
	def render(self): return "<type>"
	def is_marker(self) -> bool: return True

WILDCARD = _Wildcard()
TYPE_MARKER = _TypeMarker()

def _spaced(types:Sequence[TypeRep]) -> str:
	return " ".join(t.render() for t in types)

def substitute(t:TypeRep, gamma:dict[str, TypeRep]) -> TypeRep:
	""" Replace variables by symbol. Markers and unmentioned variables pass through. """
	if isinstance(t, Variable): return gamma.get(t.symbol, t)
	if isinstance(t, Applied): return Applied(t.constructor, [substitute(a, gamma) for a in t.args])
	if isinstance(t, Reference): return Reference(substitute(t.inner, gamma))
	if isinstance(t, Function): return Function([substitute(p, gamma) for p in t.params], substitute(t.result, gamma))
	return t
