"""
Limited polymorphism: at most one free variable of our own making.

Two things in a reflected type stand for "not decided yet":

* the ``any`` marker, and
* the argument types of structurally-empty containers, or of a generic
  type named without its arguments.

This pass runs over the finished list of types for one declaration and
turns both into proper variables, consistently across the whole list.

The naming rule depends only on where an unknown sits: the first argument
of whatever constructor holds it becomes ``a``, the second ``b``, and so on,
regardless of which field it came from. Every ``any`` becomes ``a``. So two
``any`` markers in two different fields come out as the same variable. That
constrains the result more than strictly necessary, but it is the rule, and
the declarations people already depend on were generated by it.

Nothing here checks that the examples agree on what a variable should be.
That is for the host's type checker to sort out.
"""
from string import ascii_lowercase
from typing import NamedTuple, Sequence
from .domain import TypeRep, Applied, Reference, Function, Variable, Unknown, WILDCARD
from .table import variables_of

def letter(position:int) -> str:
	""" a, b, ... z, then a1, b1, ... """
	suffix = position // len(ascii_lowercase)
	return ascii_lowercase[position % len(ascii_lowercase)] + (str(suffix) if suffix else "")

ANY_SYMBOL = letter(0)

class Resolution(NamedTuple):
	type_params: tuple[str, ...]
	types: tuple[TypeRep, ...]

def resolve(types:Sequence[TypeRep], explicit_params:Sequence[str]=()) -> Resolution:
	"""
	The head lists explicitly-written parameters first (if any),
	then every other variable in order of first appearance.
	"""
	resolved = tuple(_rewrite(t, 0) for t in types)
	head = list(explicit_params)
	head.extend(v for v in variables_of(resolved) if v not in head)
	return Resolution(tuple(head), resolved)

def _rewrite(t:TypeRep, position:int) -> TypeRep:
	if isinstance(t, Unknown):
		return Variable(letter(position))
	if t is WILDCARD:
		return Variable(ANY_SYMBOL)
	if isinstance(t, Applied):
		return Applied(t.constructor, [_rewrite(a, i) for i, a in enumerate(t.args)])
	if isinstance(t, Reference):
		return Reference(_rewrite(t.inner, position))
	if isinstance(t, Function):
		return Function([_rewrite(p, 0) for p in t.params], _rewrite(t.result, 0))
	assert not t.is_marker(), t
	return t
