"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Everything the reader produces is a Phrase, and
every Phrase knows the token-indices at its two ends so that
diagnostics can point at it.
"""

class Phrase:
	def left(self) -> int:
		""" Return the index of the leftmost token of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the index of the rightmost token of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	spot: int  # zero-spot means pre-defined term.
	def __init__(self, text, spot):
		assert isinstance(text, str)
		assert isinstance(spot, int) or spot is None, type(spot)
		self.text, self.spot = text, spot or 0
	def __repr__(self): return "<Name %r>" % self.text
	def left(self): return self.spot
	def right(self): return self.spot
	def is_variable(self) -> bool:
		""" Lower-case words in type context are type-variables. """
		return self.text[:1].islower()
