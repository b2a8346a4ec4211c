"""
Every way that generating a declaration can fail.

Each of these carries the phrase that got the blame, so the
diagnostics can point at the offending source text. None of them
is recoverable: the session reports the first one and gives up
on the compilation unit.
"""
from boozetools.parsing.interface import ParseError
from .ontology import Phrase

class ExemplarParseError(ParseError):
	""" Arguments are (phrase, message, hint). """
	pass

class GenerationError(Exception):
	""" Base of the failures detected while evaluating or generating. """
	headline = "Generation failed."

	def __init__(self, phrase:Phrase, message:str):
		assert isinstance(phrase, Phrase), phrase
		super().__init__(phrase, message)
		self.phrase = phrase
		self.message = message

	def __str__(self): return self.message

class EvaluationError(GenerationError):
	headline = "This example could not be evaluated."

class NotAStructError(GenerationError):
	headline = "This does not name a product type."

class FieldNotFoundError(GenerationError):
	headline = "That product type has no such field."

class MissingZeroValueError(GenerationError):
	headline = "This type has no default value."

class RedefinitionError(GenerationError):
	headline = "This name is already defined in the same scope."

	def __init__(self, phrase:Phrase, message:str, first:Phrase=None):
		super().__init__(phrase, message)
		self.first = first

class TypeExpressionError(GenerationError):
	headline = "This type expression does not make sense."
