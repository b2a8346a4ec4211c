"""
Render declarations back into the declaration language.
The output of one run reads back in as existing declarations for the next.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from .table import ProductDeclaration, SumDeclaration, FunctionDeclaration, Variant

def _head(name:str, type_params:Sequence[str]) -> str:
	if type_params: return "(%s %s)" % (name, " ".join(type_params))
	else: return name

def _case(v:Variant) -> str:
	return "(%s [%s])" % (v.name, " ".join(map(str, v.components)))

class Emitter(Visitor):
	@staticmethod
	def visit_ProductDeclaration(decl:ProductDeclaration) -> str:
		fields = " ".join("%s %s" % (f.name, f.type) for f in decl.fields)
		return "(deftype %s [%s])" % (_head(decl.name, decl.type_params), fields)

	@staticmethod
	def visit_SumDeclaration(decl:SumDeclaration) -> str:
		cases = "".join(" " + _case(v) for v in decl.variants)
		return "(deftype %s%s)" % (_head(decl.name, decl.type_params), cases)

	@staticmethod
	def visit_FunctionDeclaration(decl:FunctionDeclaration) -> str:
		return "(%s %s %s)" % (decl.kind.value, decl.name, decl.type())

_emitter = Emitter()

def emit(decl) -> str:
	return _emitter.visit(decl)

def emit_all(decls) -> str:
	return "".join(emit(d) + "\n" for d in decls)
