"""
Build the primitive declarations every table starts from.
Also, the literal types that the evaluator's introspection hands out.
"""
from .domain import Atomic
from .table import DeclarationTable, OpaqueType

_built_ins = []

def _built_in_type(name:str, *type_params:str) -> OpaqueType:
	symbol = OpaqueType(name, type_params)
	_built_ins.append(symbol)
	return symbol

BOOL = _built_in_type("Bool")
INT = _built_in_type("Int")
DOUBLE = _built_in_type("Double")
CHAR = _built_in_type("Char")
STRING = _built_in_type("String")
ARRAY = _built_in_type("Array", "t")
MAP = _built_in_type("Map", "k", "v")

literal_bool = Atomic(BOOL.name)
literal_int = Atomic(INT.name)
literal_double = Atomic(DOUBLE.name)
literal_char = Atomic(CHAR.name)
literal_string = Atomic(STRING.name)

def fresh_table() -> DeclarationTable:
	table = DeclarationTable()
	for symbol in _built_ins: table.declare_type(symbol)
	return table
