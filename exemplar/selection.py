"""
Mirror the type of a field that some existing product declaration already has.
"""
from .ontology import Nom
from .domain import TypeRep
from .table import DeclarationTable, ProductDeclaration
from .errors import NotAStructError, FieldNotFoundError

def select_from(table:DeclarationTable, type_name:Nom, field_name:Nom) -> TypeRep:
	"""
	The field's declared type, exactly as stored. No normalization:
	it came out of a declaration, so it is presumably well-formed already.
	"""
	decl = table.lookup_type(type_name.text)
	if not isinstance(decl, ProductDeclaration):
		raise NotAStructError(type_name, "'%s' is not a product type; it has no fields to select from." % type_name.text)
	for field in decl.fields:
		if field.name == field_name.text:
			return field.type
	known = ", ".join(decl.field_names()) or "none at all"
	raise FieldNotFoundError(field_name, "Type '%s' has fields (%s), but not one called '%s'." % (decl.name, known, field_name.text))
