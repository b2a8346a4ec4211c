from .domain import TypeRep, Reference, Function

def normalize(t:TypeRep, drop_references:bool) -> TypeRep:
	"""
	Canonical form of a reflected type, for use inside a declaration.
	Stored things lose their reference wrapper; calling conventions keep it.
	Only the result position of a function type is normalized:
	how arguments get passed is the caller's business.
	"""
	if isinstance(t, Reference):
		return t.inner if drop_references else t
	if isinstance(t, Function):
		return Function(t.params, normalize(t.result, drop_references))
	return t
