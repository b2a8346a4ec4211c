"""
Exemplar: derive type declarations from example values.
"""
