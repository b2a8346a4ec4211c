"""
I want a simple, light-weight way to pass-around and manipulate points and spans within a collection of files.
The concept is simple: Use integers, with spans of them associated to specific files.
Each segment also keeps its text, so diagnostics can illustrate sources that never touched the disk.
"""
from bisect import bisect_left
from pathlib import Path
from typing import NamedTuple, Optional

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	path: Optional[Path]
	slice: slice
	text: str

_slices: list[slice] = []
_bounds: list[int] = []
_paths: list[Optional[Path]] = []
_texts: list[str] = []

def reset_location_index():
	for it in _slices, _bounds, _paths, _texts: it.clear()
	# Now prepare the "built-in" location, which is location zero:
	start_segment(None, "")
	insert_token(slice(0,0))

def start_segment(path:Optional[Path], text:str):
	assert isinstance(path, Path) or path is None
	_bounds.append(len(_slices)-1)
	_paths.append(path)
	_texts.append(text)

def insert_token(s:slice) -> int:
	index = len(_slices)
	_slices.append(s)
	return index

def _segment(index:int) -> int:
	# A segment's bound is the last index before its first token.
	return max(bisect_left(_bounds, index)-1, 0)

def lookup_token(index:int) -> Span:
	seg = _segment(index)
	return Span(_paths[seg], _slices[index], _texts[seg])

def lookup_span(first: int, last:int) -> Span:
	left = lookup_token(first)
	right = lookup_token(last)
	assert left.path == right.path
	return Span(left.path, slice(left.slice.start, right.slice.stop), left.text)

reset_location_index()
