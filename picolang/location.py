"""
I want a simple, light-weight way to pass-around and manipulate points and spans within a collection of inputs.
The concept is simple: Every character of every input gets its own global integer offset.
Each chunk of source text (a file, or one line at the REPL) occupies a segment of that number line.
"""
from bisect import bisect_right
from typing import NamedTuple, Optional

class Segment(NamedTuple):
	""" One registered chunk of source text """
	name: str
	text: str
	base: int

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	segment: Optional[Segment]
	slice: slice

# These only grow, one segment per input. Closures outlive the input that
# defined them, and their errors must still find that input's text.
_segments: list[Segment] = []
_bases: list[int] = []

def reset_location_index():
	_segments.clear()
	_bases.clear()

def start_segment(name:str, text:str) -> int:
	""" Register some text and return the global offset of its first character. """
	if _segments:
		last = _segments[-1]
		# Leave one spare offset so the end-of-input spot belongs to its own segment.
		base = last.base + len(last.text) + 1
	else:
		base = 0
	_segments.append(Segment(name, text, base))
	_bases.append(base)
	return base

def lookup_segment(offset:int) -> Optional[Segment]:
	index = bisect_right(_bases, offset) - 1
	if index < 0: return None
	return _segments[index]

def lookup_span(first:int, last:int) -> Span:
	segment = lookup_segment(first)
	if segment is None:
		return Span(None, slice(first, last))
	return Span(segment, slice(first - segment.base, last - segment.base))
