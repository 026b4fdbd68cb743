"""
Collecting and presenting the things that go wrong.

A Report accumulates issues (each a Pic: an intro, some annotated source
excerpts, and perhaps a footer) and knows how to complain about them on
the console. It also carries the verbosity knob for tracing.
"""
import sys, random
from typing import Any, Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration

from .location import lookup_span, Segment
from .ontology import Phrase

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm, ", "", ""]
	exclamations = [
		'Bother', 'Drat', 'Fiddlesticks', 'Good Grief', 'Gosh',
		'Rats', 'Shucks', 'Whoops', 'Yikes', 'Zounds',
	]
	resignations = [
		'That did not go as planned.',
		'I cannot make sense of this.',
		'Something is amiss.',
		'Let us try that again.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, exclamations, resignations)))

class Report:
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def messages(self) -> list[str]:
		""" Just the one-line gist of each issue, in order """
		return [pic.intro for pic in self._issues]

	def as_text(self) -> str:
		return "\n\n".join(pic.as_text() for pic in self._issues)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end calls:
	def parse_error(self, problem):
		""" The problem is a PicoParseError, which blames one token. """
		caption = "expected %s here" % problem.expected
		self.issue(Pic(problem.message, [Annotation(problem.token, caption)]))

	# Methods the executive calls:
	def runtime_error(self, error):
		""" The error is a run-time Error value, which may know its site. """
		problem = [] if error.site is None else [Annotation(error.site, "while evaluating this")]
		self.issue(Pic(error.message, problem))

class Annotation:
	segment: Optional[Segment]
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		span = lookup_span(*node.span())
		self.segment = span.segment
		self.slice = span.slice
		self.caption = caption
	def illustrate(self):
		source = SourceText(self.segment.text, filename=self.segment.name)
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(self.slice.stop - self.slice.start, 1)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro]
		name = None
		for ann in self._anns:
			if ann.segment is None: continue
			if ann.segment.name != name:
				name = ann.segment.name
				lines.append(name)
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues:Sequence[Any]):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
