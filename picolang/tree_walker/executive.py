"""
This is the overall control for the run-time.

A Session owns one root environment for as long as it lives,
so whatever one input defines, later inputs can see.
"""
from typing import Optional
from ..diagnostics import Report, TooManyIssues
from ..environment import InnerEnv
from .. import front_end, primitive
from .evaluator import evaluate
from .values import PicoValue, Error
from . import runtime  # NOQA: registers the evaluation rules

def fresh_environment() -> InnerEnv:
	""" A new, empty root scope atop the built-ins """
	return primitive.root_env.child()

class Session:
	def __init__(self, report:Optional[Report]=None, environment:Optional[InnerEnv]=None):
		self.report = report if report is not None else Report()
		self.environment = environment if environment is not None else fresh_environment()

	def execute(self, text:str, source:str="<input>") -> Optional[PicoValue]:
		"""
		Run some source text in this session's environment.
		Returns None after parse errors (which go to the report),
		or when the program's last statement produces no value.
		A run-time Error is returned, and also goes to the report.
		"""
		try:
			program = front_end.parse_text(text, self.report, source)
		except TooManyIssues:
			self.report.info("Stopped collecting issues in %s" % source)
			return None
		if program is None:
			return None
		self.report.info("Evaluating %s" % source)
		result = evaluate(program, self.environment)
		self.report.info("Session defines: %s" % ", ".join(sorted(self.environment.local_names())))
		if isinstance(result, Error):
			try: self.report.runtime_error(result)
			except TooManyIssues: self.report.info("Stopped collecting issues in %s" % source)
		return result

	def evaluate(self, text:str, source:str="<input>") -> str:
		""" The text a REPL should show for this input, starting from a clean report. """
		self.report.reset()
		result = self.execute(text, source)
		if result is None:
			if self.report.sick():
				return "parser errors:\n" + "".join("\t%s\n" % m for m in self.report.messages())
			return ""
		return result.inspect()
