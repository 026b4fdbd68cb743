"""
Submit text to the lexer and parser; submit any complaints to the report.
"""
from typing import Optional
from . import syntax, location
from .diagnostics import Report
from .lexer import Lexer
from .parser import Parser

def parse_text(text:str, report:Report, source:str="<input>") -> Optional[syntax.Program]:
	"""
	Returns the Program, or None if there were parse errors,
	in which case they have gone into the report.
	"""
	base = location.start_segment(source, text)
	parser = Parser(Lexer(text, base))
	program = parser.parse_program()
	report.info("Parsed %d statement(s) from %s" % (len(program.statements), source))
	if parser.errors:
		for problem in parser.errors:
			report.parse_error(problem)
		return None
	return program
