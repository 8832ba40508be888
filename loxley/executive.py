"""
The overall control: text in, effects out.

A Session holds one resolver and one interpreter for its whole life,
so successive inputs see what earlier inputs declared. That is what the REPL wants.
After a failure the session carries on: the resolver puts its global scope back
as it was, and whatever the interpreter managed to do before an error stays done.
"""
import sys
from pathlib import Path
from typing import Callable, Optional

from . import syntax, preamble
from .arena import ScopeArena, ArenaFrame
from .diagnostics import Report, Yuck
from .environment import Environment
from .front_end import parse_text, read_file
from .interpreter import Interpreter
from .render import render
from .resolution import Resolver, ResolutionError, Failure
from .runtime import LoxRuntimeError

# A Lox call costs about a dozen Python frames, and plain recursion a thousand deep should work.
RECURSION_LIMIT = 25_000

class Session:
	arena: Optional[ScopeArena]
	
	def __init__(self, report:Report, *, arena:bool=False, sink:Callable[[str], None]=print):
		if sys.getrecursionlimit() < RECURSION_LIMIT: sys.setrecursionlimit(RECURSION_LIMIT)
		self.report = report
		self.resolver = Resolver(preamble.NATIVES)
		if arena:
			self.arena = ScopeArena()
			root = ArenaFrame(self.arena)
		else:
			self.arena = None
			root = Environment()
		preamble.install(self.resolver, root)
		self.interpreter = Interpreter(root, sink)
	
	def check_text(self, text:str, path:Path=None) -> list[syntax.Stmt]:
		""" Parse and resolve, raising Yuck (with details in the report) on failure. """
		stmts = parse_text(text, self.report, path)
		try: resolved = self.resolver.resolve(stmts)
		except ResolutionError as ex:
			if ex.tag is Failure.UNDEFINED: self.report.undefined_name(ex.subject)
			else: self.report.resolver_contract_violation(ex)
			raise Yuck("resolve")
		self.report.info("Resolved %d statement(s)" % len(resolved))
		return resolved
	
	def run_text(self, text:str, path:Path=None):
		resolved = self.check_text(text, path)
		try: result = self.interpreter.interpret(resolved)
		except LoxRuntimeError as ex:
			self.report.runtime_error(ex)
			raise Yuck("run")
		if self.arena is not None:
			self.report.info("Arena: %d entries, %d active" % (len(self.arena), len(self.arena.active_scopes())))
			self.arena.collect([result])
			self.arena.compact()
		return result
	
	def load(self, path:Path) -> str:
		text = read_file(path, self.report)
		if text is None: raise Yuck("load")
		return text
	
	def dump(self, text:str, path:Path=None, out=sys.stdout):
		for stmt in parse_text(text, self.report, path):
			print(render(stmt), file=out)
	
	def repl(self, prompt="> ", stdin=sys.stdin, stdout=sys.stdout):
		""" Read, evaluate, print; complain and carry on after any failure. """
		while True:
			stdout.write(prompt)
			stdout.flush()
			line = stdin.readline()
			if not line: break
			if not line.strip(): continue
			try: self.run_text(line)
			except Yuck:
				self.report.complain_to_console()
				self.report.reset()
		stdout.write("\n")
