"""
Collect problems as they come up; explain them on the console afterwards.
Everything goes to stderr. There is no logging framework here:
progress chatter is just `info`, which speaks only when asked to be verbose.
"""
import sys
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

class TooManyIssues(Exception):
	pass

class Yuck(Exception):
	"""
	The first argument will be the name of the phase fraught with error:
	"lex", "parse", "resolve", or "run". The details are already in the Report.
	"""
	pass

class Annotation:
	""" A caption pinned to a span of source text. """
	def __init__(self, source:Optional[SourceText], span:Optional[slice], caption:str="near here"):
		self.source, self.span, self.caption = source, span, caption
	
	def illustrate(self) -> str:
		if self.source is None or self.span is None:
			return "    (position unknown)"
		row, col = self.source.find_row_col(self.span.start)
		line = self.source.line_of_text(row)
		width = self.span.stop - self.span.start
		where = "line %d, column %d" % (row, col+1)
		if self.source.filename: where = "%s, %s" % (self.source.filename, where)
		return where + "\n" + illustration(line, col, width, prefix="    ", caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list, footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	""" One per session. Knows the text currently under consideration, so it can point at things. """
	_issues : list[Pic]
	
	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._source = None
	
	@property
	def issues(self) -> list: return list(self._issues)
	
	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	
	def issue(self, it:Pic):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)
	
	def reset(self):
		self._issues.clear()
	
	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)
	
	def set_source(self, text:str, path:Path=None):
		self._source = SourceText(text, filename=None if path is None else str(path))
	
	def _point(self, span, caption="near here"):
		return Annotation(self._source, span, caption)
	
	def complain_to_console(self):
		""" Emit all the issues to the console. """
		if self._issues:
			print("*"*60, file=sys.stderr)
		for i in self._issues:
			print("  -"*20, file=sys.stderr)
			print(i.as_text(), file=sys.stderr)
		sys.stderr.flush()
	
	def assert_no_issues(self, message="Something went wrong."):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)
	
	# Front-end problems:
	
	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called %s" % path, []))
	
	def broken_file(self, path:Path, why:OSError):
		self.issue(Pic("Something went pear-shaped while trying to read %s" % path, [], [str(why)]))
	
	def lexical_error(self, position:int):
		span = slice(position, position+1)
		self.issue(Pic("This character does not belong to any token.", [self._point(span)]))
	
	def parse_error(self, ex):
		token = ex.offending_token()
		if token is None:
			self.issue(Pic("Ran out of input: expected %s." % ex.expected, []))
		else:
			pic = Pic("Expected %s." % ex.expected, [self._point(token.span, "got confused here")])
			self.issue(pic)
	
	# Resolver problems:
	
	def undefined_name(self, name):
		caption = "'%s' is not declared in any enclosing scope" % name
		self.issue(Pic("I don't see what this refers to.", [self._point(getattr(name, "span", None), caption)]))
	
	def resolver_contract_violation(self, ex):
		self.issue(Pic("The resolver was handed something it cannot resolve.", [], [str(ex)]))
	
	# Run-time problems:
	
	def runtime_error(self, ex:Exception):
		self.issue(Pic("Run-time error: %s" % ex, []))
