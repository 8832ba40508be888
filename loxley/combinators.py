"""
Small parser combinators over a token sequence.

A parser is a callable taking (tokens, at) and answering either a Match,
which knows where it stopped and what it built, or a NoMatch, which knows
where it gave up. Alternation backtracks over NoMatch. Once a grammar has
committed to a construct, failure is no longer a question of alternatives,
so `commit` turns NoMatch into a ParseError that unwinds the whole parse.

Nothing here knows about any particular grammar.
"""
from typing import Any, Callable, Sequence, Union, NamedTuple

class Match(NamedTuple):
	tokens: Sequence
	at: int
	value: Any
	
	@property
	def remaining(self): return self.tokens[self.at:]

class NoMatch(NamedTuple):
	tokens: Sequence
	at: int
	
	@property
	def remaining(self): return self.tokens[self.at:]

RESULT = Union[Match, NoMatch]

class ParseError(Exception):
	"""
	A hard failure: The grammar committed to a construct which did not continue as required.
	Carries a description of what was expected, along with where the trouble started.
	"""
	def __init__(self, expected:str, tokens:Sequence, at:int):
		super().__init__(expected, at)
		self.expected, self.tokens, self.at = expected, tokens, at
	
	@property
	def remaining(self): return self.tokens[self.at:]
	
	def offending_token(self):
		if self.at < len(self.tokens): return self.tokens[self.at]
	
	def __str__(self):
		found = self.offending_token()
		if found is None: return "expected %s but ran out of input" % self.expected
		return "expected %s but found %s" % (self.expected, found)

class Parser:
	""" Wraps a parsing function with a name for debugging, and a `map` for building values. """
	
	def __init__(self, fn:Callable[[Sequence, int], RESULT], name:str=None):
		self._fn = fn
		self.name = name or getattr(fn, "__name__", "parser")
	
	def __call__(self, tokens:Sequence, at:int) -> RESULT:
		return self._fn(tokens, at)
	
	def parse(self, tokens:Sequence) -> RESULT:
		return self(tokens, 0)
	
	def __repr__(self): return "<Parser %s>" % self.name
	
	def map(self, fn:Callable) -> "Parser": return map_result(self, fn)

def kind(expected) -> Parser:
	""" Match one token of the given kind, producing the token itself. """
	def parse_kind(tokens, at):
		if at < len(tokens) and tokens[at].kind == expected:
			return Match(tokens, at+1, tokens[at])
		return NoMatch(tokens, at)
	return Parser(parse_kind, "kind(%s)" % getattr(expected, "name", expected))

def one_of(*kinds) -> Parser:
	""" Match one token of any of the given kinds. """
	wanted = frozenset(kinds)
	def parse_one_of(tokens, at):
		if at < len(tokens) and tokens[at].kind in wanted:
			return Match(tokens, at+1, tokens[at])
		return NoMatch(tokens, at)
	return Parser(parse_one_of, "one_of")

def end_of_input() -> Parser:
	def parse_end(tokens, at):
		if at == len(tokens): return Match(tokens, at, None)
		return NoMatch(tokens, at)
	return Parser(parse_end, "end_of_input")

def sequence(*parsers:Parser) -> Parser:
	""" Match each parser in turn, producing a tuple of their values. All or nothing. """
	def parse_sequence(tokens, at):
		values = []
		cursor = at
		for p in parsers:
			result = p(tokens, cursor)
			if isinstance(result, NoMatch): return NoMatch(tokens, at)
			values.append(result.value)
			cursor = result.at
		return Match(tokens, cursor, tuple(values))
	return Parser(parse_sequence, "sequence")

def left(keep:Parser, drop:Parser) -> Parser:
	""" Both must match; keep the value of the first. """
	return map_result(sequence(keep, drop), lambda pair: pair[0])

def right(drop:Parser, keep:Parser) -> Parser:
	""" Both must match; keep the value of the second. """
	return map_result(sequence(drop, keep), lambda pair: pair[1])

def alternative(*parsers:Parser) -> Parser:
	""" First successful branch wins. """
	def parse_alternative(tokens, at):
		for p in parsers:
			result = p(tokens, at)
			if isinstance(result, Match): return result
		return NoMatch(tokens, at)
	return Parser(parse_alternative, "alternative")

def zero_or_more(p:Parser) -> Parser:
	def parse_many(tokens, at):
		values = []
		while True:
			result = p(tokens, at)
			# A match which consumes nothing would spin forever.
			if isinstance(result, NoMatch) or result.at == at: break
			values.append(result.value)
			at = result.at
		return Match(tokens, at, values)
	return Parser(parse_many, "zero_or_more(%s)" % p.name)

def one_or_more(p:Parser) -> Parser:
	many = zero_or_more(p)
	def parse_some(tokens, at):
		result = many(tokens, at)
		if result.value: return result
		return NoMatch(tokens, at)
	return Parser(parse_some, "one_or_more(%s)" % p.name)

def optional(p:Parser, default=None) -> Parser:
	def parse_optional(tokens, at):
		result = p(tokens, at)
		if isinstance(result, Match): return result
		return Match(tokens, at, default)
	return Parser(parse_optional, "optional(%s)" % p.name)

def map_result(p:Parser, fn:Callable) -> Parser:
	def parse_map(tokens, at):
		result = p(tokens, at)
		if isinstance(result, Match): return Match(tokens, result.at, fn(result.value))
		return result
	return Parser(parse_map, p.name)

def separated(p:Parser, separator:Parser) -> Parser:
	""" Zero or more of p with separators between; a trailing separator is not consumed. """
	rest = zero_or_more(right(separator, p))
	def parse_separated(tokens, at):
		first = p(tokens, at)
		if isinstance(first, NoMatch): return Match(tokens, at, [])
		more = rest(tokens, first.at)
		return Match(tokens, more.at, [first.value] + more.value)
	return Parser(parse_separated, "separated(%s)" % p.name)

def commit(p:Parser, expected:str) -> Parser:
	""" Past the point of no return: failing to match is a hard error. """
	def parse_committed(tokens, at):
		result = p(tokens, at)
		if isinstance(result, NoMatch): raise ParseError(expected, tokens, result.at)
		return result
	return Parser(parse_committed, expected)

def lazy(thunk:Callable[[], Parser], name:str=None) -> Parser:
	"""
	Refer to a parser not yet defined, which is how recursive grammars tie the knot.
	The thunk is called once, on first use.
	"""
	cell = []
	def parse_lazy(tokens, at):
		if not cell: cell.append(thunk())
		return cell[0](tokens, at)
	return Parser(parse_lazy, name or "lazy")
