"""
Token kinds and the token record the scanner hands to the grammar.
The grammar looks only at the kind and the literal; the span rides along for diagnostics.
"""
from enum import Enum
from typing import NamedTuple, Any, Optional

class TokenKind(Enum):
	# Punctuation
	LEFT_PAREN = "("
	RIGHT_PAREN = ")"
	LEFT_BRACE = "{"
	RIGHT_BRACE = "}"
	COMMA = ","
	DOT = "."
	SEMICOLON = ";"
	MINUS = "-"
	PLUS = "+"
	SLASH = "/"
	STAR = "*"
	BANG = "!"
	BANG_EQUAL = "!="
	EQUAL = "="
	EQUAL_EQUAL = "=="
	GREATER = ">"
	GREATER_EQUAL = ">="
	LESS = "<"
	LESS_EQUAL = "<="
	
	# Literals
	IDENTIFIER = "identifier"
	STRING = "string"
	NUMBER = "number"
	
	# Keywords
	AND = "and"
	CLASS = "class"
	ELSE = "else"
	FALSE = "false"
	FOR = "for"
	FUN = "fun"
	IF = "if"
	NIL = "nil"
	OR = "or"
	PRINT = "print"
	RETURN = "return"
	TRUE = "true"
	VAR = "var"
	WHILE = "while"
	
	def __repr__(self): return "<%s>" % self.name

KEYWORDS = {
	k.value: k for k in (
		TokenKind.AND, TokenKind.CLASS, TokenKind.ELSE, TokenKind.FALSE,
		TokenKind.FOR, TokenKind.FUN, TokenKind.IF, TokenKind.NIL,
		TokenKind.OR, TokenKind.PRINT, TokenKind.RETURN, TokenKind.TRUE,
		TokenKind.VAR, TokenKind.WHILE,
	)
}

PUNCTUATION = {k.value: k for k in TokenKind if not k.value.isalpha()}

class Token(NamedTuple):
	kind: TokenKind
	literal: Any = None
	span: Optional[slice] = None
	
	def __str__(self):
		if self.kind is TokenKind.STRING: return '"%s"' % self.literal
		if self.literal is None: return self.kind.value
		return str(self.literal)

def token(kind:TokenKind, literal=None) -> Token:
	""" Convenience for building token streams by hand, as tests do. """
	return Token(kind, literal)

def identifier(text:str) -> Token:
	return Token(TokenKind.IDENTIFIER, text)

def number(value) -> Token:
	return Token(TokenKind.NUMBER, float(value))

def string(text:str) -> Token:
	return Token(TokenKind.STRING, text)
