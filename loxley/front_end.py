"""
From text to statements: the scanner, and the glue that feeds its tokens to the grammar.
"""
import sys
from pathlib import Path
from typing import Optional

from boozetools.scanning.miniscan import Definition
from boozetools.scanning.interface import ScannerBlocked
from boozetools.scanning.engine import IterableScanner

from .tokens import Token, TokenKind, KEYWORDS, PUNCTUATION
from .combinators import ParseError
from .grammar import parse_program
from .diagnostics import Report, Yuck
from . import syntax

LEXICON = Definition(name="Lox")

LEXICON.ignore(r"\s+")
LEXICON.ignore(r"\/\/[^\n]*")

@LEXICON.on(r"\d+(\.\d+)?")
def scan_number(yy:IterableScanner):
	yy.token(TokenKind.NUMBER, Token(TokenKind.NUMBER, float(yy.match()), yy.slice()))

@LEXICON.on(r'"[^"]*"')
def scan_string(yy:IterableScanner):
	yy.token(TokenKind.STRING, Token(TokenKind.STRING, yy.match()[1:-1], yy.slice()))

@LEXICON.on(r"[A-Za-z_][A-Za-z_0-9]*")
def scan_word(yy:IterableScanner):
	text = yy.match()
	kind = KEYWORDS.get(text)
	if kind is None: yy.token(TokenKind.IDENTIFIER, Token(TokenKind.IDENTIFIER, sys.intern(text), yy.slice()))
	else: yy.token(kind, Token(kind, None, yy.slice()))

@LEXICON.on(r"[\(\)\{\},\.;\-\+\*\/]|[!\=<>]\=?")
def scan_punctuation(yy:IterableScanner):
	kind = PUNCTUATION[yy.match()]
	yy.token(kind, Token(kind, None, yy.slice()))

def scan(text:str) -> list[Token]:
	""" Raises ScannerBlocked at the first character no rule accepts. """
	return [semantic for kind, semantic in LEXICON.scan(text)]

def parse_text(text:str, report:Report, path:Path=None) -> list[syntax.Stmt]:
	""" Scan and parse. On failure, tell the report and raise Yuck naming the phase. """
	report.set_source(text, path)
	try: tokens = scan(text)
	except ScannerBlocked as ex:
		report.lexical_error(ex.position)
		raise Yuck("lex")
	report.info("Scanned %d tokens" % len(tokens))
	try: return parse_program(tokens)
	except ParseError as ex:
		report.parse_error(ex)
		raise Yuck("parse")

def read_file(path:Path, report:Report) -> Optional[str]:
	report.info("Loading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError as ex:
		report.broken_file(path, ex)
