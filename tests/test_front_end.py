import unittest

from boozetools.scanning.interface import ScannerBlocked
from loxley.front_end import scan
from loxley.tokens import TokenKind as T

def kinds(text): return [t.kind for t in scan(text)]

class ScannerTests(unittest.TestCase):
	
	def test_declaration(self):
		tokens = scan("var x = 1.5;")
		self.assertEqual([T.VAR, T.IDENTIFIER, T.EQUAL, T.NUMBER, T.SEMICOLON], [t.kind for t in tokens])
		self.assertEqual("x", tokens[1].literal)
		self.assertEqual(1.5, tokens[3].literal)
	
	def test_spans_point_into_the_text(self):
		text = "print  answer;"
		token = scan(text)[1]
		self.assertEqual("answer", text[token.span])
	
	def test_one_and_two_character_operators(self):
		self.assertEqual(
			[T.BANG_EQUAL, T.EQUAL_EQUAL, T.LESS_EQUAL, T.GREATER_EQUAL, T.BANG, T.EQUAL, T.LESS, T.GREATER],
			kinds("!= == <= >= ! = < >"),
		)
		self.assertEqual(
			[T.LEFT_PAREN, T.RIGHT_PAREN, T.LEFT_BRACE, T.RIGHT_BRACE, T.COMMA, T.DOT, T.MINUS, T.PLUS, T.SEMICOLON, T.SLASH, T.STAR],
			kinds("(){},.-+;/*"),
		)
	
	def test_comments_and_whitespace_vanish(self):
		self.assertEqual([T.PRINT, T.NUMBER, T.SEMICOLON], kinds("// nothing here\n\tprint 1; // trailing\n"))
	
	def test_keywords_are_whole_words(self):
		self.assertEqual([T.OR, T.IDENTIFIER, T.IDENTIFIER], kinds("or orchid _or"))
		self.assertEqual([T.TRUE, T.FALSE, T.NIL, T.FUN, T.CLASS], kinds("true false nil fun class"))
	
	def test_string_literal_drops_quotes(self):
		token, = scan('"hello, world"')
		self.assertEqual(T.STRING, token.kind)
		self.assertEqual("hello, world", token.literal)
	
	def test_stray_character_blocks(self):
		with self.assertRaises(ScannerBlocked) as cm:
			scan("var x = 1 @ 2;")
		self.assertEqual(10, cm.exception.position)

if __name__ == '__main__':
	unittest.main()
