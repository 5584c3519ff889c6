"""
A lexical policy for the curly-brace family of languages (C, Java, JavaScript, and friends).

Grammars for such languages tend to leave literals as extension points, because writing
a number or a string out in BNF is tedious and the matcher's whitespace-skipping gets in
the way inside a literal. Declare any of these names with an empty body and this parser
recognizes them:

	StringLiteral         "double quoted", with backslash escapes, on one line
	CharacterLiteral      'single quoted', likewise
	IntegerLiteral        42, -7, 0x1F, 99L
	FloatingPointLiteral  3.14, .5, 1e10, 2.5f, 7d

Keywords are every letter-initial token the grammar spells out, and comments in both the
/* block */ and // line styles count as whitespace.
"""

import re

from ..tree.nodes import Kind, Node
from .interface import ParseFailure, LexicalError, skip_whitespace
from .matcher import Parser

INTEGER = re.compile(r'[+-]?(?:0[xX][0-9a-fA-F]+|[0-9]+)[lL]?')
# A floating literal needs a point, an exponent, or a type suffix. Otherwise it's an integer.
FLOATING = re.compile(r'[+-]?(?:(?:\.[0-9]+|[0-9]+\.[0-9]*)(?:[eE][+-]?[0-9]+)?[fFdD]?|[0-9]+(?:[eE][+-]?[0-9]+[fFdD]?|[fFdD]))')

def quoted(quote):
	def scan(rule, text, begin, end):
		if text[begin] != quote: return None
		i = begin + 1
		while i < end:
			c = text[i]
			if c == '\\': i += 1
			elif c == '\n': raise ParseFailure("String constant exceeds line", i)
			elif c == quote: return Node.leaf(Kind.TOKEN, text, begin, i+1, rule)
			i += 1
		return None
	return scan

def numeric(pattern):
	def scan(rule, text, begin, end):
		match = pattern.match(text, begin, end)
		if match is None: return None
		stop = match.end()
		if stop < end and text[stop].isalpha(): return None
		return Node.leaf(Kind.TOKEN, text, begin, stop, rule)
	return scan

LITERALS = {
	'StringLiteral': quoted('"'),
	'CharacterLiteral': quoted("'"),
	'IntegerLiteral': numeric(INTEGER),
	'FloatingPointLiteral': numeric(FLOATING),
}

def skip_comments(text:str, begin:int, end:int) -> int:
	""" Whitespace, /* block comments */ and // line comments, in any order and quantity. """
	while True:
		begin = skip_whitespace(text, begin, end)
		if text.startswith('/*', begin, end):
			close = text.find('*/', begin+2, end)
			if close < 0: raise LexicalError("Comment not closed", begin)
			begin = close + 2
		elif text.startswith('//', begin, end):
			close = text.find('\n', begin+2, end)
			begin = end if close < 0 else close + 1
		else:
			return begin

class CFamilyParser(Parser):
	def __init__(self, table, literals=None):
		super().__init__(table)
		self.literals = LITERALS if literals is None else literals
		self.keywords = table.keywords()

	def is_keyword(self, text:str) -> bool: return text in self.keywords

	def extend(self, rule, text, begin, end):
		scan = self.literals.get(rule.matched_text)
		return None if scan is None else scan(rule, text, begin, end)

	def skip_whitespace(self, text, begin, end): return skip_comments(text, begin, end)
