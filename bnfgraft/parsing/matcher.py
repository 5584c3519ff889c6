"""
The grammar-driven matcher: a backtracking interpreter over rule trees.

Matching is plain recursive descent with ordered choice. A choice takes the first alternative
that succeeds and never reconsiders; an optional or a repetition takes as much as its branch
will give. There is no longest-match rule and no memoization. Failure travels by exception:
a choice or an optional catches it and moves on, so only a failure that no alternative can
absorb reaches the caller.

A non-productive recursive rule (left recursion being the usual suspect) would otherwise spin
forever. The cycle guard notices when a rule is asked to match a range it's already busy
matching on the current path, and fails that attempt with InfiniteRecursionError. Within a
choice, that is just another failed alternative.

Every parse gets a fresh Matcher, which holds all the mutable state for that one call.
The rule table is only ever read.

Each level of nesting in the input costs a handful of Python frames, so a parse raises the
interpreter's recursion limit to at least RECURSION_LIMIT for its duration and puts it back after.
"""

import sys

from ..support.failureprone import SourceText
from ..tree.nodes import Node, Kind
from ..grammar import compiler
from .interface import (
	ParseFailure, InfiniteRecursionError, KeywordHook, ExtensionHook, WhitespaceHook,
	no_keywords, no_extensions, skip_whitespace,
	is_identifier_start, is_identifier_char,
)

RECURSION_LIMIT = 10000

def parse(table, start:str, text:str, *, is_keyword:KeywordHook=None, extend:ExtensionHook=None, skip:WhitespaceHook=None, filename=None) -> Node:
	"""
	Match all of `text` against the rule named `start`, and return the parse tree.
	Leading and trailing insignificant text (as judged by `skip`) is allowed and left outside the tree.
	Raises ParseFailure (or its subclass InfiniteRecursionError) if that doesn't work out.
	"""
	matcher = Matcher(table, text, is_keyword=is_keyword, extend=extend, skip=skip, filename=filename)
	return matcher.parse(start)

class Parser:
	"""
	Bundles a rule table with a lexical policy. Override the three hook methods to
	suit a language; the defaults describe a plain whitespace-insensitive one.
	"""
	def __init__(self, table):
		self.table = table

	def is_keyword(self, text:str) -> bool: return no_keywords(text)

	def extend(self, rule:Node, text:str, begin:int, end:int): return no_extensions(rule, text, begin, end)

	def skip_whitespace(self, text:str, begin:int, end:int) -> int: return skip_whitespace(text, begin, end)

	def parse(self, start:str, text:str, filename=None) -> Node:
		return parse(self.table, start, text, is_keyword=self.is_keyword, extend=self.extend, skip=self.skip_whitespace, filename=filename)

	def parse_file(self, start:str, path) -> Node:
		with open(path) as fh: text = fh.read()
		return self.parse(start, text, filename=str(path))

class Matcher:
	def __init__(self, table, text:str, *, is_keyword=None, extend=None, skip=None, filename=None):
		self.table = table
		self.text = text
		self.is_keyword = is_keyword or no_keywords
		self.extend = extend or no_extensions
		self.skip = skip or skip_whitespace
		self.source = SourceText(text, filename=filename)
		self.farthest = 0
		self.__busy = set()
		self.__literals = {}
		self.__method = {
			Kind.TOKEN_KEYWORD: self.match_quoted,
			Kind.IDENTIFIER_KEYWORD: self.match_identifier_keyword,
			Kind.NEWLINE_KEYWORD: self.match_newline,
			Kind.TOKEN: self.match_token,
			Kind.IDENTIFIER: self.match_reference,
			Kind.SEQUENCE: self.match_sequence,
			Kind.CHOICE: self.match_choice,
			Kind.OPTIONAL: self.match_optional,
			Kind.REPETITION: self.match_repetition,
		}

	def parse(self, start:str) -> Node:
		text, size = self.text, len(self.text)
		if start not in self.table: raise self.located(ParseFailure("Unknown definition: %s"%start, 0))
		body = self.table[start]
		if body is None: raise self.located(ParseFailure("Cannot start from extension point %s"%start, 0))
		limit = sys.getrecursionlimit()
		sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
		try:
			tree = self.match(body, 0, size)
		except RecursionError:
			raise self.located(ParseFailure("Expression nested too deeply", self.farthest)) from None
		except ParseFailure as failure:
			raise self.located(failure) from None
		finally:
			sys.setrecursionlimit(limit)
		stop = self.skip(text, tree.end, size)
		if stop < size:
			if stop == 0: message = "Unrecognized"
			else: message = "Recognized up to%s but could not continue; got as far as%s"%(self.source.where(tree.end), self.source.where(self.farthest))
			raise self.located(ParseFailure(message, stop))
		return tree

	def located(self, failure:ParseFailure) -> ParseFailure:
		return failure.locate(self.source, self.farthest)

	def reached(self, position:int):
		if position > self.farthest: self.farthest = position

	def match(self, rule:Node, begin:int, end:int) -> Node:
		key = (rule, begin, end)
		if key in self.__busy:
			raise InfiniteRecursionError("Infinite recursion in %s"%_describe(rule), begin)
		self.__busy.add(key)
		try: return self.__method[rule.kind](rule, begin, end)
		finally: self.__busy.discard(key)

	def significant(self, begin, end) -> int:
		""" Skip insignificant text; fail if nothing is left. """
		begin = self.skip(self.text, begin, end)
		if begin >= end: raise ParseFailure("Unexpected end of text", begin)
		return begin

	def match_quoted(self, rule, begin, end):
		text = self.text
		begin = self.significant(begin, end)
		if text[begin] != "'": raise ParseFailure("Single quote expected", begin)
		i = begin + 1
		while i < end:
			c = text[i]
			if c == '\\': i += 1
			elif c == "'":
				self.reached(i+1)
				return Node.leaf(Kind.TOKEN, text, begin, i+1, rule)
			i += 1
		raise ParseFailure("Closing single quote expected", end-1)

	def match_identifier_keyword(self, rule, begin, end):
		text = self.text
		begin = self.significant(begin, end)
		if not is_identifier_start(text[begin]): raise ParseFailure("Identifier expected", begin)
		i = begin + 1
		while i < end and is_identifier_char(text[i]): i += 1
		if self.is_keyword(text[begin:i]): raise ParseFailure("Identifier expected, not keyword %r"%text[begin:i], begin)
		self.reached(i)
		return Node.leaf(Kind.IDENTIFIER, text, begin, i, rule)

	def match_newline(self, rule, begin, end):
		if begin < end and self.text[begin] == '\n':
			self.reached(begin+1)
			return Node.leaf(Kind.TOKEN, self.text, begin, begin+1, rule)
		raise ParseFailure("New line expected", begin)

	def literal(self, rule) -> str:
		try: return self.__literals[rule]
		except KeyError:
			word = self.__literals[rule] = compiler.literal(rule)
			return word

	def match_token(self, rule, begin, end):
		text, word = self.text, self.literal(rule)
		if not word: return Node.leaf(Kind.TOKEN, text, begin, begin, rule)
		begin = self.significant(begin, end)
		stop = begin + len(word)
		if stop > end or not text.startswith(word, begin):
			raise ParseFailure("Token %r expected"%word, begin)
		# A word must not match just the front of a longer word. Single characters are symbols, not words.
		if len(word) > 1 and word[-1].isalpha() and stop < len(text) and text[stop].isalpha():
			raise ParseFailure("Token %r expected, but the word continues"%word, stop)
		if self.is_keyword(word) and stop < end and is_identifier_char(text[stop]):
			raise ParseFailure("Keyword %r expected, but the identifier continues"%word, stop)
		self.reached(stop)
		return Node.leaf(Kind.TOKEN, text, begin, stop, rule)

	def match_reference(self, rule, begin, end):
		name = rule.matched_text
		try: body = self.table[name]
		except KeyError: raise ParseFailure("Unknown definition: %s"%name, begin) from None
		if body is not None: return self.match(body, begin, end)
		begin = self.significant(begin, end)
		node = self.extend(rule, self.text, begin, end)
		if node is None: raise ParseFailure("%s expected"%name, begin)
		self.reached(node.end)
		return node

	def match_sequence(self, rule, begin, end):
		result = Node(Kind.SEQUENCE, rule)
		for branch in rule.branches:
			child = self.match(branch, begin, end)
			begin = child.end
			result.add_branch(child)
		return result

	def match_choice(self, rule, begin, end):
		result, causes = Node(Kind.CHOICE, rule), []
		for index, branch in enumerate(rule.branches):
			try: child = self.match(branch, begin, end)
			except ParseFailure as failure:
				causes.append(failure)
				result.add_branch(None)
			else:
				result.add_branch(child)
				for _ in rule.branches[index+1:]: result.add_branch(None)
				return result
		raise ParseFailure("No alternative of %s matched"%_describe(rule), begin, causes)

	def match_optional(self, rule, begin, end):
		try: child = self.match(rule.branches[0], begin, end)
		except ParseFailure: return Node(Kind.OPTIONAL, rule, self.text, begin, begin)
		result = Node(Kind.OPTIONAL, rule)
		result.add_branch(child)
		return result

	def match_repetition(self, rule, begin, end):
		result = Node(Kind.REPETITION, rule)
		branch = rule.branches[0]
		while True:
			try: child = self.match(branch, begin, end)
			except ParseFailure: break
			if child.end <= begin: break # No progress: another round would do the same.
			begin = child.end
			result.add_branch(child)
		if not result.branches: result.text, result.begin, result.end = self.text, begin, begin
		return result

def _describe(rule:Node) -> str:
	if rule.name is not None: return rule.name
	excerpt = rule.matched_text
	return excerpt if len(excerpt) <= 40 else excerpt[:37]+'...'
