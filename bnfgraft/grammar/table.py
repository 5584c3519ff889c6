"""
A grammar is a text file with one rule per block:

	Name: expression
	    | more expression, continued on following lines

A block starts on a line with nothing but identifier characters before its first colon.
Any other non-blank line continues the block above it. Lines starting with '#' are comments.

A rule with an empty body is an extension point: its matches come from a parser's `extend`
hook rather than from the grammar. You can also declare extension points by name when loading.

Loading checks that every name mentioned anywhere is defined, and reports all the missing
ones together, so a grammar author can fix the lot in one pass.
"""

import warnings
from collections import deque
from collections.abc import Mapping

from ..parsing.interface import GrammarSyntaxError, GrammarCompletenessError, is_identifier
from ..tree.nodes import Node, Kind
from . import compiler

VERBOSE = False

class RuleTable(Mapping):
	"""
	Read-only mapping from rule name to the root of its compiled rule tree.
	Extension points map to None. Once loaded, a table is never modified, so any
	number of parses (on any number of threads) may share it.
	"""
	def __init__(self, rules:dict, lines:dict=None):
		self.__rules = dict(rules)
		self.__lines = dict(lines or {})
		self.__keywords = None
		for name, body in self.__rules.items():
			if body is not None: body.name = name

	def __getitem__(self, name) -> Node: return self.__rules[name]
	def __iter__(self): return iter(self.__rules)
	def __len__(self): return len(self.__rules)

	def is_extension(self, name) -> bool:
		return name in self.__rules and self.__rules[name] is None

	def line_number(self, name):
		""" Where the rule was defined in its grammar file, if it came from one. """
		return self.__lines.get(name)

	def missing_definitions(self) -> list:
		""" Names mentioned somewhere but defined nowhere, in order of first mention. """
		missing = {}
		for body in self.__rules.values():
			for name in mentions(body):
				if name not in self.__rules: missing[name] = None
		return list(missing)

	def keywords(self) -> frozenset:
		""" The literals of every token that starts with a letter. Grammars tend to spell out their reserved words. """
		if self.__keywords is None:
			words = set()
			for body in self.__rules.values():
				if body is None: continue
				for node in body.walk():
					if node.kind is Kind.TOKEN:
						word = compiler.literal(node)
						if word[:1].isalpha(): words.add(word)
			self.__keywords = frozenset(words)
		return self.__keywords

	def reachable(self, start) -> set:
		""" Names of the rules a parse starting from `start` could ever try. """
		closure = {start}
		queue = deque(closure)
		while queue:
			body = self.__rules.get(queue.popleft())
			for name in mentions(body):
				if name not in closure:
					closure.add(name)
					queue.append(name)
		return closure

	def unreachable(self, start) -> list:
		reachable = self.reachable(start)
		return [name for name in self.__rules if name not in reachable]

def mentions(body:Node):
	""" Yield the name of every rule referenced within a rule tree. """
	if body is None: return
	for node in body.walk():
		if node.kind is Kind.IDENTIFIER: yield node.matched_text

def split_rule_head(line:str):
	""" If the line starts a rule block, return (name, rest-of-line); otherwise None. """
	colon = line.find(':')
	if colon > 0 and is_identifier(line[:colon]): return line[:colon], line[colon+1:]

def each_block(lines):
	""" Group lines into (name, body-text, line-number) triples. """
	name, body, first = None, [], None
	for line_number, line in enumerate(lines, 1):
		line = line.strip()
		if not line or line.startswith('#'): continue
		head = split_rule_head(line)
		if head is None:
			if name is None:
				error = GrammarSyntaxError("Continuation line %r does not follow any rule"%line)
				error.line_number = line_number
				raise error
			body.append(line)
		else:
			if name is not None: yield name, '\n'.join(body).strip(), first
			name, first = head[0], line_number
			body = [head[1]]
	if name is not None: yield name, '\n'.join(body).strip(), first

def load_grammar(lines, extensions=()) -> RuleTable:
	"""
	Compile every rule in a grammar, given as an iterable of lines.
	Raises GrammarSyntaxError or GrammarCompletenessError; there is no partial result.
	"""
	if isinstance(lines, str): lines = lines.splitlines()
	rules, where = {}, {}
	for name, text, line_number in each_block(lines):
		if name in rules:
			error = GrammarSyntaxError("Rule %r is defined more than once (first on line %d)"%(name, where[name]))
			error.rule, error.line_number = name, line_number
			raise error
		try: rules[name] = compiler.compile_rule(text) if text else None
		except GrammarSyntaxError as error:
			error.rule, error.line_number = name, line_number
			raise
		where[name] = line_number
	for name in extensions:
		if rules.get(name) is not None:
			error = GrammarSyntaxError("Extension point %r also has a definition in the grammar"%name)
			error.rule, error.line_number = name, where[name]
			raise error
		rules[name] = None
	table = RuleTable(rules, where)
	missing = table.missing_definitions()
	if missing: raise GrammarCompletenessError(missing)
	if VERBOSE:
		nr_ext = sum(1 for name in table if table.is_extension(name))
		print("Loaded %d rules (%d extension points)."%(len(table), nr_ext))
	return table

def load_grammar_file(path, extensions=(), start=None) -> RuleTable:
	""" As load_grammar, but reads the named file. Given a start rule, also warns about rules it can never reach. """
	with open(path) as fh: table = load_grammar(fh.read().splitlines(), extensions)
	if start is not None:
		unused = table.unreachable(start)
		if unused: warnings.warn("%s: rules unreachable from %s: %s"%(path, start, ", ".join(unused)))
	return table
