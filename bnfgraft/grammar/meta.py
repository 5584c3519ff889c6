"""
The BNF dialect, described in itself.

The loader is forgiving about layout; this is stricter, and says where a problem is by line
and column. Line breaks are significant here, so the meta-parser skips only spaces and tabs.
A rule may carry on to further lines, as the loader allows, as long as no such line looks like
the head of another rule. The Continuation extension point recognizes that line break.

Double-quoted literals are an extension point, which gives the meta-grammar a chance to
show off that feature too.
"""

import functools

from ..parsing.matcher import Parser
from ..parsing.c_family import quoted
from ..tree.nodes import Node, Kind
from .table import load_grammar, split_rule_head

META_GRAMMAR = r"""
Grammar: { NEW_LINE } { Rule { NEW_LINE } }
Rule: IDENTIFIER ':' [ [ Continuation ] Expression ] NEW_LINE
Expression: Sequence { Alternative }
Alternative: { NEW_LINE } '|' [ Continuation ] Sequence
Sequence: Atom { Atom | Continuation Atom }
Atom: Literal | Group | Optional | Repetition | Reserved | IDENTIFIER
Literal: TOKEN | DoubleQuoted
DoubleQuoted:
Continuation:
Group: '(' Expression ')'
Optional: '[' Expression ']'
Repetition: '{' Expression '}'
Reserved: 'TOKEN' | 'IDENTIFIER' | 'NEW_LINE'
"""

RESERVED_WORDS = frozenset(['TOKEN', 'IDENTIFIER', 'NEW_LINE'])

@functools.lru_cache(maxsize=None)
def meta_table():
	return load_grammar(META_GRAMMAR)

class MetaParser(Parser):
	def __init__(self):
		super().__init__(meta_table())
		self.__double_quoted = quoted('"')

	def is_keyword(self, text): return text in RESERVED_WORDS

	def extend(self, rule, text, begin, end):
		if rule.matched_text == 'DoubleQuoted': return self.__double_quoted(rule, text, begin, end)
		if rule.matched_text == 'Continuation': return continuation(rule, text, begin, end)

	def skip_whitespace(self, text, begin, end):
		while begin < end and text[begin] in ' \t': begin += 1
		return begin

def continuation(rule, text, begin, end):
	"""
	Line breaks (blank lines included) and the indentation after them, provided the next
	nonblank line neither opens an alternative nor starts another rule.
	"""
	if text[begin] != '\n': return None
	i = begin
	while i < end and text[i] in ' \t\n': i += 1
	if i == end: return None
	stop = text.find('\n', i, end)
	line = text[i:end if stop < 0 else stop].strip()
	if line.startswith('|') or split_rule_head(line) is not None: return None
	return Node.leaf(Kind.TOKEN, text, begin, i, rule)

def normalize(text:str) -> str:
	""" Comments become blank lines (so line numbers still agree) and trailing blanks go away. """
	lines = ['' if line.lstrip().startswith('#') else line.rstrip() for line in text.splitlines()]
	return '\n'.join(lines) + '\n'

def lint_grammar(text:str, filename=None):
	""" Parse a grammar document with the meta-grammar. Returns the parse tree or raises ParseFailure. """
	return MetaParser().parse('Grammar', normalize(text), filename=filename)
