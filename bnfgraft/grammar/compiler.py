"""
Compile the right-hand side of one BNF rule into a rule tree.

The dialect is small:
	'text' or "text"     a literal token (backslash escapes the next character)
	Name                 a reference to another rule, resolved by name at match time
	TOKEN                any single-quoted literal in the input (for grammars about grammars)
	IDENTIFIER           any identifier in the input that is not a keyword
	NEW_LINE             a line break in the input
	a b                  sequence: juxtaposition, separated by whitespace
	a | b                choice: ordered, first match wins
	( a )                grouping
	[ a ]                optional: zero or one
	{ a }                repetition: zero or more

Choice binds loosest, then sequence. Rather than tokenize, the compiler scans for the first
top-level operator in the range at hand, splits there, and recurses on both sides. The right
side of a split is compiled first and absorbed if it has the same kind, so a long chain of
alternatives becomes one flat choice node rather than a lopsided binary tree.

Every rule node records the range of the expression text it came from. Whitespace around an
operand is trimmed before recursing; a bracketed atom's range includes its brackets,
except a grouped terminal, whose range is its name or literal.
"""

from ..parsing.interface import GrammarSyntaxError, is_identifier
from ..tree.nodes import Node, Kind

RESERVED = {
	'TOKEN': Kind.TOKEN_KEYWORD,
	'IDENTIFIER': Kind.IDENTIFIER_KEYWORD,
	'NEW_LINE': Kind.NEWLINE_KEYWORD,
}

OPENING = {'(': ')', '[': ']', '{': '}'}
CLOSING = frozenset(OPENING.values())
QUOTES = "'\""

def compile_rule(text:str) -> Node:
	""" Compile a whole BNF expression. Raises GrammarSyntaxError if it's malformed. """
	begin, end = _trim(text, 0, len(text))
	if begin == end: raise GrammarSyntaxError("Empty expression", 0)
	return _compile(text, begin, end)

def _trim(text, begin, end):
	while begin < end and text[begin].isspace(): begin += 1
	while end > begin and text[end-1].isspace(): end -= 1
	return begin, end

def _compile(text, begin, end) -> Node:
	split = _find_split(text, begin, end)
	if split is None: return _atom(text, begin, end)
	kind, left_stop, right_start = split
	left = _compile(text, *_trim(text, begin, left_stop))
	right = _compile(text, *_trim(text, right_start, end))
	result = Node(kind)
	result.add_branch(left)
	if right.kind is kind:
		for b in right.branches: result.add_branch(b)
	else:
		result.add_branch(right)
	return result

def _find_split(text, begin, end):
	"""
	Scan once, tracking bracket depth and quotes. The first top-level '|' makes a choice.
	Failing that, the first top-level whitespace makes a sequence. Failing both, it's an atom.
	The result is (kind, stop-of-left-side, start-of-right-side) or None.
	"""
	depth, quote, space = 0, None, None
	i = begin
	while i < end:
		c = text[i]
		if quote:
			if c == '\\': i += 1
			elif c == quote: quote = None
		elif c in QUOTES: quote = c
		elif c in OPENING: depth += 1
		elif c in CLOSING:
			depth -= 1
			if depth < 0: raise GrammarSyntaxError("Unmatched closing bracket %r"%c, i)
		elif depth == 0:
			if c == '|':
				if i == begin or i == end-1 or not _trim(text, i+1, end)[0] < end:
					raise GrammarSyntaxError("Choice is missing an alternative", i)
				return Kind.CHOICE, i, i+1
			if c.isspace() and space is None and _next_significant(text, i, end) not in '|)]}':
				space = i
		i += 1
	if quote: raise GrammarSyntaxError("Unterminated quoted literal", end-1)
	if depth: raise GrammarSyntaxError("Unclosed bracket", begin)
	if space is not None: return Kind.SEQUENCE, space, space+1
	return None

def _next_significant(text, i, end):
	while i < end and text[i].isspace(): i += 1
	return text[i] if i < end else '|'

def _atom(text, begin, end) -> Node:
	first, last = text[begin], text[end-1]
	if first in OPENING:
		if last != OPENING[first]:
			raise GrammarSyntaxError("The expression %r should be surrounded by %s%s"%(text[begin:end], first, OPENING[first]), begin)
		inner_begin, inner_end = _trim(text, begin+1, end-1)
		if inner_begin == inner_end: raise GrammarSyntaxError("Empty brackets", begin)
		inner = _compile(text, inner_begin, inner_end)
		if first == '(':
			# A terminal's range is its name or literal, so a grouped terminal keeps it.
			if not inner.branches: return inner
			result = inner
		else:
			result = Node(Kind.OPTIONAL if first == '[' else Kind.REPETITION)
			result.add_branch(inner)
		result.begin, result.end = begin, end
		return result
	if first in QUOTES:
		if end - begin < 2 or last != first:
			raise GrammarSyntaxError("Malformed literal %r"%text[begin:end], begin)
		return Node.leaf(Kind.TOKEN, text, begin, end)
	word = text[begin:end]
	if word in RESERVED: return Node.leaf(RESERVED[word], text, begin, end)
	if not is_identifier(word):
		raise GrammarSyntaxError("Expression %r is not an identifier"%word, begin)
	return Node.leaf(Kind.IDENTIFIER, text, begin, end)

def literal(rule:Node) -> str:
	""" The text a token rule matches: its quotes stripped and backslash escapes resolved. """
	return _unescape(rule.text[rule.begin+1:rule.end-1])

def _unescape(body:str) -> str:
	if '\\' not in body: return body
	out, chars = [], iter(body)
	for c in chars:
		out.append(next(chars, '') if c == '\\' else c)
	return ''.join(out)
