"""
Parsing Interface Definitions.

The matcher is generic: it knows nothing of any particular language's lexical habits.
Three small hooks, supplied per parse, carry whatever a language needs beyond its grammar:

	is_keyword(text) -> bool
		Says whether a word is reserved. Reserved words cannot serve as IDENTIFIER,
		and a keyword token must not run on into further identifier characters.

	extend(rule, text, begin, end) -> Node or None
		Called for rule names declared with an empty body (extension points).
		Return a leaf node for whatever matches at `begin`, or None for no match.
		Raising ParseFailure is also fine: it counts as a failed alternative.

	skip(text, begin, end) -> int
		Return the offset of the next significant character at or after `begin`.
		Override to skip comments or other lexical noise.

The defaults below make for a plain, whitespace-insensitive, keyword-free language.
"""

from typing import Callable, Optional

TAB_WIDTH = 2 # Columns a tab character advances, for human-readable positions.

class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """

class GrammarError(LanguageError):
	""" Something is wrong with a grammar. Fatal at load time. """

class GrammarSyntaxError(GrammarError):
	"""
	Malformed BNF text. Parameters are:
		the message,
		the offset within the expression text (if known).
	The loader fills in the rule name and line number when it knows them.
	"""
	def __init__(self, message, position=None):
		super().__init__(message, position)
		self.message, self.position = message, position
		self.rule = self.line_number = None

	def __str__(self):
		where = []
		if self.line_number is not None: where.append("line %d"%self.line_number)
		if self.rule is not None: where.append("rule %r"%self.rule)
		if self.position is not None: where.append("offset %d"%self.position)
		if where: return "%s (%s)"%(self.message, ", ".join(where))
		return self.message

class GrammarCompletenessError(GrammarError):
	""" One or more rule names are mentioned but never defined. All of them are listed at once. """
	def __init__(self, missing):
		super().__init__(list(missing))
		self.missing = list(missing)

	def __str__(self):
		return "The following definitions are missing: " + ", ".join(self.missing)

class LexicalError(LanguageError):
	"""
	A whitespace hook found something it cannot skip and cannot leave, such as an unclosed comment.
	Unlike ParseFailure, this is not recoverable by trying another alternative.
	"""
	def __init__(self, message, position):
		super().__init__(message, position)
		self.message, self.position = message, position

class ParseFailure(LanguageError):
	"""
	The input does not match. Inside the matcher these are raised and caught freely:
	a choice collects the failures of its alternatives as `causes`.

	`position` is where the failing attempt was made. For a compound failure, it is
	the farthest position among the causes.

	Once a failure escapes `parse(...)`, it also knows the SourceText it concerns and
	the farthest offset any terminal consumed, so it can describe itself in terms of
	lines and columns.
	"""
	def __init__(self, message, position, causes=()):
		if causes: position = max(position, max(c.position for c in causes))
		super().__init__(message, position)
		self.message, self.position, self.causes = message, position, tuple(causes)
		self.source = None
		self.farthest = None

	def locate(self, source, farthest):
		""" Called on the way out of `parse(...)` to attach diagnostic context. """
		self.source, self.farthest = source, farthest
		return self

	@property
	def line(self): return self.source.position(self.position)[0] if self.source else None

	@property
	def column(self): return self.source.position(self.position)[1] if self.source else None

	def reasons(self):
		""" Yield the leaf failures beneath this one, in the order they happened. """
		stack = [self]
		while stack:
			failure = stack.pop()
			if failure.causes: stack.extend(reversed(failure.causes))
			else: yield failure

	def describe(self, source=None):
		source = source or self.source
		if source is None: return "%s at offset %d"%(self.message, self.position)
		return "%s at%s"%(self.message, source.where(self.position))

	def messages(self) -> list:
		""" Every distinct leaf failure, formatted. The causes share their ancestor's source. """
		return list(dict.fromkeys(r.describe(self.source) for r in self.reasons()))

	def __str__(self):
		if self.source is None or not self.causes: return self.describe()
		return "%s\n%s"%(self.describe(), "\n".join(self.messages()))

class InfiniteRecursionError(ParseFailure):
	""" A rule was asked to match the same range it is already busy matching. """


KeywordHook = Callable[[str], bool]
ExtensionHook = Callable[["Node", str, int, int], Optional["Node"]]
WhitespaceHook = Callable[[str, int, int], int]

def no_keywords(text:str) -> bool: return False

def no_extensions(rule, text:str, begin:int, end:int): return None

def skip_whitespace(text:str, begin:int, end:int) -> int:
	""" The default lexical policy: any whitespace, horizontal or vertical, is insignificant. """
	while begin < end and text[begin].isspace(): begin += 1
	return begin

def is_identifier_start(char:str) -> bool: return char.isalpha() or char in '_$'

def is_identifier_char(char:str) -> bool: return char.isalnum() or char in '_$'

def is_identifier(text:str) -> bool:
	return bool(text) and all(map(is_identifier_char, text))
