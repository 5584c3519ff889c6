"""
One node type serves for both rule trees (compiled BNF) and parse trees (matched input).

A node never copies text. It holds the whole backing string and a half-open range into it.
Composite nodes start out with no range and grow to cover whatever branches get attached,
so a node's range is exactly the extent of what it matched.

Rule trees are built once per grammar and thereafter only read. Their `definition` is None.
Parse trees point each node at the rule node it was matched against, which is how a consumer
recognizes the grammar structure it is looking at. Only parse trees may be decorated:
	prefix: text to appear immediately before the node,
	suffix: text to appear immediately after the node,
	hidden: suppress the node's own characters (but not its decorations).
Decorations never touch the backing text; `render` (or `str(node)`) puts it all together.

The `parent` link is for looking upward only. Ownership runs strictly down through `branches`.
"""

from enum import Enum

from .render import render

class Kind(Enum):
	TOKEN = 'token'
	IDENTIFIER = 'identifier'
	SEQUENCE = 'sequence'
	CHOICE = 'choice'
	OPTIONAL = 'optional'
	REPETITION = 'repetition'
	TOKEN_KEYWORD = 'token_keyword' # This and the rest appear only in rule trees.
	IDENTIFIER_KEYWORD = 'identifier_keyword'
	NEWLINE_KEYWORD = 'newline_keyword'


class Node:
	__slots__ = ('text', 'begin', 'end', 'kind', 'definition', 'parent', 'branches', 'prefix', 'suffix', 'hidden', 'name')

	def __init__(self, kind:Kind, definition:"Node"=None, text:str=None, begin:int=None, end:int=None):
		"""
		Leaves know their range up front. Composite nodes may leave it unset: the first
		branch attached sets `begin`, and every branch attached can only extend `end`.
		"""
		self.kind = kind
		self.definition = definition
		self.text, self.begin, self.end = text, begin, end
		self.parent = None
		self.branches = []
		self.prefix = self.suffix = None
		self.hidden = False
		self.name = None

	@classmethod
	def leaf(cls, kind:Kind, text:str, begin:int, end:int, definition:"Node"=None) -> "Node":
		""" Convenience for terminals, including whatever an extension hook recognizes. """
		if not 0 <= begin <= end <= len(text):
			raise ValueError("Bad range [%s:%s] for a text of length %d"%(begin, end, len(text)))
		return cls(kind, definition, text, begin, end)

	def add_branch(self, branch:"Node"):
		""" Attach a child (or None, for an alternative that did not match) and grow to cover it. """
		if branch is None:
			self.branches.append(None)
			return
		if self.text is None: self.text = branch.text
		if self.begin is None: self.begin = branch.begin
		if self.end is None or self.end < branch.end: self.end = branch.end
		self.branches.append(branch)
		branch.parent = self

	@property
	def matched_text(self) -> str: return self.text[self.begin:self.end]

	@property
	def rule_name(self):
		""" The name of the grammar rule this node matched, if it matched one directly. """
		return None if self.definition is None else self.definition.name

	@property
	def chosen(self):
		""" For a choice: the (index, branch) of the alternative that matched. """
		assert self.kind is Kind.CHOICE
		for index, branch in enumerate(self.branches):
			if branch is not None: return index, branch

	def is_empty(self): return self.begin == self.end

	def walk(self, *, absent=False):
		""" Depth-first, pre-order. With absent=True, also yields None for unmatched alternatives. """
		stack = [self]
		while stack:
			node = stack.pop()
			yield node
			if node is not None:
				stack.extend(b for b in reversed(node.branches) if absent or b is not None)

	def shape(self):
		""" Nested-tuple structural summary: kinds, ranges, and branch structure. Useful for comparing trees. """
		return (self.kind, self.begin, self.end, tuple(None if b is None else b.shape() for b in self.branches))

	def __check_decorable(self):
		if self.definition is None: raise TypeError("Rule trees are shared and immutable; only parse trees may be decorated.")

	def set_prefix(self, prefix:str):
		self.__check_decorable()
		self.prefix = prefix

	def set_suffix(self, suffix:str):
		self.__check_decorable()
		self.suffix = suffix

	def set_hidden(self, hidden:bool=True):
		self.__check_decorable()
		self.hidden = hidden

	def render(self) -> str: return render(self)

	def __str__(self): return render(self)

	def __repr__(self):
		label = self.kind.value if self.name is None else "%s %s"%(self.kind.value, self.name)
		return "<%s [%s:%s] %r>"%(label, self.begin, self.end, None if self.text is None else self.matched_text[:40])
