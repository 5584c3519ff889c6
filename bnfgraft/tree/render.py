"""
Reconstruct text from a (possibly decorated) parse tree.

Without decorations, a node renders as exactly the text it matched, whitespace and all.
Decorations make it more interesting. A node with both a prefix and a suffix behaves like
a pair of brackets around its text, and brackets must nest properly or the output is junk.
Several decorations may attach at the same offset, so the order of emission matters:

	1. Closers (suffixes) come before openers (prefixes), so a bracket closes before another opens.
	2. Among closers, the narrower range closes first. Equal ranges close descendant first.
	3. Among openers, the wider range opens first. Equal ranges open ancestor first.
	4. A prefix without a suffix, or a suffix without a prefix, is plain text rather than a bracket.
	   Brackets take precedence: plain suffixes come out before any bracket closes there,
	   and plain prefixes come out after every bracket opens there.

Decorations on nodes that matched nothing are ignored: they have no text to surround.
Hidden nodes contribute their decorations but not their characters.
"""

def render(node) -> str:
	if node.is_empty():
		return (node.prefix or '') + (node.suffix or '')
	openers, closers, hidden = _gather(node)
	text, begin, end = node.text, node.begin, node.end
	if not (openers or closers or hidden):
		return text[begin:end]

	boundaries = set(openers) | set(closers)
	for h in hidden: boundaries.update((h.begin, h.end))
	hidden_iter = iter(hidden)
	concealed = next(hidden_iter, None)
	output, cursor = [], begin
	for offset in sorted(boundaries):
		if cursor < offset:
			while concealed is not None and concealed.end <= cursor: concealed = next(hidden_iter, None)
			if concealed is None or not (concealed.begin <= cursor and offset <= concealed.end):
				output.append(text[cursor:offset])
			cursor = offset
		for _, n in sorted(closers.get(offset, ()), key=_closing_order): output.append(n.suffix)
		for _, n in sorted(openers.get(offset, ()), key=_opening_order): output.append(n.prefix)
	if cursor < end:
		while concealed is not None and concealed.end <= cursor: concealed = next(hidden_iter, None)
		if concealed is None or concealed.begin > cursor: output.append(text[cursor:end])
	return ''.join(output)

def _closing_order(entry):
	depth, n = entry
	return (n.prefix is not None, -n.begin, -depth)

def _opening_order(entry):
	depth, n = entry
	return (n.suffix is None, -n.end, depth)

def _gather(root):
	"""
	Find decorations and hidden nodes in the subtree.
	Decorations are keyed by the offset where they attach, paired with their depth for tie-breaks.
	Hidden nodes come out in text order. Only the outermost hidden node on any path counts,
	so the hidden ranges never overlap.
	"""
	openers, closers, hidden = {}, {}, []
	stack = [(0, root, False)]
	while stack:
		depth, n, concealed = stack.pop()
		if n.prefix is not None: openers.setdefault(n.begin, []).append((depth, n))
		if n.suffix is not None: closers.setdefault(n.end, []).append((depth, n))
		if n.hidden and not concealed:
			hidden.append(n)
			concealed = True
		for b in reversed(n.branches):
			if b is not None and not b.is_empty(): stack.append((depth + 1, b, concealed))
	hidden.sort(key=lambda h: h.begin)
	return openers, closers, hidden
