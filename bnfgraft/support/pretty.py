""" Bits and bobs in support of visualizing data structures. """

def outline(node, *, indent='  ', width=40):
	""" Yield one line per parse-tree node: indented kind, rule name, range, and an excerpt of the text. """
	stack = [(0, node)]
	while stack:
		depth, n = stack.pop()
		if n is None:
			yield indent*depth + '-'
			continue
		excerpt = n.matched_text
		if len(excerpt) > width: excerpt = excerpt[:width-3] + '...'
		label = n.kind.value if n.rule_name is None else "%s %s"%(n.rule_name, n.kind.value)
		yield "%s%s [%d:%d] %r"%(indent*depth, label, n.begin, n.end, excerpt)
		stack.extend((depth+1, b) for b in reversed(n.branches))

def print_outline(node, **kwargs):
	for line in outline(node, **kwargs): print(line)

def print_grid(grid):
	lens = list(map(len, grid))
	assert len(set(lens)) == 1, lens
	grid = [[str(cell) for cell in row] for row in grid]
	width = [max(map(len, column)) for column in zip(*grid)]
	horizontal = '\u2500'
	vertical = ' \u2502 '
	upper = horizontal + '\u252c' + horizontal
	inner = horizontal + '\u253c' + horizontal
	lower = horizontal + '\u2534' + horizontal
	segments = [horizontal*w for w in width]
	divider = inner.join(segments)
	print(upper.join(segments))
	for r, row in enumerate(grid):
		if r %5 == 1: print(divider)
		print(vertical.join(s.ljust(w,' ') for s,w in zip(row, width)))
	print(lower.join(segments))

def rule_grid(table):
	""" A header row, then one row per rule: name, kind of body, where it was defined, and its text. """
	grid = [['rule', 'kind', 'line', 'definition']]
	for name in table:
		body = table[name]
		line = table.line_number(name)
		if body is None: grid.append([name, 'extension', line or '', ''])
		else:
			text = ' '.join(body.text.split())
			grid.append([name, body.kind.value, line or '', text if len(text) <= 50 else text[:47]+'...'])
	return grid
