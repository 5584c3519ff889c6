"""
Instrument a program in the tiny language (see tiny.bnf) so that it announces each statement
as it runs. Every statement S becomes `{ trace(N); S }`, where N identifies the statement's
position in the original source. The braces keep the meaning intact even where a statement
stands alone as the body of an `if` or `while`, and because they are bracket-style decorations
the renderer nests them properly however deeply statements are nested.

Run it on a file, and the instrumented program appears on STDOUT while the table of
statement positions goes to STDERR.
"""
import os, sys

from bnfgraft.grammar.table import load_grammar_file
from bnfgraft.parsing.c_family import CFamilyParser
from bnfgraft.parsing.interface import ParseFailure
from bnfgraft.support.failureprone import SourceText

parser = CFamilyParser(load_grammar_file(os.path.join(os.path.dirname(__file__), 'tiny.bnf'), start='Program'))

def instrument(text, *, call='trace'):
	"""
	Returns the instrumented text and a dictionary from statement number to (line, column).
	Comments and blank space outside the program proper pass through untouched.
	"""
	tree = parser.parse('Program', text)
	source = SourceText(text)
	places = {}
	for node in tree.walk():
		if node.rule_name != 'Statement': continue
		_, statement = node.chosen
		if statement.rule_name == 'Block': continue # Its statements get their own traces.
		number = len(places) + 1
		places[number] = source.position(statement.begin)
		node.set_prefix('{ %s(%d); '%(call, number))
		node.set_suffix(' }')
	return text[:tree.begin] + str(tree) + text[tree.end:], places

def main():
	for path in sys.argv[1:]:
		with open(path) as fh: text = fh.read()
		try: result, places = instrument(text)
		except ParseFailure as failure:
			failure.source.complain(slice(failure.position, failure.position+1), failure.message)
			continue
		print(result)
		for number, (line, column) in places.items():
			print("%d\t%s:%d:%d"%(number, path, line, column), file=sys.stderr)

if __name__ == '__main__': main()
