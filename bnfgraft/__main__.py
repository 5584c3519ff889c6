"""
Load a BNF grammar and parse source files with it.

Reports grammar problems, and for each source file either confirms that it parses
or shows where it stopped making sense. Handy while writing or debugging a grammar.
"""

import sys, argparse

from bnfgraft.grammar import table as grammar_table
from bnfgraft.grammar.meta import lint_grammar
from bnfgraft.parsing.interface import GrammarError, ParseFailure, LexicalError
from bnfgraft.parsing.matcher import Parser
from bnfgraft.parsing.c_family import CFamilyParser
from bnfgraft.support import pretty
from bnfgraft.support.failureprone import SourceText

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m bnfgraft', description=__doc__,)
	parser.add_argument('grammar_path', help='path to the grammar file')
	parser.add_argument('source_paths', nargs='*', help='paths to files to parse')
	parser.add_argument('-r', '--rule', help='the start rule (default: the first rule in the grammar)')
	parser.add_argument('-c', '--c-family', action='store_true', dest='c_family', help='skip C-style comments, treat grammar words as keywords, and recognize literal extension points.')
	parser.add_argument('--lint', action='store_true', help='check the grammar file against the meta-grammar first.')
	parser.add_argument('--rules', action='store_true', help='display the rule table in grid format on STDOUT.')
	parser.add_argument('--outline', action='store_true', help='display each parse tree as an indented outline on STDOUT.')
	parser.add_argument('-v', '--verbose', action='store_true', help="Squawk about what's going on.")
	return parser.parse_args(argv)

def complain(failure, source:SourceText, where:int, message:str):
	end = min(where + 1, len(source.content))
	source.complain(slice(where, end), message)
	if isinstance(failure, ParseFailure) and failure.causes:
		for line in failure.messages(): print('\t'+line, file=sys.stderr)

def main(args):
	if args.verbose: grammar_table.VERBOSE = True
	with open(args.grammar_path) as fh: document = fh.read()
	if args.lint:
		try: lint_grammar(document, filename=args.grammar_path)
		except ParseFailure as failure:
			complain(failure, failure.source, failure.position, failure.message)
			return 1
	try:
		table = grammar_table.load_grammar_file(args.grammar_path, start=args.rule)
	except GrammarError as e:
		print("%s: %s"%(args.grammar_path, e), file=sys.stderr)
		return 1
	start = args.rule or next(iter(table), None)
	if start is None:
		print("%s: grammar has no rules"%args.grammar_path, file=sys.stderr)
		return 1
	if args.rules: pretty.print_grid(pretty.rule_grid(table))
	parser = CFamilyParser(table) if args.c_family else Parser(table)
	status = 0
	for path in args.source_paths:
		try:
			tree = parser.parse_file(start, path)
		except ParseFailure as failure:
			complain(failure, failure.source, failure.position, failure.message)
			status = 1
		except LexicalError as error:
			with open(path) as fh: source = SourceText(fh.read(), filename=path)
			complain(error, source, error.position, error.message)
			status = 1
		else:
			if args.verbose: print("%s: parsed %d characters as %s"%(path, tree.end - tree.begin, start))
			if args.outline: pretty.print_outline(tree)
	return status

if __name__ == '__main__': sys.exit(main(parse_arguments()))
