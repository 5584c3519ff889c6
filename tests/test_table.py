import unittest
import os
import tempfile
import warnings

from bnfgraft.grammar import table
from bnfgraft.grammar.table import load_grammar, load_grammar_file, each_block, split_rule_head
from bnfgraft.parsing.interface import GrammarError, GrammarSyntaxError, GrammarCompletenessError
from bnfgraft.tree.nodes import Kind

ARITHMETIC = """
# Comments and blank lines are fine.

Sum: Product { ( '+' | '-' ) Product }
Product: Atom { ( '*' | '/' ) Atom }
Atom: Number
	| '(' Sum ')'
	| 'abs' Atom
Number:
"""

class TestBlocks(unittest.TestCase):
	def test_00_rule_heads(self):
		self.assertEqual(('Foo', ' bar'), split_rule_head('Foo: bar'))
		self.assertEqual(('Foo', ''), split_rule_head('Foo:'))
		self.assertIsNone(split_rule_head("| 'a:b'"))
		self.assertIsNone(split_rule_head("'x': y"))
		self.assertIsNone(split_rule_head(":nothing"))

	def test_01_continuation_lines(self):
		blocks = list(each_block(ARITHMETIC.splitlines()))
		self.assertEqual(['Sum', 'Product', 'Atom', 'Number'], [b[0] for b in blocks])
		self.assertEqual("Number\n| '(' Sum ')'\n| 'abs' Atom", blocks[2][1])
		self.assertEqual(6, blocks[2][2])
		self.assertEqual('', blocks[3][1])

	def test_02_orphan_continuation(self):
		with self.assertRaises(GrammarSyntaxError) as context:
			list(each_block(["", "| 'a'", "A: 'b'"]))
		self.assertEqual(2, context.exception.line_number)

class TestLoading(unittest.TestCase):
	def test_00_arithmetic(self):
		rules = load_grammar(ARITHMETIC)
		self.assertEqual(['Sum', 'Product', 'Atom', 'Number'], list(rules))
		self.assertEqual(4, len(rules))
		self.assertIs(Kind.CHOICE, rules['Atom'].kind)
		self.assertEqual(3, len(rules['Atom'].branches))
		self.assertIsNone(rules['Number'])
		self.assertTrue(rules.is_extension('Number'))
		self.assertFalse(rules.is_extension('Sum'))
		self.assertFalse(rules.is_extension('Nonexistent'))
		self.assertEqual(4, rules.line_number('Sum'))

	def test_01_bodies_know_their_names(self):
		rules = load_grammar(ARITHMETIC)
		for name in ['Sum', 'Product', 'Atom']:
			with self.subTest(name=name):
				self.assertEqual(name, rules[name].name)

	def test_02_declared_extensions(self):
		rules = load_grammar("Call: Name '(' ')'", extensions=['Name'])
		self.assertTrue(rules.is_extension('Name'))

	def test_03_extension_conflicts_with_definition(self):
		with self.assertRaises(GrammarSyntaxError) as context:
			load_grammar("A: B\nB: 'b'", extensions=['B'])
		self.assertEqual('B', context.exception.rule)

	def test_04_missing_definitions(self):
		with self.assertRaises(GrammarCompletenessError) as context:
			load_grammar("A: B")
		self.assertEqual(['B'], context.exception.missing)
		self.assertEqual("The following definitions are missing: B", str(context.exception))

	def test_05_all_missing_at_once(self):
		with self.assertRaises(GrammarCompletenessError) as context:
			load_grammar("A: B C | D\nD: C E")
		self.assertEqual(['B', 'C', 'E'], context.exception.missing)

	def test_06_duplicate_rule(self):
		with self.assertRaises(GrammarSyntaxError) as context:
			load_grammar("A: 'a'\nB: 'b'\nA: 'c'")
		self.assertEqual('A', context.exception.rule)
		self.assertEqual(3, context.exception.line_number)

	def test_07_syntax_error_names_the_rule(self):
		with self.assertRaises(GrammarSyntaxError) as context:
			load_grammar("A: 'a'\n\nB: ( 'b'")
		self.assertEqual('B', context.exception.rule)
		self.assertEqual(3, context.exception.line_number)
		self.assertIn("rule 'B'", str(context.exception))

	def test_08_everything_is_a_grammar_error(self):
		for text in ["A: B", "A: ((", "| x"]:
			with self.subTest(text=text):
				self.assertRaises(GrammarError, load_grammar, text)

	def test_09_verbose(self):
		table.VERBOSE = True
		try: load_grammar(ARITHMETIC)
		finally: table.VERBOSE = False

class TestQueries(unittest.TestCase):
	def test_00_keywords(self):
		rules = load_grammar(ARITHMETIC)
		self.assertEqual(frozenset(['abs']), rules.keywords())
		self.assertIs(rules.keywords(), rules.keywords())

	def test_01_reachability(self):
		rules = load_grammar("A: B 'x'\nB: 'b' | A\nC: D\nD: 'd'")
		self.assertEqual({'A', 'B'}, rules.reachable('A'))
		self.assertEqual(['C', 'D'], rules.unreachable('A'))
		self.assertEqual(['A', 'B'], rules.unreachable('C'))

	def test_02_file_warns_about_unreachable_rules(self):
		with tempfile.TemporaryDirectory() as folder:
			path = os.path.join(folder, 'g.bnf')
			with open(path, 'w') as fh: fh.write("A: 'a'\nB: 'b'\n")
			with warnings.catch_warnings(record=True) as caught:
				warnings.simplefilter('always')
				rules = load_grammar_file(path, start='A')
			self.assertEqual(['A', 'B'], list(rules))
			self.assertEqual(1, len(caught))
			self.assertIn('B', str(caught[0].message))

if __name__ == '__main__':
	unittest.main()
