import unittest
import sys

import example.tracer
from bnfgraft.parsing.interface import ParseFailure

PROGRAM = """// Doubles its way up.
function main(x) {
	if (x < 2) x = x + 1;
	while (x < 10) { x = x * 2; }
	return x;
}
"""

INSTRUMENTED = """// Doubles its way up.
function main(x) {
	{ trace(1); if (x < 2) { trace(2); x = x + 1; } }
	{ trace(3); while (x < 10) { { trace(4); x = x * 2; } } }
	{ trace(5); return x; }
}
"""

class TestTracer(unittest.TestCase):
	def test_00_instrument(self):
		result, places = example.tracer.instrument(PROGRAM)
		self.assertEqual(INSTRUMENTED, result)
		self.assertEqual({1: (3, 3), 2: (3, 14), 3: (4, 3), 4: (4, 20), 5: (5, 3)}, places)

	def test_01_every_parse_is_fresh(self):
		first, _ = example.tracer.instrument(PROGRAM)
		second, _ = example.tracer.instrument(PROGRAM)
		self.assertEqual(first, second)
		tree = example.tracer.parser.parse('Program', PROGRAM)
		self.assertEqual(PROGRAM[tree.begin:tree.end], str(tree))

	def test_02_else_and_calls(self):
		text = "function f() { if (ok()) log(\"yes\"); else { log(\"no\"); } }"
		result, places = example.tracer.instrument(text, call='t')
		self.assertEqual(
			"function f() { { t(1); if (ok()) { t(2); log(\"yes\"); } else { { t(3); log(\"no\"); } } } }",
			result,
		)
		self.assertEqual(3, len(places))

	def test_03_no_functions(self):
		self.assertEqual(("/* nothing */\n", {}), example.tracer.instrument("/* nothing */\n"))

	def test_04_syntax_error(self):
		with self.assertRaises(ParseFailure) as context:
			example.tracer.instrument("function f() { x = ; }")
		self.assertEqual(1, context.exception.line)

	def test_05_deep_nesting(self):
		limit = sys.getrecursionlimit()
		text = "function f() { x = " + "("*200 + "1" + ")"*200 + "; }"
		result, places = example.tracer.instrument(text)
		self.assertEqual(1, len(places))
		self.assertEqual("function f() { { trace(1); x = " + "("*200 + "1" + ")"*200 + "; } }", result)
		self.assertEqual(limit, sys.getrecursionlimit())

if __name__ == '__main__':
	unittest.main()
