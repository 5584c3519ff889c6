import unittest

from bnfgraft.support.failureprone import SourceText, illustration

class TestSourceText(unittest.TestCase):
	def test_00_positions(self):
		source = SourceText("ab\ncd\r\nef\rgh")
		for index, expect in [
			(0, (1, 1)),
			(1, (1, 2)),
			(2, (1, 3)),
			(3, (2, 1)),
			(7, (3, 1)),
			(10, (4, 1)),
			(12, (4, 3)),
		]:
			with self.subTest(index=index):
				self.assertEqual(expect, source.position(index))

	def test_01_tabs_count_double(self):
		source = SourceText("x\n\t\ty = 1")
		self.assertEqual((2, 1), source.position(2))
		self.assertEqual((2, 5), source.position(4))
		self.assertEqual((2, 2), source.find_row_col(4))

	def test_02_unix_mode(self):
		source = SourceText("a\rb\nc", line_breaks='unix')
		self.assertEqual((1, 3), source.position(2))
		self.assertEqual((2, 1), source.position(4))

	def test_03_first_line(self):
		source = SourceText("a\nb", first_line=10)
		self.assertEqual((11, 1), source.position(2))
		self.assertEqual("b", source.line_of_text(11))

	def test_04_messages(self):
		source = SourceText("let x = ;\n", filename='bad.txt')
		self.assertEqual(" line 1, column 9", source.where(8))
		complaint = source.complaint(slice(8, 9), "Expression expected")
		self.assertEqual(
			"bad.txt: line 1, column 9: Expression expected\n"
			" >>> let x = ;\n"
			"             ^ near here",
			complaint,
		)

	def test_05_anonymous(self):
		self.assertTrue(SourceText("abc").complaint(slice(1, 2), "oops").startswith("At line 1, column 2: oops"))

class TestIllustration(unittest.TestCase):
	def test_tabs_line_up(self):
		self.assertEqual("\tabc\n\t ^^ here", illustration("\tabc", 2, 2, caption="here"))

if __name__ == '__main__':
	unittest.main()
