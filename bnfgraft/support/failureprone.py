"""
This module is all about easing over the process to display where things go wrong.

The matcher thinks only in terms of integer offsets into one big string. People think in
lines and columns. The SourceText bridges the two: it builds a table of line boundaries
for a whole text once, then answers any number of position questions by bisection.

Columns are for human eyes, so they come out 1-based and a tab advances the column by
TAB_WIDTH rather than by one. (The raw 0-based character offset within the line is still
available from `find_row_col` for slicing purposes.)

If you can localize where an error came from, you'd generally like to include some
context in the report. The usual strategy is to show the offending line, ideally
with a specific portion highlighted somehow. The `illustration` function makes such
a picture for a text console.

Line breaks are a funny thing. Unix calls for \n. Apple prior to OSX called for \r.
CP/M and its derivatives like Windows call for \r\n. The default here treats all three
as line-breaks. You can supply a mode argument to specify different conventions;
the options are the keys of the LINEBREAK_MODE dictionary.
"""

import bisect, re, sys

from ..parsing.interface import TAB_WIDTH

LINEBREAK_MODE = {
	'normal': re.compile(r'\r\n?|\n'),
	'unix': re.compile(r'\n'),
	'apple': re.compile(r'\r'),
	'dos': re.compile(r'\r\n'),
}

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	""" Builds up a picture of where something appears in a line of text. Useful for polite error messages. """
	blanks = ''.join(c if c == '\t' else ' ' for c in prefix + single_line[:start])
	underline_width = max(1, min(width, len(single_line)-start))
	underline = '^'*underline_width
	return prefix + single_line.rstrip() + '\n' + blanks + underline +" "+caption

class SourceText:
	""" Wrapper for (a section of) source text: participates in half-respectable error-display with context. """
	def __init__(self, content:str, line_breaks='normal', filename:str=None, first_line=1, tab_width=TAB_WIDTH):
		self.content = content
		self.filename = filename
		self.line_breaks = line_breaks
		self.first_line = first_line
		self.tab_width = tab_width
		inside = [m.end() for m in LINEBREAK_MODE[line_breaks].finditer(content)]
		self.__bounds = [0] + inside + [len(content)]

	def find_row_col(self, index:int):
		""" Based on a character index offset from the start of text. Respects self.first_line; column is a 0-based offset. """
		row = bisect.bisect_right(self.__bounds, index, hi=len(self.__bounds) - 1) - 1
		col = index - self.__bounds[row]
		return row+self.first_line, col

	def position(self, index:int):
		""" Human-readable (line, column), both 1-based, with tabs expanded. """
		row, col = self.find_row_col(index)
		start = self.__bounds[row - self.first_line]
		leader = self.content[start:start+col]
		return row, 1 + col + (self.tab_width - 1) * leader.count('\t')

	def where(self, index:int) -> str:
		return " line %d, column %d"%self.position(index)

	def line_of_text(self, row):
		""" Argument respects self.first_line. """
		r = max(0, row - self.first_line)
		return self.content[self.__bounds[r]:self.__bounds[r + 1]]

	def _format_message(self, index, message):
		prefix = "At" if self.filename is None else str(self.filename)+":"
		return "%s line %d, column %d: %s" % ((prefix,) + self.position(index) + (message,))

	def complaint(self, a_slice:slice, message:str):
		left, right = a_slice.start, a_slice.stop
		row, col = self.find_row_col(left)
		reference = self._format_message(left, message)
		line = self.line_of_text(row)
		illustrated = illustration(line, col, right - left, prefix=' >>> ')
		return "%s\n%s"%(reference, illustrated)

	def complain(self, a_slice:slice, message:str):
		print(self.complaint(a_slice, message), file=sys.stderr)
