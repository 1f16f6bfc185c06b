"""
Font size search for text boxes.
"""

# Standard Library
import dataclasses
import math
from collections.abc import Callable

# PIP3 modules
import reportlab.lib.utils
import reportlab.pdfbase.pdfmetrics

# local repo modules
import card_sheet_builder as csb
import card_sheet_builder.config


LEADING_RATIO = csb.config.LEADING_RATIO

MeasureFunc = Callable[[str, float, float], float]


@dataclasses.dataclass
class FitResult:
	size: float
	measured_height: float


#============================================
def break_long_line(line: str, font_name: str, font_size: float, width: float) -> list[str]:
	"""
	Split a line wider than the box into the longest prefixes that fit.

	Each piece keeps at least one character.

	Args:
		line: Line that may be too wide.
		font_name: Registered font name.
		font_size: Font size in points.
		width: Maximum line width.

	Returns:
		Line pieces.
	"""
	pieces: list[str] = []
	remaining = line
	while remaining:
		if reportlab.pdfbase.pdfmetrics.stringWidth(remaining, font_name, font_size) <= width:
			pieces.append(remaining)
			break
		end = 1
		while end < len(remaining):
			prefix_width = reportlab.pdfbase.pdfmetrics.stringWidth(remaining[:end + 1], font_name, font_size)
			if prefix_width > width:
				break
			end += 1
		pieces.append(remaining[:end])
		remaining = remaining[end:].lstrip(" ")
	return pieces


#============================================
def wrap_text(text: str, font_name: str, font_size: float, width: float) -> list[str]:
	"""
	Wrap text to a width using font metrics.

	Words wider than the width are broken between characters.

	Args:
		text: Input text.
		font_name: Registered font name.
		font_size: Font size in points.
		width: Maximum line width.

	Returns:
		Wrapped lines.
	"""
	lines = reportlab.lib.utils.simpleSplit(text, font_name, font_size, width)
	if not lines and text:
		lines = [text]
	wrapped: list[str] = []
	for line in lines:
		wrapped.extend(break_long_line(line, font_name, font_size, width))
	return wrapped


#============================================
def compute_leading(font_size: float) -> float:
	return font_size * LEADING_RATIO


#============================================
def block_height(line_count: int, font_size: float) -> float:
	"""
	Height of a text block from the first ascender to the last baseline.
	"""
	if line_count <= 0:
		return 0.0
	return font_size + compute_leading(font_size) * (line_count - 1)


#============================================
def measure_text_height(text: str, font_name: str, font_size: float, width: float) -> float:
	"""
	Measure wrapped text height.

	Args:
		text: Input text.
		font_name: Registered font name.
		font_size: Font size in points.
		width: Wrap width.

	Returns:
		Block height in points.
	"""
	lines = wrap_text(text, font_name, font_size, width)
	return block_height(len(lines), font_size)


#============================================
def build_measure(font_name: str) -> MeasureFunc:
	"""
	Bind a font to the measure callback used by fit_text.
	"""
	def measure(text: str, font_size: float, width: float) -> float:
		return measure_text_height(text, font_name, font_size, width)
	return measure


#============================================
def fit_text(
	text: str,
	width: float,
	height: float,
	max_size: float,
	min_size: float,
	measure: MeasureFunc,
) -> FitResult:
	"""
	Find the largest integer font size whose wrapped text fits a box.

	Sizes step down by one from floor(max_size). When nothing fits, the
	result is min_size with its measured height, which may exceed the box.

	Args:
		text: Input text.
		width: Box width.
		height: Box height.
		max_size: Largest size to try.
		min_size: Smallest size allowed.
		measure: Callback (text, size, width) -> height.

	Returns:
		FitResult.
	"""
	size = math.floor(max_size)
	while size >= min_size:
		measured = measure(text, size, width)
		if measured <= height:
			return FitResult(size=size, measured_height=measured)
		size -= 1
	return FitResult(size=min_size, measured_height=measure(text, min_size, width))
