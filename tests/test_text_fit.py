import math

import reportlab.pdfbase.pdfmetrics

import card_sheet_builder.config as config_lib
import card_sheet_builder.text_fit as text_fit


#============================================
def fake_measure(text: str, size: float, width: float) -> float:
	"""
	Measure with half-em characters and 1.2 leading.
	"""
	chars_per_line = max(1, int(width / (size * 0.5)))
	line_count = math.ceil(len(text) / chars_per_line)
	return text_fit.block_height(line_count, size)


#============================================
def test_short_text_uses_max_size() -> None:
	"""
	Text that fits at the largest size keeps floor(max_size).
	"""
	result = text_fit.fit_text("Hi", 200.0, 40.0, 30.7, 6, fake_measure)
	assert result.size == 30
	assert result.measured_height <= 40.0


#============================================
def test_size_steps_down_until_fit() -> None:
	"""
	The returned size is the largest one that fits.
	"""
	text = "x" * 40
	result = text_fit.fit_text(text, 100.0, 30.0, 20.0, 6, fake_measure)
	assert fake_measure(text, result.size, 100.0) <= 30.0
	assert fake_measure(text, result.size + 1, 100.0) > 30.0


#============================================
def test_oversized_text_returns_min_size() -> None:
	"""
	Text that never fits comes back at the minimum size, overflowing.
	"""
	text = "y" * 400
	result = text_fit.fit_text(text, 20.0, 10.0, 12.0, 6, fake_measure)
	assert result.size == 6
	assert result.measured_height > 10.0


#============================================
def test_smaller_box_never_grows_size() -> None:
	"""
	Shrinking the box height never raises the chosen size.
	"""
	text = "the quick brown fox jumps over the lazy dog"
	previous = None
	for height in range(80, 4, -4):
		result = text_fit.fit_text(text, 120.0, float(height), 40.0, 6, fake_measure)
		if previous is not None:
			assert result.size <= previous
		previous = result.size


#============================================
def test_min_size_only_acts_as_floor() -> None:
	"""
	Raising the minimum only clamps the result from below.
	"""
	text = "the quick brown fox jumps over the lazy dog"
	for height in (8.0, 15.0, 30.0, 60.0):
		low = text_fit.fit_text(text, 90.0, height, 24.0, 4, fake_measure)
		for min_size in range(4, 20):
			high = text_fit.fit_text(text, 90.0, height, 24.0, min_size, fake_measure)
			assert high.size == max(low.size, min_size)


#============================================
def test_reportlab_long_text_overflows_narrow_box() -> None:
	"""
	A 200 character string in a 20 mm box overflows at the minimum size.
	"""
	text = ("lorem ipsum dolor sit amet " * 8)[:200]
	width = config_lib.mm_to_points(20.0)
	height = config_lib.mm_to_points(8.0)
	measure = text_fit.build_measure("Helvetica")
	result = text_fit.fit_text(text, width, height, height * 0.75, 6, measure)
	assert result.size == 6
	assert result.measured_height > height


#============================================
def test_reportlab_wrap_and_height() -> None:
	"""
	Wrapped lines stay within the width and the height follows the leading.
	"""
	text = "one two three four five six seven eight nine ten"
	lines = text_fit.wrap_text(text, "Helvetica", 10, 60.0)
	assert len(lines) > 1
	assert " ".join(lines) == text
	height = text_fit.measure_text_height(text, "Helvetica", 10, 60.0)
	assert abs(height - (10 + 12 * (len(lines) - 1))) < 1e-6
	assert text_fit.block_height(0, 10) == 0.0


#============================================
def test_reportlab_unbroken_text_shrinks_to_min() -> None:
	"""
	A 200 character run without spaces still wraps and overflows at the minimum size.
	"""
	text = "x" * 200
	width = config_lib.mm_to_points(20.0)
	height = config_lib.mm_to_points(8.0)
	measure = text_fit.build_measure("Helvetica")
	result = text_fit.fit_text(text, width, height, height * 0.75, 6, measure)
	assert result.size == 6
	assert result.measured_height > height


#============================================
def test_wrap_breaks_long_words_within_width() -> None:
	"""
	Over-wide words split into pieces that fit, keeping every character.
	"""
	text = "short " + "w" * 60 + " tail"
	lines = text_fit.wrap_text(text, "Helvetica", 10, 50.0)
	assert len(lines) > 3
	for line in lines:
		assert reportlab.pdfbase.pdfmetrics.stringWidth(line, "Helvetica", 10) <= 50.0
	assert "".join(lines).replace(" ", "") == text.replace(" ", "")


#============================================
def test_wrap_keeps_one_char_per_line_when_too_narrow() -> None:
	"""
	A width narrower than one glyph still places one character per line.
	"""
	lines = text_fit.wrap_text("abc", "Helvetica", 10, 1.0)
	assert lines == ["a", "b", "c"]
