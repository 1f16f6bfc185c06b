"""
Line loading, shuffling, and card pairing.
"""

# Standard Library
import pathlib
import random
import re
from collections.abc import Iterator


REPLACEMENT_CHAR = "\ufffd"
LINE_BREAK_PATTERN = re.compile(r"\r?\n")


#============================================
def decode_text_bytes(raw: bytes) -> str:
	"""
	Decode raw input as UTF-8, falling back to Latin-1.

	The fallback applies only when UTF-8 decoding yields the
	replacement character anywhere in the text.

	Args:
		raw: Raw file bytes.

	Returns:
		Decoded text.
	"""
	text = raw.decode("utf-8", errors="replace")
	if REPLACEMENT_CHAR in text:
		text = raw.decode("latin-1")
	return text


#============================================
def split_lines(text: str) -> list[str]:
	"""
	Split text on LF or CRLF and drop one trailing empty line.

	Args:
		text: Decoded text.

	Returns:
		List of lines.
	"""
	lines = LINE_BREAK_PATTERN.split(text)
	if lines and lines[-1] == "":
		lines.pop()
	return lines


#============================================
def read_lines(path: pathlib.Path) -> list[str]:
	"""
	Read the card text file.

	Args:
		path: Input text path.

	Returns:
		List of lines.
	"""
	if not path.is_file():
		raise FileNotFoundError(f"Input file not found: {path}")
	raw = path.read_bytes()
	return split_lines(decode_text_bytes(raw))


#============================================
def shuffle_lines(lines: list[str], rng: random.Random) -> list[str]:
	"""
	Shuffle lines with a backward Fisher-Yates pass.

	Args:
		lines: Input lines, left untouched.
		rng: Random source.

	Returns:
		New shuffled list.
	"""
	shuffled = list(lines)
	for i in range(len(shuffled) - 1, 0, -1):
		j = int(rng.random() * (i + 1))
		shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
	return shuffled


#============================================
def count_cards(line_count: int) -> int:
	"""
	Number of cards for a line count, one card per pair.
	"""
	return (line_count + 1) // 2


#============================================
def iter_cards(lines: list[str]) -> Iterator[tuple[str, str]]:
	"""
	Yield (text1, text2) pairs from consecutive lines.

	An odd trailing line gets an empty partner.

	Args:
		lines: Shuffled lines.

	Yields:
		Tuple of (text1, text2).
	"""
	for index in range(count_cards(len(lines))):
		text1 = lines[index * 2]
		text2 = ""
		if index * 2 + 1 < len(lines):
			text2 = lines[index * 2 + 1]
		yield (text1, text2)
