"""
Shared configuration and constants.
"""

import dataclasses


POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4
COLUMNS = 3
ROWS = 3

DEFAULT_MARGIN_MM = 10.0
DEFAULT_GUTTER_MM = 6.0
FIXED_CARD_WIDTH_MM = 88.0
FIXED_CARD_HEIGHT_MM = 63.0
CUT_MARK_LENGTH_MM = 4.0
CUT_MARK_LINE_WIDTH = 0.3

DEFAULT_FONT_REGULAR = "Helvetica"
DISPLAY_FONT_NAME = "FunFont"
DISPLAY_FONT_FILE = "Marker Felt.ttf"
SYSTEM_FONT_CANDIDATES = (
	"/System/Library/Fonts/Supplemental/PartyLET-plain.ttf",
	"/System/Library/Fonts/Supplemental/Chalkduster.ttf",
	"/System/Library/Fonts/Supplemental/Comic Sans MS.ttf",
)
DEFAULT_INPUT_NAME = "naipes.txt"
DEFAULT_OUTPUT_NAME = "naipes.pdf"
DEFAULT_BACKGROUND_NAME = "background.png"

MIN_FONT_SIZE = 6.0
MAX_FONT_RATIO = 0.75
LEADING_RATIO = 1.2
PADDING_X_RATIO = 0.06
PADDING_Y_RATIO = 0.12
UPPER_SHIFT_RATIO = 0.06
LOWER_SHIFT_RATIO = -0.04
PROGRESS_BAR_WIDTH = 20


@dataclasses.dataclass(frozen=True)
class TextBox:
	x: float
	y: float
	w: float
	h: float


@dataclasses.dataclass(frozen=True)
class TextStyle:
	font_name: str
	color: tuple[float, float, float]
	rotate: bool = False
	shift_ratio: float = 0.0


UPPER_BOX = TextBox(x=0.40, y=0.14, w=0.54, h=0.20)
LOWER_BOX = TextBox(x=-0.02, y=0.66, w=0.54, h=0.20)
BLACK = (0.0, 0.0, 0.0)
WHITE = (1.0, 1.0, 1.0)


@dataclasses.dataclass(frozen=True)
class AspectFit:
	aspect_ratio: float


@dataclasses.dataclass(frozen=True)
class FixedSize:
	card_width: float
	card_height: float


SizingMode = AspectFit | FixedSize


@dataclasses.dataclass
class SheetConfig:
	page_width: float
	page_height: float
	margin: float
	gutter: float
	columns: int
	rows: int
	sizing: SizingMode
	cut_marks: bool
	cut_mark_length: float
	upper_box: TextBox
	lower_box: TextBox
	upper_style: TextStyle
	lower_style: TextStyle
	min_font_size: float = MIN_FONT_SIZE


@dataclasses.dataclass
class Geometry:
	card_width: float
	card_height: float
	offset_x: float
	offset_y: float
	columns: int
	rows: int
	gutter: float


@dataclasses.dataclass
class TextPlacement:
	text: str
	font_size: float
	measured_height: float
	x: float
	y: float
	width: float
	height: float
	lines: list[str]
	center_x: float
	center_y: float
	rotated: bool


@dataclasses.dataclass
class CardPlacement:
	index: int
	page: int
	column: int
	row: int
	x: float
	y: float
	text1: str
	text2: str
	upper: TextPlacement | None
	lower: TextPlacement | None


@dataclasses.dataclass
class SheetResult:
	total_cards: int
	pages: int
	cards_per_page: int
	geometry: Geometry
	placements: list[CardPlacement]


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeters value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH / MM_PER_INCH
