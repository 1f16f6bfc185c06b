"""
Card drawing, cut marks, and page composition.
"""

# Standard Library
import json
import pathlib

# PIP3 modules
import PIL.Image
import reportlab.lib.utils
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts
import reportlab.pdfgen.canvas

# local repo modules
import card_sheet_builder as csb
import card_sheet_builder.config
import card_sheet_builder.geometry
import card_sheet_builder.lines
import card_sheet_builder.text_fit


SheetConfig = csb.config.SheetConfig
Geometry = csb.config.Geometry
TextBox = csb.config.TextBox
TextStyle = csb.config.TextStyle
TextPlacement = csb.config.TextPlacement
CardPlacement = csb.config.CardPlacement
SheetResult = csb.config.SheetResult
FixedSize = csb.config.FixedSize
MeasureFunc = csb.text_fit.MeasureFunc

DEFAULT_FONT_REGULAR = csb.config.DEFAULT_FONT_REGULAR
DISPLAY_FONT_NAME = csb.config.DISPLAY_FONT_NAME
DISPLAY_FONT_FILE = csb.config.DISPLAY_FONT_FILE
SYSTEM_FONT_CANDIDATES = csb.config.SYSTEM_FONT_CANDIDATES
MAX_FONT_RATIO = csb.config.MAX_FONT_RATIO
PADDING_X_RATIO = csb.config.PADDING_X_RATIO
PADDING_Y_RATIO = csb.config.PADDING_Y_RATIO
CUT_MARK_LINE_WIDTH = csb.config.CUT_MARK_LINE_WIDTH
PROGRESS_BAR_WIDTH = csb.config.PROGRESS_BAR_WIDTH

Segment = tuple[tuple[float, float], tuple[float, float]]


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def load_background(path: pathlib.Path) -> tuple[reportlab.lib.utils.ImageReader, float]:
	"""
	Load the card background image.

	Args:
		path: Image path.

	Returns:
		Tuple of (ImageReader, width / height ratio).
	"""
	if not path.is_file():
		raise FileNotFoundError(f"Background image not found: {path}")
	image = PIL.Image.open(path)
	image.load()
	width, height = image.size
	return (reportlab.lib.utils.ImageReader(image), width / height)


#============================================
def resolve_font(program_dir: pathlib.Path, explicit_path: pathlib.Path | None = None) -> str:
	"""
	Register the first available display font.

	Args:
		program_dir: Directory searched for the bundled font file.
		explicit_path: Font path tried before any other candidate.

	Returns:
		Registered font name, or the built-in Helvetica.
	"""
	candidates: list[pathlib.Path] = []
	if explicit_path is not None:
		if explicit_path.is_file():
			candidates.append(explicit_path)
		else:
			print(f"Font not found: {explicit_path}")
	candidates.append(program_dir / DISPLAY_FONT_FILE)
	candidates.extend(pathlib.Path(value) for value in SYSTEM_FONT_CANDIDATES)
	for candidate in candidates:
		if not candidate.is_file():
			continue
		font = reportlab.pdfbase.ttfonts.TTFont(DISPLAY_FONT_NAME, str(candidate))
		reportlab.pdfbase.pdfmetrics.registerFont(font)
		print(f"Display font: {candidate}")
		return DISPLAY_FONT_NAME
	return DEFAULT_FONT_REGULAR


#============================================
def rotate_point_180(x: float, y: float, center_x: float, center_y: float) -> tuple[float, float]:
	"""
	Rotate a point by 180 degrees about a center.
	"""
	return (2.0 * center_x - x, 2.0 * center_y - y)


#============================================
def layout_text_in_box(
	text: str,
	box: TextBox,
	style: TextStyle,
	card_x: float,
	card_y: float,
	geometry: Geometry,
	min_font_size: float,
	measure: MeasureFunc,
) -> TextPlacement | None:
	"""
	Place text inside a card-relative box.

	The box is padded, shifted horizontally, and the shift is also taken
	out of the usable width. Text is fitted to the remaining area and
	centered vertically. Empty text yields no placement.

	Args:
		text: Field text.
		box: Card-relative box.
		style: Text style for the field.
		card_x: Card left edge (top-left frame).
		card_y: Card top edge (top-left frame).
		geometry: Grid geometry.
		min_font_size: Smallest font size allowed.
		measure: Text height callback.

	Returns:
		TextPlacement or None.
	"""
	if not text:
		return None
	box_x, box_y, box_w, box_h = csb.geometry.box_to_absolute(
		box,
		geometry.card_width,
		geometry.card_height,
	)
	box_x += card_x
	box_y += card_y
	shift_x = geometry.card_width * style.shift_ratio
	padding_x = box_w * PADDING_X_RATIO
	padding_y = box_h * PADDING_Y_RATIO
	text_x = box_x + padding_x + shift_x
	text_y = box_y + padding_y
	text_w = box_w - padding_x * 2.0 - abs(shift_x)
	text_h = box_h - padding_y * 2.0

	fit = csb.text_fit.fit_text(
		text,
		text_w,
		text_h,
		text_h * MAX_FONT_RATIO,
		min_font_size,
		measure,
	)
	lines = csb.text_fit.wrap_text(text, style.font_name, fit.size, text_w)
	return TextPlacement(
		text=text,
		font_size=fit.size,
		measured_height=fit.measured_height,
		x=text_x,
		y=text_y + (text_h - fit.measured_height) / 2.0,
		width=text_w,
		height=text_h,
		lines=lines,
		center_x=box_x + box_w / 2.0,
		center_y=box_y + box_h / 2.0,
		rotated=style.rotate,
	)


#============================================
def compute_line_origins(placement: TextPlacement) -> list[tuple[float, float]]:
	"""
	Baseline origins for each wrapped line, rotation applied.

	Args:
		placement: Text placement.

	Returns:
		List of (x, y) points in the top-left frame.
	"""
	leading = csb.text_fit.compute_leading(placement.font_size)
	origins: list[tuple[float, float]] = []
	for index in range(len(placement.lines)):
		x = placement.x
		y = placement.y + placement.font_size + index * leading
		if placement.rotated:
			x, y = rotate_point_180(x, y, placement.center_x, placement.center_y)
		origins.append((x, y))
	return origins


#============================================
def draw_text_in_box(
	pdf: reportlab.pdfgen.canvas.Canvas,
	placement: TextPlacement,
	style: TextStyle,
	page_height: float,
) -> None:
	"""
	Draw placed text onto the canvas.

	Font, size, and color are set on a fresh text object for every call.

	Args:
		pdf: ReportLab canvas.
		placement: Text placement.
		style: Text style.
		page_height: Page height for the PDF frame conversion.
	"""
	text_obj = pdf.beginText()
	text_obj.setFont(style.font_name, placement.font_size)
	text_obj.setFillColorRGB(style.color[0], style.color[1], style.color[2])
	direction = -1.0 if placement.rotated else 1.0
	origins = compute_line_origins(placement)
	for line, (x, y) in zip(placement.lines, origins):
		text_obj.setTextTransform(direction, 0.0, 0.0, direction, x, page_height - y)
		text_obj.textOut(line)
	pdf.drawText(text_obj)


#============================================
def draw_card(
	pdf: reportlab.pdfgen.canvas.Canvas,
	background: reportlab.lib.utils.ImageReader,
	config: SheetConfig,
	geometry: Geometry,
	card_x: float,
	card_y: float,
	text1: str,
	text2: str,
) -> tuple[TextPlacement | None, TextPlacement | None]:
	"""
	Draw one card with its background and both text fields.

	Args:
		pdf: ReportLab canvas.
		background: Background ImageReader.
		config: Sheet configuration.
		geometry: Grid geometry.
		card_x: Card left edge (top-left frame).
		card_y: Card top edge (top-left frame).
		text1: Upper field text.
		text2: Lower field text.

	Returns:
		Tuple of (upper, lower) placements; None for a skipped field.
	"""
	pdf.drawImage(
		background,
		card_x,
		config.page_height - card_y - geometry.card_height,
		width=geometry.card_width,
		height=geometry.card_height,
		mask="auto",
		preserveAspectRatio=False,
		anchor="sw",
	)

	placements: list[TextPlacement | None] = []
	fields = (
		(text1, config.upper_box, config.upper_style),
		(text2, config.lower_box, config.lower_style),
	)
	for text, box, style in fields:
		measure = csb.text_fit.build_measure(style.font_name)
		placement = layout_text_in_box(
			text,
			box,
			style,
			card_x,
			card_y,
			geometry,
			config.min_font_size,
			measure,
		)
		if placement is not None:
			draw_text_in_box(pdf, placement, style, config.page_height)
		placements.append(placement)
	return (placements[0], placements[1])


#============================================
def compute_grid_edges(geometry: Geometry) -> tuple[list[float], list[float]]:
	"""
	Collect the distinct vertical and horizontal card edge positions.

	Args:
		geometry: Grid geometry.

	Returns:
		Tuple of (xs, ys), sorted.
	"""
	xs: set[float] = set()
	ys: set[float] = set()
	for column in range(geometry.columns):
		left, _top = csb.geometry.cell_origin(geometry, column, 0)
		xs.add(round(left, 6))
		xs.add(round(left + geometry.card_width, 6))
	for row in range(geometry.rows):
		_left, top = csb.geometry.cell_origin(geometry, 0, row)
		ys.add(round(top, 6))
		ys.add(round(top + geometry.card_height, 6))
	return (sorted(xs), sorted(ys))


#============================================
def compute_cut_mark_segments(geometry: Geometry, length: float) -> list[Segment]:
	"""
	Compute trim-guide ticks for one page of the card grid.

	Every edge intersection gets a tick along each grid line that stays
	inside the grid, so corners get two, edges three, and interior
	crossings four. Each card edge on the grid perimeter also gets an
	inward tick at its midpoint.

	Args:
		geometry: Grid geometry.
		length: Tick length.

	Returns:
		List of ((x1, y1), (x2, y2)) segments in the top-left frame.
	"""
	xs, ys = compute_grid_edges(geometry)
	min_x, max_x = xs[0], xs[-1]
	min_y, max_y = ys[0], ys[-1]
	epsilon = 1e-6

	def inside(x: float, y: float) -> bool:
		return (
			min_x - epsilon <= x <= max_x + epsilon
			and min_y - epsilon <= y <= max_y + epsilon
		)

	segments: list[Segment] = []
	directions = ((1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0))
	for x in xs:
		for y in ys:
			for dx, dy in directions:
				end_x = x + dx * length
				end_y = y + dy * length
				if inside(end_x, end_y):
					segments.append(((x, y), (end_x, end_y)))

	for column in range(geometry.columns):
		left, _top = csb.geometry.cell_origin(geometry, column, 0)
		mid_x = left + geometry.card_width / 2.0
		segments.append(((mid_x, min_y), (mid_x, min_y + length)))
		segments.append(((mid_x, max_y), (mid_x, max_y - length)))
	for row in range(geometry.rows):
		_left, top = csb.geometry.cell_origin(geometry, 0, row)
		mid_y = top + geometry.card_height / 2.0
		segments.append(((min_x, mid_y), (min_x + length, mid_y)))
		segments.append(((max_x, mid_y), (max_x - length, mid_y)))
	return segments


#============================================
def draw_cut_marks(
	pdf: reportlab.pdfgen.canvas.Canvas,
	segments: list[Segment],
	page_height: float,
) -> None:
	"""
	Stroke cut-mark segments on the current page.

	Args:
		pdf: ReportLab canvas.
		segments: Segments in the top-left frame.
		page_height: Page height for the PDF frame conversion.
	"""
	pdf.setLineWidth(CUT_MARK_LINE_WIDTH)
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	for (x1, y1), (x2, y2) in segments:
		pdf.line(x1, page_height - y1, x2, page_height - y2)


#============================================
def render_sheet(
	lines: list[str],
	output_path: pathlib.Path,
	config: SheetConfig,
	background: reportlab.lib.utils.ImageReader,
	verbose: bool = True,
) -> SheetResult:
	"""
	Render all cards to a multi-page PDF.

	Cards fill each page row by row. Cut marks, when enabled, are drawn
	once per page after its cards, including a partial final page.

	Args:
		lines: Shuffled lines, paired into cards in order.
		output_path: Output PDF path.
		config: Sheet configuration.
		background: Background ImageReader.
		verbose: Print a progress bar.

	Returns:
		SheetResult.
	"""
	geometry = csb.geometry.resolve_geometry(config)
	cards = list(csb.lines.iter_cards(lines))
	total_cards = len(cards)
	per_page = csb.geometry.cards_per_page(geometry)
	pages = csb.geometry.count_pages(total_cards, geometry)

	segments: list[Segment] = []
	if config.cut_marks:
		segments = compute_cut_mark_segments(geometry, config.cut_mark_length)

	pdf = reportlab.pdfgen.canvas.Canvas(
		str(output_path),
		pagesize=(config.page_width, config.page_height),
	)
	placements: list[CardPlacement] = []
	for page in range(pages):
		for slot in range(per_page):
			index = page * per_page + slot
			if index >= total_cards:
				break
			column, row = csb.geometry.slot_position(geometry, slot)
			card_x, card_y = csb.geometry.cell_origin(geometry, column, row)
			text1, text2 = cards[index]
			upper, lower = draw_card(
				pdf,
				background,
				config,
				geometry,
				card_x,
				card_y,
				text1,
				text2,
			)
			placements.append(
				CardPlacement(
					index=index,
					page=page,
					column=column,
					row=row,
					x=card_x,
					y=card_y,
					text1=text1,
					text2=text2,
					upper=upper,
					lower=lower,
				)
			)
			if verbose:
				print_progress("Cards", index + 1, total_cards)
		if segments:
			draw_cut_marks(pdf, segments, config.page_height)
		pdf.showPage()
	if pages == 0:
		pdf.showPage()
		pages = 1
	pdf.save()
	if verbose and total_cards > 0:
		print()

	result = SheetResult(
		total_cards=total_cards,
		pages=pages,
		cards_per_page=per_page,
		geometry=geometry,
		placements=placements,
	)
	return result


#============================================
def sizing_name(config: SheetConfig) -> str:
	if isinstance(config.sizing, FixedSize):
		return "fixed-size"
	return "aspect-fit"


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: pathlib.Path,
	output_path: pathlib.Path,
	background_path: pathlib.Path,
	seed: int | None,
	result: SheetResult,
	config: SheetConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		input_path: Input text file.
		output_path: Output PDF.
		background_path: Background image.
		seed: Shuffle seed, None when unseeded.
		result: Sheet result.
		config: Sheet configuration.
	"""
	geometry = result.geometry
	cards = []
	for placement in result.placements:
		cards.append(
			{
				"index": placement.index,
				"page": placement.page,
				"column": placement.column,
				"row": placement.row,
				"text1": placement.text1,
				"text2": placement.text2,
				"upper_font_size": placement.upper.font_size if placement.upper else None,
				"lower_font_size": placement.lower.font_size if placement.lower else None,
			}
		)
	data = {
		"input": str(input_path),
		"output": str(output_path),
		"background": str(background_path),
		"seed": seed,
		"total_cards": result.total_cards,
		"pages": result.pages,
		"cards_per_page": result.cards_per_page,
		"layout": {
			"page_width": config.page_width,
			"page_height": config.page_height,
			"card_width": geometry.card_width,
			"card_height": geometry.card_height,
			"offset_x": geometry.offset_x,
			"offset_y": geometry.offset_y,
			"gutter": geometry.gutter,
			"columns": geometry.columns,
			"rows": geometry.rows,
			"sizing": sizing_name(config),
			"cut_marks": config.cut_marks,
		},
		"fonts": {
			"upper": config.upper_style.font_name,
			"lower": config.lower_style.font_name,
			"min_size": config.min_font_size,
		},
		"cards": cards,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=False)
