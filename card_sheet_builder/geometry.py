"""
Card grid geometry.

All positions here use a top-left page origin with y growing downward.
Renderers convert to the PDF frame at draw time.
"""

# local repo modules
import card_sheet_builder as csb
import card_sheet_builder.config


SheetConfig = csb.config.SheetConfig
Geometry = csb.config.Geometry
TextBox = csb.config.TextBox
AspectFit = csb.config.AspectFit
FixedSize = csb.config.FixedSize


#============================================
def resolve_geometry(config: SheetConfig) -> Geometry:
	"""
	Compute card size and grid offset for a sheet configuration.

	Aspect-fit mode takes the binding constraint of the available width
	and height and centers the grid within the margins. Fixed-size mode
	uses the given card size with no gutter and centers on the full page.

	Args:
		config: Sheet configuration.

	Returns:
		Geometry.
	"""
	if config.columns < 1 or config.rows < 1:
		raise ValueError(f"Grid must be at least 1x1, got {config.columns}x{config.rows}")

	sizing = config.sizing
	if isinstance(sizing, FixedSize):
		card_width = sizing.card_width
		card_height = sizing.card_height
		total_width = card_width * config.columns
		total_height = card_height * config.rows
		return Geometry(
			card_width=card_width,
			card_height=card_height,
			offset_x=(config.page_width - total_width) / 2.0,
			offset_y=(config.page_height - total_height) / 2.0,
			columns=config.columns,
			rows=config.rows,
			gutter=0.0,
		)

	ratio = sizing.aspect_ratio
	if ratio <= 0.0:
		raise ValueError(f"Aspect ratio must be positive, got {ratio}")
	gutter = config.gutter
	available_width = config.page_width - config.margin * 2.0
	available_height = config.page_height - config.margin * 2.0
	max_width_by_width = (available_width - gutter * (config.columns - 1)) / config.columns
	max_width_by_height = (available_height - gutter * (config.rows - 1)) / config.rows * ratio
	card_width = min(max_width_by_width, max_width_by_height)
	card_height = card_width / ratio
	total_width = card_width * config.columns + gutter * (config.columns - 1)
	total_height = card_height * config.rows + gutter * (config.rows - 1)
	return Geometry(
		card_width=card_width,
		card_height=card_height,
		offset_x=config.margin + (available_width - total_width) / 2.0,
		offset_y=config.margin + (available_height - total_height) / 2.0,
		columns=config.columns,
		rows=config.rows,
		gutter=gutter,
	)


#============================================
def cards_per_page(geometry: Geometry) -> int:
	return geometry.columns * geometry.rows


#============================================
def count_pages(total_cards: int, geometry: Geometry) -> int:
	"""
	Number of pages needed for a card count.

	Args:
		total_cards: Total cards.
		geometry: Grid geometry.

	Returns:
		Page count, zero when there are no cards.
	"""
	per_page = cards_per_page(geometry)
	return (total_cards + per_page - 1) // per_page


#============================================
def slot_position(geometry: Geometry, slot: int) -> tuple[int, int]:
	"""
	Map a page slot to (column, row), filling rows left to right.
	"""
	return (slot % geometry.columns, slot // geometry.columns)


#============================================
def cell_origin(geometry: Geometry, column: int, row: int) -> tuple[float, float]:
	"""
	Top-left corner of a grid cell.

	Args:
		geometry: Grid geometry.
		column: Column index.
		row: Row index.

	Returns:
		Tuple of (x, y).
	"""
	x = geometry.offset_x + column * (geometry.card_width + geometry.gutter)
	y = geometry.offset_y + row * (geometry.card_height + geometry.gutter)
	return (x, y)


#============================================
def box_to_absolute(box: TextBox, card_width: float, card_height: float) -> tuple[float, float, float, float]:
	"""
	Scale a card-relative box to card units.

	Args:
		box: Relative box.
		card_width: Card width.
		card_height: Card height.

	Returns:
		Tuple of (x, y, width, height) relative to the card corner.
	"""
	return (
		box.x * card_width,
		box.y * card_height,
		box.w * card_width,
		box.h * card_height,
	)
