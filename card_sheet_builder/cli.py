"""
CLI entry points for text to card sheet conversion.
"""

# Standard Library
import argparse
import pathlib
import random
import sys
import time

# PIP3 modules
import reportlab.lib.pagesizes

# local repo modules
import card_sheet_builder as csb
import card_sheet_builder.config
import card_sheet_builder.lines
import card_sheet_builder.render


SheetConfig = csb.config.SheetConfig
TextStyle = csb.config.TextStyle
AspectFit = csb.config.AspectFit
FixedSize = csb.config.FixedSize
mm_to_points = csb.config.mm_to_points

COLUMNS = csb.config.COLUMNS
ROWS = csb.config.ROWS
DEFAULT_MARGIN_MM = csb.config.DEFAULT_MARGIN_MM
DEFAULT_GUTTER_MM = csb.config.DEFAULT_GUTTER_MM
FIXED_CARD_WIDTH_MM = csb.config.FIXED_CARD_WIDTH_MM
FIXED_CARD_HEIGHT_MM = csb.config.FIXED_CARD_HEIGHT_MM
CUT_MARK_LENGTH_MM = csb.config.CUT_MARK_LENGTH_MM
UPPER_BOX = csb.config.UPPER_BOX
LOWER_BOX = csb.config.LOWER_BOX
UPPER_SHIFT_RATIO = csb.config.UPPER_SHIFT_RATIO
LOWER_SHIFT_RATIO = csb.config.LOWER_SHIFT_RATIO
BLACK = csb.config.BLACK
WHITE = csb.config.WHITE
MIN_FONT_SIZE = csb.config.MIN_FONT_SIZE

PROGRAM_DIR = pathlib.Path(__file__).resolve().parent.parent


#============================================
def build_config(
	fixed_size: bool,
	cut_marks: bool | None,
	aspect_ratio: float,
	font_name: str,
) -> SheetConfig:
	"""
	Build the sheet configuration.

	Args:
		fixed_size: Use constant card dimensions instead of the image ratio.
		cut_marks: Draw cut marks; None picks the sizing mode default.
		aspect_ratio: Background width / height.
		font_name: Registered font name for both fields.

	Returns:
		SheetConfig.
	"""
	page_width, page_height = reportlab.lib.pagesizes.landscape(reportlab.lib.pagesizes.A4)
	if fixed_size:
		sizing = FixedSize(
			card_width=mm_to_points(FIXED_CARD_WIDTH_MM),
			card_height=mm_to_points(FIXED_CARD_HEIGHT_MM),
		)
	else:
		sizing = AspectFit(aspect_ratio=aspect_ratio)
	if cut_marks is None:
		cut_marks = fixed_size
	config = SheetConfig(
		page_width=page_width,
		page_height=page_height,
		margin=mm_to_points(DEFAULT_MARGIN_MM),
		gutter=mm_to_points(DEFAULT_GUTTER_MM),
		columns=COLUMNS,
		rows=ROWS,
		sizing=sizing,
		cut_marks=cut_marks,
		cut_mark_length=mm_to_points(CUT_MARK_LENGTH_MM),
		upper_box=UPPER_BOX,
		lower_box=LOWER_BOX,
		upper_style=TextStyle(
			font_name=font_name,
			color=BLACK,
			rotate=False,
			shift_ratio=UPPER_SHIFT_RATIO,
		),
		lower_style=TextStyle(
			font_name=font_name,
			color=WHITE,
			rotate=True,
			shift_ratio=LOWER_SHIFT_RATIO,
		),
		min_font_size=MIN_FONT_SIZE,
	)
	return config


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Convert a text file of paired lines to a printable card sheet PDF.")
	parser.add_argument(
		"input_path",
		nargs="?",
		default=str(PROGRAM_DIR / csb.config.DEFAULT_INPUT_NAME),
		help="Text file, one card field per line.",
	)
	parser.add_argument(
		"output_path",
		nargs="?",
		default=str(PROGRAM_DIR / csb.config.DEFAULT_OUTPUT_NAME),
		help="Output PDF path.",
	)

	resource_group = parser.add_argument_group("Resources")
	resource_group.add_argument(
		"-b", "--background", dest="background_path",
		default=str(PROGRAM_DIR / csb.config.DEFAULT_BACKGROUND_NAME),
		help="Card background image.",
	)
	resource_group.add_argument("--font", dest="font_path", default=None, help="TTF font tried before the built-in candidates.")
	resource_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-f", "--fixed-size", dest="fixed_size", action="store_true", help="Use fixed 88x63 mm cards.")
	layout_group.add_argument("-a", "--aspect-fit", dest="fixed_size", action="store_false", help="Size cards from the background ratio.")
	layout_group.add_argument("-k", "--cut-marks", dest="cut_marks", action="store_true", help="Draw cut marks on each page.")
	layout_group.add_argument("-K", "--no-cut-marks", dest="cut_marks", action="store_false", help="Disable cut marks.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-s", "--seed", dest="seed", type=int, default=None, help="Shuffle seed for repeatable output.")

	parser.set_defaults(
		fixed_size=False,
		cut_marks=None,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> csb.config.SheetResult:
	"""
	Run the full pipeline from text input to PDF output.

	Args:
		args: Parsed argparse namespace.

	Returns:
		SheetResult.
	"""
	input_path = pathlib.Path(args.input_path)
	output_path = pathlib.Path(args.output_path)
	background_path = pathlib.Path(args.background_path)
	print("Card sheet pipeline")
	print(f"Input: {input_path}")
	print(f"Output PDF: {output_path}")
	print(f"Background: {background_path}")
	print(f"Sizing: {'fixed-size' if args.fixed_size else 'aspect-fit'}")
	if args.seed is not None:
		print(f"Seed: {args.seed}")

	start_time = time.perf_counter()
	lines = csb.lines.read_lines(input_path)
	print(f"Lines read: {len(lines)}")
	background, aspect_ratio = csb.render.load_background(background_path)

	font_path = pathlib.Path(args.font_path) if args.font_path else None
	font_name = csb.render.resolve_font(PROGRAM_DIR, font_path)
	config = build_config(args.fixed_size, args.cut_marks, aspect_ratio, font_name)
	print(f"Cut marks: {config.cut_marks}")

	rng = random.Random(args.seed)
	shuffled = csb.lines.shuffle_lines(lines, rng)
	result = csb.render.render_sheet(shuffled, output_path, config, background)
	print(f"Pages written: {result.pages}")
	print(f"Cards drawn: {result.total_cards}")

	if args.manifest_path:
		csb.render.write_manifest(
			pathlib.Path(args.manifest_path),
			input_path,
			output_path,
			background_path,
			args.seed,
			result,
			config,
		)
		print(f"Manifest written: {args.manifest_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")
	print(f"PDF generated at: {output_path}")
	return result


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except FileNotFoundError as error:
		print(str(error), file=sys.stderr)
		sys.exit(1)
