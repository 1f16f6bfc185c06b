import json
import pathlib

import PIL.Image
import pypdf
import pytest

import card_sheet_builder.cli as cli
import card_sheet_builder.config as config_lib
import card_sheet_builder.render as render


#============================================
def write_inputs(tmp_path: pathlib.Path, line_count: int = 6) -> tuple[pathlib.Path, pathlib.Path]:
	"""
	Write a text file and a background image.
	"""
	input_path = tmp_path / "naipes.txt"
	text = "".join(f"Texto {index}\n" for index in range(line_count))
	input_path.write_text(text, encoding="utf-8")
	background_path = tmp_path / "background.png"
	PIL.Image.new("RGB", (320, 200), (200, 180, 40)).save(background_path)
	return (input_path, background_path)


#============================================
def test_parse_args_defaults() -> None:
	"""
	Input and output default to files beside the program.
	"""
	args = cli.parse_args([])
	assert pathlib.Path(args.input_path).name == config_lib.DEFAULT_INPUT_NAME
	assert pathlib.Path(args.output_path).name == config_lib.DEFAULT_OUTPUT_NAME
	assert pathlib.Path(args.background_path).name == config_lib.DEFAULT_BACKGROUND_NAME
	assert args.fixed_size is False
	assert args.cut_marks is None
	assert args.seed is None


#============================================
def test_build_config_cut_mark_defaults() -> None:
	"""
	Cut marks follow the sizing mode unless set explicitly.
	"""
	assert cli.build_config(False, None, 1.5, "Helvetica").cut_marks is False
	assert cli.build_config(True, None, 1.5, "Helvetica").cut_marks is True
	assert cli.build_config(True, False, 1.5, "Helvetica").cut_marks is False
	config = cli.build_config(False, None, 1.5, "Helvetica")
	assert config.page_width > config.page_height
	assert config.lower_style.rotate is True
	assert config.upper_style.rotate is False


#============================================
def test_missing_input_exits(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:
	"""
	A missing input file exits with status 1 and a message.
	"""
	_input_path, background_path = write_inputs(tmp_path)
	output_path = tmp_path / "out.pdf"
	with pytest.raises(SystemExit) as excinfo:
		cli.main([str(tmp_path / "absent.txt"), str(output_path), "-b", str(background_path)])
	assert excinfo.value.code == 1
	assert "absent.txt" in capsys.readouterr().err
	assert not output_path.exists()


#============================================
def test_missing_background_exits(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:
	"""
	A missing background exits with status 1 before writing output.
	"""
	input_path, _background_path = write_inputs(tmp_path)
	output_path = tmp_path / "out.pdf"
	with pytest.raises(SystemExit) as excinfo:
		cli.main([str(input_path), str(output_path), "-b", str(tmp_path / "missing.png")])
	assert excinfo.value.code == 1
	assert "missing.png" in capsys.readouterr().err
	assert not output_path.exists()


#============================================
def test_main_writes_pdf_and_manifest(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:
	"""
	A full run writes the PDF, the manifest, and a confirmation line.
	"""
	input_path, background_path = write_inputs(tmp_path, line_count=20)
	output_path = tmp_path / "out.pdf"
	manifest_path = tmp_path / "out.json"
	cli.main([
		str(input_path),
		str(output_path),
		"-b", str(background_path),
		"-s", "3",
		"-m", str(manifest_path),
	])
	stdout = capsys.readouterr().out
	assert f"PDF generated at: {output_path}" in stdout
	assert len(pypdf.PdfReader(str(output_path)).pages) == 2
	data = json.loads(manifest_path.read_text(encoding="utf-8"))
	assert data["total_cards"] == 10
	assert data["pages"] == 2
	assert data["seed"] == 3


#============================================
def test_seeded_runs_give_same_manifest(tmp_path: pathlib.Path) -> None:
	"""
	Two runs with one seed place the same texts at the same sizes.
	"""
	input_path, background_path = write_inputs(tmp_path, line_count=15)
	manifests = []
	for name in ("a", "b"):
		manifest_path = tmp_path / f"{name}.json"
		cli.main([
			str(input_path),
			str(tmp_path / f"{name}.pdf"),
			"-b", str(background_path),
			"-s", "11",
			"-f",
			"-m", str(manifest_path),
		])
		data = json.loads(manifest_path.read_text(encoding="utf-8"))
		manifests.append((data["cards"], data["layout"]))
	assert manifests[0] == manifests[1]
	assert manifests[0][1]["sizing"] == "fixed-size"
	assert manifests[0][1]["cut_marks"] is True


#============================================
def test_resolve_font_falls_back_to_helvetica(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:
	"""
	With no font files found the built-in Helvetica is used.
	"""
	for candidate in config_lib.SYSTEM_FONT_CANDIDATES:
		if pathlib.Path(candidate).exists():
			pytest.skip("System display font present.")
	font_name = render.resolve_font(tmp_path, tmp_path / "missing.ttf")
	assert font_name == config_lib.DEFAULT_FONT_REGULAR
	assert f"Font not found: {tmp_path / 'missing.ttf'}" in capsys.readouterr().out
