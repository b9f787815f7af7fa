import json

import numpy as np
import pytest
from typer.testing import CliRunner

from chestgui.cli import app
from chestgui.utils.image import read_rgba, write_rgba

runner = CliRunner()

LAYOUT = """
layout_config = {
    "placements": [
        {"name": "ender-chest", "offset": (0, -2), "size": (176, 223), "preset": "row6"},
        {"name": "barrel", "size": (176, 133), "preset": "1 Row"},
    ]
}
"""


@pytest.fixture
def layout_file(tmp_path):
    path = tmp_path / "layout.py"
    path.write_text(LAYOUT)
    return path


@pytest.fixture
def gui_png(tmp_path):
    image = np.zeros((30, 40, 4), dtype=np.uint8)
    image[..., 0] = 200
    image[..., 3] = 255
    return write_rgba(tmp_path / "my-chest.png", image)


def test_export_full_writes_chest_json(layout_file, tmp_path):
    out_dir = tmp_path / "build"
    result = runner.invoke(app, ["cli", "export", "full", str(layout_file), "-o", str(out_dir)])

    assert result.exit_code == 0, result.output
    tree = json.loads((out_dir / "chest.json").read_text(encoding="utf-8"))
    (large,) = tree["large_chest_guis@small_chest_guis"]["controls"]
    (small,) = tree["small_chest_guis"]["controls"]
    assert large["ender-chest@chest.gui_image_large"]["offset"] == [0, -2]
    # no offset in the config: small class fallback
    assert small["barrel@chest.gui_image_small"]["offset"] == [-45, -44]


def test_export_snippet_prints_blocks(layout_file):
    result = runner.invoke(app, ["cli", "export", "snippet", str(layout_file)])

    assert result.exit_code == 0, result.output
    assert '"ender-chest@chest.gui_image_large": {' in result.output
    assert '"$unicode": "$unicode_ender_chest"' in result.output
    assert '"barrel@chest.gui_image_small": {' in result.output


def test_export_snippet_to_file(layout_file, tmp_path):
    out = tmp_path / "snippet.txt"
    result = runner.invoke(app, ["cli", "export", "snippet", str(layout_file), "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").count("@chest.gui_image_") == 2


def test_missing_config_fails(tmp_path):
    result = runner.invoke(app, ["cli", "export", "full", str(tmp_path / "nope.py")])
    assert result.exit_code == 1


def test_config_without_layout_fails(tmp_path):
    path = tmp_path / "empty.py"
    path.write_text("something_else = 1\n")
    result = runner.invoke(app, ["cli", "export", "snippet", str(path)])
    assert result.exit_code == 1


def test_unknown_preset_fails(tmp_path):
    path = tmp_path / "bad.py"
    path.write_text('layout_config = {"placements": [{"name": "x", "preset": "row9"}]}\n')
    result = runner.invoke(app, ["cli", "export", "snippet", str(path)])
    assert result.exit_code == 1


def test_preview_renders_png(layout_file, gui_png, tmp_path):
    out = tmp_path / "preview.png"
    result = runner.invoke(
        app,
        [
            "cli",
            "preview",
            str(layout_file),
            str(gui_png),
            "-o",
            str(out),
            "--viewport",
            "320",
            "240",
        ],
    )

    assert result.exit_code == 0, result.output
    frame = read_rgba(out)
    assert frame.shape == (240, 320, 4)
    assert frame[120, 160, 3] == 255


def test_info_shows_size(gui_png):
    result = runner.invoke(app, ["cli", "info", str(gui_png)])
    assert result.exit_code == 0, result.output
    assert "40 x 30" in result.output
    assert "my-chest" in result.output


def test_info_missing_image(tmp_path):
    result = runner.invoke(app, ["cli", "info", str(tmp_path / "missing.png")])
    assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["cli", "version"])
    assert result.exit_code == 0
    assert "ChestGUI version" in result.output
