import json

import pytest

from chestgui.api.templates import (
    LARGE_TEMPLATE,
    SMALL_TEMPLATE,
    rows_condition,
    template_for,
)
from chestgui.core.defs import Preset, grid_pixel_size, sanitize_name
from chestgui.utils.serialize import dumps


@pytest.mark.parametrize(
    "preset, size",
    [
        (Preset.ROW3, [176, 169]),
        (Preset.ROW2, [176, 151]),
        (Preset.ROW1, [176, 133]),
        (Preset.ROW6, [176, 223]),
        (Preset.ROW5, [176, 205]),
        (Preset.ROW4, [176, 187]),
    ],
)
def test_container_variant_per_preset(preset, size):
    variants = {
        v.requires: v.fields
        for v in template_for(preset.size_class).container_variants
    }
    fields = variants[rows_condition(preset.rows)]
    assert fields["$size"] == size
    assert fields["$custom_guis"] is True


def test_template_lookup_and_types():
    assert SMALL_TEMPLATE.container_size == [176, 166]
    assert LARGE_TEMPLATE.container_size == [176, 220]
    assert template_for("small") is SMALL_TEMPLATE
    assert SMALL_TEMPLATE.gui_type() == "chest.gui_image_small"
    assert LARGE_TEMPLATE.gui_type("custom") == "custom.gui_image_large"


@pytest.mark.parametrize(
    "preset, size",
    [
        (Preset.ROW1, (162, 18)),
        (Preset.ROW3, (162, 54)),
        (Preset.ROW4, (162, 72)),
        (Preset.ROW6, (162, 108)),
    ],
)
def test_grid_pixel_size(preset, size):
    assert grid_pixel_size(preset) == size


def test_preset_names_and_overlays():
    assert Preset.ROW1.display_name == "1 Row"
    assert Preset.ROW4.display_name == "4 Rows"
    assert Preset.ROW6.overlay_file == "generic_54.png"
    assert Preset.ROW2.overlay_file == "row2.png"


@pytest.mark.parametrize(
    "value, expected",
    [("row5", Preset.ROW5), ("5 Rows", Preset.ROW5), ("6 rows", Preset.ROW6), (1, Preset.ROW1), ("2", Preset.ROW2)],
)
def test_preset_coerce(value, expected):
    assert Preset.coerce(value) is expected


def test_preset_coerce_rejects_unknown():
    with pytest.raises(ValueError):
        Preset.coerce("7 Rows")


def test_sanitize_name_only_replaces_hyphens():
    assert sanitize_name("my-chest-gui") == "my_chest_gui"
    assert sanitize_name("my chest.v2") == "my chest.v2"


def test_dumps_inlines_scalar_arrays_and_variable_objects():
    tree = {
        "panel": {
            "size": [176, 166],
            "variables": [{"requires": "$a", "$size": [1, 2], "$on": True}],
            "controls": [{"child@base": {"offset": [0, -1]}}],
            "empty": [],
        }
    }
    text = dumps(tree, indent=2)
    assert text == (
        "{\n"
        '  "panel": {\n'
        '    "size": [176, 166],\n'
        "    \"variables\": [\n"
        '      {"requires": "$a", "$size": [1, 2], "$on": true}\n'
        "    ],\n"
        "    \"controls\": [\n"
        "      {\n"
        '        "child@base": {\n'
        '          "offset": [0, -1]\n'
        "        }\n"
        "      }\n"
        "    ],\n"
        '    "empty": []\n'
        "  }\n"
        "}"
    )
    assert json.loads(text) == tree


def test_dumps_escapes_strings_but_keeps_unicode():
    text = dumps({"title": "('§' + \"x\")"})
    assert '"(\'§\' + \\"x\\")"' in text
    assert json.loads(text) == {"title": "('§' + \"x\")"}
