import json

import pytest

from chestgui.api.compiler import (
    build_binding_entry,
    build_descriptor_tree,
    export_chest_json,
    generate_all_configs,
    generate_full_chest_json,
    generate_single_config,
    gui_type,
)
from chestgui.api.store import PlacementStore
from chestgui.api.templates import LARGE_TEMPLATE, SMALL_TEMPLATE
from chestgui.core.defs import Placement, Preset


def chest(**changes):
    return Placement(**changes)


def controls(tree, key):
    return tree[key]["controls"]


@pytest.mark.parametrize(
    "preset, expected",
    [
        (Preset.ROW1, "chest.gui_image_small"),
        (Preset.ROW2, "chest.gui_image_small"),
        (Preset.ROW3, "chest.gui_image_small"),
        (Preset.ROW4, "chest.gui_image_large"),
        (Preset.ROW5, "chest.gui_image_large"),
        (Preset.ROW6, "chest.gui_image_large"),
    ],
)
def test_gui_type(preset, expected):
    assert gui_type(preset) == expected
    assert gui_type(chest(preset=preset)) == expected


def test_single_config_block():
    block = generate_single_config(chest())
    assert block == (
        '"chest@chest.gui_image_large": {\n'
        '  "texture": "textures/guis/chest",\n'
        '  "$unicode": "$unicode_chest",\n'
        '  "size": [176, 166],\n'
        '  "offset": [0, 0]\n'
        "}"
    )


def test_all_configs_has_one_block_per_placement_in_order():
    store = PlacementStore()
    for name in ("first", "second", "third"):
        store.set_current_field("name", name)
        store.commit()
    store.set_current_field("name", "editing")

    output = generate_all_configs(store.placements())
    blocks = output.split(",\n\n")

    assert len(blocks) == len(store.committed) + 1
    assert [b.split("@")[0].strip('"') for b in blocks] == [
        "first",
        "second",
        "third",
        "editing",
    ]


def test_all_configs_for_fresh_store_has_one_block():
    store = PlacementStore()
    assert generate_all_configs(store.placements()) == generate_single_config(
        store.current
    )


def test_duplicate_names_are_all_emitted():
    output = generate_all_configs([chest(), chest(offset_x=3)])
    assert output.count('"chest@chest.gui_image_large"') == 2
    assert '"offset": [3, 0]' in output


def test_snippet_parses_as_json_members():
    output = generate_all_configs([chest(), chest(name="b", preset=Preset.ROW1)])
    parsed = json.loads("{" + output + "}")
    assert parsed["b@chest.gui_image_small"]["size"] == [176, 166]


def test_offset_edit_only_changes_that_offset():
    store = PlacementStore()
    store.set_current_field("name", "kept")
    store.commit()
    store.set_current_field("name", "edited")
    before = generate_all_configs(store.placements())

    store.set_current_field("offset_x", 5)
    after = generate_all_configs(store.placements())

    changed = [
        (old, new)
        for old, new in zip(before.splitlines(), after.splitlines())
        if old != new
    ]
    assert len(before.splitlines()) == len(after.splitlines())
    assert changed == [('  "offset": [0, 0]', '  "offset": [5, 0]')]
    assert before.split(",\n\n")[0] == after.split(",\n\n")[0]


def test_sanitized_name_in_both_artifacts():
    placement = chest(name="my-chest-gui")

    snippet = generate_all_configs([placement])
    assert '"$unicode": "$unicode_my_chest_gui"' in snippet
    assert '"texture": "textures/guis/my-chest-gui"' in snippet
    assert '"my-chest-gui@chest.gui_image_large"' in snippet

    tree = build_descriptor_tree([placement])
    ((key, body),) = controls(tree, "large_chest_guis@small_chest_guis")[0].items()
    assert key == "my-chest-gui@chest.gui_image_large"
    assert body["$unicode"] == "$unicode_my_chest_gui"
    assert body["texture"] == "textures/guis/my-chest-gui"


def test_default_chest_binds_one_large_entry_with_explicit_offset():
    placement = chest(name="chest", offset_x=0, offset_y=0, preset=Preset.ROW6)
    tree = build_descriptor_tree([placement])

    large = controls(tree, "large_chest_guis@small_chest_guis")
    assert len(large) == 1
    assert controls(tree, "small_chest_guis") == []

    body = large[0]["chest@chest.gui_image_large"]
    assert body["size"] == [176, 166]
    assert body["offset"] == [0, 0]
    assert body["$ctitle"] == "$ctitle_with_symbol"


@pytest.mark.parametrize(
    "preset, expected", [(Preset.ROW2, [-45, -44]), (Preset.ROW5, [0, -44])]
)
def test_missing_offset_uses_class_fallback(preset, expected):
    placement = chest(offset_x=None, offset_y=None, preset=preset)
    template = SMALL_TEMPLATE if preset.rows <= 3 else LARGE_TEMPLATE
    (body,) = build_binding_entry(placement, template).values()
    assert body["offset"] == expected


def test_partial_offset_keeps_explicit_coordinate():
    placement = chest(offset_x=7, offset_y=None, preset=Preset.ROW1)
    entry = build_binding_entry(placement, SMALL_TEMPLATE)
    assert entry["chest@chest.gui_image_small"]["offset"] == [7, -44]


def test_placements_are_split_by_size_class():
    placements = [
        chest(name="one", preset=Preset.ROW1),
        chest(name="six", preset=Preset.ROW6),
        chest(name="three", preset=Preset.ROW3),
        chest(name="four", preset=Preset.ROW4),
    ]
    tree = build_descriptor_tree(placements)

    small = [next(iter(c)) for c in controls(tree, "small_chest_guis")]
    large = [next(iter(c)) for c in controls(tree, "large_chest_guis@small_chest_guis")]
    assert small == ["one@chest.gui_image_small", "three@chest.gui_image_small"]
    assert large == ["six@chest.gui_image_large", "four@chest.gui_image_large"]


def test_tree_sections_in_order():
    tree = build_descriptor_tree([chest()])
    assert list(tree) == [
        "namespace",
        "custom_dialog_background@common.dialog_background_common",
        "gui_image_small",
        "gui_image_large@gui_image_small",
        "small_chest_grid",
        "large_chest_grid",
        "small_chest_panel",
        "small_chest_panel/root_panel",
        "small_chest_panel/root_panel/chest_panel/inventory_panel_bottom_half_with_label",
        "small_chest_panel_top_half",
        "small_chest_guis",
        "small_chest_panel/root_panel/common_panel",
        "large_chest_panel",
        "large_chest_panel/root_panel",
        "large_chest_panel/root_panel/chest_panel/inventory_panel_bottom_half_with_label",
        "large_chest_panel_top_half",
        "large_chest_guis@small_chest_guis",
        "large_chest_panel/root_panel/common_panel",
        "small_chest_screen@common.inventory_screen_common",
        "large_chest_screen@common.inventory_screen_common",
    ]
    assert tree["namespace"] == "chest"


@pytest.mark.parametrize(
    "panel, default, variants",
    [
        (
            "small_chest_panel/root_panel",
            [176, 166],
            [
                ("$3row_chest_guis", [176, 169]),
                ("$2row_chest_guis", [176, 151]),
                ("$1row_chest_guis", [176, 133]),
            ],
        ),
        (
            "large_chest_panel/root_panel",
            [176, 220],
            [
                ("$6row_chest_guis", [176, 223]),
                ("$5row_chest_guis", [176, 205]),
                ("$4row_chest_guis", [176, 187]),
            ],
        ),
    ],
)
def test_root_panel_size_table(panel, default, variants):
    node = build_descriptor_tree([])[panel]
    assert node["size"] == "$size"
    assert node["$size"] == default
    assert node["$custom_guis|default"] is False

    (modification,) = node["modifications"]
    assert modification["array_name"] == "variables"
    assert modification["operation"] == "insert_front"
    assert [(v["requires"], v["$size"]) for v in modification["value"]] == variants
    assert all(v["$custom_guis"] is True for v in modification["value"])


def test_grid_tables():
    tree = build_descriptor_tree([])
    small = tree["small_chest_grid"]
    large = tree["large_chest_grid"]
    assert (small["$size"], small["$grid_dimensions"]) == ([162, 54], [9, 3])
    assert (large["$size"], large["$grid_dimensions"]) == ([162, 108], [9, 6])
    assert small["variables"] == [
        {"requires": "$2row_chest_guis", "$grid_dimensions": [9, 2], "$size": [162, 36]},
        {"requires": "$1row_chest_guis", "$grid_dimensions": [9, 1], "$size": [162, 18]},
    ]
    assert large["variables"] == [
        {"requires": "$5row_chest_guis", "$grid_dimensions": [9, 5], "$size": [162, 90]},
        {"requires": "$4row_chest_guis", "$grid_dimensions": [9, 4], "$size": [162, 72]},
    ]


def test_common_panel_close_button_offsets():
    tree = build_descriptor_tree([])
    small = tree["small_chest_panel/root_panel/common_panel"]["modifications"][0]
    large = tree["large_chest_panel/root_panel/common_panel"]["modifications"][0]
    assert small["value"][0]["$close_button_offset"] == [-2, 5]
    assert large["value"][0]["$close_button_offset"] == [0, -4]
    assert small["value"][2]["$close_button_offset"] == [0, 0]
    assert large["value"][2]["$close_button_offset"] == [0, 5]
    assert small["value"][0]["$dialog_background"] == "chest.custom_dialog_background"


def test_screen_forces_render_below_for_custom_guis():
    tree = build_descriptor_tree([])
    screen = tree["large_chest_screen@common.inventory_screen_common"]
    desktop, custom, pocket = screen["variables"]
    assert screen["$force_render_below|default"] is False
    assert screen["force_render_below"] == "$force_render_below"
    assert desktop["$screen_content"] == "chest.large_chest_panel"
    assert custom["requires"] == "$custom_chest_guis"
    assert custom["$force_render_below"] is True
    assert pocket["$screen_content"] == "pocket_containers.large_chest_panel"


def test_top_half_inserts_guis_panel():
    tree = build_descriptor_tree([])
    (modification,) = tree["small_chest_panel_top_half"]["modifications"]
    assert modification["array_name"] == "controls"
    assert modification["value"] == [{"small_chest_guis@chest.small_chest_guis": {}}]


def test_full_json_is_valid_and_matches_tree():
    placements = [chest(name="a-b", preset=Preset.ROW2), chest()]
    text = generate_full_chest_json(placements)
    assert json.loads(text) == build_descriptor_tree(placements)
    assert "('§' + $ctitle)" in text
    assert text.startswith('{\n   "namespace": "chest",')


def test_full_json_follows_store_edits():
    store = PlacementStore()
    before = generate_full_chest_json(store.placements())
    store.set_current_field("offset_y", -3)
    after = generate_full_chest_json(store.placements())
    assert before != after
    assert '"offset": [0, -3]' in after


def test_export_writes_chest_json(tmp_path):
    path = export_chest_json([chest()], tmp_path)
    assert path == tmp_path / "chest.json"
    assert json.loads(path.read_text(encoding="utf-8"))["namespace"] == "chest"


def test_export_accepts_a_generator(tmp_path):
    from chestgui import logger

    messages = []
    sink = logger.add(messages.append, level="INFO")
    try:
        path = export_chest_json(
            (chest(name=name) for name in ("a", "b")), tmp_path
        )
    finally:
        logger.remove(sink)
    tree = json.loads(path.read_text(encoding="utf-8"))
    large = controls(tree, "large_chest_guis@small_chest_guis")
    assert [next(iter(c)) for c in large] == [
        "a@chest.gui_image_large",
        "b@chest.gui_image_large",
    ]
    assert any("Exported 2 placements" in str(m) for m in messages)
