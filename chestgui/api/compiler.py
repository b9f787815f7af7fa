"""
Descriptor Compiler

Turns a sequence of placements into the two exported artifacts: the per-item
config snippet (copied to the clipboard) and the full ``chest.json`` JSON UI
descriptor tree with its size class variants.

Every function here is pure and reads only its arguments, so the artifacts
always reflect the placements they were given.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from chestgui import logger
from chestgui.api.templates import (
    LARGE_TEMPLATE,
    SMALL_TEMPLATE,
    SizeClassTemplate,
    template_for,
)
from chestgui.core.configs import EditorConfig
from chestgui.core.defs import Placement, Preset, Variant
from chestgui.utils.serialize import dumps

CTITLE_WITH_SYMBOL = "('§' + $ctitle)"
ATITLE_WITH_SYMBOL = "('§' + $atitle)"


def _config(config: Optional[EditorConfig]) -> EditorConfig:
    return config or EditorConfig()


def gui_type(item: Union[Placement, Preset, str], namespace: str = "chest") -> str:
    """
    Name of the image control a placement binds to.

    Args:
        item: A placement, or a preset (its value or display name).
        namespace (str): Namespace of the descriptor file.

    Returns:
        str: ``<namespace>.gui_image_small`` for 1-3 rows, else
            ``<namespace>.gui_image_large``.
    """
    preset = item.preset if isinstance(item, Placement) else Preset.coerce(item)
    return template_for(preset.size_class).gui_type(namespace)


def build_item_entry(
    placement: Placement, config: Optional[EditorConfig] = None
) -> Dict[str, dict]:
    config = _config(config)
    key = f"{placement.name}@{gui_type(placement, config.namespace)}"
    return {
        key: {
            "texture": placement.texture_path(config.texture_dir),
            "$unicode": placement.unicode_variable,
            "size": placement.size,
            "offset": placement.offset,
        }
    }


def generate_single_config(
    placement: Placement, config: Optional[EditorConfig] = None
) -> str:
    config = _config(config)
    ((key, body),) = build_item_entry(placement, config).items()
    return f"{json.dumps(key, ensure_ascii=False)}: " + dumps(
        body, indent=config.snippet_indent
    )


def generate_all_configs(
    placements: Iterable[Placement], config: Optional[EditorConfig] = None
) -> str:
    """
    Build the per-item snippet: one block per placement, in order.

    Placements sharing a name are all emitted; the game resolves duplicates.
    """
    config = _config(config)
    return ",\n\n".join(generate_single_config(p, config) for p in placements)


def resolve_offset(placement: Placement, template: SizeClassTemplate) -> List[int]:
    fallback_x, fallback_y = template.fallback_offset
    return [
        fallback_x if placement.offset_x is None else placement.offset_x,
        fallback_y if placement.offset_y is None else placement.offset_y,
    ]


def build_binding_entry(
    placement: Placement,
    template: SizeClassTemplate,
    config: Optional[EditorConfig] = None,
) -> Dict[str, dict]:
    config = _config(config)
    key = f"{placement.name}@{template.gui_type(config.namespace)}"
    return {
        key: {
            "texture": placement.texture_path(config.texture_dir),
            "$unicode": placement.unicode_variable,
            "$ctitle": "$ctitle_with_symbol",
            "size": placement.size,
            "offset": resolve_offset(placement, template),
        }
    }


def _insert_front(array_name: str, value: list) -> dict:
    return {
        "modifications": [
            {"array_name": array_name, "operation": "insert_front", "value": value}
        ]
    }


def _variants(variants: Sequence[Variant]) -> List[dict]:
    return [variant.to_node() for variant in variants]


def build_grid_node(template: SizeClassTemplate) -> dict:
    return {
        "$size": list(template.grid_size),
        "$grid_dimensions": [9, template.baseline_rows],
        "variables": _variants(template.grid_variants),
        "size": "$size",
        "grid_dimensions": "$grid_dimensions",
    }


def _offset_panel(variants: List[dict]) -> dict:
    return {
        "offset": "$offset",
        "$offset": [0, 0],
        **_insert_front("variables", variants),
    }


def build_panel_nodes(
    template: SizeClassTemplate,
    placements: Sequence[Placement],
    config: Optional[EditorConfig] = None,
) -> Dict[str, dict]:
    """
    All descriptor entries of one size class, from the panel title variables
    down to the common panel, with the class's placements bound as controls.
    """
    config = _config(config)
    name = template.name
    panel = f"{name}_chest_panel"
    guis = f"{name}_chest_guis"
    controls = [
        build_binding_entry(p, template, config)
        for p in placements
        if p.size_class == template.size_class
    ]

    if template is SMALL_TEMPLATE:
        guis_key = guis
        guis_node = {
            "type": "panel",
            "anchor_from": "top_left",
            "anchor_to": "top_left",
            "size": ["100%", 9],
            "layer": 2,
            "controls": controls,
        }
    else:
        guis_key = f"{guis}@{SMALL_TEMPLATE.name}_chest_guis"
        guis_node = {"controls": controls}

    common_variants = [
        Variant(
            "$custom_guis",
            {
                "$dialog_background": f"{config.namespace}.custom_dialog_background",
                "$close_button_layer": 15,
                "$close_button_offset": list(template.custom_close_offset),
            },
        ),
        Variant(
            "$compact_close_guis",
            {
                "$use_compact_close_button": True,
                "$close_button_offset": "$compact_close_guis_size",
            },
        ),
        Variant(
            "$close_size2_guis",
            {
                "$close_button_size": [21, 17],
                "$close_button_panel_size": [15, 11],
                "$close_button_offset": list(template.close_size2_offset),
            },
        ),
    ]

    return {
        panel: {
            "$ctitle": "$container_title",
            "$ctitle_with_symbol": CTITLE_WITH_SYMBOL,
        },
        f"{panel}/root_panel": {
            "size": "$size",
            "$size": list(template.container_size),
            "$custom_guis|default": False,
            **_insert_front("variables", _variants(template.container_variants)),
        },
        f"{panel}/root_panel/chest_panel/inventory_panel_bottom_half_with_label": (
            _offset_panel([{"requires": "$custom_guis", "$offset": [0, -1]}])
        ),
        f"{panel}_top_half": _insert_front(
            "controls", [{f"{guis}@{config.namespace}.{guis}": {}}]
        ),
        guis_key: guis_node,
        f"{panel}/root_panel/common_panel": _offset_panel(_variants(common_variants)),
    }


def build_screen_node(
    template: SizeClassTemplate, config: Optional[EditorConfig] = None
) -> Dict[str, dict]:
    """
    Wire the class panel into the desktop and pocket screens. Custom GUIs
    always take the desktop panel and force the default background beneath.
    """
    config = _config(config)
    panel = f"{template.name}_chest_panel"
    return {
        f"{template.name}_chest_screen@common.inventory_screen_common": {
            "$atitle": "$container_title",
            "$ctitle_with_symbol": ATITLE_WITH_SYMBOL,
            "$custom_chest_guis": "$pocket_gui",
            "$force_render_below|default": False,
            "force_render_below": "$force_render_below",
            "variables": [
                {
                    "requires": "($desktop_screen or $custom_chest_guis)",
                    "$screen_content": f"{config.namespace}.{panel}",
                    "$screen_bg_content": "common.screen_background",
                },
                {
                    "requires": "$custom_chest_guis",
                    "$screen_animations": [],
                    "$background_animations": [],
                    "$force_render_below": True,
                },
                {
                    "requires": "($pocket_screen and not $custom_chest_guis)",
                    "$use_custom_pocket_toast": True,
                    "$screen_content": f"pocket_containers.{panel}",
                },
            ],
        }
    }


def build_descriptor_tree(
    placements: Sequence[Placement], config: Optional[EditorConfig] = None
) -> dict:
    """
    Build the full JSON UI descriptor as a plain dict tree.

    Args:
        placements: Placements in store order (committed first, current last).
        config (EditorConfig): Naming configuration.

    Returns:
        dict: The tree, ready for ``serialize_descriptor``.
    """
    config = _config(config)
    placements = list(placements)
    tree = {
        "namespace": config.namespace,
        "custom_dialog_background@common.dialog_background_common": {
            "texture": "textures/dialog_background"
        },
        "gui_image_small": {
            "type": "image",
            "size": [256, 256],
            "offset": [0, "-4px-19px"],
            "anchor_from": "bottom_left",
            "anchor_to": "top_left",
            "alpha": 2,
            "layer": 5,
            "visible": "($ctitle / $unicode)",
        },
        "gui_image_large@gui_image_small": {"offset": [0, "-3px-19px"]},
        "small_chest_grid": build_grid_node(SMALL_TEMPLATE),
        "large_chest_grid": build_grid_node(LARGE_TEMPLATE),
    }
    tree.update(build_panel_nodes(SMALL_TEMPLATE, placements, config))
    tree.update(build_panel_nodes(LARGE_TEMPLATE, placements, config))
    tree.update(build_screen_node(SMALL_TEMPLATE, config))
    tree.update(build_screen_node(LARGE_TEMPLATE, config))
    return tree


def serialize_descriptor(tree: dict, indent: int = 3) -> str:
    return dumps(tree, indent=indent)


def generate_full_chest_json(
    placements: Sequence[Placement], config: Optional[EditorConfig] = None
) -> str:
    config = _config(config)
    return serialize_descriptor(
        build_descriptor_tree(placements, config), indent=config.descriptor_indent
    )


def export_chest_json(
    placements: Sequence[Placement],
    directory: Union[str, Path, None] = None,
    config: Optional[EditorConfig] = None,
) -> Path:
    """
    Write the full descriptor to ``<directory>/chest.json``.

    Args:
        placements: Placements to export.
        directory: Target directory, defaults to the config's export folder.
        config (EditorConfig): Naming configuration.

    Returns:
        Path: The written file.
    """
    config = _config(config)
    placements = list(placements)
    directory = Path(directory) if directory else config.export_folder
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / config.export_filename
    path.write_text(generate_full_chest_json(placements, config), encoding="utf-8")
    logger.info(f"Exported {len(placements)} placements to {path}")
    return path
