"""
ChestGUI API Module

This module provides programmatic access to the placement store and the
descriptor compiler without the editor window.
"""

from .compiler import (
    build_descriptor_tree,
    export_chest_json,
    generate_all_configs,
    generate_full_chest_json,
    generate_single_config,
    gui_type,
    serialize_descriptor,
)
from .store import PlacementStore
from .templates import LARGE_TEMPLATE, SMALL_TEMPLATE, SizeClassTemplate

__all__ = [
    "PlacementStore",
    "build_descriptor_tree",
    "export_chest_json",
    "generate_all_configs",
    "generate_full_chest_json",
    "generate_single_config",
    "gui_type",
    "serialize_descriptor",
    "SizeClassTemplate",
    "SMALL_TEMPLATE",
    "LARGE_TEMPLATE",
]
