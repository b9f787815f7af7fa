"""
Size Class Templates

Static per-size-class data the descriptor compiler lays out around the
placements: grid tables, container sizes and their row-count variants, and
the close-button tweaks of the common panel.
"""

from dataclasses import dataclass
from typing import Dict, List

from chestgui.core.defs import SizeClass, Variant


def rows_condition(rows: int) -> str:
    return f"${rows}row_chest_guis"


@dataclass
class SizeClassTemplate:
    size_class: SizeClass
    baseline_rows: int
    grid_size: List[int]
    grid_variants: List[Variant]
    container_size: List[int]
    container_variants: List[Variant]
    fallback_offset: List[int]
    custom_close_offset: List[int]
    close_size2_offset: List[int]

    @property
    def name(self) -> str:
        return self.size_class.value

    def gui_type(self, namespace: str = "chest") -> str:
        return f"{namespace}.gui_image_{self.name}"


def _grid_variant(rows: int) -> Variant:
    return Variant(
        rows_condition(rows),
        {"$grid_dimensions": [9, rows], "$size": [162, rows * 18]},
    )


def _container_variant(rows: int, height: int) -> Variant:
    return Variant(
        rows_condition(rows), {"$size": [176, height], "$custom_guis": True}
    )


SMALL_TEMPLATE = SizeClassTemplate(
    size_class=SizeClass.SMALL,
    baseline_rows=3,
    grid_size=[162, 54],
    grid_variants=[_grid_variant(2), _grid_variant(1)],
    container_size=[176, 166],
    container_variants=[
        _container_variant(3, 169),
        _container_variant(2, 151),
        _container_variant(1, 133),
    ],
    fallback_offset=[-45, -44],
    custom_close_offset=[-2, 5],
    close_size2_offset=[0, 0],
)

LARGE_TEMPLATE = SizeClassTemplate(
    size_class=SizeClass.LARGE,
    baseline_rows=6,
    grid_size=[162, 108],
    grid_variants=[_grid_variant(5), _grid_variant(4)],
    container_size=[176, 220],
    container_variants=[
        _container_variant(6, 223),
        _container_variant(5, 205),
        _container_variant(4, 187),
    ],
    fallback_offset=[0, -44],
    custom_close_offset=[0, -4],
    close_size2_offset=[0, 5],
)

TEMPLATES: Dict[SizeClass, SizeClassTemplate] = {
    SizeClass.SMALL: SMALL_TEMPLATE,
    SizeClass.LARGE: LARGE_TEMPLATE,
}


def template_for(size_class: SizeClass) -> SizeClassTemplate:
    return TEMPLATES[SizeClass(size_class)]
