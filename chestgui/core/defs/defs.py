from enum import Enum
from dataclasses import dataclass, field


GRID_COLUMNS = 9
GRID_CELL_SIZE = 18
# placements not yet committed are exported under this id
CURRENT_PLACEMENT_ID = "current"


class SizeClass(str, Enum):
    SMALL = "small"
    LARGE = "large"


class LoadKind(str, Enum):
    UPLOAD = "upload"
    OVERLAY = "overlay"


class Preset(str, Enum):
    ROW1 = "row1"
    ROW2 = "row2"
    ROW3 = "row3"
    ROW4 = "row4"
    ROW5 = "row5"
    ROW6 = "row6"

    @property
    def rows(self) -> int:
        return int(self.value[3:])

    @property
    def display_name(self) -> str:
        return "1 Row" if self.rows == 1 else f"{self.rows} Rows"

    @property
    def overlay_file(self) -> str:
        # the full six row grid keeps its generic_54 asset name
        if self is Preset.ROW6:
            return "generic_54.png"
        return f"{self.value}.png"

    @property
    def size_class(self) -> SizeClass:
        if self.rows <= 3:
            return SizeClass.SMALL
        return SizeClass.LARGE

    @classmethod
    def from_rows(cls, rows: int) -> "Preset":
        return cls(f"row{int(rows)}")

    @classmethod
    def coerce(cls, value: "Preset | str | int") -> "Preset":
        """
        Accept a Preset, its value ("row4"), its display name ("4 Rows") or a
        bare row count.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls.from_rows(value)
        text = str(value).strip()
        for preset in cls:
            if text.lower() in (preset.value, preset.display_name.lower()):
                return preset
        if text.isdigit():
            return cls.from_rows(int(text))
        raise ValueError(f"Unknown preset: {value!r}")


def grid_pixel_size(preset: Preset) -> tuple[int, int]:
    """Pixel size of the visible slot grid for a preset (9 columns, 18px cells)."""
    return GRID_COLUMNS * GRID_CELL_SIZE, preset.rows * GRID_CELL_SIZE


def sanitize_name(name: str) -> str:
    return name.replace("-", "_")


@dataclass
class Placement:
    placement_id: str = CURRENT_PLACEMENT_ID
    name: str = "chest"
    # None only for placements built outside the store; the compiler then
    # falls back to the size class default offset
    offset_x: int | None = 0
    offset_y: int | None = 0
    width: int = 176
    height: int = 166
    preset: Preset = Preset.ROW6

    @property
    def sanitized_name(self) -> str:
        return sanitize_name(self.name)

    @property
    def size_class(self) -> SizeClass:
        return self.preset.size_class

    @property
    def size(self) -> list[int]:
        return [self.width, self.height]

    @property
    def offset(self) -> list[int | None]:
        return [self.offset_x, self.offset_y]

    def texture_path(self, texture_dir: str = "textures/guis") -> str:
        return f"{texture_dir}/{self.name}"

    @property
    def unicode_variable(self) -> str:
        return f"$unicode_{self.sanitized_name}"

    def copy(self, **changes) -> "Placement":
        values = dict(
            placement_id=self.placement_id,
            name=self.name,
            offset_x=self.offset_x,
            offset_y=self.offset_y,
            width=self.width,
            height=self.height,
            preset=self.preset,
        )
        values.update(changes)
        return Placement(**values)


@dataclass
class Variant:
    """
    One conditional override. The consuming UI renderer applies ``fields``
    when the ``requires`` expression holds.
    """

    requires: str
    fields: dict = field(default_factory=dict)

    def to_node(self) -> dict:
        return {"requires": self.requires, **self.fields}
