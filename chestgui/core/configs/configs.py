from pathlib import Path
from typing import Tuple

from PySide6.QtGui import QColor
from pydantic import BaseModel, Field

from chestgui.core.defs import Preset


class DrawConfig(BaseModel):
    background_color: QColor = Field(default_factory=lambda: QColor(250, 250, 250))
    checker_color: QColor = Field(default_factory=lambda: QColor(235, 235, 235))
    checker_size: int = 16
    center_line_color: QColor = Field(
        default_factory=lambda: QColor(249, 115, 22, 120)
    )
    show_center_lines: bool = True
    button_width: int = 30

    class Config:
        arbitrary_types_allowed = True


class BaseConfig(BaseModel):
    project_name: str = "ChestGUI"
    version: str = "0.1.0"
    project_dir: Path = Path(".")

    class Config:
        arbitrary_types_allowed = True


class EditorConfig(BaseConfig):
    # descriptor naming
    namespace: str = "chest"
    texture_dir: str = "textures/guis"

    # values the current placement falls back to on commit/reset
    default_name: str = "chest"
    default_width: int = 176
    default_height: int = 166
    default_preset: Preset = Preset.ROW6
    default_grid_opacity: float = 0.35
    show_grid: bool = True

    export_filename: str = "chest.json"
    descriptor_indent: int = 3
    snippet_indent: int = 2

    # preset overlay PNGs, looked up by Preset.overlay_file
    overlay_dir: Path = Path("assets") / "overlays"
    viewport_size: Tuple[int, int] = (640, 480)
    max_offset: int = 1000
    max_size: int = 4096
    nudge_step: int = 1

    normal_draw_config: DrawConfig = DrawConfig()

    @property
    def export_folder(self):
        folder = self.project_dir / "assets" / "exports"
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    def overlay_path(self, preset: Preset) -> Path:
        overlay_dir = self.overlay_dir
        if not overlay_dir.is_absolute():
            overlay_dir = self.project_dir / overlay_dir
        return overlay_dir / preset.overlay_file
