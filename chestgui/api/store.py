"""
Placement Store

Holds the editor state the descriptor compiler reads: the committed
placements in insertion order and the current, in-progress placement.
"""

import re
import uuid
from typing import Dict, List, Optional, Tuple, Union

from chestgui import logger
from chestgui.core.configs import EditorConfig
from chestgui.core.defs import CURRENT_PLACEMENT_ID, LoadKind, Placement, Preset

NUMERIC_FIELDS = ("offset_x", "offset_y", "width", "height")
EDITABLE_FIELDS = ("name",) + NUMERIC_FIELDS + ("preset",)
PNG_SUFFIX = re.compile(r"\.png$", re.IGNORECASE)


class PlacementStore:
    """
    Editor state for the chest GUI layout.

    Example:
        >>> store = PlacementStore()
        >>> store.set_current_field("name", "my-chest")
        >>> store.nudge(0, -2)
        >>> committed = store.commit()
        >>> store.remove(committed.placement_id)
    """

    def __init__(self, config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()
        self.committed: List[Placement] = []
        self.current = self._default_placement(self.config.default_preset)
        self.grid_opacity = self.config.default_grid_opacity
        self.show_grid = self.config.show_grid
        self.uploaded_size: Optional[Tuple[int, int]] = None
        self._load_tokens: Dict[LoadKind, int] = {kind: 0 for kind in LoadKind}

    def _default_placement(self, preset: Preset) -> Placement:
        return Placement(
            placement_id=CURRENT_PLACEMENT_ID,
            name=self.config.default_name,
            offset_x=0,
            offset_y=0,
            width=self.config.default_width,
            height=self.config.default_height,
            preset=preset,
        )

    @property
    def preset(self) -> Preset:
        return self.current.preset

    def placements(self) -> List[Placement]:
        """Committed placements in order, followed by a copy of the current one."""
        return [p.copy() for p in self.committed] + [self.current.copy()]

    def set_current_field(self, field: str, value: Union[str, int, Preset]):
        """
        Replace one field of the current placement.

        Args:
            field (str): One of name, offset_x, offset_y, width, height, preset.
            value: The new value; numeric fields are coerced with ``int``.
        """
        if field not in EDITABLE_FIELDS:
            raise KeyError(f"Unknown placement field: {field}")
        if field in NUMERIC_FIELDS:
            value = int(value)
        elif field == "preset":
            value = Preset.coerce(value)
        else:
            value = str(value)
        setattr(self.current, field, value)
        logger.debug(f"Set current {field} to {value!r}")

    def nudge(self, dx: int = 0, dy: int = 0):
        self.current.offset_x = int(self.current.offset_x or 0) + int(dx)
        self.current.offset_y = int(self.current.offset_y or 0) + int(dy)
        logger.debug(
            f"Nudged current offset to ({self.current.offset_x}, "
            f"{self.current.offset_y})"
        )

    def commit(self) -> Placement:
        """
        Append a snapshot of the current placement under a fresh id, then
        reset the current name, offsets and size to the defaults. The preset
        is kept.

        Returns:
            Placement: The committed snapshot.
        """
        snapshot = self.current.copy(placement_id=uuid.uuid4().hex)
        self.committed.append(snapshot)
        self.current = self._default_placement(self.current.preset)
        logger.info(
            f"Committed placement '{snapshot.name}' ({snapshot.placement_id}), "
            f"{len(self.committed)} saved"
        )
        return snapshot

    def remove(self, placement_id: str) -> bool:
        for idx, placement in enumerate(self.committed):
            if placement.placement_id == placement_id:
                del self.committed[idx]
                logger.info(f"Removed placement '{placement.name}' ({placement_id})")
                return True
        logger.debug(f"No placement with id {placement_id} to remove")
        return False

    def select_preset(self, preset: Union[Preset, str]):
        self.current.preset = Preset.coerce(preset)
        logger.debug(f"Selected preset {self.current.preset.display_name}")

    def set_grid_opacity(self, opacity: float):
        self.grid_opacity = max(0.0, min(1.0, float(opacity)))

    def set_show_grid(self, visible: bool):
        self.show_grid = bool(visible)

    def toggle_grid(self) -> bool:
        self.show_grid = not self.show_grid
        return self.show_grid

    def reset(self):
        """
        Zero the offsets and restore the grid opacity and the six row preset.
        The size falls back to the uploaded image, or the defaults when
        nothing was uploaded. The name is left alone.
        """
        self.current.offset_x = 0
        self.current.offset_y = 0
        self.grid_opacity = self.config.default_grid_opacity
        self.current.preset = self.config.default_preset
        if self.uploaded_size:
            self.current.width, self.current.height = self.uploaded_size
        else:
            self.current.width = self.config.default_width
            self.current.height = self.config.default_height
        logger.debug("Reset current placement")

    def begin_image_load(
        self, kind: Union[LoadKind, str], file_name: Optional[str] = None
    ) -> int:
        """
        Start tracking an image load. Only the latest load of each kind may
        apply its result.

        Args:
            kind: ``upload`` for the GUI image, ``overlay`` for the grid.
            file_name (str): For uploads, becomes the placement name without
                its ``.png`` suffix.

        Returns:
            int: Token to hand back on completion.
        """
        kind = LoadKind(kind)
        self._load_tokens[kind] += 1
        if kind is LoadKind.UPLOAD and file_name:
            self.current.name = PNG_SUFFIX.sub("", file_name)
        logger.debug(f"Started {kind.value} load #{self._load_tokens[kind]}")
        return self._load_tokens[kind]

    def is_current_load(self, kind: Union[LoadKind, str], token: int) -> bool:
        return self._load_tokens[LoadKind(kind)] == token

    def apply_uploaded_image(self, token: int, width: int, height: int) -> bool:
        if not self.is_current_load(LoadKind.UPLOAD, token):
            logger.warning(f"Ignoring stale upload #{token}")
            return False
        self.uploaded_size = (int(width), int(height))
        self.current.width, self.current.height = self.uploaded_size
        logger.info(f"Uploaded image is {width}x{height}")
        return True

    def fail_image_load(self, kind: Union[LoadKind, str], token: int, reason: str = ""):
        logger.error(f"{LoadKind(kind).value} load #{token} failed: {reason}")
