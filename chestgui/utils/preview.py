import math

import numpy as np
import cv2

from chestgui.core.defs import (
    GRID_CELL_SIZE,
    GRID_COLUMNS,
    Placement,
    Preset,
    grid_pixel_size,
)


def _blend(frame: np.ndarray, image: np.ndarray, x: int, y: int, opacity: float):
    """
    Alpha-composite an RGBA ``image`` onto ``frame`` with its top left corner
    at (x, y), clipping whatever falls outside the frame.
    """
    frame_h, frame_w = frame.shape[:2]
    img_h, img_w = image.shape[:2]

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + img_w, frame_w), min(y + img_h, frame_h)
    if x0 >= x1 or y0 >= y1:
        return

    src = image[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32)
    dst = frame[y0:y1, x0:x1].astype(np.float32)

    src_alpha = src[..., 3:4] / 255.0 * opacity
    dst_alpha = dst[..., 3:4] / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    safe_alpha = np.where(out_alpha == 0, 1.0, out_alpha)
    out_rgb = (
        src[..., :3] * src_alpha + dst[..., :3] * dst_alpha * (1.0 - src_alpha)
    ) / safe_alpha

    frame[y0:y1, x0:x1, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    frame[y0:y1, x0:x1, 3:4] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


def to_rgba(image: np.ndarray) -> np.ndarray:
    """Promote grayscale or RGB arrays to RGBA."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2RGBA)
    return image


def composite_preview(
    viewport_size: tuple[int, int],
    placement: Placement,
    image: np.ndarray | None = None,
    grid: np.ndarray | None = None,
    show_grid: bool = True,
    opacity: float = 0.35,
) -> np.ndarray:
    """
    Render one preview frame.

    The uploaded image is scaled to the placement size with nearest neighbour
    sampling, centered on the viewport and displaced by the placement offset.
    The grid overlay is centered unscaled on top at the given opacity.

    Args:
        viewport_size (tuple[int, int]): Frame (width, height).
        placement (Placement): Supplies offset and size.
        image (np.ndarray): Uploaded image, RGBA, or None.
        grid (np.ndarray): Grid overlay, RGBA, or None.
        show_grid (bool): Whether the overlay is drawn.
        opacity (float): Overlay opacity from 0 to 1.

    Returns:
        np.ndarray: RGBA frame of shape (height, width, 4).
    """
    view_w, view_h = (max(int(v), 0) for v in viewport_size)
    frame = np.zeros((view_h, view_w, 4), dtype=np.uint8)
    center_x, center_y = view_w / 2, view_h / 2

    if image is not None and placement.width > 0 and placement.height > 0:
        scaled = cv2.resize(
            to_rgba(image),
            (int(placement.width), int(placement.height)),
            interpolation=cv2.INTER_NEAREST,
        )
        draw_x = math.floor(
            center_x - placement.width / 2 + (placement.offset_x or 0)
        )
        draw_y = math.floor(
            center_y - placement.height / 2 + (placement.offset_y or 0)
        )
        _blend(frame, scaled, draw_x, draw_y, 1.0)

    if show_grid and grid is not None:
        grid = to_rgba(grid)
        grid_h, grid_w = grid.shape[:2]
        _blend(
            frame,
            grid,
            math.floor(center_x - grid_w / 2),
            math.floor(center_y - grid_h / 2),
            max(0.0, min(1.0, opacity)),
        )

    return frame


def draw_grid_overlay(
    preset: Preset, color: tuple[int, int, int, int] = (40, 40, 40, 255)
) -> np.ndarray:
    """
    Draw a slot grid for a preset: 9 columns of 18px cells and one row of
    cells per preset row, 1px cell borders on a transparent background.
    """
    width, height = grid_pixel_size(preset)
    overlay = np.zeros((height, width, 4), dtype=np.uint8)
    for col in range(GRID_COLUMNS + 1):
        x = min(col * GRID_CELL_SIZE, width - 1)
        cv2.line(overlay, (x, 0), (x, height - 1), color, 1)
    for row in range(preset.rows + 1):
        y = min(row * GRID_CELL_SIZE, height - 1)
        cv2.line(overlay, (0, y), (width - 1, y), color, 1)
    return overlay
