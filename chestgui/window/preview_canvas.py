import numpy as np
from PySide6.QtCore import QPoint, QSize
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from chestgui.core.configs import EditorConfig
from chestgui.core.defs import Placement
from chestgui.utils.image import numpy_to_qimage
from chestgui.utils.preview import composite_preview


class PreviewCanvas(QWidget):
    """
    Draws the preview frame: the uploaded GUI image at its placement and the
    alignment grid on top. Holds no state besides the inputs of the last
    ``set_inputs`` call and repaints on every change and resize.
    """

    def __init__(self, config: EditorConfig, parent=None):
        super().__init__(parent)
        self.config = config
        self.placement = Placement()
        self.image: np.ndarray | None = None
        self.grid: np.ndarray | None = None
        self.show_grid = True
        self.opacity = config.default_grid_opacity
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(320, 240)

    def sizeHint(self):
        return QSize(*self.config.viewport_size)

    def set_inputs(
        self,
        placement: Placement,
        image: np.ndarray | None,
        grid: np.ndarray | None,
        show_grid: bool,
        opacity: float,
    ):
        self.placement = placement
        self.image = image
        self.grid = grid
        self.show_grid = show_grid
        self.opacity = opacity
        self.update()

    def render_frame(self) -> np.ndarray:
        return composite_preview(
            (self.width(), self.height()),
            self.placement,
            self.image,
            self.grid,
            self.show_grid,
            self.opacity,
        )

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        draw_config = self.config.normal_draw_config
        painter.fillRect(self.rect(), draw_config.background_color)

        # checkerboard so transparent pixels read as such
        size = draw_config.checker_size
        for y in range(0, self.height(), size):
            for x in range((y // size) % 2 * size, self.width(), size * 2):
                painter.fillRect(x, y, size, size, draw_config.checker_color)

        # nearest neighbour scaling happens in the compositor
        painter.drawImage(QPoint(0, 0), numpy_to_qimage(self.render_frame()))

        if draw_config.show_center_lines:
            painter.setPen(QPen(QColor(draw_config.center_line_color), 1))
            cx, cy = self.width() // 2, self.height() // 2
            painter.drawLine(cx, 0, cx, self.height())
            painter.drawLine(0, cy, self.width(), cy)
        painter.end()
