from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QDockWidget,
    QListWidget,
    QListWidgetItem,
)

from chestgui.core.defs import Placement
from chestgui import logger


class PlacementList(QDockWidget):

    removeRequested = Signal(str)

    def __init__(self, parent=None, button_width: int = 30):
        super().__init__("Saved GUIs", parent)
        self.placements: list[Placement] = []
        self.button_width = button_width
        self.init_ui()

    def init_ui(self):
        logger.info("Initializing PlacementList")
        main_widget = QWidget()
        main_layout = QVBoxLayout(main_widget)
        self.setMinimumWidth(150)

        self.list_widget = QListWidget()
        self.list_widget.setSelectionMode(QListWidget.NoSelection)
        self.empty_label = QLabel("No saved GUIs yet")
        self.empty_label.setAlignment(Qt.AlignCenter)

        main_layout.addWidget(self.list_widget)
        main_layout.addWidget(self.empty_label)
        self.setWidget(main_widget)
        self.setFeatures(
            QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable
        )

    def set_placements(self, placements: list[Placement]):
        self.placements = list(placements)
        self.update_list()

    def update_list(self):
        """Rebuild one row per committed placement, in order."""
        self.list_widget.clear()
        self.empty_label.setVisible(not self.placements)

        for placement in self.placements:
            widget = QWidget()
            layout = QHBoxLayout(widget)
            layout.setContentsMargins(5, 5, 5, 5)

            text_container = QWidget()
            text_layout = QVBoxLayout(text_container)
            text_layout.setContentsMargins(0, 0, 0, 0)
            name_label = QLabel(placement.name)
            name_label.setStyleSheet("font-weight: bold;")
            info_label = QLabel(
                f"{placement.preset.display_name} | "
                f"[{placement.offset_x}, {placement.offset_y}]"
            )
            info_label.setStyleSheet("color: #666; font-size: 10px;")
            text_layout.addWidget(name_label)
            text_layout.addWidget(info_label)
            layout.addWidget(text_container)
            layout.addStretch()

            del_btn = QPushButton("🗑️")
            del_btn.setMaximumWidth(self.button_width)
            del_btn.setToolTip("Remove")
            del_btn.setProperty("placement_id", placement.placement_id)
            del_btn.clicked.connect(
                lambda checked, btn=del_btn: self.removeRequested.emit(
                    btn.property("placement_id")
                )
            )
            layout.addWidget(del_btn)

            item = QListWidgetItem(self.list_widget)
            item.setSizeHint(widget.sizeHint())
            self.list_widget.addItem(item)
            self.list_widget.setItemWidget(item, widget)
