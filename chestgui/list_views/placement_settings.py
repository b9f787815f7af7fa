from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QGridLayout,
    QPushButton,
    QLabel,
    QLineEdit,
    QSizePolicy,
    QDockWidget,
    QSlider,
    QCheckBox,
)

from chestgui.api.store import PlacementStore
from chestgui.core.defs import Preset
from chestgui.utils.utils import parse_int
from chestgui import logger


class PlacementSettings(QDockWidget):
    fieldEdited = Signal(str, object)
    nudgeRequested = Signal(int, int)
    presetSelected = Signal(str)
    gridToggled = Signal(bool)
    opacityChanged = Signal(float)
    uploadRequested = Signal()
    resetRequested = Signal()
    commitRequested = Signal()
    copyRequested = Signal()
    downloadRequested = Signal()

    def __init__(
        self,
        parent=None,
        nudge_step: int = 1,
        max_offset: int = 1000,
        max_size: int = 4096,
    ):
        super().__init__("Placement Settings", parent)
        self._disable_updates = False
        # field whose edit is being pushed to the store
        self._editing_field = None
        self.nudge_step = nudge_step
        self.bounds = {
            "offset_x": (-max_offset, max_offset),
            "offset_y": (-max_offset, max_offset),
            "width": (1, max_size),
            "height": (1, max_size),
        }
        self.preset_buttons: dict[Preset, QPushButton] = {}
        self.init_ui()
        self.setFeatures(
            QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable
        )

    def init_ui(self):
        """Initialize the UI elements."""
        logger.info("Initializing PlacementSettings")
        self.widget = QWidget()
        self.setWidget(self.widget)
        self.main_layout = QVBoxLayout(self.widget)
        self.main_layout.setContentsMargins(10, 10, 10, 10)
        self.main_layout.setSpacing(10)

        self.upload_button = QPushButton("Upload GUI PNG")
        self.upload_button.clicked.connect(self.uploadRequested)
        self.main_layout.addWidget(self.upload_button)

        self.items_label = QLabel("1 item")
        self.items_label.setStyleSheet("font-weight: bold;")
        self.main_layout.addWidget(self.items_label)

        # name and size of the current placement
        self.name_edit = QLineEdit()
        self.name_edit.textEdited.connect(
            lambda text: self.emit_field("name", text)
        )
        self.main_layout.addWidget(self.labeled("PNG Name:", self.name_edit))

        self.width_edit = self.create_numeric_edit("width")
        self.height_edit = self.create_numeric_edit("height")
        size_row = QWidget()
        size_layout = QHBoxLayout(size_row)
        size_layout.setContentsMargins(0, 0, 0, 0)
        size_layout.addWidget(self.labeled("W:", self.width_edit))
        size_layout.addWidget(self.labeled("H:", self.height_edit))
        self.main_layout.addWidget(size_row)

        self.commit_button = QPushButton("Add Another GUI")
        self.commit_button.clicked.connect(self.commitRequested)
        self.main_layout.addWidget(self.commit_button)

        # offsets with +/- nudges
        self.x_edit = self.create_numeric_edit("offset_x")
        self.y_edit = self.create_numeric_edit("offset_y")
        for label, edit, dx, dy in (
            ("X Offset:", self.x_edit, 1, 0),
            ("Y Offset:", self.y_edit, 0, 1),
        ):
            self.main_layout.addWidget(self.create_offset_row(label, edit, dx, dy))

        # row count presets
        preset_widget = QWidget()
        preset_layout = QGridLayout(preset_widget)
        preset_layout.setContentsMargins(0, 0, 0, 0)
        for idx, preset in enumerate(reversed(list(Preset))):
            btn = QPushButton(preset.display_name)
            btn.setCheckable(True)
            btn.clicked.connect(
                lambda checked, p=preset: self.presetSelected.emit(p.value)
            )
            self.preset_buttons[preset] = btn
            preset_layout.addWidget(btn, idx // 3, idx % 3)
        self.main_layout.addWidget(preset_widget)

        # grid overlay
        self.grid_checkbox = QCheckBox("Show Grid")
        self.grid_checkbox.toggled.connect(self.on_grid_toggled)
        self.main_layout.addWidget(self.grid_checkbox)
        self.opacity_slider = QSlider(Qt.Horizontal)
        self.opacity_slider.setRange(0, 100)
        self.opacity_value = QLabel("35%")
        self.opacity_slider.valueChanged.connect(self.on_opacity_changed)
        opacity_row = QWidget()
        opacity_layout = QHBoxLayout(opacity_row)
        opacity_layout.setContentsMargins(0, 0, 0, 0)
        opacity_layout.addWidget(QLabel("Opacity:"))
        opacity_layout.addWidget(self.opacity_slider)
        opacity_layout.addWidget(self.opacity_value)
        self.main_layout.addWidget(opacity_row)

        # actions
        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(self.resetRequested)
        self.copy_button = QPushButton("Copy")
        self.copy_button.clicked.connect(self.copyRequested)
        self.download_button = QPushButton("Download chest.json")
        self.download_button.clicked.connect(self.downloadRequested)
        for btn in (self.reset_button, self.copy_button, self.download_button):
            self.main_layout.addWidget(btn)

        self.main_layout.addStretch()
        self.setMinimumWidth(250)
        self.widget.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def labeled(self, label: str, widget: QWidget) -> QWidget:
        container = QWidget()
        layout = QHBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        lbl = QLabel(label)
        lbl.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        layout.addWidget(lbl)
        layout.addWidget(widget)
        return container

    def create_numeric_edit(self, field: str) -> QLineEdit:
        edit = QLineEdit()
        edit.setAlignment(Qt.AlignCenter)
        edit.textEdited.connect(lambda text: self.on_numeric_edited(field, text))
        return edit

    def create_offset_row(self, label: str, edit: QLineEdit, dx: int, dy: int):
        container = QWidget()
        layout = QHBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        minus_btn = QPushButton("-")
        plus_btn = QPushButton("+")
        for btn in (minus_btn, plus_btn):
            btn.setMaximumWidth(30)
        step = self.nudge_step
        minus_btn.clicked.connect(
            lambda checked=False: self.nudgeRequested.emit(-dx * step, -dy * step)
        )
        plus_btn.clicked.connect(
            lambda checked=False: self.nudgeRequested.emit(dx * step, dy * step)
        )
        layout.addWidget(QLabel(label))
        layout.addWidget(minus_btn)
        layout.addWidget(edit)
        layout.addWidget(plus_btn)
        return container

    def emit_field(self, field: str, value):
        if self._disable_updates:
            return
        self._editing_field = field
        try:
            self.fieldEdited.emit(field, value)
        finally:
            self._editing_field = None

    def on_numeric_edited(self, field: str, text: str):
        """Only in-range numbers reach the store; anything else is ignored."""
        minimum, maximum = self.bounds[field]
        value = parse_int(text, minimum, maximum)
        if value is None:
            logger.debug(f"Ignoring invalid {field}: {text!r}")
            return
        self.emit_field(field, value)

    def on_grid_toggled(self, checked: bool):
        if not self._disable_updates:
            self.gridToggled.emit(checked)

    def on_opacity_changed(self, value: int):
        self.opacity_value.setText(f"{value}%")
        if not self._disable_updates:
            self.opacityChanged.emit(value / 100.0)

    def sync_from_store(self, store: PlacementStore, has_upload: bool = False):
        """Update widget values from the store without echoing edits back."""
        if self._disable_updates:
            return
        try:
            self._disable_updates = True
            current = store.current
            self._set_text("name", self.name_edit, current.name)
            self._set_text("width", self.width_edit, str(current.width))
            self._set_text("height", self.height_edit, str(current.height))
            self._set_text("offset_x", self.x_edit, str(current.offset_x))
            self._set_text("offset_y", self.y_edit, str(current.offset_y))
            for preset, btn in self.preset_buttons.items():
                btn.setChecked(preset is current.preset)
            self.grid_checkbox.setChecked(store.show_grid)
            self.opacity_slider.setValue(round(store.grid_opacity * 100))
            self.opacity_value.setText(f"{round(store.grid_opacity * 100)}%")
            self.upload_button.setText(
                "Change GUI Image" if has_upload else "Upload GUI PNG"
            )
            count = len(store.committed) + 1
            self.items_label.setText(f"{count} item{'s' if count > 1 else ''}")
        finally:
            self._disable_updates = False

    def _set_text(self, field: str, edit: QLineEdit, text: str):
        # keep the cursor of the edit the user is typing in
        if edit.text() != text and field != self._editing_field:
            edit.setText(text)
