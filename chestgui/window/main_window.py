from pathlib import Path

from chestgui.api.compiler import generate_all_configs, generate_full_chest_json
from chestgui.api.store import PlacementStore
from chestgui.core.configs import EditorConfig
from chestgui.core.defs import LoadKind, Preset
from chestgui.list_views import PlacementList, PlacementSettings
from chestgui.utils.image import qpixmap_to_numpy
from chestgui.utils.preview import draw_grid_overlay
from chestgui.window.preview_canvas import PreviewCanvas
from chestgui.workers import ImageLoadWorker
from chestgui import logger
from chestgui import __version__


from PySide6.QtCore import Qt, QThread, QTimer
from PySide6.QtGui import QImage
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QMainWindow,
    QMessageBox,
)


class MainWindow(QMainWindow):
    def __init__(self, config: EditorConfig | None = None):
        """
        Main window of the chest GUI offset editor.

        Args:
            config (EditorConfig): Editor configuration.
        """
        super().__init__()
        self.config = config or EditorConfig()
        self.store = PlacementStore(self.config)
        self.uploaded_image = None
        self.grid_image = None
        # keeps running threads alive until they finish
        self._threads: dict[tuple[LoadKind, int], tuple[QThread, ImageLoadWorker]] = {}
        self.init_ui()

    def init_ui(self):
        """Initialize the main window, the docks and the preview."""
        self.setWindowTitle(f"Chest GUI Offset Editor v{__version__}")
        self.setGeometry(100, 100, 1200, 800)

        self.status_bar = self.statusBar()
        self.status_bar.showMessage("Ready")

        self.canvas = PreviewCanvas(self.config, self)
        self.setCentralWidget(self.canvas)

        self.settings = PlacementSettings(
            self,
            nudge_step=self.config.nudge_step,
            max_offset=self.config.max_offset,
            max_size=self.config.max_size,
        )
        self.placement_list = PlacementList(
            self, button_width=self.config.normal_draw_config.button_width
        )
        self.addDockWidget(Qt.RightDockWidgetArea, self.settings)
        self.addDockWidget(Qt.RightDockWidgetArea, self.placement_list)

        self.settings.fieldEdited.connect(self.on_field_edited)
        self.settings.nudgeRequested.connect(self.on_nudge)
        self.settings.presetSelected.connect(self.apply_preset)
        self.settings.gridToggled.connect(self.on_grid_toggled)
        self.settings.opacityChanged.connect(self.on_opacity_changed)
        self.settings.uploadRequested.connect(self.open_upload_dialog)
        self.settings.resetRequested.connect(self.reset_all)
        self.settings.commitRequested.connect(self.add_config)
        self.settings.copyRequested.connect(self.copy_code)
        self.settings.downloadRequested.connect(self.download_chest_json)
        self.placement_list.removeRequested.connect(self.remove_config)

        self.load_overlay(self.store.preset)
        self.refresh()

    def refresh(self):
        """Push store state into every view."""
        self.settings.sync_from_store(
            self.store, has_upload=self.uploaded_image is not None
        )
        self.placement_list.set_placements(self.store.committed)
        self.canvas.set_inputs(
            self.store.current.copy(),
            self.uploaded_image,
            self.grid_image,
            self.store.show_grid,
            self.store.grid_opacity,
        )

    def update_status(self, msg):
        self.status_bar.showMessage(
            f"{msg} | Preset: {self.store.preset.display_name}"
            f" | Saved: {len(self.store.committed)}"
        )

    def on_field_edited(self, field, value):
        self.store.set_current_field(field, value)
        self.refresh()

    def on_nudge(self, dx, dy):
        self.store.nudge(dx, dy)
        self.refresh()

    def on_grid_toggled(self, checked):
        self.store.set_show_grid(checked)
        self.refresh()

    def on_opacity_changed(self, opacity):
        self.store.set_grid_opacity(opacity)
        self.refresh()

    def apply_preset(self, preset):
        self.store.select_preset(preset)
        self.load_overlay(self.store.preset)
        self.update_status(f"Preset {self.store.preset.display_name}")
        self.refresh()

    def reset_all(self):
        previous = self.store.preset
        self.store.reset()
        if self.store.preset is not previous:
            self.load_overlay(self.store.preset)
        self.update_status("Reset")
        self.refresh()

    def add_config(self):
        placement = self.store.commit()
        self.update_status(f"Added {placement.name}")
        self.refresh()

    def remove_config(self, placement_id):
        if self.store.remove(placement_id):
            self.update_status("Removed GUI")
        self.refresh()

    def copy_code(self):
        QApplication.clipboard().setText(
            generate_all_configs(self.store.placements(), self.config)
        )
        self.settings.copy_button.setText("Copied!")
        QTimer.singleShot(2000, lambda: self.settings.copy_button.setText("Copy"))
        self.update_status("Copied config to clipboard")

    def download_chest_json(self):
        """Save the full descriptor, defaulting to chest.json."""
        file_name, _ = QFileDialog.getSaveFileName(
            self,
            "Save chest.json",
            str(self.config.project_dir / self.config.export_filename),
            "JSON Files (*.json)",
        )
        if not file_name:
            return
        try:
            Path(file_name).write_text(
                generate_full_chest_json(self.store.placements(), self.config),
                encoding="utf-8",
            )
            logger.info(f"Saved descriptor to {file_name}")
            self.update_status(f"Saved {file_name}")
        except Exception as e:
            logger.error(f"Failed to save descriptor: {e}")
            QMessageBox.critical(self, "Error", f"Failed to save descriptor: {str(e)}")

    def open_upload_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(
            self, "Upload GUI PNG", "", "PNG Images (*.png);;All Files (*)"
        )
        if file_name:
            self.load_upload(file_name)

    def load_upload(self, path):
        token = self.store.begin_image_load(LoadKind.UPLOAD, Path(path).name)
        self.start_load(LoadKind.UPLOAD, path, token)
        self.refresh()

    def load_overlay(self, preset: Preset):
        """
        Load the overlay PNG of a preset, or draw one when the assets folder
        does not ship it.
        """
        path = self.config.overlay_path(preset)
        token = self.store.begin_image_load(LoadKind.OVERLAY)
        if path.is_file():
            self.start_load(LoadKind.OVERLAY, path, token)
        else:
            logger.debug(f"No overlay at {path}, drawing the grid instead")
            self.grid_image = draw_grid_overlay(preset)

    def start_load(self, kind: LoadKind, path, token: int):
        thread = QThread()
        worker = ImageLoadWorker(path, token, kind.value)
        worker.moveToThread(thread)

        thread.started.connect(worker.process)
        worker.finished.connect(self.handle_image_loaded)
        worker.error.connect(self.handle_image_error)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)

        worker.finished.connect(worker.deleteLater)
        worker.error.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.finished.connect(lambda: self._threads.pop((kind, token), None))

        self._threads[(kind, token)] = (thread, worker)
        thread.start()

    def handle_image_loaded(self, kind: str, token: int, image: QImage):
        kind = LoadKind(kind)
        if not self.store.is_current_load(kind, token):
            logger.warning(f"Dropping stale {kind.value} load #{token}")
            return
        array = qpixmap_to_numpy(image)
        if kind is LoadKind.UPLOAD:
            self.store.apply_uploaded_image(token, image.width(), image.height())
            self.uploaded_image = array
            self.update_status(f"Loaded {self.store.current.name}")
        else:
            self.grid_image = array
        self.refresh()

    def handle_image_error(self, kind: str, token: int, error: str):
        kind = LoadKind(kind)
        self.store.fail_image_load(kind, token, error)
        if not self.store.is_current_load(kind, token):
            return
        if kind is LoadKind.UPLOAD:
            QMessageBox.warning(self, "Error", f"Could not load image: {error}")
        self.update_status(f"Image load failed: {error}")

    def closeEvent(self, event):
        logger.info("Closing the application.")
        for thread, _ in list(self._threads.values()):
            thread.quit()
            thread.wait()
        super().closeEvent(event)

    def keyPressEvent(self, event):
        # if pressed escape key, close the application
        if event.key() == Qt.Key_Escape:
            logger.info("Escape key pressed, closing the application.")
            self.close()
        return super().keyPressEvent(event)
