from chestgui import logger
from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage
import traceback


class ImageLoadWorker(QObject):
    finished = Signal(str, int, QImage)
    error = Signal(str, int, str)

    def __init__(self, path: str, token: int, kind: str = "upload"):
        """
        A worker that decodes an image file in a separate thread.

        Args:
            path (str): The image file to decode.
            token (int): Load token handed out by the placement store, passed
                back with the result so stale loads can be dropped.
            kind (str): Which image is loading, ``upload`` or ``overlay``.
        """
        super().__init__()
        self.path = str(path)
        self.token = token
        self.kind = kind

    def process(self):
        try:
            image = QImage(self.path)
            if image.isNull():
                raise ValueError(f"Failed to decode image: {self.path}")
            self.finished.emit(self.kind, self.token, image)
        except Exception as e:
            self.error.emit(self.kind, self.token, str(e))
            traceback.print_exc()
            logger.error(f"Image load error: {e}")
            return
