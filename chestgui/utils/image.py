from pathlib import Path

import numpy as np
import cv2
from PySide6.QtGui import QPixmap, QImage


def qpixmap_to_numpy(pixmap: QPixmap | QImage) -> np.ndarray:
    """
    Convert QPixmap to RGBA numpy array.

    Args:
        pixmap: The QPixmap to convert

    Returns:
        numpy.ndarray: Array with shape (height, width, 4) containing RGBA values
    """

    if isinstance(pixmap, QPixmap):
        image = pixmap.toImage()
    else:
        image = pixmap
    if image.format() != QImage.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format_RGBA8888)

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()

    # rows may be padded past width * 4 bytes
    arr = np.frombuffer(bytes(image.constBits()), dtype=np.uint8)
    arr = arr.reshape((height, bytes_per_line))[:, : width * 4]
    return arr.reshape((height, width, 4)).copy()


def numpy_to_qimage(array: np.ndarray) -> QImage:
    """Wrap an RGBA array in a detached QImage."""
    array = np.ascontiguousarray(array)
    height, width = array.shape[:2]
    image = QImage(array.data, width, height, array.strides[0], QImage.Format_RGBA8888)
    return image.copy()


def read_rgba(path: str | Path) -> np.ndarray | None:
    """
    Read an image file as RGBA.

    Returns:
        np.ndarray: The image, or None when the file cannot be decoded.
    """
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        return None
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)


def write_rgba(path: str | Path, image: np.ndarray) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)):
        raise ValueError(f"Failed to write image: {path}")
    return path
