from .image_loader import ImageLoadWorker

__all__ = ["ImageLoadWorker"]
