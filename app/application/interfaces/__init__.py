from .image_search import IImageSearch
from .image_registry import IUsedImageRegistry

__all__ = [
    "IImageSearch",
    "IUsedImageRegistry",
]
