from .image_search_pixabay import PixabayImageSearch

__all__ = [
    "PixabayImageSearch",
]
