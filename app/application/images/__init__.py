from .registry import UsedImageRegistry
from .relevance import RelevancePolicy
from .terms import CategoryTermTable, classify_category, fallback_term
from .resolver import ImageResolver

__all__ = [
    "UsedImageRegistry",
    "RelevancePolicy",
    "CategoryTermTable",
    "classify_category",
    "fallback_term",
    "ImageResolver",
]
