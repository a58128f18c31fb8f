from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

from app.application.images import CategoryTermTable, ImageResolver, UsedImageRegistry
from app.application.interfaces import IImageSearch, IUsedImageRegistry
from app.infrastructure.adapters import PixabayImageSearch


def get_image_adapter_bundle(
    *,
    image_search: Optional[IImageSearch] = None,
    registry: Optional[IUsedImageRegistry] = None,
) -> SimpleNamespace:
    """Provide the adapters the category image resolver runs on.

    The registry is created here, not at import time: whoever calls this owns
    the dedup history and decides how long it lives.
    """
    return SimpleNamespace(
        image_search=image_search or PixabayImageSearch(),
        registry=registry if registry is not None else UsedImageRegistry(),
        terms=CategoryTermTable.load(),
    )


def build_image_resolver(adapters: Optional[SimpleNamespace] = None) -> ImageResolver:
    adapters = adapters or get_image_adapter_bundle()
    return ImageResolver(
        image_search=adapters.image_search,
        registry=adapters.registry,
        terms=adapters.terms,
    )
