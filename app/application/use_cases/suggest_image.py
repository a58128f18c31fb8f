import asyncio
import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from app.application.images import ImageResolver
from app.core.exceptions import ValidationError
from app.core.pyd_schemas import (
    CandidateImage,
    CategoryImageRequest,
    DuplicatePreventionStats,
    ImageRecommendation,
)

logger = logging.getLogger(__name__)


class SuggestCategoryImageUseCase:
    """Suggest one unused image for an affirmation category.

    Returns None when nothing suitable was found, which callers should treat
    differently from ConfigurationError (operator must fix) and ProviderError
    (retry later).
    """

    def __init__(self, resolver: ImageResolver) -> None:
        self._resolver = resolver

    async def execute(self, category_name: str) -> Optional[ImageRecommendation]:
        try:
            request = CategoryImageRequest(category_name=category_name)
        except PydanticValidationError as e:
            raise ValidationError(
                "Category name is required", validation_errors=e.errors()
            ) from e

        # Credential check happens up front, before any search is attempted
        self._resolver.image_search.ensure_configured()

        # Provider calls are blocking; keep them off the event loop
        loop = asyncio.get_running_loop()
        image = await loop.run_in_executor(
            None, self._resolver.resolve_image_for_category, request.category_name
        )
        if image is None:
            logger.info("No image found for category: %s", request.category_name)
            return None
        return self.to_recommendation(request.category_name, image)

    @staticmethod
    def to_recommendation(category_name: str, image: CandidateImage) -> ImageRecommendation:
        return ImageRecommendation(
            url=image.url,
            alt_text=f"{category_name} - {image.tags}",
            width=image.width,
            height=image.height,
            image_id=image.id,
            tags=image.tags,
            preview_url=image.preview_url,
            large_url=image.large_url,
        )

    def stats(self) -> DuplicatePreventionStats:
        return self._resolver.get_duplicate_prevention_stats()

    def reset(self) -> None:
        self._resolver.clear_duplicate_tracking()
