from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, constr


class CategoryCluster(str, Enum):
    generic = "generic"
    wealth = "wealth"


class TermSource(str, Enum):
    exact = "exact"
    partial = "partial"
    synthesized = "synthesized"
    alternative = "alternative"
    fallback = "fallback"


class SearchTerm(BaseModel):
    """Keyword phrase sent to the image provider, tagged with how it was derived."""

    text: str
    source: TermSource = TermSource.exact

    model_config = ConfigDict(frozen=True)

    @property
    def words(self) -> list[str]:
        return self.text.lower().split()

    def __str__(self) -> str:
        return self.text


class CandidateImage(BaseModel):
    """One hit returned by the image search provider."""

    id: int
    url: str
    preview_url: Optional[str] = None
    large_url: Optional[str] = None
    user: Optional[str] = None
    tags: str = ""
    alt_text: str = ""
    width: int = 0
    height: int = 0
    likes: int = 0
    downloads: int = 0


class ImageRecommendation(BaseModel):
    """Caller-facing result of resolving a category to an image."""

    url: str
    alt_text: str
    width: int
    height: int
    image_id: int
    tags: str = ""
    preview_url: Optional[str] = None
    large_url: Optional[str] = None


class DuplicatePreventionStats(BaseModel):
    used_ids: int
    used_urls: int
    total: int


class CategoryImageRequest(BaseModel):
    category_name: constr(strip_whitespace=True, min_length=1)
