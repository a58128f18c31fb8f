from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from app.application.interfaces import IUsedImageRegistry
from app.core.config import settings
from app.core.pyd_schemas import CandidateImage, CategoryCluster, SearchTerm

logger = logging.getLogger(__name__)

PERSON_TAGS: Tuple[str, ...] = ("person", "people", "face", "portrait")


def depicts_person(image: CandidateImage) -> bool:
    tags = image.tags.lower()
    return any(tag in tags for tag in PERSON_TAGS)


def is_topically_relevant(image: CandidateImage, term: SearchTerm) -> bool:
    """True when the tags mention the first or second word of the search term."""
    tags = image.tags.lower()
    return any(word in tags for word in term.words[:2])


@dataclass(frozen=True)
class RelevancePolicy:
    """Scoring weights for candidate filtering.

    The defaults were tuned by hand against Pixabay; re-tune via settings
    when pointing at another provider.
    """

    keep_threshold: int = 2
    topic_weight: int = 2
    person_weight: int = 2
    object_weight: int = 1
    popularity_weight: int = 1
    likes_cutoff: int = 10

    @classmethod
    def from_settings(cls) -> "RelevancePolicy":
        return cls(
            keep_threshold=settings.relevance_keep_threshold,
            topic_weight=settings.relevance_topic_weight,
            person_weight=settings.relevance_person_weight,
            object_weight=settings.relevance_object_weight,
            popularity_weight=settings.relevance_popularity_weight,
            likes_cutoff=settings.relevance_likes_cutoff,
        )

    def score(
        self, image: CandidateImage, term: SearchTerm, cluster: CategoryCluster
    ) -> int:
        has_person = depicts_person(image)
        wealth = cluster is CategoryCluster.wealth

        score = 0
        if is_topically_relevant(image, term):
            score += self.topic_weight
        # Wealth imagery favours objects; everything else favours people
        if has_person and not wealth:
            score += self.person_weight
        if wealth and not has_person:
            score += self.object_weight
        if image.likes > self.likes_cutoff:
            score += self.popularity_weight
        return score

    def filter(
        self,
        batch: Sequence[CandidateImage],
        term: SearchTerm,
        cluster: CategoryCluster,
        registry: Optional[IUsedImageRegistry] = None,
    ) -> List[CandidateImage]:
        """Drop used images, keep relevant ones; fall back to all unused on an empty result."""
        unused = [img for img in batch if registry is None or not registry.is_duplicate(img)]
        relevant = [
            img for img in unused if self.score(img, term, cluster) >= self.keep_threshold
        ]
        if relevant:
            return relevant
        if unused:
            logger.debug(
                "No candidate for '%s' reached score %d; using %d unfiltered",
                term,
                self.keep_threshold,
                len(unused),
            )
        return unused
