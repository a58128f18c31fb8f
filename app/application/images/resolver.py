from __future__ import annotations

import logging
import random
from typing import List, Optional

from app.application.interfaces import IImageSearch, IUsedImageRegistry
from app.application.images.registry import UsedImageRegistry
from app.application.images.relevance import RelevancePolicy
from app.application.images.terms import (
    CategoryTermTable,
    classify_category,
    fallback_term,
)
from app.core.config import settings
from app.core.pyd_schemas import (
    CandidateImage,
    CategoryCluster,
    DuplicatePreventionStats,
    SearchTerm,
)

logger = logging.getLogger(__name__)


class ImageResolver:
    """Resolve a category name to one image not handed out before.

    Search tiers, first success wins:
      1. primary term (exact / partial / synthesized) with relevance filtering
         and a wider re-query when few unused candidates remain
      2. each alternative phrasing for the category, in order
      3. a generic last-resort term, first raw hit, no filtering

    Returns None when every tier comes back empty. Provider and configuration
    errors propagate to the caller.
    """

    def __init__(
        self,
        image_search: IImageSearch,
        registry: Optional[IUsedImageRegistry] = None,
        terms: Optional[CategoryTermTable] = None,
        policy: Optional[RelevancePolicy] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.image_search = image_search
        self.registry = registry if registry is not None else UsedImageRegistry()
        self.terms = terms if terms is not None else CategoryTermTable.load()
        self.policy = policy if policy is not None else RelevancePolicy.from_settings()
        self._rng = rng or random.Random()

        self.primary_per_page = int(settings.image_primary_per_page)
        self.expanded_per_page = int(settings.image_expanded_per_page)
        self.alternative_per_page = int(settings.image_alternative_per_page)
        self.fallback_per_page = int(settings.image_fallback_per_page)
        self.min_candidates = int(settings.image_min_candidates)
        self.max_tracked = int(settings.image_registry_max_tracked)

    # ----- Resolution -----
    def resolve_image_for_category(self, category_name: str) -> Optional[CandidateImage]:
        self.registry.reset_if_over(self.max_tracked)

        cluster = classify_category(category_name)
        term = self.terms.resolve_search_term(category_name)
        logger.info(
            "Searching for images with term '%s' (%s) for category '%s'",
            term,
            term.source.value,
            category_name,
        )

        image = self._search_and_select(term, cluster, self.primary_per_page)
        if image is not None:
            return image

        for alt in self.terms.alternative_terms(category_name):
            logger.info("Trying alternative term '%s'", alt)
            image = self._search_and_select(alt, cluster, self.alternative_per_page)
            if image is not None:
                return image

        last = fallback_term(cluster)
        logger.info("Trying fallback search '%s'", last)
        hits = self.image_search.search(last.text, self.fallback_per_page)
        if not hits:
            logger.info("No image found for category '%s'", category_name)
            return None
        # Last resort may repeat an image rather than fail
        selected = hits[0]
        self.registry.mark_used(selected)
        return selected

    def _search_and_select(
        self, term: SearchTerm, cluster: CategoryCluster, per_page: int
    ) -> Optional[CandidateImage]:
        raw = self.image_search.search(term.text, per_page)
        if not raw:
            return None

        working = self.policy.filter(raw, term, cluster, self.registry)

        if len(working) < self.min_candidates:
            logger.info(
                "Only %d unique images available for '%s', expanding search...",
                len(working),
                term,
            )
            expanded = self.image_search.search(term.text, self.expanded_per_page)
            if len(expanded) > len(raw):
                working = self.policy.filter(expanded, term, cluster, self.registry)
                logger.info("Expanded search found %d total images", len(expanded))

        return self._select(working, term)

    def _select(
        self, candidates: List[CandidateImage], term: SearchTerm
    ) -> Optional[CandidateImage]:
        pool = list(candidates)
        while pool:
            pick = self._rng.choice(pool)
            # Another request may have claimed it since filtering
            if self.registry.claim(pick):
                logger.info(
                    "Returning image %s (one of %d) for '%s'", pick.id, len(pool), term
                )
                return pick
            pool.remove(pick)
        return None

    # ----- Duplicate tracking -----
    def get_duplicate_prevention_stats(self) -> DuplicatePreventionStats:
        return self.registry.stats()

    def clear_duplicate_tracking(self) -> None:
        self.registry.clear()

    def is_duplicate(self, candidate: Optional[CandidateImage]) -> bool:
        return self.registry.is_duplicate(candidate)
