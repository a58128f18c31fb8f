from __future__ import annotations

import logging
import threading
from typing import Optional, Set

from app.application.interfaces import IUsedImageRegistry
from app.core.pyd_schemas import CandidateImage, DuplicatePreventionStats

logger = logging.getLogger(__name__)


class UsedImageRegistry(IUsedImageRegistry):
    """In-memory record of image ids and urls already returned to callers.

    Not persisted: a process restart starts from an empty registry. Every
    operation takes the internal lock, so one instance can be shared by
    request handlers running on different threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._used_ids: Set[int] = set()
        self._used_urls: Set[str] = set()

    def _seen(self, image: CandidateImage) -> bool:
        return image.id in self._used_ids or (
            bool(image.url) and image.url in self._used_urls
        )

    def _add(self, image: CandidateImage) -> None:
        self._used_ids.add(image.id)
        if image.url:
            self._used_urls.add(image.url)

    def is_duplicate(self, image: Optional[CandidateImage]) -> bool:
        if image is None:
            return False
        with self._lock:
            return self._seen(image)

    def claim(self, image: CandidateImage) -> bool:
        with self._lock:
            if self._seen(image):
                return False
            self._add(image)
        logger.debug("Marked image %s as used to prevent duplicates", image.id)
        return True

    def mark_used(self, image: CandidateImage) -> None:
        """Record ``image`` unconditionally (used by the last-resort tier)."""
        with self._lock:
            self._add(image)
        logger.debug("Marked image %s as used to prevent duplicates", image.id)

    def stats(self) -> DuplicatePreventionStats:
        with self._lock:
            ids, urls = len(self._used_ids), len(self._used_urls)
        return DuplicatePreventionStats(used_ids=ids, used_urls=urls, total=ids + urls)

    def clear(self) -> None:
        with self._lock:
            self._used_ids.clear()
            self._used_urls.clear()
        logger.info("Cleared duplicate image tracking")

    def reset_if_over(self, limit: int) -> bool:
        """Clear the registry when more than ``limit`` entries are tracked."""
        with self._lock:
            total = len(self._used_ids) + len(self._used_urls)
            if total <= limit:
                return False
            self._used_ids.clear()
            self._used_urls.clear()
        logger.info("Auto-reset duplicate tracking (%d entries tracked, limit %d)", total, limit)
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._used_ids) + len(self._used_urls)
