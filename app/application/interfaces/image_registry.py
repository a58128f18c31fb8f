from __future__ import annotations

from typing import Optional, Protocol

from app.core.pyd_schemas import CandidateImage, DuplicatePreventionStats


class IUsedImageRegistry(Protocol):
    """Record of images already handed out, shared by concurrent resolutions."""

    def is_duplicate(self, image: Optional[CandidateImage]) -> bool:
        ...

    def claim(self, image: CandidateImage) -> bool:
        """Atomically mark ``image`` used; False if its id or url was already taken."""
        ...

    def mark_used(self, image: CandidateImage) -> None:
        ...

    def stats(self) -> DuplicatePreventionStats:
        ...

    def clear(self) -> None:
        ...

    def reset_if_over(self, limit: int) -> bool:
        ...
