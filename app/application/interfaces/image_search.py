from __future__ import annotations

from typing import List, Protocol

from app.core.pyd_schemas import CandidateImage


class IImageSearch(Protocol):
    """Adapter for keyword image search.

    Implementations may call Pixabay, Pexels, etc. The application layer should
    not know about concrete providers.
    """

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the provider cannot be called at all."""
        ...

    def search(self, term: str, per_page: int) -> List[CandidateImage]:
        """Return up to ``per_page`` raw candidates for ``term``.

        Raises ProviderError on network failure or a non-success response.
        An empty list means the search succeeded and found nothing.
        """
        ...
