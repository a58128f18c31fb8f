from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from app.application.interfaces import IImageSearch
from app.core.config import settings
from app.core.exceptions import ConfigurationError, ProviderError
from app.core.pyd_schemas import CandidateImage

logger = logging.getLogger(__name__)

# Pixabay rejects per_page outside this range
PIXABAY_MIN_PER_PAGE = 3
PIXABAY_MAX_PER_PAGE = 200


class PixabayImageSearch(IImageSearch):
    """IImageSearch implementation using the Pixabay API.

    One GET per search, no retries. Timeouts, connection failures and non-2xx
    responses raise ProviderError; a missing API key raises ConfigurationError.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key or settings.pixabay_api_key
        self.base_url = base_url or settings.pixabay_base_url
        self.timeout = float(timeout if timeout is not None else settings.pixabay_timeout)
        self._http = session or requests

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "Pixabay API key not configured", config_key="pixabay_api_key"
            )

    def build_params(self, term: str, per_page: int) -> Dict[str, Any]:
        return {
            "key": self.api_key,
            "q": term,
            "image_type": "photo",
            "orientation": "horizontal",
            "safesearch": "true",
            "per_page": max(PIXABAY_MIN_PER_PAGE, min(int(per_page), PIXABAY_MAX_PER_PAGE)),
            "min_width": settings.pixabay_min_width,
            "min_height": settings.pixabay_min_height,
            "order": "popular",
        }

    def search(self, term: str, per_page: int) -> List[CandidateImage]:
        self.ensure_configured()
        params = self.build_params(term, per_page)

        try:
            resp = self._http.get(self.base_url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise ProviderError(
                f"Pixabay request timed out after {self.timeout}s", search_term=term
            ) from exc
        except requests.RequestException as exc:
            raise ProviderError(f"Pixabay request failed: {exc}", search_term=term) from exc

        if not resp.ok:
            raise ProviderError(
                f"Pixabay API error: {resp.status_code}",
                status_code=resp.status_code,
                search_term=term,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError(
                "Pixabay returned a non-JSON response",
                status_code=resp.status_code,
                search_term=term,
            ) from exc

        hits = data.get("hits") or []
        images = [
            self._to_candidate(hit, term)
            for hit in hits
            if hit.get("id") is not None and hit.get("webformatURL")
        ]
        logger.debug("Pixabay: %d hits for '%s' (per_page=%s)", len(images), term, params["per_page"])
        return images

    @staticmethod
    def _to_candidate(hit: Dict[str, Any], term: str) -> CandidateImage:
        tags = hit.get("tags") or ""
        return CandidateImage(
            id=int(hit["id"]),
            url=hit["webformatURL"],
            preview_url=hit.get("previewURL"),
            large_url=hit.get("largeImageURL"),
            user=hit.get("user"),
            tags=tags,
            alt_text=f"{term} - {tags}",
            width=int(hit.get("webformatWidth") or 0),
            height=int(hit.get("webformatHeight") or 0),
            likes=int(hit.get("likes") or 0),
            downloads=int(hit.get("downloads") or 0),
        )
