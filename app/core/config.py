"""
Application configuration using Pydantic Settings
"""

from typing import List, Union
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Pixabay Settings
    # Several env names are accepted so existing deployments keep working
    pixabay_api_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "pixabay_api_key",
            "pixabay_api",
            "next_public_pixabay_api_key",
        ),
    )
    pixabay_base_url: str = "https://pixabay.com/api/"
    pixabay_timeout: float = 10.0  # seconds; expiry surfaces as ProviderError
    pixabay_min_width: int = 800
    pixabay_min_height: int = 600

    # Search Page Sizes
    image_primary_per_page: int = 30
    image_expanded_per_page: int = 50
    image_alternative_per_page: int = 20
    image_fallback_per_page: int = 10
    image_min_candidates: int = 5  # below this the primary term is re-queried wider

    # Relevance Scoring
    relevance_keep_threshold: int = 2
    relevance_topic_weight: int = 2
    relevance_person_weight: int = 2
    relevance_object_weight: int = 1
    relevance_popularity_weight: int = 1
    relevance_likes_cutoff: int = 10

    # Duplicate Prevention
    image_registry_max_tracked: int = 1000

    # Category Terms
    category_terms_path: str = ""  # empty = bundled app/core/category_terms.json
    generic_fallback_term: str = "confident person achievement"
    wealth_fallback_term: str = "luxury mansion wealth lifestyle yacht jewelry"
    wealth_keywords: Union[List[str], str] = [
        "luxury",
        "wealth",
        "mansion",
        "expensive",
        "money",
        "lifestyle",
        "yacht",
        "jewelry",
        "abundance",
        "prosperity",
    ]

    @field_validator("wealth_keywords")
    @classmethod
    def parse_wealth_keywords(cls, v):
        """Parse wealth keywords from a comma-separated string to a list.

        Example:
            >>> parse_wealth_keywords("luxury, yacht")
            ['luxury', 'yacht']
        """
        if isinstance(v, str):
            return [kw.strip().lower() for kw in v.split(",") if kw.strip()]
        return [str(kw).strip().lower() for kw in v if str(kw).strip()]

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = ""  # empty = console only

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }


# Global settings instance
settings = Settings()
