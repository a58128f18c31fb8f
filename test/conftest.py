"""
Shared test configuration/fixtures for the category image resolver.
"""

import logging
import os
import random
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import pytest

from app.application.images import CategoryTermTable, ImageResolver, UsedImageRegistry
from app.core.exceptions import ConfigurationError, ProviderError
from app.core.pyd_schemas import CandidateImage


def setup_logging():
    """Configure logging for the whole test run."""
    log_dir = Path("test/test_output/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "test_run.log"

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(filename=log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Drop existing handlers to avoid duplicate lines
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("app").setLevel(logging.DEBUG)

    return log_file


def pytest_configure(config):  # pylint: disable=unused-argument
    """Configure pytest for tests."""
    log_file = setup_logging()

    logger = logging.getLogger("pytest")
    logger.info("=" * 80)
    logger.info("STARTING TEST RUN")
    logger.info("Working directory: %s", os.getcwd())
    logger.info("Log file: %s", log_file)
    logger.info("-" * 80)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    logger = logging.getLogger(request.node.nodeid)
    logger.info("Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        has_rep_call = hasattr(request.node, "rep_call")
        if has_rep_call and request.node.rep_call.failed:
            logger.error("Test failed after %.2fs", duration)
        else:
            logger.info("Test finished after %.2fs", duration)

    request.addfinalizer(log_test_end)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


# -------------------- Fixtures: image search stubs --------------------
def make_image(
    image_id: int,
    tags: str = "",
    likes: int = 20,
    url: Optional[str] = None,
) -> CandidateImage:
    """Build a CandidateImage the way the Pixabay adapter would."""
    return CandidateImage(
        id=image_id,
        url=url or f"https://cdn.example.com/{image_id}_640.jpg",
        preview_url=f"https://cdn.example.com/{image_id}_150.jpg",
        large_url=f"https://cdn.example.com/{image_id}_1280.jpg",
        user="tester",
        tags=tags,
        alt_text=f"query - {tags}",
        width=640,
        height=427,
        likes=likes,
        downloads=100,
    )


Response = Union[List[CandidateImage], Exception, Callable[[int], List[CandidateImage]]]


class StubImageSearch:
    """IImageSearch stub: canned results per term, records every call."""

    def __init__(self, responses: Optional[Dict[str, Response]] = None, configured: bool = True):
        self.responses = responses or {}
        self.configured = configured
        self.calls: List[tuple] = []

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("Pixabay API key not configured", config_key="pixabay_api_key")

    def search(self, term: str, per_page: int) -> List[CandidateImage]:
        self.calls.append((term, per_page))
        response = self.responses.get(term, [])
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return list(response(per_page))
        return list(response)[:per_page]

    @property
    def terms(self) -> List[str]:
        return [term for term, _ in self.calls]


@pytest.fixture
def image_factory():
    return make_image


@pytest.fixture
def stub_search_factory():
    return StubImageSearch


@pytest.fixture
def provider_error():
    return ProviderError("Pixabay API error: 503", status_code=503)


@pytest.fixture(scope="session")
def term_table() -> CategoryTermTable:
    return CategoryTermTable.load()


@pytest.fixture
def registry() -> UsedImageRegistry:
    return UsedImageRegistry()


@pytest.fixture
def make_resolver(registry, term_table):
    """Factory building an ImageResolver over a stub provider with a fresh registry."""

    def _make(search, *, seed: int = 1234, **kwargs) -> ImageResolver:
        return ImageResolver(
            image_search=search,
            registry=kwargs.pop("registry", registry),
            terms=kwargs.pop("terms", term_table),
            rng=random.Random(seed),
            **kwargs,
        )

    return _make
