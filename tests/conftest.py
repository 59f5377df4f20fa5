"""Pytest configuration and shared fixtures for the md2tg test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from typing import Generator

import pytest

from md2tg.compose import AnimeDocument, ResourceEntry

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def reset_md2tg_logger() -> Generator[None, None, None]:
    """Undo CLI logging setup so caplog sees md2tg records in every test."""
    yield
    logger = logging.getLogger("md2tg")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_document() -> AnimeDocument:
    """Provide a document with every section populated.

    Returns
    -------
    AnimeDocument
        Document used across composer tests.

    """
    return AnimeDocument(
        title="Frieren: Beyond Journey's End",
        title_tag="2023年10月",
        fields=[
            {"label": "Localized name", "value": "葬送のフリーレン"},
            {"label": "Episodes", "value": "28"},
            {"label": "Air day", "value": ""},
            {"label": "Score", "value": "9.1", "url": "https://example.com/stats"},
        ],
        summary="An elf mage outlives her companions.\\nShe sets out to understand humans.",
        summary_detail_url="https://example.com/subject/1",
        resource_groups={
            "Sub Group": [
                ResourceEntry("02", "https://t.me/c/100/2"),
                ResourceEntry("01", "https://t.me/c/100/1"),
            ],
            "Other Subs": [ResourceEntry("01")],
        },
        tags=["Fantasy", "Adventure", "2023"],
    )
