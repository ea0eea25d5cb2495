"""Shared fixtures for sdmarkup tests.

Most tests run against a small synthetic vocabulary so expected markup does
not depend on the bundled schema.org subset.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to path so tests can import sdmarkup without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from sdmarkup.renderers import StructuredData, create_renderer  # noqa: E402
from sdmarkup.vocabulary import VocabularyGraph, clear_cache  # noqa: E402

SYNTHETIC_TYPES = {
    "Thing": {
        "extends": None,
        "properties": {
            "name": {"expectedTypes": ["Text"]},
            "url": {"expectedTypes": ["URL"]},
            "description": {"expectedTypes": ["Text"]},
        },
    },
    "CreativeWork": {
        "extends": "Thing",
        "properties": {
            "about": {"expectedTypes": ["Thing"]},
            "author": {"expectedTypes": ["Person", "Organization"]},
            "datePublished": {"expectedTypes": ["Date"]},
            "interactionCount": {"expectedTypes": ["Text"]},
        },
    },
    "Movie": {
        "extends": "CreativeWork",
        "properties": {
            "director": {"expectedTypes": ["Person"]},
            "duration": {"expectedTypes": ["Duration"]},
        },
    },
    "Person": {
        "extends": "Thing",
        "properties": {
            "birthDate": {"expectedTypes": ["Date"]},
            "jobTitle": {"expectedTypes": ["Text"]},
            "worksFor": {"expectedTypes": ["Organization"]},
        },
    },
    "Organization": {
        "extends": "Thing",
        "properties": {
            "foundingDate": {"expectedTypes": ["Date"]},
            "founder": {"expectedTypes": ["Person"]},
            "legalName": {"expectedTypes": ["Text"]},
        },
    },
    "Duration": {"extends": "Thing", "properties": {}},
}


@pytest.fixture(autouse=True)
def fresh_vocabulary_cache():
    """Every test starts and ends without a cached process-wide vocabulary."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def vocabulary() -> VocabularyGraph:
    return VocabularyGraph.from_dict(SYNTHETIC_TYPES)


@pytest.fixture
def microdata(vocabulary) -> StructuredData:
    """Microdata renderer starting at Thing."""
    return create_renderer("microdata", vocabulary=vocabulary)


@pytest.fixture
def rdfa(vocabulary) -> StructuredData:
    """RDFa renderer starting at Thing."""
    return create_renderer("rdfa", vocabulary=vocabulary)
