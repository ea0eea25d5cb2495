"""
Vocabulary module for the annotation engine.

- registry: process-wide schema.org Type graph and inheritance-aware lookups
- schemas: pydantic models for vocabulary data file entries
"""

from .registry import (
    ExpectedDisplay,
    VocabularyGraph,
    clear_cache,
    load_vocabulary,
    read_vocabulary,
)
from .schemas import PropertySchema, TypeSchema

__all__ = [
    "ExpectedDisplay",
    "PropertySchema",
    "TypeSchema",
    "VocabularyGraph",
    "clear_cache",
    "load_vocabulary",
    "read_vocabulary",
]
