"""Vocabulary Registry: schema.org Types, Properties and inheritance.

Loads the static Type graph once per process and answers lookups against it.
Lookups never raise for unknown Types or Properties; they return False or an
empty list instead.

Usage:
    from sdmarkup.vocabulary import load_vocabulary

    vocabulary = load_vocabulary()
    vocabulary.is_property_in_type("Movie", "name")  # True, inherited from Thing
    vocabulary.get_expected_types("Movie", "director")  # ["Person"]
"""

import logging
import threading
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..config import get_vocabulary_path
from ..constants import META_PROPERTIES, META_TYPES, NORMAL_TYPES
from .schemas import PropertySchema, TypeSchema

logger = logging.getLogger(__name__)


class ExpectedDisplay(str, Enum):
    """How a Property should be rendered when no display mode is given.

    normal -> itemprop="name"
    nested -> itemprop="director" itemscope itemtype="https://schema.org/Person"
    meta   -> <meta itemprop="datePublished" content="1991-05-01">
    """

    NORMAL = "normal"
    NESTED = "nested"
    META = "meta"


class VocabularyGraph:
    """Immutable Type graph with single-inheritance Property lookup."""

    def __init__(self, types: Mapping[str, TypeSchema]):
        self._types = MappingProxyType(dict(types))
        self._check_inheritance()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "VocabularyGraph":
        """Build a graph from the data file mapping (TypeName -> entry)."""
        if not isinstance(raw, Mapping):
            raise ValueError(f"Vocabulary data must be a mapping of types, got {type(raw).__name__}")

        types: dict[str, TypeSchema] = {}
        for name, data in raw.items():
            data = data or {}
            if not isinstance(data, Mapping):
                raise ValueError(f"Vocabulary entry for type {name} must be a mapping")
            try:
                types[name] = TypeSchema(
                    name=name,
                    extends=data.get("extends"),
                    properties=data.get("properties"),
                )
            except ValidationError as e:
                raise ValueError(f"Invalid vocabulary entry for type {name}: {e}") from e

        return cls(types)

    def _check_inheritance(self) -> None:
        """Reject dangling parents and cycles in the extends chain."""
        for name, schema in self._types.items():
            seen = {name}
            parent = schema.extends
            while parent is not None:
                if parent not in self._types:
                    raise ValueError(f"Type {name} extends unknown type {parent}")
                if parent in seen:
                    raise ValueError(f"Inheritance cycle detected at type {name}")
                seen.add(parent)
                parent = self._types[parent].extends

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def is_type_available(self, type_name: Optional[str]) -> bool:
        return type_name in self._types

    def get_type_schema(self, type_name: str) -> Optional[TypeSchema]:
        return self._types.get(type_name)

    def get_ancestors(self, type_name: str) -> list[str]:
        """Return the extends chain of a Type, nearest parent first."""
        ancestors = []
        schema = self._types.get(type_name)
        while schema is not None and schema.extends is not None:
            ancestors.append(schema.extends)
            schema = self._types.get(schema.extends)
        return ancestors

    def _find_property(self, type_name: Optional[str], property_name: Optional[str]) -> Optional[PropertySchema]:
        schema = self._types.get(type_name)
        while schema is not None:
            if property_name in schema.properties:
                return schema.properties[property_name]
            schema = self._types.get(schema.extends) if schema.extends else None
        return None

    def is_property_in_type(self, type_name: Optional[str], property_name: Optional[str]) -> bool:
        """True if the Property is declared on the Type or any of its ancestors."""
        return self._find_property(type_name, property_name) is not None

    def get_expected_types(self, type_name: Optional[str], property_name: Optional[str]) -> list[str]:
        """Return the Property's expected Types, resolved through inheritance."""
        prop = self._find_property(type_name, property_name)
        return list(prop.expected_types) if prop else []

    def get_expected_display(self, type_name: str, property_name: str) -> ExpectedDisplay:
        """Classify the Property by its first expected Type."""
        expected = self.get_expected_types(type_name, property_name)
        primary = expected[0] if expected else None

        if primary in META_TYPES or property_name in META_PROPERTIES:
            return ExpectedDisplay.META

        if primary is None or primary in NORMAL_TYPES:
            return ExpectedDisplay.NORMAL

        return ExpectedDisplay.NESTED

    def get_properties(self, type_name: str) -> dict[str, list[str]]:
        """Return every Property available on a Type, own Properties winning over inherited ones."""
        resolved: dict[str, list[str]] = {}
        for name in [type_name] + self.get_ancestors(type_name):
            schema = self._types.get(name)
            if schema is None:
                continue
            for prop_name, prop in schema.properties.items():
                resolved.setdefault(prop_name, list(prop.expected_types))
        return resolved

    def get_types(self) -> dict[str, dict[str, Any]]:
        """Return the whole graph in data file shape."""
        return {
            name: {
                "extends": schema.extends,
                "properties": {
                    prop_name: {"expectedTypes": list(prop.expected_types)}
                    for prop_name, prop in schema.properties.items()
                },
            }
            for name, schema in self._types.items()
        }

    def get_available_types(self) -> list[str]:
        return sorted(self._types)


def read_vocabulary(path: Path) -> VocabularyGraph:
    """
    Read and validate a vocabulary data file.

    Args:
        path: YAML (or JSON) file mapping TypeName -> {extends, properties}

    Returns:
        VocabularyGraph

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed or describes an invalid graph
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Vocabulary data file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Vocabulary data file {path} is not valid YAML/JSON: {e}") from e
    except OSError as e:
        raise ValueError(f"Vocabulary data file {path} is unreadable: {e}") from e

    if not raw:
        raise ValueError(f"Vocabulary data file {path} is empty")

    graph = VocabularyGraph.from_dict(raw)
    logger.info(f"Loaded {len(graph)} vocabulary types from {path}")
    return graph


# Module-level cache
_vocabulary_cache: Optional[VocabularyGraph] = None
_cache_lock = threading.Lock()


def load_vocabulary(path: Optional[Path] = None) -> VocabularyGraph:
    """
    Get the process-wide vocabulary, loading it on first use.

    An explicit path bypasses the cache and always reads that file.
    """
    global _vocabulary_cache

    if path is not None:
        return read_vocabulary(path)

    if _vocabulary_cache is not None:
        return _vocabulary_cache

    with _cache_lock:
        if _vocabulary_cache is None:
            _vocabulary_cache = read_vocabulary(get_vocabulary_path())
    return _vocabulary_cache


def clear_cache():
    """Clear the vocabulary cache (useful for testing)."""
    global _vocabulary_cache
    with _cache_lock:
        _vocabulary_cache = None
