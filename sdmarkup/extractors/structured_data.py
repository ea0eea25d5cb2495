"""
Structured data extractor for Microdata and RDFa.

Reads annotations back out of HTML, typically the output of MarkupParser,
so a rewrite can be checked against what a search engine would see.
"""

import logging
from typing import Any, Iterable, Literal

from pydantic import BaseModel, Field

from ..constants import SCHEMA_ORG_URL

logger = logging.getLogger(__name__)

SUPPORTED_SYNTAXES = ("microdata", "rdfa")


class ExtractedAnnotations(BaseModel):
    """Annotations of one syntax found in a document."""

    source_type: Literal["microdata", "rdfa"]
    items: list[dict[str, Any]] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)


class StructuredDataExtractor:
    """
    Extractor for structured data using the extruct library.

    Extracts data from:
    - Microdata
    - RDFa
    """

    def extract(self, html: str, base_url: str = "", syntaxes: Iterable[str] = SUPPORTED_SYNTAXES) -> dict[str, list]:
        """
        Extract the requested syntaxes from HTML.

        Args:
            html: HTML content
            base_url: Base URL for resolving relative URLs
            syntaxes: Any of 'microdata', 'rdfa'

        Returns:
            Dict keyed by syntax, each a list of extracted items
        """
        import extruct

        syntaxes = [s for s in syntaxes if s in SUPPORTED_SYNTAXES]
        try:
            data = extruct.extract(html, base_url=base_url or None, syntaxes=syntaxes)
            return {s: data.get(s, []) for s in syntaxes}
        except Exception as e:
            logger.debug(f"extruct extraction failed: {e}")
            return {s: [] for s in syntaxes}

    def summarize(self, html: str, base_url: str = "", syntaxes: Iterable[str] = SUPPORTED_SYNTAXES) -> list[ExtractedAnnotations]:
        """Extract and attach the schema.org Type names found for each syntax."""
        results = []
        for source_type, items in self.extract(html, base_url, syntaxes).items():
            results.append(
                ExtractedAnnotations(
                    source_type=source_type,
                    items=items,
                    types=sorted(collect_types(items)),
                )
            )
        return results


def _short_type(value: str) -> str:
    prefix = f"{SCHEMA_ORG_URL}/"
    for candidate in (prefix, prefix.replace("https://", "http://")):
        if value.startswith(candidate):
            return value[len(candidate):]
    return value


def collect_types(items: Any) -> set[str]:
    """Collect schema.org Type names from nested Microdata / RDFa items."""
    found: set[str] = set()

    if isinstance(items, list):
        for item in items:
            found |= collect_types(item)
        return found

    if not isinstance(items, dict):
        return found

    for key in ("type", "@type"):
        value = items.get(key)
        if isinstance(value, str):
            found.add(_short_type(value))
        elif isinstance(value, list):
            found.update(_short_type(v) for v in value if isinstance(v, str))

    for key, value in items.items():
        if key not in ("type", "@type") and isinstance(value, (dict, list)):
            found |= collect_types(value)

    return found
