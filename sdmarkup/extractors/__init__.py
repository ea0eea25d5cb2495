"""
Extractors module for reading annotations back out of HTML.

- structured_data: Microdata and RDFa extraction via extruct
"""

from .structured_data import ExtractedAnnotations, StructuredDataExtractor, collect_types

__all__ = [
    "ExtractedAnnotations",
    "StructuredDataExtractor",
    "collect_types",
]
