"""
Renderers module for Microdata and RDFa Lite output.

- base: StructuredData decision procedure shared by both dialects
- dialects: the markup primitives that differ between Microdata and RDFa
- sanitize: Type/Property name normalization
"""

from .base import DisplayMode, Microdata, RDFa, RenderState, StructuredData, create_renderer
from .dialects import DIALECTS, Dialect, MicrodataDialect, RDFaDialect, get_dialect
from .sanitize import sanitize_property, sanitize_type

__all__ = [
    "DIALECTS",
    "Dialect",
    "DisplayMode",
    "Microdata",
    "MicrodataDialect",
    "RDFa",
    "RDFaDialect",
    "RenderState",
    "StructuredData",
    "create_renderer",
    "get_dialect",
    "sanitize_property",
    "sanitize_type",
]
