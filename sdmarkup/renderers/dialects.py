"""
Markup dialects for semantic annotations.

A dialect knows how to spell a property marker, a scope opener and the three
wrapping tags (span, div, meta). Everything else about deciding *what* to
render lives in StructuredData and is shared by both dialects:

- Microdata: itemprop / itemscope itemtype
- RDFa Lite 1.1: property / vocab typeof
"""

from abc import ABC, abstractmethod
from html import escape

from ..constants import SCHEMA_ORG_URL
from .sanitize import sanitize_type


class Dialect(ABC):
    """
    Base class for markup dialects.

    Subclasses must implement:
    - html_property(name) -> attribute marking a property
    - html_scope(type) -> attributes opening a typed scope

    The span/div/meta wrappers are built from those two and may be
    overridden where a dialect needs a different tag shape.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical semantic name ('microdata' or 'rdfa')."""
        ...

    @abstractmethod
    def html_property(self, property_name: str) -> str:
        ...

    @abstractmethod
    def html_scope(self, type_name: str) -> str:
        ...

    def html_span(self, content, property_name: str = "", type_name: str = "", invert: bool = False) -> str:
        return self._html_tag("span", content, property_name, type_name, invert)

    def html_div(self, content, property_name: str = "", type_name: str = "", invert: bool = False) -> str:
        return self._html_tag("div", content, property_name, type_name, invert)

    def html_meta(self, content, property_name: str, type_name: str = "", invert: bool = False) -> str:
        return self._html_tag("meta", content, property_name, type_name, invert)

    def _html_tag(self, tag: str, content, property_name: str, type_name: str, invert: bool) -> str:
        prop = self.html_property(property_name) if property_name else ""
        scope = self.html_scope(type_name) if type_name else ""

        # A nested property precedes its own scope, a fallback scope precedes its property
        parts = (prop, scope) if invert else (scope, prop)
        attrs = " ".join(p for p in parts if p)
        attrs = f" {attrs}" if attrs else ""

        if tag == "meta":
            return f"<meta{attrs} content='{escape(str(content), quote=True)}'/>"

        return f"<{tag}{attrs}>{content}</{tag}>"


class MicrodataDialect(Dialect):
    """itemprop='name' / itemscope itemtype='https://schema.org/Movie'"""

    @property
    def name(self) -> str:
        return "microdata"

    def html_property(self, property_name: str) -> str:
        return f"itemprop='{property_name}'"

    def html_scope(self, type_name: str) -> str:
        return f"itemscope itemtype='{SCHEMA_ORG_URL}/{sanitize_type(type_name)}'"


class RDFaDialect(Dialect):
    """property='name' / vocab='https://schema.org' typeof='Movie'"""

    @property
    def name(self) -> str:
        return "rdfa"

    def html_property(self, property_name: str) -> str:
        return f"property='{property_name}'"

    def html_scope(self, type_name: str) -> str:
        return f"vocab='{SCHEMA_ORG_URL}' typeof='{sanitize_type(type_name)}'"


DIALECTS = {
    "microdata": MicrodataDialect,
    "rdfa": RDFaDialect,
}


def get_dialect(semantic: str) -> Dialect:
    """
    Get a dialect instance by semantic name.

    Args:
        semantic: 'microdata' or 'rdfa' (case-insensitive)

    Raises:
        ValueError: If no dialect exists for the name
    """
    key = str(semantic or "").strip().lower()
    dialect_cls = DIALECTS.get(key)
    if dialect_cls is None:
        raise ValueError(f"There is no {key or repr(semantic)} library available, expected one of {sorted(DIALECTS)}")
    return dialect_cls()
