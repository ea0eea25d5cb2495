"""
Structured data renderer for Microdata and RDFa Lite 1.1 semantics.

A renderer holds the current schema.org Type of the page region being
annotated. Each annotation is a short fluent sequence that ends in display():

    sd = create_renderer("microdata", "Movie")
    sd.property("name").content("Avatar").display()
    # <span itemprop='name'>Avatar</span>

display() decides between a plain property, a nested scope and a metadata
tag from the Property's expected Types, then discards the annotation state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..constants import ROOT_TYPE
from ..vocabulary import ExpectedDisplay, VocabularyGraph, load_vocabulary
from .dialects import Dialect, MicrodataDialect, RDFaDialect, get_dialect
from .sanitize import sanitize_property, sanitize_type

logger = logging.getLogger(__name__)


class DisplayMode(str, Enum):
    """Explicit display requested by the caller."""

    INLINE = "inline"  # attribute-only property marker
    SPAN = "span"
    DIV = "div"
    META = "meta"


@dataclass
class RenderState:
    """Per-annotation values, rebuilt after every display() call."""

    property: Optional[str] = None
    content: Optional[str] = None
    machine_content: Optional[str] = None
    fallback_type: Optional[str] = None
    fallback_property: Optional[str] = None


class StructuredData:
    """
    Dialect-independent renderer for schema.org annotations.

    Type and enabled flag persist across annotations; Property, content and
    fallbacks live in a RenderState that display() replaces with an empty one
    even when rendering raises.
    """

    def __init__(
        self,
        type_name: str = "",
        enabled: bool = True,
        dialect: Optional[Dialect] = None,
        vocabulary: Optional[VocabularyGraph] = None,
    ):
        """
        Initialize the renderer and set up the starting Type.

        Args:
            type_name: Starting Type, falls back to 'Thing'
            enabled: When False the renderer only passes content through
            dialect: Markup dialect, defaults to Microdata
            vocabulary: Type graph, defaults to the process-wide vocabulary
        """
        self.dialect = dialect or MicrodataDialect()
        self.vocabulary = vocabulary if vocabulary is not None else load_vocabulary()
        self._state = RenderState()
        self._type = ROOT_TYPE
        self._enabled = bool(enabled)

        if self._enabled:
            self.set_type(type_name or ROOT_TYPE)

    # ------------------------------------------------------------------
    # Output switch
    # ------------------------------------------------------------------

    def enable(self, flag: bool = True) -> "StructuredData":
        self._enabled = bool(flag)
        return self

    def is_enabled(self) -> bool:
        return self._enabled

    def get_semantic(self) -> str:
        return self.dialect.name

    # ------------------------------------------------------------------
    # Annotation setup
    # ------------------------------------------------------------------

    def set_type(self, type_name: str) -> "StructuredData":
        """Set the current Type, falling back to 'Thing' when it is unknown."""
        if not self._enabled:
            return self

        self._type = self._resolve_type(type_name)
        return self

    def get_type(self) -> str:
        return self._type

    def property(self, property_name: str) -> "StructuredData":
        """Set the Property if the current Type (or an ancestor) declares it."""
        if not self._enabled:
            return self

        property_name = sanitize_property(property_name)

        if self.vocabulary.is_property_in_type(self._type, property_name):
            self._state.property = property_name
        else:
            logger.debug(f"Property '{property_name}' not available in type {self._type}")

        return self

    def get_property(self) -> Optional[str]:
        return self._state.property

    def content(self, content, machine_content=None) -> "StructuredData":
        """Set the human-readable content and, optionally, the machine value."""
        self._state.content = content
        self._state.machine_content = machine_content
        return self

    def get_content(self):
        return self._state.content

    def get_machine_content(self):
        return self._state.machine_content

    def fallback(self, type_name: str, property_name: str) -> "StructuredData":
        """Set a secondary Type/Property used when the primary Property is invalid."""
        if not self._enabled:
            return self

        self._state.fallback_type = self._resolve_type(type_name)

        property_name = sanitize_property(property_name)
        if self.vocabulary.is_property_in_type(self._state.fallback_type, property_name):
            self._state.fallback_property = property_name
        else:
            self._state.fallback_property = None

        return self

    def get_fallback_type(self) -> Optional[str]:
        return self._state.fallback_type

    def get_fallback_property(self) -> Optional[str]:
        return self._state.fallback_property

    def _resolve_type(self, type_name: str) -> str:
        resolved = sanitize_type(type_name)
        if not self.vocabulary.is_type_available(resolved):
            logger.debug(f"Unknown type '{resolved}', using {ROOT_TYPE}")
            return ROOT_TYPE
        return resolved

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def display(self, mode: Union[DisplayMode, str, None] = None, suppress_when_disabled: bool = False) -> str:
        """
        Render the current annotation and reset it for the next use.

        Args:
            mode: 'inline', 'span', 'div' or 'meta'; None picks the display
                from the Property's expected Types
            suppress_when_disabled: Return '' instead of the content when
                the renderer is disabled

        Returns:
            Markup fragment
        """
        try:
            return self._render(_coerce_mode(mode), suppress_when_disabled)
        finally:
            self._state = RenderState()

    def display_scope(self) -> str:
        """Return the scope opener for the current Type."""
        if not self._enabled:
            return ""

        return self.dialect.html_scope(self._type)

    def _render(self, mode: Optional[DisplayMode], suppress_when_disabled: bool) -> str:
        state = self._state
        html = state.content if state.content is not None and not suppress_when_disabled else ""

        if not self._enabled:
            return html

        if state.property:
            if mode is not None:
                return self._render_explicit(mode, html, state.property)
            return self._render_auto(html)

        if state.fallback_property:
            if mode is not None:
                return self._render_explicit(mode, html, state.fallback_property, state.fallback_type)
            return self._render_fallback_auto()

        if state.fallback_type is not None:
            return self.dialect.html_scope(state.fallback_type)

        return html

    def _render_explicit(self, mode: DisplayMode, html, property_name: str, type_name: Optional[str] = None) -> str:
        dialect = self.dialect
        machine = self._state.machine_content

        if mode is DisplayMode.SPAN:
            return dialect.html_span(html, property_name, type_name or "")
        if mode is DisplayMode.DIV:
            return dialect.html_div(html, property_name, type_name or "")
        if mode is DisplayMode.META:
            return dialect.html_meta(machine if machine is not None else html, property_name, type_name or "")

        # inline
        if type_name:
            return f"{dialect.html_scope(type_name)} {dialect.html_property(property_name)}"
        return dialect.html_property(property_name)

    def _render_auto(self, html) -> str:
        state = self._state
        dialect = self.dialect
        expected_display = self.vocabulary.get_expected_display(self._type, state.property)

        if expected_display is ExpectedDisplay.NESTED:
            return self._render_nested(html)

        if expected_display is ExpectedDisplay.META:
            if state.content is None:
                return dialect.html_property(state.property)
            value = state.machine_content if state.machine_content is not None else state.content
            return f"{dialect.html_meta(value, state.property)}{state.content}"

        if state.content is None:
            return dialect.html_property(state.property)
        return dialect.html_span(state.content, state.property)

    def _render_nested(self, html) -> str:
        state = self._state
        dialect = self.dialect
        expected_types = self.vocabulary.get_expected_types(self._type, state.property)
        nested_property = ""

        # An explicit fallback Type wins over the vocabulary's first guess
        if state.fallback_type in expected_types:
            nested_type = state.fallback_type
            if state.fallback_property:
                nested_property = state.fallback_property
        else:
            nested_type = expected_types[0]

        if state.content is not None:
            if nested_property:
                html = dialect.html_span(state.content, nested_property)
            return dialect.html_span(html, state.property, nested_type, invert=True)

        # Open the nested scope; the surrounding template closes it
        html = f"{dialect.html_property(state.property)} {dialect.html_scope(nested_type)}"
        if nested_property:
            html += f" {dialect.html_property(nested_property)}"
        return html

    def _render_fallback_auto(self) -> str:
        state = self._state
        dialect = self.dialect
        type_name, property_name = state.fallback_type, state.fallback_property
        expected_display = self.vocabulary.get_expected_display(type_name, property_name)

        if state.content is None:
            return f"{dialect.html_scope(type_name)} {dialect.html_property(property_name)}"

        if expected_display is ExpectedDisplay.META:
            value = state.machine_content if state.machine_content is not None else state.content
            return dialect.html_meta(value, property_name, type_name)

        # Fallbacks are already one level deep, so nested expected Types render as normal
        return dialect.html_span(dialect.html_span(state.content, property_name), "", type_name)

    # ------------------------------------------------------------------
    # Vocabulary helpers
    # ------------------------------------------------------------------

    @staticmethod
    def sanitize_type(type_name: str) -> str:
        return sanitize_type(type_name)

    @staticmethod
    def sanitize_property(property_name: str) -> str:
        return sanitize_property(property_name)

    def get_types(self) -> dict:
        return self.vocabulary.get_types()

    def get_available_types(self) -> list[str]:
        return self.vocabulary.get_available_types()


def _coerce_mode(mode: Union[DisplayMode, str, None]) -> Optional[DisplayMode]:
    """Map a caller-supplied mode to a DisplayMode; unknown names mean inline."""
    if not mode:
        return None
    if isinstance(mode, DisplayMode):
        return mode
    try:
        return DisplayMode(str(mode).strip().lower())
    except ValueError:
        return DisplayMode.INLINE


def create_renderer(
    semantic: str,
    type_name: str = "",
    enabled: bool = True,
    vocabulary: Optional[VocabularyGraph] = None,
) -> StructuredData:
    """
    Create a renderer for the given semantic.

    Raises:
        ValueError: If the semantic is neither 'microdata' nor 'rdfa'
    """
    return StructuredData(type_name, enabled=enabled, dialect=get_dialect(semantic), vocabulary=vocabulary)


class Microdata(StructuredData):
    """StructuredData with the Microdata dialect."""

    def __init__(self, type_name: str = "", enabled: bool = True, vocabulary: Optional[VocabularyGraph] = None):
        super().__init__(type_name, enabled=enabled, dialect=MicrodataDialect(), vocabulary=vocabulary)


class RDFa(StructuredData):
    """StructuredData with the RDFa Lite 1.1 dialect."""

    def __init__(self, type_name: str = "", enabled: bool = True, vocabulary: Optional[VocabularyGraph] = None):
        super().__init__(type_name, enabled=enabled, dialect=RDFaDialect(), vocabulary=vocabulary)
