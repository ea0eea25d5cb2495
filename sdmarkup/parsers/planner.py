"""
Annotation planner: turns a Directive into markup through a renderer.

The renderer's current Type carries over between directives, which is how
nested scopes are expressed in a document:

    <div data-sd="Movie">                  -> itemscope itemtype='.../Movie'
      <span data-sd="director.Person">     -> itemprop='director' itemscope itemtype='.../Person'
        <span data-sd="name">              -> itemprop='name'  (Person.name)
"""

import logging
from typing import Optional

from ..renderers import DisplayMode, StructuredData
from ..vocabulary import VocabularyGraph
from .directive_parser import Directive

logger = logging.getLogger(__name__)


class AnnotationPlanner:
    """Picks the directive branch that applies to the renderer's current Type."""

    def __init__(self, renderer: StructuredData, vocabulary: Optional[VocabularyGraph] = None):
        self.renderer = renderer
        self.vocabulary = vocabulary if vocabulary is not None else renderer.vocabulary

    def display(self, directive: Directive) -> str:
        """
        Generate the Microdata or RDFa fragment for a directive.

        Args:
            directive: Parsed directive

        Returns:
            Markup fragment, '' when no param applies to the current Type
        """
        renderer = self.renderer

        if directive.set_type:
            renderer.set_type(directive.set_type)

            if not directive.has_fallbacks:
                return renderer.display_scope()

        current_type = renderer.get_type()

        specialized = directive.specialized_fallbacks.get(current_type)
        if specialized is not None:
            property_name, expected_type = specialized
            if self.vocabulary.is_property_in_type(current_type, property_name):
                return self._display_property(current_type, property_name, expected_type)
            logger.debug(f"Specialized property '{property_name}' not in {current_type}, trying global fallbacks")

        for property_name, expected_type in directive.global_fallbacks.items():
            if self.vocabulary.is_property_in_type(current_type, property_name):
                return self._display_property(current_type, property_name, expected_type)

        return ""

    def _display_property(self, current_type: str, property_name: str, expected_type: Optional[str]) -> str:
        renderer = self.renderer
        html = renderer.property(property_name).display(DisplayMode.INLINE)

        if expected_type and expected_type in self.vocabulary.get_expected_types(current_type, property_name):
            renderer.set_type(expected_type)
            html += f" {renderer.display_scope()}"

        return html
