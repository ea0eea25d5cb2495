"""
Parsers module for data-* annotation directives.

This module contains:
- directive_parser: the 'Type.property.ExpectedType' directive grammar
- planner: Directive -> markup through a renderer
- html_rewriter: MarkupParser, document scan and substitution
"""

from .directive_parser import Directive, ParsedParam, parse_param, parse_params
from .html_rewriter import MarkupParser
from .planner import AnnotationPlanner

__all__ = [
    "AnnotationPlanner",
    "Directive",
    "MarkupParser",
    "ParsedParam",
    "parse_param",
    "parse_params",
]
