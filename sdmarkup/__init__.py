"""
sdmarkup - convert data-* directives into Microdata or RDFa Lite annotations.

Usage:
    from sdmarkup import MarkupParser

    parser = MarkupParser("microdata")
    parser.parse('<div data-sd="Movie"><h1 data-sd="name">Avatar</h1></div>')
    # <div itemscope itemtype='https://schema.org/Movie'><h1 itemprop='name'>Avatar</h1></div>
"""

from .parsers import AnnotationPlanner, Directive, MarkupParser, parse_param, parse_params
from .renderers import DisplayMode, StructuredData, create_renderer
from .vocabulary import ExpectedDisplay, VocabularyGraph, load_vocabulary

__version__ = "1.0.0"

__all__ = [
    "AnnotationPlanner",
    "Directive",
    "DisplayMode",
    "ExpectedDisplay",
    "MarkupParser",
    "StructuredData",
    "VocabularyGraph",
    "create_renderer",
    "load_vocabulary",
    "parse_param",
    "parse_params",
]
