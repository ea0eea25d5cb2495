"""
HTML rewriter: replaces data-* directives with Microdata or RDFa semantics.

Given the default suffix 'sd':

    <div data-sd="Movie"><h1 data-sd="name">Avatar</h1></div>

becomes

    <div itemscope itemtype='https://schema.org/Movie'><h1 itemprop='name'>Avatar</h1></div>

Only the directive attribute is replaced; the rest of the document text is
returned exactly as it came in.
"""

import logging
import re
import warnings
from typing import Iterable, Optional, Union

from bs4 import BeautifulSoup, Tag

from ..config import get_default_semantic, get_default_suffixes
from ..constants import DEFAULT_SUFFIX, ROOT_TYPE
from ..renderers import StructuredData, create_renderer
from ..vocabulary import VocabularyGraph, load_vocabulary
from .directive_parser import parse_params
from .planner import AnnotationPlanner

logger = logging.getLogger(__name__)

_TAG_NAME_RE = re.compile(r"<[^\s/>]+")
_ATTRIBUTE_RE = re.compile(r"""[\s/]*([^\s"'>/=]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s>]*))?""")


class MarkupParser:
    """
    Parses HTML and converts data-* directives into semantic annotations.

    The renderer's Type is reset to 'Thing' at the start of every parse() so
    repeated runs over the same document give the same output.
    """

    def __init__(
        self,
        semantic: Optional[str] = None,
        suffix: Union[str, Iterable[str], None] = None,
        vocabulary: Optional[VocabularyGraph] = None,
        enabled: bool = True,
    ):
        """
        Initialize the parser.

        Args:
            semantic: 'microdata' or 'rdfa', defaults to SDMARKUP_SEMANTIC
            suffix: Extra data-* suffix (or list of suffixes) besides SDMARKUP_SUFFIXES
            vocabulary: Type graph, defaults to the process-wide vocabulary
            enabled: When False directives are replaced with empty strings

        Raises:
            ValueError: If the semantic is not supported
        """
        self.vocabulary = vocabulary if vocabulary is not None else load_vocabulary()
        self.enabled = enabled
        self._suffixes: list[str] = get_default_suffixes() or [DEFAULT_SUFFIX]
        self.handler: Optional[StructuredData] = None
        self.planner: Optional[AnnotationPlanner] = None

        self.semantic(semantic if semantic is not None else get_default_semantic())

        if suffix:
            self.suffix(suffix)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def semantic(self, semantic: str) -> "MarkupParser":
        """
        Set the semantic to output.

        Raises:
            ValueError: If the semantic is neither 'microdata' nor 'rdfa'
        """
        self.handler = create_renderer(semantic, enabled=self.enabled, vocabulary=self.vocabulary)
        self.planner = AnnotationPlanner(self.handler, self.vocabulary)
        logger.debug(f"Using {self.handler.get_semantic()} semantic")
        return self

    def get_semantic(self) -> str:
        return self.handler.get_semantic()

    def get_handler(self) -> StructuredData:
        return self.handler

    def suffix(self, suffix: Union[str, Iterable[str]]) -> "MarkupParser":
        """Add one suffix or a list of suffixes to search for."""
        if isinstance(suffix, str):
            self.add_suffix(suffix)
        else:
            for value in suffix:
                self.add_suffix(value)
        return self

    def add_suffix(self, suffix: str) -> "MarkupParser":
        """Add a suffix; empty and duplicate suffixes are ignored."""
        suffix = str(suffix).strip().lower()
        if suffix and suffix not in self._suffixes:
            self._suffixes.append(suffix)
        return self

    def remove_suffix(self, suffix: str) -> "MarkupParser":
        suffix = str(suffix).strip().lower()
        if suffix in self._suffixes:
            self._suffixes.remove(suffix)
        return self

    def get_suffix(self) -> list[str]:
        return list(self._suffixes)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def _get_node_suffix(self, node: Tag) -> Optional[str]:
        """Return the first configured suffix present on the node."""
        for suffix in self._suffixes:
            if node.has_attr(f"data-{suffix}"):
                return suffix
        return None

    def parse(self, html: str) -> str:
        """
        Replace every data-* directive in the HTML with semantic annotations.

        Args:
            html: Document or fragment; malformed markup is tolerated

        Returns:
            The rewritten HTML
        """
        if not html or not self._suffixes:
            return html

        try:
            # Parser diagnostics are not the caller's concern
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                # A repeated attribute keeps its first value, as browsers do
                soup = BeautifulSoup(html, "html.parser", on_duplicate_attribute="ignore")
        except Exception as e:
            logger.warning(f"Could not parse HTML, returning it unchanged: {e}")
            return html

        nodes = soup.find_all(lambda tag: self._get_node_suffix(tag) is not None)
        if not nodes:
            return html

        self.handler.set_type(ROOT_TYPE)
        line_offsets = _line_offsets(html)
        replacements: list[tuple[int, int, str]] = []
        claimed: set[int] = set()

        for node in nodes:
            suffix = self._get_node_suffix(node)
            attribute = f"data-{suffix}"
            value = node.get(attribute) or ""
            if isinstance(value, list):
                value = " ".join(value)

            fragment = self.planner.display(parse_params(value))

            spans = _locate_node_attribute(html, line_offsets, node, attribute)
            if spans is None:
                span = _find_attribute_text(html, attribute, value, claimed)
                logger.debug(f"Falling back to text match for {attribute} [value={value!r} found={span is not None}]")
                if span is None:
                    continue
                spans = [span]

            # The first occurrence carries the directive; repeats are dropped
            claimed.add(spans[0][0])
            replacements.append((spans[0][0], spans[0][1], fragment))
            replacements.extend((start, end, "") for start, end in spans[1:])
            logger.debug(f"Annotated <{node.name}> [{attribute}={value!r} fragment={fragment!r}]")

        for start, end, fragment in sorted(replacements, reverse=True):
            html = html[:start] + fragment + html[end:]

        logger.debug(f"Rewrote {len(claimed)} directives")
        return html


def _line_offsets(source: str) -> list[int]:
    """Offsets of the first character of each line (line 1 at index 0)."""
    offsets = [0]
    offsets.extend(m.end() for m in re.finditer("\n", source))
    return offsets


def _locate_node_attribute(source: str, line_offsets: list[int], node: Tag, attribute: str) -> Optional[list[tuple[int, int]]]:
    """Find every span of the attribute inside the node's own start tag, in source order."""
    line, column = getattr(node, "sourceline", None), getattr(node, "sourcepos", None)
    if line is None or column is None or not 0 < line <= len(line_offsets):
        return None

    start = line_offsets[line - 1] + column
    match = _TAG_NAME_RE.match(source, start)
    if match is None or match.group(0)[1:].lower() != node.name.lower():
        return None

    spans = []
    pos = match.end()
    while True:
        match = _ATTRIBUTE_RE.match(source, pos)
        if match is None or match.end() == pos:
            break
        if match.group(1).lower() == attribute:
            spans.append((match.start(1), match.end()))
        pos = match.end()
    return spans or None


def _find_attribute_text(source: str, attribute: str, value: str, claimed: set[int]) -> Optional[tuple[int, int]]:
    """First unclaimed textual occurrence of attribute="value" (either quote style)."""
    pattern = re.compile(re.escape(attribute) + r"""\s*=\s*(["'])""" + re.escape(value) + r"\1", re.IGNORECASE)
    for match in pattern.finditer(source):
        if match.start() not in claimed:
            return match.start(), match.end()
    return None
