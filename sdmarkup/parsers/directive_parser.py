"""
Directive parser for data-* annotation attributes.

A directive is a whitespace-separated list of params. Each param has up to
three dot-separated segments; an uppercase first letter marks a Type, a
lowercase one a Property:

    Type                        -> enter a new scope
    Type.property               -> specialized fallback for Type
    Type.property.ExpectedType  -> ... and open ExpectedType inside it
    property                    -> global fallback
    property.ExpectedType       -> ... and open ExpectedType inside it

Example:
    parse_params("Movie director.Person Book.author")
    # Directive(set_type="Movie",
    #           specialized_fallbacks={"Book": ("author", None)},
    #           global_fallbacks={"director": "Person"})
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from ..constants import MAX_PARAM_SEGMENTS

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class ParsedParam:
    """A single param of a directive."""

    type: Optional[str] = None
    property: Optional[str] = None
    expected_type: Optional[str] = None


@dataclass
class Directive:
    """Parsed form of a data-* attribute value."""

    set_type: Optional[str] = None
    # Type -> (property, expected Type); first param per Type wins
    specialized_fallbacks: dict[str, tuple[str, Optional[str]]] = field(default_factory=dict)
    # property -> expected Type, in first-seen order
    global_fallbacks: dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def has_fallbacks(self) -> bool:
        return bool(self.specialized_fallbacks or self.global_fallbacks)


def _is_type_segment(segment: str) -> bool:
    return bool(segment) and segment[0].isupper()


def _is_property_segment(segment: str) -> bool:
    return bool(segment) and segment[0].islower()


def parse_param(token: str) -> ParsedParam:
    """
    Parse one 'Type.property.ExpectedType' style param.

    Args:
        token: A single param, surrounding whitespace is ignored

    Returns:
        ParsedParam with the recognised segments, all None when empty
    """
    params = ParsedParam()
    segments = str(token or "").strip().split(".")[:MAX_PARAM_SEGMENTS]
    segments += [""] * (MAX_PARAM_SEGMENTS - len(segments))
    first, second, third = segments

    if not first:
        return params

    if _is_type_segment(first):
        params.type = first
        if _is_property_segment(second):
            params.property = second
            if _is_type_segment(third):
                params.expected_type = third
    else:
        params.property = first
        if _is_type_segment(second):
            params.expected_type = second

    return params


def parse_params(text: str) -> Directive:
    """
    Parse a full directive string into a Directive.

    Args:
        text: Attribute value, e.g. 'Type Type.property.EType gProperty.EType'

    Returns:
        Directive (empty when the text holds no params)
    """
    directive = Directive()
    text = _WHITESPACE_RE.sub(" ", str(text or "")).strip()

    for token in text.split(" "):
        param = parse_param(token)

        if param.type and not param.property:
            if directive.set_type is None:
                directive.set_type = param.type

        elif param.property and not param.type:
            directive.global_fallbacks[param.property] = param.expected_type

        elif param.type and param.property:
            directive.specialized_fallbacks.setdefault(param.type, (param.property, param.expected_type))

    return directive
