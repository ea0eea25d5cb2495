"""
Global constants for the annotation engine.

Centralizes vocabulary names and markup defaults used throughout
the package for easier maintenance.
"""

# Vocabulary
ROOT_TYPE = "Thing"  # Fallback for empty or unknown types
SCHEMA_ORG_URL = "https://schema.org"

# Expected-type classification (first expected type of a property)
META_TYPES = frozenset({"Date", "DateTime"})
META_PROPERTIES = frozenset({"interactionCount"})
NORMAL_TYPES = frozenset({"Text", "URL", "Boolean", "Number"})

# HTML rewriter
DEFAULT_SUFFIX = "sd"  # data-sd="..."
SUPPORTED_SEMANTICS = ("microdata", "rdfa")
DEFAULT_SEMANTIC = "microdata"

# Directive grammar
MAX_PARAM_SEGMENTS = 3  # Type.property.ExpectedType
