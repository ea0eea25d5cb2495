"""Name normalization for schema.org Types and Properties."""

from typing import Optional


def sanitize_type(type_name: Optional[str]) -> str:
    """Trim and uppercase the first character: ' movie ' -> 'Movie'."""
    type_name = (type_name or "").strip()
    return type_name[:1].upper() + type_name[1:]


def sanitize_property(property_name: Optional[str]) -> str:
    """Trim and lowercase the first character: ' Name' -> 'name'."""
    property_name = (property_name or "").strip()
    return property_name[:1].lower() + property_name[1:]
