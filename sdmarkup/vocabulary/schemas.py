"""
Pydantic models for vocabulary data file entries.

Each entry in the data file describes one schema.org Type:

    Movie:
      extends: CreativeWork
      properties:
        director:
          expectedTypes: [Person]
"""

from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PropertySchema(BaseModel):
    """Expected value types of a single property, primary type first."""

    expected_types: tuple[str, ...] = Field(default=(), alias="expectedTypes")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("expected_types", mode="before")
    @classmethod
    def missing_types_is_empty(cls, v):
        return v or ()

    @property
    def primary_type(self) -> Optional[str]:
        return self.expected_types[0] if self.expected_types else None


class TypeSchema(BaseModel):
    """A vocabulary Type with its parent reference and own properties."""

    name: str
    extends: Optional[str] = None
    properties: Mapping[str, PropertySchema] = Field(default_factory=dict, validate_default=True)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "Movie",
                "extends": "CreativeWork",
                "properties": {
                    "director": {"expectedTypes": ["Person"]},
                    "duration": {"expectedTypes": ["Duration"]},
                },
            }
        },
    )

    @field_validator("extends", mode="before")
    @classmethod
    def empty_extends_is_root(cls, v):
        # Data files write the root type as `extends: ""` or `extends: null`
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator("properties", mode="before")
    @classmethod
    def missing_properties_is_empty(cls, v):
        if not v:
            return {}
        if not isinstance(v, Mapping):
            return v
        # `director:` with no body declares a property without expected types
        return {name: (spec if spec is not None else {}) for name, spec in v.items()}

    @field_validator("properties")
    @classmethod
    def properties_read_only(cls, v):
        return MappingProxyType(dict(v))
