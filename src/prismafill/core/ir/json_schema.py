"""
Generated JSON Schema documents.

One :class:`JsonSchema` is derived per model. It is written to disk by the
``convert`` command and drives the defaults applied by the backfill engine.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JsonSchemaProperty(BaseModel):
    """
    A single property descriptor.

    Attributes:
        type: One of string, number, boolean, object, array
        default: Default literal, ``None`` when the field has none
        items: Element descriptor for array properties
        format: Format hint (``date-time`` for DateTime fields)
        enum: Allowed values for enum-typed fields
    """

    type: str
    default: Any = None
    items: JsonSchemaProperty | None = None
    format: str | None = None
    enum: list[str] | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize, leaving out unset keys. Falsy defaults are kept."""
        data: dict[str, Any] = {"type": self.type}
        if self.items is not None:
            data["items"] = self.items.to_dict()
        if self.has_default:
            data["default"] = self.default
        if self.format is not None:
            data["format"] = self.format
        if self.enum is not None:
            data["enum"] = list(self.enum)
        return data


class JsonSchema(BaseModel):
    """
    Object schema for one model.

    Attributes:
        type: Always ``object``
        properties: Field name to descriptor, in field declaration order
        required: Required field names, in field declaration order
    """

    type: str = "object"
    properties: dict[str, JsonSchemaProperty] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def fields_with_defaults(self) -> dict[str, Any]:
        """Map of field name to default for every property that has one."""
        return {
            name: prop.default for name, prop in self.properties.items() if prop.has_default
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "properties": {name: prop.to_dict() for name, prop in self.properties.items()},
            "required": list(self.required),
        }

