"""
Field definitions for the prismafill IR.

A field is one declaration line inside a ``model`` block, e.g.::

    email     String   @unique
    tags      String[]
    role      Role     @default(USER)
    createdAt DateTime @default(now())
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FieldSpec(BaseModel):
    """
    Specification for a single field of a model.

    Attributes:
        name: Field identifier, unique within its model
        type: Declared type name without array/optional markers (a primitive
            such as ``String`` or the name of an enum or another model)
        is_optional: Whether the line carries a ``?`` marker
        is_array: Whether the type carries a ``[]`` suffix
        default: Resolved ``@default(...)`` literal; ``None`` when absent or
            when the default is computed by the database (``now()``, ``auto()``)
        is_id: Whether the field carries an ``@id`` attribute
        is_unique: Whether the field carries an ``@unique`` attribute
        attributes: Raw ``@...`` tokens in source order
    """

    name: str
    type: str
    is_optional: bool = False
    is_array: bool = False
    default: Any = None
    is_id: bool = False
    is_unique: bool = False
    attributes: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def has_default(self) -> bool:
        """Check if a literal default was resolved."""
        return self.default is not None

    @property
    def is_required(self) -> bool:
        """Required fields are non-optional, default-free and scalar."""
        return not self.is_optional and not self.has_default and not self.is_array
