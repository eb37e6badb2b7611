"""
Model, enum and whole-schema types for the prismafill IR.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .fields import FieldSpec


class EnumSpec(BaseModel):
    """
    An ``enum`` block.

    Attributes:
        name: Enum identifier (e.g. Role)
        values: Value labels in declaration order
    """

    name: str
    values: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ModelSpec(BaseModel):
    """
    A ``model`` block.

    Attributes:
        name: Model name (PascalCase)
        fields: Field specifications in declaration order
        map_name: Collection name from a ``@@map("...")`` directive, if any
    """

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)
    map_name: str | None = None

    model_config = ConfigDict(frozen=True)

    def get_field(self, name: str) -> FieldSpec | None:
        """Get field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def id_fields(self) -> list[FieldSpec]:
        """Fields marked with ``@id``."""
        return [f for f in self.fields if f.is_id]

    @property
    def storage_name(self) -> str:
        """Explicit collection name, falling back to the model name."""
        return self.map_name or self.name


class PrismaSchema(BaseModel):
    """
    All models and enums parsed from one (possibly concatenated) schema text.

    References between models and enums are by name; lookups go through
    :meth:`get_enum` / :meth:`get_model`.
    """

    models: list[ModelSpec] = Field(default_factory=list)
    enums: list[EnumSpec] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_model(self, name: str) -> ModelSpec | None:
        """Get model by name."""
        for model in self.models:
            if model.name == name:
                return model
        return None

    def get_enum(self, name: str) -> EnumSpec | None:
        """Get enum by name."""
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    def is_model(self, type_name: str) -> bool:
        return self.get_model(type_name) is not None

    def is_enum(self, type_name: str) -> bool:
        return self.get_enum(type_name) is not None
