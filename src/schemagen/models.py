from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Number = int | float


class SchemaNode(BaseModel):
    """One JSON Schema document or sub-schema.

    Only the keywords the generator reads are declared; anything else is kept
    as an extra attribute. ``properties`` keeps the declaration order of the
    source document.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    type: str | list[str] | None = None
    format: str | None = None
    ref: str | None = Field(default=None, alias="$ref")
    items: "SchemaNode | list[SchemaNode] | None" = None
    properties: dict[str, "SchemaNode"] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    definitions: dict[str, "SchemaNode"] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("definitions", "$defs"),
    )
    description: str | None = None
    enum: list[Any] | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    minimum: Number | None = None
    maximum: Number | None = None
    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")

    # Keywords whose value has an unexpected JSON type (draft-03 `"required": true`
    # inside a property, `"maxLength": "10"`, ...) are read as absent.

    @field_validator("properties", "definitions", mode="before")
    @classmethod
    def _subschema_map(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict):
            return {}
        # `true` / `false` are valid sub-schemas; neither carries type information.
        return {key: sub if isinstance(sub, dict) else {} for key, sub in value.items()}

    @field_validator("items", mode="before")
    @classmethod
    def _items_schema(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item if isinstance(item, dict) else {} for item in value]
        return value if isinstance(value, dict) else None

    @field_validator("type", mode="before")
    @classmethod
    def _type_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return value
        return None

    @field_validator("format", "ref", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("required", mode="before")
    @classmethod
    def _required_names(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [name for name in value if isinstance(name, str)]

    @field_validator("enum", mode="before")
    @classmethod
    def _enum_values(cls, value: Any) -> list[Any] | None:
        return value if isinstance(value, list) else None

    @field_validator("min_length", "max_length", "min_items", "max_items", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int | None:
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        return None

    @field_validator("minimum", "maximum", mode="before")
    @classmethod
    def _bound(cls, value: Any) -> Number | None:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return value
        return None


SchemaNode.model_rebuild()  # necessary for recursive types


class SchemaDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    text: str
    root: SchemaNode


class FieldConstraint(BaseModel):
    """A validation bound pair; ``length`` and ``items`` bound sizes, ``range`` bounds values."""

    kind: Literal["length", "items", "range"]
    lower: Number | None = None
    upper: Number | None = None


class FieldInfo(BaseModel):
    name: str
    original_name: str
    type_name: str
    is_optional: bool
    needs_validation: bool
    nested_validation: bool = False
    description: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    minimum: Number | None = None
    maximum: Number | None = None
    min_items: int | None = None
    max_items: int | None = None
    constraint: FieldConstraint | None = None

    @property
    def alias(self) -> str | None:
        """The wire key, when camel-casing ``name`` does not reproduce it."""
        if to_camel(self.name) == self.original_name:
            return None
        return self.original_name


class StructInfo(BaseModel):
    name: str
    fields: list[FieldInfo] = Field(default_factory=list)
    imports: set[str] = Field(default_factory=set)

    @property
    def needs_nested_validation(self) -> bool:
        return any(field.nested_validation for field in self.fields)


class MessageKind(str, Enum):
    REQUEST = "request"
    RESPONSE = "response"
    STANDALONE = "standalone"


class MessagePair(BaseModel):
    base_name: str
    request: StructInfo | None = None
    response: StructInfo | None = None
    standalone: StructInfo | None = None
    combined_imports: set[str] = Field(default_factory=set)

    def fill(self, kind: MessageKind, struct: StructInfo) -> StructInfo | None:
        """Put *struct* in the slot for *kind* and return the struct it replaced."""
        slot = kind.value
        previous: StructInfo | None = getattr(self, slot)
        setattr(self, slot, struct)
        self.combined_imports |= struct.imports
        return previous

    @property
    def is_standalone(self) -> bool:
        return self.standalone is not None

    @property
    def is_complete(self) -> bool:
        has_half = self.request is not None or self.response is not None
        if self.standalone is not None:
            return not has_half
        return self.request is not None and self.response is not None

    @property
    def structs(self) -> list[StructInfo]:
        return [s for s in (self.request, self.response, self.standalone) if s is not None]


class ProcessorStats(BaseModel):
    schema_files: int = 0
    total_pairs: int = 0
    complete_pairs: int = 0
    incomplete_pairs: int = 0
    standalone_messages: int = 0
