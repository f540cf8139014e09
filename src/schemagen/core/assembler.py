import logging

from schemagen.core.naming import to_identifier, unique_identifier
from schemagen.core.order import extract_field_order
from schemagen.core.resolver import INT32_MAX, INT32_MIN, ResolvedType, TypeResolver
from schemagen.models import FieldConstraint, FieldInfo, Number, SchemaDocument, SchemaNode, StructInfo

logger = logging.getLogger(__name__)

BASE_IMPORTS = frozenset(
    {
        "from pydantic import BaseModel, ConfigDict, Field",
        "from pydantic.alias_generators import to_camel",
    }
)


def clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    cleaned = description.replace("\r", "").replace("\n", " ").strip()
    return cleaned or None


def _bounded(kind: str, lower: Number | None, upper: Number | None) -> FieldConstraint | None:
    if lower is None and upper is None:
        return None
    return FieldConstraint(kind=kind, lower=lower, upper=upper)  # type: ignore[arg-type]


def _int32_range(identifier: str, schema: SchemaNode) -> FieldConstraint:
    lower, upper = schema.minimum, schema.maximum
    if lower is None and upper is None and "id" in identifier:
        # Unbounded integer identifiers are never negative.
        lower = 0
    return FieldConstraint(
        kind="range",
        lower=INT32_MIN if lower is None else max(lower, INT32_MIN),
        upper=INT32_MAX if upper is None else min(upper, INT32_MAX),
    )


def build_constraint(identifier: str, resolved: ResolvedType, schema: SchemaNode) -> FieldConstraint | None:
    """Pick the bounds that apply to a field of the resolved type."""
    if not resolved.needs_validation:
        return None
    type_name = resolved.type_name
    if type_name == "str":
        return _bounded("length", schema.min_length, schema.max_length)
    if type_name.startswith("list["):
        return _bounded("items", schema.min_items, schema.max_items)
    if type_name == "int":
        return _int32_range(identifier, schema)
    if type_name == "Decimal":
        return _bounded("range", schema.minimum, schema.maximum)
    return None


def assemble_field(
    key: str,
    schema: SchemaNode,
    is_optional: bool,
    resolver: TypeResolver,
    imports: set[str],
    identifier: str | None = None,
) -> FieldInfo:
    identifier = identifier or to_identifier(key)
    resolved = resolver.resolve(schema, imports)
    return FieldInfo(
        name=identifier,
        original_name=key,
        type_name=resolved.type_name,
        is_optional=is_optional,
        needs_validation=resolved.needs_validation,
        nested_validation=resolved.needs_validation and resolved.nested,
        description=clean_description(schema.description),
        min_length=schema.min_length,
        max_length=schema.max_length,
        minimum=schema.minimum,
        maximum=schema.maximum,
        min_items=schema.min_items,
        max_items=schema.max_items,
        constraint=build_constraint(identifier, resolved, schema),
    )


def assemble_struct(
    node: SchemaNode,
    name: str,
    resolver: TypeResolver,
    text: str | None = None,
) -> StructInfo:
    """Build the struct for *node*, keeping the field order declared in *text*.

    Without *text* (or when no order can be read from it) the order of the
    parsed ``properties`` mapping is used.
    """
    imports: set[str] = set(BASE_IMPORTS)
    order = extract_field_order(text) if text is not None else []
    if not order:
        order = list(node.properties)
    required = set(node.required)

    fields = []
    taken: set[str] = set()
    for key in order:
        if key not in node.properties:
            continue
        identifier = unique_identifier(to_identifier(key), taken)
        if identifier != to_identifier(key):
            logger.warning("%s: key %r clashes with another field; using %s", name, key, identifier)
        taken.add(identifier)
        fields.append(assemble_field(key, node.properties[key], key not in required, resolver, imports, identifier))
    return StructInfo(name=name, fields=fields, imports=imports)


def assemble_document(document: SchemaDocument, resolver: TypeResolver) -> StructInfo:
    return assemble_struct(document.root, document.name, resolver, document.text)
