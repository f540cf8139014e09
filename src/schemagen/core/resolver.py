"""Mapping of schema nodes to Python type names.

``$ref`` targets are classified by an ordered list of :class:`RefRule` entries
(first match wins) with one unconditional fallback. The rule list is plain
data, so a caller can put protocol-specific rules in front of the defaults
without touching :class:`TypeResolver`.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from schemagen.config import DEFAULT_TYPES_PACKAGE
from schemagen.models import SchemaNode

DATATYPES_MODULE = "datatypes"
ENUMERATIONS_MODULE = "enumerations"

ANY_IMPORT = "from typing import Any"
DATETIME_IMPORT = "from datetime import datetime"
DECIMAL_IMPORT = "from decimal import Decimal"
ANNOTATED_IMPORT = "from typing import Annotated"

# JSON Schema `integer` maps to a 32-bit signed integer.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT32_ITEM_TYPE = f"Annotated[int, Field(ge={INT32_MIN}, le={INT32_MAX})]"


@dataclass(frozen=True)
class ResolvedType:
    type_name: str
    needs_validation: bool
    # Values are structured data types that validate their own fields.
    nested: bool = False


@dataclass(frozen=True)
class RefResolution:
    """How a referenced definition maps to Python.

    ``type_name`` of ``None`` keeps the definition name. ``module`` is a
    sub-module of the shared types package the name is imported from.
    """

    type_name: str | None = None
    needs_validation: bool = False
    module: str | None = None
    import_line: str | None = None

    @property
    def is_structured(self) -> bool:
        return self.module is not None and self.module.split(".")[0] == DATATYPES_MODULE


@dataclass(frozen=True)
class RefRule:
    name: str
    matches: Callable[[str], bool]
    resolution: RefResolution


KNOWN_DATATYPES = frozenset(
    {
        "CustomDataType",
        "StatusInfoType",
        "IdTokenType",
        "IdTokenInfoType",
        "EVSEType",
        "TariffType",
        "OCSPRequestDataType",
    }
)

KNOWN_ENUMERATIONS = frozenset(
    {
        "GenericStatusEnumType",
        "AuthorizeCertificateStatusEnumType",
        "EnergyTransferModeEnumType",
        "ResetEnumType",
        "ResetStatusEnumType",
        "MessageTriggerEnumType",
        "TriggerMessageStatusEnumType",
    }
)

_DATATYPE = RefResolution(needs_validation=True, module=DATATYPES_MODULE)
_ENUMERATION = RefResolution(module=ENUMERATIONS_MODULE)


def _named(name: str) -> Callable[[str], bool]:
    return lambda ref_name: ref_name == name


def _suffixed(suffix: str) -> Callable[[str], bool]:
    return lambda ref_name: ref_name.endswith(suffix)


DEFAULT_REF_RULES: tuple[RefRule, ...] = (
    RefRule(
        "override:DERControlStatusEnumType",
        _named("DERControlStatusEnumType"),
        RefResolution(module=f"{ENUMERATIONS_MODULE}.der_control"),
    ),
    # Not defined in the shared datatypes; carried as an untyped value.
    RefRule("override:EventDataType", _named("EventDataType"), RefResolution(type_name="Any", import_line=ANY_IMPORT)),
    RefRule("override:AuthorizationData", _named("AuthorizationData"), _DATATYPE),
    RefRule("known-datatype", KNOWN_DATATYPES.__contains__, _DATATYPE),
    RefRule("known-enumeration", KNOWN_ENUMERATIONS.__contains__, _ENUMERATION),
    RefRule("enumeration-suffix", _suffixed("EnumType"), _ENUMERATION),
    RefRule("datatype-suffix", _suffixed("Type"), _DATATYPE),
)

FALLBACK_RESOLUTION = RefResolution(type_name="str", needs_validation=True)


def ref_name(ref: str) -> str:
    """Definition name a ``$ref`` pointer ends in (``#/definitions/ResetEnumType`` -> ``ResetEnumType``)."""
    return ref.rstrip("/").rsplit("/", 1)[-1]


class TypeResolver:
    def __init__(
        self,
        types_package: str = DEFAULT_TYPES_PACKAGE,
        rules: Sequence[RefRule] = DEFAULT_REF_RULES,
        extra_rules: Iterable[RefRule] = (),
    ) -> None:
        self.types_package = types_package
        self.rules: tuple[RefRule, ...] = (*extra_rules, *rules)

    def resolve(self, node: SchemaNode, imports: set[str]) -> ResolvedType:
        """Resolve *node* to a type name, adding whatever it needs to *imports*.

        Never raises: shapes it does not understand become ``Any``.
        """
        if node.ref is not None:
            return self.resolve_ref(node.ref, imports)

        if node.type == "string":
            if node.format == "date-time":
                imports.add(DATETIME_IMPORT)
                return ResolvedType("datetime", False)
            return ResolvedType("str", True)
        if node.type == "integer":
            return ResolvedType("int", True)
        if node.type == "number":
            imports.add(DECIMAL_IMPORT)
            return ResolvedType("Decimal", True)
        if node.type == "boolean":
            return ResolvedType("bool", False)
        if node.type == "array":
            return self._resolve_array(node, imports)
        imports.add(ANY_IMPORT)
        return ResolvedType("Any", False)

    def _resolve_array(self, node: SchemaNode, imports: set[str]) -> ResolvedType:
        if not isinstance(node.items, SchemaNode):
            imports.add(ANY_IMPORT)
            return ResolvedType("list[Any]", False)
        item = self.resolve(node.items, imports)
        item_type = item.type_name
        if item_type == "int":
            # Field(ge, le) on the list bounds its length, not the elements.
            imports.add(ANNOTATED_IMPORT)
            item_type = INT32_ITEM_TYPE
        return ResolvedType(f"list[{item_type}]", True, nested=item.nested)

    def resolve_ref(self, ref: str, imports: set[str]) -> ResolvedType:
        name = ref_name(ref)
        resolution = next((rule.resolution for rule in self.rules if rule.matches(name)), FALLBACK_RESOLUTION)
        return self._apply(name, resolution, imports)

    def _apply(self, name: str, resolution: RefResolution, imports: set[str]) -> ResolvedType:
        type_name = resolution.type_name or name
        if resolution.module is not None:
            imports.add(f"from {self.types_package}.{resolution.module} import {type_name}")
        if resolution.import_line is not None:
            imports.add(resolution.import_line)
        return ResolvedType(type_name, resolution.needs_validation, nested=resolution.is_structured)
