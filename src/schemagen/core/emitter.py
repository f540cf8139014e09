import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from schemagen.core.imports import optimize_imports
from schemagen.core.naming import module_name
from schemagen.models import FieldConstraint, FieldInfo, MessageKind, MessagePair, Number, StructInfo

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
_MAX_LINE_LENGTH = 120

_BOUND_KEYWORDS = {
    "length": ("min_length", "max_length"),
    "items": ("min_length", "max_length"),
    "range": ("ge", "le"),
}

_environment = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)


def _literal(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _number(value: Number) -> str:
    return str(value) if isinstance(value, int) else repr(value)


def _constraint_arguments(constraint: FieldConstraint) -> list[str]:
    lower_keyword, upper_keyword = _BOUND_KEYWORDS[constraint.kind]
    arguments = []
    if constraint.lower is not None:
        arguments.append(f"{lower_keyword}={_number(constraint.lower)}")
    if constraint.upper is not None:
        arguments.append(f"{upper_keyword}={_number(constraint.upper)}")
    return arguments


def field_arguments(field: FieldInfo) -> list[str]:
    """Keyword arguments of the ``Field(...)`` call for *field*, in emission order."""
    arguments = []
    if field.is_optional:
        arguments.append("default=None")
    if field.alias is not None:
        arguments.append(f"alias={_literal(field.alias)}")
    if field.constraint is not None:
        arguments.extend(_constraint_arguments(field.constraint))
    if field.description:
        arguments.append(f"description={_literal(field.description)}")
    return arguments


def render_field(field: FieldInfo) -> str:
    annotation = f"{field.type_name} | None" if field.is_optional else field.type_name
    declaration = f"{field.name}: {annotation}"
    arguments = field_arguments(field)
    if not arguments:
        return declaration
    single_line = f"{declaration} = Field({', '.join(arguments)})"
    # Fields are emitted one indentation level deep.
    if len(single_line) + 4 <= _MAX_LINE_LENGTH:
        return single_line
    body = "".join(f"    {argument},\n" for argument in arguments)
    return f"{declaration} = Field(\n{body})"


def model_docstring(struct: StructInfo, kind: MessageKind, base_name: str) -> str:
    if kind is MessageKind.STANDALONE:
        return f"Body of the {struct.name} message."
    return f"{kind.value.capitalize()} body for the {base_name} {kind.value}."


def model_config_arguments(struct: StructInfo) -> str:
    arguments = ["alias_generator=to_camel", "populate_by_name=True"]
    if struct.needs_nested_validation:
        arguments.append('revalidate_instances="always"')
    return ", ".join(arguments)


def render_struct(struct: StructInfo, kind: MessageKind, base_name: str) -> str:
    template = _environment.get_template("model.py.jinja")
    return template.render(
        name=struct.name,
        docstring=model_docstring(struct, kind, base_name),
        config=model_config_arguments(struct),
        fields=[render_field(field) for field in struct.fields],
    )


def _finalize(source: str) -> str:
    return source.rstrip("\n") + "\n"


def render_message_module(pair: MessagePair, grouped_prefix: str) -> str:
    """Python source of the module holding every model of *pair*."""
    models = [
        render_struct(struct, kind, pair.base_name)
        for kind, struct in (
            (MessageKind.REQUEST, pair.request),
            (MessageKind.RESPONSE, pair.response),
            (MessageKind.STANDALONE, pair.standalone),
        )
        if struct is not None
    ]
    template = _environment.get_template("message_module.py.jinja")
    source = template.render(
        base_name=pair.base_name,
        imports=optimize_imports(pair.combined_imports, grouped_prefix),
        models=[model.rstrip("\n") for model in models],
    )
    return _finalize(source)


def render_package_init(pairs: list[MessagePair]) -> str:
    """Aggregation module re-exporting every generated model."""
    paired = []
    standalone = []
    for pair in pairs:
        entry = {"module": module_name(pair.base_name), "names": [struct.name for struct in pair.structs]}
        (standalone if pair.is_standalone else paired).append(entry)
    paired.sort(key=lambda entry: entry["module"])
    standalone.sort(key=lambda entry: entry["module"])
    exported = sorted(name for entry in paired + standalone for name in entry["names"])

    template = _environment.get_template("package_init.py.jinja")
    return _finalize(template.render(paired=paired, standalone=standalone, exported=exported))
