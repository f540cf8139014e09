import keyword
import re

from pydantic import BaseModel
from pydantic.alias_generators import to_snake

# Names a generated model attribute must not take: Python keywords, the `type`
# soft keyword, and everything BaseModel already defines.
_RESERVED_WORDS = frozenset(
    {*keyword.kwlist, "type"} | {name for name in dir(BaseModel) if not name.startswith("_")}
)

_NON_IDENTIFIER = re.compile(r"\W")


def is_reserved(name: str) -> bool:
    return name in _RESERVED_WORDS


def _snake_identifier(key: str) -> str:
    name = _NON_IDENTIFIER.sub("_", to_snake(key))
    # Leading underscores would make a pydantic attribute private.
    name = name.lstrip("_") or "field"
    if name[0].isdigit():
        name = f"field_{name}"
    return name


def to_identifier(key: str) -> str:
    """Convert a JSON key to a snake_case Python identifier safe for a pydantic field."""
    name = _snake_identifier(key)
    if is_reserved(name):
        name = f"{name}_"
    return name


def module_name(base_name: str) -> str:
    """Module name of the generated file holding *base_name*."""
    name = _snake_identifier(base_name)
    if keyword.iskeyword(name):
        name = f"{name}_"
    return name


def unique_identifier(name: str, taken: set[str]) -> str:
    """*name*, or the first free ``<name>_<n>`` (n >= 2) when *name* is in *taken*."""
    if name not in taken:
        return name
    stem = name.rstrip("_")
    counter = 2
    while f"{stem}_{counter}" in taken:
        counter += 1
    return f"{stem}_{counter}"
