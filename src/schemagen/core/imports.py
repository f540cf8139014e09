import re
from collections import defaultdict
from collections.abc import Iterable

_FROM_IMPORT = re.compile(r"^from\s+(?P<module>[\w.]+)\s+import\s+(?P<name>\w+)$")
_SINGLE_LINE_LIMIT = 3


def _is_grouped(module: str, grouped_prefix: str) -> bool:
    return module == grouped_prefix or module.startswith(f"{grouped_prefix}.")


def _render_group(module: str, names: list[str]) -> str:
    if len(names) <= _SINGLE_LINE_LIMIT:
        return f"from {module} import {', '.join(names)}"
    body = "".join(f"    {name},\n" for name in names)
    return f"from {module} import (\n{body})"


def optimize_imports(imports: Iterable[str], grouped_prefix: str) -> list[str]:
    """Order *imports* deterministically, merging shared-type imports per module.

    Single-name imports from *grouped_prefix* or its sub-modules are grouped by
    module (modules and names sorted); everything else is kept verbatim,
    deduplicated and sorted after the groups.
    """
    grouped: defaultdict[str, set[str]] = defaultdict(set)
    others: set[str] = set()
    for line in imports:
        match = _FROM_IMPORT.match(line.strip())
        if match and _is_grouped(match["module"], grouped_prefix):
            grouped[match["module"]].add(match["name"])
        else:
            others.add(line)

    result = [_render_group(module, sorted(grouped[module])) for module in sorted(grouped)]
    result.extend(sorted(others))
    return result
