import json


def extract_field_order(text: str) -> list[str]:
    """Return the declaration order of the top-level ``properties`` keys in *text*.

    ``json`` builds objects as insertion-ordered dicts, so the parse itself
    preserves the order; a repeated key keeps the position of its first
    declaration. Returns an empty list when the text is not a JSON object or
    has no top-level ``properties`` object, and callers fall back to the
    parsed mapping.
    """
    try:
        root = json.loads(text)
    except json.JSONDecodeError:
        return []
    if not isinstance(root, dict):
        return []
    properties = root.get("properties")
    if not isinstance(properties, dict):
        return []
    return list(properties)
