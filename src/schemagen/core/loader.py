import json
from pathlib import Path

from pydantic import ValidationError

from schemagen.errors import SchemaLoadError
from schemagen.models import SchemaDocument, SchemaNode


def parse_schema(text: str, name: str, path: Path) -> SchemaDocument:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(path, f"malformed JSON at line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    if not isinstance(raw, dict):
        raise SchemaLoadError(path, f"expected a JSON object, got {type(raw).__name__}")
    try:
        root = SchemaNode.model_validate(raw)
    except ValidationError as exc:
        raise SchemaLoadError(path, f"unexpected schema shape ({exc.error_count()} errors)") from exc
    return SchemaDocument(name=name, path=path, text=text, root=root)


def load_schema(path: str | Path) -> SchemaDocument:
    """Read and parse one schema file; the file stem becomes the document name."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise SchemaLoadError(file_path, "file not found") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise SchemaLoadError(file_path, str(exc)) from exc
    return parse_schema(text, file_path.stem, file_path)
