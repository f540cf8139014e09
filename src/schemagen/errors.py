from pathlib import Path


class SchemagenError(Exception):
    """Base class for errors that abort a generation run."""


class ConfigError(SchemagenError):
    pass


class SchemaLoadError(SchemagenError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to load schema {path}: {reason}")
        self.path = path
        self.reason = reason
