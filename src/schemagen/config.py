import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from schemagen.errors import ConfigError

DEFAULT_SCHEMA_DIR = "schemas/v2.1"
DEFAULT_OUTPUT_DIR = "generated/v2_1/messages"
DEFAULT_TYPES_PACKAGE = "ocpp.v2_1"

_DOTTED_NAME = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")


class GeneratorConfig(BaseModel):
    """Settings for one generation run."""

    model_config = ConfigDict(frozen=True)

    schema_dir: Path
    output_dir: Path
    generate_init_file: bool = True
    show_statistics: bool = True
    types_package: str = DEFAULT_TYPES_PACKAGE

    @field_validator("types_package")
    @classmethod
    def _dotted_module_path(cls, value: str) -> str:
        if not _DOTTED_NAME.match(value):
            raise ValueError(f"Not a dotted module path: {value!r}")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build a config from SCHEMAGEN_* variables; non-None *overrides* win."""
        values: dict[str, Any] = {
            "schema_dir": os.getenv("SCHEMAGEN_SCHEMA_DIR", DEFAULT_SCHEMA_DIR),
            "output_dir": os.getenv("SCHEMAGEN_OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
            "types_package": os.getenv("SCHEMAGEN_TYPES_PACKAGE", DEFAULT_TYPES_PACKAGE),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def validate_paths(self) -> None:
        if not self.schema_dir.exists():
            raise ConfigError(f"Schema directory does not exist: {self.schema_dir}")
        if not self.schema_dir.is_dir():
            raise ConfigError(f"Schema path is not a directory: {self.schema_dir}")
