import logging
from dataclasses import dataclass, field
from pathlib import Path

from schemagen.config import GeneratorConfig
from schemagen.core.assembler import assemble_document
from schemagen.core.emitter import render_message_module, render_package_init
from schemagen.core.loader import load_schema
from schemagen.core.naming import module_name
from schemagen.core.pairing import MessagePairer
from schemagen.core.ports.output import OutputSink
from schemagen.core.resolver import TypeResolver
from schemagen.models import ProcessorStats

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".json"
INIT_FILE_NAME = "__init__.py"


@dataclass(frozen=True)
class GeneratedFile:
    name: str
    content: str


@dataclass
class GenerationResult:
    stats: ProcessorStats
    files: list[GeneratedFile] = field(default_factory=list)
    generated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def iter_schema_files(schema_dir: Path) -> list[Path]:
    """All schema files under *schema_dir*, in a stable order."""
    return sorted(path for path in schema_dir.rglob(f"*{SCHEMA_SUFFIX}") if path.is_file())


class SchemaProcessor:
    def __init__(self, config: GeneratorConfig, resolver: TypeResolver | None = None) -> None:
        self.config = config
        self.resolver = resolver or TypeResolver(config.types_package)

    def collect_pairs(self) -> MessagePairer:
        """Read every schema file and pair the resulting structs.

        Stops at the first file that cannot be loaded.
        """
        self.config.validate_paths()
        pairer = MessagePairer()
        for path in iter_schema_files(self.config.schema_dir):
            document = load_schema(path)
            struct = assemble_document(document, self.resolver)
            pairer.add(struct)
            logger.debug("Read %s (%d fields)", path, len(struct.fields))
        return pairer

    def get_stats(self) -> ProcessorStats:
        return self.collect_pairs().stats()

    def generate(self) -> GenerationResult:
        pairer = self.collect_pairs()
        result = GenerationResult(stats=pairer.stats())

        for pair in pairer.pairs:
            if not pair.is_complete:
                logger.warning("Incomplete pair for %s; skipping", pair.base_name)
                result.skipped.append(pair.base_name)
                continue
            content = render_message_module(pair, self.config.types_package)
            result.files.append(GeneratedFile(f"{module_name(pair.base_name)}.py", content))
            result.generated.append(pair.base_name)

        if self.config.generate_init_file:
            content = render_package_init(pairer.complete())
            result.files.append(GeneratedFile(INIT_FILE_NAME, content))
        return result

    def process_all(self, sink: OutputSink) -> GenerationResult:
        """Generate everything, then hand the files to *sink*.

        Nothing is written unless every schema file was read successfully.
        """
        result = self.generate()
        sink.prepare()
        for generated_file in result.files:
            sink.write(generated_file.name, generated_file.content)
        logger.info("Generated %d message modules", len(result.generated))
        return result
