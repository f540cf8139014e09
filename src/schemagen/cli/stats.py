from schemagen.cli.options import SchemaDirOption, build_config, fail, render_stats
from schemagen.core.processor import SchemaProcessor
from schemagen.errors import SchemagenError


def stats(schema_dir: SchemaDirOption = None) -> None:
    """Show how the schema files pair up, without generating anything."""
    config = build_config(schema_dir=schema_dir)
    try:
        processor_stats = SchemaProcessor(config).get_stats()
    except SchemagenError as exc:
        raise fail(str(exc)) from exc
    render_stats(processor_stats)
