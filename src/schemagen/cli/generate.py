from typing import Annotated

import typer

from schemagen.cli.options import (
    InitFileOption,
    OutputDirOption,
    SchemaDirOption,
    StatsOption,
    TypesPackageOption,
    build_config,
    console,
    fail,
    render_stats,
)
from schemagen.config import GeneratorConfig
from schemagen.core.processor import GenerationResult, SchemaProcessor
from schemagen.errors import SchemagenError
from schemagen.output import FileSystemSink, InMemorySink


def run_generation(config: GeneratorConfig, dry_run: bool = False) -> GenerationResult:
    """Generate once and report the outcome on the console."""
    sink = InMemorySink() if dry_run else FileSystemSink(config.output_dir)
    result = SchemaProcessor(config).process_all(sink)

    if config.show_statistics:
        render_stats(result.stats)
    for base_name in result.generated:
        console.print(f"[green]Generated[/green] {base_name}")
    for base_name in result.skipped:
        console.print(f"[yellow]Skipped incomplete pair[/yellow] {base_name}")
    target = "(dry run, nothing written)" if dry_run else str(config.output_dir)
    console.print(f"Generated {len(result.generated)} message modules {target}", highlight=False)
    return result


def generate(
    schema_dir: SchemaDirOption = None,
    output_dir: OutputDirOption = None,
    types_package: TypesPackageOption = None,
    init_file: InitFileOption = True,
    stats: StatsOption = True,
    dry_run: Annotated[bool, typer.Option(help="Render everything but write nothing.")] = False,
) -> None:
    """Generate message modules from a schema directory."""
    config = build_config(
        schema_dir=schema_dir,
        output_dir=output_dir,
        types_package=types_package,
        generate_init_file=init_file,
        show_statistics=stats,
    )
    try:
        run_generation(config, dry_run=dry_run)
    except SchemagenError as exc:
        raise fail(str(exc)) from exc
