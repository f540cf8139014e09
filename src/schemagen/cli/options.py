from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from schemagen.config import GeneratorConfig
from schemagen.models import ProcessorStats

console = Console()

SchemaDirOption = Annotated[
    Path | None,
    typer.Option(help="Directory with the JSON schema files [env: SCHEMAGEN_SCHEMA_DIR]."),
]
OutputDirOption = Annotated[
    Path | None,
    typer.Option(help="Directory the generated modules are written to [env: SCHEMAGEN_OUTPUT_DIR]."),
]
TypesPackageOption = Annotated[
    str | None,
    typer.Option(help="Package holding the shared datatypes/enumerations modules [env: SCHEMAGEN_TYPES_PACKAGE]."),
]
InitFileOption = Annotated[
    bool,
    typer.Option("--init-file/--no-init-file", help="Write an __init__.py re-exporting every generated model."),
]
StatsOption = Annotated[bool, typer.Option("--stats/--no-stats", help="Print schema statistics.")]


def print_error(message: str) -> None:
    console.print("[red]Error:[/red]", escape(message))


def fail(message: str) -> typer.Exit:
    print_error(message)
    return typer.Exit(code=1)


def build_config(**values: Any) -> GeneratorConfig:
    try:
        return GeneratorConfig.from_env(**values)
    except ValidationError as exc:
        raise fail(str(exc)) from exc


def render_stats(stats: ProcessorStats) -> None:
    table = Table(title="Schema statistics", show_lines=False)
    table.add_column("metric")
    table.add_column("count", justify="right")
    table.add_row("schema files", str(stats.schema_files))
    table.add_row("message pairs", str(stats.total_pairs))
    table.add_row("complete", str(stats.complete_pairs))
    table.add_row("incomplete", str(stats.incomplete_pairs))
    table.add_row("standalone", str(stats.standalone_messages))
    console.print(table)
