import asyncio
from pathlib import Path

from schemagen.cli.generate import run_generation
from schemagen.cli.options import (
    InitFileOption,
    OutputDirOption,
    SchemaDirOption,
    StatsOption,
    TypesPackageOption,
    build_config,
    console,
    fail,
    print_error,
)
from schemagen.errors import SchemagenError
from schemagen.watcher.watchfiles_adapter import WatchfilesWatcher


def watch(
    schema_dir: SchemaDirOption = None,
    output_dir: OutputDirOption = None,
    types_package: TypesPackageOption = None,
    init_file: InitFileOption = True,
    stats: StatsOption = False,
) -> None:
    """Generate, then regenerate whenever a schema file changes."""
    config = build_config(
        schema_dir=schema_dir,
        output_dir=output_dir,
        types_package=types_package,
        generate_init_file=init_file,
        show_statistics=stats,
    )
    try:
        run_generation(config)
    except SchemagenError as exc:
        raise fail(str(exc)) from exc

    async def _regenerate(paths: set[Path]) -> None:
        console.print(f"[cyan]Changed[/cyan] {', '.join(sorted(p.name for p in paths))}")
        try:
            run_generation(config)
        except SchemagenError as exc:
            print_error(str(exc))

    async def _run() -> None:
        watcher = WatchfilesWatcher(config.schema_dir, _regenerate)
        await watcher.start()
        try:
            await asyncio.Event().wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching[/green] {config.schema_dir} (Ctrl+C to stop)")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
