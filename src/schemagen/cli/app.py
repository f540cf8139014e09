import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from schemagen.cli.generate import generate
from schemagen.cli.stats import stats
from schemagen.cli.watch import watch

app = typer.Typer(
    name="schemagen",
    help="Schemagen CLI: generate pydantic message models from JSON schemas.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure_logging(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command("generate")(generate)
app.command("stats")(stats)
app.command("watch")(watch)


def main() -> None:
    app()
