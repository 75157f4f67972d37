import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from mprestgen.codegen.codegen import Codegen
from mprestgen.codegen.policy import resolve_policy
from mprestgen.config import DEFAULT_FILENAMES, create_default_config, get_config
from mprestgen.exceptions import MpRestGenError

console = Console()
app = typer.Typer(
    name='mprestgen',
    help='Generate MicroProfile REST client sources from OpenAPI documents',
    no_args_is_help=True,
)

ConfigOption = Annotated[
    str | None,
    typer.Option('--config', '-c', help='Path to configuration file (YAML or JSON)'),
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def generate(
    config: ConfigOption = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug logging')
    ] = False,
) -> None:
    """Generate Java client sources from configuration.

    If no config file is specified, will look for default config files
    in the current directory or in pyproject.toml.

    Examples:
        mprestgen generate
        mprestgen generate --config my-config.yaml
        mprestgen generate -c config.json -v
    """
    _setup_logging(verbose)

    try:
        codegen_config = get_config(config)

        for document_config in codegen_config.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating code for {document_config.source} '
                    f'in {document_config.output}...',
                    total=None,
                )
                result = Codegen(document_config).generate()
                progress.update(
                    task,
                    description=f'Code generation completed for {document_config.source}!',
                )

            console.print('[dim]Generated files:[/dim]')
            for path in result.files:
                console.print(f'  - {path}')
            for path in result.failed_files:
                console.print(f'[yellow]Not formatted:[/yellow] {path}')

        console.print('[green]Successfully generated code[/green]')

    except MpRestGenError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)


@app.command()
def options(config: ConfigOption = None) -> None:
    """Show the resolved generator options of every configured document."""
    try:
        codegen_config = get_config(config)
    except MpRestGenError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    for document_config in codegen_config.documents:
        policy = resolve_policy(document_config.options)
        table = Table(title=document_config.source)
        table.add_column('Option', style='cyan')
        table.add_column('Value')
        for key, value in policy.to_options().items():
            table.add_row(key, repr(value))
        console.print(table)


@app.command()
def init(
    path: Annotated[
        Path, typer.Argument(help='Where to write the configuration file')
    ] = Path(DEFAULT_FILENAMES[0]),
) -> None:
    """Create a starter configuration file."""
    try:
        written = create_default_config(path)
    except MpRestGenError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)
    console.print(f'[green]Created[/green] {written}')


@app.command()
def version() -> None:
    """Show the version of mprestgen."""
    from mprestgen import __version__

    console.print(f'mprestgen version: {__version__}')


if __name__ == '__main__':
    app()
