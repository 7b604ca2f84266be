"""
shelfql CLI.

Commands:
- serve:  Run the GraphQL server (uvicorn)
- schema: Print or write the GraphQL SDL
"""

from __future__ import annotations

import platform
import sys
from pathlib import Path

import typer
from rich.console import Console

from shelfql._version import get_version

app = typer.Typer(
    help="shelfql - GraphQL book catalog",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        console.print(f"shelfql {get_version()}")
        console.print(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """shelfql CLI main callback for global options."""


@app.command(name="serve")
def serve_command(
    host: str | None = typer.Option(None, "--host", help="Bind address (env: SHELFQL_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (env: SHELFQL_PORT)"),
    seed: bool | None = typer.Option(
        None,
        "--seed/--no-seed",
        help="Load demo books on startup (env: SHELFQL_SEED)",
    ),
    seed_file: Path | None = typer.Option(
        None,
        "--seed-file",
        exists=True,
        dir_okay=False,
        help="JSON list of books to load instead of the defaults",
    ),
    graphiql: bool | None = typer.Option(
        None,
        "--graphiql/--no-graphiql",
        help="Serve the GraphiQL IDE (env: SHELFQL_GRAPHIQL)",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ..."),
) -> None:
    """Run the GraphQL server."""
    from shelfql.runtime.server import ServerConfig, run_app

    config = ServerConfig.from_env(
        host=host,
        port=port,
        seed=seed,
        seed_file=seed_file,
        enable_graphiql=graphiql,
        log_level=log_level,
    )
    ide = " (GraphiQL enabled)" if config.enable_graphiql else ""
    console.print(f"[green]Serving GraphQL at {config.graphql_url}{ide}[/green]")
    run_app(config)


@app.command(name="schema")
def schema_command(
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write SDL to this file instead of stdout",
    ),
) -> None:
    """Print the GraphQL schema SDL."""
    from shelfql.graphql.integration import print_schema

    sdl = print_schema()
    if output is None:
        typer.echo(sdl)
        return
    output.write_text(sdl + "\n", encoding="utf-8")
    console.print(f"[green]Schema written to {output}[/green]")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
