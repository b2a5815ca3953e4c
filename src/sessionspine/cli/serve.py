"""
CLI: ``session-spine serve`` — start the API server.
"""

from __future__ import annotations

import os

import typer
import uvicorn

from sessionspine.cli.utils import CATALOG_ENVVAR, console

app = typer.Typer(no_args_is_help=True)


@app.command("start")
def start(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Bind address"),
    port: int = typer.Option(12100, "--port", "-p", help="Bind port"),
    catalog: str | None = typer.Option(
        None, "--catalog", "-c", help="YAML catalog served by the API"
    ),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the session-spine REST API server."""
    if catalog:
        # the factory runs in uvicorn's process(es) and reads settings from the environment
        os.environ[CATALOG_ENVVAR] = catalog

    console.print(f"[bold green]Starting session-spine API[/bold green] on {host}:{port}")
    uvicorn.run(
        "sessionspine.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )
