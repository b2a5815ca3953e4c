"""
Root Typer application for the session-spine CLI.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from sessionspine.core.logging import configure_logging

app = Typer(
    name="session-spine",
    help="session-spine — workflow lookup and session-time truncation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("session-spine")
        except PackageNotFoundError:
            from sessionspine import __version__ as v
        typer.echo(f"session-spine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for structured logs"),
) -> None:
    """session-spine CLI — look up workflows and truncate session times."""
    configure_logging(level=log_level, json_format=False)


# ── Sub-command registration ─────────────────────────────────────────────

from sessionspine.cli.serve import app as serve_app  # noqa: E402
from sessionspine.cli.workflow import app as wf_app  # noqa: E402

app.add_typer(wf_app, name="workflow", help="Workflow lookup and session times.")
app.add_typer(serve_app, name="serve", help="Start the API server.")
