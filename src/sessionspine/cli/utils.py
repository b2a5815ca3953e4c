"""
CLI utility helpers — output formatting and catalog-backed contexts.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from sessionspine.core.errors import InvalidCatalogError
from sessionspine.core.repositories import load_catalog
from sessionspine.ops.context import OperationContext
from sessionspine.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)

CATALOG_ENVVAR = "SESSION_SPINE_CATALOG_PATH"


# ── Context helper ───────────────────────────────────────────────────────


def make_context(catalog: str, *, site_id: int = 0) -> OperationContext:
    """Load ``catalog`` into an in-memory store and wrap it in an ``OperationContext``."""
    try:
        store = load_catalog(catalog)
    except FileNotFoundError as e:
        err_console.print(f"[bold red]Error[/bold red]: {escape(str(e))}")
        raise typer.Exit(code=2) from e
    except InvalidCatalogError as e:
        err_console.print(f"[bold red]Error[/bold red] (INVALID_CATALOG): {escape(e.message)}")
        raise typer.Exit(code=2) from e
    return OperationContext(store=store, site_id=site_id, caller="cli")


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(msg)}")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps(_to_dict(result.data), default=str))
        return

    _print_dict(_to_dict(result.data), title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_dict(data: dict[str, Any], *, title: str = "", indent: int = 2) -> None:
    """Render a dict as key-value pairs, nesting sub-dicts."""
    if title:
        console.print(f"[bold]{escape(title)}[/bold]")
    pad = " " * indent
    for k, v in data.items():
        if isinstance(v, dict) and v:
            console.print(f"{pad}[cyan]{k}[/cyan]:")
            _print_dict(v, indent=indent + 2)
        else:
            console.print(f"{pad}[cyan]{k}[/cyan]: {escape(str(v))}")
