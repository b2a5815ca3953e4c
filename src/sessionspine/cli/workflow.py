"""
CLI: ``session-spine workflow`` — workflow lookup and session-time commands.

All commands read repositories from a YAML catalog (``--catalog`` or
``SESSION_SPINE_CATALOG_PATH``).
"""

from __future__ import annotations

import typer

from sessionspine.cli.utils import CATALOG_ENVVAR, make_context, output_result

app = typer.Typer(no_args_is_help=True)

_CATALOG_HELP = "YAML catalog of repositories, revisions and workflows"


@app.command("show")
def show_workflow(
    repository: str = typer.Argument(..., help="Repository name"),
    name: str = typer.Argument(..., help="Workflow name"),
    revision: str | None = typer.Option(None, "--revision", "-r", help="Revision (latest when omitted)"),
    catalog: str = typer.Option(..., "--catalog", "-c", envvar=CATALOG_ENVVAR, help=_CATALOG_HELP),
    site_id: int = typer.Option(0, "--site", "-s", help="Site id"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show a workflow definition by repository and name."""
    from sessionspine.ops.requests import GetWorkflowByNameRequest
    from sessionspine.ops.workflows import get_workflow_by_name as _get

    ctx = make_context(catalog, site_id=site_id)
    result = _get(ctx, GetWorkflowByNameRequest(repository=repository, revision=revision, name=name))
    output_result(result, as_json=json_out, title=f"Workflow: {repository}/{name}")


@app.command("get")
def get_workflow(
    workflow_id: int = typer.Argument(..., help="Workflow definition id"),
    catalog: str = typer.Option(..., "--catalog", "-c", envvar=CATALOG_ENVVAR, help=_CATALOG_HELP),
    site_id: int = typer.Option(0, "--site", "-s", help="Site id"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show a workflow definition by id."""
    from sessionspine.ops.requests import GetWorkflowByIdRequest
    from sessionspine.ops.workflows import get_workflow_by_id as _get

    ctx = make_context(catalog, site_id=site_id)
    result = _get(ctx, GetWorkflowByIdRequest(workflow_id=workflow_id))
    output_result(result, as_json=json_out, title=f"Workflow #{workflow_id}")


@app.command("truncate")
def truncate(
    workflow_id: int = typer.Argument(..., help="Workflow definition id"),
    session_time: str = typer.Argument(
        ..., help="ISO-8601 time; without an offset it is local to the workflow's zone"
    ),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="none, hour, day, schedule or next_schedule"
    ),
    catalog: str = typer.Option(..., "--catalog", "-c", envvar=CATALOG_ENVVAR, help=_CATALOG_HELP),
    site_id: int = typer.Option(0, "--site", "-s", help="Site id"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Truncate a time into the workflow's session time."""
    from sessionspine.ops.requests import GetTruncatedSessionTimeRequest
    from sessionspine.ops.workflows import get_truncated_session_time as _truncate

    ctx = make_context(catalog, site_id=site_id)
    result = _truncate(
        ctx,
        GetTruncatedSessionTimeRequest(
            workflow_id=workflow_id, session_time=session_time, mode=mode
        ),
    )
    output_result(result, as_json=json_out, title="Session time")
