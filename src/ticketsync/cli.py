"""CLI entry point for ticketsync."""

from __future__ import annotations

import asyncio
import sys
from collections import Counter
from pathlib import Path

import click

from ticketsync import get_version
from ticketsync.config import ConfigError, Settings, load_settings
from ticketsync.github import GitHubClient, GitHubError
from ticketsync.logging import sanitize_for_log, setup_logging
from ticketsync.tickets import DeleteResult, Ticket, TicketCache, TicketService

config_option = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to ticketsync.yaml (defaults to TICKETSYNC_CONFIG or ./ticketsync.yaml)",
)


def _load(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


async def _sync(settings: Settings, name: str | None, namespace: str | None) -> list[Ticket]:
    async with GitHubClient(
        repo=settings.repo, token=settings.token, base_url=settings.api_url
    ) as client:
        service = TicketService(source=client, cache=TicketCache())
        return await service.sync_open_issues(name=name, namespace=namespace)


async def _close(settings: Settings, name: str, namespace: str) -> DeleteResult:
    async with GitHubClient(
        repo=settings.repo, token=settings.token, base_url=settings.api_url
    ) as client:
        service = TicketService(source=client, cache=TicketCache())
        await service.sync_open_issues(name=name, namespace=namespace)
        return await service.delete_tickets_for_resource(name=name, namespace=namespace)


@click.group()
@click.version_option(version=get_version())
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """ticketsync - GitHub issue tickets for Shoot clusters."""
    ctx.ensure_object(dict)["log_level"] = "DEBUG" if verbose else None
    setup_logging(level=ctx.obj["log_level"], console=verbose)


@main.command()
@config_option
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, config_path: Path | None, host: str, port: int) -> None:
    """Run the REST API with periodic ticket sync."""
    import uvicorn  # noqa: PLC0415

    from ticketsync.api import create_app  # noqa: PLC0415

    settings = _load(config_path)
    # Server logs go to the console as well, uvicorn uses our handlers
    setup_logging(level=ctx.obj["log_level"], console=True)
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


@main.command()
@config_option
@click.option("--namespace", default=None, help="Namespace of the Shoot (requires --name)")
@click.option("--name", default=None, help="Name of the Shoot (requires --namespace)")
def sync(config_path: Path | None, namespace: str | None, name: str | None) -> None:
    """Fetch open tickets once and print a summary per namespace.

    With --namespace and --name, only the tickets of that Shoot are fetched.
    """
    if bool(namespace) != bool(name):
        raise click.UsageError("--namespace and --name must be given together")
    settings = _load(config_path)
    try:
        tickets = asyncio.run(_sync(settings, name=name, namespace=namespace))
    except GitHubError as e:
        click.echo(f"Error: {sanitize_for_log(str(e))}", err=True)
        sys.exit(1)

    click.echo(f"{len(tickets)} open ticket(s) in {settings.repo}")
    counts = Counter(t.metadata.namespace or "(unassigned)" for t in tickets)
    for ns, count in sorted(counts.items()):
        click.echo(f"  {ns}: {count}")


@main.command()
@config_option
@click.option("--namespace", required=True, help="Namespace of the deleted Shoot")
@click.option("--name", required=True, help="Name of the deleted Shoot")
def close(config_path: Path | None, namespace: str, name: str) -> None:
    """Close all open tickets of a deleted Shoot."""
    settings = _load(config_path)
    try:
        result = asyncio.run(_close(settings, name=name, namespace=namespace))
    except GitHubError as e:
        click.echo(f"Error: {sanitize_for_log(str(e))}", err=True)
        sys.exit(1)

    if not result.results:
        click.echo(f"No open tickets for {namespace}/{name}")
        return

    for item in result.results:
        if item.ok:
            click.echo(f"  #{item.number}: {item.outcome.value}")
        else:
            click.echo(f"  #{item.number}: failed ({sanitize_for_log(str(item.error))})", err=True)

    if result.failed:
        sys.exit(1)
