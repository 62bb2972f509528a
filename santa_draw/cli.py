from __future__ import annotations

import logging
import os
import sys

import click

from .client import AssignmentClient, ClientError, HttpTransport
from .policies import AssignmentError, parse_participants
from .santa import DerangementError
from .services import LocalCacheStore
from .views.api import RESET_REPEATED_MESSAGE


DEFAULT_CACHE = os.path.join(os.path.expanduser("~"), ".santa_draw", "cache.json")


@click.group()
@click.option("--api-base", envvar="SANTA_API_BASE", default="http://localhost:3000", show_default=True,
              help="Base URL of the assignment server.")
@click.option("--cache", "cache_path", envvar="SANTA_CACHE_FILE", default=DEFAULT_CACHE, show_default=True,
              type=click.Path(dir_okay=False), help="Local cache document.")
@click.option("--participants", envvar="SANTA_PARTICIPANTS", default="ibo,adnan,ahmet", show_default=True)
@click.option("--local-only", is_flag=True, help="Never contact the server.")
@click.option("-v", "--verbose", is_flag=True)
@click.pass_context
def main(ctx, api_base, cache_path, participants, local_only, verbose):
    """Look up or redraw the Secret Santa assignment."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    cache = LocalCacheStore(cache_path, parse_participants(participants))
    transport = None if local_only else HttpTransport(api_base)
    ctx.obj = AssignmentClient(cache, transport, sync=not local_only)


def _print_assignments(assignments: dict[str, str]) -> None:
    for giver, receiver in assignments.items():
        click.echo(f"{giver} → {receiver}")


@main.command()
@click.pass_obj
def show(client: AssignmentClient):
    """Print the whole current draw."""
    assignments, source = client.load()
    if assignments is None:
        raise click.ClickException("No saved draw. Run 'reset' to create one.")
    _print_assignments(assignments)
    click.echo(f"(source: {source}, server: {client.server_state})", err=True)


@main.command()
@click.argument("name")
@click.pass_obj
def lookup(client: AssignmentClient, name: str):
    """Print who NAME gives a present to."""
    try:
        recipient = client.lookup(name)
    except ClientError as e:
        raise click.ClickException(str(e))
    click.echo(f"{name.strip().capitalize()} → {recipient.capitalize()}")


@main.command()
@click.pass_obj
def reset(client: AssignmentClient):
    """Throw away the current draw and make a new one."""
    try:
        result, source = client.reset()
    except (AssignmentError, DerangementError) as e:
        raise click.ClickException(str(e))
    if result.repeated:
        click.echo(RESET_REPEATED_MESSAGE, err=True)
    else:
        click.echo(f"Old draw deleted. New draw saved ({source}).", err=True)


@main.command()
@click.pass_obj
def push(client: AssignmentClient):
    """Upload the local draw to a server that has none."""
    try:
        assignments = client.push()
    except ClientError as e:
        raise click.ClickException(str(e))
    click.echo(f"Imported {len(assignments)} assignments to the server.")


if __name__ == "__main__":
    main()
