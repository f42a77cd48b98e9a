"""Main CLI entry point for matchday service commands."""

import click

from matchday_service.cli.commands import consume, db
from matchday_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="matchday")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Matchday CLI - run event consumers and manage the database.

    \b
    Commands:
      consume    Consume a service's domain events
      db         Database migrations

    \b
    Quick Start:
      matchday db upgrade                  # Apply migrations
      matchday consume --service fixtures  # Start the fixtures consumer
    """
    ctx.ensure_object(dict)
    setup_logging()


cli.add_command(consume.consume)
cli.add_command(db.db)


def main() -> None:
    """Entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
