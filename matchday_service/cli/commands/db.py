"""Database migration commands on top of the programmatic Alembic API.

Example:bash
    # Apply all pending migrations
    matchday db upgrade

    # Print the SQL instead of executing it
    matchday db upgrade --sql

    # Check migration status
    matchday db current
"""

import click

from matchday_service.cli.utils import coro, fail, info, success, warning


def get_alembic_commands():
    """Get AlembicCommands instance with lazy import."""
    from matchday_service.infra.database.alembic import get_alembic_commands

    return get_alembic_commands()


@click.group(name="db")
def db() -> None:
    """Database migrations."""


@db.command()
@click.option("--revision", default="head", help="Target revision (default: head)")
@click.option("--sql/--no-sql", default=False, help="Output SQL without executing")
@coro
async def upgrade(revision: str, sql: bool) -> None:
    """Apply database migrations."""
    info(f"Upgrading database to: {revision}")

    try:
        commands = get_alembic_commands()
        output = await commands.upgrade(revision, sql=sql)

        if output:
            click.echo(output)

        if not sql:
            success("Database upgraded successfully!")

    except Exception as e:
        fail(f"Failed to upgrade database: {e}")


@db.command()
@click.option("--steps", default=1, type=int, help="Number of migrations to rollback")
@click.option("--sql/--no-sql", default=False, help="Output SQL without executing")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@coro
async def downgrade(steps: int, sql: bool, yes: bool) -> None:
    """Rollback database migrations."""
    if not sql:
        warning(f"Rolling back {steps} migration(s)...")
        if not yes and not click.confirm("Are you sure you want to rollback migrations?"):
            info("Rollback cancelled")
            return

    try:
        commands = get_alembic_commands()
        target = f"-{steps}" if steps > 0 else "base"
        output = await commands.downgrade(target, sql=sql)

        if output:
            click.echo(output)

        if not sql:
            success("Database downgraded successfully!")

    except Exception as e:
        fail(f"Failed to downgrade database: {e}")


@db.command()
@coro
async def current() -> None:
    """Show current database revision."""
    info("Current database revision:")

    try:
        commands = get_alembic_commands()
        output = await commands.current(verbose=True)

        if output:
            click.echo(output)
        else:
            info("No migrations applied")

    except Exception as e:
        fail(f"Failed to get current revision: {e}")
