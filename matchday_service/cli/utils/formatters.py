"""Coloured status lines for CLI commands."""

import sys
from typing import NoReturn

import click


def success(message: str) -> None:
    click.secho(f"✓ {message}", fg="green")


def error(message: str) -> None:
    """Print to stderr in red."""
    click.secho(f"✗ {message}", fg="red", err=True)


def fail(message: str, code: int = 1) -> NoReturn:
    """Print ``message`` as an error and exit with ``code``."""
    error(message)
    sys.exit(code)


def warning(message: str) -> None:
    click.secho(f"⚠ {message}", fg="yellow")


def info(message: str) -> None:
    click.secho(f"ℹ {message}", fg="blue")
