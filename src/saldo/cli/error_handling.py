"""CLI error reporting.

Every failing command prints one ``Error: ...`` line on stderr and exits
with status 1.
"""

import click

from saldo.domain.errors import DomainError


def exit_with_error(ctx: click.Context, message: str) -> None:
    """Print an error message on stderr and exit with failure."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Report a domain or lookup error raised by a service."""
    exit_with_error(ctx, str(error))


def handle_input_error(ctx: click.Context, what: str, error: ValueError) -> None:
    """Report a command line value that could not be parsed."""
    exit_with_error(ctx, f"Invalid {what}: {error}")
