"""CLI error handling helpers."""

import click

from veira.domain.errors import DomainError
from veira.domain.roles import require_money_access


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def require_money_or_exit(ctx: click.Context, action: str) -> None:
    """Exit with an error unless the signed-in role can see money figures."""
    try:
        require_money_access(ctx.obj["shop"].settings.user_role, action)
    except DomainError as e:
        handle_domain_error(ctx, e)
