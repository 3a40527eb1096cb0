"""Sign-in commands."""

import click
from veira.domain.entities import UserRole

ROLE_CHOICES = [role.name.lower() for role in UserRole]


@click.command("login")
@click.option(
    "--role",
    type=click.Choice(ROLE_CHOICES, case_sensitive=False),
    default="owner",
    show_default=True,
    help="Role to sign in as",
)
@click.pass_context
def login(ctx, role: str):
    """Sign in and choose a role.

    Examples:
        veira login
        veira login --role cashier
    """
    shop = ctx.obj["shop"]
    user_role = UserRole[role.upper()]
    shop.login(user_role)
    click.echo(f"Signed in to {shop.settings.business_name} as {user_role.value}")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """Sign out. Records stay on this device."""
    ctx.obj["shop"].logout()
    click.echo("Signed out.")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the business and signed-in role."""
    settings = ctx.obj["shop"].settings
    click.echo(f"Business: {settings.business_name}")
    click.echo(f"Role: {settings.user_role.value}")


def register_commands(cli):
    """Register sign-in commands with main CLI."""
    cli.add_command(login)
    cli.add_command(logout)
    cli.add_command(whoami)
