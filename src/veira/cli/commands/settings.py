"""Business settings commands."""

import click
from decimal import Decimal
from veira.cli.error_handling import handle_domain_error
from veira.domain.entities import BusinessType, OwnerProfile
from veira.domain.errors import DomainError
from veira.domain.roles import require_money_access
from veira.utils.money import parse_amount

PROFILE_CHOICES = [profile.name.lower() for profile in OwnerProfile]
BUSINESS_TYPE_CHOICES = [business_type.name.lower() for business_type in BusinessType]


@click.group()
def settings_group():
    """View and change business settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current business settings."""
    settings = ctx.obj["shop"].settings
    click.echo(f"Business name: {settings.business_name}")
    click.echo(f"KRA PIN:       {settings.kra_pin}")
    click.echo(f"VAT rate:      {settings.vat_rate}%")
    click.echo(f"Owner profile: {settings.owner_profile.value}")
    click.echo(f"Business type: {settings.business_type.value}")
    click.echo(f"Signed in as:  {settings.user_role.value}")


@settings_group.command("set")
@click.option("--business-name", help="Shop name shown on reports")
@click.option("--kra-pin", help="KRA PIN printed on tax reports")
@click.option("--vat-rate", help="VAT rate in percent (e.g., 16)")
@click.option("--owner-profile", type=click.Choice(PROFILE_CHOICES, case_sensitive=False))
@click.option("--business-type", type=click.Choice(BUSINESS_TYPE_CHOICES, case_sensitive=False))
@click.pass_context
def set_settings(ctx, business_name, kra_pin, vat_rate, owner_profile, business_type):
    """Change business settings.

    Examples:
        veira settings set --vat-rate 16
        veira settings set --business-name "Mama Mboga Supermart" --kra-pin P051234567X
    """
    shop = ctx.obj["shop"]

    rate: Decimal | None = None
    if vat_rate is not None:
        try:
            rate = parse_amount(vat_rate.rstrip("%"))
        except ValueError as e:
            click.echo(f"Error: Invalid VAT rate: {e}", err=True)
            ctx.exit(1)

    if all(v is None for v in (business_name, kra_pin, rate, owner_profile, business_type)):
        click.echo("Error: Nothing to change. Provide at least one option.", err=True)
        ctx.exit(1)

    try:
        if rate is not None or kra_pin is not None:
            require_money_access(shop.settings.user_role, "change tax settings")
        updated = shop.update_settings(
            business_name=business_name,
            kra_pin=kra_pin,
            vat_rate=rate,
            owner_profile=OwnerProfile[owner_profile.upper()] if owner_profile else None,
            business_type=BusinessType[business_type.upper()] if business_type else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("Settings updated.")
    click.echo(f"VAT rate: {updated.vat_rate}%")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
