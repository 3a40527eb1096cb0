"""Main CLI entry point."""

import logging

import click
from veira.database.factories import create_sqlite_database
from veira.domain.shop import ShopController

# Import and register all commands at module level
from veira.cli.commands import (
    auth,
    product,
    sell,
    sales,
    report,
    export,
    settings,
    assistant,
)

# Commands that may run without a signed-in session
PUBLIC_COMMANDS = {"login"}


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides VEIRA_DB_PATH environment variable)",
    envvar="VEIRA_DB_PATH",
)
@click.option(
    "--checkout-delay",
    type=float,
    default=0.0,
    show_default=True,
    envvar="VEIRA_CHECKOUT_DELAY",
    help="Artificial processing delay in seconds before a sale is recorded",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="VEIRA_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, checkout_delay: float, log_level: str):
    """Veira - Know your business.

    Sell, track stock, and keep tax records for a small shop.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()
    ctx.call_on_close(db.disconnect)
    ctx.obj["db"] = db

    shop = ShopController(db, checkout_delay=checkout_delay)
    ctx.obj["shop"] = shop

    if ctx.invoked_subcommand not in PUBLIC_COMMANDS and not shop.is_authenticated():
        click.echo("Error: Not signed in. Run 'veira login' first.", err=True)
        ctx.exit(1)


# Register all commands
auth.register_commands(cli)
product.register_commands(cli)
sell.register_commands(cli)
sales.register_commands(cli)
report.register_commands(cli)
export.register_commands(cli)
settings.register_commands(cli)
assistant.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
