"""Assistant commands."""

import click
from veira.assistant.client import GeminiClient
from veira.domain.insights import InsightsService


def _insights_service(ctx) -> InsightsService:
    # Tests and embedders can supply their own client through ctx.obj
    client = ctx.obj.get("assistant_client") or GeminiClient()
    return InsightsService(client)


@click.command("insights")
@click.pass_context
def insights(ctx):
    """Short summary of how the shop is doing."""
    shop = ctx.obj["shop"]
    click.echo(_insights_service(ctx).business_insights(shop.state))


@click.command("ask")
@click.argument("message", nargs=-1, required=True)
@click.pass_context
def ask(ctx, message: tuple[str, ...]):
    """Ask the assistant a question about the business.

    Examples:
        veira ask "Which day had the best sales this week?"
    """
    shop = ctx.obj["shop"]
    click.echo(_insights_service(ctx).ask(" ".join(message), shop.state))


def register_commands(cli):
    """Register assistant commands with main CLI."""
    cli.add_command(insights)
    cli.add_command(ask)
