"""Reporting commands."""

import click
from veira.cli.error_handling import require_money_or_exit
from veira.domain.reporting import DEFAULT_LOW_STOCK_THRESHOLD, stock_status
from veira.domain.roles import can_see_cost
from veira.utils.money import format_kes


@click.group()
def report_group():
    """Business reports."""
    pass


@report_group.command("summary")
@click.pass_context
def summary(ctx):
    """Revenue, profit, tax and stock value."""
    require_money_or_exit(ctx, "view money reports")
    shop = ctx.obj["shop"]
    report = shop.reporting()
    totals = report.totals()

    click.echo(f"\n{shop.settings.business_name}")
    click.echo("=" * 50)
    click.echo(f"{'Total Sales':<24} {format_kes(totals.revenue):>24}")
    click.echo(f"{'Cost of Goods':<24} {format_kes(totals.cost_of_goods):>24}")
    click.echo(f"{'Gross Profit':<24} {format_kes(totals.gross_profit):>24}")
    click.echo(f"{'Margin':<24} {totals.margin:>23.1f}%")
    click.echo(f"{'Tax Collected (VAT)':<24} {format_kes(totals.tax_collected):>24}")
    click.echo(f"{'Stock Value':<24} {format_kes(report.inventory_valuation()):>24}")
    click.echo(f"{'Sales':<24} {report.transaction_count():>24}")
    click.echo(f"{'Flagged Problems':<24} {report.anomaly_count():>24}")


@report_group.command("daily")
@click.option("--days", type=click.IntRange(min=1), default=7, show_default=True)
@click.pass_context
def daily(ctx, days: int):
    """Sales and profit per day (UTC), oldest first."""
    require_money_or_exit(ctx, "view money reports")
    series = ctx.obj["shop"].ledger.aggregate_by_day(days)

    click.echo(f"{'Date':<12} {'Sales':>18} {'Profit':>18}")
    click.echo("-" * 50)
    for day in series:
        click.echo(
            f"{day.day.isoformat():<12} {format_kes(day.revenue):>18} {format_kes(day.profit):>18}"
        )


@report_group.command("payments")
@click.pass_context
def payments(ctx):
    """Revenue by payment method."""
    require_money_or_exit(ctx, "view money reports")
    breakdown = ctx.obj["shop"].reporting().by_payment_method()

    click.echo(f"{'Method':<10} {'Revenue':>20}")
    click.echo("-" * 32)
    for method, revenue in breakdown.items():
        click.echo(f"{method.value:<10} {format_kes(revenue):>20}")


@report_group.command("stock")
@click.option(
    "--threshold",
    type=click.IntRange(min=0),
    default=DEFAULT_LOW_STOCK_THRESHOLD,
    show_default=True,
    help="Report products with stock below this level",
)
@click.pass_context
def stock(ctx, threshold: int):
    """Products running low on stock."""
    shop = ctx.obj["shop"]
    report = shop.reporting()
    low = report.low_stock(threshold)

    if can_see_cost(shop.settings.user_role):
        click.echo(f"Stock value: {format_kes(report.inventory_valuation())}")

    if not low:
        click.echo(f"No products below {threshold} units.")
        return

    click.echo(f"{len(low)} product(s) below {threshold} units:")
    for p in low:
        click.echo(f"  {p.id:<6} {p.name:<28} {p.stock:>5}  {stock_status(p, threshold)}")


@report_group.command("compliance")
@click.pass_context
def compliance(ctx):
    """VAT collected and products that need compliance tracking."""
    require_money_or_exit(ctx, "view tax records")
    shop = ctx.obj["shop"]
    report = shop.reporting()

    click.echo(f"KRA PIN: {shop.settings.kra_pin}")
    click.echo(f"Sales recorded: {report.transaction_count()}")
    click.echo(f"Tax collected (VAT): {format_kes(report.totals().tax_collected)}")

    regulated = report.regulated_products()
    click.echo(f"\nRegulated products ({len(regulated)}):")
    for p in regulated:
        click.echo(f"  {p.id:<6} {p.name:<28} {p.category.value:<14} {p.stock:>5} units")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
