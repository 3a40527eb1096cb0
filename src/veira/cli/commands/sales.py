"""Sales history commands."""

import click
from veira.cli.date_filters import resolve_cli_date_range
from veira.domain.entities import Transaction
from veira.utils.money import format_kes
from veira.utils.timestamps import to_iso


def _print_compact(transactions: list[Transaction]) -> None:
    click.echo(
        f"{'Sale ID':<22} {'Time (UTC)':<25} {'Method':<8} {'Total':>16}  Flag"
    )
    click.echo("-" * 80)
    for txn in transactions:
        flag = "!" if txn.is_anomaly else ""
        click.echo(
            f"{txn.id:<22} {to_iso(txn.timestamp):<25} {txn.payment_method.value:<8} "
            f"{format_kes(txn.total):>16}  {flag}"
        )


def _print_verbose(transactions: list[Transaction]) -> None:
    click.echo("=" * 80)
    for txn in transactions:
        click.echo(f"\nSale ID: {txn.id}")
        click.echo(f"  Time: {to_iso(txn.timestamp)}")
        for line in txn.items:
            click.echo(f"  {line.quantity} x {line.name} @ {format_kes(line.price)}")
        click.echo(f"  Subtotal: {format_kes(txn.subtotal)}")
        click.echo(f"  VAT: {format_kes(txn.vat)}")
        click.echo(f"  Total: {format_kes(txn.total)}")
        click.echo(f"  Cost of goods: {format_kes(txn.cost_of_goods)}")
        click.echo(f"  Method: {txn.payment_method.value}")
        if txn.customer_name:
            click.echo(f"  Customer: {txn.customer_name}")
        if txn.is_anomaly:
            click.echo(f"  Flagged: {txn.anomaly_reason}")
        click.echo("-" * 80)


@click.group()
def sales_group():
    """Browse recorded sales."""
    pass


@sales_group.command("list")
@click.option("--flagged", is_flag=True, help="Only show sales flagged for review")
@click.option("--start-date", help="First day (YYYY-MM-DD, 'yesterday', '7 days ago')")
@click.option("--end-date", help="Last day (inclusive)")
@click.option("--this-week", is_flag=True, help="Sales from this week")
@click.option("--this-month", is_flag=True, help="Sales from this month")
@click.option("--last-month", is_flag=True, help="Sales from last month")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum sales to show")
@click.option("--verbose", "-v", is_flag=True, help="Show line items and anomaly reasons")
@click.pass_context
def list_sales(
    ctx,
    flagged: bool,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    last_month: bool,
    limit: int,
    verbose: bool,
):
    """List sales, newest first. Days are UTC calendar days."""
    shop = ctx.obj["shop"]
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "this-month": this_month,
            "last-month": last_month,
        },
    )

    transactions = shop.ledger.list_all(
        flagged=True if flagged else None, start_date=start, end_date=end
    )
    if not transactions:
        click.echo("No sales found.")
        return

    shown = transactions[:limit] if limit > 0 else transactions
    click.echo(f"\nFound {len(transactions)} sale(s):")
    if verbose:
        _print_verbose(shown)
    else:
        _print_compact(shown)
    if len(shown) < len(transactions):
        click.echo(f"... {len(transactions) - len(shown)} more (use --limit)")


@sales_group.command("review")
@click.pass_context
def review_sales(ctx):
    """Check every recorded sale for variances and below-floor prices."""
    shop = ctx.obj["shop"]
    flagged = shop.ledger.review_anomalies()
    if not flagged:
        click.echo("No problems found.")
        return

    click.echo(f"{len(flagged)} sale(s) need review:")
    for txn in flagged:
        click.echo(f"{txn.id:<22} {to_iso(txn.timestamp):<25} {txn.anomaly_reason}")


def register_commands(cli):
    """Register sales commands with main CLI."""
    cli.add_command(sales_group, name="sales")
