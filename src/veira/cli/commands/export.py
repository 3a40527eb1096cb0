"""Document export commands."""

from datetime import UTC, datetime
from pathlib import Path

import click
from veira.cli.error_handling import require_money_or_exit
from veira.domain.export import (
    audit_pack_csv,
    audit_pack_filename,
    sales_ledger_csv,
    sales_ledger_filename,
    tax_summary_filename,
    tax_summary_text,
)
from veira.utils.timestamps import utc_today


def _write_document(ctx, content: str, output: str | None, default_name: str) -> None:
    """Write to OUTPUT, a directory, or stdout when OUTPUT is '-'."""
    if output == "-":
        click.echo(content, nl=False)
        return

    path = Path(output) if output else Path(default_name)
    if path.is_dir():
        path = path / default_name
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        click.echo(f"Error: Could not write {path}: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Wrote {path}")


output_option = click.option(
    "--output",
    "-o",
    help="File or directory to write to ('-' for stdout; defaults to the current directory)",
)


@click.group()
def export_group():
    """Export sales and tax documents."""
    pass


@export_group.command("csv")
@output_option
@click.pass_context
def export_csv(ctx, output: str | None):
    """Export the sales ledger as CSV."""
    require_money_or_exit(ctx, "export sales records")
    shop = ctx.obj["shop"]
    content = sales_ledger_csv(shop.reporting().transactions)
    _write_document(ctx, content, output, sales_ledger_filename(utc_today()))


@export_group.command("tax")
@output_option
@click.pass_context
def export_tax(ctx, output: str | None):
    """Export the VAT summary for e-TIMS."""
    require_money_or_exit(ctx, "export tax records")
    shop = ctx.obj["shop"]
    kra_pin = shop.settings.kra_pin
    content = tax_summary_text(
        shop.reporting().transactions, kra_pin, generated_at=datetime.now(UTC)
    )
    _write_document(ctx, content, output, tax_summary_filename(kra_pin))


@export_group.command("audit")
@click.option("--days", type=click.IntRange(min=1), default=7, show_default=True)
@output_option
@click.pass_context
def export_audit(ctx, days: int, output: str | None):
    """Export the business audit pack (money summary, daily sales, flagged sales)."""
    require_money_or_exit(ctx, "export the audit pack")
    shop = ctx.obj["shop"]
    generated_at = datetime.now(UTC)
    content = audit_pack_csv(
        shop.reporting(),
        shop.settings,
        generated_at=generated_at,
        today=utc_today(),
        days=days,
    )
    _write_document(ctx, content, output, audit_pack_filename(generated_at))


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_group, name="export")
