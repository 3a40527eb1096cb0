"""Sales counter command."""

import click
from veira.cli.error_handling import handle_domain_error
from veira.domain.cart import Cart
from veira.domain.entities import PaymentMethod
from veira.domain.errors import DomainError, ValidationError
from veira.utils.money import format_kes

METHOD_CHOICES = [method.name.lower() for method in PaymentMethod]


def parse_item_spec(spec: str) -> tuple[str, int]:
    """Split ``ID[:QTY]`` into product id and quantity.

    Raises:
        ValidationError: If the quantity is not a positive integer
    """
    product_id, _, quantity = spec.partition(":")
    product_id = product_id.strip()
    if not product_id:
        raise ValidationError(f"Invalid item '{spec}': missing product id")
    if not quantity:
        return product_id, 1
    if not quantity.strip().isdecimal() or int(quantity) < 1:
        raise ValidationError(f"Invalid item '{spec}': quantity must be a positive whole number")
    return product_id, int(quantity)


@click.command("sell")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Product to sell as ID or ID:QTY (repeat for more lines)",
)
@click.option(
    "--method",
    type=click.Choice(METHOD_CHOICES, case_sensitive=False),
    default="mpesa",
    show_default=True,
    help="Payment method",
)
@click.option("--customer", help="Customer name")
@click.pass_context
def sell(ctx, items: tuple[str, ...], method: str, customer: str | None):
    """Complete a sale.

    Examples:
        veira sell --item 1:2 --item 2
        veira sell --item 4 --method cash --customer "Wanjiru"
    """
    shop = ctx.obj["shop"]
    cart = Cart()

    try:
        for spec in items:
            product_id, quantity = parse_item_spec(spec)
            product = shop.catalog.require_product(product_id)
            cart.add_item(product)
            if quantity > 1:
                cart.adjust_quantity(product_id, quantity - 1)
        transaction = shop.checkout(cart, PaymentMethod[method.upper()], customer_name=customer)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Sale {transaction.id} recorded")
    for line in transaction.items:
        click.echo(f"  {line.quantity} x {line.name:<28} {format_kes(line.line_total):>16}")
    click.echo(f"  {'Subtotal':<32} {format_kes(transaction.subtotal):>16}")
    click.echo(f"  {'VAT (' + str(shop.settings.vat_rate) + '%)':<32} {format_kes(transaction.vat):>16}")
    click.echo(f"  {'Total':<32} {format_kes(transaction.total):>16}")
    click.echo(f"  Paid by {transaction.payment_method.value}")


def register_commands(cli):
    """Register sell command with main CLI."""
    cli.add_command(sell)
