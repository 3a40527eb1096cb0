"""Product catalog commands."""

import click
from dataclasses import replace
from veira.cli.error_handling import handle_domain_error
from veira.domain.entities import Category, Product
from veira.domain.errors import DomainError
from veira.domain.reporting import stock_status
from veira.domain.roles import can_see_cost, require_stock_editor
from veira.utils.money import format_kes, parse_amount

CATEGORY_CHOICES = [category.name.lower() for category in Category]


def _parse_category(value: str | None) -> Category | None:
    if value is None:
        return None
    return Category[value.upper()]


def _parse_money_or_exit(ctx, label: str, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _print_products(products: list[Product], show_cost: bool) -> None:
    header = f"{'ID':<6} {'Name':<28} {'Category':<14} {'Price':>14}"
    if show_cost:
        header += f" {'Cost':>14}"
    header += f" {'Stock':>6}  Status"
    click.echo(header)
    click.echo("-" * len(header))
    for p in products:
        line = f"{p.id:<6} {p.name[:28]:<28} {p.category.value:<14} {format_kes(p.price):>14}"
        if show_cost:
            line += f" {format_kes(p.cost):>14}"
        line += f" {p.stock:>6}  {stock_status(p)}"
        click.echo(line)


@click.group()
def product_group():
    """Manage the product catalog."""
    pass


@product_group.command("list")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@click.pass_context
def list_products(ctx, category: str | None):
    """List products in catalog order."""
    shop = ctx.obj["shop"]
    products = shop.catalog.search("", _parse_category(category))
    if not products:
        click.echo("No products found.")
        return
    _print_products(products, can_see_cost(shop.settings.user_role))


@product_group.command("search")
@click.argument("term")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@click.pass_context
def search_products(ctx, term: str, category: str | None):
    """Find products whose name contains TERM (case-insensitive).

    Examples:
        veira product search milk
        veira product search soap --category household
    """
    shop = ctx.obj["shop"]
    products = shop.catalog.search(term, _parse_category(category))
    if not products:
        click.echo(f"No products match '{term}'.")
        return
    _print_products(products, can_see_cost(shop.settings.user_role))


@product_group.command("add")
@click.argument("name")
@click.option("--price", required=True, help="Unit retail price (e.g., 210 or 'KES 1,200')")
@click.option("--cost", default="0", help="Unit cost")
@click.option("--stock", type=int, default=0, help="Units on hand")
@click.option(
    "--category",
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    default="other",
    show_default=True,
)
@click.option("--image-url", help="Image reference (defaults to a placeholder)")
@click.pass_context
def add_product(ctx, name, price, cost, stock, category, image_url):
    """Add a product to the catalog.

    Examples:
        veira product add "Kabras Sugar 2kg" --price 360 --cost 310 --stock 12 --category food
    """
    shop = ctx.obj["shop"]
    price_value = _parse_money_or_exit(ctx, "price", price)
    cost_value = _parse_money_or_exit(ctx, "cost", cost)
    try:
        require_stock_editor(shop.settings.user_role, "add products")
        created = shop.create_product(
            name=name,
            price=price_value,
            cost=cost_value,
            stock=stock,
            category=_parse_category(category),
            image_url=image_url,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created product '{created.name}' (ID: {created.id})")


@product_group.command("edit")
@click.argument("product_id")
@click.option("--name", help="New name")
@click.option("--price", help="New unit price")
@click.option("--cost", help="New unit cost")
@click.option("--stock", type=int, help="New stock level")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@click.option("--image-url", help="New image reference")
@click.pass_context
def edit_product(ctx, product_id, name, price, cost, stock, category, image_url):
    """Edit a product. Options that are not given keep their value.

    Examples:
        veira product edit 4 --price 1250 --stock 10
    """
    shop = ctx.obj["shop"]
    changes = {}
    if name is not None:
        changes["name"] = name
    if price is not None:
        changes["price"] = _parse_money_or_exit(ctx, "price", price)
    if cost is not None:
        changes["cost"] = _parse_money_or_exit(ctx, "cost", cost)
    if stock is not None:
        changes["stock"] = stock
    if category is not None:
        changes["category"] = _parse_category(category)
    if image_url is not None:
        changes["image_url"] = image_url

    if not changes:
        click.echo("Error: Nothing to change. Provide at least one option.", err=True)
        ctx.exit(1)

    try:
        require_stock_editor(shop.settings.user_role, "edit products")
        existing = shop.catalog.require_product(product_id)
        updated = shop.update_product(replace(existing, **changes))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated product {updated.id} ({updated.name})")


@product_group.command("delete")
@click.argument("product_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_product(ctx, product_id: str, yes: bool):
    """Delete a product. Past sales keep their copy of it."""
    shop = ctx.obj["shop"]
    try:
        require_stock_editor(shop.settings.user_role, "delete products")
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    existing = shop.catalog.get_product(product_id)
    if existing is None:
        click.echo(f"Product {product_id} is not in the catalog; nothing to delete.")
        return
    if not yes:
        click.confirm(f"Delete '{existing.name}'?", abort=True)
    shop.remove_product(product_id)
    click.echo(f"Deleted product {product_id} ({existing.name})")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
