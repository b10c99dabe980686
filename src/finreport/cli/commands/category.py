"""Category management commands."""

import click

from finreport.domain.category import CategoryService
from finreport.domain.entities import TransactionKind


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories in tree format."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    tree = service.get_flat_tree()
    if not tree:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for entry in tree:
        prefix = "  " * entry.depth
        cat = entry.category
        click.echo(f"{prefix}{cat.name} (ID: {cat.id}, {cat.kind.value.lower()})")


@category_group.command("create")
@click.argument("name")
@click.option("--parent", help="Parent category path (e.g., 'Food & Dining')")
@click.option(
    "--kind",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    help="Category kind for root categories (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, parent: str | None, kind: str):
    """Create a new category.

    A subcategory takes the kind of its parent.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            name=name, parent_path=parent, kind=TransactionKind(kind.upper())
        )
        parent_str = f" under '{parent}'" if parent else ""
        click.echo(f"Created category '{name}'{parent_str} (ID: {category_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
