"""Initialize default categories."""

import click

from finreport.domain.category import CategoryService
from finreport.domain.entities import TransactionKind


# Initial category tree structure: (name, parent, kind of root)
INITIAL_CATEGORIES = [
    # Root categories
    ("Income", None, TransactionKind.INCOME),
    ("Food & Dining", None, TransactionKind.EXPENSE),
    ("Transportation", None, TransactionKind.EXPENSE),
    ("Shopping", None, TransactionKind.EXPENSE),
    ("Bills & Utilities", None, TransactionKind.EXPENSE),
    ("Entertainment", None, TransactionKind.EXPENSE),
    ("Health & Fitness", None, TransactionKind.EXPENSE),
    ("Travel", None, TransactionKind.EXPENSE),
    ("Other", None, TransactionKind.EXPENSE),
    # Income subcategories
    ("Salary", "Income", None),
    ("Investment", "Income", None),
    ("Other Income", "Income", None),
    # Food & Dining subcategories
    ("Groceries", "Food & Dining", None),
    ("Restaurants", "Food & Dining", None),
    ("Coffee & Snacks", "Food & Dining", None),
    # Transportation subcategories
    ("Gas", "Transportation", None),
    ("Public Transit", "Transportation", None),
    ("Parking", "Transportation", None),
    ("Car Maintenance", "Transportation", None),
    # Shopping subcategories
    ("Clothing", "Shopping", None),
    ("Electronics", "Shopping", None),
    ("Home & Garden", "Shopping", None),
    # Bills & Utilities subcategories
    ("Electricity", "Bills & Utilities", None),
    ("Water", "Bills & Utilities", None),
    ("Internet", "Bills & Utilities", None),
    ("Phone", "Bills & Utilities", None),
    # Entertainment subcategories
    ("Movies", "Entertainment", None),
    ("Music", "Entertainment", None),
    ("Sports", "Entertainment", None),
    # Health & Fitness subcategories
    ("Gym", "Health & Fitness", None),
    ("Pharmacy", "Health & Fitness", None),
    ("Doctor", "Health & Fitness", None),
    # Travel subcategories
    ("Flights", "Travel", None),
    ("Hotels", "Travel", None),
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Initialize database with default category tree."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    if service.list_categories():
        click.echo("Categories already exist.")
        return

    click.echo("Creating initial category tree...")

    root_categories = [entry for entry in INITIAL_CATEGORIES if entry[1] is None]
    child_categories = [entry for entry in INITIAL_CATEGORIES if entry[1] is not None]

    created = 0
    errors = 0

    # Parents first so children can find them by path
    for category_name, parent_name, kind in root_categories + child_categories:
        try:
            if kind is None:
                service.create_category(name=category_name, parent_path=parent_name)
            else:
                service.create_category(name=category_name, kind=kind)
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create category '{category_name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} categories.")
    else:
        click.echo(f"Created {created} categories with {errors} errors.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
