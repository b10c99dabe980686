"""Export command."""

import click

from finreport.cli.filter_options import filter_options, resolve_cli_filter
from finreport.domain.export import ExportService


@click.command("export")
@click.option(
    "--format",
    "export_format",
    type=click.Choice(["csv", "json", "backup"], case_sensitive=False),
    default="csv",
    show_default=True,
    help="csv or json for filtered transactions, backup for every record",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default="-",
    help="File to write (default: standard output)",
)
@filter_options
@click.pass_context
def export(
    ctx,
    export_format: str,
    output: str,
    preset: str | None,
    start_date: str | None,
    end_date: str | None,
    kind: str | None,
    account: str | None,
    category: str | None,
    search: str | None,
):
    """Export transactions or a full backup.

    Filter options apply to csv and json exports. A backup always
    contains every account, category and transaction.

    Examples:
        finreport export --preset all --format csv -o transactions.csv
        finreport export --format json --start-date 2024-01-01 --end-date 2024-12-31
        finreport export --format backup -o backup.json
    """
    service = ExportService(ctx.obj["db"])
    export_format = export_format.lower()

    try:
        if export_format == "backup":
            content = service.export_full_backup()
        else:
            filter = resolve_cli_filter(
                ctx,
                preset=preset,
                start_date=start_date,
                end_date=end_date,
                kind=kind,
                account=account,
                category=category,
                search=search,
            )
            if export_format == "json":
                content = service.export_transactions_json(filter)
            else:
                content = service.export_transactions_csv(filter)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    with click.open_file(output, "w", encoding="utf-8") as f:
        f.write(content)
        if export_format != "csv":
            f.write("\n")

    if output != "-":
        click.echo(f"Exported {export_format} to {output}", err=True)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
