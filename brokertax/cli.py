"""Typer CLI interface for brokertax."""

import json
import logging
from pathlib import Path

import typer

from brokertax.exceptions import BrokerTaxError, SectionNotFoundError
from brokertax.ingestion.importer import FileImporter, ImportResult, ReportSession
from brokertax.parsing.sections import normalize_section_name

app = typer.Typer(
    name="brokertax",
    help="brokertax: capital gains, dividends and foreign tax from broker statements.",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """brokertax: capital gains, dividends and foreign tax from broker statements."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(file: Path) -> ImportResult:
    """Import a statement, exiting with status 1 on failure."""
    try:
        return FileImporter().import_file(file)
    except (BrokerTaxError, FileNotFoundError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


@app.command()
def sections(
    file: Path = typer.Argument(..., help="Broker statement CSV"),
) -> None:
    """List the sections found in a statement."""
    report = _load(file).report

    typer.echo(f"  {'Key':<40} | {'Name':<40} | {'Cols':>4} | {'Rows':>5}")
    typer.echo(f" {'-' * 42}|{'-' * 42}|{'-' * 6}|{'-' * 6}")
    for key, section in report.sections.items():
        typer.echo(
            f"  {key:<40} | {section.name:<40} | {len(section.headers):>4} | {len(section.rows):>5}"
        )


@app.command()
def show(
    file: Path = typer.Argument(..., help="Broker statement CSV"),
    section: str = typer.Argument(..., help="Section key or label, e.g. 'trades' or 'Trades'"),
    json_output: bool = typer.Option(False, "--json", help="Output rows as JSON"),
) -> None:
    """Print the rows of one section."""
    report = _load(file).report
    key = section if report.has_section(section) else normalize_section_name(section)
    data = report.section(key)
    if data is None:
        typer.echo(f"Error: {SectionNotFoundError(section, list(report.sections))}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(data.model_dump(), indent=2, ensure_ascii=False))
        return

    from rich.console import Console
    from rich.table import Table

    table = Table(title=data.name)
    table.add_column("Type")
    for header in data.headers:
        table.add_column(header)
    for row in data.rows:
        table.add_row(row.get("_record_type", ""), *(row.get(h, "") for h in data.headers))
    Console().print(table)


@app.command()
def tax(
    file: Path = typer.Argument(..., help="Broker statement CSV"),
    year: int = typer.Option(..., "--year", "-y", help="Tax year"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to a file"),
) -> None:
    """Compute capital gains, dividends and foreign taxes for a tax year."""
    from brokertax.engines.extraction import TaxDataExtractor
    from brokertax.reports.tax_summary import TaxReportGenerator

    report = _load(file).report
    data = TaxDataExtractor().extract(report, year)

    if json_output:
        text = data.model_dump_json(indent=2)
    else:
        text = TaxReportGenerator().render(data)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Report written to {output}")
    else:
        typer.echo(text)


@app.command()
def summary(
    file: Path = typer.Argument(..., help="Broker statement CSV"),
) -> None:
    """Show section count, section names and row count of a statement."""
    session = ReportSession()
    session.replace(_load(file))
    result = session.summary()
    typer.echo(f"File:       {result.current_file_name}")
    typer.echo(f"Sections:   {result.section_count}")
    typer.echo(f"Data rows:  {result.total_data_rows}")
    for name in result.section_names:
        typer.echo(f"  - {name}")
