"""
CRMStream CLI - scan CRM object collections as typed rows

Usage:
    crmstream scan <object> -c <name:kind> [-c ...] [options]
    crmstream kinds
"""

import logging
import sys
import time
from typing import Optional, Tuple

import click

from crmstream import __version__
from crmstream import query as query_fn
from crmstream.cli.formatters import FORMATTERS, get_formatter
from crmstream.core.errors import CRMStreamError
from crmstream.core.types import ColumnKind


@click.group()
@click.version_option(version=__version__, prog_name="crmstream")
@click.option("--verbose", "-v", is_flag=True, help="Log fetch progress to stderr")
def cli(verbose: bool):
    """
    CRMStream - query CRM contacts, companies and deals as typed rows
    """
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("object", type=str)
@click.option(
    "--column",
    "-c",
    "columns",
    multiple=True,
    required=True,
    help="Column spec name[:kind], e.g. properties.email:string (kind defaults to json)",
)
@click.option(
    "--api-key",
    envvar="HUBSPOT_API_KEY",
    required=True,
    help="Private app token (default: $HUBSPOT_API_KEY)",
)
@click.option(
    "--base-url",
    envvar="HUBSPOT_BASE_URL",
    default=None,
    help="API root (default: $HUBSPOT_BASE_URL or https://api.hubapi.com)",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(list(FORMATTERS), case_sensitive=False),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--limit",
    "-l",
    type=int,
    default=None,
    help="Stop after this many rows",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Write output to file instead of stdout",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colored output",
)
@click.option(
    "--time",
    "-t",
    "show_time",
    is_flag=True,
    help="Show scan time",
)
def scan(
    object: str,
    columns: Tuple[str, ...],
    api_key: str,
    base_url: Optional[str],
    format: str,
    limit: Optional[int],
    output: Optional[str],
    no_color: bool,
    show_time: bool,
):
    """
    Scan an object collection and print the requested columns

    Examples:

        \b
        # Contact emails as a table
        $ crmstream scan contacts -c id:string -c properties.email:string

        \b
        # Flat names fall back to the properties bag
        $ crmstream scan companies -c name:string -c industry:string -f json

        \b
        # Deal amounts as text, first 10 rows, to CSV
        $ crmstream scan deals -c amount:decimal -c createdAt:timestamp -l 10 -o deals.csv
    """
    fmt = format
    del format
    try:
        start_time = time.time()

        q = query_fn(object, api_key=api_key, base_url=base_url).select(*columns)
        if limit is not None:
            q = q.limit(limit)

        schema = q.schema()
        results_list = q.to_list()

        # Infer format from the output file extension if not set explicitly
        output_format = fmt
        if output and fmt == "table":
            if output.endswith(".json"):
                output_format = "json"
            elif output.endswith(".csv"):
                output_format = "csv"
            elif output.endswith(".md"):
                output_format = "markdown"

        formatter = get_formatter(output_format)
        output_text = formatter.format(
            results_list,
            no_color=no_color or (not sys.stdout.isatty()),
            show_footer=not output,
            embed_json=True,
            json_columns=[name for name in schema.get_column_names() if schema[name] == ColumnKind.JSON],
        )

        if show_time:
            elapsed = time.time() - start_time
            output_text += f"\nScanned {len(results_list)} rows in {elapsed:.3f}s"

        if output:
            with open(output, "w") as f:
                f.write(output_text)
            click.echo(f"Results written to {output} ({output_format} format)", err=True)
        else:
            click.echo(output_text)

    except (CRMStreamError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
def kinds():
    """
    List the column kinds a column spec can declare
    """
    for kind in ColumnKind:
        rule = "dedicated" if kind.has_dedicated_coercion() else "numeric as string"
        click.echo(f"{kind.value.lower():<12} {rule}")


if __name__ == "__main__":
    cli()
