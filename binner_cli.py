"""
Command-line interface for the binner.

Reads one numeric column from a Parquet file and prints its histogram as
JSON, or lists the columns of the file.

Example:
    $ binner -f athletes.parquet -c weight -a jenks -n 5
    $ binner -f athletes.parquet -c weight --bins 60,80,100,null -o out.json
    $ binner -f athletes.parquet --list-columns
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console

from binner import (
    DEFAULT_NUM_BINS,
    DEFAULT_STD_DEV_SIZE,
    BinnerError,
    Binner,
    Custom,
    __version__,
    list_columns,
    parse_algorithm,
)

logger = logging.getLogger(__name__)

# Diagnostics go to stderr; stdout is reserved for JSON
console = Console(stderr=True)

app = typer.Typer(
    name="binner",
    help="Create histograms from Parquet file data using various binning algorithms.",
    add_completion=False,
)


class Algorithm(str, Enum):
    jenks = "jenks"
    quantile = "quantile"
    equal_interval = "equal-interval"
    standard_deviation = "standard-deviation"
    head_tail = "head-tail"


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging: 0=WARNING, 1=INFO, 2+=DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _split_bins(raw: List[str]) -> List[str]:
    # Accepts both "--bins 1,2,3" and repeated "--bins 1 --bins 2"
    tokens = []
    for item in raw:
        tokens.extend(item.split(','))
    return tokens


def _version_callback(value: bool):
    if value:
        typer.echo(f"binner {__version__}")
        raise typer.Exit()


@app.command()
def main(
    file: Annotated[
        Path,
        typer.Option("--file", "-f", help="Path to the input Parquet file"),
    ],
    column: Annotated[
        Optional[str],
        typer.Option("--column", "-c", help="Name of the numeric column to create histogram bins for"),
    ] = None,
    algorithm: Annotated[
        Optional[Algorithm],
        typer.Option("--algorithm", "-a", help="Algorithm for calculating bin boundaries"),
    ] = None,
    num_bins: Annotated[
        int,
        typer.Option("--num-bins", "-n", help="Target number of bins to create"),
    ] = DEFAULT_NUM_BINS,
    std_dev_size: Annotated[
        float,
        typer.Option("--std-dev-size", help="Number of standard deviations for bin sizing"),
    ] = DEFAULT_STD_DEV_SIZE,
    bins: Annotated[
        Optional[List[str]],
        typer.Option(
            "--bins",
            help="Custom bin boundaries (comma-separated). Use 'null' to include a null values bin",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="File path to write JSON results (optional)"),
    ] = None,
    show_columns: Annotated[
        bool,
        typer.Option("--list-columns", help="Show available columns in the file and exit"),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase logging verbosity (-v=INFO, -vv=DEBUG)"),
    ] = 0,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """Create a histogram for one numeric column of a Parquet file."""
    setup_logging(verbose)

    try:
        if show_columns:
            names = list_columns(file)
            typer.echo(f"Available columns in {file}:")
            for i, name in enumerate(names, start=1):
                typer.echo(f"  {i}. {name}")
            return

        if column is None:
            console.print("Error: Column name is required when not listing columns", soft_wrap=True)
            raise typer.Exit(code=2)

        if bins:
            strategy = Custom.parse(_split_bins(bins))
        elif algorithm is not None:
            strategy = parse_algorithm(algorithm.value, num_bins, std_dev_size)
        else:
            console.print("Error: Either algorithm or custom bins must be provided", soft_wrap=True)
            raise typer.Exit(code=2)

        result = Binner(strategy).bin_source(file, column)

    except BinnerError as e:
        logger.debug("Binning failed", exc_info=True)
        console.print(f"Error: {e}", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)

    json_output = json.dumps(result.to_dict(), indent=2)
    if output is not None:
        output.write_text(json_output, encoding="utf-8")
        console.print(f"Results written to {output}", markup=False, soft_wrap=True)
    else:
        typer.echo(json_output)


def run() -> None:
    """Entry point for the ``binner`` console script."""
    app()


if __name__ == "__main__":
    run()
