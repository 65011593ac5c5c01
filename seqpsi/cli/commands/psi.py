"""Psi computation from a prepared sequences table."""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import pandas as pd

logger = logging.getLogger(__name__)

METHOD_CHOICES = ["manhattan", "euclidean", "chi", "hellinger"]
FORMAT_CHOICES = ["table", "matrix"]


def write_result(result: pd.DataFrame, path: Optional[Path], fmt: str = "csv") -> None:
    """Write a psi table or matrix as CSV or JSON to ``path`` (stdout if None)."""
    is_matrix = result.index.name == "sequence"
    if fmt == "json":
        text = result.to_json(orient="index" if is_matrix else "records", indent=2)
    else:
        text = result.to_csv(index=is_matrix)

    if path is None:
        click.echo(text, nl=False)
        return
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    logger.info(f"Wrote {path}")


def register_psi_commands(cli: click.Group) -> None:
    """Register the psi command."""
    @cli.command("psi", help="Compute psi for every pair of sequences in a table")
    @click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("--group-col", "-g", required=True, help="Column identifying each sequence")
    @click.option("--time-col", "-t", default=None, help="Time/depth/rank column (not compared)")
    @click.option("--exclude", "-x", "exclude", multiple=True, help="Column to ignore (repeatable)")
    @click.option("--sep", default=",", show_default=True, help="Field delimiter of the input")
    @click.option("--method", "-m", default="manhattan", show_default=True,
                  type=click.Choice(METHOD_CHOICES, case_sensitive=False),
                  help="Distance between samples")
    @click.option("--diagonal", is_flag=True, help="Allow diagonal steps in the least-cost path")
    @click.option("--format", "-f", "fmt", default="table", show_default=True,
                  type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
                  help="Long table or square matrix")
    @click.option("--serial", is_flag=True, help="Compute pairs in a single thread")
    @click.option("--n-jobs", "-j", type=int, default=None, help="Maximum number of workers")
    @click.option("--lenient", is_flag=True,
                  help="Record pairs with zero autosum as NaN instead of failing")
    @click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
                  help="Output file (.csv or .json); stdout if omitted")
    def psi(input_file: Path, group_col: str, time_col: Optional[str], exclude: Tuple[str, ...],
            sep: str, method: str, diagonal: bool, fmt: str, serial: bool,
            n_jobs: Optional[int], lenient: bool, output: Optional[Path]):
        """Compute psi for a prepared sequences table.

        Examples:

        \b
            seqpsi psi pollen.csv --group-col core --time-col depth
            seqpsi psi pollen.csv -g core -m hellinger --diagonal -f matrix -o psi.csv
        """
        from ...api import workflow_psi
        from ...exceptions import PsiError

        try:
            df = pd.read_csv(input_file, sep=sep, dtype={group_col: str})
            result = workflow_psi(
                df,
                group_col=group_col,
                time_col=time_col,
                exclude_columns=list(exclude) or None,
                method=method,
                diagonal=diagonal,
                output=fmt,
                parallel=not serial,
                n_jobs=n_jobs,
                strict=not lenient,
            )
        except (PsiError, ValueError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        out_fmt = "json" if output is not None and output.suffix.lower() == ".json" else "csv"
        write_result(result, output, out_fmt)
