"""YAML-based pipeline CLI commands."""

import logging
import sys
from pathlib import Path

import click

logger = logging.getLogger(__name__)


def register_pipeline_commands(cli: click.Group) -> None:
    """Register pipeline-related commands."""
    @cli.command("run", help="Run a psi pipeline from a YAML configuration")
    @click.argument("config", type=click.Path(exists=True, path_type=Path))
    @click.option(
        "--validate-only",
        is_flag=True,
        help="Only validate configuration, don't run pipeline"
    )
    def run(config: Path, validate_only: bool):
        """Run a psi pipeline from a YAML configuration file.

        Examples:

        \b
            seqpsi run configs/pollen_cores.yaml
            seqpsi run configs/pollen_cores.yaml --validate-only
        """
        from ...api import run_psi
        from ...config import OutputFormat, PipelineConfig
        from ...exceptions import PsiError
        from ...io_adapters import read_sequences
        from .psi import write_result

        try:
            cfg = PipelineConfig.from_yaml(config)
        except (ValueError, TypeError, FileNotFoundError) as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(1)

        if validate_only:
            click.echo(f"Configuration valid: {config}")
            click.echo(f"  Dataset: {cfg.dataset.path} (grouped by {cfg.dataset.group_col})")
            click.echo(f"  Method: {cfg.psi.method.value}, diagonal={cfg.psi.diagonal}")
            click.echo(f"  Output: {cfg.output.path or 'stdout'} ({cfg.output.format})")
            return

        logging.getLogger("seqpsi").setLevel(cfg.logging.level)
        if cfg.psi.output is OutputFormat.LIST:
            click.echo("Configuration error: psi.output must be 'table' or 'matrix' for file output", err=True)
            sys.exit(1)

        try:
            sequences = read_sequences(
                cfg.dataset.path,
                group_col=cfg.dataset.group_col,
                time_col=cfg.dataset.time_col,
                exclude_columns=cfg.dataset.exclude_columns,
                sep=cfg.dataset.sep,
            )
            result = run_psi(sequences, cfg.psi)
        except (PsiError, ValueError, FileNotFoundError) as e:
            click.echo(f"Pipeline failed: {e}", err=True)
            sys.exit(1)

        out_path = Path(cfg.output.path) if cfg.output.path else None
        write_result(result, out_path, cfg.output.format)
