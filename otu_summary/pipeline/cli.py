"""
Typer CLI wrappers for otusummary.
"""
from __future__ import annotations
import pathlib
from typing import List, Optional

import typer

from ..errors import OTUSummaryError
from .driver import run_summary, run_batch_summary, DEFAULT_SEP

# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────
_SEP_ALIASES = {"\\t": "\t", "tab": "\t", "comma": ",", "csv": ",", "tsv": "\t"}


def _parse_sep(sep: str) -> str:
    """Accept a literal separator or one of: \\t, tab, tsv, comma, csv."""
    sep = _SEP_ALIASES.get(sep.lower(), sep)
    if len(sep) != 1:
        _fail(f"Separator must be a single character, got {sep!r}")
    return sep


def _fail(err):
    typer.secho(f"❌ {err}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


# ──────────────────────────────────────────────────────────────────────────────
# Typer app
# ──────────────────────────────────────────────────────────────────────────────
app = typer.Typer(add_completion=False, help="OTU table summary CLI")

# ------------------------------------------------------------------ summarize
@app.command("summarize")
def summarize(
    datasets: List[str] = typer.Argument(
        ...,
        help="Count tables as NAME=PATH (repeatable); bare PATHs are named Phys1..N.",
    ),
    extended: bool = typer.Option(
        False, "--extended", help="Add quartiles, CQV, occurrence, singletons and sparsity"
    ),
    long: bool = typer.Option(
        False, "--long", help="One row per dataset × statistic (no percentage rows)"
    ),
    sep: str = typer.Option(DEFAULT_SEP, "--sep", help="Output delimiter (default tab)"),
    output: Optional[pathlib.Path] = typer.Option(
        None, "--output", "-o", help="Write the table here instead of stdout"
    ),
    samples_as_rows: bool = typer.Option(
        False, "--samples-as-rows", help="Input tables have samples in rows, OTUs in columns"
    ),
    drop_empty_samples: bool = typer.Option(
        False, "--drop-empty-samples", help="Remove samples with zero reads before summarizing"
    ),
    threads: int = typer.Option(1, "--threads", help="CPU cores (default 1)"),
):
    """Compare one or more OTU count tables."""
    try:
        run_summary(
            datasets,
            extended=extended,
            long=long,
            sep=_parse_sep(sep),
            samples_as_rows=samples_as_rows,
            drop_empty=drop_empty_samples,
            output=output,
            num_workers=threads,
        )
    except (OTUSummaryError, FileNotFoundError, ValueError) as e:
        _fail(e)

# ------------------------------------------------------------------ run-batch
@app.command("run-batch")
def run_batch(
    manifest: pathlib.Path,
    threads: int = typer.Option(1, "--threads", help="CPU cores per comparison"),
):
    """Run every comparison in a manifest JSON."""
    try:
        run_batch_summary(manifest, global_threads=threads)
    except (OTUSummaryError, FileNotFoundError, ValueError, KeyError) as e:
        _fail(e)


if __name__ == "__main__":
    app()
