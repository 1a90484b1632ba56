"""
High-level drivers used by CLI & notebooks.
"""
from __future__ import annotations
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from ..io import load_datasets
from ..stats import build_summary

DEFAULT_SEP = "\t"
NA_REP = "NaN"


def get_output_dir(comparison: str) -> str:
    """Dated output directory for a comparison, created on demand."""
    date_str = datetime.today().strftime("%m-%d-%y")
    output_dir = f"./output/{comparison}_{date_str}"
    os.makedirs(output_dir, exist_ok=True)
    return output_dir


def format_table(table: pd.DataFrame, sep: str = DEFAULT_SEP) -> str:
    """Delimited text; non-finite cells are written as NaN."""
    return table.to_csv(sep=sep, index=False, na_rep=NA_REP)


# ──────────────────────────────────────────────────────────────────────────────
# Dataset resolver
# ──────────────────────────────────────────────────────────────────────────────
def _resolve_datasets(cfg: dict, base_dir: Optional[Path] = None) -> list[tuple]:
    """
    Manifest "datasets" block → (name, path, min_reads) triples.

    "datasets" is a name → entry object or a plain list of entries; an
    entry is either a path string or ``{"path": ..., "min_reads": ...}``.
    An entry without its own "min_reads" inherits the comparison/global one.
    Relative paths are taken relative to the manifest.
    """
    entries = cfg.get("datasets")
    if not entries:
        raise ValueError("Manifest entry has no 'datasets'")

    default_min = cfg.get("min_reads")
    out = []
    items = entries.items() if isinstance(entries, dict) else ((None, e) for e in entries)
    for name, entry in items:
        if isinstance(entry, dict):
            path, min_reads = entry["path"], entry.get("min_reads", default_min)
        else:
            path, min_reads = entry, default_min
        path = Path(path)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        out.append((name, path, min_reads))
    return out


# ──────────────────────────────────────────────────────────────────────────────
# Single comparison
# ──────────────────────────────────────────────────────────────────────────────
def run_summary(
    datasets,
    *,
    extended: bool = False,
    long: bool = False,
    sep: str = DEFAULT_SEP,
    samples_as_rows: bool = False,
    drop_empty: bool = False,
    output: Optional[Path] = None,
    num_workers: int = 1,
):
    """
    Load count tables (``"name=path"`` specs) or take already-loaded
    matrices (a mapping), build the comparison table and write it.

    Returns the table; when *output* is None the text is printed instead.
    """
    if isinstance(datasets, dict):
        matrices = datasets
    else:
        matrices = load_datasets(datasets, samples_as_rows=samples_as_rows,
                                 drop_empty=drop_empty, num_workers=num_workers)
    print(f"🔬 Summarizing {len(matrices)} dataset(s)", file=sys.stderr)

    table = build_summary(matrices, extended=extended, long=long, n_jobs=num_workers)
    for msg in table.attrs.get("diagnostics", []):
        print(f"⚠️  {msg}", file=sys.stderr)

    text = format_table(table, sep=sep)
    if output is None:
        print(text, end="")
    else:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        Path(output).write_text(text)
        print(f"💾 Summary written → {output}", file=sys.stderr)
    return table


# ──────────────────────────────────────────────────────────────────────────────
# Batch runner
# ──────────────────────────────────────────────────────────────────────────────
def run_batch_summary(
    manifest: Path,
    *,
    global_threads: int = 1,
) -> dict:
    """
    Run every comparison in a JSON manifest.

    Top-level keys other than "comparisons" are defaults that each
    comparison may override.  A manifest without "comparisons" is treated
    as a single comparison named after the file.
    """
    manifest = Path(manifest)
    data = json.loads(manifest.read_text())
    if "comparisons" not in data:          # accept flat style
        data = {"comparisons": {manifest.stem: data}}

    globals_ = {k: v for k, v in data.items() if k != "comparisons"}
    results = {}

    for comparison, cfg in data["comparisons"].items():
        cfg = {**globals_, **cfg}
        specs = _resolve_datasets(cfg, base_dir=manifest.parent)
        matrices = load_datasets(
            specs,
            sep=cfg.get("input_sep"),
            samples_as_rows=bool(cfg.get("samples_as_rows", False)),
            drop_empty=bool(cfg.get("drop_empty_samples", False)),
            num_workers=int(cfg.get("threads", global_threads)),
        )

        out_dir = cfg.get("output_dir")
        if out_dir is None:
            out_dir = get_output_dir(comparison)
        elif not Path(out_dir).is_absolute():
            out_dir = manifest.parent / out_dir
        sep = cfg.get("sep", DEFAULT_SEP)
        ext = "csv" if sep == "," else "tsv"

        print(f"📦 {comparison}: {len(matrices)} dataset(s)", file=sys.stderr)
        results[comparison] = run_summary(
            matrices,
            extended=bool(cfg.get("extended", False)),
            long=bool(cfg.get("long", False)),
            sep=sep,
            output=Path(out_dir) / f"summary_{comparison}.{ext}",
            num_workers=int(cfg.get("threads", global_threads)),
        )
    print(f"✅ Finished {len(results)} comparison(s)", file=sys.stderr)
    return results
