"""
Side-by-side summary of several count matrices.

`build_summary` runs `summarize` on each dataset, stacks the records into a
long table and, unless *long* is requested, pivots it so each dataset becomes
a column.  With two or more datasets the wide table gets two extra rows with
reads / OTUs relative to the largest dataset.
"""
from __future__ import annotations
from collections.abc import Mapping
from typing import Optional, Sequence

import pandas as pd
from joblib import Parallel, delayed

from ..errors import MissingStatisticError
from ..qc.names import resolve_dataset_names
from .summarize import Statistic, StatRecord, summarize, record_to_frame

LONG_COLUMNS = ["Dataset", "Parameter", "Value"]

# (source statistic, derived row) – appended in this order
PERCENTAGE_ROWS = (
    (Statistic.TOTAL_READS, Statistic.PCT_READS),
    (Statistic.N_OTUS, Statistic.PCT_OTUS),
)


# ──────────────────────────────────────────────────────────────────────────────
# Stacking / reshaping
# ──────────────────────────────────────────────────────────────────────────────
def stack_records(records: Sequence[StatRecord], names: Sequence[str]) -> pd.DataFrame:
    """Long table; dataset blocks in the order given."""
    if not records:
        return pd.DataFrame(columns=LONG_COLUMNS)
    frames = [record_to_frame(rec, name) for rec, name in zip(records, names)]
    return pd.concat(frames, ignore_index=True)[LONG_COLUMNS]


def long_to_wide(long_df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per Parameter, one column per Dataset.

    Rows keep the first-seen Parameter order of *long_df* and columns keep
    the first-seen Dataset order; pandas' own pivot would sort both.
    """
    row_order = pd.unique(long_df["Parameter"])
    col_order = pd.unique(long_df["Dataset"])

    wide = (long_df.pivot(index="Parameter", columns="Dataset", values="Value")
                   .reindex(index=row_order, columns=col_order))
    wide.index.name = "Parameter"
    wide.columns.name = None
    return wide.reset_index()


def wide_to_long(wide_df: pd.DataFrame) -> pd.DataFrame:
    """Inverse of `long_to_wide` (dataset-major row order)."""
    datasets = [c for c in wide_df.columns if c != "Parameter"]
    out = wide_df.melt(id_vars="Parameter", value_vars=datasets,
                       var_name="Dataset", value_name="Value")
    return out[LONG_COLUMNS]


def append_percentages(wide_df: pd.DataFrame) -> pd.DataFrame:
    """
    Add "Percentage of reads" / "Percentage of OTUs":
    100 · value / max(value over datasets), per dataset column.
    """
    tbl = wide_df.set_index("Parameter")
    missing = [src.value for src, _ in PERCENTAGE_ROWS if src.value not in tbl.index]
    if missing:
        raise MissingStatisticError(f"Cannot derive percentages, missing row(s): {missing}")

    src = tbl.loc[[s.value for s, _ in PERCENTAGE_ROWS]].astype(float)
    pct = src.div(src.max(axis=1), axis=0).mul(100)
    pct.index = [dst.value for _, dst in PERCENTAGE_ROWS]
    pct.index.name = "Parameter"
    return pd.concat([tbl, pct]).reset_index()


# ──────────────────────────────────────────────────────────────────────────────
def _split_datasets(datasets, names):
    if isinstance(datasets, Mapping):
        if names is None:
            names = list(datasets.keys())
        return list(datasets.values()), names
    return list(datasets), names


def build_summary(datasets,
                  extended: bool = False,
                  long: bool = False,
                  *,
                  names: Optional[Sequence[str]] = None,
                  n_jobs: int = 1) -> pd.DataFrame:
    """
    Compare one or more count matrices.

    Parameters
    ----------
    datasets : mapping name → count matrix, or a sequence of matrices
    extended : add the distributional statistics (quartiles, CQV, occurrence,
               singletons, sparsity)
    long     : return (Dataset, Parameter, Value) rows instead of the wide
               table; percentage rows are only produced in wide form
    names    : labels for a sequence of matrices (or overrides mapping keys);
               ``Phys1..N`` when omitted
    n_jobs   : joblib workers for the per-dataset summaries

    Non-fatal diagnostics (renamed labels) are listed in
    ``result.attrs["diagnostics"]``.
    """
    matrices, names = _split_datasets(datasets, names)
    if not matrices:
        raise ValueError("No datasets to summarize")
    diagnostics: list[str] = []
    names = resolve_dataset_names(len(matrices), names, diagnostics)

    if n_jobs == 1 or len(matrices) < 2:
        records = [summarize(m, extended, name=n) for m, n in zip(matrices, names)]
    else:
        records = Parallel(n_jobs=n_jobs)(
            delayed(summarize)(m, extended, name=n) for m, n in zip(matrices, names)
        )

    res = stack_records(records, names)

    if not long:
        res = long_to_wide(res)
        if len(matrices) > 1:
            res = append_percentages(res)

    res.attrs["diagnostics"] = diagnostics
    return res
