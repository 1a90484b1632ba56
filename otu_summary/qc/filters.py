from __future__ import annotations
import sys

import pandas as pd

from ..core.matrix import as_count_matrix, row_sums, column_sums


# --------------------------------------------------------------------------
def prune_features(matrix, min_reads: float = 1, verbose: bool = False) -> pd.DataFrame:
    """
    Keep only features whose total abundance is ≥ `min_reads`.
    Returns a new DataFrame; the input is left untouched.
    """
    df = as_count_matrix(matrix)
    keep = row_sums(df) >= min_reads
    if verbose:
        print(f"[Prune]   OTUs below {min_reads} reads removed : {(~keep).sum()} / {len(keep)}", file=sys.stderr)
    return df.loc[keep].copy()


def drop_empty_samples(matrix, verbose: bool = False) -> pd.DataFrame:
    """Remove samples without a single read."""
    df = as_count_matrix(matrix)
    keep = column_sums(df) > 0
    if verbose:
        print(f"[Samples] empty samples removed            : {(~keep).sum()} / {len(keep)}", file=sys.stderr)
    return df.loc[:, keep].copy()
