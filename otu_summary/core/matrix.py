"""
Accessors over a feature × sample count matrix.

Rows are features (OTUs / taxa), columns are samples.  Everything here is
read-only: no function modifies the matrix it is given.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from ..errors import InvalidCountMatrixError


# ──────────────────────────────────────────────────────────────────────────────
def as_count_matrix(obj) -> pd.DataFrame:
    """
    Return *obj* as a numeric DataFrame (features × samples).

    A 2-D array gets generated labels (``OTU1..``, ``Sample1..``); a DataFrame
    is returned as-is when it already holds numbers.
    """
    if isinstance(obj, pd.DataFrame):
        df = obj
    else:
        arr = np.asarray(obj)
        if arr.ndim != 2:
            raise InvalidCountMatrixError(
                f"count matrix must be two-dimensional, got {arr.ndim} dimension(s)"
            )
        df = pd.DataFrame(
            arr,
            index=[f"OTU{i}" for i in range(1, arr.shape[0] + 1)],
            columns=[f"Sample{j}" for j in range(1, arr.shape[1] + 1)],
        )

    # header-only tables come back as object columns; emptiness is reported later
    if df.size == 0:
        return df

    bad = [c for c in df.columns if not pd.api.types.is_numeric_dtype(df[c])]
    if bad:
        raise InvalidCountMatrixError(f"non-numeric sample column(s): {bad[:5]}")
    values = df.to_numpy(dtype=float)
    if not np.isfinite(values).all():
        raise InvalidCountMatrixError("count matrix contains missing or non-finite values")
    if (values < 0).any():
        raise InvalidCountMatrixError("count matrix contains negative values")
    return df


def n_samples(matrix: pd.DataFrame) -> int:
    return int(matrix.shape[1])


def n_features(matrix: pd.DataFrame) -> int:
    return int(matrix.shape[0])


def column_sums(matrix: pd.DataFrame) -> pd.Series:
    """Per-sample totals."""
    return matrix.sum(axis=0)


def row_sums(matrix: pd.DataFrame) -> pd.Series:
    """Per-feature totals."""
    return matrix.sum(axis=1)


def cell_count(matrix: pd.DataFrame) -> int:
    return int(matrix.size)


def zero_count(matrix: pd.DataFrame) -> int:
    return int((matrix.to_numpy() == 0).sum())


def occurrence_fraction(matrix: pd.DataFrame) -> pd.Series:
    """
    Fraction of samples in which each feature has a non-zero count.
    Features absent from every sample keep a value of 0.
    """
    if matrix.shape[1] == 0:
        return pd.Series(np.nan, index=matrix.index, dtype=float)
    return (matrix > 0).sum(axis=1) / matrix.shape[1]
