from .matrix import (
    as_count_matrix,
    n_samples,
    n_features,
    column_sums,
    row_sums,
    cell_count,
    zero_count,
    occurrence_fraction,
)

__all__ = [
    "as_count_matrix",
    "n_samples",
    "n_features",
    "column_sums",
    "row_sums",
    "cell_count",
    "zero_count",
    "occurrence_fraction",
]
