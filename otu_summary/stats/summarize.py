"""
Per-dataset summary statistics for a single count matrix.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Optional

import numpy as np
import pandas as pd

from ..core.matrix import (
    as_count_matrix, n_samples, n_features, column_sums, row_sums,
    cell_count, zero_count, occurrence_fraction,
)
from ..errors import EmptyDatasetError


class Statistic(str, Enum):
    """Every row label of the summary table, in output order."""

    # basic
    N_SAMPLES = "Number of samples"
    N_OTUS = "Number of OTUs"
    TOTAL_READS = "Total number of reads"
    MEAN_READS_PER_OTU = "Average number of reads per OTU"
    MEAN_READS_PER_SAMPLE = "Average number of reads per sample"

    # extended, OTU-wise
    MEDIAN_READS_PER_OTU = "Median number of reads per OTU"
    MIN_OTU_ABUNDANCE = "Min total OTU abundance"
    Q1_OTU_ABUNDANCE = "Q1 of total OTU abundance"
    Q3_OTU_ABUNDANCE = "Q3 of total OTU abundance"
    MAX_OTU_ABUNDANCE = "Max total OTU abundance"
    CQV_OTU_ABUNDANCE = "Coefficient of quartile variation in OTU abundance"
    MEAN_OTU_OCCURRENCE = "Average OTU occurrence, percents"
    MEDIAN_OTU_OCCURRENCE = "Median OTU occurrence, percents"
    N_SINGLETONS = "Number of singletons"
    PCT_SINGLETONS = "Percentage of singletons"

    # extended, sample-wise
    MEDIAN_READS_PER_SAMPLE = "Median number of reads per sample"
    MIN_SAMPLE_ABUNDANCE = "Min total sample abundance"
    Q1_SAMPLE_ABUNDANCE = "Q1 of total sample abundance"
    Q3_SAMPLE_ABUNDANCE = "Q3 of total sample abundance"
    MAX_SAMPLE_ABUNDANCE = "Max total sample abundance"
    CQV_SAMPLE_ABUNDANCE = "Coefficient of quartile variation in sample abundance"

    # extended, whole matrix
    N_ZEROS = "Data sparsity (number of zeros)"
    PCT_ZEROS = "Data sparsity (percentage of zeros)"

    # cross-dataset, wide form only
    PCT_READS = "Percentage of reads"
    PCT_OTUS = "Percentage of OTUs"

    def __str__(self) -> str:
        return self.value


BASIC_STATS = (
    Statistic.N_SAMPLES,
    Statistic.N_OTUS,
    Statistic.TOTAL_READS,
    Statistic.MEAN_READS_PER_OTU,
    Statistic.MEAN_READS_PER_SAMPLE,
)

EXTENDED_STATS = (
    Statistic.MEDIAN_READS_PER_OTU,
    Statistic.MIN_OTU_ABUNDANCE,
    Statistic.Q1_OTU_ABUNDANCE,
    Statistic.Q3_OTU_ABUNDANCE,
    Statistic.MAX_OTU_ABUNDANCE,
    Statistic.CQV_OTU_ABUNDANCE,
    Statistic.MEAN_OTU_OCCURRENCE,
    Statistic.MEDIAN_OTU_OCCURRENCE,
    Statistic.N_SINGLETONS,
    Statistic.PCT_SINGLETONS,
    Statistic.MEDIAN_READS_PER_SAMPLE,
    Statistic.MIN_SAMPLE_ABUNDANCE,
    Statistic.Q1_SAMPLE_ABUNDANCE,
    Statistic.Q3_SAMPLE_ABUNDANCE,
    Statistic.MAX_SAMPLE_ABUNDANCE,
    Statistic.CQV_SAMPLE_ABUNDANCE,
    Statistic.N_ZEROS,
    Statistic.PCT_ZEROS,
)

StatRecord = Dict[Statistic, float]


# ──────────────────────────────────────────────────────────────────────────────
# Quartile helpers
# ──────────────────────────────────────────────────────────────────────────────
def quartiles(values) -> tuple[float, float]:
    """Q1 and Q3 with linear interpolation between closest ranks."""
    q1, q3 = np.quantile(np.asarray(values, dtype=float), [0.25, 0.75], method="linear")
    return float(q1), float(q3)


def cqv(values) -> float:
    """
    Coefficient of quartile variation, (Q3 - Q1) / (Q3 + Q1).

    Q1 = Q3 = 0 yields NaN rather than an exception.
    """
    q1, q3 = quartiles(values)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(q3 - q1) / np.float64(q3 + q1))


def _distribution(values: np.ndarray) -> list[float]:
    """median, min, Q1, Q3, max, CQV – in that order."""
    q1, q3 = quartiles(values)
    return [
        float(np.median(values)),
        float(values.min()),
        q1,
        q3,
        float(values.max()),
        cqv(values),
    ]


# ──────────────────────────────────────────────────────────────────────────────
def summarize(matrix, extended: bool = False, *, name: Optional[str] = None) -> StatRecord:
    """
    Summary statistics for one count matrix (features × samples).

    Returns an ordered ``{Statistic: value}`` mapping; the five basic
    statistics always come first, the extended block follows when
    *extended* is set.  Raises ``EmptyDatasetError`` for a matrix without
    samples or features.
    """
    matrix = as_count_matrix(matrix)
    label = f"Dataset '{name}'" if name is not None else "Count matrix"
    if n_samples(matrix) == 0:
        raise EmptyDatasetError(f"{label} has no samples")
    if n_features(matrix) == 0:
        raise EmptyDatasetError(f"{label} has no OTUs")

    otu_tot = row_sums(matrix).to_numpy(dtype=float)
    smp_tot = column_sums(matrix).to_numpy(dtype=float)

    res: StatRecord = {
        Statistic.N_SAMPLES:             float(n_samples(matrix)),
        Statistic.N_OTUS:                float(n_features(matrix)),
        Statistic.TOTAL_READS:           float(otu_tot.sum()),
        Statistic.MEAN_READS_PER_OTU:    float(otu_tot.mean()),
        Statistic.MEAN_READS_PER_SAMPLE: float(smp_tot.mean()),
    }
    if not extended:
        return res

    occ = occurrence_fraction(matrix).to_numpy(dtype=float)
    n_single = int((otu_tot == 1).sum())
    n_zero = zero_count(matrix)

    values = (
        _distribution(otu_tot)
        + [
            float(occ.mean() * 100),
            float(np.median(occ) * 100),
            float(n_single),
            n_single * 100 / len(otu_tot),
        ]
        + _distribution(smp_tot)
        + [float(n_zero), n_zero * 100 / cell_count(matrix)]
    )
    res.update(zip(EXTENDED_STATS, values))
    return res


def record_to_frame(record: StatRecord, dataset: str) -> pd.DataFrame:
    """Long, tidy rows (Dataset, Parameter, Value) for one StatRecord."""
    return pd.DataFrame({
        "Dataset":   dataset,
        "Parameter": [s.value for s in record],
        "Value":     list(record.values()),
    })
