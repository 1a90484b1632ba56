"""
Top-level namespace
"""
from importlib.metadata import version as _ver

try:
    __version__ = _ver("otusummary")
except Exception:
    __version__ = "0+local"

# ----- high-level API ------------------------------------------------
from .stats.summarize import Statistic, summarize
from .stats.aggregate import build_summary
from .pipeline.driver import run_summary, run_batch_summary
from .errors import (
    OTUSummaryError,
    EmptyDatasetError,
    MissingStatisticError,
    DuplicateNameError,
    InvalidCountMatrixError,
    InvalidNameWarning,
)

__all__ = [
    "Statistic",
    "summarize",
    "build_summary",
    "run_summary",
    "run_batch_summary",
    "OTUSummaryError",
    "EmptyDatasetError",
    "MissingStatisticError",
    "DuplicateNameError",
    "InvalidCountMatrixError",
    "InvalidNameWarning",
]
