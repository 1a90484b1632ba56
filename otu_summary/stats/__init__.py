from .summarize import (
    Statistic,
    BASIC_STATS,
    EXTENDED_STATS,
    summarize,
    quartiles,
    cqv,
)
from .aggregate import (
    build_summary,
    stack_records,
    long_to_wide,
    wide_to_long,
    append_percentages,
)

__all__ = [
    "Statistic",
    "BASIC_STATS",
    "EXTENDED_STATS",
    "summarize",
    "quartiles",
    "cqv",
    "build_summary",
    "stack_records",
    "long_to_wide",
    "wide_to_long",
    "append_percentages",
]
