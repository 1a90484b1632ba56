"""
Count-table I/O helpers.
"""
from .tables import (
    infer_sep,
    read_count_table,
    parse_dataset_arg,
    load_datasets,
)

__all__ = [
    "infer_sep",
    "read_count_table",
    "parse_dataset_arg",
    "load_datasets",
]
