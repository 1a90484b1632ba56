from __future__ import annotations
import sys
from collections import OrderedDict
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import pandas as pd
from joblib import Parallel, delayed

from ..core.matrix import as_count_matrix
from ..errors import DuplicateNameError
from ..qc.filters import prune_features, drop_empty_samples
from ..qc.names import default_names

PathLike = Union[str, Path]


def infer_sep(path: PathLike) -> str:
    return "," if Path(path).suffix.lower() == ".csv" else "\t"


def _header_row(path: Path) -> int:
    """
    Index of the header line.  ``#`` lines are comments, except a BIOM-style
    ``#OTU ID`` line which *is* the header.
    """
    with open(path) as fh:
        for i, line in enumerate(fh):
            if line.startswith("#OTU") or not line.startswith("#"):
                return i
    return 0


def read_count_table(path: PathLike,
                     sep: Optional[str] = None,
                     samples_as_rows: bool = False) -> pd.DataFrame:
    """
    Load a delimited count table: first column = OTU IDs, header = sample IDs.
    With `samples_as_rows` the file is transposed after reading.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Count table not found: {path}")

    df = pd.read_csv(path,
                     sep=sep or infer_sep(path),
                     skiprows=_header_row(path),
                     index_col=0)
    if samples_as_rows:
        df = df.T
    df.index = df.index.astype(str)
    df.columns = df.columns.astype(str)
    return as_count_matrix(df)


# ──────────────────────────────────────────────────────────────────────────────
def parse_dataset_arg(arg: str) -> Tuple[Optional[str], Path]:
    """``"raw=counts.tsv"`` → ("raw", Path("counts.tsv")); a bare path has no name."""
    name, sep, path = arg.partition("=")
    if not sep:
        return None, Path(arg)
    if not name or not path:
        raise ValueError(f"Malformed dataset argument '{arg}' (expected NAME=PATH)")
    return name, Path(path)


def _load_one(path: Path, sep, samples_as_rows, min_reads, drop_empty):
    print(f"🚀 Loading {path}...", file=sys.stderr)
    df = read_count_table(path, sep=sep, samples_as_rows=samples_as_rows)
    if min_reads is not None:
        df = prune_features(df, min_reads=min_reads, verbose=True)
    if drop_empty:
        df = drop_empty_samples(df, verbose=True)
    return df


def _parse_spec(spec, min_reads):
    if isinstance(spec, str):
        return (*parse_dataset_arg(spec), min_reads)
    name, path, *rest = spec
    return name, Path(path), (rest[0] if rest and rest[0] is not None else min_reads)


def load_datasets(specs: Iterable[Union[str, tuple]],
                  *,
                  sep: Optional[str] = None,
                  samples_as_rows: bool = False,
                  min_reads: Optional[float] = None,
                  drop_empty: bool = False,
                  num_workers: int = 1) -> "OrderedDict[str, pd.DataFrame]":
    """
    Read several count tables, keeping their order.

    `specs` holds ``"name=path"`` strings, ``(name, path)`` pairs or
    ``(name, path, min_reads)`` triples (per-table pruning threshold).  If no
    entry is named they become Phys1..N; unnamed entries mixed with named
    ones take the file stem.  `drop_empty` removes all-zero samples after
    pruning.
    """
    parsed = [_parse_spec(s, min_reads) for s in specs]
    if not parsed:
        raise ValueError("No count tables given")

    if all(name is None for name, _, _ in parsed):
        names = default_names(len(parsed))
    else:
        names = [name if name is not None else path.stem for name, path, _ in parsed]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise DuplicateNameError(f"Dataset name(s) used more than once: {dupes}")

    tables = Parallel(n_jobs=num_workers)(
        delayed(_load_one)(path, sep, samples_as_rows, thr, drop_empty) for _, path, thr in parsed
    )
    return OrderedDict(zip(names, tables))
