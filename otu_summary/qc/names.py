"""
Dataset labels → column names of the summary table.
"""
from __future__ import annotations
import re
import warnings
from typing import Optional, Sequence

from ..errors import DuplicateNameError, InvalidNameWarning

DEFAULT_PREFIX = "Phys"

# words that cannot stand alone as a column name
_RESERVED = frozenset({
    "if", "else", "repeat", "while", "function", "for", "next", "break",
    "TRUE", "FALSE", "NULL", "Inf", "NaN", "NA", "NA_integer_", "NA_real_",
    "NA_character_", "NA_complex_", "in",
})
_INVALID_CHARS = re.compile(r"[^A-Za-z0-9._]")
_VALID_START = re.compile(r"^(?:[A-Za-z]|\.(?![0-9]))")


def default_names(n: int, prefix: str = DEFAULT_PREFIX) -> list[str]:
    return [f"{prefix}{i}" for i in range(1, n + 1)]


def sanitize_name(name) -> str:
    """
    Make *name* a syntactically valid identifier.

    Invalid characters become ``.``; a leading digit, underscore or
    ``.<digit>`` gets an ``X`` prefix; reserved words get a trailing ``.``.
    """
    new = _INVALID_CHARS.sub(".", str(name))
    if not _VALID_START.match(new):
        new = "X" + new
    if new in _RESERVED:
        new += "."
    return new


def resolve_dataset_names(n: int,
                          names: Optional[Sequence[str]] = None,
                          diagnostics: Optional[list[str]] = None) -> list[str]:
    """
    Column names for *n* datasets.

    Without *names* → ``Phys1..PhysN``.  Otherwise every label is
    sanitized; an ``InvalidNameWarning`` is issued (and appended to
    *diagnostics*) when any label changed.  Duplicates after sanitizing are
    rejected.
    """
    if names is None:
        return default_names(n)

    names = [str(x) for x in names]
    if len(names) != n:
        raise ValueError(f"Got {len(names)} name(s) for {n} dataset(s)")

    clean = [sanitize_name(x) for x in names]
    changed = [f"{old!r} → {new!r}" for old, new in zip(names, clean) if old != new]
    if changed:
        msg = ("Some of the dataset names were modified to be syntactically valid: "
               + ", ".join(changed))
        if diagnostics is not None:
            diagnostics.append(msg)
        warnings.warn(msg, InvalidNameWarning, stacklevel=3)

    seen: dict[str, str] = {}
    for old, new in zip(names, clean):
        if new in seen:
            raise DuplicateNameError(
                f"Datasets {seen[new]!r} and {old!r} both resolve to column {new!r}"
            )
        seen[new] = old
    return clean
