import math

import numpy as np
import pandas as pd
import pytest
from joblib import parallel_config

from otu_summary import build_summary
from otu_summary.errors import (
    DuplicateNameError, EmptyDatasetError, InvalidNameWarning, MissingStatisticError,
)
from otu_summary.stats.aggregate import (
    LONG_COLUMNS, append_percentages, long_to_wide, wide_to_long,
)
from otu_summary.stats.summarize import BASIC_STATS, EXTENDED_STATS

PCT_ROWS = ["Percentage of reads", "Percentage of OTUs"]


def _raw():
    # 2 OTUs, 100 reads
    return pd.DataFrame({"S1": [60, 0], "S2": [0, 40]}, index=["otu1", "otu2"])


def _trimmed():
    # 1 OTU, 50 reads
    return pd.DataFrame({"S1": [30], "S2": [20]}, index=["otu1"])


def _third():
    return pd.DataFrame({"S1": [1, 2, 3], "S2": [4, 5, 6]}, index=["a", "b", "c"])


def _row(wide, parameter):
    return wide.set_index("Parameter").loc[parameter]


# ----------------------------------------------------------------------
def test_wide_percentages_are_max_normalised():
    wide = build_summary({"raw": _raw(), "trimmed": _trimmed()})
    assert list(wide.columns) == ["Parameter", "raw", "trimmed"]
    assert list(wide["Parameter"].iloc[-2:]) == PCT_ROWS
    assert list(_row(wide, "Percentage of reads")) == [100.0, 50.0]
    assert list(_row(wide, "Percentage of OTUs")) == [100.0, 50.0]
    assert list(_row(wide, "Total number of reads")) == [100.0, 50.0]


def test_wide_row_order_follows_statistic_order():
    wide = build_summary({"raw": _raw(), "trimmed": _trimmed()}, extended=True)
    expected = [s.value for s in BASIC_STATS + EXTENDED_STATS] + PCT_ROWS
    assert list(wide["Parameter"]) == expected
    params = list(wide["Parameter"])
    assert params.index("Number of samples") < params.index("Number of OTUs")


def test_long_form_never_has_percentages():
    long_df = build_summary([_raw(), _trimmed(), _third()], long=True)
    assert list(long_df.columns) == LONG_COLUMNS
    assert not long_df["Parameter"].isin(PCT_ROWS).any()
    assert len(long_df) == 3 * len(BASIC_STATS)
    # dataset blocks in input order, statistics in canonical order
    assert list(pd.unique(long_df["Dataset"])) == ["Phys1", "Phys2", "Phys3"]
    block = long_df[long_df["Dataset"] == "Phys2"]
    assert list(block["Parameter"]) == [s.value for s in BASIC_STATS]


@pytest.mark.parametrize("long", [False, True])
def test_single_dataset_has_no_percentages(long):
    res = build_summary({"only": _raw()}, extended=True, long=long)
    assert not (res["Parameter"].isin(PCT_ROWS)).any()
    assert len(res) == len(BASIC_STATS) + len(EXTENDED_STATS)


def test_unnamed_datasets_get_default_names():
    wide = build_summary([_raw(), _trimmed()])
    assert list(wide.columns) == ["Parameter", "Phys1", "Phys2"]


def test_explicit_names_override_keys():
    wide = build_summary([_raw(), _trimmed()], names=["before", "after"])
    assert list(wide.columns) == ["Parameter", "before", "after"]


def test_invalid_names_are_sanitised_with_warning():
    with pytest.warns(InvalidNameWarning):
        wide = build_summary({"raw data": _raw(), "2nd": _trimmed()})
    assert list(wide.columns) == ["Parameter", "raw.data", "X2nd"]
    assert len(wide.attrs["diagnostics"]) == 1


def test_valid_names_leave_no_diagnostics():
    wide = build_summary({"raw": _raw(), "trimmed": _trimmed()})
    assert wide.attrs["diagnostics"] == []


def test_duplicate_sanitised_names_are_rejected():
    with pytest.warns(InvalidNameWarning):
        with pytest.raises(DuplicateNameError):
            build_summary({"a b": _raw(), "a.b": _trimmed()})


def test_name_count_mismatch():
    with pytest.raises(ValueError):
        build_summary([_raw(), _trimmed()], names=["one"])


def test_no_datasets():
    with pytest.raises(ValueError):
        build_summary({})


def test_empty_dataset_aborts_whole_call():
    empty = pd.DataFrame({"S1": []}, dtype=float)
    with pytest.raises(EmptyDatasetError, match="broken"):
        build_summary({"raw": _raw(), "broken": empty})


def test_zero_read_datasets_give_nan_percentages():
    zeros = pd.DataFrame({"S1": [0, 0]}, index=["a", "b"])
    wide = build_summary({"x": zeros, "y": zeros.copy()})
    assert all(math.isnan(v) for v in _row(wide, "Percentage of reads"))
    assert list(_row(wide, "Percentage of OTUs")) == [100.0, 100.0]


def test_long_wide_round_trip():
    long_df = build_summary({"raw": _raw(), "trimmed": _trimmed()}, extended=True, long=True)
    long_df.attrs.clear()
    back = wide_to_long(long_to_wide(long_df))

    key = ["Dataset", "Parameter"]
    pd.testing.assert_frame_equal(
        long_df.sort_values(key).reset_index(drop=True),
        back.sort_values(key).reset_index(drop=True),
        check_dtype=False,
    )


def test_long_to_wide_keeps_first_seen_order():
    long_df = pd.DataFrame({
        "Dataset":   ["b", "b", "a", "a"],
        "Parameter": ["zeta", "alpha", "zeta", "alpha"],
        "Value":     [1.0, 2.0, 3.0, 4.0],
    })
    wide = long_to_wide(long_df)
    assert list(wide.columns) == ["Parameter", "b", "a"]
    assert list(wide["Parameter"]) == ["zeta", "alpha"]
    assert list(_row(wide, "alpha")) == [2.0, 4.0]


def test_missing_source_row_raises():
    wide = pd.DataFrame({"Parameter": ["Number of samples"], "a": [1.0], "b": [2.0]})
    with pytest.raises(MissingStatisticError):
        append_percentages(wide)


def test_summary_is_deterministic():
    args = ({"raw": _raw(), "trimmed": _trimmed()},)
    pd.testing.assert_frame_equal(
        build_summary(*args, extended=True), build_summary(*args, extended=True)
    )


def test_parallel_matches_serial():
    data = {"raw": _raw(), "trimmed": _trimmed(), "third": _third()}
    serial = build_summary(data, extended=True)
    with parallel_config(backend="threading"):
        parallel = build_summary(data, extended=True, n_jobs=2)
    pd.testing.assert_frame_equal(serial, parallel)


def test_inputs_are_not_modified():
    raw = _raw()
    before = raw.copy()
    build_summary({"raw": raw, "t": _trimmed()}, extended=True)
    pd.testing.assert_frame_equal(raw, before)


def test_numpy_matrices():
    wide = build_summary([np.ones((4, 2)), np.ones((2, 2))])
    assert list(_row(wide, "Number of OTUs")) == [4.0, 2.0]
    assert list(_row(wide, "Percentage of OTUs")) == [100.0, 50.0]
