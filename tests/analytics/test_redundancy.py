import numpy as np
import pandas as pd
from equivcols.analytics.redundancy import drop_redundant_columns, redundancy_filter


def test_drop_keeps_first_of_pair(abc_table):
    out = drop_redundant_columns(abc_table)
    assert list(out.columns) == ["A", "C"]
    # input untouched
    assert list(abc_table.columns) == ["A", "B", "C"]


def test_redundancy_filter_groups():
    # b, d are affine copies of a, c; e is reversed a (also affine); f is independent
    a = pd.Series(range(100), dtype=float)
    c = pd.Series(np.random.default_rng(0).normal(size=100))
    df = pd.DataFrame(
        {
            "a": a,
            "b": a * 2 + 1,
            "c": c,
            "d": c * 1.0,
            "e": a[::-1].reset_index(drop=True),
            "f": np.random.default_rng(1).normal(size=100),
        }
    )
    kept, dropped = redundancy_filter(df)
    assert kept == ["a", "c", "f"]
    assert dropped == ["b", "d", "e"]
    assert set(kept).union(dropped) == set(df.columns)


def test_drop_is_idempotent(mixed_table):
    once = drop_redundant_columns(mixed_table)
    twice = drop_redundant_columns(once)
    pd.testing.assert_frame_equal(once, twice)
    assert list(once.columns) == ["num", "noise", "grade", "pair"]


def test_drop_verbose(abc_table, capsys):
    drop_redundant_columns(abc_table, verbose=True)
    assert "Dropping redundant columns: B" in capsys.readouterr().out

    drop_redundant_columns(abc_table[["A", "C"]], verbose=True)
    assert "No redundant columns to drop." in capsys.readouterr().out


def test_drop_single_column_and_array():
    single = pd.DataFrame({"x": [1, 2, 3]})
    assert list(drop_redundant_columns(single).columns) == ["x"]
    arr = np.column_stack([np.arange(4.0), np.arange(4.0) * 5])
    out = drop_redundant_columns(arr)
    assert isinstance(out, pd.DataFrame)
    assert list(out.columns) == [0]


def test_redundancy_filter_trivial():
    assert redundancy_filter(pd.DataFrame({"x": [1]})) == (["x"], [])


def test_filter_and_drop_agree_with_duplicate_labels(capsys):
    df = pd.DataFrame([[1, 2, 5], [2, 4, 1], [3, 6, 7]], columns=["a", "a", "z"])
    kept, dropped = redundancy_filter(df)
    assert kept == ["a", "z"] and dropped == ["a"]
    out = drop_redundant_columns(df, verbose=True)
    assert out.shape[1] == 2
    assert out.iloc[:, 0].tolist() == [1, 2, 3]
    assert capsys.readouterr().out.strip() == "Dropping redundant columns: a"
