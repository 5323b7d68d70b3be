# tests/analytics/test_equiv_matrix.py
import numpy as np
import pandas as pd
import pytest

from equivcols.analytics.equiv_matrix import compute_equivalence, equivalence_matrix


def test_matrix_marks_affine_pair_only(abc_table):
    m = equivalence_matrix(abc_table)
    assert m.shape == (3, 3)
    assert list(m.index) == ["A", "B", "C"]
    assert list(m.columns) == ["A", "B", "C"]
    assert m.loc["A", "B"]
    assert int(m.to_numpy().sum()) == 1


def test_matrix_lower_triangle_and_diagonal_false(mixed_table):
    m = equivalence_matrix(mixed_table).to_numpy()
    n = m.shape[0]
    assert m.shape == (n, n)
    assert not m[np.tril_indices(n)].any()
    # num ~ num_scaled, grade ~ grade_txt
    assert m[0, 1] and m[3, 4]
    assert int(m.sum()) == 2


def test_matrix_strict_kinds(mixed_table):
    m = equivalence_matrix(mixed_table, treat_labeled_as_freetext_equivalent=False)
    assert not m.loc["grade", "grade_txt"]
    assert m.loc["num", "num_scaled"]


def test_matrix_from_ndarray_uses_positions():
    arr = np.column_stack([np.arange(5.0), 3 * np.arange(5.0) - 1, np.ones(5)])
    m = equivalence_matrix(arr)
    assert list(m.columns) == [0, 1, 2]
    assert m.iloc[0, 1]
    assert not m.iloc[0, 2] and not m.iloc[1, 2]


def test_matrix_small_tables():
    assert equivalence_matrix(pd.DataFrame()).shape == (0, 0)
    one = equivalence_matrix(pd.DataFrame({"a": [1, 2]}))
    assert one.shape == (1, 1) and not one.iloc[0, 0]


def test_matrix_rejects_non_tables():
    with pytest.raises(TypeError):
        equivalence_matrix([[1, 2], [3, 4]])


def test_compute_equivalence_report(mixed_table):
    rep = compute_equivalence(mixed_table)
    assert rep.kinds["grade"] == "labeled-category"
    assert rep.kinds["num"] == "numeric"
    pairs = {(r.column_a, r.column_b) for r in rep.pairs.itertuples(index=False)}
    assert pairs == {("num", "num_scaled"), ("grade", "grade_txt")}
    assert rep.redundant() == ["num_scaled", "grade_txt"]
    assert rep.meta["pairs"] == 2

    csv_txt = rep.to_csv()
    assert csv_txt.splitlines()[0] == ",num,num_scaled,noise,grade,grade_txt,pair"
    html = rep.to_html(title="Equiv")
    assert "<title>Equiv</title>" in html
    assert "Equivalent Pairs" in html


def test_compute_equivalence_column_subset(mixed_table):
    rep = compute_equivalence(mixed_table, columns=["noise", "num"])
    assert rep.matrix.shape == (2, 2)
    assert rep.pairs.empty
    with pytest.raises(ValueError):
        compute_equivalence(mixed_table, columns=["nope"])


def test_kind_warning_points_at_caller(abc_table):
    from equivcols.analytics.redundancy import drop_redundant_columns
    from equivcols.core.kinds import KindMismatchWarning

    with pytest.warns(KindMismatchWarning) as rec:
        equivalence_matrix(abc_table)
    assert {w.filename for w in rec if issubclass(w.category, KindMismatchWarning)} == {__file__}

    with pytest.warns(KindMismatchWarning) as rec:
        drop_redundant_columns(abc_table)
    assert {w.filename for w in rec if issubclass(w.category, KindMismatchWarning)} == {__file__}
