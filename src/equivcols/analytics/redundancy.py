from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from equivcols.analytics.equiv_matrix import _ensure_table, equivalence_matrix, redundant_mask
from equivcols.core.equiv import DEFAULT_REL_TOL, DEFAULT_TREAT_LABELED_AS_FREETEXT


def report_dropped(dropped: Sequence[object]) -> None:
    if len(dropped):
        print("Dropping redundant columns: " + ", ".join(str(c) for c in dropped))
    else:
        print("No redundant columns to drop.")


def _drop_mask(df: pd.DataFrame, treat_labeled: bool, rel_tol: float) -> np.ndarray:
    if df.shape[1] <= 1:
        return np.zeros(df.shape[1], dtype=bool)
    ecm = equivalence_matrix(
        df,
        treat_labeled_as_freetext_equivalent=treat_labeled,
        rel_tol=rel_tol,
    )
    return redundant_mask(ecm)


def redundancy_filter(
    table,
    *,
    treat_labeled_as_freetext_equivalent: bool = DEFAULT_TREAT_LABELED_AS_FREETEXT,
    rel_tol: float = DEFAULT_REL_TOL,
):
    """
    Split columns into kept / dropped using the equivalence matrix.
    Keeps the first column of each equivalent group; drops later columns.

    Returns:
        kept (list), dropped (list)
    """
    df = _ensure_table(table)
    mask = _drop_mask(df, treat_labeled_as_freetext_equivalent, rel_tol)
    cols = list(df.columns)
    kept = [c for c, m in zip(cols, mask) if not m]
    dropped = [c for c, m in zip(cols, mask) if m]
    return kept, dropped


def drop_redundant_columns(
    table,
    verbose: bool = False,
    *,
    treat_labeled_as_freetext_equivalent: bool = DEFAULT_TREAT_LABELED_AS_FREETEXT,
    rel_tol: float = DEFAULT_REL_TOL,
) -> pd.DataFrame:
    """
    Remove columns that are equivalent to an earlier column.

    - table: DataFrame or 2-D array (arrays come back as a DataFrame)
    - verbose: print which columns were dropped
    Returns a new DataFrame; the input is not modified.
    """
    df = _ensure_table(table)
    mask = _drop_mask(df, treat_labeled_as_freetext_equivalent, rel_tol)
    if verbose:
        report_dropped(list(df.columns[mask]))
    return df.loc[:, ~mask].copy()
