from __future__ import annotations

import numpy as np
import pandas as pd


def missing_positions(seq: pd.Series) -> np.ndarray:
    """Positional indices (0-based) of missing values."""
    return np.flatnonzero(pd.isna(seq).to_numpy())


def aligned(x: pd.Series, y: pd.Series) -> bool:
    """True iff x and y carry missing values at exactly the same positions."""
    x_na = missing_positions(x)
    y_na = missing_positions(y)
    return len(x_na) == len(y_na) and bool(np.array_equal(x_na, y_na))


def drop_missing(seq: pd.Series) -> pd.Series:
    return seq[seq.notna()].reset_index(drop=True)
