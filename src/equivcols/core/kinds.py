"""
Semantic kinds of a sequence and input normalization.

A sequence is classified into one of a small closed set of kinds; the
equivalence kernel dispatches on the (kind_x, kind_y) pair.
"""
from __future__ import annotations

import inspect
import os
from collections.abc import Iterable
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

_PKG_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep


class Kind(Enum):
    NUMERIC = "numeric"
    LABELED_CATEGORY = "labeled-category"
    FREE_TEXT = "free-text"
    UNKNOWN = "unknown"


CATEGORICAL_KINDS = (Kind.LABELED_CATEGORY, Kind.FREE_TEXT)


class KindMismatchWarning(UserWarning):
    """Equivalence between the two observed kinds is undefined."""


def find_stack_level() -> int:
    """
    Stack level for warnings.warn that points at the first frame outside
    the equivcols package, however deep inside it the warning was raised.
    """
    frame = inspect.currentframe()
    try:
        n = 0
        while frame is not None:
            if inspect.getfile(frame).startswith(_PKG_DIR):
                frame = frame.f_back
                n += 1
            else:
                break
    finally:
        del frame
    return n


def as_sequence(obj: Any) -> Any:
    """
    Normalize a caller's input into a pandas Series.

    - one-column DataFrame -> its single column
    - Series -> itself (index dropped to a RangeIndex)
    - Index, list, tuple, range, 1-D ndarray or any other ordered iterable
      (e.g. a generator) -> Series with pandas dtype inference
    Anything that cannot be unwrapped (multi-column frame, 2-D array, scalar,
    str, and unordered containers such as set or dict) is returned unchanged
    and will classify as Kind.UNKNOWN.
    """
    if isinstance(obj, pd.DataFrame):
        if obj.shape[1] == 1:
            return obj.iloc[:, 0].reset_index(drop=True)
        return obj
    if isinstance(obj, pd.Series):
        return obj.reset_index(drop=True)
    if isinstance(obj, pd.Categorical):
        return pd.Series(obj)
    if isinstance(obj, np.ndarray):
        if obj.ndim == 1:
            return pd.Series(obj)
        if obj.ndim == 2 and obj.shape[1] == 1:
            return pd.Series(obj[:, 0])
        return obj
    if isinstance(obj, pd.Index):
        return pd.Series(obj)
    if isinstance(obj, (list, tuple, range)):
        return pd.Series(list(obj))
    if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, set, frozenset, dict)):
        return pd.Series(list(obj))
    return obj


def _all_str(s: pd.Series) -> bool:
    vals = s.dropna()
    return all(isinstance(v, str) for v in vals)


def kind_of(seq: Any) -> Kind:
    if not isinstance(seq, pd.Series):
        return Kind.UNKNOWN
    dtype = seq.dtype
    if isinstance(dtype, pd.CategoricalDtype):
        return Kind.LABELED_CATEGORY
    if ptypes.is_bool_dtype(dtype):
        return Kind.UNKNOWN
    if ptypes.is_numeric_dtype(dtype) and not ptypes.is_complex_dtype(dtype):
        return Kind.NUMERIC
    if isinstance(dtype, pd.StringDtype):
        return Kind.FREE_TEXT
    if dtype == object:
        # an all-missing object column has no labels to go on
        if seq.notna().any() and _all_str(seq):
            return Kind.FREE_TEXT
    return Kind.UNKNOWN


def to_free_text(seq: pd.Series) -> pd.Series:
    """Labeled category -> plain labels, missing values kept as missing."""
    return seq.astype(object).where(seq.notna(), None)


def to_labeled_category(seq: pd.Series) -> pd.Series:
    return seq.astype("category")


def normalize_to(seq: pd.Series, kind: Kind) -> pd.Series:
    if kind is Kind.FREE_TEXT and kind_of(seq) is Kind.LABELED_CATEGORY:
        return to_free_text(seq)
    if kind is Kind.LABELED_CATEGORY and kind_of(seq) is Kind.FREE_TEXT:
        return to_labeled_category(seq)
    return seq
