"""
Equivalence kernel.

Two numeric sequences are equivalent if their Pearson correlation is 1 or -1
(an affine map takes one onto the other). Two label sequences are equivalent
if a one-to-one relabeling makes them the same.

Example:
    >>> is_equivalent([1, 2, 3, 4, 5], [3, 6, 9, 12, 15])
    True
    >>> is_equivalent(["a", "a", "b", "c"], ["b", "b", "a", "c"])
    True
"""
from __future__ import annotations

import logging
import math
import warnings
from typing import Any, Callable, Dict, Tuple

import numpy as np
import pandas as pd

from equivcols.core.kinds import (
    CATEGORICAL_KINDS,
    Kind,
    KindMismatchWarning,
    as_sequence,
    find_stack_level,
    kind_of,
    normalize_to,
)
from equivcols.core.missing import aligned, drop_missing

logger = logging.getLogger(__name__)

DEFAULT_TREAT_LABELED_AS_FREETEXT = True
DEFAULT_REL_TOL = 1.5e-8


def pearson(x: np.ndarray, y: np.ndarray) -> float:
    """Pearson r, or NaN when undefined (n < 2 or zero variance)."""
    if x.size < 2 or x.size != y.size:
        return float("nan")
    with np.errstate(invalid="ignore", over="ignore"):
        dx = x - x.mean()
        dy = y - y.mean()
        sxx = float(np.dot(dx, dx))
        syy = float(np.dot(dy, dy))
        if not (sxx > 0.0 and syy > 0.0):
            return float("nan")
        return float(np.dot(dx, dy) / math.sqrt(sxx * syy))


def contingency_table(x: pd.Series, y: pd.Series) -> np.ndarray:
    """Joint counts over observed labels: rows = distinct x, cols = distinct y."""
    cx, ux = pd.factorize(np.asarray(x, dtype=object))
    cy, uy = pd.factorize(np.asarray(y, dtype=object))
    counts = np.zeros((len(ux), len(uy)), dtype=np.int64)
    np.add.at(counts, (cx, cy), 1)
    return counts


def is_bijection(counts: np.ndarray) -> bool:
    """
    True iff the contingency table pairs every x label with exactly one y
    label and vice versa, with no label left over on either side.
    """
    n_x, n_y = counts.shape
    if n_x == 0 or n_y == 0:
        return False
    nz = counts != 0
    if not (nz.sum(axis=1) == 1).all():
        return False
    if not (nz.sum(axis=0) == 1).all():
        return False
    row_hits = np.sort(np.argmax(nz, axis=1))
    col_hits = np.sort(np.argmax(nz, axis=0))
    return bool(
        np.array_equal(row_hits, np.arange(n_x))
        and np.array_equal(col_hits, np.arange(n_y))
    )


def table_equiv(x: pd.Series, y: pd.Series) -> bool:
    if len(x) != len(y):
        return False
    if not aligned(x, y):
        return False
    return is_bijection(contingency_table(drop_missing(x), drop_missing(y)))


def _numeric_equiv(x, y, kx, ky, treat_labeled, rel_tol) -> bool:
    if len(x) != len(y) or not aligned(x, y):
        return False
    xv = drop_missing(x).to_numpy(dtype=float)
    yv = drop_missing(y).to_numpy(dtype=float)
    r = pearson(xv, yv)
    if math.isnan(r):
        return False
    return math.isclose(abs(r), 1.0, rel_tol=rel_tol)


def _categorical_equiv(x, y, kx, ky, treat_labeled, rel_tol) -> bool:
    if kx is not ky:
        if not treat_labeled:
            return False
        y = normalize_to(y, kx)
    return table_equiv(x, y)


def _undefined(x, y, kx, ky, treat_labeled, rel_tol) -> bool:
    warnings.warn(
        f"Don't know how to test for equivalence between {kx.value} and {ky.value}",
        KindMismatchWarning,
        stacklevel=find_stack_level(),
    )
    return False


Handler = Callable[[Any, Any, Kind, Kind, bool, float], bool]

_DISPATCH: Dict[Tuple[Kind, Kind], Handler] = {(Kind.NUMERIC, Kind.NUMERIC): _numeric_equiv}
for _a in CATEGORICAL_KINDS:
    for _b in CATEGORICAL_KINDS:
        _DISPATCH[(_a, _b)] = _categorical_equiv


def is_equivalent(
    x: Any,
    y: Any,
    treat_labeled_as_freetext_equivalent: bool = DEFAULT_TREAT_LABELED_AS_FREETEXT,
    *,
    rel_tol: float = DEFAULT_REL_TOL,
) -> bool:
    """
    Test whether two sequences carry the same information.

    - x, y: Series, lists, 1-D arrays or one-column DataFrames
    - treat_labeled_as_freetext_equivalent: compare a categorical (labeled)
      sequence against plain string labels by converting the second to the
      first one's representation
    - rel_tol: tolerance on |r| == 1 for numeric sequences

    Never raises for "not equivalent"; the result is simply False.
    """
    xs = as_sequence(x)
    ys = as_sequence(y)
    kx, ky = kind_of(xs), kind_of(ys)
    handler = _DISPATCH.get((kx, ky), _undefined)
    verdict = bool(handler(xs, ys, kx, ky, treat_labeled_as_freetext_equivalent, rel_tol))
    logger.debug("equivalence %s/%s -> %s", kx.value, ky.value, verdict)
    return verdict


equivalent = is_equivalent
