from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from equivcols.core.equiv import (
    DEFAULT_REL_TOL,
    DEFAULT_TREAT_LABELED_AS_FREETEXT,
    is_equivalent,
)
from equivcols.core.kinds import as_sequence, kind_of

logger = logging.getLogger(__name__)


@dataclass
class EquivReport:
    columns: Sequence[object]
    matrix: pd.DataFrame
    pairs: pd.DataFrame
    kinds: Dict[str, str]
    meta: Dict[str, object]

    def redundant(self) -> List[object]:
        """Columns equivalent to some earlier column, in table order."""
        mask = redundant_mask(self.matrix)
        return [c for c, f in zip(self.matrix.columns, mask) if f]

    def to_csv(self) -> str:
        buf = io.StringIO()
        self.matrix.to_csv(buf)
        return buf.getvalue()

    def to_html(self, title: str = "Column Equivalence Matrix") -> str:
        df = self.matrix

        def cell(i: int, j: int, v: bool) -> str:
            if j <= i:
                return '<td class="na"></td>'
            if v:
                return '<td class="eq">&#10003;</td>'
            return '<td class="ne">&middot;</td>'

        head = "".join(f"<th>{c}</th>" for c in df.columns)
        rows = []
        for i, (idx, row) in enumerate(df.iterrows()):
            cells = "".join(cell(i, j, bool(v)) for j, v in enumerate(row.values))
            rows.append(f"<tr><th>{idx}</th>{cells}</tr>")
        body = "\n".join(rows)

        pairs_html = ""
        if not self.pairs.empty:
            pair_rows = "".join(
                f"<tr><td>{r.column_a}</td><td>{r.column_b}</td>"
                f"<td>{r.kind_a}</td><td>{r.kind_b}</td></tr>"
                for r in self.pairs.itertuples(index=False)
            )
            pairs_html = f"""
            <h2>Equivalent Pairs</h2>
            <table class="meta"><thead><tr><th>Column A</th><th>Column B</th><th>Kind A</th><th>Kind B</th></tr></thead>
            <tbody>{pair_rows}</tbody></table>
            """

        meta_html = f"<pre>{json.dumps(self.meta, indent=2, default=str)}</pre>"

        return f"""<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<title>{title}</title>
<style>
  body {{ font-family: -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin: 16px; }}
  h1, h2 {{ margin: 8px 0; }}
  table {{ border-collapse: collapse; }}
  th, td {{ border: 1px solid #ddd; padding: 4px 6px; }}
  th {{ background:#f7f7f7; text-align:left; position: sticky; top: 0; }}
  .na {{ background:#f0f0f0; }}
  .eq {{ background:rgb(80,120,255); color:#fff; text-align:center; }}
  .ne {{ color:#999; text-align:center; }}
  .meta th, .meta td {{ text-align:left; }}
  .note {{ color:#666; }}
</style>
</head>
<body>
  <h1>{title}</h1>
  <div class="note">Upper triangle only. A check mark means the column pair is equivalent (affine map for numeric, relabeling for categorical).</div>
  <h2>Matrix</h2>
  <table>
    <thead><tr><th></th>{head}</tr></thead>
    <tbody>
      {body}
    </tbody>
  </table>
  {pairs_html}
  <h2>Meta</h2>
  {meta_html}
</body>
</html>
"""


def redundant_mask(matrix: pd.DataFrame) -> np.ndarray:
    # only i<j is populated, so column j is flagged iff it matches an earlier column
    return matrix.to_numpy().any(axis=0)


def _ensure_table(table) -> pd.DataFrame:
    if isinstance(table, pd.DataFrame):
        return table
    if isinstance(table, np.ndarray) and table.ndim == 2:
        return pd.DataFrame(table)
    raise TypeError("table must be a pandas DataFrame or a 2-D numpy array")


def _column(df: pd.DataFrame, i: int) -> pd.Series:
    return as_sequence(df.iloc[:, i])


def equivalence_matrix(
    table,
    *,
    treat_labeled_as_freetext_equivalent: bool = DEFAULT_TREAT_LABELED_AS_FREETEXT,
    rel_tol: float = DEFAULT_REL_TOL,
) -> pd.DataFrame:
    """
    Upper-triangular boolean matrix over the columns of `table`.

    Entry [i, j] is True iff i < j and columns i and j are equivalent; the
    diagonal and lower triangle are always False. Rows and columns are
    labelled with the table's column labels.
    """
    df = _ensure_table(table)
    n = df.shape[1]
    out = np.zeros((n, n), dtype=bool)
    for i in range(n - 1):
        xi = _column(df, i)
        for j in range(i + 1, n):
            out[i, j] = is_equivalent(
                xi,
                _column(df, j),
                treat_labeled_as_freetext_equivalent,
                rel_tol=rel_tol,
            )
    logger.debug("equivalence matrix %dx%d, %d pair(s)", n, n, int(out.sum()))
    return pd.DataFrame(out, index=df.columns.copy(), columns=df.columns.copy())


def compute_equivalence(
    table,
    *,
    columns: Optional[Sequence[object]] = None,
    treat_labeled_as_freetext_equivalent: bool = DEFAULT_TREAT_LABELED_AS_FREETEXT,
    rel_tol: float = DEFAULT_REL_TOL,
) -> EquivReport:
    """
    Equivalence matrix plus the list of equivalent pairs and per-column kinds.

    - table: DataFrame or 2-D array
    - columns: optional subset (in the given order) to analyze
    Returns EquivReport with CSV/HTML helpers.
    """
    df = _ensure_table(table)
    if columns is not None:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ValueError(f"Unknown columns: {missing}")
        df = df[list(columns)]

    matrix = equivalence_matrix(
        df,
        treat_labeled_as_freetext_equivalent=treat_labeled_as_freetext_equivalent,
        rel_tol=rel_tol,
    )
    kinds = {str(c): kind_of(_column(df, i)).value for i, c in enumerate(df.columns)}

    pairs = []
    cols = list(df.columns)
    for i, j in zip(*np.nonzero(matrix.to_numpy())):
        a, b = cols[i], cols[j]
        pairs.append((a, b, kinds[str(a)], kinds[str(b)]))
    pairs_df = pd.DataFrame(pairs, columns=["column_a", "column_b", "kind_a", "kind_b"])

    meta = dict(
        rows=int(len(df)),
        columns=[str(c) for c in cols],
        pairs=int(len(pairs)),
        treat_labeled_as_freetext_equivalent=bool(treat_labeled_as_freetext_equivalent),
        rel_tol=float(rel_tol),
    )
    return EquivReport(
        columns=cols,
        matrix=matrix,
        pairs=pairs_df,
        kinds=kinds,
        meta=meta,
    )
