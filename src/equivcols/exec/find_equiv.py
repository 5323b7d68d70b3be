"""
Find equivalent columns in a CSV/Parquet table and drop the redundant ones.

Prints one JSON summary line, then a WROTE line per output file.

Usage:
  python -m equivcols.exec.find_equiv data.csv --out reduced.csv --html report.html
  python -m equivcols.exec.find_equiv data.parquet --config equiv.yaml --verbose
"""
from __future__ import annotations

import argparse
import json
import pathlib

import pandas as pd

from equivcols.analytics.dashboards import render_dashboard
from equivcols.analytics.equiv_matrix import compute_equivalence, redundant_mask
from equivcols.analytics.redundancy import report_dropped
from equivcols.utils.config_loader import load_config


def read_table(path: pathlib.Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix in (".parquet", ".pq"):
        return pd.read_parquet(path)
    raise ValueError(f"Unsupported input format {suffix!r} for {path}")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Find and drop equivalent columns.")
    ap.add_argument("input", help="CSV or Parquet table")
    ap.add_argument("--config", default=None, help="YAML config (EquivConfig fields)")
    ap.add_argument("--out", default=None, help="Write the reduced table as CSV")
    ap.add_argument("--matrix-out", default=None, help="Write the equivalence matrix as CSV")
    ap.add_argument("--html", default=None, help="Write an HTML dashboard")
    ap.add_argument(
        "--strict-kinds",
        action="store_true",
        help="Do not treat categorical columns as equivalent to plain text columns",
    )
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    if args.strict_kinds:
        cfg.treat_labeled_as_freetext_equivalent = False
    verbose = args.verbose or cfg.verbose

    df = read_table(pathlib.Path(args.input))
    report = compute_equivalence(
        df,
        columns=cfg.columns,
        treat_labeled_as_freetext_equivalent=cfg.treat_labeled_as_freetext_equivalent,
        rel_tol=cfg.rel_tol,
    )
    mask = redundant_mask(report.matrix)
    dropped = [c for c, m in zip(report.columns, mask) if m]
    kept = [c for c, m in zip(report.columns, mask) if not m]

    if verbose:
        report_dropped(dropped)

    summary = {
        "rows": int(len(df)),
        "columns": int(len(report.columns)),
        "pairs": int(len(report.pairs)),
        "dropped": [str(c) for c in dropped],
        "kept": [str(c) for c in kept],
    }
    print(json.dumps(summary, ensure_ascii=False))

    if args.out:
        out = pathlib.Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        df.drop(columns=dropped).to_csv(out, index=False)
        print("WROTE", out)
    if args.matrix_out:
        mout = pathlib.Path(args.matrix_out)
        mout.parent.mkdir(parents=True, exist_ok=True)
        mout.write_text(report.to_csv(), encoding="utf-8")
        print("WROTE", mout)
    if args.html:
        print("WROTE", render_dashboard(report, args.html))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
