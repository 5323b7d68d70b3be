from __future__ import annotations
import io
import base64
from pathlib import Path
from typing import Optional
import pandas as pd

from equivcols.analytics.equiv_matrix import EquivReport, compute_equivalence


def _png_data_url(fig) -> str:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight")
    fig.clf()
    import matplotlib.pyplot as plt

    plt.close("all")
    data = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/png;base64,{data}"


def render_dashboard(
    source,
    out_html: str | Path,
    *,
    title: str = "Column Equivalence Dashboard",
    max_columns: Optional[int] = None,
) -> Path:
    """
    Build a simple HTML dashboard:
      - Heatmap of the upper-triangular equivalence matrix
      - Equivalent pairs table
      - Kept / dropped column lists
    `source` is a table or a precomputed EquivReport. Returns the output path.
    """
    out_html = Path(out_html)
    out_html.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(source, EquivReport):
        report = source
    else:
        table = source
        if max_columns and table.shape[1] > max_columns:
            table = pd.DataFrame(table).iloc[:, :max_columns]
        report = compute_equivalence(table)
    matrix = report.matrix

    if matrix.shape[1] >= 2:
        # Heatmap plot (matplotlib only; headless backend)
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        fig = plt.figure(figsize=(6, 5))
        ax = fig.add_subplot(111)
        ax.imshow(matrix.to_numpy().astype(float), aspect="auto", vmin=0.0, vmax=1.0, cmap="Blues")
        labels = [str(c) for c in matrix.columns]
        ax.set_xticks(range(matrix.shape[1]))
        ax.set_yticks(range(matrix.shape[1]))
        ax.set_xticklabels(labels, rotation=90)
        ax.set_yticklabels(labels)
        ax.set_title("Equivalence matrix (upper triangle)")
        heatmap_url = _png_data_url(fig)
    else:
        heatmap_url = ""

    dropped = report.redundant()
    kept = [c for c in report.columns if c not in dropped]

    html_parts = []
    css = (
        "body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Arial,sans-serif;margin:24px}"
        " h1,h2{margin:0 0 8px}"
        " .card{padding:16px;border:1px solid #ddd;border-radius:12px;margin:16px 0}"
        " img{max-width:100%}"
        " table{border-collapse:collapse}"
        " th,td{padding:6px 8px;border:1px solid #ddd}"
    )
    header = f"""<!doctype html>
    <html>
    <head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>{css}</style>
    </head>
    <body>"""
    html_parts.append(header)
    html_parts.append(f"<h1>{title}</h1>")
    html_parts.append("<div class='card'><h2>Equivalence heatmap</h2>")
    if heatmap_url:
        html_parts.append(f"<img alt='Equivalence heatmap' src='{heatmap_url}' />")
    else:
        html_parts.append("<em>Need at least two columns to plot.</em>")
    html_parts.append("</div>")

    html_parts.append("<div class='card'><h2>Equivalent pairs</h2>")
    if not report.pairs.empty:
        html_parts.append(report.pairs.to_html(index=False))
    else:
        html_parts.append("<em>No equivalent column pairs.</em>")
    html_parts.append("</div>")

    html_parts.append("<div class='card'><h2>Columns</h2>")
    html_parts.append(f"<p><b>Kept:</b> {', '.join(map(str, kept)) or '-'}</p>")
    html_parts.append(f"<p><b>Dropped:</b> {', '.join(map(str, dropped)) or '-'}</p>")
    html_parts.append("</div>")

    html_parts.append("</body></html>")
    out_html.write_text("".join(html_parts), encoding="utf-8")
    return out_html
