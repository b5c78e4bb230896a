from __future__ import annotations

"""
StormRank report generator
--------------------------
This module turns the four rankings into bar charts and a DOCX report.

Design goals:
- Keep StormRank usable even if report dependencies are missing (lazy imports).
- One chart per ranking, all with the same layout, so they read side by side.
- Property damage spans many orders of magnitude (a few hundred dollars up to
  tens of billions), so its chart uses a log axis by default.
- Nothing here changes a number: the renderer only reads `Rankings`.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging
import os
import tempfile

from .pipeline import StormSummary
from .ranking import METRIC_LABELS, METRICS, Rankings

logger = logging.getLogger(__name__)


# -----------------------------
# Configuration / citation types
# -----------------------------

@dataclass
class DatasetCitation:
    """Minimal dataset citation metadata for the DOCX report."""
    database_name: str = "Storm Events Database"
    institutional_author: str = "NOAA National Centers for Environmental Information"
    location: str = "Asheville, NC, USA"
    website: str = "https://www.ncdc.noaa.gov/stormevents/"
    file_name: Optional[str] = None
    file_note: Optional[str] = "Course export of the U.S. National Weather Service storm data (1950-2011)."


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Storm Events: Health and Economic Impact"
    subtitle: str = "Top event types in the NOAA Storm Database"
    dataset_name: str = "NOAA Storm Database (CSV export)"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # How many event types to show in each chart / table
    top_n: int = 10

    # Draw the property damage chart on a log axis
    log_damage_axis: bool = True


# Why each chart looks the way it does (printed under the chart)
_CHART_NOTES = {
    "fatalities": "Fatalities are the most direct measure of harm to population health.",
    "injuries": "Injuries complete the health picture; the ranking differs from fatalities.",
    "property_damage": "Property damage is heavy-tailed, so the axis is logarithmic.",
    "crop_damage": "Crop damage is concentrated in a few drought, flood and cold events.",
}


def _format_value(metric: str, value: float) -> str:
    if metric in ("property_damage", "crop_damage"):
        return f"${value:,.0f}"
    return f"{value:,.0f}"


# -----------------------------
# Charts
# -----------------------------

def render_charts(
    rankings: Rankings,
    out_dir: str,
    *,
    config: Optional[ReportConfig] = None,
) -> List[Tuple[str, str, str]]:
    """Draw one horizontal bar chart per ranking into `out_dir`.

    Returns a list of (title, file_path, note). Empty rankings are skipped.
    """
    config = config or ReportConfig()
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    os.makedirs(out_dir, exist_ok=True)
    charts: List[Tuple[str, str, str]] = []

    for metric in METRICS:
        pairs = rankings.pairs(metric)[:config.top_n]
        if not pairs:
            continue
        labels = [name for name, _ in pairs]
        values = [value for _, value in pairs]
        title = f"Top {len(pairs)} Event Types by {METRIC_LABELS[metric]}"

        # largest at the top
        y = np.arange(len(pairs))
        plt.figure(figsize=(8, 5))
        plt.barh(y, values, edgecolor="black", linewidth=0.6)
        plt.yticks(y, labels)
        plt.gca().invert_yaxis()
        plt.xlabel(METRIC_LABELS[metric])
        plt.title(title)
        if metric == "property_damage" and config.log_damage_axis and any(v > 0 for v in values):
            plt.xscale("log")

        path = os.path.join(out_dir, f"top_{metric}.png")
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close()
        charts.append((title, path, _CHART_NOTES[metric]))

    logger.info("Rendered %d charts into %s", len(charts), out_dir)
    return charts


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    summary: StormSummary,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Generate a DOCX report + charts for the rankings in `summary`.

    The input file is never modified; everything is computed in memory.
    """
    config = config or ReportConfig()

    # Lazy imports: only required when a report is requested.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    rankings = summary.rankings
    if rankings.is_empty():
        raise ValueError("No rankings to report on (no event types aggregated).")

    tmpdir = tempfile.mkdtemp(prefix="stormrank_report_")
    charts = render_charts(rankings, tmpdir, config=config)

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    _kv("Records processed", f"{summary.record_count:,}")
    _kv("Distinct event types (after cleaning)", f"{summary.event_type_count:,}")

    doc.add_heading("Dataset citation", level=1)
    cit = config.citation
    if cit.file_name:
        doc.add_paragraph(f"Data file used: {cit.file_name}")
    if cit.file_note:
        doc.add_paragraph(f"File note: {cit.file_note}")
    doc.add_paragraph(
        f"{cit.institutional_author}. {cit.database_name}. {cit.location}. {cit.website}."
    )

    doc.add_heading("Data processing", level=1)
    for note in [
        "Event types are lowercased and punctuation/blank characters are replaced by spaces.",
        "Damage = magnitude x 10^exponent, with h=2, k=3, m=6, b=9, numeric codes used as-is, "
        "and '', '-', '?', '+' meaning no scaling.",
        "Damage rankings leave out event types with no property and no crop damage.",
        "Ties are ordered by event type name.",
    ]:
        doc.add_paragraph(note, style="List Bullet")

    doc.add_heading("Visualizations", level=1)
    for title, path, note in charts:
        doc.add_paragraph(title)
        doc.add_picture(path, width=Inches(6.0))
        doc.add_paragraph(note)

    doc.add_heading("Ranking tables", level=1)
    for metric in METRICS:
        pairs = rankings.pairs(metric)[:config.top_n]
        if not pairs:
            continue
        doc.add_paragraph(f"Top {len(pairs)} by {METRIC_LABELS[metric]}")
        t = doc.add_table(rows=1, cols=3)
        h = t.rows[0].cells
        h[0].text = "Rank"
        h[1].text = "Event type"
        h[2].text = METRIC_LABELS[metric]
        for rank, (name, value) in enumerate(pairs, start=1):
            r = t.add_row().cells
            r[0].text = str(rank)
            r[1].text = name
            r[2].text = _format_value(metric, value)
        doc.add_paragraph("")

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_heading("Reproducibility footer", level=1)
    from . import __version__ as stormrank_version
    from datetime import datetime as _dt
    generated_at = _dt.now().isoformat(timespec="seconds")

    doc.add_paragraph(f"StormRank version: {stormrank_version}")
    doc.add_paragraph(f"Report generated at: {generated_at}")
    doc.add_paragraph(
        "Event-type spacing: "
        + ("runs collapsed to one space, trimmed" if summary.collapse else "one space per replaced character")
    )
    if cit.file_name:
        doc.add_paragraph(f"Dataset file: {cit.file_name}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    logger.info("Report written to %s", out_path)
    return out_path
