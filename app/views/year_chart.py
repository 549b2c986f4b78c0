"""Year overview chart for Day Tally.

Renders the twelve monthly totals of a year as a bar chart with
matplotlib, saves it as a PNG and opens it in the default viewer.
"""

import math
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

from config import COLORS, STORAGE, UI, get_logger
from core.aggregator import format_total

logger = get_logger(__name__)


class YearChart:
    """Bar chart of monthly totals."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path(tempfile.gettempdir()) / STORAGE.CHART_TEMP_DIR

    def render(self, year: int, totals: Sequence[float], highlight_month: Optional[int] = None) -> Path:
        """Draw the chart for ``year`` and return the PNG path.

        Args:
            year: Year shown in the title.
            totals: Twelve monthly totals, January first.
            highlight_month: Zero-based month drawn in the accent color.
        """
        if len(totals) != 12:
            raise ValueError(f"Expected 12 monthly totals, got {len(totals)}")

        import matplotlib

        # Agg backend: render to file, no GUI event loop needed
        matplotlib.use("Agg")
        from matplotlib import pyplot as plt

        labels: List[str] = [name[:3] for name in UI.MONTH_NAMES]
        colors = [
            COLORS.HIGHLIGHT_HEX if month == highlight_month else COLORS.BAR_HEX
            for month in range(12)
        ]

        fig, ax = plt.subplots(figsize=(10, 5))
        try:
            # inf/nan totals keep their label but get no bar
            heights = [t if math.isfinite(t) else 0 for t in totals]
            bars = ax.bar(labels, heights, color=colors)
            ax.bar_label(bars, labels=[format_total(t) for t in totals], fontsize=8)
            ax.set_title(f"{UI.APP_NAME} - {year} (total {format_total(sum(totals))})",
                         fontsize=13, fontweight="bold")
            ax.set_ylabel("Total")
            ax.axhline(0, color=COLORS.GRID_HEX, linewidth=0.8)
            ax.grid(True, alpha=0.3, axis="y")
            fig.tight_layout()

            self.output_dir.mkdir(parents=True, exist_ok=True)
            chart_path = self.output_dir / f"year_{year}.png"
            fig.savefig(chart_path, dpi=100, bbox_inches="tight")
        finally:
            plt.close(fig)

        logger.info(f"Year chart saved: {chart_path}")
        return chart_path

    def show(self, year: int, totals: Sequence[float], highlight_month: Optional[int] = None) -> Path:
        """Render the chart and open it (Preview on macOS)."""
        chart_path = self.render(year, totals, highlight_month)
        subprocess.run(["open", str(chart_path)], check=True)
        return chart_path
