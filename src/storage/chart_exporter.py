# src/storage/chart_exporter.py

"""Generate interactive Plotly HTML charts from seller analytics."""

import importlib
import logging
import webbrowser
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

from src.config.settings import Settings

if TYPE_CHECKING:
    from src.services.seller_dashboard import SellerAnalytics

logger = logging.getLogger("swipeshop.chart")

_CHARTS_DIR: Path = Settings.CHARTS_DIR

_SLICE_COLOURS: dict[str, str] = {
    "Added to Cart": "#22c55e",
    "Saved for Later": "#a855f7",
    "Skipped": "#94a3b8",
}


def _get_plotly_go() -> ModuleType:
    """Import plotly.graph_objects lazily."""
    return importlib.import_module("plotly.graph_objects")


def _ensure_charts_dir() -> Path:
    """Create charts directory if it doesn't exist."""
    _CHARTS_DIR.mkdir(parents=True, exist_ok=True)
    return _CHARTS_DIR


def build_engagement_figure(analytics: "SellerAnalytics") -> Any:
    """Pie chart of how shoppers reacted to the seller's products."""
    go = _get_plotly_go()
    labels = [label for label, _count in analytics.breakdown]
    values = [count for _label, count in analytics.breakdown]

    fig: Any = go.Figure()
    fig.add_trace(go.Pie(
        labels=labels,
        values=values,
        marker={"colors": [_SLICE_COLOURS.get(lb, "#64748b") for lb in labels]},
        hovertemplate="%{label}: %{value} (%{percent})<extra></extra>",
        sort=False,
    ))
    fig.update_layout(
        title=(
            f"Engagement: {analytics.total_views} views, "
            f"{analytics.conversion_rate}% conversion"
        ),
        template="plotly_white",
    )
    return fig


def export_engagement_chart(
    analytics: "SellerAnalytics",
    open_browser: bool = True,
) -> Path | None:
    """Export the seller's engagement breakdown as HTML."""
    if not analytics.breakdown:
        logger.warning("No engagement data to chart")
        return None

    fig = build_engagement_figure(analytics)

    charts_dir = _ensure_charts_dir()
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = charts_dir / f"engagement_{stamp}.html"
    fig.write_html(str(filepath))
    logger.info("Chart saved to %s", filepath)

    if open_browser:
        webbrowser.open(filepath.as_uri())

    return filepath
