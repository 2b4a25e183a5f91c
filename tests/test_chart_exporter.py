# tests/test_chart_exporter.py

"""Tests for the Plotly engagement chart exporter."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from src.services.seller_dashboard import SellerAnalytics
from src.storage.chart_exporter import (
    build_engagement_figure,
    export_engagement_chart,
)


def _analytics() -> SellerAnalytics:
    """Three rights, one left, two purchases."""
    return SellerAnalytics(
        total_views=6,
        total_swipes_right=3,
        total_swipes_left=1,
        total_purchases=2,
        conversion_rate="50.0",
        skipped=2,
        breakdown=[
            ("Added to Cart", 3), ("Saved for Later", 1), ("Skipped", 2),
        ],
    )


class TestBuildEngagementFigure(unittest.TestCase):
    """Figure contents."""

    def test_pie_slices_follow_breakdown(self) -> None:
        fig = build_engagement_figure(_analytics())
        pie = fig.data[0]
        self.assertEqual(
            list(pie.labels),
            ["Added to Cart", "Saved for Later", "Skipped"],
        )
        self.assertEqual(list(pie.values), [3, 1, 2])
        self.assertIn("50.0% conversion", fig.layout.title.text)


class TestExportEngagementChart(unittest.TestCase):
    """HTML export."""

    def test_generates_html_file(self) -> None:
        """Export should create an HTML file in the charts dir."""
        with tempfile.TemporaryDirectory() as tmp:
            with patch(
                "src.storage.chart_exporter._CHARTS_DIR",
                Path(tmp) / "charts",
            ):
                path = export_engagement_chart(
                    _analytics(), open_browser=False,
                )
                assert path is not None
                self.assertTrue(path.exists())
                self.assertTrue(path.name.startswith("engagement_"))
                self.assertIn("plotly", path.read_text(encoding="utf-8"))

    def test_no_data_returns_none(self) -> None:
        self.assertIsNone(
            export_engagement_chart(SellerAnalytics(), open_browser=False),
        )

    @patch("src.storage.chart_exporter.webbrowser")
    def test_opens_browser(self, mock_wb: MagicMock) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with patch(
                "src.storage.chart_exporter._CHARTS_DIR", Path(tmp),
            ):
                path = export_engagement_chart(_analytics())
        assert path is not None
        mock_wb.open.assert_called_once_with(path.as_uri())


if __name__ == "__main__":
    unittest.main()
