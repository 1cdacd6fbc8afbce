"""
Unit tests for the projected stock chart.
"""
from datetime import date as Date

import numpy as np

from fba_planner.analytics.charts import projected_stock_series, render_stock_projection
from fba_planner.domain.calendar import add_days
from fba_planner.domain.models import SKU, PendingArrival, Shipment, ShipmentItem

TODAY = Date(2026, 3, 1)


class TestProjectedStockSeries:
    """Test the day-by-day stock curve."""

    def test_linear_depletion_floors_at_zero(self):
        x, stock = projected_stock_series(10, 70, [], TODAY, horizon_days=10)
        assert list(x) == list(range(10))
        np.testing.assert_allclose(stock, [70, 60, 50, 40, 30, 20, 10, 0, 0, 0])

    def test_arrival_at_day_open(self):
        arrivals = [PendingArrival(100, add_days(TODAY, 2), "T1")]
        _, stock = projected_stock_series(10, 20, arrivals, TODAY, horizon_days=5)
        np.testing.assert_allclose(stock, [20, 10, 100, 90, 80])

    def test_out_of_range_arrivals_ignored(self):
        arrivals = [
            PendingArrival(100, add_days(TODAY, -1), "OLD"),
            PendingArrival(100, add_days(TODAY, 30), "LATE"),
            PendingArrival(100, None, "UNDATED"),
        ]
        _, stock = projected_stock_series(10, 30, arrivals, TODAY, horizon_days=5)
        np.testing.assert_allclose(stock, [30, 20, 10, 0, 0])

    def test_no_sales_flat(self):
        _, stock = projected_stock_series(0, 40, [], TODAY, horizon_days=3)
        np.testing.assert_allclose(stock, [40, 40, 40])


class TestRenderStockProjection:
    """Test PNG rendering."""

    def test_writes_png(self, tmp_path):
        sku = SKU("A", daily_sales=10, fba_stock=150, in_transit_stock=200)
        shipments = [Shipment("T1", expected_arrival_date=add_days(TODAY, 12), items=[ShipmentItem("A", 200)])]
        path = render_stock_projection(sku, shipments, TODAY, tmp_path / "charts" / "A.png", horizon_days=60)
        assert path.exists()
        with open(path, 'rb') as f:
            assert f.read(8) == b"\x89PNG\r\n\x1a\n"

    def test_no_sales_sku(self, tmp_path):
        path = render_stock_projection(SKU("B", daily_sales=0, fba_stock=10), [], TODAY, tmp_path / "B.png")
        assert path.exists()
