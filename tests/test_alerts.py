"""
Unit tests for stock alert classification.

Tests verify:
- Exact thresholds (7 / 35 days, real-valued comparison)
- In-transit stock always rules out "urgent"
- No-sales SKUs are always sufficient
- Suggested daily sales per alert level
"""
import pytest

from fba_planner.domain.alerts import (
    NO_SALES_DAYS,
    classify_alert,
    classify_catalog,
    days_of_stock,
    floored_days_of_stock,
    suggest_daily_sales,
)
from fba_planner.domain.models import SKU, AlertLevel, Category


def make_sku(fba=0, transit=0, daily=10.0, **kwargs):
    return SKU(sku=kwargs.pop("sku", "SKU-1"), daily_sales=daily, fba_stock=fba,
               in_transit_stock=transit, **kwargs)


class TestClassifyAlert:
    """Test the alert decision table."""

    def test_no_sales_always_sufficient(self):
        """daily_sales <= 0 is sufficient whatever the stock."""
        for fba in (0, 1, 1000):
            for transit in (0, 50):
                assert classify_alert(make_sku(fba, transit, daily=0)) is AlertLevel.SUFFICIENT

    def test_urgent_at_seven_days(self):
        """Exactly 7 days of cover with nothing in transit is urgent."""
        assert classify_alert(make_sku(fba=70)) is AlertLevel.URGENT
        assert classify_alert(make_sku(fba=0)) is AlertLevel.URGENT

    def test_warning_just_above_seven_days(self):
        """Comparison uses real-valued days (7.1 > 7)."""
        assert classify_alert(make_sku(fba=71)) is AlertLevel.WARNING

    def test_warning_at_thirty_five_days(self):
        assert classify_alert(make_sku(fba=350)) is AlertLevel.WARNING

    def test_sufficient_above_thirty_five_days(self):
        assert classify_alert(make_sku(fba=351)) is AlertLevel.SUFFICIENT

    def test_in_transit_never_urgent(self):
        """Any in-transit quantity prevents urgent, even with empty FBA stock."""
        for fba in (0, 10, 70):
            for transit in (1, 10, 100):
                assert classify_alert(make_sku(fba, transit)) is not AlertLevel.URGENT

    def test_in_transit_low_total_is_warning(self):
        """Fallback branch: in transit but total cover <= 35 days."""
        assert classify_alert(make_sku(fba=0, transit=1)) is AlertLevel.WARNING
        assert classify_alert(make_sku(fba=300, transit=50)) is AlertLevel.WARNING  # exactly 35 days

    def test_in_transit_high_total_is_sufficient(self):
        assert classify_alert(make_sku(fba=0, transit=400)) is AlertLevel.SUFFICIENT

    def test_urgent_implication_over_grid(self):
        """days <= 7 and nothing in transit implies urgent."""
        for daily in (0.5, 1, 3.25, 10, 120):
            for fba in range(0, 50):
                if fba / daily <= 7:
                    assert classify_alert(make_sku(fba, 0, daily)) is AlertLevel.URGENT


class TestClassifyCatalog:
    """Test grouping by alert level."""

    def test_groups_and_skips_discontinued(self):
        skus = [
            make_sku(fba=10, sku="A"),
            make_sku(fba=200, sku="B"),
            make_sku(fba=1000, sku="C"),
            make_sku(fba=0, sku="D", is_discontinued=True),
        ]
        groups = classify_catalog(skus)
        assert set(groups) == set(AlertLevel)
        assert [s.sku for s in groups[AlertLevel.URGENT]] == ["A"]
        assert [s.sku for s in groups[AlertLevel.WARNING]] == ["B"]
        assert [s.sku for s in groups[AlertLevel.SUFFICIENT]] == ["C"]

    def test_empty_catalog(self):
        groups = classify_catalog([])
        assert all(v == [] for v in groups.values())


class TestDaysOfStock:
    """Test days-of-cover helpers."""

    def test_real_valued(self):
        assert days_of_stock(75, 10) == pytest.approx(7.5)

    def test_no_sales(self):
        assert days_of_stock(75, 0) is None
        assert floored_days_of_stock(75, 0) == NO_SALES_DAYS

    def test_floored(self):
        assert floored_days_of_stock(79, 10) == 7


class TestSuggestDailySales:
    """Test suggested sales velocity."""

    def test_sufficient_sells_through_in_35_days(self):
        sku = make_sku(fba=300, transit=100)
        assert suggest_daily_sales(sku, AlertLevel.SUFFICIENT) == pytest.approx(11.43)

    def test_urgent_stretches_to_next_arrival(self):
        sku = make_sku(fba=50)
        assert suggest_daily_sales(sku, AlertLevel.URGENT) == pytest.approx(1.43)

    def test_warning_oversized_uses_oversized_lead_time(self):
        sku = make_sku(fba=90, category=Category.OVERSIZED)
        assert suggest_daily_sales(sku, AlertLevel.WARNING) == pytest.approx(2.0)
