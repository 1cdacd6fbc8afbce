"""
Unit tests for the transport lead-time model.
"""
import pytest
from datetime import date as Date

from fba_planner.domain.lead_time import (
    PREP_DAYS,
    BUFFER_DAYS,
    transport_lead_days,
    promotion_lead_days,
    latest_safe_ship_date,
)
from fba_planner.domain.models import Category, TransportConfig


class TestTransportConfig:
    """Test transport configuration defaults and validation."""

    def test_defaults(self):
        config = TransportConfig()
        assert config.shipping_days(Category.STANDARD) == 25
        assert config.shelf_days(Category.STANDARD) == 10
        assert config.shipping_days(Category.OVERSIZED) == 35
        assert config.shelf_days(Category.OVERSIZED) == 10

    def test_non_positive_rejected(self):
        """Lead-time components must be positive integers."""
        with pytest.raises(ValueError, match="standard_shipping_days"):
            TransportConfig(standard_shipping_days=0)
        with pytest.raises(ValueError, match="oversized_shelf_days"):
            TransportConfig(oversized_shelf_days=-3)

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            TransportConfig(standard_shelf_days=True)


class TestLeadDays:
    """Test lead-time arithmetic."""

    def test_transport_lead_days_defaults(self):
        assert transport_lead_days(Category.STANDARD) == 35
        assert transport_lead_days(Category.OVERSIZED) == 45

    def test_transport_lead_days_custom(self):
        config = TransportConfig(standard_shipping_days=20, standard_shelf_days=5,
                                 oversized_shipping_days=50, oversized_shelf_days=7)
        assert transport_lead_days(Category.STANDARD, config) == 25
        assert transport_lead_days(Category.OVERSIZED, config) == 57

    def test_promotion_lead_days(self):
        """Fixed prep and buffer days are added for both categories."""
        assert PREP_DAYS == 35
        assert BUFFER_DAYS == 14
        assert promotion_lead_days(Category.STANDARD) == 35 + 35 + 14
        assert promotion_lead_days(Category.OVERSIZED) == 35 + 45 + 14


class TestLatestSafeShipDate:
    """Test the last dispatch date before a promotion."""

    def test_standard(self):
        """15 Jul - (35 + 14) days = 27 May."""
        assert latest_safe_ship_date(Date(2026, 7, 15), Category.STANDARD) == Date(2026, 5, 27)

    def test_oversized(self):
        """15 Jul - (45 + 14) days = 17 May."""
        assert latest_safe_ship_date(Date(2026, 7, 15), Category.OVERSIZED) == Date(2026, 5, 17)

    def test_custom_config(self):
        config = TransportConfig(standard_shipping_days=10, standard_shelf_days=2)
        assert latest_safe_ship_date(Date(2026, 1, 10), Category.STANDARD, config) == Date(2025, 12, 15)
