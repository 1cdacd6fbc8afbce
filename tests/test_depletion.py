"""
Unit tests for the multi-batch stockout simulation.

Tests verify:
- Single-batch depletion date (day opening with no stock)
- Arrivals aggregated per day with tracking numbers
- Stockout gaps before a pending arrival do not end the simulation
- Event cap, horizon cap, past/undated arrivals ignored
- Pending arrival and in-transit detail extraction from shipments
"""
from datetime import date as Date

from fba_planner.domain.calendar import add_days
from fba_planner.domain.depletion import (
    HORIZON_DAYS,
    MAX_EVENTS,
    StockEvent,
    StockEventType,
    simulate_stockout,
    pending_arrivals,
    in_transit_details,
    simulate_sku,
)
from fba_planner.domain.models import (
    SKU,
    Category,
    PendingArrival,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
)

TODAY = Date(2026, 3, 1)


def arrival(qty, offset, tracking="T1"):
    return PendingArrival(quantity=qty, expected_date=add_days(TODAY, offset), tracking_number=tracking)


class TestSingleBatch:
    """Test depletion without arrivals."""

    def test_seventy_units_at_ten_per_day(self):
        """70 units at 10/day: the shelf opens empty on day 7."""
        result = simulate_stockout(10, 70, [], TODAY)
        assert result.final_stockout_date == add_days(TODAY, 7)
        assert result.events == [StockEvent(type=StockEventType.STOCKOUT, date=add_days(TODAY, 7))]

    def test_fractional_sales(self):
        """Fractional stock is carried; 10 units at 3/day last 4 days."""
        result = simulate_stockout(3, 10, [], TODAY)
        assert result.final_stockout_date == add_days(TODAY, 4)

    def test_empty_stock_is_stockout_today(self):
        result = simulate_stockout(5, 0, [], TODAY)
        assert result.final_stockout_date == TODAY

    def test_no_sales_short_circuits(self):
        """daily_sales <= 0 returns an empty result."""
        for daily in (0, -1):
            result = simulate_stockout(daily, 100, [arrival(50, 3)], TODAY)
            assert result.events == []
            assert result.final_stockout_date is None
            assert not result.has_stockout

    def test_horizon_cap(self):
        """Stock lasting past the horizon reports no stockout."""
        result = simulate_stockout(1, HORIZON_DAYS + 10, [], TODAY)
        assert result.final_stockout_date is None
        assert result.events == []

    def test_stockout_on_last_horizon_day(self):
        result = simulate_stockout(1, HORIZON_DAYS - 1, [], TODAY)
        assert result.final_stockout_date == add_days(TODAY, HORIZON_DAYS - 1)


class TestArrivals:
    """Test depletion with scheduled arrivals."""

    def test_arrival_before_stockout_extends_cover(self):
        """20 units + 100 arriving tomorrow at 10/day: 120 units cover 12 days."""
        # Not None: 120 units at 10/day run out well inside the horizon. Older
        # planning notes listed this case as "no final stockout"; DESIGN.md
        # records why the computed date is kept.
        result = simulate_stockout(10, 20, [arrival(100, 1)], TODAY)
        first = result.events[0]
        assert first.type is StockEventType.ARRIVAL
        assert first.date == add_days(TODAY, 1)
        assert first.quantity == 100
        assert first.stock_before == 10
        assert first.stock_after == 110
        assert result.final_stockout_date == add_days(TODAY, 12)
        assert [e.type for e in result.events] == [StockEventType.ARRIVAL, StockEventType.STOCKOUT]

    def test_large_arrival_no_stockout_in_horizon(self):
        result = simulate_stockout(10, 20, [arrival(5000, 1)], TODAY)
        assert result.final_stockout_date is None
        assert len(result.events) == 1
        assert result.events[0].type is StockEventType.ARRIVAL

    def test_arrival_today(self):
        """An arrival dated today is received before today's sales."""
        result = simulate_stockout(10, 0, [arrival(30, 0)], TODAY)
        assert result.events[0] == StockEvent(
            type=StockEventType.ARRIVAL, date=TODAY, quantity=30,
            stock_before=0.0, stock_after=30.0, tracking_numbers="T1",
        )
        assert result.final_stockout_date == add_days(TODAY, 3)

    def test_same_day_arrivals_aggregated(self):
        """Arrivals on the same day form one event with joined tracking numbers."""
        arrivals = [arrival(40, 2, "T1"), arrival(60, 2, "T2")]
        result = simulate_stockout(10, 100, arrivals, TODAY)
        event = result.events[0]
        assert event.quantity == 100
        assert event.tracking_numbers == "T1, T2"

    def test_unsorted_arrivals(self):
        """Arrival order in the input does not matter."""
        a = simulate_stockout(10, 20, [arrival(30, 10, "B"), arrival(30, 1, "A")], TODAY)
        b = simulate_stockout(10, 20, [arrival(30, 1, "A"), arrival(30, 10, "B")], TODAY)
        assert a == b

    def test_stockout_gap_then_refill(self):
        """Empty days before a pending arrival are recorded, stock floors at zero."""
        result = simulate_stockout(10, 20, [arrival(50, 5)], TODAY)
        types = [(e.type, e.date) for e in result.events]
        assert types == [
            (StockEventType.STOCKOUT, add_days(TODAY, 2)),
            (StockEventType.STOCKOUT, add_days(TODAY, 3)),
            (StockEventType.STOCKOUT, add_days(TODAY, 4)),
            (StockEventType.ARRIVAL, add_days(TODAY, 5)),
            (StockEventType.STOCKOUT, add_days(TODAY, 10)),
        ]
        # No negative carry-over into the arrival
        assert result.events[3].stock_before == 0
        assert result.events[3].stock_after == 50
        assert result.final_stockout_date == add_days(TODAY, 10)
        assert result.stockout_gaps == [add_days(TODAY, 2), add_days(TODAY, 3), add_days(TODAY, 4)]

    def test_past_arrival_ignored(self):
        result = simulate_stockout(10, 70, [arrival(100, -1)], TODAY)
        assert result.final_stockout_date == add_days(TODAY, 7)

    def test_undated_arrival_ignored(self):
        undated = PendingArrival(quantity=100, expected_date=None, tracking_number="T9")
        result = simulate_stockout(10, 70, [undated], TODAY)
        assert result.final_stockout_date == add_days(TODAY, 7)

    def test_event_cap_keeps_simulating(self):
        """Events stop at MAX_EVENTS but the final stockout is still found."""
        arrivals = [arrival(10, k, f"T{k}") for k in range(1, 21)]
        result = simulate_stockout(10, 0, arrivals, TODAY)
        assert len(result.events) == MAX_EVENTS
        assert result.events[0].type is StockEventType.STOCKOUT
        assert result.final_stockout_date == add_days(TODAY, 21)

    def test_custom_event_cap(self):
        result = simulate_stockout(10, 20, [arrival(50, 5)], TODAY, max_events=2)
        assert len(result.events) == 2
        assert result.final_stockout_date == add_days(TODAY, 10)


def shipment(tracking, items, offset=10, status=ShipmentStatus.SHIPPING):
    actual = add_days(TODAY, -1) if status.is_arrived else None
    return Shipment(
        tracking_number=tracking,
        category=Category.STANDARD,
        expected_arrival_date=add_days(TODAY, offset),
        actual_arrival_date=actual,
        status=status,
        items=[ShipmentItem(sku, qty) for sku, qty in items],
    )


class TestFromShipments:
    """Test extraction of pending arrivals from shipments."""

    def test_pending_arrivals_only_shipping(self):
        shipments = [
            shipment("T1", [("A", 100), ("B", 20)]),
            shipment("T2", [("A", 50)], status=ShipmentStatus.ARRIVED),
            shipment("T3", [("A", 30)], offset=20),
        ]
        result = pending_arrivals("A", shipments)
        assert result == [
            PendingArrival(100, add_days(TODAY, 10), "T1"),
            PendingArrival(30, add_days(TODAY, 20), "T3"),
        ]

    def test_pending_arrivals_unknown_sku(self):
        assert pending_arrivals("Z", [shipment("T1", [("A", 100)])]) == []

    def test_in_transit_details_sell_days(self):
        sku = SKU("A", daily_sales=10, fba_stock=0, in_transit_stock=95)
        details = in_transit_details(sku, [shipment("T1", [("A", 95)])])
        assert len(details) == 1
        assert details[0].sell_days == 9
        assert details[0].status is ShipmentStatus.SHIPPING
        assert details[0].expected_date == add_days(TODAY, 10)

    def test_in_transit_details_no_sales(self):
        sku = SKU("A", daily_sales=0, in_transit_stock=95)
        details = in_transit_details(sku, [shipment("T1", [("A", 95)])])
        assert details[0].sell_days == 0

    def test_simulate_sku(self):
        sku = SKU("A", daily_sales=10, fba_stock=50, in_transit_stock=100)
        result = simulate_sku(sku, [shipment("T1", [("A", 100)], offset=3)], TODAY)
        assert result.events[0].type is StockEventType.ARRIVAL
        assert result.events[0].tracking_numbers == "T1"
        assert result.final_stockout_date == add_days(TODAY, 15)
