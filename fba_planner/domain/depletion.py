"""
Multi-batch stockout simulation.

Projects FBA stock forward one day at a time, adding scheduled arrivals and
removing daily sales, to find the date the shelf runs empty for good.

Day model (day k = today + k, k in 0..HORIZON_DAYS-1):
    1. Arrivals expected on the day are received (one aggregated event).
    2. If the day opens with no sellable stock, a stockout event is recorded.
       - No arrival expected after that day -> final stockout, stop.
       - Otherwise stock is floored at 0 and the gap is simulated through
         to the next arrival (one stockout event per empty day).
    3. daily_sales units are sold (fractional stock allowed).

Emitted events are capped at MAX_EVENTS; the simulation keeps running after
the cap so the final stockout date is still found.

Arrivals without an expected date cannot be placed on the timeline and are
ignored, as are arrivals whose expected date is already in the past.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import date as Date
from enum import Enum
from typing import Iterable, List, Optional

from .calendar import add_days
from .models import SKU, Shipment, ShipmentStatus, PendingArrival

logger = logging.getLogger(__name__)

HORIZON_DAYS = 180
MAX_EVENTS = 10


class StockEventType(Enum):
    ARRIVAL = "arrival"
    STOCKOUT = "stockout"


@dataclass(frozen=True)
class StockEvent:
    """Point on the projected stock timeline."""
    type: StockEventType
    date: Date
    quantity: int = 0                       # Units received (arrival only)
    stock_before: Optional[float] = None    # Stock before the arrival
    stock_after: Optional[float] = None     # Stock after the arrival
    tracking_numbers: str = ""              # Comma-separated (arrival only)


@dataclass(frozen=True)
class DepletionResult:
    """Outcome of a stockout simulation."""
    events: List[StockEvent] = field(default_factory=list)
    final_stockout_date: Optional[Date] = None

    @property
    def has_stockout(self) -> bool:
        return self.final_stockout_date is not None

    @property
    def stockout_gaps(self) -> List[Date]:
        """Dates with an empty shelf that were later refilled by an arrival."""
        return [
            e.date for e in self.events
            if e.type is StockEventType.STOCKOUT and e.date != self.final_stockout_date
        ]


def simulate_stockout(
    daily_sales: float,
    fba_stock: float,
    arrivals: Iterable[PendingArrival],
    today: Date,
    horizon_days: int = HORIZON_DAYS,
    max_events: int = MAX_EVENTS,
) -> DepletionResult:
    """
    Simulate stock depletion with scheduled arrivals.

    Args:
        daily_sales: Units sold per day
        fba_stock: Sellable stock today (before today's sales)
        arrivals: Pending arrivals (quantity, expected_date, tracking_number)
        today: Day 0 of the simulation
        horizon_days: Number of simulated days
        max_events: Maximum number of events reported

    Returns:
        DepletionResult with event timeline and final stockout date
        (None = no final stockout within the horizon)

    Examples:
        >>> r = simulate_stockout(10, 70, [], date(2026, 3, 1))
        >>> r.final_stockout_date
        datetime.date(2026, 3, 8)
    """
    if daily_sales <= 0:
        return DepletionResult()

    scheduled = sorted(
        (a for a in arrivals if a.expected_date is not None and a.expected_date >= today),
        key=lambda a: a.expected_date,
    )
    last_arrival = scheduled[-1].expected_date if scheduled else None

    events: List[StockEvent] = []
    stock = float(fba_stock)

    def emit(event: StockEvent) -> None:
        if len(events) < max_events:
            events.append(event)

    for day_index in range(horizon_days):
        current = add_days(today, day_index)

        arriving = [a for a in scheduled if a.expected_date == current]
        arriving_qty = sum(a.quantity for a in arriving)
        if arriving_qty > 0:
            emit(StockEvent(
                type=StockEventType.ARRIVAL,
                date=current,
                quantity=arriving_qty,
                stock_before=max(0.0, stock),
                stock_after=max(0.0, stock) + arriving_qty,
                tracking_numbers=", ".join(a.tracking_number for a in arriving),
            ))
            stock = max(0.0, stock) + arriving_qty

        if stock <= 0:
            emit(StockEvent(type=StockEventType.STOCKOUT, date=current))
            if last_arrival is None or last_arrival <= current:
                logger.debug(f"Final stockout on {current} (day {day_index})")
                return DepletionResult(events=events, final_stockout_date=current)
            stock = 0.0

        stock -= daily_sales

    return DepletionResult(events=events, final_stockout_date=None)


def pending_arrivals(sku: str, shipments: Iterable[Shipment]) -> List[PendingArrival]:
    """
    Pending arrivals of a SKU from shipments still in transit.

    Only shipments with status "shipping" count; each matching item line
    becomes one PendingArrival.
    """
    result = []
    for shipment in shipments:
        if shipment.status is not ShipmentStatus.SHIPPING:
            continue
        for item in shipment.items:
            if item.sku == sku:
                result.append(PendingArrival(
                    quantity=item.quantity,
                    expected_date=shipment.expected_arrival_date,
                    tracking_number=shipment.tracking_number,
                ))
    return result


@dataclass(frozen=True)
class InTransitDetail:
    """In-transit line of a SKU with the days of sales it will cover."""
    tracking_number: str
    quantity: int
    expected_date: Optional[Date]
    sell_days: int
    status: ShipmentStatus


def in_transit_details(sku: SKU, shipments: Iterable[Shipment]) -> List[InTransitDetail]:
    """List the SKU's in-transit shipment lines (sell_days = 0 with no sales)."""
    details = []
    for shipment in shipments:
        if shipment.status is not ShipmentStatus.SHIPPING:
            continue
        for item in shipment.items:
            if item.sku != sku.sku:
                continue
            sell_days = math.floor(item.quantity / sku.daily_sales) if sku.daily_sales > 0 else 0
            details.append(InTransitDetail(
                tracking_number=shipment.tracking_number,
                quantity=item.quantity,
                expected_date=shipment.expected_arrival_date,
                sell_days=sell_days,
                status=shipment.status,
            ))
    return details


def simulate_sku(sku: SKU, shipments: Iterable[Shipment], today: Date) -> DepletionResult:
    """Run the stockout simulation for a SKU against the current shipments."""
    return simulate_stockout(
        daily_sales=sku.daily_sales,
        fba_stock=sku.fba_stock,
        arrivals=pending_arrivals(sku.sku, shipments),
        today=today,
    )
