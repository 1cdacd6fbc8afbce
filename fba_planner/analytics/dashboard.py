"""
Dashboard figures: catalog summary, alert counts and event countdowns.

Countdowns report the days left before upcoming events (promotion starts,
factory holiday shutdowns) that fall within the countdown window.
"""
from dataclasses import dataclass
from datetime import date as Date
from typing import Iterable, List, Optional

from ..domain.alerts import classify_alert
from ..domain.calendar import days_between
from ..domain.models import (
    SKU,
    AlertLevel,
    Shipment,
    ShipmentStatus,
    Promotion,
    FactoryHoliday,
)

DEFAULT_COUNTDOWN_WINDOW_DAYS = 60


@dataclass(frozen=True)
class DashboardSummary:
    """Headline counts for a brand."""
    total_skus: int
    active_skus: int
    discontinued_skus: int
    shipping_shipments: int
    urgent_count: int
    warning_count: int
    sufficient_count: int


@dataclass(frozen=True)
class Countdown:
    """Days remaining before a named event."""
    name: str
    kind: str       # "promotion" or "holiday"
    start_date: Date
    days: int


def summarize(skus: Iterable[SKU], shipments: Iterable[Shipment]) -> DashboardSummary:
    """Catalog and alert counts (discontinued SKUs are not classified)."""
    skus = list(skus)
    active = [s for s in skus if not s.is_discontinued]

    counts = {level: 0 for level in AlertLevel}
    for sku in active:
        counts[classify_alert(sku)] += 1

    return DashboardSummary(
        total_skus=len(skus),
        active_skus=len(active),
        discontinued_skus=len(skus) - len(active),
        shipping_shipments=sum(1 for s in shipments if s.status is ShipmentStatus.SHIPPING),
        urgent_count=counts[AlertLevel.URGENT],
        warning_count=counts[AlertLevel.WARNING],
        sufficient_count=counts[AlertLevel.SUFFICIENT],
    )


def _within_window(days: int, window_days: int) -> bool:
    return 0 < days <= window_days


def countdowns(
    today: Date,
    promotions: Iterable[Promotion] = (),
    holidays: Iterable[FactoryHoliday] = (),
    window_days: int = DEFAULT_COUNTDOWN_WINDOW_DAYS,
) -> List[Countdown]:
    """
    Upcoming events starting within window_days (today excluded).

    Inactive promotions and events without a start date are ignored.
    Result is sorted by days remaining.
    """
    result = []
    for holiday in holidays:
        if holiday.holiday_start_date is None:
            continue
        days = days_between(today, holiday.holiday_start_date)
        if _within_window(days, window_days):
            result.append(Countdown(f"Factory holiday {holiday.year}", "holiday", holiday.holiday_start_date, days))

    for promotion in promotions:
        if not promotion.is_active or promotion.this_year_start_date is None:
            continue
        days = days_between(today, promotion.this_year_start_date)
        if _within_window(days, window_days):
            result.append(Countdown(promotion.name, "promotion", promotion.this_year_start_date, days))

    result.sort(key=lambda c: c.days)
    return result


def holiday_for_year(holidays: Iterable[FactoryHoliday], year: int) -> Optional[FactoryHoliday]:
    """Factory holiday configured for a year, if any."""
    for holiday in holidays:
        if holiday.year == year:
            return holiday
    return None
