"""
Factory Stocking Policy

Month-relative target-inventory heuristic for factory orders.

Policy Table (m = months between the current month and the target month):

    m <= 0 : target = ceil(60 days x daily_sales), counted = FBA + in transit + factory
    m == 1 : target = ceil(45 days x daily_sales), counted = FBA + factory
    m == 2 : target = ceil(35 days x daily_sales), counted = FBA + factory
    m >= 3 : flat monthly need ceil(30 days x daily_sales), no stock offset

    suggested_order = max(0, target - counted)   (first three tiers)
    suggested_order = monthly_need               (m >= 3)

Actual shipments recorded for the target month are compared with the
suggestion:

    difference = actual_shipped - suggested_order
    need additional  iff difference < -0.2 x suggested_order
    excess           iff difference >  0.2 x suggested_order

Comparisons are strict. With suggested_order = 0 any shipment at all is
"excess" and no shipment is "normal".
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional

from fba_planner.domain.calendar import months_from_now, month_bounds
from fba_planner.domain.quantities import ceil_units
from fba_planner.domain.models import (
    SKU,
    Category,
    ActualShipment,
    FactoryInventory,
)

logger = logging.getLogger(__name__)

MONTHLY_DAYS = 30
DEVIATION_THRESHOLD = 0.2

# monthsFromNow -> (coverage days, count in-transit stock)
_COVERAGE_TIERS = {
    0: (60, True),
    1: (45, False),
    2: (35, False),
}


class StockingStatus(Enum):
    """Actual shipments vs suggestion for the month."""
    NEED_ADDITIONAL = "need_additional"
    EXCESS = "excess"
    NORMAL = "normal"


@dataclass(frozen=True)
class StockingRecommendation:
    """Suggested factory order for a SKU and month."""
    sku: str
    category: Category
    month: str
    months_from_now: int
    daily_sales: float
    fba_stock: int
    in_transit_stock: int
    factory_stock: int
    additional_order: int
    monthly_need: int
    target_stock: int
    stock_counted: int
    suggested_order: int
    total_actual: int
    difference: int
    is_additional_needed: bool
    is_excess: bool

    @property
    def status(self) -> StockingStatus:
        if self.is_additional_needed:
            return StockingStatus.NEED_ADDITIONAL
        if self.is_excess:
            return StockingStatus.EXCESS
        return StockingStatus.NORMAL


def _coverage_tier(months_ahead: int):
    """
    Coverage rule for a month offset.

    Returns:
        (coverage_days, include_in_transit) or None for the flat-need tier
    """
    if months_ahead <= 0:
        return _COVERAGE_TIERS[0]
    return _COVERAGE_TIERS.get(months_ahead)


def total_actual_shipped(sku: str, month: str, actual_shipments: Iterable[ActualShipment]) -> int:
    """Units of a SKU actually shipped within a YYYY-MM month (inclusive bounds)."""
    first, last = month_bounds(month)
    return sum(
        s.quantity for s in actual_shipments
        if s.sku == sku and first <= s.ship_date <= last
    )


def recommend_stocking(
    sku: SKU,
    month: str,
    today: date,
    factory_stock: int = 0,
    additional_order: int = 0,
    actual_shipments: Iterable[ActualShipment] = (),
) -> StockingRecommendation:
    """
    Compute the suggested factory order for a SKU and target month.

    Args:
        sku: SKU snapshot (daily_sales, fba_stock, in_transit_stock)
        month: Target month (YYYY-MM)
        today: Reference date defining the current month
        factory_stock: Factory-held stock recorded for the month
        additional_order: Manually entered extra order (reported as-is)
        actual_shipments: Recorded dispatches (filtered by SKU and month)

    Returns:
        StockingRecommendation

    Examples:
        >>> sku = SKU("A", daily_sales=10, fba_stock=100, in_transit_stock=50)
        >>> recommend_stocking(sku, "2026-03", date(2026, 3, 5)).suggested_order
        450
    """
    months_ahead = months_from_now(month, today)
    monthly_need = ceil_units(sku.daily_sales * MONTHLY_DAYS)

    tier = _coverage_tier(months_ahead)
    if tier is None:
        target_stock = monthly_need
        stock_counted = 0
        suggested_order = monthly_need
    else:
        coverage_days, include_in_transit = tier
        target_stock = ceil_units(sku.daily_sales * coverage_days)
        stock_counted = sku.fba_stock + factory_stock
        if include_in_transit:
            stock_counted += sku.in_transit_stock
        suggested_order = max(0, target_stock - stock_counted)

    total_actual = total_actual_shipped(sku.sku, month, actual_shipments)
    difference = total_actual - suggested_order
    threshold = DEVIATION_THRESHOLD * suggested_order

    return StockingRecommendation(
        sku=sku.sku,
        category=sku.category,
        month=month,
        months_from_now=months_ahead,
        daily_sales=sku.daily_sales,
        fba_stock=sku.fba_stock,
        in_transit_stock=sku.in_transit_stock,
        factory_stock=factory_stock,
        additional_order=additional_order,
        monthly_need=monthly_need,
        target_stock=target_stock,
        stock_counted=stock_counted,
        suggested_order=suggested_order,
        total_actual=total_actual,
        difference=difference,
        is_additional_needed=difference < -threshold,
        is_excess=difference > threshold,
    )


def plan_factory_month(
    skus: Iterable[SKU],
    month: str,
    today: date,
    factory_inventory: Iterable[FactoryInventory] = (),
    actual_shipments: Iterable[ActualShipment] = (),
    category: Optional[Category] = None,
) -> List[StockingRecommendation]:
    """
    Recommendations for every active SKU in a month.

    Factory records of other months are ignored; SKUs without a factory
    record count zero factory stock. Discontinued SKUs are skipped.
    """
    factory_by_sku: Dict[str, FactoryInventory] = {
        record.sku: record for record in factory_inventory if record.month == month
    }
    actual_shipments = list(actual_shipments)

    recommendations = []
    for sku in skus:
        if sku.is_discontinued:
            continue
        if category is not None and sku.category is not category:
            continue
        record = factory_by_sku.get(sku.sku)
        recommendations.append(recommend_stocking(
            sku,
            month,
            today,
            factory_stock=record.quantity if record else 0,
            additional_order=record.additional_order if record else 0,
            actual_shipments=actual_shipments,
        ))
    logger.debug(f"Factory plan {month}: {len(recommendations)} SKUs")
    return recommendations


def category_stats(recommendations: Iterable[StockingRecommendation]) -> Dict[Category, Dict[str, int]]:
    """
    Count need_additional / excess / normal per category.

    Returns:
        {Category: {"total": n, "need_additional": a, "excess": e, "normal": k}}
    """
    stats = {
        c: {"total": 0, StockingStatus.NEED_ADDITIONAL.value: 0,
            StockingStatus.EXCESS.value: 0, StockingStatus.NORMAL.value: 0}
        for c in Category
    }
    for rec in recommendations:
        bucket = stats[rec.category]
        bucket["total"] += 1
        bucket[rec.status.value] += 1
    return stats
