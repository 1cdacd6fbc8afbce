"""
Shipping plan workflow: per-SKU replenishment rows for the planning table.

Each row combines the stock position, alert level, stockout simulation and
a suggested dispatch (30 days of sales, shipped early enough to land before
the naive stockout date).
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from ..domain.alerts import classify_alert, floored_days_of_stock
from ..domain.calendar import add_days
from ..domain.depletion import (
    DepletionResult,
    InTransitDetail,
    in_transit_details,
    simulate_sku,
)
from ..domain.lead_time import transport_lead_days
from ..domain.models import (
    SKU,
    AlertLevel,
    Category,
    Shipment,
    TransportConfig,
    DEFAULT_TRANSPORT_CONFIG,
)
from ..domain.quantities import ceil_units

logger = logging.getLogger(__name__)

SUGGESTED_COVER_DAYS = 30


@dataclass(frozen=True)
class PlanRow:
    """One SKU line of the shipping plan."""
    sku: str
    category: Category
    daily_sales: float
    fba_stock: int
    in_transit_stock: int
    total_stock: int
    days_of_stock: int
    total_days_of_stock: int
    stockout_date: Optional[date]
    plan_ship_date: date
    suggested_quantity: int
    alert_level: AlertLevel
    shipping_days: int
    depletion: DepletionResult
    in_transit: List[InTransitDetail] = field(default_factory=list)
    final_quantity: int = 0

    @property
    def difference(self) -> int:
        """Recorded dispatch quantity minus suggestion."""
        return self.final_quantity - self.suggested_quantity


def build_plan_row(
    sku: SKU,
    shipments: Iterable[Shipment],
    today: date,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
    final_quantity: int = 0,
) -> PlanRow:
    """
    Build the shipping plan row of a SKU.

    plan_ship_date is today when the FBA cover is already shorter than the
    transport lead time, otherwise the day that leaves exactly one lead time
    before the naive stockout date.
    """
    shipments = list(shipments)
    days_of_stock = floored_days_of_stock(sku.fba_stock, sku.daily_sales)
    total_days_of_stock = floored_days_of_stock(sku.total_stock, sku.daily_sales)
    stockout_date = add_days(today, days_of_stock) if sku.daily_sales > 0 else None
    shipping_days = transport_lead_days(sku.category, config)

    if stockout_date is not None and days_of_stock > shipping_days:
        plan_ship_date = add_days(today, days_of_stock - shipping_days)
    else:
        plan_ship_date = today

    return PlanRow(
        sku=sku.sku,
        category=sku.category,
        daily_sales=sku.daily_sales,
        fba_stock=sku.fba_stock,
        in_transit_stock=sku.in_transit_stock,
        total_stock=sku.total_stock,
        days_of_stock=days_of_stock,
        total_days_of_stock=total_days_of_stock,
        stockout_date=stockout_date,
        plan_ship_date=plan_ship_date,
        suggested_quantity=ceil_units(sku.daily_sales * SUGGESTED_COVER_DAYS),
        alert_level=classify_alert(sku),
        shipping_days=shipping_days,
        depletion=simulate_sku(sku, shipments, today),
        in_transit=in_transit_details(sku, shipments),
        final_quantity=final_quantity,
    )


def build_shipping_plan(
    skus: Iterable[SKU],
    shipments: Iterable[Shipment],
    today: date,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
    recorded_quantities: Optional[Mapping[str, Mapping[str, int]]] = None,
) -> Dict[Category, List[PlanRow]]:
    """
    Shipping plan rows of all active SKUs, split by category.

    Args:
        skus: Brand catalog
        shipments: All shipments of the brand
        today: Reference date
        config: Transport lead times
        recorded_quantities: {sku: {column_label: qty}} dispatches entered
            against the plan; summed into final_quantity

    Returns:
        {Category.STANDARD: [...], Category.OVERSIZED: [...]}
    """
    shipments = list(shipments)
    recorded_quantities = recorded_quantities or {}
    plan: Dict[Category, List[PlanRow]] = {c: [] for c in Category}
    for sku in skus:
        if sku.is_discontinued:
            continue
        final_quantity = sum(q or 0 for q in recorded_quantities.get(sku.sku, {}).values())
        plan[sku.category].append(build_plan_row(sku, shipments, today, config, final_quantity))
    logger.debug(
        f"Shipping plan: {len(plan[Category.STANDARD])} standard, "
        f"{len(plan[Category.OVERSIZED])} oversized"
    )
    return plan


def plan_totals(rows: Iterable[PlanRow]) -> Dict[str, int]:
    """Column totals of a plan table."""
    totals = {"fba_stock": 0, "in_transit_stock": 0, "suggested_quantity": 0, "final_quantity": 0}
    for row in rows:
        totals["fba_stock"] += row.fba_stock
        totals["in_transit_stock"] += row.in_transit_stock
        totals["suggested_quantity"] += row.suggested_quantity
        totals["final_quantity"] += row.final_quantity
    return totals
