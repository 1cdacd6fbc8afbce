"""
Stock alert classification.

Maps a SKU's stock position to urgent / warning / sufficient using fixed
thresholds on days of cover:

    1. daily_sales <= 0                              -> sufficient
    2. fba days <= 7  and nothing in transit         -> urgent
    3. fba days <= 35 and nothing in transit         -> warning
    4. (fba + in transit) days > 35                  -> sufficient
    5. otherwise                                     -> warning

Anything in transit rules out "urgent", whatever its quantity.
"""
import logging
import math
from typing import Dict, Iterable, List, Optional

from .models import SKU, AlertLevel, TransportConfig, DEFAULT_TRANSPORT_CONFIG
from .lead_time import transport_lead_days

logger = logging.getLogger(__name__)

URGENT_DAYS = 7
WARNING_DAYS = 35
SELL_THROUGH_DAYS = 35   # Target window to consume stock when sufficient
NO_SALES_DAYS = 999      # Display value for "infinite" cover


def days_of_stock(stock: float, daily_sales: float) -> Optional[float]:
    """Real-valued days of cover, None when there are no sales."""
    if daily_sales <= 0:
        return None
    return stock / daily_sales


def floored_days_of_stock(stock: float, daily_sales: float) -> int:
    """Whole days of cover for display (NO_SALES_DAYS when there are no sales)."""
    days = days_of_stock(stock, daily_sales)
    if days is None:
        return NO_SALES_DAYS
    return math.floor(days)


def classify_alert(sku: SKU) -> AlertLevel:
    """
    Classify the stockout risk of a SKU.

    Args:
        sku: Non-discontinued SKU snapshot

    Returns:
        AlertLevel (total: every SKU lands in exactly one bucket)
    """
    if sku.daily_sales <= 0:
        return AlertLevel.SUFFICIENT

    fba_days = sku.fba_stock / sku.daily_sales
    if fba_days <= URGENT_DAYS and sku.in_transit_stock == 0:
        return AlertLevel.URGENT
    if fba_days <= WARNING_DAYS and sku.in_transit_stock == 0:
        return AlertLevel.WARNING
    if sku.total_stock / sku.daily_sales > WARNING_DAYS:
        return AlertLevel.SUFFICIENT
    return AlertLevel.WARNING


def classify_catalog(skus: Iterable[SKU]) -> Dict[AlertLevel, List[SKU]]:
    """
    Group active SKUs by alert level.

    Discontinued SKUs are skipped. Input order is preserved inside each group.
    """
    groups: Dict[AlertLevel, List[SKU]] = {level: [] for level in AlertLevel}
    for sku in skus:
        if sku.is_discontinued:
            logger.debug(f"Skipping discontinued SKU {sku.sku} in alert classification")
            continue
        groups[classify_alert(sku)].append(sku)
    return groups


def suggest_daily_sales(
    sku: SKU,
    level: AlertLevel,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
) -> float:
    """
    Suggested sales velocity for the SKU's alert level.

    - sufficient: velocity that sells through fba + in-transit in 35 days
    - urgent/warning: velocity that stretches FBA stock until a new
      shipment could arrive (one transport lead time)

    Returns:
        Suggested units per day, rounded to 2 decimals
    """
    if level is AlertLevel.SUFFICIENT:
        suggested = sku.total_stock / SELL_THROUGH_DAYS
    else:
        suggested = sku.fba_stock / transport_lead_days(sku.category, config)
    return round(suggested, 2)
