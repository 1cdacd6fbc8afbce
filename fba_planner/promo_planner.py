"""
Promotion surge planning.

Projects the extra demand of a promotion from last year's results and works
out how much stock must be shipped, and by when, to cover it.

For each SKU with last-year sales:

    promo_daily_avg      = last_year_sales / last_year_window_days
    extra_demand         = max(0, ceil((promo_daily_avg - daily_sales) x this_year_window_days))
    consumed_before      = ceil(daily_sales x max(0, days_to_promo_start))
    stock_at_promo_start = max(0, fba + in_transit - consumed_before)
    need_to_ship         = max(0, extra_demand - stock_at_promo_start)
    last_ship_date       = latest_safe_ship_date(this_year_start, category)

Window lengths count both ends. A promotion without this year's end date
lasts as long as last year's.
"""
import logging
from dataclasses import dataclass
from datetime import date as Date
from typing import Iterable, List, Optional

from .domain.calendar import days_between
from .domain.lead_time import latest_safe_ship_date
from .domain.models import (
    SKU,
    Category,
    Promotion,
    TransportConfig,
    DEFAULT_TRANSPORT_CONFIG,
)
from .domain.quantities import ceil_units


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromotionSuggestion:
    """Stocking suggestion of a SKU for a promotion."""
    sku: str
    category: Category
    daily_sales: float
    last_year_sales: int
    promo_daily_avg: float
    extra_demand: int
    current_stock: int
    days_to_promo: int
    stock_at_promo_start: int
    need_to_ship: int
    last_ship_date: Date


def window_days(start: Date, end: Date) -> int:
    """Length of an inclusive date window."""
    return days_between(start, end) + 1


def promotion_window_days(promotion: Promotion) -> Optional[tuple]:
    """
    (last_year_days, this_year_days) for a promotion.

    Returns None when last year's window or this year's start is missing,
    since no projection can be made without them.
    """
    if (promotion.last_year_start_date is None
            or promotion.last_year_end_date is None
            or promotion.this_year_start_date is None):
        return None

    last_year_days = window_days(promotion.last_year_start_date, promotion.last_year_end_date)
    if promotion.this_year_end_date is not None:
        this_year_days = window_days(promotion.this_year_start_date, promotion.this_year_end_date)
    else:
        this_year_days = last_year_days
    return last_year_days, this_year_days


def suggest_for_sku(
    sku: SKU,
    last_year_sales: int,
    promotion: Promotion,
    today: Date,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
) -> Optional[PromotionSuggestion]:
    """
    Surge suggestion for a single SKU (None when the promotion lacks dates).
    """
    windows = promotion_window_days(promotion)
    if windows is None:
        return None
    last_year_days, this_year_days = windows
    start = promotion.this_year_start_date

    promo_daily_avg = last_year_sales / last_year_days
    extra_demand = max(0, ceil_units((promo_daily_avg - sku.daily_sales) * this_year_days))

    days_to_promo = days_between(today, start)
    consumed_before_promo = ceil_units(sku.daily_sales * max(0, days_to_promo))
    stock_at_promo_start = max(0, sku.total_stock - consumed_before_promo)
    need_to_ship = max(0, extra_demand - stock_at_promo_start)

    return PromotionSuggestion(
        sku=sku.sku,
        category=sku.category,
        daily_sales=sku.daily_sales,
        last_year_sales=last_year_sales,
        promo_daily_avg=round(promo_daily_avg, 2),
        extra_demand=extra_demand,
        current_stock=sku.total_stock,
        days_to_promo=days_to_promo,
        stock_at_promo_start=stock_at_promo_start,
        need_to_ship=need_to_ship,
        last_ship_date=latest_safe_ship_date(start, sku.category, config),
    )


def plan_promotion(
    promotion: Promotion,
    skus: Iterable[SKU],
    today: Date,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
) -> List[PromotionSuggestion]:
    """
    Surge suggestions for every SKU with last-year sales in the promotion.

    Args:
        promotion: Promotion with its last-year sales rows
        skus: Brand catalog
        today: Reference date for stock consumption before the promotion
        config: Transport lead times

    Returns:
        One suggestion per sales row, in sales-row order. Empty when the
        promotion lacks a required date. Rows referencing unknown or
        discontinued SKUs are skipped.
    """
    if promotion_window_days(promotion) is None:
        logger.debug(f"Promotion '{promotion.name}' missing dates, no suggestions")
        return []

    sku_map = {s.sku: s for s in skus}
    suggestions = []
    for sale in promotion.sales:
        sku = sku_map.get(sale.sku)
        if sku is None:
            logger.debug(f"Promotion '{promotion.name}': unknown SKU {sale.sku}, skipped")
            continue
        if sku.is_discontinued:
            continue
        suggestions.append(suggest_for_sku(sku, sale.last_year_sales, promotion, today, config))
    return suggestions
