"""
Transport lead-time model.

Lead time is the number of days from dispatch to sellable availability:
    transport_lead_days = shipping_days + shelf_days

Promotion preparation adds fixed policy days on top:
    promotion_lead_days = PREP_DAYS + transport_lead_days + BUFFER_DAYS

PREP_DAYS and BUFFER_DAYS are identical for both size categories.
"""
from datetime import date as Date

from .calendar import add_days
from .models import Category, TransportConfig, DEFAULT_TRANSPORT_CONFIG

PREP_DAYS = 35      # Factory preparation before dispatch
BUFFER_DAYS = 14    # Safety margin before a promotion starts


def transport_lead_days(category: Category, config: TransportConfig = DEFAULT_TRANSPORT_CONFIG) -> int:
    """
    Days from dispatch to sellable stock for a size category.

    Examples:
        >>> transport_lead_days(Category.STANDARD)    # 25 + 10
        35
        >>> transport_lead_days(Category.OVERSIZED)   # 35 + 10
        45
    """
    return config.shipping_days(category) + config.shelf_days(category)


def promotion_lead_days(category: Category, config: TransportConfig = DEFAULT_TRANSPORT_CONFIG) -> int:
    """Total days needed to prepare, ship and buffer stock for a promotion."""
    return PREP_DAYS + transport_lead_days(category, config) + BUFFER_DAYS


def latest_safe_ship_date(
    promo_start_date: Date,
    category: Category,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
) -> Date:
    """
    Last dispatch date that still lands stock BUFFER_DAYS before the promotion.

    Examples:
        >>> latest_safe_ship_date(date(2026, 7, 15), Category.STANDARD)
        datetime.date(2026, 5, 27)    # 15 Jul - (35 + 14) days
    """
    return add_days(promo_start_date, -(transport_lead_days(category, config) + BUFFER_DAYS))
