"""
Centralized validation rules for user-entered planning data.

Each check returns (is_valid, error_message) so callers can report all
problems of a form or import row without exceptions.
"""
from datetime import date
from typing import Optional, Tuple

from .calendar import parse_month


def validate_quantity(qty: int, allow_negative: bool = False, min_val: Optional[int] = None, max_val: Optional[int] = None) -> Tuple[bool, str]:
    """
    Validate quantity value.

    Args:
        qty: Quantity to validate
        allow_negative: Whether negative values are allowed
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(qty, int) or isinstance(qty, bool):
        return False, "Quantity must be an integer"

    if not allow_negative and qty < 0:
        return False, "Quantity cannot be negative"

    if min_val is not None and qty < min_val:
        return False, f"Quantity must be at least {min_val}"

    if max_val is not None and qty > max_val:
        return False, f"Quantity cannot exceed {max_val}"

    return True, ""


def validate_sku_code(sku: str) -> Tuple[bool, str]:
    """Validate SKU code: non-empty, at most 128 characters, no whitespace inside."""
    if not sku or not sku.strip():
        return False, "SKU code cannot be empty"

    if len(sku) > 128:
        return False, "SKU code cannot exceed 128 characters"

    if any(c.isspace() for c in sku.strip()):
        return False, "SKU code cannot contain whitespace"

    return True, ""


def validate_daily_sales(value: float) -> Tuple[bool, str]:
    """Daily sales: non-negative number with at most 2 decimals."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False, "Daily sales must be a number"

    if value < 0:
        return False, "Daily sales cannot be negative"

    if round(value, 2) != value:
        return False, "Daily sales supports at most 2 decimals"

    return True, ""


def validate_date_range(start_date: date, end_date: date) -> Tuple[bool, str]:
    """Start date must not be after end date."""
    if start_date > end_date:
        return False, "Start date cannot be after end date"

    return True, ""


def validate_stock_level(fba_stock: int, in_transit_stock: int) -> Tuple[bool, str]:
    """FBA and in-transit stock must be non-negative."""
    if fba_stock < 0:
        return False, "FBA stock cannot be negative"

    if in_transit_stock < 0:
        return False, "In-transit stock cannot be negative"

    return True, ""


def validate_transport_days(shipping_days: int, shelf_days: int) -> Tuple[bool, str]:
    """Transport lead-time components must be positive integers (max one year)."""
    for label, value in (("Shipping days", shipping_days), ("Shelf days", shelf_days)):
        ok, _ = validate_quantity(value, min_val=1, max_val=365)
        if not ok:
            return False, f"{label} must be an integer between 1 and 365"

    return True, ""


def validate_month(token: str) -> Tuple[bool, str]:
    """Month token must be YYYY-MM."""
    try:
        parse_month(token)
    except ValueError as e:
        return False, str(e)

    return True, ""
