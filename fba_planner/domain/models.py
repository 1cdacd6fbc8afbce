"""
Domain models for fba-planner.

Pure data classes + value objects. No I/O, no side effects.
All entities are snapshots supplied by the surrounding application;
the planning code never mutates them.
"""
from dataclasses import dataclass, field
from enum import Enum
from datetime import date as Date
from typing import Optional, Tuple


class Category(Enum):
    """Size class of a SKU (each class has its own transport lead time)."""
    STANDARD = "standard"
    OVERSIZED = "oversized"


class ShipmentStatus(Enum):
    """Shipment lifecycle status."""
    SHIPPING = "shipping"    # In transit, not yet confirmed
    ARRIVED = "arrived"      # Arrived exactly on the expected date (or no expected date)
    EARLY = "early"          # Arrived before the expected date
    DELAYED = "delayed"      # Arrived after the expected date

    @property
    def is_arrived(self) -> bool:
        return self is not ShipmentStatus.SHIPPING


class AlertLevel(Enum):
    """Stockout risk classification."""
    URGENT = "urgent"
    WARNING = "warning"
    SUFFICIENT = "sufficient"


@dataclass(frozen=True)
class SKU:
    """Catalog item with its current stock position - immutable."""
    sku: str
    category: Category = Category.STANDARD
    daily_sales: float = 0.0        # Average units sold per day
    fba_stock: int = 0              # Sellable units in the fulfillment warehouse
    in_transit_stock: int = 0       # Units shipped but not yet arrived
    is_discontinued: bool = False   # Discontinued SKUs are excluded from forecasting
    notes: Optional[str] = None

    def __post_init__(self):
        if not self.sku or not self.sku.strip():
            raise ValueError("SKU cannot be empty")
        if self.daily_sales < 0:
            raise ValueError("Daily sales cannot be negative")
        if self.fba_stock < 0:
            raise ValueError("FBA stock cannot be negative")
        if self.in_transit_stock < 0:
            raise ValueError("In-transit stock cannot be negative")

    @property
    def total_stock(self) -> int:
        """FBA stock plus in-transit stock."""
        return self.fba_stock + self.in_transit_stock


DEFAULT_STANDARD_SHIPPING_DAYS = 25
DEFAULT_STANDARD_SHELF_DAYS = 10
DEFAULT_OVERSIZED_SHIPPING_DAYS = 35
DEFAULT_OVERSIZED_SHELF_DAYS = 10


@dataclass(frozen=True)
class TransportConfig:
    """
    Transport lead-time configuration (one per brand).

    Attributes:
        standard_shipping_days: Days at sea/air for standard items
        standard_shelf_days: Days from warehouse receipt to sellable (standard)
        oversized_shipping_days: Days at sea/air for oversized items
        oversized_shelf_days: Days from warehouse receipt to sellable (oversized)
    """
    standard_shipping_days: int = DEFAULT_STANDARD_SHIPPING_DAYS
    standard_shelf_days: int = DEFAULT_STANDARD_SHELF_DAYS
    oversized_shipping_days: int = DEFAULT_OVERSIZED_SHIPPING_DAYS
    oversized_shelf_days: int = DEFAULT_OVERSIZED_SHELF_DAYS

    def __post_init__(self):
        for name in (
            "standard_shipping_days",
            "standard_shelf_days",
            "oversized_shipping_days",
            "oversized_shelf_days",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def shipping_days(self, category: Category) -> int:
        if category is Category.OVERSIZED:
            return self.oversized_shipping_days
        return self.standard_shipping_days

    def shelf_days(self, category: Category) -> int:
        if category is Category.OVERSIZED:
            return self.oversized_shelf_days
        return self.standard_shelf_days


DEFAULT_TRANSPORT_CONFIG = TransportConfig()


@dataclass(frozen=True)
class ShipmentItem:
    """One SKU line inside a shipment."""
    sku: str
    quantity: int

    def __post_init__(self):
        if not self.sku or not self.sku.strip():
            raise ValueError("Shipment item SKU cannot be empty")
        if self.quantity <= 0:
            raise ValueError(f"Shipment item quantity must be > 0, got {self.quantity}")


@dataclass(frozen=True)
class Shipment:
    """Inbound shipment towards the fulfillment warehouse - immutable."""
    tracking_number: str
    category: Category = Category.STANDARD
    ship_date: Optional[Date] = None
    expected_arrival_date: Optional[Date] = None
    actual_arrival_date: Optional[Date] = None
    status: ShipmentStatus = ShipmentStatus.SHIPPING
    items: Tuple[ShipmentItem, ...] = ()
    warehouse: Optional[str] = None

    def __post_init__(self):
        if not self.tracking_number or not self.tracking_number.strip():
            raise ValueError("Tracking number cannot be empty")
        if self.status.is_arrived and self.actual_arrival_date is None:
            raise ValueError(f"Shipment {self.tracking_number}: status {self.status.value} requires an actual arrival date")
        # Accept lists from callers, store as tuple
        if not isinstance(self.items, tuple):
            object.__setattr__(self, 'items', tuple(self.items))

    def quantity_for(self, sku: str) -> int:
        """Total quantity of a SKU in this shipment."""
        return sum(item.quantity for item in self.items if item.sku == sku)


@dataclass(frozen=True)
class PendingArrival:
    """A scheduled inbound quantity for a single SKU."""
    quantity: int
    expected_date: Optional[Date]
    tracking_number: str = ""


@dataclass(frozen=True)
class PromotionSale:
    """Units of a SKU sold during last year's promotion window."""
    sku: str
    last_year_sales: int = 0

    def __post_init__(self):
        if self.last_year_sales < 0:
            raise ValueError("Last year sales cannot be negative")


@dataclass(frozen=True)
class Promotion:
    """
    Promotion with a historical window and this year's projected window.

    All dates are inclusive. this_year_end_date is optional: when missing the
    projected window lasts as long as last year's.
    """
    name: str
    last_year_start_date: Optional[Date] = None
    last_year_end_date: Optional[Date] = None
    this_year_start_date: Optional[Date] = None
    this_year_end_date: Optional[Date] = None
    is_active: bool = True
    sales: Tuple[PromotionSale, ...] = ()

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Promotion name cannot be empty")
        if (self.last_year_start_date and self.last_year_end_date
                and self.last_year_end_date < self.last_year_start_date):
            raise ValueError(f"Promotion '{self.name}': last year end date before start date")
        if (self.this_year_start_date and self.this_year_end_date
                and self.this_year_end_date < self.this_year_start_date):
            raise ValueError(f"Promotion '{self.name}': this year end date before start date")
        if not isinstance(self.sales, tuple):
            object.__setattr__(self, 'sales', tuple(self.sales))


@dataclass(frozen=True)
class FactoryInventory:
    """Factory-held stock for a SKU in a calendar month (YYYY-MM)."""
    sku: str
    month: str
    quantity: int = 0
    additional_order: int = 0   # Manually entered extra order

    def __post_init__(self):
        if self.quantity < 0:
            raise ValueError("Factory quantity cannot be negative")
        if self.additional_order < 0:
            raise ValueError("Additional order cannot be negative")


@dataclass(frozen=True)
class ActualShipment:
    """Recorded real-world dispatch of a SKU on a date."""
    sku: str
    ship_date: Date
    quantity: int
    notes: Optional[str] = None

    def __post_init__(self):
        if self.quantity < 0:
            raise ValueError("Actual shipment quantity cannot be negative")


@dataclass(frozen=True)
class FactoryHoliday:
    """Yearly factory shutdown window (e.g. Spring Festival)."""
    year: int
    holiday_start_date: Optional[Date] = None
    holiday_end_date: Optional[Date] = None
    last_ship_date: Optional[Date] = None        # Last dispatch before shutdown
    return_to_work_date: Optional[Date] = None
    first_ship_date: Optional[Date] = None       # First dispatch after shutdown

    def __post_init__(self):
        if (self.holiday_start_date and self.holiday_end_date
                and self.holiday_end_date < self.holiday_start_date):
            raise ValueError("Holiday end date cannot be before start date")


@dataclass(frozen=True)
class ShipmentImportRow:
    """Raw per-SKU-per-shipment row from a batch import."""
    sku: str
    tracking_number: str
    quantity: int
    ship_date: Optional[Date] = None
    warehouse: Optional[str] = None


@dataclass
class Catalog:
    """Convenience container bundling a brand's planning snapshot."""
    skus: list = field(default_factory=list)
    shipments: list = field(default_factory=list)
    transport: TransportConfig = DEFAULT_TRANSPORT_CONFIG
    promotions: list = field(default_factory=list)
    factory_inventory: list = field(default_factory=list)
    actual_shipments: list = field(default_factory=list)
    holidays: list = field(default_factory=list)

    def active_skus(self) -> list:
        """SKUs that take part in forecasting (not discontinued)."""
        return [s for s in self.skus if not s.is_discontinued]

    def sku_map(self) -> dict:
        return {s.sku: s for s in self.skus}
