"""
Plain-record conversion for the planning snapshot.

The storage layer hands the planner plain dicts (dates as YYYY-MM-DD,
enums as their lowercase tokens). Keys are accepted in camelCase, as the
storage layer emits them, or in snake_case.

Results go back the same way: to_record() turns dataclasses, enums and
dates into JSON-ready structures.
"""
import json
import logging
from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import transport_from_dict
from ..domain.calendar import parse_date, parse_month
from ..domain.models import (
    SKU,
    Category,
    Catalog,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
    ShipmentImportRow,
    Promotion,
    PromotionSale,
    FactoryInventory,
    ActualShipment,
    FactoryHoliday,
    TransportConfig,
    DEFAULT_TRANSPORT_CONFIG,
)

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """A snapshot record could not be converted."""

    def __init__(self, section: str, index: Optional[int], reason: str):
        self.section = section
        self.index = index
        self.reason = reason
        where = section if index is None else f"{section}[{index}]"
        super().__init__(f"{where}: {reason}")


# Field aliases: canonical snake_case name -> accepted keys
FIELD_ALIASES = {
    "daily_sales": ["daily_sales", "dailySales"],
    "fba_stock": ["fba_stock", "fbaStock"],
    "in_transit_stock": ["in_transit_stock", "inTransitStock"],
    "is_discontinued": ["is_discontinued", "isDiscontinued"],
    "tracking_number": ["tracking_number", "trackingNumber"],
    "ship_date": ["ship_date", "shipDate"],
    "expected_arrival_date": ["expected_arrival_date", "expectedArrivalDate"],
    "actual_arrival_date": ["actual_arrival_date", "actualArrivalDate"],
    "last_year_start_date": ["last_year_start_date", "lastYearStartDate"],
    "last_year_end_date": ["last_year_end_date", "lastYearEndDate"],
    "this_year_start_date": ["this_year_start_date", "thisYearStartDate"],
    "this_year_end_date": ["this_year_end_date", "thisYearEndDate"],
    "is_active": ["is_active", "isActive"],
    "last_year_sales": ["last_year_sales", "lastYearSales"],
    "additional_order": ["additional_order", "additionalOrder"],
    "holiday_start_date": ["holiday_start_date", "holidayStartDate"],
    "holiday_end_date": ["holiday_end_date", "holidayEndDate"],
    "last_ship_date": ["last_ship_date", "lastShipDate"],
    "return_to_work_date": ["return_to_work_date", "returnToWorkDate"],
    "first_ship_date": ["first_ship_date", "firstShipDate"],
    "standard_shipping_days": ["standard_shipping_days", "standardShippingDays"],
    "standard_shelf_days": ["standard_shelf_days", "standardShelfDays"],
    "oversized_shipping_days": ["oversized_shipping_days", "oversizedShippingDays"],
    "oversized_shelf_days": ["oversized_shelf_days", "oversizedShelfDays"],
}


def _get(record: Dict[str, Any], name: str, default: Any = None) -> Any:
    for key in FIELD_ALIASES.get(name, [name]):
        if key in record and record[key] is not None:
            return record[key]
    return default


def _int(value: Any, name: str) -> int:
    # Stock and quantities are whole units: 12.0 is accepted, 12.9 is not
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name} must be an integer, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _float(value: Any, name: str) -> float:
    # Decimal columns arrive as strings ("12.50")
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def _bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"{name} must be true/false, got {value!r}")


def _nested(record: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    rows = record.get(key) or []
    if not isinstance(rows, list):
        raise ValueError(f"{key} must be a list of objects")
    for position, row in enumerate(rows):
        if not isinstance(row, dict):
            raise ValueError(f"{key}[{position}] must be an object, got {row!r}")
    return rows


def _enum(enum_cls, value: Any, default):
    if value is None or value == "":
        return default
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValueError(f"invalid {enum_cls.__name__} '{value}' (allowed: {allowed})") from None


# ============ Readers ============

def sku_from_record(record: Dict[str, Any]) -> SKU:
    return SKU(
        sku=str(record.get("sku") or "").strip(),
        category=_enum(Category, record.get("category"), Category.STANDARD),
        daily_sales=_float(_get(record, "daily_sales", 0), "dailySales"),
        fba_stock=_int(_get(record, "fba_stock", 0), "fbaStock"),
        in_transit_stock=_int(_get(record, "in_transit_stock", 0), "inTransitStock"),
        is_discontinued=_bool(_get(record, "is_discontinued", False), "isDiscontinued"),
        notes=record.get("notes"),
    )


def shipment_from_record(record: Dict[str, Any]) -> Shipment:
    items = [
        ShipmentItem(sku=str(item.get("sku") or "").strip(), quantity=_int(item.get("quantity"), "quantity"))
        for item in _nested(record, "items")
    ]
    return Shipment(
        tracking_number=str(_get(record, "tracking_number", "")).strip(),
        category=_enum(Category, record.get("category"), Category.STANDARD),
        ship_date=parse_date(_get(record, "ship_date")),
        expected_arrival_date=parse_date(_get(record, "expected_arrival_date")),
        actual_arrival_date=parse_date(_get(record, "actual_arrival_date")),
        status=_enum(ShipmentStatus, record.get("status"), ShipmentStatus.SHIPPING),
        items=tuple(items),
        warehouse=record.get("warehouse"),
    )


def promotion_from_record(record: Dict[str, Any]) -> Promotion:
    sales = [
        PromotionSale(
            sku=str(row.get("sku") or "").strip(),
            last_year_sales=_int(_get(row, "last_year_sales", 0), "lastYearSales"),
        )
        for row in _nested(record, "sales")
    ]
    return Promotion(
        name=str(record.get("name") or "").strip(),
        last_year_start_date=parse_date(_get(record, "last_year_start_date")),
        last_year_end_date=parse_date(_get(record, "last_year_end_date")),
        this_year_start_date=parse_date(_get(record, "this_year_start_date")),
        this_year_end_date=parse_date(_get(record, "this_year_end_date")),
        is_active=_bool(_get(record, "is_active", True), "isActive"),
        sales=tuple(sales),
    )


def factory_inventory_from_record(record: Dict[str, Any]) -> FactoryInventory:
    month = str(record.get("month") or "").strip()
    parse_month(month)
    return FactoryInventory(
        sku=str(record.get("sku") or "").strip(),
        month=month,
        quantity=_int(record.get("quantity", 0), "quantity"),
        additional_order=_int(_get(record, "additional_order", 0), "additionalOrder"),
    )


def actual_shipment_from_record(record: Dict[str, Any]) -> ActualShipment:
    ship_date = parse_date(_get(record, "ship_date"))
    if ship_date is None:
        raise ValueError("shipDate is required")
    return ActualShipment(
        sku=str(record.get("sku") or "").strip(),
        ship_date=ship_date,
        quantity=_int(record.get("quantity", 0), "quantity"),
        notes=record.get("notes"),
    )


def holiday_from_record(record: Dict[str, Any]) -> FactoryHoliday:
    return FactoryHoliday(
        year=_int(record.get("year"), "year"),
        holiday_start_date=parse_date(_get(record, "holiday_start_date")),
        holiday_end_date=parse_date(_get(record, "holiday_end_date")),
        last_ship_date=parse_date(_get(record, "last_ship_date")),
        return_to_work_date=parse_date(_get(record, "return_to_work_date")),
        first_ship_date=parse_date(_get(record, "first_ship_date")),
    )


def import_row_from_record(record: Dict[str, Any]) -> ShipmentImportRow:
    return ShipmentImportRow(
        sku=str(record.get("sku") or "").strip(),
        tracking_number=str(_get(record, "tracking_number", "")).strip(),
        quantity=_int(record.get("quantity", 0), "quantity"),
        ship_date=parse_date(_get(record, "ship_date")),
        warehouse=record.get("warehouse"),
    )


def _read_section(data: Dict[str, Any], section: str, reader) -> List[Any]:
    records = data.get(section) or []
    if not isinstance(records, list):
        raise SnapshotError(section, None, "expected a list of records")
    result = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise SnapshotError(section, index, "expected an object")
        try:
            result.append(reader(record))
        except ValueError as e:
            raise SnapshotError(section, index, str(e)) from e
    return result


def catalog_from_dict(
    data: Dict[str, Any],
    default_transport: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
) -> Catalog:
    """
    Build a Catalog from a snapshot dict.

    Sections: skus, shipments, transportConfig (or transport), promotions,
    factoryInventory, actualShipments, holidays. All are optional; without
    a transport section default_transport applies.

    Raises:
        SnapshotError: If a record is malformed
    """
    if not isinstance(data, dict):
        raise SnapshotError("snapshot", None, "expected a JSON object")

    transport_raw = data.get("transportConfig", data.get("transport"))
    if isinstance(transport_raw, dict):
        transport = transport_from_dict({
            key: _get(transport_raw, key) for key in (
                "standard_shipping_days", "standard_shelf_days",
                "oversized_shipping_days", "oversized_shelf_days",
            )
        })
    else:
        transport = default_transport

    return Catalog(
        skus=_read_section(data, "skus", sku_from_record),
        shipments=_read_section(data, "shipments", shipment_from_record),
        transport=transport,
        promotions=_read_section(data, "promotions", promotion_from_record),
        factory_inventory=_read_section(
            {"factoryInventory": data.get("factoryInventory", data.get("factory_inventory"))},
            "factoryInventory", factory_inventory_from_record),
        actual_shipments=_read_section(
            {"actualShipments": data.get("actualShipments", data.get("actual_shipments"))},
            "actualShipments", actual_shipment_from_record),
        holidays=_read_section(data, "holidays", holiday_from_record),
    )


def load_snapshot(path: Path, default_transport: TransportConfig = DEFAULT_TRANSPORT_CONFIG) -> Catalog:
    """
    Read a JSON snapshot file.

    Args:
        path: Snapshot file
        default_transport: Lead times used when the snapshot has none

    Raises:
        FileNotFoundError: If the file does not exist
        SnapshotError: If the content is not valid JSON or a record is malformed
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError("snapshot", None, f"invalid JSON ({e.msg} at line {e.lineno})") from e
    catalog = catalog_from_dict(data, default_transport)
    logger.debug(
        f"Loaded snapshot {path.name}: {len(catalog.skus)} SKUs, "
        f"{len(catalog.shipments)} shipments, {len(catalog.promotions)} promotions"
    )
    return catalog


# ============ Writer ============

def to_record(value: Any) -> Any:
    """Convert planner results into JSON-ready structures."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_record(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {to_record(k) if isinstance(k, Enum) else k: to_record(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_record(v) for v in value]
    return value
