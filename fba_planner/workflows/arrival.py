"""
Arrival workflow: expected arrival projection and arrival confirmation.

Status rules on confirmation (actual vs expected arrival date):
    actual == expected  -> arrived
    actual <  expected  -> early
    actual >  expected  -> delayed
    no expected date    -> arrived

Confirmation is the only status transition. The stock movements it implies
are returned as updated SKU snapshots for the storage layer to persist:
    confirm: fba += qty, in_transit = max(0, in_transit - qty)
    undo:    fba = max(0, fba - qty), in_transit += qty
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Iterable, List, Optional

from ..domain.calendar import add_days
from ..domain.lead_time import transport_lead_days
from ..domain.models import (
    SKU,
    Category,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
    TransportConfig,
    DEFAULT_TRANSPORT_CONFIG,
)

logger = logging.getLogger(__name__)


def expected_arrival_date(
    ship_date: Optional[date],
    category: Category,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
) -> Optional[date]:
    """Ship date + transport lead time (None without a ship date)."""
    if ship_date is None:
        return None
    return add_days(ship_date, transport_lead_days(category, config))


def classify_arrival(expected: Optional[date], actual: date) -> ShipmentStatus:
    """
    Arrival status from expected vs actual arrival date.

    Examples:
        >>> classify_arrival(date(2026, 2, 20), date(2026, 2, 18))
        <ShipmentStatus.EARLY: 'early'>
    """
    if expected is None or actual == expected:
        return ShipmentStatus.ARRIVED
    if actual < expected:
        return ShipmentStatus.EARLY
    return ShipmentStatus.DELAYED


def receive_into_stock(sku: SKU, quantity: int) -> SKU:
    """Move quantity from in-transit to FBA stock."""
    return replace(
        sku,
        fba_stock=sku.fba_stock + quantity,
        in_transit_stock=max(0, sku.in_transit_stock - quantity),
    )


def revert_from_stock(sku: SKU, quantity: int) -> SKU:
    """Move quantity back from FBA stock to in-transit."""
    return replace(
        sku,
        fba_stock=max(0, sku.fba_stock - quantity),
        in_transit_stock=sku.in_transit_stock + quantity,
    )


@dataclass(frozen=True)
class ArrivalResult:
    """Outcome of an arrival confirmation or undo."""
    shipment: Shipment
    sku_updates: Dict[str, SKU] = field(default_factory=dict)
    already_processed: bool = False


class ArrivalWorkflow:
    """Shipment creation and arrival confirmation for a brand."""

    def __init__(self, config: TransportConfig = DEFAULT_TRANSPORT_CONFIG):
        """
        Initialize arrival workflow.

        Args:
            config: Transport lead times used for expected arrival dates
        """
        self.config = config

    def create_shipment(
        self,
        tracking_number: str,
        category: Category,
        items: Iterable[ShipmentItem],
        ship_date: Optional[date] = None,
        warehouse: Optional[str] = None,
    ) -> Shipment:
        """Build a new in-transit shipment with its projected arrival date."""
        return Shipment(
            tracking_number=tracking_number,
            category=category,
            ship_date=ship_date,
            expected_arrival_date=expected_arrival_date(ship_date, category, self.config),
            status=ShipmentStatus.SHIPPING,
            items=tuple(items),
            warehouse=warehouse,
        )

    @staticmethod
    def update_expected_date(shipment: Shipment, expected: Optional[date]) -> Shipment:
        """Change the expected arrival date; status is left untouched."""
        return replace(shipment, expected_arrival_date=expected)

    @staticmethod
    def _apply_items(shipment: Shipment, skus: Iterable[SKU], move) -> Dict[str, SKU]:
        sku_map = {s.sku: s for s in skus}
        updates: Dict[str, SKU] = {}
        for item in shipment.items:
            current = updates.get(item.sku) or sku_map.get(item.sku)
            if current is None:
                logger.warning(
                    f"Shipment {shipment.tracking_number}: SKU {item.sku} not in catalog, stock not updated"
                )
                continue
            updates[item.sku] = move(current, item.quantity)
        return updates

    def confirm_arrival(self, shipment: Shipment, actual_date: date, skus: Iterable[SKU]) -> ArrivalResult:
        """
        Confirm a shipment's arrival.

        Idempotency: a shipment already in an arrived state is returned
        unchanged with already_processed=True and no stock updates.

        Args:
            shipment: Shipment snapshot
            actual_date: Actual arrival date
            skus: Catalog snapshot holding the shipment's SKUs

        Returns:
            ArrivalResult with the classified shipment and updated SKUs
        """
        if shipment.status.is_arrived:
            logger.info(f"Shipment {shipment.tracking_number} already confirmed ({shipment.status.value})")
            return ArrivalResult(shipment=shipment, already_processed=True)

        status = classify_arrival(shipment.expected_arrival_date, actual_date)
        arrived = replace(shipment, status=status, actual_arrival_date=actual_date)
        updates = self._apply_items(shipment, skus, receive_into_stock)
        logger.debug(f"Shipment {shipment.tracking_number} confirmed as {status.value}")
        return ArrivalResult(shipment=arrived, sku_updates=updates)

    def undo_arrival(self, shipment: Shipment, skus: Iterable[SKU]) -> ArrivalResult:
        """
        Revert a confirmed arrival back to shipping.

        Raises:
            ValueError: If the shipment has not been confirmed as arrived
        """
        if not shipment.status.is_arrived or shipment.actual_arrival_date is None:
            raise ValueError(f"Shipment {shipment.tracking_number} has not been marked as arrived")

        reverted = replace(shipment, status=ShipmentStatus.SHIPPING, actual_arrival_date=None)
        updates = self._apply_items(shipment, skus, revert_from_stock)
        return ArrivalResult(shipment=reverted, sku_updates=updates)


def shipments_in_transit(shipments: Iterable[Shipment]) -> List[Shipment]:
    """Shipments still travelling (status shipping)."""
    return [s for s in shipments if s.status is ShipmentStatus.SHIPPING]
