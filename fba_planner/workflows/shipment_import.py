"""
Shipment batch import: grouping of per-SKU rows into shipments.

Rows sharing a tracking number form one shipment. The shipment is oversized
as soon as any of its SKUs is oversized; a later standard row never demotes
it back. Ship date and warehouse come from the first row of each group.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..domain.models import (
    SKU,
    Category,
    Shipment,
    ShipmentImportRow,
    ShipmentItem,
    TransportConfig,
    DEFAULT_TRANSPORT_CONFIG,
)
from .arrival import ArrivalWorkflow


logger = logging.getLogger(__name__)


@dataclass
class ImportGroup:
    """Rows collected under one tracking number."""
    tracking_number: str
    category: Category
    rows: List[ShipmentImportRow] = field(default_factory=list)


@dataclass
class ImportResult:
    """Shipments built from an import batch plus rows that were discarded."""
    shipments: List[Shipment] = field(default_factory=list)
    discarded: List[ShipmentImportRow] = field(default_factory=list)
    unknown_skus: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.shipments)


def group_import_rows(rows: Iterable[ShipmentImportRow], skus: Iterable[SKU]) -> Dict[str, ImportGroup]:
    """
    Group rows by tracking number, promoting the category to oversized.

    SKUs missing from the catalog count as standard.

    Returns:
        {tracking_number: ImportGroup} in first-seen order
    """
    categories = {s.sku: s.category for s in skus}
    groups: Dict[str, ImportGroup] = {}
    for row in rows:
        category = categories.get(row.sku, Category.STANDARD)
        group = groups.get(row.tracking_number)
        if group is None:
            groups[row.tracking_number] = ImportGroup(row.tracking_number, category, [row])
            continue
        group.rows.append(row)
        if category is Category.OVERSIZED:
            group.category = Category.OVERSIZED
    return groups


def import_shipments(
    rows: Iterable[ShipmentImportRow],
    skus: Iterable[SKU],
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
    workflow: Optional[ArrivalWorkflow] = None,
) -> ImportResult:
    """
    Build shipments from raw import rows.

    Rows without a SKU or tracking number, or with a non-positive quantity,
    are discarded. Rows for SKUs missing from the catalog are kept and
    reported in unknown_skus.
    """
    skus = list(skus)
    workflow = workflow or ArrivalWorkflow(config)
    known = {s.sku for s in skus}
    result = ImportResult()

    valid_rows = []
    for row in rows:
        if not row.sku or not row.tracking_number or row.quantity <= 0:
            result.discarded.append(row)
            continue
        if row.sku not in known and row.sku not in result.unknown_skus:
            result.unknown_skus.append(row.sku)
        valid_rows.append(row)

    if result.discarded:
        logger.warning(f"Shipment import: {len(result.discarded)} rows discarded")
    if result.unknown_skus:
        logger.warning(f"Shipment import: SKUs not in catalog: {', '.join(result.unknown_skus)}")

    for tracking_number, group in group_import_rows(valid_rows, skus).items():
        first = group.rows[0]
        result.shipments.append(workflow.create_shipment(
            tracking_number=tracking_number,
            category=group.category,
            items=[ShipmentItem(sku=r.sku, quantity=r.quantity) for r in group.rows],
            ship_date=first.ship_date,
            warehouse=first.warehouse,
        ))
    return result
