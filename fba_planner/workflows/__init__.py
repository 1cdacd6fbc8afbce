"""Workflows module."""
from .arrival import ArrivalWorkflow, classify_arrival, expected_arrival_date
from .shipment_import import import_shipments, group_import_rows
from .shipping_plan import build_plan_row, build_shipping_plan

__all__ = [
    'ArrivalWorkflow',
    'classify_arrival',
    'expected_arrival_date',
    'import_shipments',
    'group_import_rows',
    'build_plan_row',
    'build_shipping_plan',
]
