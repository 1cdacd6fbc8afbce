"""
Coverage statistics across the active catalog.

Distribution of FBA days of stock (and FBA + in-transit days of stock) for
SKUs with sales, plus how many SKUs cannot last one transport lead time.
SKUs without sales have unbounded cover and are left out of the statistics.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from ..domain.lead_time import transport_lead_days
from ..domain.models import SKU, TransportConfig, DEFAULT_TRANSPORT_CONFIG


@dataclass(frozen=True)
class CoverageStats:
    """Days-of-stock distribution for a set of SKUs."""
    n_skus: int
    n_no_sales: int
    mean_days: Optional[float]
    median_days: Optional[float]
    p10_days: Optional[float]
    p90_days: Optional[float]
    mean_total_days: Optional[float]
    n_below_lead_time: int


def coverage_stats(
    skus: Iterable[SKU],
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
) -> CoverageStats:
    """
    Compute the days-of-stock distribution of active SKUs.

    Returns:
        CoverageStats; distribution fields are None when no SKU has sales
    """
    active = [s for s in skus if not s.is_discontinued]
    selling = [s for s in active if s.daily_sales > 0]
    n_no_sales = len(active) - len(selling)

    if not selling:
        return CoverageStats(
            n_skus=len(active),
            n_no_sales=n_no_sales,
            mean_days=None,
            median_days=None,
            p10_days=None,
            p90_days=None,
            mean_total_days=None,
            n_below_lead_time=0,
        )

    sales = np.array([s.daily_sales for s in selling], dtype=float)
    fba = np.array([s.fba_stock for s in selling], dtype=float)
    total = np.array([s.total_stock for s in selling], dtype=float)
    lead = np.array([transport_lead_days(s.category, config) for s in selling], dtype=float)

    days = fba / sales
    total_days = total / sales

    return CoverageStats(
        n_skus=len(active),
        n_no_sales=n_no_sales,
        mean_days=round(float(np.mean(days)), 2),
        median_days=round(float(np.median(days)), 2),
        p10_days=round(float(np.percentile(days, 10)), 2),
        p90_days=round(float(np.percentile(days, 90)), 2),
        mean_total_days=round(float(np.mean(total_days)), 2),
        n_below_lead_time=int(np.count_nonzero(total_days < lead)),
    )
