"""
Projected FBA stock chart.

Day-by-day stock curve of a SKU using the same day model as the stockout
simulation (arrivals land at day open, stock floors at zero), rendered to
PNG with matplotlib's object API (no pyplot, no GUI backend).
"""
from datetime import date as Date
from pathlib import Path
from typing import Iterable, Tuple

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from ..domain.calendar import days_between
from ..domain.depletion import pending_arrivals
from ..domain.lead_time import transport_lead_days
from ..domain.models import SKU, Shipment, PendingArrival, TransportConfig, DEFAULT_TRANSPORT_CONFIG

DEFAULT_CHART_DAYS = 90


def projected_stock_series(
    daily_sales: float,
    fba_stock: float,
    arrivals: Iterable[PendingArrival],
    today: Date,
    horizon_days: int = DEFAULT_CHART_DAYS,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Stock at the opening of each day (after that day's arrivals).

    Returns:
        (day offsets 0..horizon_days-1, opening stock per day)
    """
    inbound = np.zeros(horizon_days, dtype=float)
    for arrival in arrivals:
        if arrival.expected_date is None:
            continue
        offset = days_between(today, arrival.expected_date)
        if 0 <= offset < horizon_days:
            inbound[offset] += arrival.quantity

    opening = np.zeros(horizon_days, dtype=float)
    stock = float(fba_stock)
    for k in range(horizon_days):
        stock = max(0.0, stock) + inbound[k]
        opening[k] = stock
        stock -= max(0.0, daily_sales)
    return np.arange(horizon_days), opening


def render_stock_projection(
    sku: SKU,
    shipments: Iterable[Shipment],
    today: Date,
    path: Path,
    config: TransportConfig = DEFAULT_TRANSPORT_CONFIG,
    horizon_days: int = DEFAULT_CHART_DAYS,
) -> Path:
    """
    Save the projected stock chart of a SKU as PNG.

    Markers: today, each pending arrival (green), one transport lead time
    from today (amber).
    """
    arrivals = pending_arrivals(sku.sku, shipments)
    x, stock = projected_stock_series(sku.daily_sales, sku.fba_stock, arrivals, today, horizon_days)

    fig = Figure(figsize=(8, 3), dpi=100)
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(111)
    ax.set_facecolor("#f8fafc")
    ax.plot(x, stock, color="#3b82f6", linewidth=2, zorder=3)
    ax.fill_between(x, 0, stock, where=stock <= 0, color="#f87171", alpha=0.3, step="mid")

    ax.axvline(x=0, color="#1e293b", linewidth=0.8, linestyle=":", alpha=0.6)
    lead = transport_lead_days(sku.category, config)
    if lead < horizon_days:
        ax.axvline(x=lead, color="#f59e0b", linewidth=0.8, linestyle="--", alpha=0.7)
    for arrival in arrivals:
        if arrival.expected_date is None:
            continue
        offset = days_between(today, arrival.expected_date)
        if 0 <= offset < horizon_days:
            ax.axvline(x=offset, color="#10b981", linewidth=0.8, linestyle=":", alpha=0.8)

    ax.set_title(f"{sku.sku} projected FBA stock from {today.isoformat()}", fontsize=9)
    ax.set_xlabel("Days from today", fontsize=8)
    ax.set_ylabel("Units", fontsize=8)
    ax.set_xlim(0, horizon_days - 1)
    ax.set_ylim(bottom=0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    fig.tight_layout(pad=0.5)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, format="png")
    return path
