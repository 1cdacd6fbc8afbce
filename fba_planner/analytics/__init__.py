"""Analytics package for dashboard figures and coverage statistics."""

from .dashboard import (
    DashboardSummary,
    Countdown,
    summarize,
    countdowns,
    DEFAULT_COUNTDOWN_WINDOW_DAYS,
)
from .coverage import (
    CoverageStats,
    coverage_stats,
)
from .charts import (
    projected_stock_series,
    render_stock_projection,
)

__all__ = [
    "DashboardSummary",
    "Countdown",
    "summarize",
    "countdowns",
    "DEFAULT_COUNTDOWN_WINDOW_DAYS",
    "CoverageStats",
    "coverage_stats",
    "projected_stock_series",
    "render_stock_projection",
]
