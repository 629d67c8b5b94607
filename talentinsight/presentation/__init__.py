"""Console presentation: dashboard aggregates, candidate views and the user guide."""

from .dashboard import (
    compute_dashboard_stats, status_distribution, score_series, disc_distribution, render_dashboard,
)
from .views import score_band, candidate_row, render_candidate_list, render_candidate_detail
from .guide import render_user_guide

__all__ = [
    "compute_dashboard_stats", "status_distribution", "score_series", "disc_distribution",
    "render_dashboard",
    "score_band", "candidate_row", "render_candidate_list", "render_candidate_detail",
    "render_user_guide",
]
