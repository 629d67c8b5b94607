"""
Dashboard aggregates over the candidate store.
"""
import math
from typing import List, Sequence, Tuple

from ..interview.models import Candidate, CandidateStatus, DashboardStats, DiscType

INTERVIEWED_STATUSES = {CandidateStatus.INTERVIEWED, CandidateStatus.HIRED, CandidateStatus.REJECTED}

DISC_LABELS = {
    DiscType.D: "Dominance (D)",
    DiscType.I: "Influence (I)",
    DiscType.S: "Steadiness (S)",
    DiscType.C: "Compliance (C)",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_dashboard_stats(candidates: Sequence[Candidate]) -> DashboardStats:
    """
    Headline figures for the dashboard.

    `interviewed` counts everyone past the interview (Interviewed, Hired,
    Rejected). The average match score covers analysed candidates only and is
    0 when there are none.
    """
    analysed = [c for c in candidates if c.analysis is not None]
    avg_score = 0
    if analysed:
        avg_score = round_half_up(sum(c.analysis.match_score for c in analysed) / len(analysed))

    return DashboardStats(
        total_candidates=len(candidates),
        interviewed=sum(1 for c in candidates if c.status in INTERVIEWED_STATUSES),
        hired=sum(1 for c in candidates if c.status == CandidateStatus.HIRED),
        rejected=sum(1 for c in candidates if c.status == CandidateStatus.REJECTED),
        avg_score=avg_score,
    )


def status_distribution(stats: DashboardStats) -> List[Tuple[str, int]]:
    """Hiring-status breakdown as (label, count) pairs."""
    return [
        ("Diterima", stats.hired),
        ("Ditolak", stats.rejected),
        ("Pending", stats.total_candidates - stats.interviewed),
        ("Diwawancara", stats.interviewed - stats.hired - stats.rejected),
    ]


def score_series(candidates: Sequence[Candidate]) -> List[Tuple[str, float]]:
    """(first name, match score) for every analysed candidate, in store order."""
    return [(c.first_name, c.analysis.match_score) for c in candidates if c.analysis is not None]


def disc_distribution(candidates: Sequence[Candidate]) -> List[Tuple[str, int]]:
    """Dominant DISC type counts over analysed candidates; empty buckets are omitted."""
    counts = {disc_type: 0 for disc_type in DiscType}
    for c in candidates:
        if c.analysis is not None:
            counts[c.analysis.disc_profile.dominant_type] += 1
    return [(DISC_LABELS[t], n) for t, n in counts.items() if n > 0]


def _bar(value: float, maximum: float, width: int = 20) -> str:
    if maximum <= 0:
        return ""
    filled = int(round(width * min(value, maximum) / maximum))
    return "█" * filled + "░" * (width - filled)


def render_dashboard(candidates: Sequence[Candidate]) -> str:
    """Text rendering of the dashboard."""
    stats = compute_dashboard_stats(candidates)
    lines = [
        "📊 DASHBOARD REKRUTMEN",
        "=" * 50,
        f"👥 Total Kandidat : {stats.total_candidates}",
        f"🎙️  Diwawancara    : {stats.interviewed}",
        f"✅ Diterima       : {stats.hired}",
        f"🎯 Rata-rata Skor : {stats.avg_score}%",
        "",
        "Status Perekrutan:",
    ]
    for label, count in status_distribution(stats):
        lines.append(f"  {label:<12} {count:>3} {_bar(count, stats.total_candidates)}")

    series = score_series(candidates)
    if series:
        lines += ["", "Skor Kecocokan:"]
        for first_name, score in series:
            lines.append(f"  {first_name:<12} {score:>5g} {_bar(score, 100)}")

    disc = disc_distribution(candidates)
    if disc:
        lines += ["", "Distribusi DISC:"]
        for label, count in disc:
            lines.append(f"  {label:<16} {count:>3}")
    return "\n".join(lines)
