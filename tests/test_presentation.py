import pytest

from talentinsight.infrastructure.data import new_candidate_id
from talentinsight.interview.models import Candidate, CandidateStatus
from talentinsight.interview.testing import sample_analysis_data, sample_analysis_result
from talentinsight.presentation import (
    candidate_row, compute_dashboard_stats, disc_distribution, render_candidate_detail,
    render_candidate_list, render_dashboard, render_user_guide, score_band, score_series,
    status_distribution,
)


def _candidate(name, status, score=None, disc="C"):
    analysis = None
    if score is not None:
        disc_profile = dict(sample_analysis_data()["discProfile"], dominantType=disc)
        analysis = sample_analysis_result(matchScore=score, discProfile=disc_profile)
    return Candidate(id=new_candidate_id(), name=name, position="Analyst", status=status, analysis=analysis,
                     experience_level="Senior" if analysis else "")


@pytest.fixture
def candidates():
    return [
        _candidate("Budi Santoso", CandidateStatus.INTERVIEWED, 80, "D"),
        _candidate("Sari Dewi", CandidateStatus.HIRED, 91, "I"),
        _candidate("Andi", CandidateStatus.REJECTED, 40, "D"),
        _candidate("Rina Putri", CandidateStatus.PENDING),
    ]


def test_dashboard_stats(candidates):
    stats = compute_dashboard_stats(candidates)
    assert stats.total_candidates == 4
    assert stats.interviewed == 3
    assert stats.hired == 1
    assert stats.rejected == 1
    assert stats.avg_score == 70


def test_average_rounds_half_up():
    stats = compute_dashboard_stats([
        _candidate("A", CandidateStatus.INTERVIEWED, 80),
        _candidate("B", CandidateStatus.INTERVIEWED, 81),
    ])
    assert stats.avg_score == 81


def test_empty_dashboard():
    stats = compute_dashboard_stats([])
    assert (stats.total_candidates, stats.interviewed, stats.avg_score) == (0, 0, 0)
    assert disc_distribution([]) == []
    assert "Total Kandidat : 0" in render_dashboard([])


def test_status_distribution(candidates):
    assert status_distribution(compute_dashboard_stats(candidates)) == [
        ("Diterima", 1), ("Ditolak", 1), ("Pending", 1), ("Diwawancara", 1),
    ]


def test_score_series_uses_first_names(candidates):
    assert score_series(candidates) == [("Budi", 80), ("Sari", 91), ("Andi", 40)]


def test_disc_distribution_omits_empty_buckets(candidates):
    assert disc_distribution(candidates) == [("Dominance (D)", 2), ("Influence (I)", 1)]


@pytest.mark.parametrize("score,band", [(80, "strong"), (79, "moderate"), (60, "moderate"), (59.9, "weak")])
def test_score_band(score, band):
    assert score_band(score) == band


def test_candidate_row(candidates):
    assert candidate_row(candidates[1])[:7] == ["Sari Dewi", "Analyst", "Senior", "I", "Diterima", "91", "RENDAH"]
    assert candidate_row(candidates[3])[2:7] == ["-", "-", "Pending", "-", "-"]


def test_candidate_list(candidates):
    table = render_candidate_list(candidates)
    assert table.splitlines()[0].startswith("#")
    assert "Level" in table.splitlines()[0]
    assert "Rina Putri" in table
    assert render_candidate_list([]) == "Belum ada kandidat."


def test_candidate_detail(candidates):
    detail = render_candidate_detail(candidates[0])
    assert "Budi Santoso" in detail
    assert "80% (strong)" in detail
    assert "Profil DISC (dominan: D)" in detail
    assert "[Pewawancara]" in detail and "[Kandidat]" in detail
    assert "Kontak Mata      Baik" in detail


def test_candidate_detail_without_analysis(candidates):
    assert "Data analisis tidak ditemukan" in render_candidate_detail(candidates[3])


def test_user_guide_mentions_limits_and_disc():
    guide = render_user_guide()
    assert "Maks 20MB" in guide and "Maks 5MB" in guide
    for label in ("Dominance", "Influence", "Steadiness", "Compliance"):
        assert label in guide
