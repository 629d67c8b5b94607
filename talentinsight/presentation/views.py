"""
Text views of the candidate list and of a single candidate's analysis.
"""
from typing import List, Optional, Sequence

from ..interview.models import (
    AnalysisResult, Candidate, CandidateStatus, Defensiveness, EyeContact, RiskLevel, Speaker,
)

RISK_LABELS = {
    RiskLevel.LOW: "RENDAH",
    RiskLevel.MEDIUM: "SEDANG",
    RiskLevel.HIGH: "TINGGI",
}

STATUS_LABELS = {
    CandidateStatus.PENDING: "Pending",
    CandidateStatus.ANALYZING: "Menganalisis",
    CandidateStatus.INTERVIEWED: "Diwawancara",
    CandidateStatus.HIRED: "Diterima",
    CandidateStatus.REJECTED: "Ditolak",
}

EYE_CONTACT_LABELS = {
    EyeContact.GOOD: "Baik",
    EyeContact.AVERAGE: "Rata-rata",
    EyeContact.POOR: "Buruk",
    EyeContact.NOT_VISIBLE: "Tidak Terlihat",
}

DEFENSIVENESS_LABELS = {
    Defensiveness.NONE: "Tidak Ada",
    Defensiveness.LOW: "Rendah",
    Defensiveness.HIGH: "Tinggi",
}

SPEAKER_LABELS = {
    Speaker.INTERVIEWER: "Pewawancara",
    Speaker.CANDIDATE: "Kandidat",
}


def score_band(match_score: float) -> str:
    """'strong' (>= 80), 'moderate' (>= 60) or 'weak'."""
    if match_score >= 80:
        return "strong"
    if match_score >= 60:
        return "moderate"
    return "weak"


_BAND_ICONS = {"strong": "🟢", "moderate": "🟠", "weak": "🔴"}


def candidate_row(candidate: Candidate) -> List[str]:
    """Cells of one candidate-list row: name, position, level, DISC, status, score, risk, applied date."""
    analysis = candidate.analysis
    return [
        candidate.name,
        candidate.position,
        candidate.experience_level or "-",
        analysis.disc_profile.dominant_type.value if analysis else "-",
        STATUS_LABELS[candidate.status],
        f"{analysis.match_score:g}" if analysis else "-",
        RISK_LABELS[analysis.risk_level] if analysis else "-",
        candidate.applied_date,
    ]


LIST_HEADERS = ["#", "Nama", "Posisi", "Level", "DISC", "Status", "Skor", "Risiko", "Tanggal"]


def render_candidate_list(candidates: Sequence[Candidate]) -> str:
    """Numbered table of candidates in store order."""
    if not candidates:
        return "Belum ada kandidat."

    rows = [LIST_HEADERS] + [[str(i)] + candidate_row(c) for i, c in enumerate(candidates, 1)]
    widths = [max(len(row[col]) for row in rows) for col in range(len(LIST_HEADERS))]
    lines = []
    for n, row in enumerate(rows):
        lines.append("  ".join(cell.ljust(widths[col]) for col, cell in enumerate(row)).rstrip())
        if n == 0:
            lines.append("  ".join("-" * w for w in widths))
    return "\n".join(lines)


def _bullets(items: Sequence[str], empty: str) -> List[str]:
    if not items:
        return [f"  {empty}"]
    return [f"  • {item}" for item in items]


def render_candidate_detail(candidate: Candidate) -> str:
    """Full analysis report for one candidate."""
    header = [
        f"👤 {candidate.name}",
        f"   {candidate.position} | {candidate.email or '-'} | {candidate.phone or '-'}",
        f"   Status: {STATUS_LABELS[candidate.status]} | Tanggal: {candidate.applied_date}",
    ]
    if candidate.cv_file_name:
        header.append(f"   CV: {candidate.cv_file_name}")

    analysis: Optional[AnalysisResult] = candidate.analysis
    if analysis is None:
        return "\n".join(header + ["", "Data analisis tidak ditemukan untuk kandidat ini."])

    band = score_band(analysis.match_score)
    personality = analysis.personality
    disc = analysis.disc_profile
    emotion = analysis.emotion_analysis

    lines = header + [
        "=" * 50,
        f"{_BAND_ICONS[band]} Skor Kecocokan: {analysis.match_score:g}% ({band})",
        f"⚠️  Risiko: {RISK_LABELS[analysis.risk_level]}",
        "",
        "🧠 Ringkasan AI",
        f"  {analysis.summary}",
        "",
        "Skill Utama Terdeteksi",
        *_bullets(analysis.key_skills, "-"),
        "",
        f"📈 Profil DISC (dominan: {disc.dominant_type.value})",
        f"  D {disc.d_score:>5g}%   I {disc.i_score:>5g}%   S {disc.s_score:>5g}%   C {disc.c_score:>5g}%",
        f"  {disc.analysis}",
        "",
        f"Radar Kompetensi ({personality.type})",
        f"  Kepemimpinan     {personality.leadership:g}/10",
        f"  Problem Solving  {personality.problem_solving:g}/10",
        f"  Kontrol Emosi    {personality.emotional_control:g}/10",
        f"  Kepercayaan Diri {personality.confidence:g}/10",
        "",
        "🎥 Analisis Emosi",
        f"  Kegugupan        {emotion.nervousness:g}/10",
        f"  Kepercayaan Diri {emotion.confidence:g}/10",
        f"  Kontak Mata      {EYE_CONTACT_LABELS[emotion.eye_contact]}",
        f"  Sikap Defensif   {DEFENSIVENESS_LABELS[emotion.defensiveness]}",
    ]
    if emotion.behavioral_cues:
        lines += ["  Isyarat Perilaku Teramati:", *[f"    - {cue}" for cue in emotion.behavioral_cues]]

    lines += ["", "🚩 Tanda Bahaya (Red Flags)", *_bullets(analysis.red_flags, "Tidak ada tanda bahaya.")]

    lines += ["", "💬 Sorotan Wawancara"]
    if analysis.transcription:
        for turn in analysis.transcription:
            lines.append(f"  [{SPEAKER_LABELS[turn.speaker]}] {turn.text}")
    else:
        lines.append("  Tidak ada transkripsi dialog spesifik yang disediakan oleh AI untuk sesi ini.")

    lines += [
        "",
        "❓ Peluang Terlewatkan",
        *_bullets(analysis.suggested_follow_up_questions, "-"),
        "",
        "Rekomendasi",
        f"  \"{analysis.recommendation}\"",
    ]
    return "\n".join(lines)
