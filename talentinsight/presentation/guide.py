"""
Static user guide: workflow steps, DISC reading guide and FAQ.
"""
from typing import List, NamedTuple


class GuideEntry(NamedTuple):
    title: str
    body: str


WORKFLOW_STEPS: List[GuideEntry] = [
    GuideEntry(
        "1. Mulai Analisis Baru",
        "Pilih menu 'Analisis Baru'. Isi data kandidat seperti Nama, Posisi, dan Level Pengalaman. "
        "Anda juga dapat melampirkan CV (PDF/Doc) untuk analisis yang lebih akurat.",
    ),
    GuideEntry(
        "2. Input Media Wawancara",
        "Ada dua opsi: unggah file rekaman (MP3/MP4) atau rekam langsung lewat mikrofon. "
        "Pastikan aplikasi mendapat izin akses mikrofon jika merekam langsung.",
    ),
    GuideEntry(
        "3. Analisis AI & DISC",
        "AI memproses audio/video untuk menghasilkan transkrip, ringkasan, skor kecocokan, "
        "dan Profil Kepribadian DISC secara otomatis.",
    ),
    GuideEntry(
        "4. Review & Keputusan",
        "Lihat detail analisis, cek 'Red Flags', lalu tandai kandidat sebagai Diterima atau Ditolak.",
    ),
]

DISC_GUIDE: List[GuideEntry] = [
    GuideEntry("D - Dominance",
               "Berorientasi pada hasil, tegas, dan suka tantangan. Cocok untuk posisi Leadership atau Sales."),
    GuideEntry("I - Influence",
               "Antusias, komunikatif, dan optimis. Cocok untuk PR, Marketing, atau Customer Service."),
    GuideEntry("S - Steadiness",
               "Tenang, sabar, dan pendengar yang baik. Cocok untuk Support, Admin, atau HR."),
    GuideEntry("C - Compliance",
               "Teliti, analitis, dan patuh pada aturan. Cocok untuk Finance, Engineering, atau Data."),
]

FAQ: List[GuideEntry] = [
    GuideEntry("Format file apa saja yang didukung?",
               "Untuk rekaman: MP3, WAV, M4A, MP4 (Maks 20MB). Untuk CV: PDF, DOC, DOCX (Maks 5MB)."),
    GuideEntry("Bagaimana AI menentukan profil DISC?",
               "AI menganalisis gaya komunikasi, intonasi, pemilihan kata, dan struktur kalimat kandidat "
               "dari transkrip wawancara untuk memetakan kecenderungan Dominance, Influence, Steadiness, "
               "atau Compliance."),
    GuideEntry("Apakah data kandidat aman?",
               "Ya, data hanya disimpan di memori selama sesi berjalan dan hilang saat aplikasi ditutup. "
               "Hapus data sensitif setelah proses perekrutan selesai melalui menu hapus kandidat."),
    GuideEntry("Apa itu 'Thinking Mode' pada Generator Pertanyaan?",
               "AI 'berpikir' lebih dalam untuk merancang pertanyaan yang sulit dimanipulasi dan membuat "
               "skenario follow-up berdasarkan jawaban hipotetis kandidat."),
]


def render_user_guide() -> str:
    lines = ["❓ PUSAT BANTUAN TALENTINSIGHT", "=" * 50, "", "⚡ Alur Kerja Utama"]
    for step in WORKFLOW_STEPS:
        lines += [f"  {step.title}", f"     {step.body}"]
    lines += ["", "📊 Cara Membaca Profil DISC"]
    for entry in DISC_GUIDE:
        lines.append(f"  {entry.title}: {entry.body}")
    lines += ["", "Pertanyaan Umum (FAQ)"]
    for entry in FAQ:
        lines += [f"  Q: {entry.title}", f"     {entry.body}"]
    return "\n".join(lines)
