#!/usr/bin/env python3
"""
Main entry point for the TalentInsight interview review console.
Allows running the package with: python -m talentinsight
"""
import sys
import logging
from typing import Callable, List, Optional

from .config import get_config, Config
from .errors import InvalidStatusTransitionError
from .infrastructure.data import CandidateStore
from .infrastructure.llm import GeminiRestClient
from .infrastructure.media import RecordingSession
from .interview.events import SessionMetrics, create_event_bus
from .interview.models import Candidate, CandidateStatus
from .interview.question_tool import QUESTION_LEVELS, DEFAULT_QUESTION_LEVEL, QuestionGeneratorTool
from .interview.services import AnalysisRequestBuilder, InterviewAnalysisService, QuestionGenerationService
from .interview.workflow import EXPERIENCE_LEVELS, InterviewForm, NewInterviewWorkflow
from .presentation import (
    render_candidate_detail, render_candidate_list, render_dashboard, render_user_guide,
)
from .utils import setup_logging

logger = logging.getLogger("console")

MENU = """
==================================================
 TalentInsight
==================================================
 1. Dashboard
 2. Daftar Kandidat
 3. Detail Kandidat
 4. Analisis Baru
 5. Generator Pertanyaan
 6. Ubah Status Kandidat
 7. Hapus Kandidat
 8. Panduan
 0. Keluar
"""


def ask(prompt: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    value = input(f"{prompt}{suffix}: ").strip()
    return value or default


def choose(prompt: str, options: List[str], default: str) -> str:
    for i, option in enumerate(options, 1):
        print(f"   {i}. {option}")
    value = ask(prompt, default)
    if value.isdigit() and 1 <= int(value) <= len(options):
        return options[int(value) - 1]
    return value


def confirm(prompt: str) -> bool:
    return ask(f"{prompt} (y/n)", "n").lower() in ("y", "ya", "yes")


class ReviewConsole:
    """Interactive menu over the candidate store, the interview workflow and the question tool."""

    def __init__(self, config: Config, llm_client):
        self.config = config
        self.metrics = SessionMetrics()
        self.event_bus = create_event_bus(self.metrics)
        self.store = CandidateStore()
        self.analysis_service = InterviewAnalysisService(
            llm_client, AnalysisRequestBuilder(language=config.output_language)
        )
        self.question_service = QuestionGenerationService(llm_client, language=config.output_language)
        self.question_tool = QuestionGeneratorTool(self.question_service, event_bus=self.event_bus)

    def run(self) -> None:
        actions = {
            "1": lambda: print(render_dashboard(self.store.list())),
            "2": lambda: print(render_candidate_list(self.store.list())),
            "3": self.show_detail,
            "4": self.new_interview,
            "5": self.generate_questions,
            "6": self.change_status,
            "7": self.delete_candidate,
            "8": lambda: print(render_user_guide()),
        }
        while True:
            print(MENU)
            choice = ask("Pilih menu")
            if choice == "0":
                break
            action: Optional[Callable[[], None]] = actions.get(choice)
            if action is None:
                print("❌ Pilihan tidak dikenal.")
                continue
            action()
        logger.info(f"Session metrics: {self.metrics.get_metrics()}")

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def pick_candidate(self) -> Optional[Candidate]:
        candidates = self.store.list()
        print(render_candidate_list(candidates))
        if not candidates:
            return None
        value = ask("Nomor kandidat")
        if not value.isdigit() or not 1 <= int(value) <= len(candidates):
            print("❌ Nomor kandidat tidak valid.")
            return None
        return candidates[int(value) - 1]

    def show_detail(self) -> None:
        candidate = self.pick_candidate()
        if candidate is not None:
            print(render_candidate_detail(candidate))

    def change_status(self) -> None:
        candidate = self.pick_candidate()
        if candidate is None:
            return
        status = choose("Status baru", [CandidateStatus.HIRED.value, CandidateStatus.REJECTED.value],
                        CandidateStatus.HIRED.value)
        try:
            self.store.update_status(candidate.id, CandidateStatus(status))
        except ValueError:
            print(f"❌ Status tidak dikenal: {status}")
        except InvalidStatusTransitionError as e:
            print(f"❌ {e.message}")
        else:
            print(f"✅ Status {candidate.name} sekarang {status}.")

    def delete_candidate(self) -> None:
        candidate = self.pick_candidate()
        if candidate is None:
            return
        if confirm(f"Hapus data {candidate.name}?"):
            self.store.remove(candidate.id)
            print("🗑️  Kandidat dihapus.")

    # ------------------------------------------------------------------
    # New interview
    # ------------------------------------------------------------------

    def new_interview(self) -> None:
        workflow = NewInterviewWorkflow(
            store=self.store,
            analysis_service=self.analysis_service,
            recording_session=RecordingSession(workdir=self.config.workdir),
            event_bus=self.event_bus,
            max_media_bytes=self.config.max_media_bytes,
            max_cv_bytes=self.config.max_cv_bytes,
        )
        with workflow:
            workflow.form = InterviewForm(
                name=ask("Nama lengkap"),
                position=ask("Posisi yang dilamar"),
                email=ask("Email"),
                phone=ask("Telepon (opsional)"),
                experience_level=choose("Level pengalaman", EXPERIENCE_LEVELS, "Junior"),
            )
            missing = workflow.form.missing_fields()
            if missing:
                print(f"❌ Harap lengkapi data kandidat: {', '.join(missing)}.")
                return

            cv_path = ask("Path CV (opsional)")
            if cv_path and not workflow.select_cv_file(cv_path):
                print(f"❌ {workflow.error}")
                return

            mode = choose("Sumber media", ["Unggah file", "Rekam langsung"], "Unggah file")
            if mode == "Rekam langsung":
                if not self._record(workflow):
                    return
            elif not workflow.select_media_file(ask("Path file rekaman")):
                print(f"❌ {workflow.error}")
                return

            print("🤔 Menganalisis wawancara...")
            candidate = workflow.submit()
            if candidate is None:
                print(f"❌ {workflow.error}")
                return
            print(f"✅ Analisis selesai untuk {candidate.name}.")
            print(render_candidate_detail(candidate))

    def _record(self, workflow: NewInterviewWorkflow) -> bool:
        if not workflow.start_recording():
            print(f"❌ {workflow.error}")
            return False
        input("🔴 Merekam... tekan Enter untuk berhenti. ")
        recorded = workflow.stop_recording()
        if recorded is None:
            print(f"❌ {workflow.error}")
            workflow.delete_recording()
            return False
        print(f"⏹️  Rekaman {workflow.recording_session.elapsed_display} ({recorded.size_bytes} bytes)")
        if recorded.playback_path:
            print(f"🎧 Putar ulang: {recorded.playback_path}")
        if not confirm("Gunakan rekaman ini?"):
            workflow.delete_recording()
            return False
        return True

    # ------------------------------------------------------------------
    # Question generator
    # ------------------------------------------------------------------

    def generate_questions(self) -> None:
        tool = self.question_tool
        position = ask("Posisi")
        level = choose("Level", QUESTION_LEVELS, DEFAULT_QUESTION_LEVEL)
        skills = ask("Keahlian yang dibutuhkan")
        print("🧠 Menyusun pertanyaan...")
        if not tool.generate(position, level, skills):
            print(f"❌ {tool.error}")
            return

        for i, q in enumerate(tool.questions, 1):
            print(f"\n{i}. {q.question}\n   🎯 {q.intent}")

        while True:
            value = ask("\nSimulasikan jawaban untuk nomor pertanyaan (Enter untuk selesai)")
            if not value:
                break
            if not value.isdigit() or not 1 <= int(value) <= len(tool.questions):
                print("❌ Nomor pertanyaan tidak valid.")
                continue
            index = int(value) - 1
            tool.set_answer(index, ask("Jawaban kandidat"))
            if not tool.can_generate_follow_up(index):
                print("⚠️  Jawaban terlalu pendek untuk dianalisis.")
                continue
            suggestion = tool.generate_follow_up(index)
            if suggestion is None:
                print(f"❌ {tool.follow_up_errors.get(index)}")
                continue
            print(f"➡️  {suggestion.follow_up_question}\n   💡 {suggestion.explanation}")


def main():
    """Command-line interface for the review console."""

    # Load configuration from environment
    try:
        config = get_config()
    except ValueError as e:
        print(f"❌ Configuration Error: {e}")
        sys.exit(1)

    for arg in sys.argv[1:]:
        if arg.startswith("--model="):
            config.model_name = arg.split("=", 1)[1]
        elif arg.startswith("--language="):
            config.output_language = arg.split("=", 1)[1]
        elif arg.startswith("--log-level="):
            config.log_level = arg.split("=", 1)[1].upper()

    setup_logging(config.log_file, config.log_level)
    logger.info(f"Starting console (model={config.model_name}, vertex={config.uses_vertex})")

    console = ReviewConsole(config, GeminiRestClient.from_config(config))
    try:
        console.run()
    except (KeyboardInterrupt, EOFError):
        print()
    print(f"📁 Log: {config.log_file}")


if __name__ == "__main__":
    main()
