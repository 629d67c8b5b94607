"""
In-memory candidate store for the current session.

The store is the single owner of all Candidate records. Records are kept in
insertion order; nothing is persisted, so state is lost when the process exits.
"""
import uuid
import threading
import logging
from typing import Callable, Dict, List, Optional

from ...errors import DuplicateCandidateError, InvalidStatusTransitionError
from ...interview.models import Candidate, CandidateStatus

logger = logging.getLogger("candidate_store")

# Manual status edits a recruiter may make
ALLOWED_STATUS_TRANSITIONS = {
    CandidateStatus.INTERVIEWED: {CandidateStatus.HIRED, CandidateStatus.REJECTED},
}

StoreListener = Callable[[str, Candidate], None]


def new_candidate_id() -> str:
    """Opaque unique identifier for a new candidate."""
    return uuid.uuid4().hex


class CandidateStore:
    """Ordered, in-memory collection of candidates with narrow mutation operations."""

    def __init__(self, candidates: Optional[List[Candidate]] = None):
        self._candidates: Dict[str, Candidate] = {}
        self._lock = threading.Lock()
        self._listeners: List[StoreListener] = []
        for candidate in candidates or []:
            self.add(candidate)

    def subscribe(self, listener: StoreListener) -> None:
        """Register a callback invoked as listener(action, candidate) after each mutation."""
        self._listeners.append(listener)

    def _notify(self, action: str, candidate: Candidate) -> None:
        for listener in self._listeners:
            try:
                listener(action, candidate)
            except Exception as e:
                logger.error(f"Error in store listener for {action}: {e}")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._candidates)

    def __contains__(self, candidate_id: str) -> bool:
        return candidate_id in self._candidates

    def list(self) -> List[Candidate]:
        """Snapshot of all candidates in insertion order."""
        with self._lock:
            return list(self._candidates.values())

    def get(self, candidate_id: str) -> Optional[Candidate]:
        return self._candidates.get(candidate_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, candidate: Candidate) -> Candidate:
        """
        Append a candidate.

        Raises:
            DuplicateCandidateError: If a candidate with the same id exists
        """
        with self._lock:
            if candidate.id in self._candidates:
                raise DuplicateCandidateError(f"Kandidat dengan ID {candidate.id} sudah ada.")
            self._candidates[candidate.id] = candidate
        logger.info("Candidate added: %s (%s, %s)", candidate.id, candidate.name, candidate.status.value)
        self._notify("added", candidate)
        return candidate

    def register(self,
                 name: str,
                 position: str,
                 email: str = "",
                 phone: str = "",
                 experience_level: str = "") -> Candidate:
        """Add a candidate that has not been through the analysis workflow (Pending)."""
        candidate = Candidate(
            id=new_candidate_id(),
            name=name,
            position=position,
            email=email,
            phone=phone,
            experience_level=experience_level,
            status=CandidateStatus.PENDING,
        )
        return self.add(candidate)

    def remove(self, candidate_id: str) -> Optional[Candidate]:
        """
        Remove exactly the candidate with this id.

        Returns:
            The removed candidate, or None when the id is unknown (no-op)
        """
        with self._lock:
            candidate = self._candidates.pop(candidate_id, None)
        if candidate is None:
            logger.debug("Remove ignored, unknown candidate id %s", candidate_id)
            return None
        logger.info("Candidate removed: %s (%s)", candidate.id, candidate.name)
        self._notify("removed", candidate)
        return candidate

    def update_status(self, candidate_id: str, status: CandidateStatus) -> Candidate:
        """
        Apply a manual status edit (Interviewed -> Hired | Rejected).

        Raises:
            KeyError: If the candidate does not exist
            InvalidStatusTransitionError: If the transition is not allowed
        """
        with self._lock:
            candidate = self._candidates[candidate_id]
            allowed = ALLOWED_STATUS_TRANSITIONS.get(candidate.status, set())
            if status not in allowed:
                raise InvalidStatusTransitionError(
                    f"Status {candidate.status.value} tidak dapat diubah menjadi {status.value}."
                )
            previous = candidate.status
            candidate.status = status
        logger.info("Candidate %s status %s -> %s", candidate_id, previous.value, status.value)
        self._notify("status_changed", candidate)
        return candidate
