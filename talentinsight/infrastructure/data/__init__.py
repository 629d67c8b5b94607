"""
Session data management: the in-memory candidate store.
"""

from .store import CandidateStore, ALLOWED_STATUS_TRANSITIONS, new_candidate_id

__all__ = [
    'CandidateStore',
    'ALLOWED_STATUS_TRANSITIONS',
    'new_candidate_id',
]
