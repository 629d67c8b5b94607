import pytest

from talentinsight.errors import DuplicateCandidateError, InvalidStatusTransitionError
from talentinsight.infrastructure.data import CandidateStore, new_candidate_id
from talentinsight.interview.models import Candidate, CandidateStatus
from talentinsight.interview.testing import sample_analysis_result


def _interviewed(name="Budi Santoso", **kwargs):
    return Candidate(id=new_candidate_id(), name=name, position="Analyst",
                     status=CandidateStatus.INTERVIEWED, analysis=sample_analysis_result(), **kwargs)


def test_add_preserves_insertion_order():
    store = CandidateStore()
    a, b = _interviewed("A"), _interviewed("B")
    store.add(a)
    store.add(b)
    assert [c.name for c in store.list()] == ["A", "B"]
    assert store.get(a.id) is a
    assert a.id in store


def test_duplicate_id_is_rejected():
    store = CandidateStore()
    candidate = _interviewed()
    store.add(candidate)
    with pytest.raises(DuplicateCandidateError):
        store.add(candidate)
    assert len(store) == 1


def test_remove_only_matching_candidate():
    store = CandidateStore()
    a, b, c = _interviewed("A"), _interviewed("B"), _interviewed("C")
    for candidate in (a, b, c):
        store.add(candidate)

    removed = store.remove(b.id)

    assert removed is b
    assert [x.name for x in store.list()] == ["A", "C"]


def test_remove_unknown_id_is_noop():
    store = CandidateStore([_interviewed()])
    assert store.remove("missing") is None
    assert len(store) == 1


def test_list_is_a_snapshot():
    store = CandidateStore([_interviewed()])
    snapshot = store.list()
    snapshot.clear()
    assert len(store) == 1


def test_register_creates_pending_candidate():
    store = CandidateStore()
    candidate = store.register("Sari Dewi", "Designer", email="sari@example.com", experience_level="Senior")
    assert candidate.status == CandidateStatus.PENDING
    assert candidate.analysis is None
    assert candidate.applied_date


def test_status_edit_from_interviewed():
    store = CandidateStore()
    candidate = store.add(_interviewed())
    store.update_status(candidate.id, CandidateStatus.HIRED)
    assert store.get(candidate.id).status == CandidateStatus.HIRED


@pytest.mark.parametrize("start,target", [
    (CandidateStatus.PENDING, CandidateStatus.HIRED),
    (CandidateStatus.HIRED, CandidateStatus.REJECTED),
    (CandidateStatus.INTERVIEWED, CandidateStatus.PENDING),
])
def test_disallowed_status_edits(start, target):
    store = CandidateStore()
    candidate = store.add(Candidate(id=new_candidate_id(), name="X", position="Y", status=start))
    with pytest.raises(InvalidStatusTransitionError):
        store.update_status(candidate.id, target)
    assert store.get(candidate.id).status == start


def test_status_edit_unknown_id():
    with pytest.raises(KeyError):
        CandidateStore().update_status("missing", CandidateStatus.HIRED)


def test_listeners_are_notified():
    store = CandidateStore()
    seen = []
    store.subscribe(lambda action, c: seen.append((action, c.name)))
    candidate = store.add(_interviewed("A"))
    store.update_status(candidate.id, CandidateStatus.REJECTED)
    store.remove(candidate.id)
    assert seen == [("added", "A"), ("status_changed", "A"), ("removed", "A")]


def test_ids_are_unique():
    assert len({new_candidate_id() for _ in range(100)}) == 100
