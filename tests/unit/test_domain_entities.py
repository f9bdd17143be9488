"""Tests for workflow and outbox domain entities."""

from caseflow.domain.entities import DomainEvent
from caseflow.domain.entities.workflow import DEFAULT_ENTRY_STATE, resolve_entry_state
from tests.fakes import make_workflow


def test_resolve_entry_state_defaults_to_open() -> None:
    assert resolve_entry_state(None) == DEFAULT_ENTRY_STATE == "open"
    assert resolve_entry_state({}) == "open"
    assert resolve_entry_state({"entry": None}) == "open"


def test_resolve_entry_state_uses_definition_entry() -> None:
    assert resolve_entry_state({"entry": "triage"}) == "triage"


def test_next_transition_picks_first_in_stored_order() -> None:
    """With two edges out of one state, the first stored edge wins every time."""
    workflow = make_workflow(
        states=["open", "a", "b"],
        transitions=[("open", "a"), ("open", "b")],
    )
    for _ in range(3):
        transition = workflow.next_transition("open")
        assert transition is not None
        assert transition.to_state_key == "a"


def test_next_transition_none_for_state_without_outgoing_edge() -> None:
    workflow = make_workflow()
    assert workflow.next_transition("resolved") is None
    assert workflow.next_transition("unknown") is None


def test_has_state() -> None:
    workflow = make_workflow()
    assert workflow.has_state("open")
    assert not workflow.has_state("closed")


def test_domain_event_subject_from_payload() -> None:
    event = DomainEvent(
        topic="case.created",
        payload={"subjectSchema": "service", "subjectModel": "Case", "subjectId": "c1"},
    )
    subject = event.subject()
    assert (subject.schema, subject.model, subject.id) == ("service", "Case", "c1")
    assert subject.is_matchable


def test_domain_event_subject_tolerates_missing_or_invalid_payload() -> None:
    assert not DomainEvent(topic="x").subject().is_matchable
    assert not DomainEvent(topic="x", payload={"subjectSchema": "service"}).subject().is_matchable
    assert not DomainEvent(topic="x", payload=["not", "a", "dict"]).subject().is_matchable  # type: ignore[arg-type]
