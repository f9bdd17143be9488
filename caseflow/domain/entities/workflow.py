"""Workflow domain entity.

A workflow is a named state machine: a set of states and an ordered list of
transitions. Transitions are unconditional; the first one leaving the current
state wins. A state with no outgoing transition is implicitly terminal.
"""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_ENTRY_STATE = "open"


def resolve_entry_state(definition: dict[str, Any] | None) -> str:
    """Return definition["entry"], or DEFAULT_ENTRY_STATE when absent."""
    if not isinstance(definition, dict):
        return DEFAULT_ENTRY_STATE
    entry = definition.get("entry")
    return entry if entry is not None else DEFAULT_ENTRY_STATE


@dataclass(frozen=True)
class WorkflowStateEntity:
    key: str
    name: str
    is_terminal: bool = False


@dataclass(frozen=True)
class WorkflowTransitionEntity:
    from_state_key: str
    to_state_key: str


@dataclass(frozen=True)
class WorkflowEntity:
    """Workflow definition with states and transitions in stored order."""

    id: str
    key: str
    name: str
    version: int
    definition: dict[str, Any] | None
    states: tuple[WorkflowStateEntity, ...] = field(default_factory=tuple)
    transitions: tuple[WorkflowTransitionEntity, ...] = field(default_factory=tuple)

    @property
    def entry_state_key(self) -> str:
        """State new instances start in."""
        return resolve_entry_state(self.definition)

    def has_state(self, state_key: str) -> bool:
        """Return whether state_key is one of the declared states."""
        return any(s.key == state_key for s in self.states)

    def next_transition(self, state_key: str) -> WorkflowTransitionEntity | None:
        """Return the first transition leaving state_key, or None (terminal)."""
        for transition in self.transitions:
            if transition.from_state_key == state_key:
                return transition
        return None
