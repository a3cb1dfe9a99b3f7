"""View state for the synchronized workflow list.

The state is an immutable snapshot. ``update`` is the only way to move from
one snapshot to the next; it never performs I/O.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union

from workflow_sync.client.result import ErrorKind, Failure, Ok, Outcome, Pending, Result
from workflow_sync.schemas.workflow import WorkflowOut

NAME_REQUIRED = "Name is required"


class Phase(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    READY = "ready"
    LOAD_FAILED = "load_failed"


class Control(str, Enum):
    """Controls that are disabled while their request is in flight."""

    ADD = "add"
    SAVE = "save"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class EditSession:
    target_id: int
    draft: str


@dataclass(frozen=True, slots=True)
class ViewState:
    phase: Phase = Phase.UNAUTHENTICATED
    workflows: tuple[WorkflowOut, ...] = ()
    new_name: str = ""
    edit: EditSession | None = None
    load_error: str | None = None
    mutation_error: str | None = None
    submitting: bool = False
    saving: bool = False
    deleting: frozenset[int] = field(default_factory=frozenset)
    last_mutation: Result | None = None

    @property
    def can_submit_new(self) -> bool:
        return self.phase is Phase.READY and bool(self.new_name.strip()) and not self.submitting

    @property
    def can_save_edit(self) -> bool:
        return self.phase is Phase.READY and self.edit is not None and not self.saving

    def can_delete(self, workflow_id: int) -> bool:
        return self.phase is Phase.READY and workflow_id not in self.deleting

    def find(self, workflow_id: int) -> WorkflowOut | None:
        for workflow in self.workflows:
            if workflow.id == workflow_id:
                return workflow
        return None


# Events


@dataclass(frozen=True, slots=True)
class LoginCompleted:
    pass


@dataclass(frozen=True, slots=True)
class LoginRequired:
    pass


@dataclass(frozen=True, slots=True)
class LoadFinished:
    outcome: Outcome[list[WorkflowOut]]


@dataclass(frozen=True, slots=True)
class NewNameChanged:
    text: str


@dataclass(frozen=True, slots=True)
class MutationRejected:
    """Local validation failed; nothing was sent."""

    message: str


@dataclass(frozen=True, slots=True)
class MutationStarted:
    control: Control
    workflow_id: int | None = None


@dataclass(frozen=True, slots=True)
class MutationSettled:
    control: Control
    workflow_id: int | None = None


@dataclass(frozen=True, slots=True)
class CreateFinished:
    outcome: Outcome[WorkflowOut]


@dataclass(frozen=True, slots=True)
class EditStarted:
    workflow_id: int


@dataclass(frozen=True, slots=True)
class DraftChanged:
    text: str


@dataclass(frozen=True, slots=True)
class EditCancelled:
    pass


@dataclass(frozen=True, slots=True)
class UpdateFinished:
    workflow_id: int
    outcome: Outcome[WorkflowOut]


@dataclass(frozen=True, slots=True)
class DeleteFinished:
    workflow_id: int
    outcome: Outcome[WorkflowOut]


Event = Union[
    LoginCompleted,
    LoginRequired,
    LoadFinished,
    NewNameChanged,
    MutationRejected,
    MutationStarted,
    MutationSettled,
    CreateFinished,
    EditStarted,
    DraftChanged,
    EditCancelled,
    UpdateFinished,
    DeleteFinished,
]


def _mutation_failed(state: ViewState, failure: Failure) -> ViewState:
    state = replace(state, last_mutation=failure)
    if failure.kind is ErrorKind.AUTH:
        return replace(state, phase=Phase.UNAUTHENTICATED)
    return replace(state, mutation_error=failure.message)


def update(state: ViewState, event: Event) -> ViewState:
    """Return the state that follows ``event``."""

    if isinstance(event, LoginCompleted):
        return replace(state, phase=Phase.LOADING, load_error=None)

    if isinstance(event, LoginRequired):
        return replace(state, phase=Phase.UNAUTHENTICATED)

    if isinstance(event, LoadFinished):
        outcome = event.outcome
        if isinstance(outcome, Ok):
            return replace(
                state, phase=Phase.READY, workflows=tuple(outcome.value), load_error=None
            )
        if outcome.kind is ErrorKind.AUTH:
            return replace(state, phase=Phase.UNAUTHENTICATED)
        return replace(state, phase=Phase.LOAD_FAILED, load_error=outcome.message)

    if isinstance(event, NewNameChanged):
        return replace(state, new_name=event.text)

    if isinstance(event, MutationRejected):
        return replace(
            state,
            mutation_error=event.message,
            last_mutation=Failure(ErrorKind.CLIENT_INPUT, event.message),
        )

    if isinstance(event, MutationStarted):
        if event.control is Control.ADD:
            return replace(state, submitting=True, mutation_error=None, last_mutation=Pending())
        if event.control is Control.SAVE:
            return replace(state, saving=True, mutation_error=None, last_mutation=Pending())
        return replace(
            state,
            deleting=state.deleting | {event.workflow_id},
            mutation_error=None,
            last_mutation=Pending(),
        )

    if isinstance(event, MutationSettled):
        if event.control is Control.ADD:
            return replace(state, submitting=False)
        if event.control is Control.SAVE:
            return replace(state, saving=False)
        return replace(state, deleting=state.deleting - {event.workflow_id})

    if isinstance(event, CreateFinished):
        outcome = event.outcome
        if isinstance(outcome, Failure):
            return _mutation_failed(state, outcome)
        # Appended as-is; the next full load restores id order.
        return replace(
            state,
            workflows=state.workflows + (outcome.value,),
            new_name="",
            last_mutation=outcome,
        )

    if isinstance(event, EditStarted):
        target = state.find(event.workflow_id)
        if target is None:
            return state
        return replace(
            state,
            edit=EditSession(target_id=target.id, draft=target.name),
            mutation_error=None,
        )

    if isinstance(event, DraftChanged):
        if state.edit is None:
            return state
        return replace(state, edit=replace(state.edit, draft=event.text))

    if isinstance(event, EditCancelled):
        return replace(state, edit=None, mutation_error=None)

    if isinstance(event, UpdateFinished):
        outcome = event.outcome
        if isinstance(outcome, Failure):
            return _mutation_failed(state, outcome)
        updated = outcome.value
        edit = state.edit
        if edit is not None and edit.target_id == event.workflow_id:
            edit = None
        return replace(
            state,
            workflows=tuple(updated if w.id == event.workflow_id else w for w in state.workflows),
            edit=edit,
            last_mutation=outcome,
        )

    if isinstance(event, DeleteFinished):
        outcome = event.outcome
        if isinstance(outcome, Failure):
            return _mutation_failed(state, outcome)
        edit = state.edit
        if edit is not None and edit.target_id == event.workflow_id:
            edit = None
        return replace(
            state,
            workflows=tuple(w for w in state.workflows if w.id != event.workflow_id),
            edit=edit,
            last_mutation=outcome,
        )

    raise TypeError(f"Unknown event: {event!r}")
