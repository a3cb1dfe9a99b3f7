"""Controller for the synchronized workflow list.

Owns the current ``ViewState`` and performs the network effects. Each
operation follows the same shape: disable the triggering control, acquire a
token, issue one request, dispatch its outcome, and re-enable the control in
a ``finally`` block so every exit path restores an interactive view.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from workflow_sync.client.api import WorkflowApiClient
from workflow_sync.client.auth import LoginRequiredError, TokenProvider
from workflow_sync.client.result import ErrorKind, Failure, Outcome
from workflow_sync.client.state import (
    NAME_REQUIRED,
    Control,
    CreateFinished,
    DeleteFinished,
    DraftChanged,
    EditCancelled,
    EditStarted,
    Event,
    LoadFinished,
    LoginCompleted,
    LoginRequired,
    MutationRejected,
    MutationSettled,
    MutationStarted,
    NewNameChanged,
    Phase,
    UpdateFinished,
    ViewState,
    update,
)

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this workflow?"

Confirm = Callable[[str], bool]


class WorkflowListView:
    """Keeps a cached workflow list in step with the server."""

    def __init__(
        self,
        api: WorkflowApiClient,
        tokens: TokenProvider,
        confirm: Confirm,
        on_login_required: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[ViewState], None]] = None,
    ) -> None:
        self.api = api
        self.tokens = tokens
        self.confirm = confirm
        self.on_login_required = on_login_required
        self.on_change = on_change
        self._state = ViewState()

    @property
    def state(self) -> ViewState:
        return self._state

    def dispatch(self, event: Event) -> ViewState:
        previous = self._state
        self._state = update(previous, event)
        if self._state.phase is Phase.UNAUTHENTICATED and previous.phase is not Phase.UNAUTHENTICATED:
            logger.info("Session needs a fresh login")
            if self.on_login_required is not None:
                self.on_login_required()
        if self.on_change is not None and self._state is not previous:
            self.on_change(self._state)
        return self._state

    async def login_completed(self) -> ViewState:
        self.dispatch(LoginCompleted())
        return await self.load()

    async def load(self) -> ViewState:
        """Fetch the full list. Only used on login or an explicit reload."""
        if self._state.phase is Phase.UNAUTHENTICATED:
            return self._state
        if self._state.phase is not Phase.LOADING:
            self.dispatch(LoginCompleted())
        outcome = await self._call(lambda token: self.api.list_workflows(token))
        if outcome is None:
            return self._state
        return self.dispatch(LoadFinished(outcome))

    def set_new_name(self, text: str) -> ViewState:
        return self.dispatch(NewNameChanged(text))

    async def submit_new(self) -> ViewState:
        state = self._state
        if state.phase is not Phase.READY or state.submitting:
            return state
        name = state.new_name.strip()
        if not name:
            return self.dispatch(MutationRejected(NAME_REQUIRED))

        self.dispatch(MutationStarted(Control.ADD))
        try:
            outcome = await self._call(lambda token: self.api.create_workflow(token, name))
            if outcome is not None:
                self.dispatch(CreateFinished(outcome))
        finally:
            self.dispatch(MutationSettled(Control.ADD))
        return self._state

    def start_edit(self, workflow_id: int) -> ViewState:
        return self.dispatch(EditStarted(workflow_id))

    def set_draft(self, text: str) -> ViewState:
        return self.dispatch(DraftChanged(text))

    def cancel_edit(self) -> ViewState:
        return self.dispatch(EditCancelled())

    async def submit_edit(self) -> ViewState:
        state = self._state
        if not state.can_save_edit:
            return state
        edit = state.edit
        name = edit.draft.strip()
        if not name:
            return self.dispatch(MutationRejected(NAME_REQUIRED))

        self.dispatch(MutationStarted(Control.SAVE))
        try:
            outcome = await self._call(
                lambda token: self.api.update_workflow(token, edit.target_id, name)
            )
            if outcome is not None:
                self.dispatch(UpdateFinished(edit.target_id, outcome))
        finally:
            self.dispatch(MutationSettled(Control.SAVE))
        return self._state

    async def delete(self, workflow_id: int) -> ViewState:
        if not self._state.can_delete(workflow_id):
            return self._state
        if not self.confirm(DELETE_PROMPT):
            return self._state

        self.dispatch(MutationStarted(Control.DELETE, workflow_id))
        try:
            outcome = await self._call(lambda token: self.api.delete_workflow(token, workflow_id))
            if outcome is not None:
                self.dispatch(DeleteFinished(workflow_id, outcome))
        finally:
            self.dispatch(MutationSettled(Control.DELETE, workflow_id))
        return self._state

    async def _call(
        self, request: Callable[[str], Awaitable[Outcome]]
    ) -> Optional[Outcome]:
        """Acquire a token and run ``request``.

        Returns None when the user has to log in again; that transition is
        already dispatched.
        """
        try:
            token = await self.tokens.get_token()
            return await request(token)
        except LoginRequiredError:
            self.dispatch(LoginRequired())
            return None
        except Exception as exc:
            logger.exception(f"Request failed unexpectedly: {exc}")
            return Failure(ErrorKind.SERVICE, "Request failed")
