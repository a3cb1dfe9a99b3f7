"""Client side of the workflow list: HTTP access plus the synchronized view."""

from .api import WorkflowApiClient
from .auth import LoginRequiredError, StaticTokenProvider, TokenProvider
from .config import ClientSettings
from .result import ErrorKind, Failure, Ok, Pending
from .state import Control, EditSession, Phase, ViewState, update
from .view import WorkflowListView

__all__ = [
    "WorkflowApiClient",
    "LoginRequiredError",
    "StaticTokenProvider",
    "TokenProvider",
    "ClientSettings",
    "ErrorKind",
    "Failure",
    "Ok",
    "Pending",
    "Control",
    "EditSession",
    "Phase",
    "ViewState",
    "update",
    "WorkflowListView",
]
