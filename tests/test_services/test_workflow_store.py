from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from workflow_sync.core.exceptions import NotFoundError, StorageError
from workflow_sync.services import workflow_store


def test_create_then_list_contains_exactly_one_new_record(db):
    existing = workflow_store.create_workflow(db, "Existing")
    created = workflow_store.create_workflow(db, "Fresh")

    listed = workflow_store.list_workflows(db)
    assert [w for w in listed if w.name == "Fresh"] == [created]
    assert created.id != existing.id
    assert [w.id for w in listed] == sorted(w.id for w in listed)


def test_update_returns_new_state(db):
    created = workflow_store.create_workflow(db, "Draft")
    updated = workflow_store.update_workflow(db, created.id, "Final")
    assert updated.id == created.id
    assert updated.name == "Final"


def test_update_and_delete_unknown_id_raise_not_found(db):
    with pytest.raises(NotFoundError):
        workflow_store.update_workflow(db, 42, "Nope")
    with pytest.raises(NotFoundError):
        workflow_store.delete_workflow(db, 42)


def test_delete_returns_prior_state(db):
    created = workflow_store.create_workflow(db, "Temp")
    deleted = workflow_store.delete_workflow(db, created.id)
    assert deleted == created
    assert workflow_store.list_workflows(db) == []


@pytest.mark.parametrize(
    "call, message",
    [
        (lambda db: workflow_store.list_workflows(db), "Database error"),
        (lambda db: workflow_store.create_workflow(db, "x"), "Error creating workflow"),
        (lambda db: workflow_store.update_workflow(db, 1, "x"), "Error updating workflow"),
        (lambda db: workflow_store.delete_workflow(db, 1), "Error deleting workflow"),
    ],
)
def test_storage_errors_are_wrapped_and_rolled_back(call, message):
    session = MagicMock()
    session.execute.side_effect = OperationalError("stmt", {}, Exception("connection refused"))

    with pytest.raises(StorageError) as excinfo:
        call(session)

    assert str(excinfo.value) == message
    session.rollback.assert_called_once()
    session.commit.assert_not_called()


@pytest.mark.parametrize("workflow_id", [2**31, 2**63, -(2**31) - 1])
def test_out_of_range_ids_are_not_found_without_a_query(workflow_id):
    session = MagicMock()
    with pytest.raises(NotFoundError):
        workflow_store.update_workflow(session, workflow_id, "x")
    with pytest.raises(NotFoundError):
        workflow_store.delete_workflow(session, workflow_id)
    session.execute.assert_not_called()
