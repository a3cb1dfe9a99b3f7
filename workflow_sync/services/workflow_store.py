"""
Workflow storage. Every operation is one SQL statement committed on its own.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workflow_sync.core.exceptions import NotFoundError, StorageError
from workflow_sync.models import Workflow
from workflow_sync.schemas.workflow import WorkflowOut

logger = logging.getLogger(__name__)

_COLUMNS = (Workflow.id, Workflow.name)

# Integer is a 32-bit column on PostgreSQL; ids outside it can never match a row.
_ID_MIN = -(2**31)
_ID_MAX = 2**31 - 1


def _row_to_schema(row) -> WorkflowOut:
    return WorkflowOut(id=row.id, name=row.name)


def _storage_failure(
    db: Session, message: str, exc: SQLAlchemyError, operation: str, workflow_id: int | None = None
) -> StorageError:
    db.rollback()
    logger.error(
        f"{message}: {exc}",
        exc_info=exc,
        extra={"operation": operation, "workflow_id": workflow_id},
    )
    return StorageError(message)


def _require_storable_id(workflow_id: int, operation: str) -> None:
    if not _ID_MIN <= workflow_id <= _ID_MAX:
        logger.info(
            f"Workflow id out of range: {workflow_id}",
            extra={"operation": operation, "workflow_id": workflow_id},
        )
        raise NotFoundError("Workflow not found")


def list_workflows(db: Session) -> List[WorkflowOut]:
    try:
        rows = db.execute(select(*_COLUMNS).order_by(Workflow.id.asc())).all()
    except SQLAlchemyError as exc:
        raise _storage_failure(db, "Database error", exc, "list") from exc
    return [_row_to_schema(r) for r in rows]


def create_workflow(db: Session, name: str) -> WorkflowOut:
    try:
        row = db.execute(insert(Workflow).values(name=name).returning(*_COLUMNS)).one()
        db.commit()
    except SQLAlchemyError as exc:
        raise _storage_failure(db, "Error creating workflow", exc, "create") from exc
    logger.info(f"Workflow created: #{row.id}", extra={"operation": "create", "workflow_id": row.id})
    return _row_to_schema(row)


def update_workflow(db: Session, workflow_id: int, name: str) -> WorkflowOut:
    _require_storable_id(workflow_id, "update")
    try:
        row = db.execute(
            update(Workflow)
            .where(Workflow.id == workflow_id)
            .values(name=name)
            .returning(*_COLUMNS)
        ).first()
        db.commit()
    except SQLAlchemyError as exc:
        raise _storage_failure(db, "Error updating workflow", exc, "update", workflow_id) from exc
    if row is None:
        raise NotFoundError("Workflow not found")
    logger.info(f"Workflow updated: #{row.id}", extra={"operation": "update", "workflow_id": row.id})
    return _row_to_schema(row)


def delete_workflow(db: Session, workflow_id: int) -> WorkflowOut:
    _require_storable_id(workflow_id, "delete")
    try:
        row = db.execute(
            delete(Workflow).where(Workflow.id == workflow_id).returning(*_COLUMNS)
        ).first()
        db.commit()
    except SQLAlchemyError as exc:
        raise _storage_failure(db, "Error deleting workflow", exc, "delete", workflow_id) from exc
    if row is None:
        raise NotFoundError("Workflow not found")
    logger.info(f"Workflow deleted: #{row.id}", extra={"operation": "delete", "workflow_id": row.id})
    return _row_to_schema(row)
