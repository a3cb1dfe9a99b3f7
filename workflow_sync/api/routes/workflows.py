"""
Workflows API Routes
List, create, rename and delete workflow records
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from workflow_sync.database import get_db
from workflow_sync.schemas.workflow import WorkflowDeleted, WorkflowIn, WorkflowOut
from workflow_sync.services import workflow_store

router = APIRouter()


@router.get("", response_model=List[WorkflowOut])
async def list_workflows(db: Session = Depends(get_db)) -> List[WorkflowOut]:
    """
    List all workflows ordered by id
    """
    return workflow_store.list_workflows(db)


@router.post("", response_model=WorkflowOut, status_code=status.HTTP_201_CREATED)
async def create_workflow(payload: WorkflowIn, db: Session = Depends(get_db)) -> WorkflowOut:
    return workflow_store.create_workflow(db, payload.name)


@router.put("/{workflow_id}", response_model=WorkflowOut)
async def update_workflow(
    workflow_id: int,
    payload: WorkflowIn,
    db: Session = Depends(get_db),
) -> WorkflowOut:
    return workflow_store.update_workflow(db, workflow_id, payload.name)


@router.delete("/{workflow_id}", response_model=WorkflowDeleted)
async def delete_workflow(workflow_id: int, db: Session = Depends(get_db)) -> WorkflowDeleted:
    workflow = workflow_store.delete_workflow(db, workflow_id)
    return WorkflowDeleted(workflow=workflow)
