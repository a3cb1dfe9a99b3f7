from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class WorkflowIn(BaseModel):
    """Request body for create and update."""

    name: str

    @field_validator("name", mode="before")
    @classmethod
    def require_name(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("Name is required")
        return value.strip() if isinstance(value, str) else value


class WorkflowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class WorkflowDeleted(BaseModel):
    message: str = "Workflow deleted"
    workflow: WorkflowOut
