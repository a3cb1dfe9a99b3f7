"""
SQLAlchemy models for the workflow list.
"""
from __future__ import annotations

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Workflow(Base):
    __tablename__ = "workflows"
    # Without AUTOINCREMENT, SQLite reuses the id of a deleted last row.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"Workflow(id={self.id!r}, name={self.name!r})"
