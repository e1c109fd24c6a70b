"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - ProjectModel, ProjectStatus: Project entity and lifecycle enum
  - project_crud: CRUD operation singleton

Dependencies: sqlalchemy, paperlens.configs
System role: Database adapter for projects and their generated artifacts
"""

from paperlens.boundary.db.base import Base, TimestampMixin, UUIDMixin
from paperlens.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from paperlens.boundary.db.CRUD import BaseCRUD, ProjectCRUD, project_crud
from paperlens.boundary.db.models import ProjectModel, ProjectStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ProjectModel",
    "ProjectStatus",
    "BaseCRUD",
    "ProjectCRUD",
    "project_crud",
]
