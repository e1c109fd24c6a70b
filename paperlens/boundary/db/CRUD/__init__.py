"""
CRUD operations for database models.

Usage:
    from paperlens.boundary.db.CRUD import project_crud

    project = await project_crud.get_by_id(db, project_id)
"""

from paperlens.boundary.db.CRUD.base_crud import BaseCRUD
from paperlens.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud

__all__ = [
    "BaseCRUD",
    "ProjectCRUD",
    "project_crud",
]
