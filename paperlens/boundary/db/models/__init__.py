"""ORM models."""

from paperlens.boundary.db.models.project_model import ProjectModel, ProjectStatus

__all__ = ["ProjectModel", "ProjectStatus"]
