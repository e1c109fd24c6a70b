"""
Project CRUD operations.

Extends BaseCRUD with the status transitions and artifact writes used by
the pipeline service.

Dependencies: sqlalchemy, paperlens.boundary.db.models
System role: Project persistence operations
"""

from typing import Any
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from paperlens.boundary.db.CRUD.base_crud import BaseCRUD
from paperlens.boundary.db.models.project_model import ProjectModel, ProjectStatus

ARTIFACT_FIELDS = frozenset(
    {
        "summary_eli5",
        "summary_college",
        "summary_expert",
        "diagram_syntax",
        "extracted_code_snippets",
        "extracted_references",
        "key_insights",
    }
)


class ProjectCRUD(BaseCRUD[ProjectModel]):
    """CRUD operations for ProjectModel."""

    def __init__(self) -> None:
        super().__init__(ProjectModel)

    async def mark_processing(self, session: AsyncSession, id: UUID) -> ProjectModel | None:
        """
        Claim a project for ingestion: move it into PROCESSING and clear the
        previous error, unless it is already PROCESSING.

        A single conditional UPDATE, so two concurrent claims cannot both win.

        Args:
            session: Async database session
            id: Project UUID

        Returns:
            Updated ProjectModel if claimed, None if missing or already processing
        """
        stmt = (
            update(ProjectModel)
            .where(
                ProjectModel.id == id,
                ProjectModel.status != ProjectStatus.PROCESSING,
            )
            .values(status=ProjectStatus.PROCESSING, error_message=None)
            .returning(ProjectModel)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        error_message: str,
    ) -> ProjectModel | None:
        """
        Mark a project as failed with error details.

        Args:
            session: Async database session
            id: Project UUID
            error_message: Human-readable error description (truncated to column size)

        Returns:
            Updated ProjectModel if found, None otherwise
        """
        return await self.update_by_id(
            session, id, status=ProjectStatus.FAILED, error_message=error_message[:2048]
        )

    async def save_analysis(
        self,
        session: AsyncSession,
        id: UUID,
        vector_store_path: str,
        **artifacts: Any,
    ) -> ProjectModel | None:
        """
        Write the index location and baseline artifacts, and mark COMPLETE.

        One statement, so derived fields and status change together.

        Args:
            session: Async database session
            id: Project UUID
            vector_store_path: Directory of the persisted index
            **artifacts: Artifact columns to write

        Returns:
            Updated ProjectModel if found, None otherwise

        Raises:
            ValueError: When an unknown artifact field is given
        """
        self._check_fields(artifacts)
        return await self.update_by_id(
            session,
            id,
            status=ProjectStatus.COMPLETE,
            error_message=None,
            vector_store_path=vector_store_path,
            **artifacts,
        )

    async def update_artifacts(
        self,
        session: AsyncSession,
        id: UUID,
        **artifacts: Any,
    ) -> ProjectModel | None:
        """
        Write regenerated artifacts without touching status.

        Raises:
            ValueError: When an unknown artifact field is given
        """
        self._check_fields(artifacts)
        if not artifacts:
            return await self.get_by_id(session, id)
        return await self.update_by_id(session, id, **artifacts)

    @staticmethod
    def _check_fields(artifacts: dict[str, Any]) -> None:
        unknown = set(artifacts) - ARTIFACT_FIELDS
        if unknown:
            raise ValueError(f"Unknown artifact fields: {sorted(unknown)}")


project_crud = ProjectCRUD()
