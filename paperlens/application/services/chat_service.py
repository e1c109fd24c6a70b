"""
Chat service for question answering over one paper.

Retrieves the chunks closest to the question from the project's index and
answers with a prompt restricted to that context. Without an index the
answer falls back to the primary section of the paper.

Dependencies: langchain_core, paperlens.core.rag, paperlens.boundary
System role: Chat service orchestration layer
"""

import logging
from uuid import UUID

from langchain_core.prompts import PromptTemplate
from sqlalchemy.ext.asyncio import AsyncSession

from paperlens.boundary.db.CRUD.project_crud import project_crud
from paperlens.boundary.llm.chat_client import GeminiChatClient
from paperlens.core.document_processing.models import Document
from paperlens.core.exceptions import ProjectNotFoundError
from paperlens.core.rag.context_assembler import ContextAssembler
from paperlens.core.rag.context_models import ContextTask
from paperlens.models.chat import ChatResponse, ChatSource

logger = logging.getLogger(__name__)

CHAT_PROMPT = PromptTemplate.from_template(
    """Answer the user's question based only on the following context:

<context>
{context}
</context>

Question: {input}"""
)


class ChatService:
    """RAG chat over a project's paper."""

    def __init__(
        self,
        db: AsyncSession,
        assembler: ContextAssembler,
        chat_client: GeminiChatClient,
    ) -> None:
        self.db = db
        self._assembler = assembler
        self._chat_client = chat_client

    async def answer(self, project_id: UUID, question: str) -> ChatResponse:
        """
        Answer a question about a project's paper.

        Args:
            project_id: Project UUID
            question: User question

        Returns:
            ChatResponse: Answer and the chunks it was grounded on

        Raises:
            ProjectNotFoundError: Project does not exist
            NoDocumentTextError: Project has no paper text
            ProviderUnavailableError: Generation failed
        """
        project = await project_crud.get_by_id(self.db, project_id)
        if project is None:
            raise ProjectNotFoundError(str(project_id))
        document = Document(project_id=project_id, raw_text=project.paper_text or "")

        context = await self._assembler.assemble(
            document,
            ContextTask.CHAT,
            rag_query=question,
        )
        sources = [
            ChatSource(content=r.content, score=r.score, sequence_index=r.sequence_index)
            for r in context.rag_sources
        ]
        if context.rag_section:
            chat_context = context.rag_section
        else:
            logger.info(
                f"{__name__}:answer - No retrieved context, answering from paper text",
                extra={"project_id": str(project_id)},
            )
            chat_context = context.primary_section

        prompt = CHAT_PROMPT.format(context=chat_context, input=question)
        answer = await self._chat_client.complete(prompt)
        return ChatResponse(answer=answer.strip(), sources=sources)
