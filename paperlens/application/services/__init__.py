"""
Application services.

Exports: PipelineService, ChatService
"""

from paperlens.application.services.chat_service import ChatService
from paperlens.application.services.pipeline_service import PipelineService

__all__ = ["ChatService", "PipelineService"]
