"""
Model provider clients (Google Gemini via LangChain).

Exports: GeminiEmbeddingClient, GeminiChatClient
"""

from paperlens.boundary.llm.chat_client import GeminiChatClient, message_text
from paperlens.boundary.llm.embedding_client import GeminiEmbeddingClient

__all__ = [
    "GeminiChatClient",
    "GeminiEmbeddingClient",
    "message_text",
]
