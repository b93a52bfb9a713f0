"""Chat-completion and embedding providers."""

from .base import ChatCompletionProvider, Completion, EmbeddingProvider, ToolCallRequest
from .groq_chat import GroqChatProvider
from .openai_embeddings import OpenAIEmbeddingProvider

__all__ = [
    "ChatCompletionProvider",
    "Completion",
    "EmbeddingProvider",
    "GroqChatProvider",
    "OpenAIEmbeddingProvider",
    "ToolCallRequest",
]
