"""Embedding provider backed by the OpenAI embeddings API."""

from __future__ import annotations

import openai
from openai import AsyncOpenAI

from ..config import DEFAULT_EMBEDDING_DIMENSIONS, DEFAULT_EMBEDDING_MODEL
from ..errors import EmbeddingDimensionError, ProviderError


class OpenAIEmbeddingProvider:
    """EmbeddingProvider implementation that wraps AsyncOpenAI."""

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str = DEFAULT_EMBEDDING_MODEL,
        dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS,
    ) -> None:
        self._client = client or AsyncOpenAI()
        self.model = model
        self.dimensions = dimensions

    async def embed(self, text: str) -> list[float]:
        """Embed a single text; raises ProviderError on any failure."""
        try:
            response = await self._client.embeddings.create(
                model=self.model,
                input=text,
                encoding_format="float",
            )
        except openai.OpenAIError as e:
            raise ProviderError(f"Embedding request failed: {e}") from e

        embedding = list(response.data[0].embedding)
        if len(embedding) != self.dimensions:
            raise EmbeddingDimensionError(self.dimensions, len(embedding))
        return embedding
