"""
embeddings.py

Embedding providers: turn text into fixed-length vectors.

- OpenAIEmbeddingProvider calls the OpenAI embeddings API (needs an API key).
- SentenceTransformerProvider runs a local sentence-transformers model
  (install the "local" extra).

Vectors from different providers / models are not comparable, so a corpus
must be queried with the same provider that generated it.
"""

from typing import List, Optional, Sequence

import openai

from embedscore.config import Settings
from embedscore.errors import ConfigurationError, ProviderError


class EmbeddingProvider:
    """Interface: text -> vector."""

    def embed(self, text: str) -> List[float]:
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: Sequence[str]) -> List[List[float]]:
        raise NotImplementedError


class OpenAIEmbeddingProvider(EmbeddingProvider):
    def __init__(self, api_key: str, model: str = "text-embedding-3-small", timeout: Optional[float] = 30.0, client=None):
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set. Add it to the environment or .env")
        self.model = model
        # no retries: a failed request is reported to the caller as-is
        self.client = client or openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def embed(self, text: str) -> List[float]:
        print(f"[embeddings] Generating the embedding for input: {text}")
        return self._create([text])[0]

    def embed_batch(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []
        print(f"[embeddings] Embedding {len(texts)} texts with {self.model}")
        return self._create(list(texts))

    def _create(self, inputs: List[str]) -> List[List[float]]:
        try:
            response = self.client.embeddings.create(model=self.model, input=inputs)
        except openai.OpenAIError as e:
            raise ProviderError(f"embedding request to {self.model} failed: {e}") from e

        if len(response.data) != len(inputs):
            raise ProviderError(f"expected {len(inputs)} embeddings, got {len(response.data)}")

        # Sort by index to ensure order matches input
        ordered = sorted(response.data, key=lambda item: item.index)
        return [list(item.embedding) for item in ordered]


class SentenceTransformerProvider(EmbeddingProvider):
    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model = None

    def get_model(self):
        """Load (or return cached) embedding model."""
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError as e:
                raise ConfigurationError(
                    "EMBEDDING_BACKEND=local needs sentence-transformers: pip install 'embedscore[local]'"
                ) from e
            print(f"[embeddings] Loading SentenceTransformer model: {self.model_name} (this may take a few seconds)...")
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_batch(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []
        model = self.get_model()
        try:
            vectors = model.encode(list(texts), show_progress_bar=False)
        except Exception as e:
            raise ProviderError(f"local model {self.model_name} failed: {e}") from e
        return [vec.tolist() for vec in vectors]


def get_provider(settings: Settings) -> EmbeddingProvider:
    """Build the provider selected by settings.backend."""
    if settings.backend == "local":
        return SentenceTransformerProvider(settings.embedding_model)
    return OpenAIEmbeddingProvider(
        api_key=settings.openai_api_key,
        model=settings.embedding_model,
        timeout=settings.timeout,
    )
