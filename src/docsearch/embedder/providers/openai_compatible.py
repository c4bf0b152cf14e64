"""
Embedding model served over an OpenAI-compatible HTTP API.

Works with any endpoint implementing ``POST {base_url}/embeddings``:
OpenAI, Azure OpenAI, or local servers (LocalAI, Ollama, vLLM) exposing the
same format.

Example Usage:
--------------
    model = OpenAICompatibleModel(
        base_url="http://localhost:11434/v1",
        api_key="unused",
        model="all-minilm",
        dimension=384,
    )
"""

import httpx
from loguru import logger

from ...errors import EmbeddingError
from ..base import BaseEmbeddingModel


class OpenAICompatibleModel(BaseEmbeddingModel):
    """
    OpenAI-compatible embedding model.

    Attributes:
        base_url: The API base URL (e.g., "https://api.openai.com/v1")
        api_key: API authentication key
        model: Model identifier sent with every request
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        dimension: int,
        api_key: str | None = None,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the model.

        Args:
            base_url: API endpoint base URL (trailing slash will be stripped)
            model: Model name to use for embeddings
            dimension: Length of vectors the model returns
            api_key: Bearer token, if the endpoint requires one
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self._dimension = dimension
        self._transport = transport
        self._client: httpx.Client | None = None

    def load(self) -> None:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
            logger.info(f"Using embedding endpoint {self.base_url} (model={self.model})")

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts with a single API call.

        Raises:
            ValueError: If texts is empty
            EmbeddingError: If the request fails or the response is malformed
        """
        if not texts:
            raise ValueError("texts cannot be empty")
        if self._client is None:
            self.load()

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = self._client.post(
                f"{self.base_url}/embeddings",
                headers=headers,
                json={"model": self.model, "input": texts},
            )
            response.raise_for_status()
            data = response.json()["data"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise EmbeddingError(
                "Embedding request failed",
                details={"base_url": self.base_url, "model": self.model},
                original_error=e,
            ) from e

        # The API may return items out of order; "index" is authoritative
        data.sort(key=lambda item: item["index"])
        return [item["embedding"] for item in data]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def name(self) -> str:
        return self.model

    @property
    def dimension(self) -> int:
        return self._dimension
