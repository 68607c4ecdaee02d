"""OpenAI-compatible chat completions client.

Groq, OpenAI, Ollama (/v1), LM Studio and vLLM all accept the same
``POST {base_url}/chat/completions`` request, so one client covers them.
"""

import logging
from typing import Any

import httpx

from codetribute.config import SummarizationConfig
from codetribute.constants import DEFAULT_SUMMARIZATION_BASE_URL, DEFAULT_SUMMARIZATION_TIMEOUT

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Thin httpx wrapper around a chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_SUMMARIZATION_BASE_URL,
        timeout: float = DEFAULT_SUMMARIZATION_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: Bearer token for the provider.
            base_url: API base URL (e.g. https://api.groq.com/openai/v1).
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def _get_headers(self) -> dict[str, str]:
        """Get request headers with auth."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def create_chat_completion(
        self,
        messages: list[dict[str, str]],
        model: str,
    ) -> dict[str, Any]:
        """Send a chat completion request.

        Args:
            messages: Chat messages in OpenAI format.
            model: Model identifier.

        Returns:
            Decoded JSON response body.

        Raises:
            httpx.HTTPError: On transport failures and non-2xx responses.
            ValueError: If the response body is not JSON.
        """
        response = self._client.post(
            f"{self.base_url}/chat/completions",
            headers=self._get_headers(),
            json={"model": model, "messages": messages},
        )
        if response.is_error:
            logger.debug(f"Response body: {response.text[:500]}")
        response.raise_for_status()
        data: dict[str, Any] = response.json()
        return data

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()


def create_chat_client_from_config(
    config: SummarizationConfig,
    api_key: str | None = None,
) -> ChatCompletionClient | None:
    """Create a chat client from configuration.

    Args:
        config: Summarization configuration.
        api_key: Explicit key (e.g. just prompted for); overrides config.

    Returns:
        ChatCompletionClient, or None if summarization is disabled or no
        API key is available.
    """
    if not config.enabled:
        logger.info("Summarization disabled in config")
        return None

    key = api_key or config.resolve_api_key()
    if not key:
        logger.warning(f"No API key found in {config.api_key_env}; summaries will be skipped")
        return None

    logger.info(f"Summarization client initialized (model={config.model})")
    return ChatCompletionClient(api_key=key, base_url=config.base_url, timeout=config.timeout)
