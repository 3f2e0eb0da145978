"""Chat completion summarizers."""

import logging
from typing import Optional

import httpx

from ..domain.protocols import Summarizer

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = "You are a helpful assistant that summarizes project tasks."

MOCK_SUMMARY = (
    "Mock AI Summary: Tasks are progressing well. "
    "Main focus areas include bug fixes and feature development."
)


class DemoSummarizer:
    """Returns a canned summary without calling any API."""

    async def summarize(self, prompt: str) -> Optional[str]:
        return MOCK_SUMMARY


class OpenAISummarizer:
    """Summarizes prompts with an OpenAI-compatible chat completion API."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 500,
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize summarizer.

        Args:
            api_key: API bearer token
            base_url: API root URL
            model: Chat model name
            max_tokens: Upper bound on the completion length
            timeout: Request timeout in seconds
            http_client: Optional HTTP client for testing
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, prompt: str) -> dict:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self._max_tokens,
        }

    async def summarize(self, prompt: str) -> Optional[str]:
        """Send the prompt and return the first choice's content.

        Returns:
            Summary text, or None if the request fails or has no content
        """
        client = self._http_client or httpx.AsyncClient()
        try:
            response = await client.post(
                f"{self._base_url}/chat/completions",
                headers=self._get_headers(),
                json=self._build_payload(prompt),
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Chat completion API error: {e}")
            return None
        except ValueError as e:
            logger.error(f"Chat completion API returned invalid JSON: {e}")
            return None
        finally:
            if self._owns_client and not self._http_client:
                await client.aclose()

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Chat completion response had no message content")
            return None


def create_summarizer(
    api_key: str,
    *,
    base_url: str = "https://api.openai.com/v1",
    model: str = "gpt-3.5-turbo",
    max_tokens: int = 500,
    timeout: float = 60.0,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Summarizer:
    """Build the live summarizer, or the demo one when no API key is set."""
    if not api_key:
        return DemoSummarizer()
    return OpenAISummarizer(
        api_key,
        base_url=base_url,
        model=model,
        max_tokens=max_tokens,
        timeout=timeout,
        http_client=http_client,
    )
