"""
Text assist feature: chat-completion API client.

One POST per call:
  POST {base_url}/chat/completions
  Authorization: Bearer <api key>
  {"model": ..., "messages": [{"role": "user", "content": prompt}], "temperature": ...}

The answer is read from choices[0].message.content. No retries, no
streaming. Every failure surfaces as RemoteCallError with a generic
message; status codes and response bodies only go to the log.
"""

import logging

import httpx

from notekeeper.core.exceptions import RemoteCallError

logger = logging.getLogger(__name__)

# Longest slice of an error body written to the log.
LOG_BODY_LIMIT = 500


class TextAssistClient:
    """Async client for an OpenAI-compatible chat-completion endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.deepseek.com/v1",
        model: str = "deepseek-chat",
        temperature: float = 0.7,
        timeout: float | None = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings) -> "TextAssistClient":
        return cls(
            api_key=settings.TEXT_ASSIST_API_KEY,
            base_url=settings.TEXT_ASSIST_BASE_URL,
            model=settings.TEXT_ASSIST_MODEL,
            temperature=settings.TEXT_ASSIST_TEMPERATURE,
            timeout=settings.TEXT_ASSIST_TIMEOUT,
        )

    def _build_body(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }

    async def complete(self, prompt: str) -> str:
        """Send one prompt and return the completion text.

        Raises:
            RemoteCallError: On network failure, non-2xx status or a body
                without choices[0].message.content.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
        ) as client:
            try:
                response = await client.post("/chat/completions", json=self._build_body(prompt))
            except httpx.HTTPError as e:
                logger.error("Text assist request failed: %s: %s", type(e).__name__, e)
                raise RemoteCallError() from e

        if response.is_error:
            logger.error(
                "Text assist returned HTTP %d: %s",
                response.status_code,
                response.text[:LOG_BODY_LIMIT],
            )
            raise RemoteCallError()

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(
                "Malformed text assist response (%s): %s",
                type(e).__name__,
                response.text[:LOG_BODY_LIMIT],
            )
            raise RemoteCallError() from e

        if not isinstance(content, str) or not content.strip():
            logger.error("Text assist returned an empty completion")
            raise RemoteCallError()

        return content
