# File: assistant.py
"""Text-completion client for the StudyQuest chat assistant.

Talks to an OpenAI-compatible chat-completions endpoint (Groq by default)
over Home Assistant's shared aiohttp session. One prompt in, one completion
string out; every transport or decode failure is raised as AssistantError.
"""

from __future__ import annotations

from typing import Any

import aiohttp

from . import const
from .engines.reward_engine import StudyQuestError


class AssistantError(StudyQuestError):
    """Raised when the completion request fails or cannot be decoded."""


class AssistantClient:
    """Minimal chat-completions client."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str | None,
        model: str = const.DEFAULT_ASSISTANT_MODEL,
        endpoint: str = const.DEFAULT_ASSISTANT_ENDPOINT,
    ) -> None:
        """Initialize the client.

        Args:
            session: aiohttp session used for requests.
            api_key: Bearer token for the endpoint.
            model: Model name sent with each request.
            endpoint: Full chat-completions URL.
        """
        self._session = session
        self._api_key = api_key
        self.model = model
        self.endpoint = endpoint

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": const.ASSISTANT_TEMPERATURE,
            "max_tokens": const.ASSISTANT_MAX_TOKENS,
        }

    async def async_send_message(self, prompt: str) -> str:
        """Send prompt and return the completion text.

        Raises:
            AssistantError: No API key, HTTP/transport error, or unexpected body
        """
        if not self._api_key:
            raise AssistantError("Assistant API key is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        try:
            async with self._session.post(
                self.endpoint,
                json=self._build_payload(prompt),
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=const.ASSISTANT_TIMEOUT_SECONDS),
            ) as response:
                response.raise_for_status()
                body = await response.json(content_type=None)
        except aiohttp.ClientResponseError as err:
            raise AssistantError(f"HTTP {err.status}: {err.message}") from err
        except (aiohttp.ClientError, TimeoutError) as err:
            raise AssistantError(str(err) or err.__class__.__name__) from err
        except ValueError as err:
            raise AssistantError(f"Invalid response body: {err}") from err

        return self._extract_content(body)

    @staticmethod
    def _extract_content(body: Any) -> str:
        """Return choices[0].message.content, or the fallback reply when absent."""
        if not isinstance(body, dict) or not isinstance(body.get("choices"), list):
            raise AssistantError("Invalid response body: missing 'choices'")
        choices = body["choices"]
        if not choices:
            return const.ASSISTANT_FALLBACK_REPLY
        try:
            content = choices[0]["message"]["content"]
        except (KeyError, TypeError) as err:
            raise AssistantError(f"Invalid response body: {err}") from err
        if not isinstance(content, str):
            raise AssistantError("Invalid response body: content is not text")
        return content
