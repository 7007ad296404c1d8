"""Chat-completion client for the optional AI provider.

Talks to any OpenAI-compatible ``/chat/completions`` endpoint. The client is
injected into the analysis and coaching layers; when it is absent or a call
fails, those layers fall back to deterministic output.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Optional

import requests

from tdeecoach.config.settings import Settings
from tdeecoach.errors import ProviderError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class ChatClient:
    """Minimal OpenAI-compatible chat client."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        timeout: float = 25.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    def complete(
        self,
        system: str,
        prompt: str,
        *,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> str:
        """Send one system+user exchange and return the reply text.

        Raises:
            ProviderError: On transport errors, non-2xx responses or an
                empty/malformed payload
        """
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            r = self.session.post(
                f"{self.base_url}/chat/completions",
                headers=headers,
                data=json.dumps(payload),
                timeout=self.timeout,
            )
            r.raise_for_status()
            data = r.json() or {}
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ProviderError(f"Provider returned HTTP {status}", status_code=status) from e
        except (requests.RequestException, ValueError) as e:
            raise ProviderError(f"Provider request failed: {e}") from e

        content = _completion_content(data)
        if not content or not content.strip():
            raise ProviderError("Provider returned an empty completion")
        return content.strip()

    def complete_json(self, system: str, prompt: str, **kwargs: Any) -> dict[str, Any]:
        """Like complete(), but parse the reply as a JSON object.

        Raises:
            ProviderError: If the reply is not a JSON object
        """
        return parse_json_reply(self.complete(system, prompt, **kwargs))


def _completion_content(data: Any) -> Optional[str]:
    """Pull the first choice's message text out of a completion payload."""
    if not isinstance(data, dict):
        raise ProviderError("Provider returned a malformed completion")

    choices = data.get("choices") or [{}]
    if not isinstance(choices, list) or not isinstance(choices[0], dict):
        raise ProviderError("Provider returned a malformed completion")

    message = choices[0].get("message") or {}
    if not isinstance(message, dict):
        raise ProviderError("Provider returned a malformed completion")

    content = message.get("content")
    return content if isinstance(content, str) else None


def parse_json_reply(text: str) -> dict[str, Any]:
    """Parse a model reply that should contain a single JSON object.

    Markdown code fences around the object are tolerated.
    """
    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ProviderError(f"Provider reply is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ProviderError("Provider reply is not a JSON object")
    return parsed


def build_chat_client(settings: Settings) -> Optional[ChatClient]:
    """Create a client from settings, or None when AI is off or unconfigured."""
    if not settings.ai.enabled:
        return None

    api_key = os.getenv(settings.ai.api_key_env)
    if not api_key:
        logger.debug("No API key in $%s; AI features use fallbacks", settings.ai.api_key_env)
        return None

    return ChatClient(
        api_key=api_key,
        base_url=settings.ai.base_url,
        model=settings.ai.model,
        timeout=settings.ai.timeout_seconds,
    )
