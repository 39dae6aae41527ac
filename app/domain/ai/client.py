"""
Chat-completion client for the AI suggestion endpoints.

One request per call: no retries, no streaming, no caching. Callers decide
what to do when the call or the parse fails.
"""

import json
import logging
from typing import Any, Optional

import httpx

from ...config import OPENAI_API_KEY, OPENAI_API_URL, OPENAI_MODEL, OPENAI_TIMEOUT
from ...exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CompletionClient:
    def __init__(
        self,
        api_key: Optional[str] = OPENAI_API_KEY,
        api_url: str = OPENAI_API_URL,
        model: str = OPENAI_MODEL,
        timeout: float = OPENAI_TIMEOUT,
    ):
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY missing")
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout

    async def complete(self, prompt: str, temperature: float = 0.2) -> dict:
        """POST the prompt and return the decoded response body."""
        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.api_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": self.model,
                    "temperature": temperature,
                    "messages": [{"role": "user", "content": prompt}],
                },
                timeout=self.timeout,
            )
            return response.json()

    async def complete_json(self, prompt: str) -> Any:
        """JSON payload from the first choice's message content.

        Raises httpx.HTTPError on transport failures and ValueError when the
        content is missing or is not JSON.
        """
        body = await self.complete(prompt)
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError("Completion response has no message content") from e
        if not content:
            raise ValueError("Completion response has empty content")
        return json.loads(content)
