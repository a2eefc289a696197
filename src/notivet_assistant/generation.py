# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from notivet_assistant.config import Settings
from notivet_assistant.exceptions import GenerationFailedError, GenerationUnavailableError
from notivet_assistant.interfaces import TextGenerator


class OpenAIChatGenerator(TextGenerator):
    """
    Text generator backed by an OpenAI-compatible /chat/completions endpoint.
    One request per call, no retries.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o",
        temperature: float = 0.2,
        timeout_s: float = 60.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = (api_key or "").strip() or None
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.client = client or httpx.Client(base_url=self.base_url, timeout=httpx.Timeout(timeout_s))

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIChatGenerator":
        return cls(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            temperature=settings.temperature,
            timeout_s=settings.request_timeout,
        )

    def close(self) -> None:
        self.client.close()

    def complete(self, system_prompt: str, user_content: str) -> str:
        if not self.api_key:
            raise GenerationUnavailableError(
                "Chatbot is not configured on this deployment. Please set OPENAI_API_KEY on the server."
            )

        body: Dict[str, Any] = {
            "model": self.model,
            "temperature": self.temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            resp = self.client.post(f"{self.base_url}/chat/completions", json=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Timed out waiting for chat completion: {e}")
            raise GenerationUnavailableError("Timed out waiting for the generation service") from e
        except httpx.RequestError as e:
            logger.error(f"Generation service unreachable: {e}")
            raise GenerationUnavailableError(f"Generation service unreachable: {e}") from e

        if resp.status_code in (401, 403):
            logger.error(f"Generation service rejected credentials: HTTP {resp.status_code}")
            raise GenerationUnavailableError(f"Generation service unauthorized (HTTP {resp.status_code})")
        if resp.is_error:
            logger.error(f"Generation service error: HTTP {resp.status_code}: {resp.text}")
            raise GenerationFailedError("LLM request failed", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise GenerationFailedError("LLM returned a non-JSON response", status_code=resp.status_code) from e

        first: Any = None
        if isinstance(data, dict):
            choices = data.get("choices") or [{}]
            first = choices[0] if isinstance(choices, list) else None
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(first, dict) or not isinstance(message, (dict, type(None))):
            logger.error(f"Unexpected chat completion payload: {str(data)[:200]}")
            raise GenerationFailedError("LLM returned an unexpected response", status_code=resp.status_code)

        content = (message or {}).get("content") or ""
        return str(content)
