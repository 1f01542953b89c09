from __future__ import annotations

from typing import Any

import httpx

from chat_memory import Message

from .http import post_json
from .models import DISABLED, MALFORMED, ProviderFailure
from .prompts import transcript_prompt


MIN_GENERATED_CHARS = 10


def clean_generated_text(generated: str, prompt: str) -> str:
    text = generated
    if text.startswith(prompt):
        text = text[len(prompt):]
    if "Assistant:" in text:
        text = text.split("Assistant:")[-1]
    return text.strip()


def _generated_text(body: Any) -> str | None:
    if isinstance(body, str):
        return body
    if isinstance(body, list) and body and isinstance(body[0], dict):
        value = body[0].get("generated_text")
        return value if isinstance(value, str) else None
    if isinstance(body, dict) and isinstance(body.get("generated_text"), str):
        return body["generated_text"]
    return None


class HostedInferenceProvider:
    name = "huggingface"

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        api_key: str | None,
        timeout_seconds: float,
        enabled: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._enabled = enabled
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._enabled and bool(self.api_key)

    def generate(self, message: str, history: list[Message], extra_context: str | None = None) -> str:
        if not self.api_key:
            raise ProviderFailure(DISABLED, "no hosted API key configured")
        prompt = transcript_prompt(message, history, extra_context)
        payload = {
            "inputs": prompt,
            "parameters": {"max_length": 200, "temperature": 0.7, "top_p": 0.9},
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = post_json(
            f"{self.base_url}/models/{self.model}",
            payload,
            timeout_seconds=self.timeout_seconds,
            headers=headers,
            transport=self._transport,
        )
        generated = _generated_text(body)
        if generated is None:
            raise ProviderFailure(MALFORMED, "unrecognised hosted response shape")
        text = clean_generated_text(generated, prompt)
        if len(text) < MIN_GENERATED_CHARS:
            raise ProviderFailure(MALFORMED, f"generated text too short ({len(text)} chars)")
        return text
