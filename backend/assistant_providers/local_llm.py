from __future__ import annotations

from typing import Any

import httpx

from chat_memory import Message

from .http import post_json
from .models import MALFORMED, ProviderFailure
from .prompts import chat_messages


def coerce_local_reply(body: Any) -> str | None:
    """Pull reply text out of the response shapes local servers are known to use.

    Ollama answers with ``message.content``, OpenAI-compatible servers
    (LocalAI, LM Studio) with ``choices[0].message.content`` and simple
    generate endpoints with ``response``.
    """
    if isinstance(body, str):
        return body.strip() or None
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"].strip() or None
    choices = body.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        choice_message = choices[0].get("message")
        if isinstance(choice_message, dict) and isinstance(choice_message.get("content"), str):
            return choice_message["content"].strip() or None
    if isinstance(body.get("response"), str):
        return body["response"].strip() or None
    return None


class LocalInferenceProvider:
    name = "local"

    def __init__(
        self,
        *,
        url: str,
        model: str,
        timeout_seconds: float,
        enabled: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._enabled = enabled
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._enabled

    def generate(self, message: str, history: list[Message], extra_context: str | None = None) -> str:
        payload = {
            "model": self.model,
            "messages": chat_messages(message, history, extra_context),
            "stream": False,
            "options": {"temperature": 0.7, "top_p": 0.9, "max_tokens": 500},
        }
        body = post_json(
            self.url,
            payload,
            timeout_seconds=self.timeout_seconds,
            transport=self._transport,
        )
        text = coerce_local_reply(body)
        if not text:
            raise ProviderFailure(MALFORMED, "unrecognised local response shape")
        return text
