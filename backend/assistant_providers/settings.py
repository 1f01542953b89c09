from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_PLACEHOLDER_API_KEYS = {"hf_dummy_key_for_now"}

DEFAULT_LOCAL_URL = "http://localhost:11434/api/chat"
DEFAULT_LOCAL_MODEL = "llama2"
DEFAULT_HOSTED_BASE_URL = "https://api-inference.huggingface.co"
DEFAULT_HOSTED_MODEL = "microsoft/BiomedNLP-PubMedBERT-base-uncased-abstract-fulltext"
DEFAULT_PROVIDER_ORDER = ("local", "huggingface")
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_CONTEXT_WINDOW = 6


def _flag(env: Mapping[str, str], names: tuple[str, ...], default: bool) -> bool:
    # An explicit "false" under any alias wins, matching how the legacy
    # controllers each checked their own variable.
    seen_true = False
    for name in names:
        raw = (env.get(name) or "").strip().lower()
        if raw in _FALSE_VALUES:
            return False
        if raw in _TRUE_VALUES:
            seen_true = True
    return True if seen_true else default


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    try:
        value = float(raw) if raw else default
    except ValueError:
        return default
    return value if value > 0 else default


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    try:
        value = int(raw) if raw else default
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class ProviderSettings:
    rule_based_only: bool = False
    local_enabled: bool = True
    local_url: str = DEFAULT_LOCAL_URL
    local_model: str = DEFAULT_LOCAL_MODEL
    hosted_enabled: bool = True
    hosted_api_key: str | None = None
    hosted_base_url: str = DEFAULT_HOSTED_BASE_URL
    hosted_model: str = DEFAULT_HOSTED_MODEL
    provider_order: tuple[str, ...] = DEFAULT_PROVIDER_ORDER
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    context_window: int = DEFAULT_CONTEXT_WINDOW

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> ProviderSettings:
        env = os.environ if env is None else env
        api_key = (env.get("HUGGINGFACE_API_KEY") or "").strip()
        if api_key in _PLACEHOLDER_API_KEYS:
            api_key = ""
        order_raw = (env.get("MEDITRACK_CHAT_PROVIDERS") or "").strip()
        order = tuple(part.strip().lower() for part in order_raw.split(",") if part.strip())
        return cls(
            rule_based_only=_flag(env, ("USE_RULE_BASED_ONLY",), False),
            local_enabled=_flag(env, ("USE_LOCAL_LLM", "LOCAL_LLM_ENABLED"), True),
            local_url=(env.get("LOCAL_LLM_URL") or DEFAULT_LOCAL_URL).strip(),
            local_model=(env.get("LOCAL_LLM_MODEL") or DEFAULT_LOCAL_MODEL).strip(),
            hosted_enabled=_flag(env, ("USE_HUGGINGFACE", "HUGGINGFACE_ENABLED"), True),
            hosted_api_key=api_key or None,
            hosted_base_url=(env.get("HUGGINGFACE_BASE_URL") or DEFAULT_HOSTED_BASE_URL).strip().rstrip("/"),
            hosted_model=(env.get("HUGGINGFACE_MODEL") or DEFAULT_HOSTED_MODEL).strip(),
            provider_order=order or DEFAULT_PROVIDER_ORDER,
            timeout_seconds=_float(env, "MEDITRACK_CHAT_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            context_window=_int(env, "MEDITRACK_CONTEXT_WINDOW", DEFAULT_CONTEXT_WINDOW),
        )
