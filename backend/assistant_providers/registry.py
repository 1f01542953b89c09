from __future__ import annotations

from typing import Protocol

from chat_memory import Message


class Provider(Protocol):
    name: str

    @property
    def enabled(self) -> bool: ...

    def generate(self, message: str, history: list[Message], extra_context: str | None = None) -> str: ...


class ProviderRegistry:
    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}
        self._aliases: dict[str, str] = {}

    def register(self, provider: Provider) -> None:
        self._providers[provider.name] = provider

    def add_alias(self, alias: str, target: str) -> None:
        self._aliases[alias] = target

    def resolve(self, name: str) -> Provider:
        canonical = self._aliases.get(name, name)
        provider = self._providers.get(canonical)
        if not provider:
            raise KeyError(f"Provider not found: {name}")
        return provider

    def list_names(self) -> list[str]:
        return sorted(self._providers.keys())
