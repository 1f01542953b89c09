from __future__ import annotations

import logging

import httpx

from chat_memory import Message

from .hosted_llm import HostedInferenceProvider
from .local_llm import LocalInferenceProvider
from .models import DISABLED, MALFORMED, GenerationOutcome, ProviderFailure, ProviderResult, StageAttempt
from .registry import Provider, ProviderRegistry
from .rule_based import RuleBasedProvider
from .settings import ProviderSettings


logger = logging.getLogger(__name__)


def build_registry(
    settings: ProviderSettings,
    transport: httpx.BaseTransport | None = None,
) -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.register(
        LocalInferenceProvider(
            url=settings.local_url,
            model=settings.local_model,
            timeout_seconds=settings.timeout_seconds,
            enabled=settings.local_enabled,
            transport=transport,
        )
    )
    registry.register(
        HostedInferenceProvider(
            base_url=settings.hosted_base_url,
            model=settings.hosted_model,
            api_key=settings.hosted_api_key,
            timeout_seconds=settings.timeout_seconds,
            enabled=settings.hosted_enabled,
            transport=transport,
        )
    )
    registry.register(RuleBasedProvider())
    for alias, target in {
        "ollama": "local",
        "local_llm": "local",
        "hf": "huggingface",
        "hosted": "huggingface",
        "rule": "rules",
        "rule_based": "rules",
    }.items():
        registry.add_alias(alias, target)
    return registry


class ProviderOrchestrator:
    """Walks the network stages in order and ends at the rule-based stage.

    Stages are tried one after another, never in parallel. A failing stage is
    logged with its failure kind and the next one is tried; the terminal
    rule-based stage cannot fail, so ``generate`` always returns text.
    """

    def __init__(
        self,
        settings: ProviderSettings,
        registry: ProviderRegistry | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.registry = registry or build_registry(settings, transport=transport)
        self.terminal: Provider = self.registry.resolve("rules")
        self.stages = self._network_stages()

    def _network_stages(self) -> list[Provider]:
        if self.settings.rule_based_only:
            return []
        stages: list[Provider] = []
        for name in self.settings.provider_order:
            try:
                provider = self.registry.resolve(name)
            except KeyError:
                logger.warning(
                    "ignoring unknown chat provider %r (registered: %s)",
                    name,
                    ", ".join(self.registry.list_names()),
                )
                continue
            if provider is self.terminal or provider in stages:
                continue
            stages.append(provider)
        return stages

    def stage_names(self) -> list[str]:
        return [stage.name for stage in self.stages if stage.enabled] + [self.terminal.name]

    def attempt(
        self,
        provider: Provider,
        message: str,
        history: list[Message],
        extra_context: str | None = None,
    ) -> ProviderResult:
        if not provider.enabled:
            logger.debug("chat provider %s skipped (disabled)", provider.name)
            return ProviderResult.failed(DISABLED)
        try:
            text = provider.generate(message, history, extra_context)
        except ProviderFailure as exc:
            logger.warning("chat provider %s failed (%s): %s", provider.name, exc.kind, exc.detail)
            return ProviderResult.failed(exc.kind)
        except Exception:
            logger.exception("chat provider %s raised unexpectedly", provider.name)
            return ProviderResult.failed(MALFORMED)
        if not text or not text.strip():
            logger.warning("chat provider %s returned an empty reply", provider.name)
            return ProviderResult.failed(MALFORMED)
        return ProviderResult.success(text.strip())

    def run(
        self,
        message: str,
        history: list[Message] | None = None,
        extra_context: str | None = None,
    ) -> GenerationOutcome:
        history = list(history or [])
        attempts: list[StageAttempt] = []
        for provider in self.stages:
            result = self.attempt(provider, message, history, extra_context)
            attempts.append(StageAttempt(provider.name, result))
            if result.ok and result.text:
                logger.info("chat provider used (%s)", provider.name)
                return GenerationOutcome(text=result.text, provider=provider.name, attempts=attempts)

        text = self.terminal.generate(message, history, extra_context)
        attempts.append(StageAttempt(self.terminal.name, ProviderResult.success(text)))
        logger.info("chat provider used (%s)", self.terminal.name)
        return GenerationOutcome(text=text, provider=self.terminal.name, attempts=attempts)

    def generate(
        self,
        message: str,
        history: list[Message] | None = None,
        extra_context: str | None = None,
    ) -> str:
        return self.run(message, history, extra_context).text
