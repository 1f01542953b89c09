from .hosted_llm import HostedInferenceProvider
from .local_llm import LocalInferenceProvider
from .models import (
    AUTH,
    DISABLED,
    FAILURE_KINDS,
    MALFORMED,
    NETWORK,
    TIMEOUT,
    GenerationOutcome,
    ProviderFailure,
    ProviderResult,
    StageAttempt,
)
from .orchestrator import ProviderOrchestrator, build_registry
from .registry import Provider, ProviderRegistry
from .rule_based import RuleBasedProvider
from .settings import ProviderSettings

__all__ = [
    "AUTH",
    "DISABLED",
    "FAILURE_KINDS",
    "MALFORMED",
    "NETWORK",
    "TIMEOUT",
    "GenerationOutcome",
    "HostedInferenceProvider",
    "LocalInferenceProvider",
    "Provider",
    "ProviderFailure",
    "ProviderOrchestrator",
    "ProviderRegistry",
    "ProviderResult",
    "RuleBasedProvider",
    "StageAttempt",
    "ProviderSettings",
    "build_registry",
]
