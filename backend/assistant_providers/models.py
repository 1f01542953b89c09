from __future__ import annotations

from dataclasses import dataclass, field


AUTH = "auth"
NETWORK = "network"
TIMEOUT = "timeout"
MALFORMED = "malformed"
DISABLED = "disabled"

FAILURE_KINDS = {AUTH, NETWORK, TIMEOUT, MALFORMED, DISABLED}


class ProviderFailure(Exception):
    """Raised inside a provider stage; never leaves the orchestrator."""

    def __init__(self, kind: str, detail: str = "") -> None:
        if kind not in FAILURE_KINDS:
            raise ValueError(f"Unknown provider failure kind: {kind}")
        super().__init__(f"{kind}: {detail}" if detail else kind)
        self.kind = kind
        self.detail = detail


@dataclass(frozen=True)
class ProviderResult:
    text: str | None = None
    failure: str | None = None

    @classmethod
    def success(cls, text: str) -> ProviderResult:
        return cls(text=text)

    @classmethod
    def failed(cls, kind: str) -> ProviderResult:
        return cls(failure=kind)

    @property
    def ok(self) -> bool:
        return self.failure is None and bool(self.text)


@dataclass(frozen=True)
class StageAttempt:
    provider: str
    result: ProviderResult


@dataclass
class GenerationOutcome:
    text: str
    provider: str
    attempts: list[StageAttempt] = field(default_factory=list)

    def failures(self) -> dict[str, str]:
        return {
            attempt.provider: attempt.result.failure
            for attempt in self.attempts
            if attempt.result.failure is not None
        }
