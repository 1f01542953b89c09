from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .time_utils import to_iso, utc_now


MESSAGE_ROLES = {"user", "assistant"}


@dataclass(frozen=True)
class NavigationAction:
    target: str
    type: str = "navigate"

    def as_dict(self) -> dict[str, str]:
        return {"type": self.type, "target": self.target}


@dataclass(frozen=True)
class Message:
    role: str
    content: str
    timestamp: datetime = field(default_factory=utc_now)
    navigation_action: NavigationAction | None = None

    def __post_init__(self) -> None:
        if self.role not in MESSAGE_ROLES:
            raise ValueError(f"Unsupported message role: {self.role}")
        if self.role == "user" and not self.content.strip():
            raise ValueError("User messages must not be empty.")
        if self.navigation_action is not None and self.role != "assistant":
            raise ValueError("Only assistant messages can carry a navigation action.")

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "role": self.role,
            "content": self.content,
            "timestamp": to_iso(self.timestamp),
        }
        if self.navigation_action is not None:
            payload["navigationAction"] = self.navigation_action.as_dict()
        return payload
