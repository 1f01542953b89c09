from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FeatureId(str, Enum):
    DASHBOARD = "dashboard"
    PATIENTS = "patients"
    PATIENT_DETAILS = "patientDetails"
    PRESCRIPTIONS = "prescriptions"
    LAB_REPORTS = "labReports"
    VITALS_ANALYTICS = "vitalsAnalytics"
    APPOINTMENTS = "appointments"
    PROFILE = "profile"
    SETTINGS = "settings"
    HELP = "help"


NAVIGATION = "navigation"
GREETING = "greeting"
FAREWELL = "farewell"
TOPIC = "topic"
FALLBACK = "fallback"

CLASSIFICATION_KINDS = {NAVIGATION, GREETING, FAREWELL, TOPIC, FALLBACK}


@dataclass(frozen=True)
class Classification:
    kind: str
    feature: FeatureId | None = None
    topic: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in CLASSIFICATION_KINDS:
            raise ValueError(f"Unknown classification kind: {self.kind}")
        if self.kind == NAVIGATION and self.feature is None:
            raise ValueError("Navigation classification requires a feature.")
        if self.kind == TOPIC and not self.topic:
            raise ValueError("Topic classification requires a topic name.")

    @classmethod
    def navigation(cls, feature: FeatureId) -> Classification:
        return cls(NAVIGATION, feature=feature)

    @classmethod
    def greeting(cls) -> Classification:
        return cls(GREETING)

    @classmethod
    def farewell(cls) -> Classification:
        return cls(FAREWELL)

    @classmethod
    def for_topic(cls, name: str) -> Classification:
        return cls(TOPIC, topic=name)

    @classmethod
    def fallback(cls) -> Classification:
        return cls(FALLBACK)

    @property
    def is_navigation(self) -> bool:
        return self.kind == NAVIGATION

    @property
    def is_greeting(self) -> bool:
        return self.kind == GREETING

    def label(self) -> str:
        if self.kind == NAVIGATION and self.feature is not None:
            return f"navigation:{self.feature.value}"
        if self.kind == TOPIC and self.topic:
            return f"topic:{self.topic}"
        return self.kind
