from __future__ import annotations

import re

from .knowledge import FEATURES, TOPIC_PATTERNS, TOPICS, FeatureEntry, TopicEntry
from .models import Classification


_GREETING_RE = re.compile(r"^(hi|hello|hey|greetings)")
_FAREWELL_RE = re.compile(r"^(bye|goodbye|see you|farewell)")


class IntentClassifier:
    """Keyword classifier for free-text chat input.

    Checks run in a fixed order and the first hit wins: navigation keywords,
    greeting, farewell, literal topic names, topic symptom patterns, fallback.
    Ties between several keywords are settled by table order only.
    """

    def __init__(
        self,
        features: tuple[FeatureEntry, ...] = FEATURES,
        topics: tuple[TopicEntry, ...] = TOPICS,
        topic_patterns: tuple[tuple[re.Pattern[str], str], ...] = TOPIC_PATTERNS,
    ) -> None:
        self.features = features
        self.topics = topics
        self.topic_patterns = topic_patterns

    def classify(self, text: str) -> Classification:
        lowered = (text or "").strip().lower()
        if not lowered:
            return Classification.fallback()

        for feature in self.features:
            if any(keyword in lowered for keyword in feature.keywords):
                return Classification.navigation(feature.id)

        if _GREETING_RE.match(lowered):
            return Classification.greeting()
        if _FAREWELL_RE.match(lowered):
            return Classification.farewell()

        for topic in self.topics:
            if topic.name in lowered:
                return Classification.for_topic(topic.name)
        for pattern, topic_name in self.topic_patterns:
            if pattern.search(lowered):
                return Classification.for_topic(topic_name)

        return Classification.fallback()
