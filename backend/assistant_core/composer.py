from __future__ import annotations

import random
from collections.abc import Callable
from datetime import datetime

from chat_memory import Message, NavigationAction
from chat_memory.time_utils import local_now

from .knowledge import FAREWELLS, FEATURES_BY_ID, GREETINGS, TOPICS_BY_NAME
from .models import FAREWELL, GREETING, TOPIC, Classification, FeatureId


def time_of_day_salutation(moment: datetime) -> str:
    if moment.hour < 12:
        return "Good morning!"
    if moment.hour < 18:
        return "Good afternoon!"
    return "Good evening!"


class ResponseComposer:
    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.rng = rng or random.Random()
        self.clock = clock

    def choose(self, pool: tuple[str, ...]) -> str:
        return self.rng.choice(pool)

    def navigation_phrase(self, feature: FeatureId) -> str:
        return self.choose(FEATURES_BY_ID[feature].phrases)

    def canned_reply(self, classification: Classification) -> str:
        """Pick a knowledge-base reply for classifications that have a pool."""
        if classification.kind == GREETING:
            return self.choose(GREETINGS)
        if classification.kind == FAREWELL:
            return self.choose(FAREWELLS)
        if classification.kind == TOPIC and classification.topic in TOPICS_BY_NAME:
            return self.choose(TOPICS_BY_NAME[classification.topic].replies)
        raise ValueError(f"No canned reply for {classification.label()}")

    def compose(
        self,
        classification: Classification,
        text: str,
        navigation_target: FeatureId | None = None,
    ) -> Message:
        now = self.clock()
        if navigation_target is not None:
            return Message(
                role="assistant",
                content=self.navigation_phrase(navigation_target),
                timestamp=now,
                navigation_action=NavigationAction(target=navigation_target.value),
            )
        if classification.is_greeting:
            text = f"{time_of_day_salutation(now)} {text}"
        return Message(role="assistant", content=text, timestamp=now)
