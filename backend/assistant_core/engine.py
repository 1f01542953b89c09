from __future__ import annotations

import logging

from assistant_providers import ProviderOrchestrator
from chat_memory import ConversationStore, Message

from .classifier import IntentClassifier
from .composer import ResponseComposer
from .errors import ChatValidationError
from .knowledge import APOLOGY_MESSAGE, WELCOME_MESSAGE
from .models import FAREWELL, GREETING, TOPIC, Classification
from .navigation import extract_redirect_target


logger = logging.getLogger(__name__)

DEFAULT_CONVERSATION_ID = "default-conversation"
MAX_CONVERSATION_ID_LENGTH = 128


def normalize_conversation_id(conversation_id: str | None) -> str:
    if conversation_id is None:
        return DEFAULT_CONVERSATION_ID
    candidate = conversation_id.strip()
    if not candidate:
        raise ChatValidationError("Conversation ID is required")
    if len(candidate) > MAX_CONVERSATION_ID_LENGTH:
        raise ChatValidationError("Conversation ID is too long")
    return candidate


class ChatEngine:
    """One chat turn: store, redirect check, classify, generate, compose, store.

    The engine owns no conversation data itself; everything is kept in the
    injected ``ConversationStore``.
    """

    def __init__(
        self,
        *,
        store: ConversationStore,
        orchestrator: ProviderOrchestrator,
        classifier: IntentClassifier | None = None,
        composer: ResponseComposer | None = None,
    ) -> None:
        self.store = store
        self.orchestrator = orchestrator
        self.classifier = classifier or IntentClassifier()
        self.composer = composer or ResponseComposer()

    @property
    def rule_based_only(self) -> bool:
        return self.orchestrator.settings.rule_based_only

    @property
    def context_window(self) -> int:
        return self.orchestrator.settings.context_window

    def respond(self, conversation_id: str | None, message: str | None, context: str | None = None) -> Message:
        if not isinstance(message, str) or not message.strip():
            raise ChatValidationError("Message is required")
        conversation_id = normalize_conversation_id(conversation_id)

        user_turn = self.store.append(
            conversation_id,
            Message(role="user", content=message, timestamp=self.composer.clock()),
        )
        window = self.store.recent_window(conversation_id, self.context_window + 1)
        history = [turn for turn in window if turn is not user_turn][-self.context_window:]

        try:
            reply = self._reply(message, history, context)
        except Exception:
            logger.exception("chat composition failed for conversation %s", conversation_id)
            reply = Message(role="assistant", content=APOLOGY_MESSAGE, timestamp=self.composer.clock())
        return self.store.append(conversation_id, reply)

    def _reply(self, message: str, history: list[Message], context: str | None) -> Message:
        target = extract_redirect_target(message)
        if target is not None:
            logger.info("redirect request resolved to %s", target.value)
            return self.composer.compose(Classification.navigation(target), "", target)

        classification = self.classifier.classify(message)
        logger.info("chat turn classified as %s: %.80s", classification.label(), message)
        if classification.is_navigation:
            return self.composer.compose(classification, "", classification.feature)
        return self.composer.compose(classification, self.reply_text(classification, message, history, context))

    def reply_text(
        self,
        classification: Classification,
        message: str,
        history: list[Message],
        context: str | None = None,
    ) -> str:
        if classification.kind in {GREETING, FAREWELL}:
            return self.composer.canned_reply(classification)
        if self.rule_based_only and classification.kind == TOPIC:
            return self.composer.canned_reply(classification)
        return self.orchestrator.generate(message, history, context)

    def conversation(self, conversation_id: str | None) -> list[Message]:
        """Return the conversation, seeding a welcome message when it is empty.

        This is not a pure read: the first read of an empty conversation stores
        the welcome message, later reads return it without adding another.
        """
        conversation_id = normalize_conversation_id(conversation_id)
        return self.store.seed_if_empty(
            conversation_id,
            lambda: Message(role="assistant", content=WELCOME_MESSAGE, timestamp=self.composer.clock()),
        )

    def clear(self, conversation_id: str | None) -> None:
        self.store.clear(normalize_conversation_id(conversation_id))
