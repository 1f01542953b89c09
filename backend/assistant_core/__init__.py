from .classifier import IntentClassifier
from .composer import ResponseComposer, time_of_day_salutation
from .engine import DEFAULT_CONVERSATION_ID, ChatEngine, normalize_conversation_id
from .errors import AssistantError, ChatValidationError
from .models import Classification, FeatureId
from .navigation import extract_redirect_target

__all__ = [
    "DEFAULT_CONVERSATION_ID",
    "AssistantError",
    "ChatEngine",
    "ChatValidationError",
    "Classification",
    "FeatureId",
    "IntentClassifier",
    "ResponseComposer",
    "extract_redirect_target",
    "normalize_conversation_id",
    "time_of_day_salutation",
]
