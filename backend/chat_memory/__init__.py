from .conversation_store import MAX_HISTORY, ConversationStore
from .models import Message, NavigationAction

__all__ = [
    "MAX_HISTORY",
    "ConversationStore",
    "Message",
    "NavigationAction",
]
