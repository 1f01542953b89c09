from __future__ import annotations

import re

from .knowledge import REDIRECT_ALIASES
from .models import FeatureId


# Each template captures the requested destination in the named group
# ``target``. The lazy group is pinned to the end of the utterance so the whole
# remainder is captured, minus a trailing "page"/"section" and punctuation.
_TAIL = r"(?: page| section)?\s*[?.!]*\s*$"
_REDIRECT_TEMPLATES: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"how (?:do i|to|can i) (?:get to|access|find|open|navigate to) (?:the )?(?P<target>.+?)" + _TAIL,
        re.IGNORECASE,
    ),
    re.compile(r"where (?:is|can i find) (?:the )?(?P<target>.+?)" + _TAIL, re.IGNORECASE),
    re.compile(r"take me to (?P<target>.+?)" + _TAIL, re.IGNORECASE),
    re.compile(r"show me (?P<target>.+?)" + _TAIL, re.IGNORECASE),
    re.compile(r"go to (?P<target>.+?)" + _TAIL, re.IGNORECASE),
)


def capture_redirect_phrase(text: str) -> str | None:
    cleaned = (text or "").strip()
    for template in _REDIRECT_TEMPLATES:
        match = template.search(cleaned)
        if match:
            return match.group("target").lower().strip()
    return None


def resolve_feature_alias(
    phrase: str,
    aliases: tuple[tuple[str, FeatureId], ...] = REDIRECT_ALIASES,
) -> FeatureId | None:
    for key, feature in aliases:
        if key == phrase:
            return feature
    for key, feature in aliases:
        if key in phrase:
            return feature
    return None


def extract_redirect_target(text: str) -> FeatureId | None:
    """Resolve an explicit "take me to X" request to a feature.

    Returns ``None`` when the text is not a redirect request or when the
    captured phrase matches no alias.
    """
    phrase = capture_redirect_phrase(text)
    if not phrase:
        return None
    return resolve_feature_alias(phrase)
