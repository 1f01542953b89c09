from __future__ import annotations

import pytest

from assistant_core import FeatureId, extract_redirect_target
from assistant_core.navigation import capture_redirect_phrase, resolve_feature_alias


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("take me to the lab reports page", FeatureId.LAB_REPORTS),
        ("Take me to the Lab Reports page.", FeatureId.LAB_REPORTS),
        ("go to dashboard", FeatureId.DASHBOARD),
        ("How do I get to the dashboard?", FeatureId.DASHBOARD),
        ("Where is the settings page?", FeatureId.SETTINGS),
        ("where can I find the appointments section", FeatureId.APPOINTMENTS),
        ("show me vital signs", FeatureId.VITALS_ANALYTICS),
        ("Show me my medications", FeatureId.PRESCRIPTIONS),
    ],
)
def test_redirect_requests_resolve_to_features(text, expected):
    assert extract_redirect_target(text) == expected


def test_unknown_destination_is_not_a_redirect():
    assert extract_redirect_target("take me to nowhereland") is None


def test_plain_questions_are_not_redirects():
    assert extract_redirect_target("What is a normal heart rate?") is None
    assert capture_redirect_phrase("What is a normal heart rate?") is None


def test_captured_phrase_drops_page_suffix_and_punctuation():
    assert capture_redirect_phrase("Take me to the Lab Reports page.") == "the lab reports"
    assert capture_redirect_phrase("go to settings!") == "settings"


def test_exact_alias_match():
    assert resolve_feature_alias("vitals analytics") == FeatureId.VITALS_ANALYTICS
    assert resolve_feature_alias("schedule") == FeatureId.APPOINTMENTS
    assert resolve_feature_alias("patient profile") == FeatureId.PATIENT_DETAILS


def test_substring_pass_uses_declaration_order():
    # Both "main" and "patients" appear; "main" is declared first.
    assert resolve_feature_alias("main patients list") == FeatureId.DASHBOARD
