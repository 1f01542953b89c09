from __future__ import annotations

import pytest

from assistant_core import Classification, FeatureId, IntentClassifier
from assistant_core.models import FALLBACK, FAREWELL, GREETING, NAVIGATION, TOPIC


@pytest.fixture
def classifier() -> IntentClassifier:
    return IntentClassifier()


def test_navigation_keyword_wins(classifier):
    result = classifier.classify("where can I see lab reports")
    assert result == Classification.navigation(FeatureId.LAB_REPORTS)
    assert result.label() == "navigation:labReports"


def test_navigation_ties_follow_table_order(classifier):
    # "patients" is declared before the lab keywords.
    assert classifier.classify("open the patients lab reports").feature == FeatureId.PATIENTS


def test_navigation_matching_is_substring_based(classifier):
    # "latest" contains "test", which belongs to the lab reports feature.
    assert classifier.classify("what is the latest on fever").feature == FeatureId.LAB_REPORTS


@pytest.mark.parametrize("text", ["hello", "HELLO", "Hello", "hi", "hey doc", "Greetings!"])
def test_greetings_are_case_insensitive(classifier, text):
    assert classifier.classify(text).kind == GREETING


@pytest.mark.parametrize("text", ["bye", "Goodbye", "see you tomorrow", "farewell for now"])
def test_farewells(classifier, text):
    assert classifier.classify(text).kind == FAREWELL


def test_greeting_must_start_the_message(classifier):
    assert classifier.classify("well hello").kind != GREETING


def test_literal_topic_name(classifier):
    assert classifier.classify("Is this medication safe?") == Classification.for_topic("medication")


def test_symptom_pattern_maps_to_topic(classifier):
    assert classifier.classify("I have a migraine") == Classification.for_topic("headache")


def test_literal_topic_names_are_checked_before_patterns(classifier):
    # "migraine" would map to headache, but the literal "stress" is seen first.
    assert classifier.classify("my stress gives me a migraine") == Classification.for_topic("stress")


@pytest.mark.parametrize("text", ["", "   ", "qwerty"])
def test_unmatched_text_falls_back(classifier, text):
    result = classifier.classify(text)
    assert result.kind == FALLBACK
    assert result.label() == "fallback"


def test_classification_validation():
    with pytest.raises(ValueError):
        Classification(NAVIGATION)
    with pytest.raises(ValueError):
        Classification(TOPIC)
    with pytest.raises(ValueError):
        Classification("mystery")
