"""
Shared fixtures for compatibility tests.

Provides:
- the reference questionnaire and an engine built on it
- a small fixture questionnaire with round numbers, for boundary tests
- mock answer sets for the reference questionnaire
"""

import pytest

from compatibility.questionnaire import QuestionnaireConfig, reference_config
from compatibility.scoring import CompatibilityEngine


@pytest.fixture
def reference():
    return reference_config()


@pytest.fixture
def engine(reference):
    return CompatibilityEngine(reference)


@pytest.fixture
def mini_dict():
    """Two categories of two questions each; q1 has a symmetric 0.5 pair."""
    return {
        "questions": [
            {"id": 1, "question": "Tea or coffee?", "options": ["Tea", "Coffee", "Mate"]},
            {"id": 2, "question": "Cats or dogs?", "options": ["Cats", "Dogs"]},
            {"id": 3, "question": "Beach or mountains?", "options": ["Beach", "Mountains"]},
            {"id": 4, "question": "Early or late?", "options": ["Early", "Late"]},
        ],
        "question_weights": {1: 2.0},
        "categories": {
            "ALPHA": {"weight": 2.0, "questions": [1, 2], "threshold": 0.5,
                      "description": "First pair"},
            "BETA": {"weight": 1.0, "questions": [3, 4], "threshold": 0.3,
                     "description": "Second pair"},
        },
        "similarities": {
            1: {"Tea-Mate": 0.5, "Mate-Tea": 0.5},
        },
    }


@pytest.fixture
def mini_config(mini_dict):
    return QuestionnaireConfig.from_dict(mini_dict)


@pytest.fixture
def mini_engine(mini_config):
    return CompatibilityEngine(mini_config)


@pytest.fixture
def person_a():
    """Complete, valid answers to the reference questionnaire."""
    return {
        1: "Hiking", 2: "Texting", 3: "Jazz", 4: "Exercise", 5: "Museum",
        6: "Logical", 7: "Time", 8: "City", 9: "Impact", 10: "SmallGroups",
        11: "Systematic", 12: "Dog", 13: "Doing", 14: "Japanese", 15: "Learning",
        16: "Technology", 17: "Openly", 18: "Fall", 19: "Serious", 20: "Mountain",
    }


@pytest.fixture
def person_c():
    """Complete answers sharing nothing with person_a, not even partial credit."""
    return {
        1: "Shopping", 2: "Letters", 3: "Metal", 4: "Food", 5: "Beach",
        6: "Quick", 7: "Gifts", 8: "Desert", 9: "Fame", 10: "Parties",
        11: "Bold", 12: "Reptile", 13: "Watching", 14: "American", 15: "Entertainment",
        16: "Media", 17: "Rarely", 18: "Summer", 19: "Casual", 20: "Cruise",
    }
