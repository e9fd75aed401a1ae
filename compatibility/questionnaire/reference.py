"""
Reference SNU Hangout dating questionnaire.

20 multiple-choice questions, grouped into four weighted categories:
- CORE_VALUES (2.5, threshold 0.7): stress, decisions, love language,
  success, emotional expression, relationship approach
- LIFESTYLE (2.0, threshold 0.5): weekend, living environment,
  social setting, free time
- INTERESTS (1.5, threshold 0.4): music, ideal date, cuisine, career
- PREFERENCES (1.0, threshold 0.3): communication, problem solving,
  pets, learning, season, vacation

The similarity table gives partial credit for near-miss answers on
communication (2), stress handling (4) and social setting (10). Every
pair is stored in both directions so scores are symmetric.
"""

from functools import lru_cache
from typing import Dict, List, Any

from .schema import QuestionnaireConfig

DATING_QUESTIONS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "question": "What's your ideal weekend activity?",
        "options": ["Reading", "Gaming", "Sports", "Movies", "Traveling", "Cooking",
                    "Music", "Art", "Shopping", "Hiking"]
    },
    {
        "id": 2,
        "question": "How do you prefer to communicate?",
        "options": ["Texting", "Calling", "InPerson", "Email", "VideoChat", "Letters",
                    "Voice Messages"]
    },
    {
        "id": 3,
        "question": "What's your preferred music genre?",
        "options": ["Pop", "Rock", "HipHop", "Classical", "Jazz", "Electronic", "Folk",
                    "Metal", "RnB", "Country"]
    },
    {
        "id": 4,
        "question": "How do you handle stress?",
        "options": ["Exercise", "Meditation", "Sleep", "Talk", "Write", "Music", "Nature",
                    "Food", "Games", "Work"]
    },
    {
        "id": 5,
        "question": "What's your ideal date?",
        "options": ["Dinner", "Movies", "Adventure", "Concert", "Museum", "Park", "Beach",
                    "Cafe", "Sports", "Cooking"]
    },
    {
        "id": 6,
        "question": "How do you make decisions?",
        "options": ["Logical", "Emotional", "Intuitive", "Analytical", "Cautious", "Quick",
                    "Collaborative"]
    },
    {
        "id": 7,
        "question": "What's your love language?",
        "options": ["Touch", "Words", "Gifts", "Time", "Acts", "All"]
    },
    {
        "id": 8,
        "question": "What's your ideal living environment?",
        "options": ["City", "Suburb", "Rural", "Beach", "Mountain", "Forest", "Island",
                    "Desert"]
    },
    {
        "id": 9,
        "question": "How do you view success?",
        "options": ["Wealth", "Impact", "Freedom", "Knowledge", "Fame", "Power", "Balance",
                    "Happiness"]
    },
    {
        "id": 10,
        "question": "What's your preferred social setting?",
        "options": ["Parties", "SmallGroups", "OneOnOne", "Alone", "Family", "Crowds",
                    "Nature", "Online"]
    },
    {
        "id": 11,
        "question": "How do you approach problems?",
        "options": ["Creative", "Systematic", "Collaborative", "Independent", "Cautious",
                    "Bold", "Analytical"]
    },
    {
        "id": 12,
        "question": "What's your ideal pet?",
        "options": ["Dog", "Cat", "Bird", "Fish", "Reptile", "None", "Multiple", "Exotic"]
    },
    {
        "id": 13,
        "question": "How do you prefer to learn?",
        "options": ["Reading", "Watching", "Doing", "Teaching", "Discussion", "Writing",
                    "Experience"]
    },
    {
        "id": 14,
        "question": "What's your preferred cuisine?",
        "options": ["Indian", "Italian", "Chinese", "Japanese", "Mexican", "Thai", "French",
                    "American", "Mediterranean"]
    },
    {
        "id": 15,
        "question": "How do you spend your free time?",
        "options": ["Learning", "Creating", "Relaxing", "Socializing", "Exercise",
                    "Entertainment", "Nature", "Hobbies"]
    },
    {
        "id": 16,
        "question": "What's your ideal career field?",
        "options": ["Technology", "Arts", "Science", "Business", "Healthcare", "Education",
                    "Media"]
    },
    {
        "id": 17,
        "question": "How do you express emotions?",
        "options": ["Openly", "Reserved", "Actions", "Words", "Art", "Music", "Writing",
                    "Rarely"]
    },
    {
        "id": 18,
        "question": "What's your preferred season?",
        "options": ["Spring", "Summer", "Fall", "Winter"]
    },
    {
        "id": 19,
        "question": "How do you approach relationships?",
        "options": ["Casual", "Serious", "Friendship", "Traditional", "Modern", "Spontaneous",
                    "Planned"]
    },
    {
        "id": 20,
        "question": "What's your ideal vacation?",
        "options": ["Beach", "Mountain", "City", "Cruise", "Camping", "Resort", "RoadTrip",
                    "Staycation"]
    },
]

# Simple-scorer weights; questions not listed weigh 1.0
QUESTION_WEIGHTS: Dict[int, float] = {
    # Core values and lifestyle
    4: 2.0,   # stress handling
    6: 2.0,   # decision making
    7: 2.0,   # love language
    9: 2.0,   # view of success
    17: 2.0,  # emotional expression
    19: 2.0,  # relationship approach

    # Personal interests
    1: 1.5,   # weekend activity
    3: 1.5,   # music
    5: 1.5,   # ideal date
    15: 1.5,  # free time

    # General preferences
    2: 1.0,   # communication
    8: 1.0,   # living environment
    10: 1.0,  # social setting
    11: 1.0,  # problem approach
    12: 1.0,  # pets
    13: 1.0,  # learning
    14: 1.0,  # cuisine
    16: 1.0,  # career
    18: 1.0,  # season
    20: 1.0,  # vacation
}

# Declaration order is the order of CompatibilityResult.details
QUESTION_CATEGORIES: Dict[str, Dict[str, Any]] = {
    "CORE_VALUES": {
        "weight": 2.5,
        "questions": [4, 6, 7, 9, 17, 19],
        "threshold": 0.7,
        "description": "Fundamental values and approach to relationships"
    },
    "LIFESTYLE": {
        "weight": 2.0,
        "questions": [1, 8, 10, 15],
        "threshold": 0.5,
        "description": "Daily life and social preferences"
    },
    "INTERESTS": {
        "weight": 1.5,
        "questions": [3, 5, 14, 16],
        "threshold": 0.4,
        "description": "Personal interests and activities"
    },
    "PREFERENCES": {
        "weight": 1.0,
        "questions": [2, 11, 12, 13, 18, 20],
        "threshold": 0.3,
        "description": "General preferences and choices"
    },
}

ANSWER_SIMILARITIES: Dict[int, Dict[str, float]] = {
    2: {  # Communication
        "Texting-VideoChat": 0.8,
        "VideoChat-Texting": 0.8,
        "Calling-VideoChat": 0.9,
        "VideoChat-Calling": 0.9,
        "InPerson-VideoChat": 0.7,
        "VideoChat-InPerson": 0.7,
    },
    10: {  # Social setting
        "Parties-Crowds": 0.8,
        "Crowds-Parties": 0.8,
        "SmallGroups-OneOnOne": 0.7,
        "OneOnOne-SmallGroups": 0.7,
        "Family-SmallGroups": 0.8,
        "SmallGroups-Family": 0.8,
    },
    4: {  # Stress handling
        # "Sports" is not a stress-handling option, so this pair never fires
        "Exercise-Sports": 0.9,
        "Sports-Exercise": 0.9,
        "Meditation-Nature": 0.8,
        "Nature-Meditation": 0.8,
        "Music-Write": 0.7,
        "Write-Music": 0.7,
    },
}


def reference_dict() -> Dict[str, Any]:
    """Reference questionnaire in the layout accepted by QuestionnaireConfig.from_dict."""
    return {
        "questions": DATING_QUESTIONS,
        "question_weights": QUESTION_WEIGHTS,
        "categories": QUESTION_CATEGORIES,
        "similarities": ANSWER_SIMILARITIES
    }


@lru_cache(maxsize=1)
def reference_config() -> QuestionnaireConfig:
    """Build the validated reference questionnaire (once per process)."""
    return QuestionnaireConfig.from_dict(reference_dict())
