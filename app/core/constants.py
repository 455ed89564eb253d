"""
Centralized constants and enums for the quiz service.

Structure sizes, request bounds, score tiers and the canned fallback
content all live here so the contracts and the fallbacks cannot drift apart.
"""

from enum import Enum
from typing import Dict, List, Tuple


# ============================================================================
# Structure Contract Sizes
# ============================================================================

QUESTION_COUNT = 5
CHOICE_COUNT = 4
FEEDBACK_MAX_CHARS = 300

TOPIC_MIN_LENGTH = 2
TOPIC_MAX_LENGTH = 60
SCORE_MIN = 0
SCORE_MAX = QUESTION_COUNT


# ============================================================================
# Conversation Roles
# ============================================================================

class TurnRole(str, Enum):
    """Roles a conversation turn may carry."""
    SYSTEM = "system"
    USER = "user"


REPAIR_INSTRUCTION = "Your previous output was invalid. Return ONLY valid JSON for the schema."


# ============================================================================
# Score Tiers
# ============================================================================

class ScoreTier(str, Enum):
    """Performance tiers used to pick fallback feedback."""
    TOP = "top"
    MID_HIGH = "mid_high"
    MID = "mid"
    LOW = "low"


def get_score_tier(score: int) -> ScoreTier:
    """Map a 0-5 score onto its tier (boundaries inclusive)."""
    if score >= 4:
        return ScoreTier.TOP
    if score == 3:
        return ScoreTier.MID_HIGH
    if score == 2:
        return ScoreTier.MID
    return ScoreTier.LOW


FEEDBACK_TEMPLATES: Dict[ScoreTier, str] = {
    ScoreTier.TOP: "Excellent work on {topic}! You clearly mastered the material.",
    ScoreTier.MID_HIGH: "Nice job on {topic}. Review a few tricky areas and try again.",
    ScoreTier.MID: "You're getting there with {topic}. Revisit the basics and build up.",
    ScoreTier.LOW: "Good start on {topic}. Focus on fundamentals and take another run!",
}

# Shown by clients when the feedback endpoint itself cannot be reached
CLIENT_FEEDBACK_DEFAULT = "Nice effort! Consider revisiting the material and try again."


# ============================================================================
# Fallback Question Set
# ============================================================================

CHOICE_IDS: List[str] = ["a", "b", "c", "d"]

# (question id, question template, choice label, correct choice id)
FALLBACK_QUESTIONS: List[Tuple[str, str, str, str]] = [
    ("q1", "Which statement is true about {topic}?", "Statement", "b"),
    ("q2", "A common misconception about {topic} is?", "Misconception", "a"),
    ("q3", "Best practice related to {topic} includes:", "Practice", "c"),
    ("q4", "A key metric for {topic} is:", "Metric", "b"),
    ("q5", "An application of {topic}:", "Application", "c"),
]
