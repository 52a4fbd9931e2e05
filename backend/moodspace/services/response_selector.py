"""
Canned supportive responses keyed by mood keyword.
"""
import random
from typing import Dict, List, Optional

RESPONSES: Dict[str, List[str]] = {
    "happy": [
        "Your energy feels light today. Stay present and enjoy it.",
        "Joy is a signal — notice what created it.",
    ],
    "sad": [
        "It’s okay to slow down. Emotions move like waves.",
        "Give yourself permission to rest and reflect.",
    ],
    "anxious": [
        "Take one slow breath. You are safe in this moment.",
        "Focus on what is within your control right now.",
    ],
    "calm": [
        "Stillness is strength. Let this moment expand.",
    ],
    "angry": [
        "Strong emotions carry information. Listen before reacting.",
    ],
    "lost": [
        "Not knowing is part of becoming. Stay curious.",
    ],
}

FALLBACK_RESPONSE = "Observe your feelings gently."


def select_response(mood: str, rng: Optional[random.Random] = None) -> str:
    """
    Pick a supportive message for a mood keyword.

    Known keywords get one of their candidates, chosen uniformly at random;
    anything else gets FALLBACK_RESPONSE.
    """
    candidates = RESPONSES.get(mood)
    if not candidates:
        return FALLBACK_RESPONSE
    return (rng or random).choice(candidates)
