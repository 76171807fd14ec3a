"""
credkeep.strength

Password strength estimator. Scores a password from 0 to MAX_SCORE and
maps the score to one of three labels: weak, medium, strong.
"""

import re
from typing import Dict, Union

MAX_SCORE = 9

WEAK = "weak"
MEDIUM = "medium"
STRONG = "strong"
LABELS = (WEAK, MEDIUM, STRONG)


def length_score(password: str) -> int:
    length = len(password)
    if length >= 12:
        return 3
    if length >= 8:
        return 2
    if length >= 6:
        return 1
    return 0


def estimate_strength(password: str) -> Dict[str, Union[int, str]]:
    """
    Score the strength of a password and return both score and label.

    The empty string is a valid input: score 0, label "weak".
    """
    if not password:
        return {"score": 0, "strength": WEAK}

    score = length_score(password)

    # --- Character classes ---
    if re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"[a-z]", password):
        score += 1
    if re.search(r"[0-9]", password):
        score += 1
    if re.search(r"[^A-Za-z0-9]", password):
        score += 2

    # --- Variety ---
    if len(set(password)) >= len(password) * 0.7:
        score += 1

    if score >= 7:
        label = STRONG
    elif score >= 4:
        label = MEDIUM
    else:
        label = WEAK

    return {"score": score, "strength": label}


def strength_percent(value: Union[str, int]) -> int:
    """Meter value (0-100) for a password or an already computed score."""
    score = value if isinstance(value, int) else estimate_strength(value)["score"]
    score = max(0, min(score, MAX_SCORE))
    return int(round(score / MAX_SCORE * 100))
