"""
Difficulty feedback rules.

A suggestion fires only when the same extreme difficulty is reported twice
in a row. What to change depends on the user's training goal.
"""

from typing import Optional

from fitness.tracking.models import Difficulty

NO_SUGGESTION = "No changes suggested!"

WEIGHT_STEP_LBS = 5
REPS_STEP = 2

DECREASE_WEIGHT = f"Consider decreasing the weight by {WEIGHT_STEP_LBS} lbs."
DECREASE_REPS = f"Consider decreasing the reps by {REPS_STEP}."
INCREASE_WEIGHT = "Consider increasing the weight."
INCREASE_REPS = "Consider increasing the reps."


def suggest_change(
    goal: str,
    previous: Difficulty,
    current: Difficulty,
) -> Optional[str]:
    """
    Pick a suggestion for two consecutive difficulty reports.

    Args:
        goal: The user's goal ("strength", "muscle", "endurance" or free text)
        previous: Difficulty reported last time
        current: Difficulty reported now

    Returns:
        Suggestion text, or None when nothing should change
    """
    if previous == Difficulty.DIFFICULT and current == Difficulty.DIFFICULT:
        if goal in ("muscle", "endurance"):
            return DECREASE_WEIGHT
        if goal == "strength":
            return DECREASE_REPS
        return None

    if previous == Difficulty.EASY and current == Difficulty.EASY:
        if goal == "strength":
            return INCREASE_WEIGHT
        return INCREASE_REPS

    return None
