"""Exercise scoring."""
from liftplan.scoring.exceptions import ScoringError, ScoringException
from liftplan.scoring.exercise_scorer import (
    ExerciseScore,
    ExerciseScorer,
    ScoringContext,
    ScoringFactor,
    score_exercises,
)

__all__ = [
    "ExerciseScore",
    "ExerciseScorer",
    "ScoringContext",
    "ScoringError",
    "ScoringException",
    "ScoringFactor",
    "score_exercises",
]
