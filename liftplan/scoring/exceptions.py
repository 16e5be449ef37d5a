"""Exception hierarchy for exercise scoring.

Exception Hierarchy:
- ScoringException (base)
  - ScoringError (a scoring factor failed for one exercise)

Example:
    try:
        scores = scorer.score_all(exercises, context)
    except ScoringError as e:
        logger.error(f"Scoring failed for {e.exercise_name}: {e}")
"""

from __future__ import annotations


class ScoringException(Exception):
    """Base exception for all scoring-related errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        return self.message


class ScoringError(ScoringException):
    """Raised when a scoring factor fails to evaluate for an exercise.

    The original exception is chained as ``__cause__``.

    Example:
        ```python
        try:
            points, reason = factor.evaluate(exercise, context)
        except Exception as e:
            raise ScoringError(
                f"Factor 'recovery' failed: {e}",
                exercise_name=exercise.name,
                factor="recovery",
            ) from e
        ```
    """

    def __init__(
        self,
        message: str,
        exercise_name: str,
        factor: str | None = None,
        details: dict | None = None,
    ) -> None:
        merged = {"exercise": exercise_name, "factor": factor}
        merged.update(details or {})
        super().__init__(message, merged)
        self.exercise_name = exercise_name
        self.factor = factor
