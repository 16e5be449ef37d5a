"""Constants for exercise scoring.

Reason strings shown to the user next to each pick, factor names used in
score breakdowns, and time conversion.
"""

from __future__ import annotations

# =============================================================================
# Factor Names
# =============================================================================

class ScoringFactors:
    """Keys of ``ExerciseScore.breakdown``, in evaluation order."""

    TARGET = "target"
    RECOVERY = "recovery"
    COMPLETION = "completion"
    COMPOUND = "compound"
    FAMILIARITY = "familiarity"
    FOCUS = "focus"
    STRATEGY = "strategy"

    ALL = (TARGET, RECOVERY, COMPLETION, COMPOUND, FAMILIARITY, FOCUS, STRATEGY)


# =============================================================================
# Reason Strings
# =============================================================================

class ScoringReasons:
    """Human-readable reasons attached to scores (display only)."""

    TARGETS = "Targets {muscles}"
    FULLY_RECOVERED = "Fully recovered"
    FULLY_RECOVERED_DAYS = "Fully recovered ({days}d rest)"
    ADEQUATE_RECOVERY = "Adequate recovery"
    RECENTLY_TRAINED = "Recently trained"
    HIGH_SUCCESS_RATE = "High success rate"
    COMPOUND = "Compound movement"
    FAMILIAR = "You do this often"
    STRENGTH_PRIORITY = "Strength priority"
    ADDS_MOBILITY = "Adds mobility work"
    MOBILITY_PRIORITY = "Mobility priority"
    DELOAD_EFFICIENT = "Efficient for deload"
    BALANCING_VOLUME = "Balancing weekly volume"


# =============================================================================
# Time
# =============================================================================

class TimeConstants:
    SECONDS_PER_DAY = 86400.0
