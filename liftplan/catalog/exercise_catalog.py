"""
Read-only exercise catalog.

Lookup, search and filter over a fixed list of exercises. Catalogs are built
explicitly and passed to the engine; ``default_catalog()`` returns the
built-in table.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from functools import lru_cache

from liftplan.catalog.default_exercises import DEFAULT_EXERCISES
from liftplan.core.exceptions import NotFoundError, ValidationError
from liftplan.models.enums import Difficulty, Equipment, MuscleGroup
from liftplan.models.exercise import Exercise

logger = logging.getLogger(__name__)


class ExerciseCatalog:
    """Ordered, name-unique collection of exercises.

    Catalog order is significant: it is the tie-breaker everywhere scores
    are sorted.

    Raises:
        ValidationError: If two exercises share a name (case-insensitive).
    """

    def __init__(self, exercises: Iterable[Exercise]):
        self._exercises: tuple[Exercise, ...] = tuple(exercises)
        self._by_key: dict[str, Exercise] = {}
        for exercise in self._exercises:
            if exercise.key in self._by_key:
                raise ValidationError("name", f"duplicate exercise name '{exercise.name}'")
            self._by_key[exercise.key] = exercise

    def __len__(self) -> int:
        return len(self._exercises)

    def __iter__(self):
        return iter(self._exercises)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_key

    def all(self) -> list[Exercise]:
        return list(self._exercises)

    def exact(self, name: str) -> Exercise | None:
        """Case-insensitive exact name match."""
        return self._by_key.get(name.lower())

    def by_name(self, name: str) -> Exercise | None:
        """Exact match first, then the first substring match in either direction."""
        exercise = self.exact(name)
        if exercise is not None:
            return exercise

        normalized = name.strip().lower()
        if not normalized:
            return None
        for candidate in self._exercises:
            if normalized in candidate.key or candidate.key in normalized:
                logger.debug(f"Fuzzy matched '{name}' to '{candidate.name}'")
                return candidate
        return None

    def get(self, name: str) -> Exercise:
        """Exact lookup that raises when the name is unknown.

        Raises:
            NotFoundError: If no exercise has this name.
        """
        exercise = self.exact(name)
        if exercise is None:
            raise NotFoundError("exercise", f"Exercise '{name}' not found", {"name": name})
        return exercise

    def search(self, query: str) -> list[Exercise]:
        """Substring search on names; an empty query returns everything."""
        if not query:
            return self.all()
        normalized = query.lower()
        return [e for e in self._exercises if normalized in e.key]

    def filter(
        self,
        muscles: Iterable[MuscleGroup] = (),
        equipment: Equipment | None = None,
        difficulty: Difficulty | None = None,
        source: Sequence[Exercise] | None = None,
    ) -> list[Exercise]:
        """Filter by muscles (primary or secondary), equipment and difficulty.

        Args:
            muscles: Keep exercises touching any of these; empty keeps all
            equipment: Exact equipment match
            difficulty: Exact difficulty match
            source: Exercises to filter instead of the whole catalog
        """
        filtered = list(source) if source is not None else self.all()
        wanted = set(muscles)

        if wanted:
            filtered = [e for e in filtered if e.targets_any(wanted)]
        if equipment is not None:
            filtered = [e for e in filtered if e.equipment == equipment]
        if difficulty is not None:
            filtered = [e for e in filtered if e.difficulty == difficulty]

        return filtered


@lru_cache
def default_catalog() -> ExerciseCatalog:
    """Catalog of the built-in exercise table."""
    return ExerciseCatalog(DEFAULT_EXERCISES)
