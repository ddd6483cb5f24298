"""
Exercise reconciliation for imports.

Incoming exercises are deduplicated against the catalog by case-insensitive
exact name. A name seen for the first time registers the candidate in an
in-memory working set, so later occurrences within the same import batch
resolve to the same new exercise instead of creating near-duplicates.
"""
import logging
from typing import Dict, Iterable, List, Optional

from domain.models import Exercise

logger = logging.getLogger(__name__)


class ExerciseReconciler:
    """
    Working catalog for one import run.

    Examples:
        >>> reconciler = ExerciseReconciler(existing_catalog)
        >>> squat = reconciler.reconcile(Exercise(name="Squat"))
        >>> reconciler.reconcile(Exercise(name="SQUAT")) is squat
        True
    """

    def __init__(self, catalog: Iterable[Exercise]):
        """
        Initialize with the stored catalog.

        Args:
            catalog: Existing exercises; the first of any duplicate names wins
        """
        self._by_name: Dict[str, Exercise] = {}
        for exercise in catalog:
            self._by_name.setdefault(exercise.name_key, exercise)
        self._created: List[Exercise] = []

    def find(self, name: str) -> Optional[Exercise]:
        """Look up a catalog or newly created exercise by name."""
        return self._by_name.get(name.strip().lower())

    def reconcile(self, candidate: Exercise) -> Exercise:
        """
        Resolve a candidate exercise against the working catalog.

        Args:
            candidate: Exercise synthesized from import data

        Returns:
            The matching existing exercise, or the candidate registered as a
            new custom exercise
        """
        existing = self.find(candidate.name)
        if existing is not None:
            return existing

        created = candidate if candidate.is_custom else candidate.model_copy(update={"is_custom": True})
        self._by_name[created.name_key] = created
        self._created.append(created)
        logger.debug(f"Registered new exercise '{created.name}' ({created.id})")
        return created

    @property
    def created(self) -> List[Exercise]:
        """Exercises created during this run, in creation order."""
        return list(self._created)
