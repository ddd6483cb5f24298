"""
Taxonomy mapping for foreign muscle and equipment vocabulary.

Lookups are case-insensitive exact matches against the static synonym table
in shared/dictionaries/taxonomy.yaml. There is no partial or fuzzy matching:
an unrecognized label maps to None and callers decide on a fallback.
"""
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from domain.models import EquipmentType, MuscleGroup
from shared.dictionaries import load_dictionary

logger = logging.getLogger(__name__)


@dataclass
class TaxonomyMapping:
    """Result of mapping a batch of foreign labels."""
    values: List = field(default_factory=list)  # de-duplicated, first-seen order
    unmapped: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every label was recognized."""
        return not self.unmapped


@lru_cache
def _muscle_table() -> Dict[str, MuscleGroup]:
    table = load_dictionary("taxonomy")["muscle_groups"]
    return {k.lower(): MuscleGroup(v) for k, v in table.items()}


@lru_cache
def _equipment_table() -> Dict[str, EquipmentType]:
    table = load_dictionary("taxonomy")["equipment"]
    return {k.lower(): EquipmentType(v) for k, v in table.items()}


def _key(label: object) -> Optional[str]:
    if not isinstance(label, str):
        return None
    return label.strip().lower()


def map_muscle_group(label: str) -> Optional[MuscleGroup]:
    """
    Map a foreign muscle label (e.g. "Pecs", "quadriceps femoris").

    Args:
        label: Label from a third-party export

    Returns:
        The internal MuscleGroup, or None if the label is not in the table
    """
    key = _key(label)
    return _muscle_table().get(key) if key else None


def map_equipment(label: str) -> Optional[EquipmentType]:
    """
    Map a foreign equipment label (e.g. "EZ Bar", "band").

    Args:
        label: Label from a third-party export

    Returns:
        The internal EquipmentType, or None if the label is not in the table
    """
    key = _key(label)
    return _equipment_table().get(key) if key else None


def _map_all(labels: Optional[Iterable[str]], mapper) -> TaxonomyMapping:
    result = TaxonomyMapping()
    for label in labels or []:
        mapped = mapper(label)
        if mapped is None:
            result.unmapped.append(str(label))
        elif mapped not in result.values:
            result.values.append(mapped)
    return result


def map_muscle_groups(labels: Optional[Iterable[str]]) -> TaxonomyMapping:
    """Map several muscle labels, reporting the ones that were not recognized."""
    return _map_all(labels, map_muscle_group)


def map_equipment_list(labels: Optional[Iterable[str]]) -> TaxonomyMapping:
    """Map several equipment labels, reporting the ones that were not recognized."""
    return _map_all(labels, map_equipment)
