"""
Statistics for exercise progress tracking.

This module computes derived metrics from raw set data:
- Estimated 1RM using the Epley formula
- Per-exercise stats for each workout (volume, max weight, e1RM, best set)
- Per-workout totals
- Progress highlights comparing the latest session to earlier ones

Only completed sets count towards any metric.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List

from domain.models import Workout

logger = logging.getLogger(__name__)

WEIGHT_UNIT = "lbs"


# =============================================================================
# Formulas and formatting
# =============================================================================


def calculate_1rm_epley(weight: float, reps: int) -> float:
    """
    Calculate estimated 1RM using Epley formula.

    Formula: 1RM = weight * (1 + reps/30)

    Args:
        weight: Weight lifted
        reps: Number of reps completed

    Returns:
        Estimated 1RM
    """
    return weight * (1.0 + reps / 30.0)


def round_half_up(value: float, step: float = 1.0) -> float:
    """Round to the nearest multiple of `step`, with halves rounded up."""
    return math.floor(value / step + 0.5) * step


def format_number(value: float, grouping: bool = False) -> str:
    """
    Render a number for display without a trailing `.0`.

    Examples:
        >>> format_number(135.0)
        '135'
        >>> format_number(102.5)
        '102.5'
        >>> format_number(1025, grouping=True)
        '1,025'
    """
    fmt = ",.2f" if grouping else ".2f"
    text = format(round(value, 2), fmt)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class ExerciseStat:
    """Metrics for one exercise within one workout."""
    date: datetime
    volume: float
    max_weight: float
    e1rm: float
    best_set: str  # "{weight} × {reps}" of the set with the highest e1RM


@dataclass
class WorkoutStats:
    """Totals for a whole workout."""
    total_volume: float
    completed_sets: int
    total_reps: int
    exercise_count: int  # entries with at least one completed set


@dataclass
class ProgressHighlight:
    """An improvement of the latest session over every earlier one."""
    metric: str
    value: str
    improvement: str


# =============================================================================
# Computations
# =============================================================================


def compute_exercise_stats(workouts: Iterable[Workout], exercise_id: str) -> List[ExerciseStat]:
    """
    Compute per-workout stats for one exercise.

    Workouts without a completed set of the exercise are left out rather
    than reported as zeros.

    Args:
        workouts: Workouts to scan, in any order
        exercise_id: Exercise to compute stats for

    Returns:
        One ExerciseStat per qualifying workout, ascending by date
    """
    stats: List[ExerciseStat] = []
    for workout in sorted(workouts, key=lambda w: w.date):
        entry = workout.entry_for(exercise_id)
        if entry is None:
            continue
        completed = entry.completed_sets
        if not completed:
            continue

        best_e1rm, best_weight, best_reps = 0.0, 0.0, 0
        for s in completed:
            e1rm = calculate_1rm_epley(s.weight, s.reps)
            if e1rm > best_e1rm:
                best_e1rm, best_weight, best_reps = e1rm, s.weight, s.reps

        stats.append(ExerciseStat(
            date=workout.date,
            volume=sum(s.volume for s in completed),
            max_weight=max(s.weight for s in completed),
            e1rm=best_e1rm,
            best_set=f"{format_number(best_weight)} × {best_reps}",
        ))

    logger.debug(f"Computed {len(stats)} stats for exercise {exercise_id}")
    return stats


def compute_workout_stats(workout: Workout) -> WorkoutStats:
    """Sum volume, sets and reps over the completed sets of a workout."""
    completed = [s for entry in workout.exercises for s in entry.completed_sets]
    return WorkoutStats(
        total_volume=sum(s.volume for s in completed),
        completed_sets=len(completed),
        total_reps=sum(s.reps for s in completed),
        exercise_count=sum(1 for entry in workout.exercises if entry.has_completed_sets),
    )


def find_progress_highlights(stats: List[ExerciseStat]) -> List[ProgressHighlight]:
    """
    Compare the latest stat to the best of all earlier stats.

    Args:
        stats: Output of compute_exercise_stats (ascending by date)

    Returns:
        Highlights for volume, max weight and estimated 1RM that improved;
        empty with fewer than 2 stats
    """
    if len(stats) < 2:
        return []

    latest, earlier = stats[-1], stats[:-1]
    best_volume = max(s.volume for s in earlier)
    best_weight = max(s.max_weight for s in earlier)
    best_e1rm = max(s.e1rm for s in earlier)

    highlights: List[ProgressHighlight] = []
    if latest.volume > best_volume:
        highlights.append(ProgressHighlight(
            metric="Volume",
            value=f"{format_number(latest.volume, grouping=True)} {WEIGHT_UNIT}",
            improvement=f"+{format_number(latest.volume - best_volume, grouping=True)} {WEIGHT_UNIT}",
        ))
    if latest.max_weight > best_weight:
        highlights.append(ProgressHighlight(
            metric="Max Weight",
            value=f"{format_number(latest.max_weight)} {WEIGHT_UNIT}",
            improvement=f"+{format_number(latest.max_weight - best_weight)} {WEIGHT_UNIT}",
        ))
    if latest.e1rm > best_e1rm:
        highlights.append(ProgressHighlight(
            metric="Est. 1RM",
            value=f"{format_number(round_half_up(latest.e1rm))} {WEIGHT_UNIT}",
            improvement=f"+{format_number(round_half_up(latest.e1rm - best_e1rm))} {WEIGHT_UNIT}",
        ))
    return highlights
