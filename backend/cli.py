import argparse
import asyncio
import json
import logging
import sys

from application.exceptions import LiftLogError
from application.use_cases import ImportWorkoutsUseCase
from backend.core.progression_service import ProgressionService
from backend.core.stats_service import compute_exercise_stats, find_progress_highlights, format_number
from backend.settings import get_settings
from infrastructure import JsonFileRecordStore, StoreExerciseRepository, StoreWorkoutRepository


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="liftlog", description="LiftLog workout data tools")
    parser.add_argument("--data-dir", help="Record store directory (default: settings.data_dir)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Import a Hevy, Strong or Liftin' export")
    import_parser.add_argument("file", help="Exported file path")

    stats_parser = subparsers.add_parser("stats", help="Show per-workout stats for an exercise")
    stats_parser.add_argument("exercise_id")

    recommend_parser = subparsers.add_parser("recommend", help="Recommend the next session's sets")
    recommend_parser.add_argument("exercise_id")
    return parser


async def _import(args, store, settings) -> None:
    use_case = ImportWorkoutsUseCase(
        StoreExerciseRepository(store, seed_defaults=settings.seed_default_exercises),
        StoreWorkoutRepository(store),
        max_bytes=settings.max_import_bytes,
    )
    result = await use_case.import_from_file(args.file)
    print(f"Imported {len(result.workouts)} workouts and {len(result.exercises)} new exercises from {result.source}")
    for workout in result.workouts:
        print(f"  {workout.date.date().isoformat()}  {workout.name} ({len(workout.exercises)} exercises)")


async def _stats(args, store, settings) -> None:
    workouts = await StoreWorkoutRepository(store).get_completed()
    stats = compute_exercise_stats(workouts, args.exercise_id)
    if not stats:
        print("No completed sets recorded for this exercise")
        return
    for stat in stats:
        print(
            f"{stat.date.date().isoformat()}  volume {format_number(stat.volume, grouping=True)}  "
            f"max {format_number(stat.max_weight)}  e1RM {format_number(stat.e1rm)}  best {stat.best_set}"
        )
    for highlight in find_progress_highlights(stats):
        print(f"New {highlight.metric}: {highlight.value} ({highlight.improvement})")


async def _recommend(args, store, settings) -> None:
    recommendation = await ProgressionService(StoreWorkoutRepository(store)).get_progression_recommendations(
        args.exercise_id
    )
    if recommendation is None:
        print("Not enough history for a recommendation yet")
        return
    print(json.dumps(recommendation.model_dump(mode="json"), indent=2))


COMMANDS = {
    "import": _import,
    "stats": _stats,
    "recommend": _recommend,
}


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = JsonFileRecordStore(args.data_dir or settings.data_dir)
    try:
        asyncio.run(COMMANDS[args.command](args, store, settings))
    except LiftLogError as e:
        print(f"Error: {getattr(e, 'message', str(e))}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
