"""
Unit tests for backend/core/parsers

Tests the Hevy/Strong JSON parsers and the Liftin' CSV parser against the
sample fixtures and hand-written edge cases.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from application.exceptions import ParseError, UnsupportedFormatError
from backend.core.parsers import (
    HevyParser,
    LiftinCsvParser,
    StrongParser,
    build_exercise,
    get_parser,
)
from domain.models import DEFAULT_INSTRUCTIONS, EquipmentType, ImportSource, MuscleGroup
from infrastructure.repositories.exercise_repository import default_exercises

FIXTURES = Path(__file__).parent.parent / "fixtures" / "imports"


def _fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def catalog():
    return default_exercises()


def _by_name(catalog, name):
    return next(e for e in catalog if e.name == name)


# =============================================================================
# Shared helpers
# =============================================================================


@pytest.mark.unit
class TestBuildExercise:
    """Tests for synthesizing exercises from foreign labels."""

    def test_defaults_when_nothing_maps(self):
        exercise = build_exercise("Mystery Move", ["wings"], None, ["sled"])
        assert exercise.primary_muscle_groups == [MuscleGroup.CHEST]
        assert exercise.secondary_muscle_groups == []
        assert exercise.equipment == [EquipmentType.BARBELL]
        assert exercise.instructions == DEFAULT_INSTRUCTIONS
        assert exercise.is_custom is True

    def test_unmapped_labels_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            build_exercise("Mystery Move", ["wings"], None, ["sled"])
        assert "Unmapped muscle group 'wings'" in caplog.text
        assert "Unmapped equipment 'sled'" in caplog.text

    def test_mapped_labels(self):
        exercise = build_exercise("Curl", ["Bis"], ["Forearms"], ["Dumbbell"], "Curl it.")
        assert exercise.primary_muscle_groups == [MuscleGroup.BICEPS]
        assert exercise.secondary_muscle_groups == [MuscleGroup.FOREARMS]
        assert exercise.equipment == [EquipmentType.DUMBBELL]
        assert exercise.instructions == "Curl it."


@pytest.mark.unit
class TestGetParser:
    """Tests for the parser registry."""

    def test_known_sources(self):
        assert isinstance(get_parser(ImportSource.HEVY), HevyParser)
        assert isinstance(get_parser(ImportSource.STRONG), StrongParser)
        assert isinstance(get_parser(ImportSource.LIFTIN), LiftinCsvParser)

    def test_unknown_source(self):
        with pytest.raises(UnsupportedFormatError):
            get_parser(ImportSource.UNKNOWN)


# =============================================================================
# Hevy / Strong JSON
# =============================================================================


@pytest.mark.unit
class TestHevyParser:
    """Tests for the Hevy JSON export."""

    def test_parses_fixture(self, catalog):
        parsed = HevyParser().parse(_fixture("hevy_export.json"), catalog)

        assert len(parsed.workouts) == 1
        workout = parsed.workouts[0]
        assert workout.name == "Push Day"
        assert workout.date == datetime(2024, 3, 1, 18, 0, tzinfo=timezone.utc)
        assert workout.duration == 62
        assert workout.notes == "Felt strong"
        assert workout.is_completed is True
        assert [e.exercise.name for e in workout.exercises] == [
            "Barbell Bench Press",
            "Incline Dumbbell Press",
            "Cable Fly",
        ]

    def test_existing_exercise_is_reused_case_insensitively(self, catalog):
        bench = _by_name(catalog, "Barbell Bench Press")
        parsed = HevyParser().parse(_fixture("hevy_export.json"), catalog)

        assert parsed.workouts[0].exercises[0].exercise_id == bench.id
        assert "barbell bench press" not in [e.name_key for e in parsed.exercises]

    def test_new_exercises_from_list_and_placeholders(self, catalog):
        parsed = HevyParser().parse(_fixture("hevy_export.json"), catalog)

        assert [e.name for e in parsed.exercises] == ["Incline Dumbbell Press", "Cable Fly"]
        incline, cable_fly = parsed.exercises

        assert incline.primary_muscle_groups == [MuscleGroup.CHEST]
        assert incline.secondary_muscle_groups == [MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS]
        assert incline.equipment == [EquipmentType.DUMBBELL]
        assert incline.instructions == "Press the dumbbells up from an incline bench."
        assert incline.is_custom is True

        assert cable_fly.primary_muscle_groups == [MuscleGroup.CHEST]
        assert cable_fly.equipment == [EquipmentType.BARBELL]
        assert cable_fly.instructions == DEFAULT_INSTRUCTIONS
        assert cable_fly.is_custom is True

    def test_sets_are_completed_with_defaults(self, catalog):
        parsed = HevyParser().parse(_fixture("hevy_export.json"), catalog)
        workout = parsed.workouts[0]

        all_sets = [s for entry in workout.exercises for s in entry.sets]
        assert all(s.is_completed for s in all_sets)

        bench_sets = workout.exercises[0].sets
        assert [(s.weight, s.reps, s.rpe) for s in bench_sets] == [(135, 5, 7), (135, 5, 8)]

        cable_fly = workout.exercises[2]
        assert cable_fly.notes == "Slow negatives"
        assert cable_fly.sets[1].weight == 0
        assert cable_fly.sets[1].reps == 12

    def test_entries_reference_their_exercise(self, catalog):
        parsed = HevyParser().parse(_fixture("hevy_export.json"), catalog)
        for entry in parsed.workouts[0].exercises:
            assert entry.exercise_id == entry.exercise.id

    def test_placeholder_is_created_once_per_batch(self):
        content = json.dumps({
            "routines": [],
            "workouts": [
                {"name": "A", "exercises": [{"name": "Sled Push", "sets": [{"reps": 1}]}]},
                {"name": "B", "exercises": [{"name": "SLED PUSH", "sets": [{"reps": 2}]}]},
            ],
        })
        parsed = HevyParser().parse(content, [])

        assert [e.name for e in parsed.exercises] == ["Sled Push"]
        first, second = parsed.workouts
        assert first.exercises[0].exercise_id == second.exercises[0].exercise_id

    def test_workout_defaults(self):
        content = json.dumps({"routines": [], "workouts": [{"exercises": []}]})
        before = datetime.now(timezone.utc)
        parsed = HevyParser().parse(content, [])
        after = datetime.now(timezone.utc)

        workout = parsed.workouts[0]
        assert workout.name == "Imported Workout"
        assert before <= workout.date <= after
        assert workout.duration is None

    def test_epoch_milliseconds_start_time(self):
        content = json.dumps({
            "routines": [],
            "workouts": [{"name": "Legs", "startTime": 1704110400000}],
        })
        parsed = HevyParser().parse(content, [])
        assert parsed.workouts[0].date == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_invalid_json(self):
        with pytest.raises(ParseError) as exc_info:
            HevyParser().parse("{not json", [])
        assert exc_info.value.retryable is True

    def test_top_level_must_be_object(self):
        with pytest.raises(ParseError):
            HevyParser().parse("[]", [])

    def test_structurally_invalid_payload(self):
        content = json.dumps({"routines": [], "workouts": "nope"})
        with pytest.raises(ParseError) as exc_info:
            HevyParser().parse(content, [])
        assert exc_info.value.errors
        assert exc_info.value.errors[0].startswith("workouts")

    def test_negative_reps_are_rejected(self):
        content = json.dumps({
            "routines": [],
            "workouts": [{"exercises": [{"name": "Squat", "sets": [{"reps": -1}]}]}],
        })
        with pytest.raises(ParseError):
            HevyParser().parse(content, [])

    def test_blank_entry_name_is_rejected(self):
        content = json.dumps({
            "routines": [],
            "workouts": [{"exercises": [{"name": "   ", "sets": [{"reps": 5}]}]}],
        })
        with pytest.raises(ParseError) as exc_info:
            HevyParser().parse(content, [])
        assert exc_info.value.errors[0].startswith("workouts.0.exercises.0.name")

    def test_blank_catalog_name_is_rejected(self):
        content = json.dumps({"routines": [], "exercises": [{"name": "\t "}], "workouts": []})
        with pytest.raises(ParseError) as exc_info:
            HevyParser().parse(content, [])
        assert exc_info.value.errors[0].startswith("exercises.0.name")

    def test_padded_names_are_trimmed(self):
        content = json.dumps({
            "routines": [],
            "workouts": [{"name": "  Legs ", "exercises": [{"name": " Sled Push ", "sets": []}]}],
        })
        parsed = HevyParser().parse(content, [])

        assert parsed.workouts[0].name == "Legs"
        assert [e.name for e in parsed.exercises] == ["Sled Push"]


@pytest.mark.unit
class TestStrongParser:
    """Tests for the Strong JSON export."""

    def test_parses_fixture(self, catalog):
        parsed = StrongParser().parse(_fixture("strong_export.json"), catalog)

        workout = parsed.workouts[0]
        assert workout.name == "Pull Day"
        assert workout.date == datetime(2024, 3, 2, tzinfo=timezone.utc)
        assert [e.exercise.name for e in workout.exercises] == ["Romanian Deadlift", "Pull-up"]
        assert workout.exercises[1].exercise_id == _by_name(catalog, "Pull-up").id

    def test_notes_stand_in_for_instructions(self, catalog):
        parsed = StrongParser().parse(_fixture("strong_export.json"), catalog)

        rdl = parsed.exercises[0]
        assert rdl.name == "Romanian Deadlift"
        assert rdl.instructions == "Hinge at the hips with a neutral spine."
        assert rdl.primary_muscle_groups == [MuscleGroup.HAMSTRINGS]
        assert rdl.secondary_muscle_groups == [MuscleGroup.GLUTES]
        assert rdl.equipment == [EquipmentType.BARBELL]

    def test_out_of_range_rpe_is_dropped(self, catalog, caplog):
        with caplog.at_level(logging.WARNING):
            parsed = StrongParser().parse(_fixture("strong_export.json"), catalog)

        rdl_set = parsed.workouts[0].exercises[0].sets[0]
        assert rdl_set.rpe is None
        assert rdl_set.weight == 185
        assert "Dropping out-of-range RPE 11" in caplog.text

    def test_non_numeric_rpe_is_dropped(self):
        content = json.dumps({
            "exportedFromApp": "Strong",
            "workouts": [{"exercises": [{"name": "Row", "sets": [{"reps": 8, "rpe": "hard"}]}]}],
        })
        parsed = StrongParser().parse(content, [])
        assert parsed.workouts[0].exercises[0].sets[0].rpe is None


# =============================================================================
# Liftin' CSV
# =============================================================================


@pytest.mark.unit
class TestLiftinCsvParser:
    """Tests for the Liftin' CSV export."""

    def test_two_rows_become_one_workout(self):
        content = (
            "Date,Exercise,Set,Weight,Reps,RPE\n"
            "2024-01-01,Squat,1,100,5,\n"
            "2024-01-01,Squat,2,105,5,\n"
        )
        parsed = LiftinCsvParser().parse(content, [])

        assert len(parsed.workouts) == 1
        workout = parsed.workouts[0]
        assert workout.name == "Workout 2024-01-01"
        assert workout.date == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert workout.is_completed is True
        assert len(workout.exercises) == 1

        entry = workout.exercises[0]
        assert entry.exercise.name == "Squat"
        assert [(s.weight, s.reps) for s in entry.sets] == [(100, 5), (105, 5)]
        assert all(s.is_completed and s.rpe is None for s in entry.sets)
        assert [e.name for e in parsed.exercises] == ["Squat"]

    def test_parses_fixture(self, catalog):
        parsed = LiftinCsvParser().parse(_fixture("liftin_export.csv"), catalog)

        assert [w.name for w in parsed.workouts] == ["Workout 2024-01-01", "Workout 2024-01-03"]
        first, second = parsed.workouts
        assert [e.exercise.name for e in first.exercises] == ["Squat", "Walking Lunge"]
        assert first.exercises[0].exercise_id == _by_name(catalog, "Squat").id
        assert [(s.weight, s.reps, s.rpe) for s in second.exercises[0].sets] == [
            (200, 10, 8),
            (220, 8, 9),
        ]
        assert [e.name for e in parsed.exercises] == ["Leg Press", "Walking Lunge"]

    def test_non_contiguous_rows_with_same_date_merge(self):
        content = (
            "Date,Exercise,Set,Weight,Reps,RPE\n"
            "2024-01-01,Squat,1,100,5,\n"
            "2024-01-02,Bench,1,80,8,\n"
            "2024-01-01,squat,2,110,3,\n"
        )
        parsed = LiftinCsvParser().parse(content, [])

        assert len(parsed.workouts) == 2
        squat_entry = parsed.workouts[0].exercises[0]
        assert [(s.weight, s.reps) for s in squat_entry.sets] == [(100, 5), (110, 3)]

    def test_malformed_rows_are_skipped(self, caplog):
        content = (
            "Date,Exercise,Set,Weight,Reps,RPE\n"
            "2024-01-01,Squat,1,100\n"
            "2024-01-01,Squat,1,heavy,5,\n"
            "someday,Squat,1,100,5,\n"
            "\n"
            "2024-01-01,Squat,1,100,5,\n"
        )
        with caplog.at_level(logging.WARNING):
            parsed = LiftinCsvParser().parse(content, [])

        assert len(parsed.workouts[0].exercises[0].sets) == 1
        assert "Skipping Liftin' line 2" in caplog.text
        assert "Skipping Liftin' line 3" in caplog.text
        assert "Skipping Liftin' line 4" in caplog.text

    def test_out_of_range_rpe_becomes_none(self):
        content = "Date,Exercise,Set,Weight,Reps,RPE\n2024-01-01,Squat,1,100,5,15\n"
        parsed = LiftinCsvParser().parse(content, [])
        assert parsed.workouts[0].exercises[0].sets[0].rpe is None

    def test_marker_and_header_lines(self):
        content = (
            "Liftin Workout History\n"
            "Date,Exercise,Set,Weight,Reps,RPE\n"
            "2024-01-01,Squat,1,100,5,7.5\n"
        )
        parsed = LiftinCsvParser().parse(content, [])
        assert parsed.workouts[0].exercises[0].sets[0].rpe == 7.5

    def test_zero_valid_rows(self):
        with pytest.raises(ParseError):
            LiftinCsvParser().parse("Date,Exercise,Set,Weight,Reps,RPE\nbad,row\n", [])

    def test_header_only(self):
        with pytest.raises(ParseError):
            LiftinCsvParser().parse("Date,Exercise,Set,Weight,Reps,RPE\n", [])
