"""
Unit tests for storage addressing.

Table and column names are part of storage queries, so these tests pin the
exact formats and check that nothing out of range or malformed ever gets
through in either direction.
"""

from datetime import datetime, timezone

import pytest

from shred_scheduler.core.addressing import (
    all_table_addresses,
    column_address,
    create_partial_update,
    exercise_name_column,
    exercise_notes_column,
    extract_all_exercises,
    map_columns_to_set,
    map_exercise_sets,
    map_exercise_to_columns,
    map_set_to_columns,
    numeric_columns_for,
    parse_column_address,
    parse_table_address,
    table_address,
    validate_exercise_index,
    validate_set_number,
    validate_week_day,
)
from shred_scheduler.core.errors import FormatError, RangeError
from shred_scheduler.core.models import CurriculumPosition, ExerciseData, SetData, average_weight

ALL_WEEK_DAYS = [(w, d) for w in range(1, 7) for d in range(1, 7)]


# ===========================================================================
# Validation
# ===========================================================================

class TestValidation:

    def test_valid_week_day(self):
        assert validate_week_day(1, 1)
        assert validate_week_day(6, 6)
        assert validate_week_day(3, 4)

    @pytest.mark.parametrize("week, day", [(0, 1), (7, 1), (1, 0), (1, 7), (-1, 3)])
    def test_out_of_range_week_day(self, week, day):
        assert not validate_week_day(week, day)

    @pytest.mark.parametrize("value", [1.5, 2.0, "1", None, True])
    def test_non_integer_week_day(self, value):
        assert not validate_week_day(value, 1)
        assert not validate_week_day(1, value)

    def test_exercise_index_bounds(self):
        assert all(validate_exercise_index(i) for i in range(1, 8))
        assert not validate_exercise_index(0)
        assert not validate_exercise_index(8)
        assert not validate_exercise_index(1.5)

    def test_set_number_bounds(self):
        assert all(validate_set_number(i) for i in range(1, 5))
        assert not validate_set_number(0)
        assert not validate_set_number(5)
        assert not validate_set_number(False)


# ===========================================================================
# Table addresses
# ===========================================================================

class TestTableAddress:

    def test_format(self):
        assert table_address(1, 1) == "week1_day1_workout_tracking"
        assert table_address(6, 6) == "week6_day6_workout_tracking"
        assert table_address(3, 4) == "week3_day4_workout_tracking"

    @pytest.mark.parametrize("week, day", [(0, 1), (7, 1), (1, 0), (1, 7), (1.5, 1), (1, True)])
    def test_invalid_coordinates_raise(self, week, day):
        with pytest.raises(RangeError):
            table_address(week, day)

    @pytest.mark.parametrize("week, day", ALL_WEEK_DAYS)
    def test_round_trip(self, week, day):
        assert parse_table_address(table_address(week, day)) == CurriculumPosition(week, day)

    def test_parse_returns_week_and_day(self):
        parsed = parse_table_address("week3_day4_workout_tracking")
        assert (parsed.week, parsed.day) == (3, 4)

    @pytest.mark.parametrize(
        "address",
        [
            "invalid_table",
            "week1_day1",
            "WEEK1_day1_workout_tracking",
            "week1_day1_workout_tracking; DROP TABLE clients",
            "week1_day1_workout_tracking\n",
            "week01_day1_workout_tracking",
            "",
        ],
    )
    def test_parse_rejects_malformed(self, address):
        with pytest.raises(FormatError):
            parse_table_address(address)

    @pytest.mark.parametrize(
        "address",
        ["week7_day1_workout_tracking", "week0_day3_workout_tracking", "week2_day9_workout_tracking"],
    )
    def test_parse_rejects_out_of_range(self, address):
        with pytest.raises(RangeError):
            parse_table_address(address)

    def test_all_table_addresses_order(self):
        addresses = all_table_addresses()
        assert len(addresses) == 36
        assert len(set(addresses)) == 36
        assert addresses[0] == "week1_day1_workout_tracking"
        assert addresses[5] == "week1_day6_workout_tracking"
        assert addresses[6] == "week2_day1_workout_tracking"
        assert addresses[-1] == "week6_day6_workout_tracking"

    def test_all_table_addresses_round_trip(self):
        for address in all_table_addresses():
            position = parse_table_address(address)
            assert table_address(position.week, position.day) == address


# ===========================================================================
# Column addresses
# ===========================================================================

class TestColumnAddress:

    def test_set_columns(self):
        assert column_address(1, 1, "reps") == "exercise_1_set1_reps"
        assert column_address(2, 3, "weight") == "exercise_2_set3_weight"
        assert column_address(7, 4, "reps") == "exercise_7_set4_reps"
        assert column_address(1, 1, "notes") == "exercise_1_set1_notes"

    def test_exercise_columns(self):
        assert exercise_name_column(1) == "exercise_1_name"
        assert exercise_name_column(7) == "exercise_7_name"
        assert exercise_notes_column(1) == "exercise_1_notes"
        assert exercise_notes_column(7) == "exercise_7_notes"

    @pytest.mark.parametrize("exercise, set_number", [(0, 1), (8, 1), (1, 0), (1, 5), (1.0, 1)])
    def test_invalid_coordinates_raise(self, exercise, set_number):
        with pytest.raises(RangeError):
            column_address(exercise, set_number, "reps")

    def test_invalid_field_raises(self):
        with pytest.raises(RangeError):
            column_address(1, 1, "reps; DROP TABLE clients")  # type: ignore[arg-type]

    @pytest.mark.parametrize("exercise", [0, 8, -1])
    def test_invalid_exercise_columns_raise(self, exercise):
        with pytest.raises(RangeError):
            exercise_name_column(exercise)
        with pytest.raises(RangeError):
            exercise_notes_column(exercise)

    def test_numeric_columns_pairwise_distinct(self):
        # 7 exercises x 4 sets x {reps, weight}
        names = [
            column_address(e, s, f)
            for e in range(1, 8)
            for s in range(1, 5)
            for f in ("reps", "weight")
        ]
        assert len(names) == 56
        assert len(set(names)) == 56

    def test_parse_column_address(self):
        assert parse_column_address("exercise_2_set3_weight") == (2, 3, "weight")
        assert parse_column_address("exercise_7_name") == (7, None, "name")
        assert parse_column_address("exercise_1_notes") == (1, None, "notes")
        assert parse_column_address("exercise_4_set1_notes") == (4, 1, "notes")

    @pytest.mark.parametrize(
        "address",
        ["exercise_1_set1", "exercise_x_name", "exercise_1_set1_reps\n", "exercise_01_name", "client_email"],
    )
    def test_parse_column_rejects_malformed(self, address):
        with pytest.raises(FormatError):
            parse_column_address(address)

    def test_parse_column_rejects_out_of_range(self):
        with pytest.raises(RangeError):
            parse_column_address("exercise_8_set1_reps")
        with pytest.raises(RangeError):
            parse_column_address("exercise_1_set5_weight")

    def test_numeric_columns_for(self):
        cols = numeric_columns_for(3)
        assert len(cols) == 8
        assert cols[0] == "exercise_3_set1_reps"
        assert cols[1] == "exercise_3_set1_weight"
        assert cols[-1] == "exercise_3_set4_weight"


# ===========================================================================
# Row mapping
# ===========================================================================

class TestRowMapping:

    def test_map_set_to_columns(self):
        assert map_set_to_columns(2, 3, SetData(reps=8, weight=135)) == {
            "exercise_2_set3_reps": 8,
            "exercise_2_set3_weight": 135,
        }

    def test_map_set_keeps_nulls(self):
        assert map_set_to_columns(1, 1, SetData(reps=10, weight=None)) == {
            "exercise_1_set1_reps": 10,
            "exercise_1_set1_weight": None,
        }

    def test_map_set_invalid_raises(self):
        with pytest.raises(RangeError):
            map_set_to_columns(8, 1, SetData(reps=1))
        with pytest.raises(RangeError):
            map_set_to_columns(1, 5, SetData(reps=1))

    def test_map_columns_to_set(self):
        row = {"exercise_1_set1_reps": 10, "exercise_1_set1_weight": 185}
        assert map_columns_to_set(row, 1, 1) == SetData(reps=10, weight=185)

    def test_map_columns_missing_are_none(self):
        assert map_columns_to_set({}, 1, 1) == SetData(reps=None, weight=None)
        assert map_columns_to_set({"exercise_1_set1_reps": 5}, 1, 1) == SetData(reps=5, weight=None)

    def test_map_exercise_sets_skips_empty(self):
        row = {
            "exercise_1_set1_reps": 10,
            "exercise_1_set1_weight": 100,
            "exercise_1_set3_reps": 8,
        }
        assert map_exercise_sets(row, 1) == [
            SetData(reps=10, weight=100),
            SetData(reps=8, weight=None),
        ]

    def test_sparse_sets_are_compacted(self):
        row = {"exercise_1_set2_reps": 8, "exercise_1_set2_weight": 100}
        exercise = extract_all_exercises(row)[0]
        assert exercise.sets == [SetData(reps=8, weight=100)]
        # Written back as set 1
        assert map_exercise_to_columns(exercise) == {
            "exercise_1_set1_reps": 8,
            "exercise_1_set1_weight": 100,
        }

    @pytest.mark.parametrize(
        "sets, expected",
        [
            ([], 0),
            ([SetData(reps=10)], 0),
            ([SetData(reps=10, weight=0)], 0),
            ([SetData(reps=10, weight=100), SetData(reps=8, weight=110)], 105),
            ([SetData(reps=10, weight=100), SetData(reps=8, weight=101)], 101),
            ([SetData(reps=10, weight=135), SetData(reps=5), SetData(weight=0)], 135),
        ],
    )
    def test_average_weight(self, sets, expected):
        assert average_weight(sets) == expected

    def test_map_exercise_sets_max_sets(self):
        row = {f"exercise_1_set{s}_reps": s for s in range(1, 5)}
        assert len(map_exercise_sets(row, 1, max_sets=2)) == 2

    def test_map_exercise_to_columns_with_notes(self):
        data = ExerciseData(
            exercise_index=2,
            name="Bench Press",
            sets=[SetData(reps=10, weight=185), SetData(reps=8, weight=195)],
            notes="felt strong",
        )
        assert map_exercise_to_columns(data) == {
            "exercise_2_set1_reps": 10,
            "exercise_2_set1_weight": 185,
            "exercise_2_set2_reps": 8,
            "exercise_2_set2_weight": 195,
            "exercise_2_notes": "felt strong",
        }

    def test_map_exercise_to_columns_without_notes(self):
        data = ExerciseData(exercise_index=1, sets=[SetData(reps=12, weight=50)])
        assert "exercise_1_notes" not in map_exercise_to_columns(data)

    def test_map_exercise_to_columns_too_many_sets(self):
        data = ExerciseData(exercise_index=1, sets=[SetData(reps=1)] * 5)
        with pytest.raises(RangeError):
            map_exercise_to_columns(data)

    def test_extract_all_exercises_defaults(self):
        row = {
            "exercise_1_name": "Bench Press",
            "exercise_1_set1_reps": 10,
            "exercise_1_set1_weight": 185,
            "exercise_3_notes": "slow eccentric",
        }
        exercises = extract_all_exercises(row)
        assert len(exercises) == 7
        assert exercises[0].name == "Bench Press"
        assert exercises[0].sets == [SetData(reps=10, weight=185)]
        assert exercises[1].name == "Exercise 2"
        assert exercises[1].sets == []
        assert exercises[1].notes is None
        assert exercises[2].notes == "slow eccentric"

    def test_extract_respects_exercise_count(self):
        assert len(extract_all_exercises({}, exercise_count=3)) == 3

    def test_no_cross_talk_between_slots(self):
        """Write a distinct value to every numeric slot and read each back."""
        row = {}
        expected = {}
        value = 1
        for e in range(1, 8):
            for s in range(1, 5):
                data = SetData(reps=value, weight=value + 1000)
                row.update(map_set_to_columns(e, s, data))
                expected[(e, s)] = data
                value += 1

        for (e, s), data in expected.items():
            assert map_columns_to_set(row, e, s) == data

    def test_create_partial_update(self):
        now = datetime(2025, 10, 6, 12, 30, tzinfo=timezone.utc)
        update = create_partial_update(
            [ExerciseData(exercise_index=1, sets=[SetData(reps=10, weight=185)])],
            now=now,
        )
        assert update == {
            "exercise_1_set1_reps": 10,
            "exercise_1_set1_weight": 185,
            "updated_at": "2025-10-06T12:30:00+00:00",
        }

    def test_partial_update_timestamp_round_trips(self):
        update = create_partial_update([])
        stamp = datetime.fromisoformat(update["updated_at"])
        assert stamp.tzinfo is not None
        assert stamp.isoformat() == update["updated_at"]

    def test_partial_update_multiple_exercises(self):
        update = create_partial_update(
            [
                ExerciseData(exercise_index=1, sets=[SetData(reps=10, weight=100)]),
                ExerciseData(exercise_index=2, sets=[SetData(reps=12, weight=50)], notes="ok"),
            ]
        )
        assert update["exercise_1_set1_reps"] == 10
        assert update["exercise_2_set1_weight"] == 50
        assert update["exercise_2_notes"] == "ok"
        assert "updated_at" in update
