# tests/test_grading.py

"""Unit tests for letter grade computation."""

import pytest
from rankboard.grading import MOD_FLASHLIGHT, MOD_HIDDEN, get_grade
from rankboard.variants import GameMode

NO_MODS = 0
HARD_ROCK = 1 << 4


@pytest.mark.parametrize("mode", [GameMode.STD, GameMode.TAIKO])
def test_all_300s_is_ss(mode):
    assert get_grade(mode, NO_MODS, 100.0, 500, 0, 0, 0) == "SS"


def test_std_s_requires_no_misses_and_few_50s():
    assert get_grade(GameMode.STD, NO_MODS, 97.0, 950, 45, 5, 0) == "S"
    # One miss drops an otherwise-S play to A
    assert get_grade(GameMode.STD, NO_MODS, 97.0, 950, 44, 5, 1) == "A"
    # More than 1% 50s also drops to A
    assert get_grade(GameMode.STD, NO_MODS, 96.0, 950, 30, 20, 0) == "A"


def test_std_a_b_c_d_thresholds():
    assert get_grade(GameMode.STD, NO_MODS, 0, 85, 15, 0, 0) == "A"
    assert get_grade(GameMode.STD, NO_MODS, 0, 85, 14, 0, 1) == "B"
    assert get_grade(GameMode.STD, NO_MODS, 0, 75, 25, 0, 0) == "B"
    assert get_grade(GameMode.STD, NO_MODS, 0, 75, 24, 0, 1) == "C"
    assert get_grade(GameMode.STD, NO_MODS, 0, 60, 30, 0, 10) == "D"


def test_no_hits_is_d():
    assert get_grade(GameMode.STD, NO_MODS, 0.0, 0, 0, 0, 0) == "D"


def test_hidden_turns_top_grades_silver():
    assert get_grade(GameMode.STD, MOD_HIDDEN, 100.0, 300, 0, 0, 0) == "SSHD"
    assert get_grade(GameMode.STD, MOD_FLASHLIGHT, 97.0, 950, 50, 0, 0) == "SHD"
    # Silver only applies to S and SS
    assert get_grade(GameMode.STD, MOD_HIDDEN, 0, 85, 15, 0, 0) == "A"


def test_unrelated_mods_do_not_change_grade():
    assert get_grade(GameMode.STD, HARD_ROCK, 100.0, 300, 0, 0, 0) == "SS"


@pytest.mark.parametrize(
    "accuracy, expected",
    [
        (100.0, "SS"),
        (99.0, "S"),
        (98.01, "A"),
        (95.0, "A"),
        (92.0, "B"),
        (88.0, "C"),
        (85.01, "D"),
    ],
)
def test_ctb_grades_by_accuracy(accuracy, expected):
    assert get_grade(GameMode.CTB, NO_MODS, accuracy, 0, 0, 0, 0) == expected


@pytest.mark.parametrize(
    "accuracy, expected",
    [
        (100.0, "SS"),
        (96.0, "S"),
        (95.0, "A"),
        (85.0, "B"),
        (75.0, "C"),
        (70.0, "D"),
    ],
)
def test_mania_grades_by_accuracy(accuracy, expected):
    assert get_grade(GameMode.MANIA, NO_MODS, accuracy, 0, 0, 0, 0) == expected
