# src/rankboard/grading.py

"""Letter grades for individual scores.

The thresholds follow the game client's published grading table, which
differs per mode. Hidden-style mods turn the top two grades silver.
"""

from rankboard.variants import GameMode

MOD_HIDDEN = 1 << 3
MOD_FLASHLIGHT = 1 << 10
MOD_FADE_IN = 1 << 20

SILVER_MODS = MOD_HIDDEN | MOD_FLASHLIGHT | MOD_FADE_IN


def _hit_ratio_grade(n300: int, n50: int, nmiss: int, total: int) -> str:
    if total <= 0:
        return "D"
    ratio300 = n300 / total
    ratio50 = n50 / total
    if ratio300 == 1:
        return "SS"
    if ratio300 > 0.9 and ratio50 <= 0.01 and nmiss == 0:
        return "S"
    if (ratio300 > 0.8 and nmiss == 0) or ratio300 > 0.9:
        return "A"
    if (ratio300 > 0.7 and nmiss == 0) or ratio300 > 0.8:
        return "B"
    if ratio300 > 0.6:
        return "C"
    return "D"


def _accuracy_grade(accuracy: float, thresholds: tuple[float, float, float, float, float]) -> str:
    ss, s, a, b, c = thresholds
    if accuracy >= ss:
        return "SS"
    if accuracy > s:
        return "S"
    if accuracy > a:
        return "A"
    if accuracy > b:
        return "B"
    if accuracy > c:
        return "C"
    return "D"


# (SS, S, A, B, C) accuracy thresholds for accuracy-graded modes
CTB_THRESHOLDS = (100.0, 98.01, 94.01, 90.01, 85.01)
MANIA_THRESHOLDS = (100.0, 95.0, 90.0, 80.0, 70.0)


def get_grade(
    mode: GameMode,
    mods: int,
    accuracy: float,
    n300: int,
    n100: int,
    n50: int,
    nmiss: int,
) -> str:
    """Compute the upper-case grade of a score.

    Args:
        mode: Mode the score was set in
        mods: Bitmask of enabled mods
        accuracy: Accuracy as a percentage (0-100)
        n300: Count of 300 judgements
        n100: Count of 100 judgements
        n50: Count of 50 judgements
        nmiss: Count of misses

    Returns:
        One of SSHD, SS, SHD, S, A, B, C, D
    """
    if mode in (GameMode.STD, GameMode.TAIKO):
        grade = _hit_ratio_grade(n300, n50, nmiss, n300 + n100 + n50 + nmiss)
    elif mode == GameMode.CTB:
        grade = _accuracy_grade(accuracy, CTB_THRESHOLDS)
    else:
        grade = _accuracy_grade(accuracy, MANIA_THRESHOLDS)

    if grade in ("SS", "S") and mods & SILVER_MODS:
        grade += "HD"
    return grade
