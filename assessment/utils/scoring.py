"""
Answer matching and score arithmetic shared by grading and statistics
"""
import math
from typing import Any, Dict, List, Sequence


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative values"""
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> int:
    """Integer percentage, 0 when whole is 0"""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def correct_option_indices(options: Sequence[Dict[str, Any]]) -> List[int]:
    """Indices of options flagged is_correct"""
    return [index for index, option in enumerate(options or []) if option_is_correct(option)]


def option_is_correct(option: Any) -> bool:
    if not isinstance(option, dict):
        return False
    return option.get("is_correct") is True


def is_answer_correct(options: Sequence[Dict[str, Any]], selected: Sequence[int]) -> bool:
    """
    Exact set match

    Correct only if something was selected, every selected index is a correct
    option, and as many indices were selected as there are correct options.
    """
    selected = list(selected or [])
    if not selected:
        return False

    correct = correct_option_indices(options)
    if len(selected) != len(correct):
        return False

    for index in selected:
        if not isinstance(index, int) or isinstance(index, bool):
            return False
        if index < 0 or index >= len(options):
            return False
        if not option_is_correct(options[index]):
            return False

    # Repeated indices must not stand in for missing correct options
    return set(selected) == set(correct)
