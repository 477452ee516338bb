"""Weighted-sum check digit validation for tracking numbers."""

from typing import Sequence


def check_digit(trk: str, multipliers: Sequence[int], mod: int) -> bool:
    """Validate the trailing check digit of a digit-only tracking number.

    Every digit but the last is multiplied by the next weight from
    ``multipliers`` (cycling) and summed. The expected check digit is
    derived from the sum modulo 10 or 11 and compared with the last digit.

    Args:
        trk: Digit-only string, check digit last
        multipliers: Weights applied in order, wrapping around
        mod: 10 or 11

    Returns:
        True if the computed check digit equals the trailing digit
    """
    total = 0
    for index, char in enumerate(trk[:-1]):
        total += int(char) * multipliers[index % len(multipliers)]

    expected = None
    if mod == 11:
        expected = total % 11
        if expected == 10:
            expected = 0
    elif mod == 10:
        expected = 0 if total % 10 == 0 else 10 - total % 10

    return expected == int(trk[-1])
