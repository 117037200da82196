"""Command-line argument parsing and validation for the simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = ["MAX_PHILOS", "ArgumentError", "Settings", "parse_int", "parse_args"]

MAX_PHILOS = 200

_WHITESPACE = " \t\n\v\f\r"


class ArgumentError(ValueError):
    """Raised when the command-line arguments are rejected.

    ``message`` holds the diagnostic to show the user; it is empty when the
    rejection carries no specific explanation.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class Settings:
    """Validated simulation parameters; a ``meals_goal`` of 0 means unlimited."""

    count: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals_goal: int = 0


def parse_int(text: str) -> int:
    """Parse a decimal integer with optional leading whitespace and sign.

    An empty digit run yields 0. Any character left after the digits makes
    the text invalid and raises ``ValueError``.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits_end = len(rest)
    for pos, char in enumerate(rest):
        if not ("0" <= char <= "9"):
            digits_end = pos
            break
    if digits_end != len(rest):
        raise ValueError(f"invalid integer: {text!r}")
    digits = rest[:digits_end]
    return sign * int(digits) if digits else 0


def _value(text: str) -> int:
    try:
        return parse_int(text)
    except ValueError:
        return -1


def parse_args(args: Sequence[str]) -> Settings:
    """Validate the user arguments (program name excluded) into ``Settings``.

    Expects ``count time_to_die time_to_eat time_to_sleep [meals_goal]``.
    """
    if len(args) not in (4, 5):
        raise ArgumentError("Enter Correct Number of Arguments")
    count = _value(args[0])
    if count < 1 or count > MAX_PHILOS:
        raise ArgumentError("Unacceptable Number of Philosophers")
    time_to_die = _value(args[1])
    if time_to_die < 0:
        raise ArgumentError("Invalid time argument: time must be positive")
    meals_goal = 0
    if len(args) == 5:
        meals_goal = _value(args[4])
        if meals_goal < 0:
            raise ArgumentError("Unacceptable value for the number of meals")
    time_to_eat = _value(args[2])
    time_to_sleep = _value(args[3])
    if time_to_eat < 0 or time_to_sleep < 0:
        raise ArgumentError()
    return Settings(
        count=count,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        meals_goal=meals_goal,
    )