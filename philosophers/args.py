"""Command-line argument validation for the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import astuple, dataclass

INT_MAX = 2**31 - 1
UNLIMITED_MEALS = -1

WRONG_COUNT = "Wrong number of arguments!"
NOT_POSITIVE_INT = "One or more arguments is not positive int!"

_DIGITS = frozenset("0123456789")
_RED = "\033[31m"
_GRAY_10 = "\033[38;5;232m"
_RESET = "\033[0m"


class ArgumentError(ValueError):
    """Raised when the command-line arguments are unusable."""


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run, all times in milliseconds."""

    philosopher_count: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals: int = UNLIMITED_MEALS

    def describe(self) -> str:
        """Return the settings as a one-line summary."""
        return "Args: " + " ".join(str(value) for value in astuple(self))


def simple_atoi(text: str) -> int:
    """Convert a string of ASCII digits to an int no larger than INT_MAX."""
    if not set(text) <= _DIGITS:
        raise ArgumentError(NOT_POSITIVE_INT)
    significant = text.lstrip("0")
    if len(significant) > len(str(INT_MAX)):
        raise ArgumentError(NOT_POSITIVE_INT)
    value = int(significant) if significant else 0
    if value > INT_MAX:
        raise ArgumentError(NOT_POSITIVE_INT)
    return value


def parse_args(argv: Sequence[str]) -> Settings:
    """Build Settings from the arguments that follow the program name."""
    arguments = list(argv)
    if len(arguments) not in (4, 5):
        raise ArgumentError(WRONG_COUNT)
    values = [simple_atoi(argument) for argument in arguments]
    if len(values) == 4:
        values.append(UNLIMITED_MEALS)
    return Settings(*values)


def usage_message(error: str) -> str:
    """Return the error text followed by a hint on the expected arguments."""
    return (
        f"{_RED}{error}\n{_RESET}"
        "Your program must take the following arguments:\n"
        f"{_GRAY_10}number_of_philosophers time_to_die "
        "time_to_eat time_to_sleep\n"
        f"[number_of_times_each_philosopher_must_eat]\n{_RESET}"
        "All the numbers should be positive integers.\n"
    )