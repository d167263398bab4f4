"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .args import ArgumentError, Settings, parse_args, usage_message
from .philosopher import Philosopher, create_forks, create_philosophers
from .simulation import Emit, run_all


def run(settings: Settings, emit: Emit) -> list[Philosopher]:
    """Seat the philosophers described by ``settings`` and run the simulation."""
    forks = create_forks(settings.philosopher_count)
    philosophers = create_philosophers(settings, forks)
    run_all(philosophers, emit)
    return philosophers


def _print_line(line: str) -> None:
    print(line, flush=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments, run the simulation and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        settings = parse_args(argv)
    except ArgumentError as error:
        print(usage_message(str(error)), end="")
        return 1
    run(settings, _print_line)
    return 0


if __name__ == "__main__":
    sys.exit(main())