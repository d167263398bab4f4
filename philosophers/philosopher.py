"""Philosopher state, forks, and timing checks."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from . import clock
from .args import Settings


def create_forks(count: int) -> list[threading.Lock]:
    """Return one lock per fork on the table."""
    return [threading.Lock() for _ in range(count)]


def fork_indices(index: int, count: int) -> tuple[int, int]:
    """Return the (first, second) fork slots for philosopher ``index`` of ``count``."""
    if count <= 0:
        raise ValueError("count must be positive")
    if not 0 <= index < count:
        raise ValueError("index out of range")
    return count - 1 - ((count - index) % count), index


@dataclass
class Philosopher:
    """One diner: its timing parameters, progress and the forks it uses."""

    index: int
    status: int
    count: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals_left: int
    fork_slots: tuple[int, int]
    forks: tuple[threading.Lock, threading.Lock] = field(repr=False, compare=False)
    start_time: int = 0
    last_meal: int = 0
    dead: bool = False

    def set_start_time(self) -> None:
        """Mark now as both the start of the run and the last meal."""
        self.start_time = clock.now_ms()
        self.last_meal = self.start_time

    def _die_if(self, condition: bool) -> bool:
        if condition:
            self.dead = True
        return condition

    def check_die(self) -> bool:
        """Return True, marking the philosopher dead, if it has starved already."""
        return self._die_if(clock.now_ms() - self.last_meal > self.time_to_die)

    def check_sleep_time(self) -> bool:
        """Return True, marking death, if eating plus sleeping outlasts time_to_die."""
        return self._die_if(self.time_to_eat + self.time_to_sleep > self.time_to_die)

    def check_wait_time(self, time: int) -> bool:
        """Return True, marking death, if waiting ``time`` more ms would be fatal."""
        return self._die_if(clock.now_ms() - self.last_meal + time > self.time_to_die)

    def describe(self) -> str:
        """Return a multi-line dump of the philosopher's state."""
        return "\n".join(
            [
                f"philo:\t\t{self.index}",
                f"status:\t\t{self.status}",
                f"ph number:\t{self.count}",
                f"t_die:\t\t{self.time_to_die}",
                f"t_eat:\t\t{self.time_to_eat}",
                f"t_sleep:\t{self.time_to_sleep}",
                f"n_eats:\t\t{self.meals_left}",
                f"t_start:\t{self.start_time}",
                f"t_leat:\t\t{self.last_meal}",
                f"is_die:\t\t{int(self.dead)}",
                f"forks:\t\t{self.fork_slots[0]} | {self.fork_slots[1]}",
            ]
        )


def create_philosophers(
    settings: Settings, forks: list[threading.Lock]
) -> list[Philosopher]:
    """Seat one philosopher per setting, each sharing forks with its neighbours."""
    count = settings.philosopher_count
    philosophers = []
    for index in range(count):
        first, second = fork_indices(index, count)
        philosophers.append(
            Philosopher(
                index=index,
                status=index,
                count=count,
                time_to_die=settings.time_to_die,
                time_to_eat=settings.time_to_eat,
                time_to_sleep=settings.time_to_sleep,
                meals_left=settings.meals,
                fork_slots=(first, second),
                forks=(forks[first], forks[second]),
            )
        )
    return philosophers