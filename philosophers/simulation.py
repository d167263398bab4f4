"""The per-philosopher routine and the threads that run it."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence

from . import clock
from .philosopher import Philosopher

Emit = Callable[[str], None]

TAKEN_FORK = "has taken a fork"
EATING = "is eating"
SLEEPING = "is sleeping"
THINKING = "is thinking"
DIED = "died"


def _announce(philosopher: Philosopher, emit: Emit, elapsed: int, text: str) -> None:
    emit(f"{elapsed} {philosopher.index} {text}")


def _elapsed(philosopher: Philosopher) -> int:
    return clock.now_ms() - philosopher.start_time


def _starve(philosopher: Philosopher) -> None:
    """Sleep out whatever remains of the philosopher's time to die."""
    clock.sleep_ms(
        philosopher.time_to_die - clock.now_ms() + philosopher.last_meal
    )


def action_eat(philosopher: Philosopher, emit: Emit) -> bool:
    """Take both forks and eat; return True when the philosopher should stop."""
    first, second = philosopher.forks
    first.acquire()
    if philosopher.check_die():
        first.release()
        return True
    _announce(philosopher, emit, _elapsed(philosopher), TAKEN_FORK)
    if philosopher.count == 1:
        clock.sleep_ms(philosopher.time_to_die)
        philosopher.dead = True
        first.release()
        return True
    second.acquire()
    try:
        if philosopher.check_die():
            return True
        philosopher.last_meal = clock.now_ms()
        elapsed = philosopher.last_meal - philosopher.start_time
        _announce(philosopher, emit, elapsed, TAKEN_FORK)
        _announce(philosopher, emit, elapsed, EATING)
        if philosopher.check_wait_time(philosopher.time_to_eat):
            _starve(philosopher)
            return True
        clock.sleep_ms(philosopher.time_to_eat)
    finally:
        first.release()
        second.release()
    philosopher.meals_left -= 1
    return philosopher.meals_left == 0


def action_sleep(philosopher: Philosopher, emit: Emit) -> bool:
    """Sleep after a meal; return True if the philosopher dies instead."""
    if philosopher.check_sleep_time():
        _starve(philosopher)
        return True
    elapsed = (
        philosopher.last_meal - philosopher.start_time + philosopher.time_to_eat
    )
    _announce(philosopher, emit, elapsed, SLEEPING)
    clock.sleep_ms(philosopher.time_to_sleep)
    return False


def action_wait(philosopher: Philosopher, time: int) -> bool:
    """Wait ``time`` ms for a turn when sleeping is shorter than eating."""
    if philosopher.time_to_sleep < philosopher.time_to_eat:
        if philosopher.check_wait_time(time):
            _starve(philosopher)
            return True
        clock.sleep_ms(time)
    philosopher.status -= 1
    return False


def action_wait_init(philosopher: Philosopher, emit: Emit) -> bool:
    """Think through the first meal of the neighbours before a first turn."""
    _announce(philosopher, emit, _elapsed(philosopher), THINKING)
    if philosopher.check_wait_time(philosopher.time_to_eat):
        _starve(philosopher)
        return True
    clock.sleep_ms(philosopher.time_to_eat)
    philosopher.status -= 1
    return False


def _eat_sleep_think(philosopher: Philosopher, emit: Emit) -> None:
    _announce(philosopher, emit, _elapsed(philosopher), THINKING)
    philosopher.status -= 1
    if philosopher.status < 0:
        philosopher.status = philosopher.count - 1


def _eats_now(philosopher: Philosopher) -> bool:
    return philosopher.status % 2 == 0 and philosopher.status != philosopher.count - 1


def process_status(philosopher: Philosopher, emit: Emit) -> None:
    """Run one step of the philosopher's cycle according to its status."""
    if _eats_now(philosopher):
        if (
            philosopher.check_die()
            or action_eat(philosopher, emit)
            or action_sleep(philosopher, emit)
        ):
            return
        _eat_sleep_think(philosopher, emit)
    else:
        action_wait(
            philosopher,
            philosopher.time_to_eat
            - philosopher.time_to_sleep
            * (philosopher.status // (philosopher.count - 1)),
        )


def process_status_init(philosopher: Philosopher, emit: Emit) -> None:
    """Run the first step of the cycle, before the regular loop starts."""
    if _eats_now(philosopher) or philosopher.count == 1:
        if action_eat(philosopher, emit) or action_sleep(philosopher, emit):
            return
        _eat_sleep_think(philosopher, emit)
    else:
        action_wait_init(philosopher, emit)


def simulate(philosopher: Philosopher, emit: Emit) -> None:
    """Run one philosopher until it has eaten enough or dies."""
    philosopher.set_start_time()
    process_status_init(philosopher, emit)
    while philosopher.meals_left != 0 and not philosopher.dead:
        process_status(philosopher, emit)
    if philosopher.dead:
        _announce(philosopher, emit, _elapsed(philosopher), DIED)


def run_all(philosophers: Sequence[Philosopher], emit: Emit) -> bool:
    """Run every philosopher in its own thread; return True if any died."""
    threads = [
        threading.Thread(target=simulate, args=(philosopher, emit), daemon=True)
        for philosopher in philosophers
    ]
    for thread in threads:
        thread.start()
    someone_died = False
    for thread, philosopher in zip(threads, philosophers):
        thread.join()
        if philosopher.dead:
            someone_died = True
            for other in philosophers:
                other.dead = True
    return someone_died