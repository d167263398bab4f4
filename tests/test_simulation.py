import pytest

from philosophers import clock
from philosophers.args import Settings
from philosophers.philosopher import create_forks, create_philosophers
from philosophers.simulation import (
    action_eat,
    action_sleep,
    action_wait,
    action_wait_init,
    process_status,
    process_status_init,
    run_all,
    simulate,
)


def _table(count, die, eat, sleep, meals=-1):
    settings = Settings(count, die, eat, sleep, meals)
    forks = create_forks(count)
    return create_philosophers(settings, forks), forks


def _parse(lines):
    parsed = []
    for line in lines:
        stamp, index, text = line.split(" ", 2)
        parsed.append((int(stamp), int(index), text))
    return parsed


def test_single_philosopher_takes_one_fork_and_dies():
    (ph,), forks = _table(1, 40, 10, 10)
    lines = []
    simulate(ph, lines.append)
    parsed = _parse(lines)
    assert [text for _, _, text in parsed] == ["has taken a fork", "died"]
    assert ph.dead is True
    assert parsed[1][0] >= 40
    assert not forks[0].locked()


def test_action_eat_with_last_meal_returns_true_and_releases_forks():
    philosophers, forks = _table(2, 1000, 5, 5, meals=1)
    ph = philosophers[0]
    ph.set_start_time()
    lines = []
    assert action_eat(ph, lines.append) is True
    texts = [text for _, _, text in _parse(lines)]
    assert texts == ["has taken a fork", "has taken a fork", "is eating"]
    assert ph.meals_left == 0
    assert ph.dead is False
    assert not any(fork.locked() for fork in forks)


def test_action_eat_continues_while_meals_remain():
    philosophers, _ = _table(2, 1000, 5, 5, meals=3)
    ph = philosophers[1]
    ph.set_start_time()
    assert action_eat(ph, lambda line: None) is False
    assert ph.meals_left == 2


def test_action_eat_when_already_starved():
    philosophers, forks = _table(2, 100, 5, 5)
    ph = philosophers[0]
    ph.set_start_time()
    ph.last_meal -= 1000
    lines = []
    assert action_eat(ph, lines.append) is True
    assert ph.dead is True
    assert lines == []
    assert not any(fork.locked() for fork in forks)


def test_action_sleep_fatal_when_eat_and_sleep_exceed_die():
    philosophers, _ = _table(2, 20, 15, 15)
    ph = philosophers[0]
    ph.set_start_time()
    lines = []
    assert action_sleep(ph, lines.append) is True
    assert ph.dead is True
    assert lines == []


def test_action_sleep_reports_sleep_time_from_last_meal():
    philosophers, _ = _table(2, 1000, 7, 5)
    ph = philosophers[0]
    ph.set_start_time()
    lines = []
    assert action_sleep(ph, lines.append) is False
    ((stamp, index, text),) = _parse(lines)
    assert (stamp, index, text) == (ph.time_to_eat, 0, "is sleeping")


def test_action_wait_skips_sleeping_when_sleep_not_shorter():
    philosophers, _ = _table(3, 1000, 10, 10)
    ph = philosophers[1]
    ph.set_start_time()
    before = clock.now_ms()
    assert action_wait(ph, 500) is False
    assert clock.now_ms() - before < 500
    assert ph.status == 0


def test_action_wait_fatal_when_wait_too_long():
    philosophers, _ = _table(3, 30, 20, 5)
    ph = philosophers[1]
    ph.set_start_time()
    assert action_wait(ph, 100) is True
    assert ph.dead is True
    assert ph.status == 1


def test_action_wait_init_thinks_and_decrements_status():
    philosophers, _ = _table(3, 1000, 5, 5)
    ph = philosophers[2]
    ph.set_start_time()
    lines = []
    assert action_wait_init(ph, lines.append) is False
    assert [text for _, _, text in _parse(lines)] == ["is thinking"]
    assert ph.status == 1


def test_process_status_stops_on_starvation():
    philosophers, _ = _table(3, 100, 5, 5)
    ph = philosophers[0]
    ph.set_start_time()
    ph.last_meal -= 1000
    lines = []
    process_status(ph, lines.append)
    assert ph.dead is True
    assert lines == []


def test_process_status_init_full_cycle_wraps_status():
    philosophers, _ = _table(3, 1000, 5, 5)
    ph = philosophers[0]
    ph.set_start_time()
    lines = []
    process_status_init(ph, lines.append)
    texts = [text for _, _, text in _parse(lines)]
    assert texts == [
        "has taken a fork",
        "has taken a fork",
        "is eating",
        "is sleeping",
        "is thinking",
    ]
    assert ph.status == ph.count - 1


def test_run_all_with_meal_limit_has_no_deaths():
    philosophers, _ = _table(2, 400, 20, 20, meals=2)
    lines = []
    assert run_all(philosophers, lines.append) is False
    parsed = _parse(lines)
    assert all(text != "died" for _, _, text in parsed)
    for index in range(2):
        meals = [1 for _, i, text in parsed if i == index and text == "is eating"]
        assert len(meals) == 2
    assert all(ph.meals_left == 0 for ph in philosophers)


@pytest.mark.parametrize("count", [3, 4])
def test_run_all_stops_everyone_after_a_death(count):
    philosophers, _ = _table(count, 10, 50, 50)
    lines = []
    assert run_all(philosophers, lines.append) is True
    assert all(ph.dead for ph in philosophers)
    assert any(text == "died" for _, _, text in _parse(lines))