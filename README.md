# philosophers

A simulation of the dining philosophers problem. Each philosopher runs in its
own thread. Each fork is a `threading.Lock` shared by two neighbours.
Philosophers take turns to eat, sleep and think. Each one stops when it
starves. If a meal limit is given, it also stops once it has eaten that many
times. When the run finds a philosopher dead, it flags all the others as dead,
and they stop after their current step.

## Installation

```
pip install .
```

## Usage

```
philo number_of_philosophers time_to_die time_to_eat time_to_sleep [number_of_times_each_philosopher_must_eat]
```

The same command can be run as `python -m philosophers.cli`.

Each argument must be made of ASCII digits only, and its value must be at most
2147483647. Times are in milliseconds. Without the last argument a philosopher
goes on until it dies.

Example:

```
philo 5 800 200 200 7
```

Each event is printed on its own line as `<elapsed ms> <philosopher> <action>`.
Philosophers are numbered from 0, and the time is counted from the moment each
thread started. The lines from different threads interleave, so the exact
output varies from run to run. It looks like this:

```
0 0 has taken a fork
0 0 has taken a fork
0 0 is eating
0 1 is thinking
200 0 is sleeping
...
```

The actions are `has taken a fork`, `is eating`, `is sleeping`,
`is thinking` and `died`.

A single philosopher takes its one fork, waits `time_to_die` milliseconds and
dies.

If the arguments are wrong, the program prints the error and a short usage
hint, and exits with status 1. Otherwise it exits with status 0, even when a
philosopher died.

## Using it as a library

```python
from philosophers.args import parse_args
from philosophers.cli import run

settings = parse_args(["5", "800", "200", "200", "3"])
philosophers = run(settings, print)
```

- `philosophers.args`:
  - `parse_args(argv)` takes the arguments without the program name and
    returns a frozen `Settings` dataclass. The fields are `philosopher_count`,
    `time_to_die`, `time_to_eat`, `time_to_sleep` and `meals`. `meals` is `-1`
    when no limit is given.
  - On bad input it raises `ArgumentError`, a subclass of `ValueError`.
  - `simple_atoi(text)` converts one argument.
  - `usage_message(error)` formats the hint shown to users.
  - `Settings.describe()` gives a one-line summary.
- `philosophers.cli`:
  - `run(settings, emit)` seats the philosophers and runs the simulation.
    Every event line is passed to `emit`. It returns the list of
    `Philosopher` objects.
  - `main(argv=None)` is the command's entry point and returns the exit
    status.
- `philosophers.philosopher`:
  - `create_forks(count)` makes the fork locks.
  - `fork_indices(index, count)` gives the two fork slots of a philosopher.
  - `create_philosophers(settings, forks)` seats the philosophers.
  - `Philosopher` holds each one's state. Its timing checks are
    `check_die`, `check_sleep_time` and `check_wait_time`. `describe()` dumps
    its state.
- `philosophers.simulation`:
  - `simulate(philosopher, emit)` runs one philosopher.
  - `run_all(philosophers, emit)` runs them all in threads and returns `True`
    if any died.
  - The individual steps are `action_eat`, `action_sleep`, `action_wait`,
    `action_wait_init`, `process_status` and `process_status_init`.
- `philosophers.clock` has `now_ms()` and `sleep_ms(milliseconds)`.

## Running the tests

```
pip install .[test]
pytest
```